"""
Special Functions
=================

Special-function primitives consumed by the distributions, exposed under the
names used throughout the catalog and backed by :mod:`scipy.special`.

All functions take and return Python floats.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import numpy as np
from scipy import special as sc


def gamma(x: float) -> float:
    """Gamma function."""
    return float(sc.gamma(x))


def gamma_ln(x: float) -> float:
    """Natural logarithm of the absolute value of the gamma function."""
    return float(sc.gammaln(x))


def beta(a: float, b: float) -> float:
    """Beta function."""
    return float(sc.beta(a, b))


def beta_ln(a: float, b: float) -> float:
    """Natural logarithm of the absolute value of the beta function."""
    return float(sc.betaln(a, b))


def digamma(x: float) -> float:
    """Logarithmic derivative of the gamma function."""
    return float(sc.digamma(x))


def erf(x: float) -> float:
    """Error function."""
    return float(sc.erf(x))


def erfc(x: float) -> float:
    """Complementary error function."""
    return float(sc.erfc(x))


def erfc_inv(x: float) -> float:
    """Inverse of the complementary error function on [0, 2]."""
    return float(sc.erfcinv(x))


def gamma_lower_regularized(a: float, x: float) -> float:
    """
    Regularized lower incomplete gamma function P(a, x).

    Parameters
    ----------
    a : float
        Shape, non-negative.
    x : float
        Upper integration limit, non-negative.

    Returns
    -------
    float
        Value in [0, 1].
    """
    return float(sc.gammainc(a, x))


def gamma_lower_regularized_inv(a: float, p: float) -> float:
    """Inverse of :func:`gamma_lower_regularized` with respect to ``x``."""
    return float(sc.gammaincinv(a, p))


def gamma_upper_regularized(a: float, x: float) -> float:
    """Regularized upper incomplete gamma function Q(a, x) = 1 - P(a, x)."""
    return float(sc.gammaincc(a, x))


def beta_regularized(a: float, b: float, x: float) -> float:
    """
    Regularized incomplete beta function I_x(a, b).

    Parameters
    ----------
    a, b : float
        Shape parameters, non-negative.
    x : float
        Upper integration limit in [0, 1].

    Returns
    -------
    float
        Value in [0, 1].
    """
    return float(sc.betainc(a, b, x))


def beta_regularized_inv(a: float, b: float, p: float) -> float:
    """Inverse of :func:`beta_regularized` with respect to ``x``."""
    return float(sc.betaincinv(a, b, p))


def factorial_ln(n: float) -> float:
    """Natural logarithm of ``n!`` for non-negative ``n``."""
    return float(sc.gammaln(n + 1.0))


def binomial_ln(n: float, k: float) -> float:
    """
    Natural logarithm of the binomial coefficient ``n choose k``.

    Returns ``-inf`` when ``k`` lies outside ``[0, n]``.
    """
    if k < 0 or k > n:
        return -math.inf
    return factorial_ln(n) - factorial_ln(k) - factorial_ln(n - k)


def xlogy(x: float, y: float) -> float:
    """``x * log(y)``, defined as 0 when ``x == 0`` even if ``y == 0``."""
    return float(sc.xlogy(x, y))


def xlog1py(x: float, y: float) -> float:
    """``x * log1p(y)``, defined as 0 when ``x == 0`` even if ``y == -1``."""
    return float(sc.xlog1py(x, y))


def power(base: float, exponent: float) -> float:
    """
    ``base ** exponent`` with IEEE semantics.

    Unlike the built-in operator, a zero base with a negative exponent gives
    ``inf`` and overflow gives ``inf`` instead of raising.
    """
    with np.errstate(divide="ignore", over="ignore", invalid="ignore"):
        return float(np.power(np.float64(base), exponent))


def general_harmonic(n: int, s: float) -> float:
    """
    Generalized harmonic number ``H(n, s) = sum_{i=1}^{n} i^-s``.

    Returns 0 for ``n < 1``.
    """
    if n < 1:
        return 0.0
    return float(np.sum(np.arange(1, n + 1, dtype=np.float64) ** -s))


__all__ = [
    "gamma",
    "gamma_ln",
    "beta",
    "beta_ln",
    "digamma",
    "erf",
    "erfc",
    "erfc_inv",
    "gamma_lower_regularized",
    "gamma_lower_regularized_inv",
    "gamma_upper_regularized",
    "beta_regularized",
    "beta_regularized_inv",
    "factorial_ln",
    "binomial_ln",
    "general_harmonic",
    "xlogy",
    "xlog1py",
    "power",
]
