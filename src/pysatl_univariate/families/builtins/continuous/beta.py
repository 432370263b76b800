"""
Beta distribution.

Beta distribution on [0, 1] with shapes α ≥ 0 and β ≥ 0.

Probability density function:
    f(x) = Γ(α+β) / (Γ(α)Γ(β)) * x^(α-1) * (1-x)^(β-1)

Boundary shapes are resolved before the general formula, in this order:

1. Both shapes infinite: point mass at 1/2.
2. α infinite: point mass at 1. β infinite: point mass at 0.
3. α = β = 0: two atoms of mass 1/2 at 0 and 1.
4. α = 0: point mass at 0. β = 0: point mass at 1.
5. α = β = 1: the standard uniform distribution.
6. Shapes above ``numeric_config().beta_log_space_threshold``: the density
   is evaluated in log space.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING

import numpy as np

from pysatl_univariate import special
from pysatl_univariate.config import numeric_config
from pysatl_univariate.distributions.distribution import ContinuousDistribution
from pysatl_univariate.distributions.sampling import fill_sequentially, new_buffer, sample_stream
from pysatl_univariate.distributions.support import ContinuousSupport
from pysatl_univariate.errors import NotSupportedError, check_probability
from pysatl_univariate.families.builtins.continuous import gamma
from pysatl_univariate.families.parametrizations import (
    Parametrization,
    constraint,
    parametrization,
)
from pysatl_univariate.random_source import resolve_random_source
from pysatl_univariate.roots import find_root_bracketed

if TYPE_CHECKING:
    from collections.abc import Iterator

    import numpy.typing as npt

    from pysatl_univariate.types import FloatArray


@parametrization(name="shapes")
class BetaShapes(Parametrization):
    """
    Standard parametrization of beta distribution.

    Parameters
    ----------
    alpha : float
        First shape parameter (α)
    beta : float
        Second shape parameter (β)
    """

    alpha: float
    beta: float

    @constraint(description="alpha >= 0")
    def check_alpha_non_negative(self) -> bool:
        return self.alpha >= 0

    @constraint(description="beta >= 0")
    def check_beta_non_negative(self) -> bool:
        return self.beta >= 0


def is_valid_parameter_set(alpha: float, beta: float) -> bool:
    return BetaShapes(alpha=alpha, beta=beta).is_valid()


def _atom(x: float, at: float) -> float:
    return math.inf if x == at else 0.0


def _atom_ln(x: float, at: float) -> float:
    return math.inf if x == at else -math.inf


def pdf_unchecked(alpha: float, beta: float, x: float) -> float:
    """Density for a parameter set assumed valid."""
    if x < 0.0 or x > 1.0:
        return 0.0

    alpha_inf = math.isinf(alpha)
    beta_inf = math.isinf(beta)
    if alpha_inf and beta_inf:
        return _atom(x, 0.5)
    if alpha_inf:
        return _atom(x, 1.0)
    if beta_inf:
        return _atom(x, 0.0)
    if alpha == 0.0 and beta == 0.0:
        return math.inf if x in (0.0, 1.0) else 0.0
    if alpha == 0.0:
        return _atom(x, 0.0)
    if beta == 0.0:
        return _atom(x, 1.0)
    if alpha == 1.0 and beta == 1.0:
        return 1.0

    threshold = numeric_config().beta_log_space_threshold
    if alpha > threshold or beta > threshold:
        return math.exp(pdf_ln_unchecked(alpha, beta, x))

    b = special.gamma(alpha + beta) / (special.gamma(alpha) * special.gamma(beta))
    return b * special.power(x, alpha - 1.0) * special.power(1.0 - x, beta - 1.0)


def pdf_ln_unchecked(alpha: float, beta: float, x: float) -> float:
    """Log density for a parameter set assumed valid."""
    if x < 0.0 or x > 1.0:
        return -math.inf

    alpha_inf = math.isinf(alpha)
    beta_inf = math.isinf(beta)
    if alpha_inf and beta_inf:
        return _atom_ln(x, 0.5)
    if alpha_inf:
        return _atom_ln(x, 1.0)
    if beta_inf:
        return _atom_ln(x, 0.0)
    if alpha == 0.0 and beta == 0.0:
        return math.inf if x in (0.0, 1.0) else -math.inf
    if alpha == 0.0:
        return _atom_ln(x, 0.0)
    if beta == 0.0:
        return _atom_ln(x, 1.0)
    if alpha == 1.0 and beta == 1.0:
        return 0.0

    a = special.gamma_ln(alpha + beta) - special.gamma_ln(alpha) - special.gamma_ln(beta)
    b = special.xlogy(alpha - 1.0, x)
    c = special.xlog1py(beta - 1.0, -x)
    return a + b + c


def cdf_unchecked(alpha: float, beta: float, x: float) -> float:
    """Cumulative distribution for a parameter set assumed valid."""
    if x < 0.0:
        return 0.0
    if x >= 1.0:
        return 1.0

    alpha_inf = math.isinf(alpha)
    beta_inf = math.isinf(beta)
    if alpha_inf and beta_inf:
        return 0.0 if x < 0.5 else 1.0
    if alpha_inf:
        return 0.0
    if beta_inf:
        return 1.0
    if alpha == 0.0 and beta == 0.0:
        return 0.5
    if alpha == 0.0:
        return 1.0
    if beta == 0.0:
        return 0.0
    if alpha == 1.0 and beta == 1.0:
        return x

    return special.beta_regularized(alpha, beta, x)


def inv_cdf_unchecked(alpha: float, beta: float, p: float) -> float:
    """
    Quantile for a parameter set assumed valid.

    Boundary shapes return their atoms directly. Otherwise solves
    ``cdf(x) = p`` on [0, 1] with Brent's method to
    ``numeric_config().root_accuracy``.
    """
    check_probability(p)

    alpha_inf = math.isinf(alpha)
    beta_inf = math.isinf(beta)
    if alpha_inf and beta_inf:
        return 0.5
    if alpha_inf:
        return 1.0
    if beta_inf:
        return 0.0
    if alpha == 0.0 and beta == 0.0:
        return 0.0 if p <= 0.5 else 1.0
    if alpha == 0.0:
        return 0.0
    if beta == 0.0:
        return 1.0
    if alpha == 1.0 and beta == 1.0:
        return p

    return find_root_bracketed(
        lambda x: cdf_unchecked(alpha, beta, x) - p, 0.0, 1.0, lower_limit=0.0, upper_limit=1.0
    )


def pdf(alpha: float, beta: float, x: float) -> float:
    """
    Probability density function for beta distribution.

    Parameters
    ----------
    alpha : float
        First shape parameter, non-negative
    beta : float
        Second shape parameter, non-negative
    x : float
        Point at which to evaluate the density

    Returns
    -------
    float
        Density at ``x``; ``inf`` at atoms of degenerate parameter sets and
        0 outside [0, 1]

    Raises
    ------
    InvalidParameterError
        If a shape is negative or NaN
    """
    BetaShapes(alpha=alpha, beta=beta).validate()
    return pdf_unchecked(alpha, beta, x)


def pdf_ln(alpha: float, beta: float, x: float) -> float:
    """Log density from log-gamma terms."""
    BetaShapes(alpha=alpha, beta=beta).validate()
    return pdf_ln_unchecked(alpha, beta, x)


def cdf(alpha: float, beta: float, x: float) -> float:
    """Cumulative distribution function, the regularized incomplete beta function."""
    BetaShapes(alpha=alpha, beta=beta).validate()
    return cdf_unchecked(alpha, beta, x)


def inv_cdf(alpha: float, beta: float, p: float) -> float:
    """
    Quantile function found by bracketed root finding.

    Raises
    ------
    InvalidParameterError
        If a shape is negative or NaN
    OutOfRangeError
        If ``p`` is outside [0, 1]
    NonConvergenceError
        If the root finder exhausts its budget
    """
    BetaShapes(alpha=alpha, beta=beta).validate()
    return inv_cdf_unchecked(alpha, beta, p)


def sample_unchecked(rng: np.random.Generator, alpha: float, beta: float) -> float:
    """
    Draw one variate as ``X / (X + Y)`` with ``X ~ Gamma(α, 1)``, ``Y ~ Gamma(β, 1)``.

    When both gamma draws are exactly zero the pair is redrawn, except for
    equal shapes where a fair coin decides between 0 and 1.
    """
    alpha_inf = math.isinf(alpha)
    beta_inf = math.isinf(beta)
    if alpha_inf and beta_inf:
        return 0.5
    if alpha_inf:
        return 1.0
    if beta_inf:
        return 0.0

    x = gamma.sample_unchecked(rng, alpha, 1.0)
    y = gamma.sample_unchecked(rng, beta, 1.0)
    if alpha == beta and x == 0.0 and y == 0.0:
        return 1.0 if rng.random() < 0.5 else 0.0

    while x == 0.0 and y == 0.0:
        x = gamma.sample_unchecked(rng, alpha, 1.0)
        y = gamma.sample_unchecked(rng, beta, 1.0)

    return x / (x + y)


def sample(alpha: float, beta: float, *, rng: np.random.Generator | None = None) -> float:
    BetaShapes(alpha=alpha, beta=beta).validate()
    return sample_unchecked(resolve_random_source(rng), alpha, beta)


def fill_samples(
    values: npt.NDArray[np.float64],
    alpha: float,
    beta: float,
    *,
    rng: np.random.Generator | None = None,
) -> None:
    BetaShapes(alpha=alpha, beta=beta).validate()
    source = resolve_random_source(rng)
    fill_sequentially(values, lambda: sample_unchecked(source, alpha, beta))


def samples(
    n: int, alpha: float, beta: float, *, rng: np.random.Generator | None = None
) -> FloatArray:
    values = new_buffer(n, np.float64)
    fill_samples(values, alpha, beta, rng=rng)
    return values


def iter_samples(
    alpha: float, beta: float, *, rng: np.random.Generator | None = None
) -> Iterator[float]:
    BetaShapes(alpha=alpha, beta=beta).validate()
    source = resolve_random_source(rng)
    return sample_stream(lambda: sample_unchecked(source, alpha, beta))


class Beta(ContinuousDistribution):
    """
    Beta distribution.

    Parameters
    ----------
    alpha : float
        First shape α ≥ 0.
    beta : float
        Second shape β ≥ 0.
    random_source : numpy.random.Generator, optional
        Generator used for sampling.

    Raises
    ------
    InvalidParameterError
        If a shape is negative or NaN.
    """

    def __init__(
        self, alpha: float, beta: float, random_source: np.random.Generator | None = None
    ) -> None:
        self._parameters = BetaShapes(alpha=alpha, beta=beta)
        self._parameters.validate()
        self._alpha = alpha
        self._beta = beta
        self._random_source = resolve_random_source(random_source)

    def __repr__(self) -> str:
        return f"Beta(alpha={self._alpha}, beta={self._beta})"

    @property
    def alpha(self) -> float:
        return self._alpha

    @property
    def beta(self) -> float:
        return self._beta

    @property
    def support(self) -> ContinuousSupport:
        return ContinuousSupport(0.0, 1.0)

    @property
    def mean(self) -> float:
        a, b = self._alpha, self._beta
        if a == 0.0 and b == 0.0:
            return 0.5
        if a == 0.0:
            return 0.0
        if b == 0.0:
            return 1.0
        if math.isinf(a) and math.isinf(b):
            return 0.5
        if math.isinf(a):
            return 1.0
        if math.isinf(b):
            return 0.0
        return a / (a + b)

    @property
    def variance(self) -> float:
        a, b = self._alpha, self._beta
        if a == 0.0 and b == 0.0:
            return 0.25
        if a == 0.0 or b == 0.0 or math.isinf(a) or math.isinf(b):
            return 0.0
        s = a + b
        return a * b / (s * s * (s + 1.0))

    @property
    def entropy(self) -> float:
        a, b = self._alpha, self._beta
        if math.isinf(a) or math.isinf(b):
            return 0.0
        if a == 0.0 and b == 0.0:
            return -math.log(0.5)
        if a == 0.0 or b == 0.0:
            return 0.0
        return (
            special.beta_ln(a, b)
            - (a - 1.0) * special.digamma(a)
            - (b - 1.0) * special.digamma(b)
            + (a + b - 2.0) * special.digamma(a + b)
        )

    @property
    def skewness(self) -> float:
        a, b = self._alpha, self._beta
        if math.isinf(a) and math.isinf(b):
            return 0.0
        if math.isinf(a):
            return -2.0
        if math.isinf(b):
            return 2.0
        if a == 0.0 and b == 0.0:
            return 0.0
        if a == 0.0:
            return 2.0
        if b == 0.0:
            return -2.0
        if a == 1.0 and b == 1.0:
            return 0.0
        return 2.0 * (b - a) * math.sqrt(a + b + 1.0) / ((a + b + 2.0) * math.sqrt(a * b))

    @property
    def mode(self) -> float:
        a, b = self._alpha, self._beta
        if a == 0.0 and b == 0.0:
            return 0.5
        if a == 0.0:
            return 0.0
        if b == 0.0:
            return 1.0
        if math.isinf(a) and math.isinf(b):
            return 0.5
        if math.isinf(a):
            return 1.0
        if math.isinf(b):
            return 0.0
        if a == 1.0 and b == 1.0:
            return 0.5
        if a < 1.0 and b < 1.0:
            raise NotSupportedError("Beta distribution with both shapes below 1 is bimodal")
        if a <= 1.0:
            return 0.0
        if b <= 1.0:
            return 1.0
        return (a - 1.0) / (a + b - 2.0)

    @property
    def median(self) -> float:
        raise NotSupportedError("Beta median has no closed form")

    def density(self, x: float) -> float:
        return pdf_unchecked(self._alpha, self._beta, x)

    def density_ln(self, x: float) -> float:
        return pdf_ln_unchecked(self._alpha, self._beta, x)

    def cumulative_distribution(self, x: float) -> float:
        return cdf_unchecked(self._alpha, self._beta, x)

    def inverse_cumulative_distribution(self, p: float) -> float:
        return inv_cdf_unchecked(self._alpha, self._beta, p)

    def sample(self) -> float:
        return sample_unchecked(self._random_source, self._alpha, self._beta)
