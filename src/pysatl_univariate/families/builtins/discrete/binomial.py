"""
Binomial distribution.

Number of successes in n independent trials with success probability p.
``p = 0`` and ``p = 1`` are the point masses at 0 and n.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING

import numpy as np

from pysatl_univariate import special
from pysatl_univariate.distributions.distribution import DiscreteDistribution
from pysatl_univariate.distributions.sampling import new_buffer, sample_stream
from pysatl_univariate.distributions.support import IntegerLatticeDiscreteSupport
from pysatl_univariate.families.parametrizations import (
    Parametrization,
    constraint,
    parametrization,
)
from pysatl_univariate.random_source import resolve_random_source

if TYPE_CHECKING:
    from collections.abc import Iterator

    import numpy.typing as npt

    from pysatl_univariate.types import IntArray


@parametrization(name="pN")
class BinomialPN(Parametrization):
    """
    Standard parametrization of binomial distribution.

    Parameters
    ----------
    p : float
        Success probability of a single trial
    n : int
        Number of trials
    """

    p: float
    n: int

    @constraint(description="0 <= p <= 1")
    def check_p_range(self) -> bool:
        return 0 <= self.p <= 1

    @constraint(description="n >= 0")
    def check_n_non_negative(self) -> bool:
        return self.n >= 0

    @constraint(description="n is an integer")
    def check_n_integer(self) -> bool:
        return float(self.n).is_integer()


def is_valid_parameter_set(p: float, n: int) -> bool:
    return BinomialPN(p=p, n=n).is_valid()


def pmf_ln_unchecked(p: float, n: int, k: int) -> float:
    if k < 0 or k > n:
        return -math.inf
    if p == 0.0:
        return 0.0 if k == 0 else -math.inf
    if p == 1.0:
        return 0.0 if k == n else -math.inf
    return special.binomial_ln(n, k) + k * math.log(p) + (n - k) * math.log1p(-p)


def pmf_unchecked(p: float, n: int, k: int) -> float:
    if k < 0 or k > n:
        return 0.0
    return math.exp(pmf_ln_unchecked(p, n, k))


def cdf_unchecked(p: float, n: int, x: float) -> float:
    if x < 0.0:
        return 0.0
    if x >= n:
        return 1.0
    k = math.floor(x)
    return special.beta_regularized(n - k, k + 1, 1.0 - p)


def pmf(p: float, n: int, k: int) -> float:
    """
    Probability mass function for binomial distribution.

    Parameters
    ----------
    p : float
        Success probability, in [0, 1]
    n : int
        Number of trials, non-negative
    k : int
        Number of successes

    Returns
    -------
    float
        ``C(n, k) p^k (1 - p)^(n - k)`` for ``0 <= k <= n``, 0 otherwise
    """
    BinomialPN(p=p, n=n).validate()
    return pmf_unchecked(p, n, k)


def pmf_ln(p: float, n: int, k: int) -> float:
    BinomialPN(p=p, n=n).validate()
    return pmf_ln_unchecked(p, n, k)


def cdf(p: float, n: int, x: float) -> float:
    """CDF through the regularized incomplete beta function ``I_{1-p}(n - k, k + 1)``."""
    BinomialPN(p=p, n=n).validate()
    return cdf_unchecked(p, n, x)


def sample_unchecked(rng: np.random.Generator, p: float, n: int) -> int:
    """Count of ``n`` uniform draws that fall below ``p``."""
    return int(np.count_nonzero(rng.random(n) < p))


def sample(p: float, n: int, *, rng: np.random.Generator | None = None) -> int:
    BinomialPN(p=p, n=n).validate()
    return sample_unchecked(resolve_random_source(rng), p, n)


def _fill(rng: np.random.Generator, values: npt.NDArray[np.int64], p: float, n: int) -> None:
    uniform = rng.random((values.shape[0], n))
    values[:] = np.count_nonzero(uniform < p, axis=1)


def fill_samples(
    values: npt.NDArray[np.int64], p: float, n: int, *, rng: np.random.Generator | None = None
) -> None:
    BinomialPN(p=p, n=n).validate()
    _fill(resolve_random_source(rng), values, p, n)


def samples(
    n_samples: int, p: float, n: int, *, rng: np.random.Generator | None = None
) -> IntArray:
    values = new_buffer(n_samples, np.int64)
    fill_samples(values, p, n, rng=rng)
    return values


def iter_samples(p: float, n: int, *, rng: np.random.Generator | None = None) -> Iterator[int]:
    BinomialPN(p=p, n=n).validate()
    source = resolve_random_source(rng)
    return sample_stream(lambda: sample_unchecked(source, p, n))


class Binomial(DiscreteDistribution):
    """
    Binomial distribution.

    Parameters
    ----------
    p : float
        Success probability in [0, 1].
    n : int
        Number of trials, non-negative.
    random_source : numpy.random.Generator, optional
        Generator used for sampling.
    """

    def __init__(self, p: float, n: int, random_source: np.random.Generator | None = None) -> None:
        self._parameters = BinomialPN(p=p, n=n)
        self._parameters.validate()
        self._p = p
        self._n = n
        self._random_source = resolve_random_source(random_source)

    def __repr__(self) -> str:
        return f"Binomial(p={self._p}, n={self._n})"

    @property
    def p(self) -> float:
        return self._p

    @property
    def n(self) -> int:
        return self._n

    @property
    def support(self) -> IntegerLatticeDiscreteSupport:
        return IntegerLatticeDiscreteSupport(0, self._n)

    @property
    def mean(self) -> float:
        return self._p * self._n

    @property
    def variance(self) -> float:
        return self._p * (1.0 - self._p) * self._n

    @property
    def entropy(self) -> float:
        if self._p == 0.0 or self._p == 1.0:
            return 0.0
        return -math.fsum(
            special.xlogy(mass, mass)
            for mass in (pmf_unchecked(self._p, self._n, k) for k in range(self._n + 1))
        )

    @property
    def skewness(self) -> float:
        numerator = 1.0 - 2.0 * self._p
        variance = self.variance
        if variance == 0:
            return math.copysign(math.inf, numerator)
        return numerator / math.sqrt(variance)

    @property
    def mode(self) -> int:
        if self._p == 1.0:
            return self._n
        if self._p == 0.0:
            return 0
        return math.floor((self._n + 1) * self._p)

    @property
    def modes(self) -> list[int]:
        """Both neighbours when ``(n + 1)p`` is an integer."""
        if self._p == 1.0:
            return [self._n]
        if self._p == 0.0:
            return [0]
        td = (self._n + 1) * self._p
        t = math.floor(td)
        return [t] if t != td else [t, t - 1]

    @property
    def median(self) -> float:
        return float(math.floor(self._p * self._n))

    def probability(self, k: int) -> float:
        return pmf_unchecked(self._p, self._n, k)

    def probability_ln(self, k: int) -> float:
        return pmf_ln_unchecked(self._p, self._n, k)

    def cumulative_distribution(self, x: float) -> float:
        return cdf_unchecked(self._p, self._n, x)

    def sample(self) -> int:
        return sample_unchecked(self._random_source, self._p, self._n)

    def fill_samples(self, values: npt.NDArray[np.int64]) -> None:
        _fill(self._random_source, values, self._p, self._n)
