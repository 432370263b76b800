"""
Negative binomial distribution.

Number of failures before the ``r``-th success in Bernoulli trials with
success probability ``p``. The number of successes ``r`` may be real.
Sampling draws a Poisson variate whose rate is a gamma variate.
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
from pysatl_univariate.distributions.sampling import fill_sequentially, new_buffer, sample_stream
from pysatl_univariate.distributions.support import IntegerLatticeDiscreteSupport
from pysatl_univariate.errors import NotSupportedError
from pysatl_univariate.families.builtins.continuous import gamma
from pysatl_univariate.families.builtins.discrete import poisson
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


@parametrization(name="rP")
class NegativeBinomialRP(Parametrization):
    """
    Standard parametrization of negative binomial distribution.

    Parameters
    ----------
    r : float
        Number of successes
    p : float
        Success probability of a single trial
    """

    r: float
    p: float

    @constraint(description="0 <= r < inf")
    def check_r_non_negative(self) -> bool:
        return 0 <= self.r < math.inf

    @constraint(description="0 < p <= 1")
    def check_p_range(self) -> bool:
        return 0 < self.p <= 1


def is_valid_parameter_set(r: float, p: float) -> bool:
    return NegativeBinomialRP(r=r, p=p).is_valid()


def _pmf_ln(r: float, p: float, k: int) -> float:
    if k < 0:
        return -math.inf
    if r == 0.0 or p == 1.0:
        # point mass at 0
        return 0.0 if k == 0 else -math.inf
    return (
        special.gamma_ln(r + k)
        - special.gamma_ln(r)
        - special.factorial_ln(k)
        + r * math.log(p)
        + special.xlog1py(k, -p)
    )


def _pmf(r: float, p: float, k: int) -> float:
    if k < 0:
        return 0.0
    return math.exp(_pmf_ln(r, p, k))


def _cdf(r: float, p: float, x: float) -> float:
    if x < 0:
        return 0.0
    if r == 0.0 or p == 1.0 or math.isinf(x):
        return 1.0
    return special.beta_regularized(r, math.floor(x) + 1.0, p)


def pmf(r: float, p: float, k: int) -> float:
    """
    Probability mass function for negative binomial distribution.

    Parameters
    ----------
    r : float
        Number of successes, non-negative
    p : float
        Success probability, in (0, 1]
    k : int
        Number of failures

    Returns
    -------
    float
        ``Γ(r + k) / (Γ(r) k!) p^r (1 - p)^k`` for ``k >= 0``, 0 otherwise
    """
    NegativeBinomialRP(r=r, p=p).validate()
    return _pmf(r, p, k)


def pmf_ln(r: float, p: float, k: int) -> float:
    NegativeBinomialRP(r=r, p=p).validate()
    return _pmf_ln(r, p, k)


def cdf(r: float, p: float, x: float) -> float:
    """``I_p(r, floor(x) + 1)``, the regularized incomplete beta function."""
    NegativeBinomialRP(r=r, p=p).validate()
    return _cdf(r, p, x)


def sample_unchecked(rng: np.random.Generator, r: float, p: float) -> int:
    """Poisson draw whose rate is ``Gamma(shape=r, rate=p / (1 - p))``."""
    if r == 0.0 or p == 1.0:
        return 0
    rate = gamma.sample_unchecked(rng, r, p / (1.0 - p))
    if rate == 0.0:
        return 0
    return poisson.sample_unchecked(rng, rate)


def sample(r: float, p: float, *, rng: np.random.Generator | None = None) -> int:
    NegativeBinomialRP(r=r, p=p).validate()
    return sample_unchecked(resolve_random_source(rng), r, p)


def fill_samples(
    values: npt.NDArray[np.int64],
    r: float,
    p: float,
    *,
    rng: np.random.Generator | None = None,
) -> None:
    NegativeBinomialRP(r=r, p=p).validate()
    source = resolve_random_source(rng)
    fill_sequentially(values, lambda: sample_unchecked(source, r, p))


def samples(n: int, r: float, p: float, *, rng: np.random.Generator | None = None) -> IntArray:
    values = new_buffer(n, np.int64)
    fill_samples(values, r, p, rng=rng)
    return values


def iter_samples(r: float, p: float, *, rng: np.random.Generator | None = None) -> Iterator[int]:
    NegativeBinomialRP(r=r, p=p).validate()
    source = resolve_random_source(rng)
    return sample_stream(lambda: sample_unchecked(source, r, p))


class NegativeBinomial(DiscreteDistribution):
    """
    Negative binomial distribution.

    Parameters
    ----------
    r : float
        Number of successes, ``r >= 0``.
    p : float
        Success probability in (0, 1].
    random_source : numpy.random.Generator, optional
        Generator used for sampling.
    """

    def __init__(
        self, r: float, p: float, random_source: np.random.Generator | None = None
    ) -> None:
        self._parameters = NegativeBinomialRP(r=r, p=p)
        self._parameters.validate()
        self._r = r
        self._p = p
        self._random_source = resolve_random_source(random_source)

    def __repr__(self) -> str:
        return f"NegativeBinomial(r={self._r}, p={self._p})"

    @property
    def r(self) -> float:
        return self._r

    @property
    def p(self) -> float:
        return self._p

    @property
    def support(self) -> IntegerLatticeDiscreteSupport:
        return IntegerLatticeDiscreteSupport(0)

    @property
    def mean(self) -> float:
        return self._r * (1.0 - self._p) / self._p

    @property
    def variance(self) -> float:
        return self._r * (1.0 - self._p) / (self._p * self._p)

    @property
    def entropy(self) -> float:
        raise NotSupportedError("NegativeBinomial entropy is not implemented")

    @property
    def skewness(self) -> float:
        spread = self._r * (1.0 - self._p)
        if spread == 0.0:
            return math.inf
        return (2.0 - self._p) / math.sqrt(spread)

    @property
    def mode(self) -> int:
        if self._r <= 1.0:
            return 0
        return math.floor((self._r - 1.0) * (1.0 - self._p) / self._p)

    @property
    def median(self) -> float:
        raise NotSupportedError("NegativeBinomial median is not implemented")

    def probability(self, k: int) -> float:
        return _pmf(self._r, self._p, k)

    def probability_ln(self, k: int) -> float:
        return _pmf_ln(self._r, self._p, k)

    def cumulative_distribution(self, x: float) -> float:
        return _cdf(self._r, self._p, x)

    def sample(self) -> int:
        return sample_unchecked(self._random_source, self._r, self._p)
