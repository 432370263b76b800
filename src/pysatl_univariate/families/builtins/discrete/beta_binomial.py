"""
Beta-binomial distribution.

Binomial distribution with n trials whose success probability is itself
drawn from ``Beta(a, b)``. Sampling composes the two: ``p ~ Beta(a, b)``
followed by ``k ~ Binomial(p, n)``.
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
from pysatl_univariate.families.builtins.continuous import beta
from pysatl_univariate.families.builtins.discrete import binomial
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


@parametrization(name="nAB")
class BetaBinomialNAB(Parametrization):
    """
    Standard parametrization of beta-binomial distribution.

    Parameters
    ----------
    n : int
        Number of trials
    a : float
        First shape of the success probability prior
    b : float
        Second shape of the success probability prior
    """

    n: int
    a: float
    b: float

    @constraint(description="n >= 1")
    def check_n_positive(self) -> bool:
        return self.n >= 1

    @constraint(description="n is an integer")
    def check_n_integer(self) -> bool:
        return float(self.n).is_integer()

    @constraint(description="a > 0")
    def check_a_positive(self) -> bool:
        return self.a > 0

    @constraint(description="b > 0")
    def check_b_positive(self) -> bool:
        return self.b > 0


def is_valid_parameter_set(n: int, a: float, b: float) -> bool:
    return BetaBinomialNAB(n=n, a=a, b=b).is_valid()


def _pmf_ln(n: int, a: float, b: float, k: int) -> float:
    if k < 0 or k > n:
        return -math.inf
    return special.binomial_ln(n, k) + special.beta_ln(k + a, n - k + b) - special.beta_ln(a, b)


def _pmf(n: int, a: float, b: float, k: int) -> float:
    if k < 0 or k > n:
        return 0.0
    return math.exp(_pmf_ln(n, a, b, k))


def _cdf(n: int, a: float, b: float, x: float) -> float:
    """Running sum of masses from 0 up to ``floor(x)``."""
    if x < 0:
        return 0.0
    if x >= n:
        return 1.0
    total = 0.0
    for k in range(math.floor(x) + 1):
        total += _pmf(n, a, b, k)
        if total >= 1.0:
            return 1.0
    return total


def pmf(n: int, a: float, b: float, k: int) -> float:
    """
    Probability mass function for beta-binomial distribution.

    Parameters
    ----------
    n : int
        Number of trials, at least 1
    a, b : float
        Positive shapes of the beta prior
    k : int
        Number of successes

    Returns
    -------
    float
        ``C(n, k) B(k + a, n - k + b) / B(a, b)`` for ``0 <= k <= n``, 0 otherwise
    """
    BetaBinomialNAB(n=n, a=a, b=b).validate()
    return _pmf(n, a, b, k)


def pmf_ln(n: int, a: float, b: float, k: int) -> float:
    BetaBinomialNAB(n=n, a=a, b=b).validate()
    return _pmf_ln(n, a, b, k)


def cdf(n: int, a: float, b: float, x: float) -> float:
    BetaBinomialNAB(n=n, a=a, b=b).validate()
    return _cdf(n, a, b, x)


def sample_unchecked(rng: np.random.Generator, n: int, a: float, b: float) -> int:
    p = beta.sample_unchecked(rng, a, b)
    return binomial.sample_unchecked(rng, p, n)


def sample(n: int, a: float, b: float, *, rng: np.random.Generator | None = None) -> int:
    BetaBinomialNAB(n=n, a=a, b=b).validate()
    return sample_unchecked(resolve_random_source(rng), n, a, b)


def fill_samples(
    values: npt.NDArray[np.int64],
    n: int,
    a: float,
    b: float,
    *,
    rng: np.random.Generator | None = None,
) -> None:
    BetaBinomialNAB(n=n, a=a, b=b).validate()
    source = resolve_random_source(rng)
    fill_sequentially(values, lambda: sample_unchecked(source, n, a, b))


def samples(
    n_samples: int, n: int, a: float, b: float, *, rng: np.random.Generator | None = None
) -> IntArray:
    values = new_buffer(n_samples, np.int64)
    fill_samples(values, n, a, b, rng=rng)
    return values


def iter_samples(
    n: int, a: float, b: float, *, rng: np.random.Generator | None = None
) -> Iterator[int]:
    BetaBinomialNAB(n=n, a=a, b=b).validate()
    source = resolve_random_source(rng)
    return sample_stream(lambda: sample_unchecked(source, n, a, b))


class BetaBinomial(DiscreteDistribution):
    """
    Beta-binomial distribution.

    Parameters
    ----------
    n : int
        Number of trials, at least 1.
    a : float
        First shape a > 0 of the beta prior.
    b : float
        Second shape b > 0 of the beta prior.
    random_source : numpy.random.Generator, optional
        Generator used for sampling.
    """

    def __init__(
        self, n: int, a: float, b: float, random_source: np.random.Generator | None = None
    ) -> None:
        self._parameters = BetaBinomialNAB(n=n, a=a, b=b)
        self._parameters.validate()
        self._n = n
        self._a = a
        self._b = b
        self._random_source = resolve_random_source(random_source)

    def __repr__(self) -> str:
        return f"BetaBinomial(n={self._n}, a={self._a}, b={self._b})"

    @property
    def n(self) -> int:
        return self._n

    @property
    def a(self) -> float:
        return self._a

    @property
    def b(self) -> float:
        return self._b

    @property
    def support(self) -> IntegerLatticeDiscreteSupport:
        return IntegerLatticeDiscreteSupport(0, self._n)

    @property
    def mean(self) -> float:
        return self._n * self._a / (self._a + self._b)

    @property
    def variance(self) -> float:
        n, a, b = self._n, self._a, self._b
        return n * a * b * (a + b + n) / ((a + b) ** 2 * (a + b + 1.0))

    @property
    def entropy(self) -> float:
        raise NotSupportedError("Beta-binomial entropy is not implemented")

    @property
    def skewness(self) -> float:
        n, a, b = self._n, self._a, self._b
        return (
            (a + b + 2.0 * n)
            * (b - a)
            / (a + b + 2.0)
            * math.sqrt((1.0 + a + b) / (n * a * b * (n + a + b)))
        )

    @property
    def mode(self) -> int:
        raise NotSupportedError("Beta-binomial mode is not implemented")

    @property
    def median(self) -> float:
        raise NotSupportedError("Beta-binomial median is not implemented")

    def probability(self, k: int) -> float:
        return _pmf(self._n, self._a, self._b, k)

    def probability_ln(self, k: int) -> float:
        return _pmf_ln(self._n, self._a, self._b, k)

    def cumulative_distribution(self, x: float) -> float:
        return _cdf(self._n, self._a, self._b, x)

    def sample(self) -> int:
        return sample_unchecked(self._random_source, self._n, self._a, self._b)
