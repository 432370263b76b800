"""
Bernoulli distribution.

Single trial that is 1 with probability p and 0 otherwise.
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


@parametrization(name="p")
class BernoulliP(Parametrization):
    """
    Standard parametrization of Bernoulli distribution.

    Parameters
    ----------
    p : float
        Probability of success
    """

    p: float

    @constraint(description="0 <= p <= 1")
    def check_p_range(self) -> bool:
        return 0 <= self.p <= 1


def is_valid_parameter_set(p: float) -> bool:
    return BernoulliP(p=p).is_valid()


def _pmf(p: float, k: int) -> float:
    if k == 0:
        return 1.0 - p
    if k == 1:
        return p
    return 0.0


def _pmf_ln(p: float, k: int) -> float:
    mass = _pmf(p, k)
    return math.log(mass) if mass > 0 else -math.inf


def _cdf(p: float, x: float) -> float:
    if x < 0.0:
        return 0.0
    if x >= 1.0:
        return 1.0
    return 1.0 - p


def pmf(p: float, k: int) -> float:
    """
    Probability mass function for Bernoulli distribution.

    Parameters
    ----------
    p : float
        Probability of success, in [0, 1]
    k : int
        Outcome

    Returns
    -------
    float
        ``1 - p`` for 0, ``p`` for 1 and 0 otherwise
    """
    BernoulliP(p=p).validate()
    return _pmf(p, k)


def pmf_ln(p: float, k: int) -> float:
    BernoulliP(p=p).validate()
    return _pmf_ln(p, k)


def cdf(p: float, x: float) -> float:
    BernoulliP(p=p).validate()
    return _cdf(p, x)


def sample_unchecked(rng: np.random.Generator, p: float) -> int:
    return 1 if rng.random() < p else 0


def sample(p: float, *, rng: np.random.Generator | None = None) -> int:
    BernoulliP(p=p).validate()
    return sample_unchecked(resolve_random_source(rng), p)


def _fill(rng: np.random.Generator, values: npt.NDArray[np.int64], p: float) -> None:
    values[:] = rng.random(values.shape[0]) < p


def fill_samples(
    values: npt.NDArray[np.int64], p: float, *, rng: np.random.Generator | None = None
) -> None:
    BernoulliP(p=p).validate()
    _fill(resolve_random_source(rng), values, p)


def samples(n: int, p: float, *, rng: np.random.Generator | None = None) -> IntArray:
    values = new_buffer(n, np.int64)
    fill_samples(values, p, rng=rng)
    return values


def iter_samples(p: float, *, rng: np.random.Generator | None = None) -> Iterator[int]:
    BernoulliP(p=p).validate()
    source = resolve_random_source(rng)
    return sample_stream(lambda: sample_unchecked(source, p))


class Bernoulli(DiscreteDistribution):
    """
    Bernoulli distribution.

    Parameters
    ----------
    p : float
        Probability of success in [0, 1].
    random_source : numpy.random.Generator, optional
        Generator used for sampling.
    """

    def __init__(self, p: float, random_source: np.random.Generator | None = None) -> None:
        self._parameters = BernoulliP(p=p)
        self._parameters.validate()
        self._p = p
        self._random_source = resolve_random_source(random_source)

    def __repr__(self) -> str:
        return f"Bernoulli(p={self._p})"

    @property
    def p(self) -> float:
        return self._p

    @property
    def support(self) -> IntegerLatticeDiscreteSupport:
        return IntegerLatticeDiscreteSupport(0, 1)

    @property
    def mean(self) -> float:
        return self._p

    @property
    def variance(self) -> float:
        return self._p * (1.0 - self._p)

    @property
    def entropy(self) -> float:
        p = self._p
        return -special.xlogy(p, p) - special.xlogy(1.0 - p, 1.0 - p)

    @property
    def skewness(self) -> float:
        numerator = 1.0 - 2.0 * self._p
        variance = self.variance
        if variance == 0:
            return math.copysign(math.inf, numerator)
        return numerator / math.sqrt(variance)

    @property
    def mode(self) -> int:
        return 1 if self._p > 0.5 else 0

    @property
    def modes(self) -> list[int]:
        if self._p < 0.5:
            return [0]
        if self._p > 0.5:
            return [1]
        return [0, 1]

    @property
    def median(self) -> float:
        if self._p < 0.5:
            return 0.0
        if self._p > 0.5:
            return 1.0
        return 0.5

    def probability(self, k: int) -> float:
        return _pmf(self._p, k)

    def probability_ln(self, k: int) -> float:
        return _pmf_ln(self._p, k)

    def cumulative_distribution(self, x: float) -> float:
        return _cdf(self._p, x)

    def sample(self) -> int:
        return sample_unchecked(self._random_source, self._p)

    def fill_samples(self, values: npt.NDArray[np.int64]) -> None:
        _fill(self._random_source, values, self._p)
