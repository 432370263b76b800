"""
Geometric distribution.

Number of Bernoulli trials up to and including the first success, on
``{1, 2, ...}``.
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
from pysatl_univariate.distributions.sampling import (
    fill_sequentially,
    new_buffer,
    sample_stream,
    uniform_open,
)
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
class GeometricP(Parametrization):
    """
    Standard parametrization of geometric distribution.

    Parameters
    ----------
    p : float
        Success probability of a single trial
    """

    p: float

    @constraint(description="0 < p <= 1")
    def check_p_range(self) -> bool:
        return 0 < self.p <= 1


def is_valid_parameter_set(p: float) -> bool:
    return GeometricP(p=p).is_valid()


def _pmf_ln(p: float, k: int) -> float:
    if k <= 0:
        return -math.inf
    if p == 1.0:
        return 0.0 if k == 1 else -math.inf
    return (k - 1) * math.log1p(-p) + math.log(p)


def _pmf(p: float, k: int) -> float:
    if k <= 0:
        return 0.0
    return math.exp(_pmf_ln(p, k))


def _cdf(p: float, x: float) -> float:
    if x < 1.0:
        return 0.0
    if p == 1.0 or math.isinf(x):
        return 1.0
    return -math.expm1(math.floor(x) * math.log1p(-p))


def pmf(p: float, k: int) -> float:
    """
    Probability mass function for geometric distribution.

    Parameters
    ----------
    p : float
        Success probability, in (0, 1]
    k : int
        Trial of the first success

    Returns
    -------
    float
        ``(1 - p)^(k - 1) p`` for ``k >= 1``, 0 otherwise
    """
    GeometricP(p=p).validate()
    return _pmf(p, k)


def pmf_ln(p: float, k: int) -> float:
    GeometricP(p=p).validate()
    return _pmf_ln(p, k)


def cdf(p: float, x: float) -> float:
    """``1 - (1 - p)^floor(x)`` for ``x >= 1``, 0 below."""
    GeometricP(p=p).validate()
    return _cdf(p, x)


def sample_unchecked(rng: np.random.Generator, p: float) -> int:
    if p == 1.0:
        return 1
    return math.ceil(math.log(uniform_open(rng)) / math.log1p(-p))


def sample(p: float, *, rng: np.random.Generator | None = None) -> int:
    GeometricP(p=p).validate()
    return sample_unchecked(resolve_random_source(rng), p)


def fill_samples(
    values: npt.NDArray[np.int64], p: float, *, rng: np.random.Generator | None = None
) -> None:
    GeometricP(p=p).validate()
    source = resolve_random_source(rng)
    fill_sequentially(values, lambda: sample_unchecked(source, p))


def samples(n: int, p: float, *, rng: np.random.Generator | None = None) -> IntArray:
    values = new_buffer(n, np.int64)
    fill_samples(values, p, rng=rng)
    return values


def iter_samples(p: float, *, rng: np.random.Generator | None = None) -> Iterator[int]:
    GeometricP(p=p).validate()
    source = resolve_random_source(rng)
    return sample_stream(lambda: sample_unchecked(source, p))


class Geometric(DiscreteDistribution):
    """
    Geometric distribution on ``{1, 2, ...}``.

    Parameters
    ----------
    p : float
        Success probability in (0, 1].
    random_source : numpy.random.Generator, optional
        Generator used for sampling.
    """

    def __init__(self, p: float, random_source: np.random.Generator | None = None) -> None:
        self._parameters = GeometricP(p=p)
        self._parameters.validate()
        self._p = p
        self._random_source = resolve_random_source(random_source)

    def __repr__(self) -> str:
        return f"Geometric(p={self._p})"

    @property
    def p(self) -> float:
        return self._p

    @property
    def support(self) -> IntegerLatticeDiscreteSupport:
        return IntegerLatticeDiscreteSupport(1)

    @property
    def mean(self) -> float:
        return 1.0 / self._p

    @property
    def variance(self) -> float:
        return (1.0 - self._p) / (self._p * self._p)

    @property
    def entropy(self) -> float:
        p = self._p
        return (-special.xlogy(p, p) - special.xlogy(1.0 - p, 1.0 - p)) / p

    @property
    def skewness(self) -> float:
        if self._p == 1.0:
            return math.inf
        return (2.0 - self._p) / math.sqrt(1.0 - self._p)

    @property
    def mode(self) -> int:
        return 1

    @property
    def median(self) -> float:
        if self._p == 1.0:
            return 1.0
        return float(math.ceil(-math.log(2.0) / math.log1p(-self._p)))

    def probability(self, k: int) -> float:
        return _pmf(self._p, k)

    def probability_ln(self, k: int) -> float:
        return _pmf_ln(self._p, k)

    def cumulative_distribution(self, x: float) -> float:
        return _cdf(self._p, x)

    def sample(self) -> int:
        return sample_unchecked(self._random_source, self._p)
