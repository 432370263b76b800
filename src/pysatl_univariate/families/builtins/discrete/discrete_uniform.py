"""
Discrete uniform distribution.

Equal mass on every integer of ``[lower, upper]``.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING

import numpy as np

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


@parametrization(name="lowerUpper")
class DiscreteUniformLowerUpper(Parametrization):
    """
    Standard parametrization of discrete uniform distribution.

    Parameters
    ----------
    lower : int
        Smallest value
    upper : int
        Largest value
    """

    lower: int
    upper: int

    @constraint(description="lower <= upper")
    def check_bounds_order(self) -> bool:
        return self.lower <= self.upper

    @constraint(description="lower and upper are integers")
    def check_bounds_integer(self) -> bool:
        return float(self.lower).is_integer() and float(self.upper).is_integer()


def is_valid_parameter_set(lower: int, upper: int) -> bool:
    return DiscreteUniformLowerUpper(lower=lower, upper=upper).is_valid()


def _pmf(lower: int, upper: int, k: int) -> float:
    return 1.0 / (upper - lower + 1) if lower <= k <= upper else 0.0


def _pmf_ln(lower: int, upper: int, k: int) -> float:
    return -math.log(upper - lower + 1) if lower <= k <= upper else -math.inf


def _cdf(lower: int, upper: int, x: float) -> float:
    if x < lower:
        return 0.0
    if x >= upper:
        return 1.0
    return min(1.0, (math.floor(x) - lower + 1) / (upper - lower + 1))


def pmf(lower: int, upper: int, k: int) -> float:
    DiscreteUniformLowerUpper(lower=lower, upper=upper).validate()
    return _pmf(lower, upper, k)


def pmf_ln(lower: int, upper: int, k: int) -> float:
    DiscreteUniformLowerUpper(lower=lower, upper=upper).validate()
    return _pmf_ln(lower, upper, k)


def cdf(lower: int, upper: int, x: float) -> float:
    DiscreteUniformLowerUpper(lower=lower, upper=upper).validate()
    return _cdf(lower, upper, x)


def sample_unchecked(rng: np.random.Generator, lower: int, upper: int) -> int:
    return int(rng.integers(lower, upper, endpoint=True))


def sample(lower: int, upper: int, *, rng: np.random.Generator | None = None) -> int:
    DiscreteUniformLowerUpper(lower=lower, upper=upper).validate()
    return sample_unchecked(resolve_random_source(rng), lower, upper)


def _fill(
    rng: np.random.Generator, values: npt.NDArray[np.int64], lower: int, upper: int
) -> None:
    values[:] = rng.integers(lower, upper, size=values.shape[0], endpoint=True)


def fill_samples(
    values: npt.NDArray[np.int64],
    lower: int,
    upper: int,
    *,
    rng: np.random.Generator | None = None,
) -> None:
    DiscreteUniformLowerUpper(lower=lower, upper=upper).validate()
    _fill(resolve_random_source(rng), values, lower, upper)


def samples(
    n: int, lower: int, upper: int, *, rng: np.random.Generator | None = None
) -> IntArray:
    values = new_buffer(n, np.int64)
    fill_samples(values, lower, upper, rng=rng)
    return values


def iter_samples(
    lower: int, upper: int, *, rng: np.random.Generator | None = None
) -> Iterator[int]:
    DiscreteUniformLowerUpper(lower=lower, upper=upper).validate()
    source = resolve_random_source(rng)
    return sample_stream(lambda: sample_unchecked(source, lower, upper))


class DiscreteUniform(DiscreteDistribution):
    """
    Discrete uniform distribution.

    Parameters
    ----------
    lower : int
        Smallest value.
    upper : int
        Largest value, not below ``lower``.
    random_source : numpy.random.Generator, optional
        Generator used for sampling.
    """

    def __init__(
        self, lower: int, upper: int, random_source: np.random.Generator | None = None
    ) -> None:
        self._parameters = DiscreteUniformLowerUpper(lower=lower, upper=upper)
        self._parameters.validate()
        self._lower = lower
        self._upper = upper
        self._random_source = resolve_random_source(random_source)

    def __repr__(self) -> str:
        return f"DiscreteUniform(lower={self._lower}, upper={self._upper})"

    @property
    def lower(self) -> int:
        return self._lower

    @property
    def upper(self) -> int:
        return self._upper

    @property
    def support(self) -> IntegerLatticeDiscreteSupport:
        return IntegerLatticeDiscreteSupport(self._lower, self._upper)

    @property
    def mean(self) -> float:
        return 0.5 * (self._lower + self._upper)

    @property
    def variance(self) -> float:
        width = self._upper - self._lower + 1.0
        return (width * width - 1.0) / 12.0

    @property
    def entropy(self) -> float:
        return math.log(self._upper - self._lower + 1.0)

    @property
    def skewness(self) -> float:
        return 0.0

    @property
    def mode(self) -> int:
        return (self._lower + self._upper) // 2

    @property
    def median(self) -> float:
        return 0.5 * (self._lower + self._upper)

    def probability(self, k: int) -> float:
        return _pmf(self._lower, self._upper, k)

    def probability_ln(self, k: int) -> float:
        return _pmf_ln(self._lower, self._upper, k)

    def cumulative_distribution(self, x: float) -> float:
        return _cdf(self._lower, self._upper, x)

    def sample(self) -> int:
        return sample_unchecked(self._random_source, self._lower, self._upper)

    def fill_samples(self, values: npt.NDArray[np.int64]) -> None:
        _fill(self._random_source, values, self._lower, self._upper)
