"""
Erlang distribution.

Gamma distribution restricted to an integer shape k ≥ 0: the waiting time
until the k-th event of a Poisson process with rate θ ≥ 0. Densities,
probabilities and samples are those of :mod:`.gamma`. Shape 0 with a positive
rate is the point mass at 0.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING

import numpy as np

from pysatl_univariate import special
from pysatl_univariate.distributions.distribution import ContinuousDistribution
from pysatl_univariate.distributions.sampling import fill_sequentially, new_buffer, sample_stream
from pysatl_univariate.distributions.support import ContinuousSupport
from pysatl_univariate.errors import NotSupportedError
from pysatl_univariate.families.builtins.continuous import gamma
from pysatl_univariate.families.parametrizations import (
    Parametrization,
    constraint,
    parametrization,
)
from pysatl_univariate.random_source import resolve_random_source

if TYPE_CHECKING:
    from collections.abc import Iterator

    import numpy.typing as npt

    from pysatl_univariate.types import FloatArray


@parametrization(name="shapeRate")
class ErlangShapeRate(Parametrization):
    """
    Standard parametrization of Erlang distribution.

    Parameters
    ----------
    shape : int
        Number of events (k)
    rate : float
        Event rate (θ)
    """

    shape: int
    rate: float

    @constraint(description="shape is a non-negative integer")
    def check_shape_non_negative_integer(self) -> bool:
        return float(self.shape).is_integer() and self.shape >= 0

    @constraint(description="rate >= 0")
    def check_rate_non_negative(self) -> bool:
        return self.rate >= 0


@parametrization(name="shapeScale")
class ErlangShapeScale(Parametrization):
    """
    Shape-scale parametrization of Erlang distribution.

    Parameters
    ----------
    shape : int
        Number of events (k)
    scale : float
        Mean time between events, 1/θ
    """

    shape: int
    scale: float

    @constraint(description="shape is a non-negative integer")
    def check_shape_non_negative_integer(self) -> bool:
        return float(self.shape).is_integer() and self.shape >= 0

    @constraint(description="scale > 0")
    def check_scale_positive(self) -> bool:
        return self.scale > 0

    def transform_to_base_parametrization(self) -> Parametrization:
        return ErlangShapeRate(shape=self.shape, rate=1.0 / self.scale)


def is_valid_parameter_set(shape: int, rate: float) -> bool:
    return ErlangShapeRate(shape=shape, rate=rate).is_valid()


def pdf(shape: int, rate: float, x: float) -> float:
    ErlangShapeRate(shape=shape, rate=rate).validate()
    return gamma.pdf_unchecked(shape, rate, x)


def pdf_ln(shape: int, rate: float, x: float) -> float:
    ErlangShapeRate(shape=shape, rate=rate).validate()
    return gamma.pdf_ln_unchecked(shape, rate, x)


def cdf(shape: int, rate: float, x: float) -> float:
    ErlangShapeRate(shape=shape, rate=rate).validate()
    return gamma.cdf_unchecked(shape, rate, x)


def inv_cdf(shape: int, rate: float, p: float) -> float:
    ErlangShapeRate(shape=shape, rate=rate).validate()
    return gamma.inv_cdf_unchecked(shape, rate, p)


def sample(shape: int, rate: float, *, rng: np.random.Generator | None = None) -> float:
    ErlangShapeRate(shape=shape, rate=rate).validate()
    return gamma.sample_unchecked(resolve_random_source(rng), shape, rate)


def fill_samples(
    values: npt.NDArray[np.float64],
    shape: int,
    rate: float,
    *,
    rng: np.random.Generator | None = None,
) -> None:
    ErlangShapeRate(shape=shape, rate=rate).validate()
    source = resolve_random_source(rng)
    fill_sequentially(values, lambda: gamma.sample_unchecked(source, shape, rate))


def samples(
    n: int, shape: int, rate: float, *, rng: np.random.Generator | None = None
) -> FloatArray:
    values = new_buffer(n, np.float64)
    fill_samples(values, shape, rate, rng=rng)
    return values


def iter_samples(
    shape: int, rate: float, *, rng: np.random.Generator | None = None
) -> Iterator[float]:
    ErlangShapeRate(shape=shape, rate=rate).validate()
    source = resolve_random_source(rng)
    return sample_stream(lambda: gamma.sample_unchecked(source, shape, rate))


class Erlang(ContinuousDistribution):
    """
    Erlang distribution.

    Parameters
    ----------
    shape : int
        Number of events k ≥ 0.
    rate : float
        Event rate θ ≥ 0.
    random_source : numpy.random.Generator, optional
        Generator used for sampling.
    """

    def __init__(
        self, shape: int, rate: float, random_source: np.random.Generator | None = None
    ) -> None:
        self._parameters = ErlangShapeRate(shape=shape, rate=rate)
        self._parameters.validate()
        self._shape = int(shape)
        self._rate = rate
        self._random_source = resolve_random_source(random_source)

    @classmethod
    def with_shape_scale(
        cls, shape: int, scale: float, random_source: np.random.Generator | None = None
    ) -> Erlang:
        return cls.from_parametrization(ErlangShapeScale(shape=shape, scale=scale), random_source)

    def __repr__(self) -> str:
        return f"Erlang(shape={self._shape}, rate={self._rate})"

    @property
    def shape(self) -> int:
        return self._shape

    @property
    def rate(self) -> float:
        return self._rate

    @property
    def scale(self) -> float:
        return 1.0 / self._rate if self._rate > 0 else math.inf

    @property
    def support(self) -> ContinuousSupport:
        return ContinuousSupport(0.0)

    @property
    def mean(self) -> float:
        if math.isinf(self._rate):
            return float(self._shape)
        if self._shape == 0 and self._rate == 0.0:
            return math.nan
        if self._rate == 0.0:
            return math.inf
        return self._shape / self._rate

    @property
    def variance(self) -> float:
        if math.isinf(self._rate):
            return 0.0
        if self._shape == 0 and self._rate == 0.0:
            return math.nan
        if self._rate == 0.0:
            return math.inf
        return self._shape / (self._rate * self._rate)

    @property
    def std_dev(self) -> float:
        return math.sqrt(self.variance)

    @property
    def entropy(self) -> float:
        if math.isinf(self._rate) or (self._shape == 0 and self._rate > 0.0):
            return 0.0
        if self._shape == 0 and self._rate == 0.0:
            return math.nan
        if self._rate == 0.0:
            return math.inf
        return (
            self._shape
            - math.log(self._rate)
            + special.gamma_ln(self._shape)
            + (1.0 - self._shape) * special.digamma(self._shape)
        )

    @property
    def skewness(self) -> float:
        if math.isinf(self._rate) or (self._shape == 0 and self._rate > 0.0):
            return 0.0
        if self._shape == 0 and self._rate == 0.0:
            return math.nan
        return 2.0 / math.sqrt(self._shape)

    @property
    def mode(self) -> float:
        if self._shape < 1:
            raise NotSupportedError("Erlang mode is undefined for shape < 1")
        if math.isinf(self._rate):
            return float(self._shape)
        if self._rate == 0.0:
            return math.inf if self._shape > 1 else 0.0
        return (self._shape - 1) / self._rate

    @property
    def median(self) -> float:
        raise NotSupportedError("Erlang median has no closed form")

    def density(self, x: float) -> float:
        return gamma.pdf_unchecked(self._shape, self._rate, x)

    def density_ln(self, x: float) -> float:
        return gamma.pdf_ln_unchecked(self._shape, self._rate, x)

    def cumulative_distribution(self, x: float) -> float:
        return gamma.cdf_unchecked(self._shape, self._rate, x)

    def inverse_cumulative_distribution(self, p: float) -> float:
        return gamma.inv_cdf_unchecked(self._shape, self._rate, p)

    def sample(self) -> float:
        return gamma.sample_unchecked(self._random_source, self._shape, self._rate)
