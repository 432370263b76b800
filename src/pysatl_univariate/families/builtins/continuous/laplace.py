"""
Laplace distribution.

Double exponential distribution with location μ and scale b > 0.

Probability density function:
    f(x) = exp(-|x - μ| / b) / (2b)
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING

import numpy as np

from pysatl_univariate.distributions.distribution import ContinuousDistribution
from pysatl_univariate.distributions.sampling import (
    fill_sequentially,
    new_buffer,
    sample_stream,
    uniform_open,
)
from pysatl_univariate.distributions.support import ContinuousSupport
from pysatl_univariate.errors import check_probability
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


@parametrization(name="locationScale")
class LaplaceLocationScale(Parametrization):
    """
    Standard parametrization of Laplace distribution.

    Parameters
    ----------
    location : float
        Location (μ), also the mean and the median
    scale : float
        Scale (b)
    """

    location: float
    scale: float

    @constraint(description="scale > 0")
    def check_scale_positive(self) -> bool:
        return self.scale > 0

    @constraint(description="location is not NaN")
    def check_location_not_nan(self) -> bool:
        return not math.isnan(self.location)


def is_valid_parameter_set(location: float, scale: float) -> bool:
    return LaplaceLocationScale(location=location, scale=scale).is_valid()


def _pdf(location: float, scale: float, x: float) -> float:
    return math.exp(-abs(x - location) / scale) / (2.0 * scale)


def _pdf_ln(location: float, scale: float, x: float) -> float:
    return -abs(x - location) / scale - math.log(2.0 * scale)


def _cdf(location: float, scale: float, x: float) -> float:
    z = (x - location) / scale
    if z < 0:
        return 0.5 * math.exp(z)
    return 1.0 - 0.5 * math.exp(-z)


def _inv_cdf(location: float, scale: float, p: float) -> float:
    check_probability(p)
    if p == 0.0:
        return -math.inf
    if p == 1.0:
        return math.inf
    if p < 0.5:
        return location + scale * math.log(2.0 * p)
    return location - scale * math.log(2.0 * (1.0 - p))


def pdf(location: float, scale: float, x: float) -> float:
    LaplaceLocationScale(location=location, scale=scale).validate()
    return _pdf(location, scale, x)


def pdf_ln(location: float, scale: float, x: float) -> float:
    LaplaceLocationScale(location=location, scale=scale).validate()
    return _pdf_ln(location, scale, x)


def cdf(location: float, scale: float, x: float) -> float:
    LaplaceLocationScale(location=location, scale=scale).validate()
    return _cdf(location, scale, x)


def inv_cdf(location: float, scale: float, p: float) -> float:
    LaplaceLocationScale(location=location, scale=scale).validate()
    return _inv_cdf(location, scale, p)


def sample_unchecked(rng: np.random.Generator, location: float, scale: float) -> float:
    u = uniform_open(rng) - 0.5
    return location - scale * math.copysign(1.0, u) * math.log(1.0 - 2.0 * abs(u))


def sample(location: float, scale: float, *, rng: np.random.Generator | None = None) -> float:
    LaplaceLocationScale(location=location, scale=scale).validate()
    return sample_unchecked(resolve_random_source(rng), location, scale)


def fill_samples(
    values: npt.NDArray[np.float64],
    location: float,
    scale: float,
    *,
    rng: np.random.Generator | None = None,
) -> None:
    LaplaceLocationScale(location=location, scale=scale).validate()
    source = resolve_random_source(rng)
    fill_sequentially(values, lambda: sample_unchecked(source, location, scale))


def samples(
    n: int, location: float, scale: float, *, rng: np.random.Generator | None = None
) -> FloatArray:
    values = new_buffer(n, np.float64)
    fill_samples(values, location, scale, rng=rng)
    return values


def iter_samples(
    location: float, scale: float, *, rng: np.random.Generator | None = None
) -> Iterator[float]:
    LaplaceLocationScale(location=location, scale=scale).validate()
    source = resolve_random_source(rng)
    return sample_stream(lambda: sample_unchecked(source, location, scale))


class Laplace(ContinuousDistribution):
    """
    Laplace distribution.

    Parameters
    ----------
    location : float
        Location μ, defaults to 0.
    scale : float
        Scale b > 0, defaults to 1.
    random_source : numpy.random.Generator, optional
        Generator used for sampling.
    """

    def __init__(
        self,
        location: float = 0.0,
        scale: float = 1.0,
        random_source: np.random.Generator | None = None,
    ) -> None:
        self._parameters = LaplaceLocationScale(location=location, scale=scale)
        self._parameters.validate()
        self._location = location
        self._scale = scale
        self._random_source = resolve_random_source(random_source)

    def __repr__(self) -> str:
        return f"Laplace(location={self._location}, scale={self._scale})"

    @property
    def location(self) -> float:
        return self._location

    @property
    def scale(self) -> float:
        return self._scale

    @property
    def support(self) -> ContinuousSupport:
        return ContinuousSupport()

    @property
    def mean(self) -> float:
        return self._location

    @property
    def variance(self) -> float:
        return 2.0 * self._scale * self._scale

    @property
    def std_dev(self) -> float:
        return math.sqrt(2.0) * self._scale

    @property
    def entropy(self) -> float:
        return math.log(2.0 * math.e * self._scale)

    @property
    def skewness(self) -> float:
        return 0.0

    @property
    def mode(self) -> float:
        return self._location

    @property
    def median(self) -> float:
        return self._location

    def density(self, x: float) -> float:
        return _pdf(self._location, self._scale, x)

    def density_ln(self, x: float) -> float:
        return _pdf_ln(self._location, self._scale, x)

    def cumulative_distribution(self, x: float) -> float:
        return _cdf(self._location, self._scale, x)

    def inverse_cumulative_distribution(self, p: float) -> float:
        return _inv_cdf(self._location, self._scale, p)

    def sample(self) -> float:
        return sample_unchecked(self._random_source, self._location, self._scale)
