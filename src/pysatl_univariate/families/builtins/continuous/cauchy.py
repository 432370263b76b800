"""
Cauchy distribution.

Heavy-tailed location-scale distribution without finite moments; the mean,
variance and skewness raise :class:`~pysatl_univariate.errors.NotSupportedError`.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING

import numpy as np

from pysatl_univariate.distributions.distribution import ContinuousDistribution
from pysatl_univariate.distributions.sampling import new_buffer, sample_stream
from pysatl_univariate.distributions.support import ContinuousSupport
from pysatl_univariate.errors import NotSupportedError, check_probability
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
class CauchyLocationScale(Parametrization):
    """
    Standard parametrization of Cauchy distribution.

    Parameters
    ----------
    location : float
        Location of the peak (x₀)
    scale : float
        Half width at half maximum (γ)
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
    return CauchyLocationScale(location=location, scale=scale).is_valid()


def _pdf(location: float, scale: float, x: float) -> float:
    z = (x - location) / scale
    return 1.0 / (math.pi * scale * (1.0 + z * z))


def _pdf_ln(location: float, scale: float, x: float) -> float:
    z = (x - location) / scale
    return -math.log(math.pi * scale) - math.log1p(z * z)


def _cdf(location: float, scale: float, x: float) -> float:
    return math.atan((x - location) / scale) / math.pi + 0.5


def _inv_cdf(location: float, scale: float, p: float) -> float:
    check_probability(p)
    if p == 0.0:
        return -math.inf
    if p == 1.0:
        return math.inf
    return location + scale * math.tan(math.pi * (p - 0.5))


def pdf(location: float, scale: float, x: float) -> float:
    CauchyLocationScale(location=location, scale=scale).validate()
    return _pdf(location, scale, x)


def pdf_ln(location: float, scale: float, x: float) -> float:
    CauchyLocationScale(location=location, scale=scale).validate()
    return _pdf_ln(location, scale, x)


def cdf(location: float, scale: float, x: float) -> float:
    CauchyLocationScale(location=location, scale=scale).validate()
    return _cdf(location, scale, x)


def inv_cdf(location: float, scale: float, p: float) -> float:
    CauchyLocationScale(location=location, scale=scale).validate()
    return _inv_cdf(location, scale, p)


def sample_unchecked(rng: np.random.Generator, location: float, scale: float) -> float:
    return location + scale * math.tan(math.pi * (float(rng.random()) - 0.5))


def sample(location: float, scale: float, *, rng: np.random.Generator | None = None) -> float:
    CauchyLocationScale(location=location, scale=scale).validate()
    return sample_unchecked(resolve_random_source(rng), location, scale)


def _fill(
    rng: np.random.Generator, values: npt.NDArray[np.float64], location: float, scale: float
) -> None:
    rng.random(out=values)
    values -= 0.5
    values *= math.pi
    np.tan(values, out=values)
    values *= scale
    values += location


def fill_samples(
    values: npt.NDArray[np.float64],
    location: float,
    scale: float,
    *,
    rng: np.random.Generator | None = None,
) -> None:
    CauchyLocationScale(location=location, scale=scale).validate()
    _fill(resolve_random_source(rng), values, location, scale)


def samples(
    n: int, location: float, scale: float, *, rng: np.random.Generator | None = None
) -> FloatArray:
    values = new_buffer(n, np.float64)
    fill_samples(values, location, scale, rng=rng)
    return values


def iter_samples(
    location: float, scale: float, *, rng: np.random.Generator | None = None
) -> Iterator[float]:
    CauchyLocationScale(location=location, scale=scale).validate()
    source = resolve_random_source(rng)
    return sample_stream(lambda: sample_unchecked(source, location, scale))


class Cauchy(ContinuousDistribution):
    """
    Cauchy distribution.

    Parameters
    ----------
    location : float
        Location x₀, defaults to 0.
    scale : float
        Scale γ > 0, defaults to 1.
    random_source : numpy.random.Generator, optional
        Generator used for sampling.
    """

    def __init__(
        self,
        location: float = 0.0,
        scale: float = 1.0,
        random_source: np.random.Generator | None = None,
    ) -> None:
        self._parameters = CauchyLocationScale(location=location, scale=scale)
        self._parameters.validate()
        self._location = location
        self._scale = scale
        self._random_source = resolve_random_source(random_source)

    def __repr__(self) -> str:
        return f"Cauchy(location={self._location}, scale={self._scale})"

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
        raise NotSupportedError("Cauchy distribution has no mean")

    @property
    def variance(self) -> float:
        raise NotSupportedError("Cauchy distribution has no variance")

    @property
    def entropy(self) -> float:
        return math.log(4.0 * math.pi * self._scale)

    @property
    def skewness(self) -> float:
        raise NotSupportedError("Cauchy distribution has no skewness")

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

    def fill_samples(self, values: npt.NDArray[np.float64]) -> None:
        _fill(self._random_source, values, self._location, self._scale)
