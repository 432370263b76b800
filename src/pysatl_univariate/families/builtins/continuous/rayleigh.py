"""
Rayleigh distribution.

Distribution of the norm of a two-dimensional vector of independent
zero-mean normal components with standard deviation σ.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING

import numpy as np

from pysatl_univariate.distributions.distribution import ContinuousDistribution
from pysatl_univariate.distributions.sampling import new_buffer, sample_stream, uniform_positive
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


@parametrization(name="scale")
class RayleighScale(Parametrization):
    """
    Standard parametrization of Rayleigh distribution.

    Parameters
    ----------
    scale : float
        Scale (σ)
    """

    scale: float

    @constraint(description="0 < scale < inf")
    def check_scale_positive(self) -> bool:
        return 0 < self.scale < math.inf


def is_valid_parameter_set(scale: float) -> bool:
    return RayleighScale(scale=scale).is_valid()


def _pdf(scale: float, x: float) -> float:
    if x < 0 or math.isinf(x):
        return 0.0
    z = x / scale
    return z / scale * math.exp(-0.5 * z * z)


def _pdf_ln(scale: float, x: float) -> float:
    if x <= 0 or math.isinf(x):
        return -math.inf
    z = x / scale
    return math.log(x) - 2.0 * math.log(scale) - 0.5 * z * z


def _cdf(scale: float, x: float) -> float:
    if x <= 0:
        return 0.0
    z = x / scale
    return -math.expm1(-0.5 * z * z)


def _inv_cdf(scale: float, p: float) -> float:
    check_probability(p)
    if p == 1.0:
        return math.inf
    return scale * math.sqrt(-2.0 * math.log1p(-p))


def pdf(scale: float, x: float) -> float:
    """``(x/σ²) exp(-x²/(2σ²))`` for ``x >= 0``."""
    RayleighScale(scale=scale).validate()
    return _pdf(scale, x)


def pdf_ln(scale: float, x: float) -> float:
    RayleighScale(scale=scale).validate()
    return _pdf_ln(scale, x)


def cdf(scale: float, x: float) -> float:
    RayleighScale(scale=scale).validate()
    return _cdf(scale, x)


def inv_cdf(scale: float, p: float) -> float:
    RayleighScale(scale=scale).validate()
    return _inv_cdf(scale, p)


def sample_unchecked(rng: np.random.Generator, scale: float) -> float:
    return scale * math.sqrt(-2.0 * math.log(uniform_positive(rng)))


def sample(scale: float, *, rng: np.random.Generator | None = None) -> float:
    RayleighScale(scale=scale).validate()
    return sample_unchecked(resolve_random_source(rng), scale)


def _fill(rng: np.random.Generator, values: npt.NDArray[np.float64], scale: float) -> None:
    rng.random(out=values)
    np.log1p(-values, out=values)
    values *= -2.0
    np.sqrt(values, out=values)
    values *= scale


def fill_samples(
    values: npt.NDArray[np.float64], scale: float, *, rng: np.random.Generator | None = None
) -> None:
    RayleighScale(scale=scale).validate()
    _fill(resolve_random_source(rng), values, scale)


def samples(n: int, scale: float, *, rng: np.random.Generator | None = None) -> FloatArray:
    values = new_buffer(n, np.float64)
    fill_samples(values, scale, rng=rng)
    return values


def iter_samples(scale: float, *, rng: np.random.Generator | None = None) -> Iterator[float]:
    RayleighScale(scale=scale).validate()
    source = resolve_random_source(rng)
    return sample_stream(lambda: sample_unchecked(source, scale))


class Rayleigh(ContinuousDistribution):
    """
    Rayleigh distribution.

    Parameters
    ----------
    scale : float
        Scale σ > 0.
    random_source : numpy.random.Generator, optional
        Generator used for sampling.
    """

    def __init__(self, scale: float, random_source: np.random.Generator | None = None) -> None:
        self._parameters = RayleighScale(scale=scale)
        self._parameters.validate()
        self._scale = scale
        self._random_source = resolve_random_source(random_source)

    def __repr__(self) -> str:
        return f"Rayleigh(scale={self._scale})"

    @property
    def scale(self) -> float:
        return self._scale

    @property
    def support(self) -> ContinuousSupport:
        return ContinuousSupport(0.0)

    @property
    def mean(self) -> float:
        return self._scale * math.sqrt(0.5 * math.pi)

    @property
    def variance(self) -> float:
        return (2.0 - 0.5 * math.pi) * self._scale * self._scale

    @property
    def std_dev(self) -> float:
        return math.sqrt(2.0 - 0.5 * math.pi) * self._scale

    @property
    def entropy(self) -> float:
        return 1.0 + math.log(self._scale / math.sqrt(2.0)) + 0.5 * np.euler_gamma

    @property
    def skewness(self) -> float:
        return 2.0 * math.sqrt(math.pi) * (math.pi - 3.0) / (4.0 - math.pi) ** 1.5

    @property
    def mode(self) -> float:
        return self._scale

    @property
    def median(self) -> float:
        return self._scale * math.sqrt(math.log(4.0))

    def density(self, x: float) -> float:
        return _pdf(self._scale, x)

    def density_ln(self, x: float) -> float:
        return _pdf_ln(self._scale, x)

    def cumulative_distribution(self, x: float) -> float:
        return _cdf(self._scale, x)

    def inverse_cumulative_distribution(self, p: float) -> float:
        return _inv_cdf(self._scale, p)

    def sample(self) -> float:
        return sample_unchecked(self._random_source, self._scale)

    def fill_samples(self, values: npt.NDArray[np.float64]) -> None:
        _fill(self._random_source, values, self._scale)
