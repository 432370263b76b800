"""
Pareto distribution.

Power-law distribution on ``[x_m, inf)`` with scale ``x_m > 0`` and shape
``α > 0``. The mean exists for α > 1, the variance for α > 2 and the
skewness for α > 3.
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
from pysatl_univariate.distributions.sampling import new_buffer, sample_stream, uniform_positive
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


@parametrization(name="scaleShape")
class ParetoScaleShape(Parametrization):
    """
    Standard parametrization of Pareto distribution.

    Parameters
    ----------
    scale : float
        Minimum value (x_m)
    shape : float
        Tail index (α)
    """

    scale: float
    shape: float

    @constraint(description="0 < scale < inf")
    def check_scale_positive(self) -> bool:
        return 0 < self.scale < math.inf

    @constraint(description="0 < shape < inf")
    def check_shape_positive(self) -> bool:
        return 0 < self.shape < math.inf


def is_valid_parameter_set(scale: float, shape: float) -> bool:
    return ParetoScaleShape(scale=scale, shape=shape).is_valid()


def _pdf_ln(scale: float, shape: float, x: float) -> float:
    if x < scale or math.isinf(x):
        return -math.inf
    return math.log(shape) + shape * math.log(scale) - (shape + 1.0) * math.log(x)


def _pdf(scale: float, shape: float, x: float) -> float:
    if x < scale or math.isinf(x):
        return 0.0
    return math.exp(_pdf_ln(scale, shape, x))


def _cdf(scale: float, shape: float, x: float) -> float:
    if x <= scale:
        return 0.0
    return -math.expm1(shape * math.log(scale / x))


def _inv_cdf(scale: float, shape: float, p: float) -> float:
    check_probability(p)
    if p == 1.0:
        return math.inf
    return scale * special.power(1.0 - p, -1.0 / shape)


def pdf(scale: float, shape: float, x: float) -> float:
    """
    Probability density function for Pareto distribution.

    Parameters
    ----------
    scale : float
        Minimum value (x_m), positive
    shape : float
        Tail index (α), positive
    x : float
        Point at which to evaluate the density

    Returns
    -------
    float
        ``α x_m^α / x^(α+1)`` for ``x >= x_m``, 0 otherwise
    """
    ParetoScaleShape(scale=scale, shape=shape).validate()
    return _pdf(scale, shape, x)


def pdf_ln(scale: float, shape: float, x: float) -> float:
    ParetoScaleShape(scale=scale, shape=shape).validate()
    return _pdf_ln(scale, shape, x)


def cdf(scale: float, shape: float, x: float) -> float:
    ParetoScaleShape(scale=scale, shape=shape).validate()
    return _cdf(scale, shape, x)


def inv_cdf(scale: float, shape: float, p: float) -> float:
    ParetoScaleShape(scale=scale, shape=shape).validate()
    return _inv_cdf(scale, shape, p)


def sample_unchecked(rng: np.random.Generator, scale: float, shape: float) -> float:
    return scale * special.power(uniform_positive(rng), -1.0 / shape)


def sample(scale: float, shape: float, *, rng: np.random.Generator | None = None) -> float:
    ParetoScaleShape(scale=scale, shape=shape).validate()
    return sample_unchecked(resolve_random_source(rng), scale, shape)


def _fill(
    rng: np.random.Generator, values: npt.NDArray[np.float64], scale: float, shape: float
) -> None:
    # U(0, 1] keeps the logarithm finite
    rng.random(out=values)
    np.subtract(1.0, values, out=values)
    np.log(values, out=values)
    values *= -1.0 / shape
    np.exp(values, out=values)
    values *= scale


def fill_samples(
    values: npt.NDArray[np.float64],
    scale: float,
    shape: float,
    *,
    rng: np.random.Generator | None = None,
) -> None:
    ParetoScaleShape(scale=scale, shape=shape).validate()
    _fill(resolve_random_source(rng), values, scale, shape)


def samples(
    n: int, scale: float, shape: float, *, rng: np.random.Generator | None = None
) -> FloatArray:
    values = new_buffer(n, np.float64)
    fill_samples(values, scale, shape, rng=rng)
    return values


def iter_samples(
    scale: float, shape: float, *, rng: np.random.Generator | None = None
) -> Iterator[float]:
    ParetoScaleShape(scale=scale, shape=shape).validate()
    source = resolve_random_source(rng)
    return sample_stream(lambda: sample_unchecked(source, scale, shape))


class Pareto(ContinuousDistribution):
    """
    Pareto distribution.

    Parameters
    ----------
    scale : float
        Minimum value x_m > 0.
    shape : float
        Tail index α > 0.
    random_source : numpy.random.Generator, optional
        Generator used for sampling.
    """

    def __init__(
        self, scale: float, shape: float, random_source: np.random.Generator | None = None
    ) -> None:
        self._parameters = ParetoScaleShape(scale=scale, shape=shape)
        self._parameters.validate()
        self._scale = scale
        self._shape = shape
        self._random_source = resolve_random_source(random_source)

    def __repr__(self) -> str:
        return f"Pareto(scale={self._scale}, shape={self._shape})"

    @property
    def scale(self) -> float:
        return self._scale

    @property
    def shape(self) -> float:
        return self._shape

    @property
    def support(self) -> ContinuousSupport:
        return ContinuousSupport(self._scale)

    @property
    def mean(self) -> float:
        if self._shape <= 1.0:
            raise NotSupportedError("Pareto mean is undefined for shape <= 1")
        return self._shape * self._scale / (self._shape - 1.0)

    @property
    def variance(self) -> float:
        """``x_m² α / ((α - 1)² (α - 2))`` for α > 2, ``inf`` otherwise."""
        a = self._shape
        if a <= 2.0:
            return math.inf
        return self._scale * self._scale * a / ((a - 1.0) ** 2 * (a - 2.0))

    @property
    def entropy(self) -> float:
        return math.log(self._scale / self._shape) + 1.0 / self._shape + 1.0

    @property
    def skewness(self) -> float:
        a = self._shape
        if a <= 3.0:
            raise NotSupportedError("Pareto skewness is undefined for shape <= 3")
        return 2.0 * (1.0 + a) / (a - 3.0) * math.sqrt((a - 2.0) / a)

    @property
    def mode(self) -> float:
        return self._scale

    @property
    def median(self) -> float:
        return self._scale * special.power(2.0, 1.0 / self._shape)

    def density(self, x: float) -> float:
        return _pdf(self._scale, self._shape, x)

    def density_ln(self, x: float) -> float:
        return _pdf_ln(self._scale, self._shape, x)

    def cumulative_distribution(self, x: float) -> float:
        return _cdf(self._scale, self._shape, x)

    def inverse_cumulative_distribution(self, p: float) -> float:
        return _inv_cdf(self._scale, self._shape, p)

    def sample(self) -> float:
        return sample_unchecked(self._random_source, self._scale, self._shape)

    def fill_samples(self, values: npt.NDArray[np.float64]) -> None:
        _fill(self._random_source, values, self._scale, self._shape)
