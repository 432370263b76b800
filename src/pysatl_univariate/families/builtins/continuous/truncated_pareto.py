"""
Truncated Pareto distribution.

Pareto distribution with scale S and shape α restricted to ``[S, T]``:

    f(x) = α S^α x^(-α-1) / (1 - (S/T)^α),   S ≤ x ≤ T

All moments exist because the support is bounded.
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


@parametrization(name="scaleShapeTruncation")
class TruncatedParetoScaleShapeTruncation(Parametrization):
    """
    Standard parametrization of truncated Pareto distribution.

    Parameters
    ----------
    scale : float
        Lower bound of the support (S)
    shape : float
        Tail index (α)
    truncation : float
        Upper bound of the support (T)
    """

    scale: float
    shape: float
    truncation: float

    @constraint(description="0 < scale < inf")
    def check_scale_positive(self) -> bool:
        return 0 < self.scale < math.inf

    @constraint(description="0 < shape < inf")
    def check_shape_positive(self) -> bool:
        return 0 < self.shape < math.inf

    @constraint(description="scale < truncation < inf")
    def check_truncation(self) -> bool:
        return self.scale < self.truncation < math.inf


def is_valid_parameter_set(scale: float, shape: float, truncation: float) -> bool:
    return TruncatedParetoScaleShapeTruncation(
        scale=scale, shape=shape, truncation=truncation
    ).is_valid()


def _mass(scale: float, shape: float, truncation: float) -> float:
    # 1 - (S/T)^α
    return -math.expm1(shape * math.log(scale / truncation))


def _pdf_ln(scale: float, shape: float, truncation: float, x: float) -> float:
    if x < scale or x > truncation:
        return -math.inf
    return (
        math.log(shape)
        + shape * math.log(scale)
        - (shape + 1.0) * math.log(x)
        - math.log(_mass(scale, shape, truncation))
    )


def _pdf(scale: float, shape: float, truncation: float, x: float) -> float:
    if x < scale or x > truncation:
        return 0.0
    return math.exp(_pdf_ln(scale, shape, truncation, x))


def _cdf(scale: float, shape: float, truncation: float, x: float) -> float:
    if x <= scale:
        return 0.0
    if x >= truncation:
        return 1.0
    return -math.expm1(shape * math.log(scale / x)) / _mass(scale, shape, truncation)


def _inv_cdf(scale: float, shape: float, truncation: float, p: float) -> float:
    check_probability(p)
    if p == 0.0:
        return scale
    if p == 1.0:
        return truncation
    x = scale * (1.0 - p * _mass(scale, shape, truncation)) ** (-1.0 / shape)
    return min(truncation, max(scale, x))


def _moment(scale: float, shape: float, truncation: float, n: int) -> float:
    """Raw moment ``E[X^n]``."""
    mass = _mass(scale, shape, truncation)
    if math.isclose(shape, n):
        return shape * scale**n * math.log(truncation / scale) / mass
    ratio = -math.expm1((shape - n) * math.log(scale / truncation))
    return shape * scale**n / (shape - n) * ratio / mass


def pdf(scale: float, shape: float, truncation: float, x: float) -> float:
    TruncatedParetoScaleShapeTruncation(scale=scale, shape=shape, truncation=truncation).validate()
    return _pdf(scale, shape, truncation, x)


def pdf_ln(scale: float, shape: float, truncation: float, x: float) -> float:
    TruncatedParetoScaleShapeTruncation(scale=scale, shape=shape, truncation=truncation).validate()
    return _pdf_ln(scale, shape, truncation, x)


def cdf(scale: float, shape: float, truncation: float, x: float) -> float:
    TruncatedParetoScaleShapeTruncation(scale=scale, shape=shape, truncation=truncation).validate()
    return _cdf(scale, shape, truncation, x)


def inv_cdf(scale: float, shape: float, truncation: float, p: float) -> float:
    """Quantile ``S (1 - p(1 - (S/T)^α))^(-1/α)``."""
    TruncatedParetoScaleShapeTruncation(scale=scale, shape=shape, truncation=truncation).validate()
    return _inv_cdf(scale, shape, truncation, p)


def sample_unchecked(
    rng: np.random.Generator, scale: float, shape: float, truncation: float
) -> float:
    return _inv_cdf(scale, shape, truncation, float(rng.random()))


def sample(
    scale: float, shape: float, truncation: float, *, rng: np.random.Generator | None = None
) -> float:
    TruncatedParetoScaleShapeTruncation(scale=scale, shape=shape, truncation=truncation).validate()
    return sample_unchecked(resolve_random_source(rng), scale, shape, truncation)


def _fill(
    rng: np.random.Generator,
    values: npt.NDArray[np.float64],
    scale: float,
    shape: float,
    truncation: float,
) -> None:
    rng.random(out=values)
    values *= -_mass(scale, shape, truncation)
    values += 1.0
    np.power(values, -1.0 / shape, out=values)
    values *= scale
    np.clip(values, scale, truncation, out=values)


def fill_samples(
    values: npt.NDArray[np.float64],
    scale: float,
    shape: float,
    truncation: float,
    *,
    rng: np.random.Generator | None = None,
) -> None:
    TruncatedParetoScaleShapeTruncation(scale=scale, shape=shape, truncation=truncation).validate()
    _fill(resolve_random_source(rng), values, scale, shape, truncation)


def samples(
    n: int,
    scale: float,
    shape: float,
    truncation: float,
    *,
    rng: np.random.Generator | None = None,
) -> FloatArray:
    values = new_buffer(n, np.float64)
    fill_samples(values, scale, shape, truncation, rng=rng)
    return values


def iter_samples(
    scale: float, shape: float, truncation: float, *, rng: np.random.Generator | None = None
) -> Iterator[float]:
    TruncatedParetoScaleShapeTruncation(scale=scale, shape=shape, truncation=truncation).validate()
    source = resolve_random_source(rng)
    return sample_stream(lambda: sample_unchecked(source, scale, shape, truncation))


class TruncatedPareto(ContinuousDistribution):
    """
    Truncated Pareto distribution.

    Parameters
    ----------
    scale : float
        Lower bound S > 0 of the support.
    shape : float
        Tail index α > 0.
    truncation : float
        Upper bound T > S of the support.
    random_source : numpy.random.Generator, optional
        Generator used for sampling.
    """

    def __init__(
        self,
        scale: float,
        shape: float,
        truncation: float,
        random_source: np.random.Generator | None = None,
    ) -> None:
        self._parameters = TruncatedParetoScaleShapeTruncation(
            scale=scale, shape=shape, truncation=truncation
        )
        self._parameters.validate()
        self._scale = scale
        self._shape = shape
        self._truncation = truncation
        self._random_source = resolve_random_source(random_source)

    def __repr__(self) -> str:
        return (
            f"TruncatedPareto(scale={self._scale}, shape={self._shape}, "
            f"truncation={self._truncation})"
        )

    @property
    def scale(self) -> float:
        return self._scale

    @property
    def shape(self) -> float:
        return self._shape

    @property
    def truncation(self) -> float:
        return self._truncation

    @property
    def support(self) -> ContinuousSupport:
        return ContinuousSupport(self._scale, self._truncation)

    def moment(self, n: int) -> float:
        """Raw moment ``E[X^n]``."""
        return _moment(self._scale, self._shape, self._truncation, n)

    @property
    def mean(self) -> float:
        return self.moment(1)

    @property
    def variance(self) -> float:
        mean = self.mean
        return self.moment(2) - mean * mean

    @property
    def entropy(self) -> float:
        raise NotSupportedError("Truncated Pareto entropy is not implemented")

    @property
    def skewness(self) -> float:
        mean = self.mean
        variance = self.variance
        third = self.moment(3)
        return (third - 3.0 * mean * variance - mean**3) / variance**1.5

    @property
    def mode(self) -> float:
        return self._scale

    @property
    def median(self) -> float:
        return _inv_cdf(self._scale, self._shape, self._truncation, 0.5)

    def density(self, x: float) -> float:
        return _pdf(self._scale, self._shape, self._truncation, x)

    def density_ln(self, x: float) -> float:
        return _pdf_ln(self._scale, self._shape, self._truncation, x)

    def cumulative_distribution(self, x: float) -> float:
        return _cdf(self._scale, self._shape, self._truncation, x)

    def inverse_cumulative_distribution(self, p: float) -> float:
        return _inv_cdf(self._scale, self._shape, self._truncation, p)

    def sample(self) -> float:
        return sample_unchecked(self._random_source, self._scale, self._shape, self._truncation)

    def fill_samples(self, values: npt.NDArray[np.float64]) -> None:
        _fill(self._random_source, values, self._scale, self._shape, self._truncation)
