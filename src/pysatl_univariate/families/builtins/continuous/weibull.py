"""
Weibull distribution.

Distribution on ``[0, inf)`` with shape k > 0 and scale λ > 0:

    F(x) = 1 - exp(-(x/λ)^k)

``k = 1`` is the exponential distribution with rate 1/λ and ``k = 2`` the
Rayleigh distribution with scale ``λ/√2``.
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

_ESTIMATE_TOLERANCE = 1e-4
_ESTIMATE_INITIAL_SHAPE = 10.0


@parametrization(name="shapeScale")
class WeibullShapeScale(Parametrization):
    """
    Standard parametrization of Weibull distribution.

    Parameters
    ----------
    shape : float
        Shape (k)
    scale : float
        Scale (λ)
    """

    shape: float
    scale: float

    @constraint(description="0 < shape < inf")
    def check_shape_positive(self) -> bool:
        return 0 < self.shape < math.inf

    @constraint(description="0 < scale < inf")
    def check_scale_positive(self) -> bool:
        return 0 < self.scale < math.inf


def is_valid_parameter_set(shape: float, scale: float) -> bool:
    return WeibullShapeScale(shape=shape, scale=scale).is_valid()


def _pdf(shape: float, scale: float, x: float) -> float:
    if x < 0 or math.isinf(x):
        return 0.0
    if x == 0 and shape == 1.0:
        return shape / scale
    z = x / scale
    zk = special.power(z, shape)
    return shape / scale * special.power(z, shape - 1.0) * math.exp(-zk)


def _pdf_ln(shape: float, scale: float, x: float) -> float:
    if x < 0 or math.isinf(x):
        return -math.inf
    if x == 0:
        if shape == 1.0:
            return math.log(shape / scale)
        return math.inf if shape < 1.0 else -math.inf
    z = x / scale
    return math.log(shape / scale) + (shape - 1.0) * math.log(z) - special.power(z, shape)


def _cdf(shape: float, scale: float, x: float) -> float:
    if x <= 0:
        return 0.0
    return -math.expm1(-special.power(x / scale, shape))


def _inv_cdf(shape: float, scale: float, p: float) -> float:
    check_probability(p)
    if p == 1.0:
        return math.inf
    return scale * special.power(-math.log1p(-p), 1.0 / shape)


def pdf(shape: float, scale: float, x: float) -> float:
    """
    Probability density function for Weibull distribution.

    Parameters
    ----------
    shape : float
        Shape (k), positive
    scale : float
        Scale (λ), positive
    x : float
        Point at which to evaluate the density

    Returns
    -------
    float
        ``(k/λ)(x/λ)^(k-1) exp(-(x/λ)^k)`` for ``x >= 0``, 0 otherwise
    """
    WeibullShapeScale(shape=shape, scale=scale).validate()
    return _pdf(shape, scale, x)


def pdf_ln(shape: float, scale: float, x: float) -> float:
    WeibullShapeScale(shape=shape, scale=scale).validate()
    return _pdf_ln(shape, scale, x)


def cdf(shape: float, scale: float, x: float) -> float:
    WeibullShapeScale(shape=shape, scale=scale).validate()
    return _cdf(shape, scale, x)


def inv_cdf(shape: float, scale: float, p: float) -> float:
    WeibullShapeScale(shape=shape, scale=scale).validate()
    return _inv_cdf(shape, scale, p)


def sample_unchecked(rng: np.random.Generator, shape: float, scale: float) -> float:
    return scale * special.power(-math.log(uniform_positive(rng)), 1.0 / shape)


def sample(shape: float, scale: float, *, rng: np.random.Generator | None = None) -> float:
    WeibullShapeScale(shape=shape, scale=scale).validate()
    return sample_unchecked(resolve_random_source(rng), shape, scale)


def _fill(
    rng: np.random.Generator, values: npt.NDArray[np.float64], shape: float, scale: float
) -> None:
    rng.random(out=values)
    np.log1p(-values, out=values)
    np.negative(values, out=values)
    with np.errstate(over="ignore"):
        np.power(values, 1.0 / shape, out=values)
    values *= scale


def fill_samples(
    values: npt.NDArray[np.float64],
    shape: float,
    scale: float,
    *,
    rng: np.random.Generator | None = None,
) -> None:
    WeibullShapeScale(shape=shape, scale=scale).validate()
    _fill(resolve_random_source(rng), values, shape, scale)


def samples(
    n: int, shape: float, scale: float, *, rng: np.random.Generator | None = None
) -> FloatArray:
    values = new_buffer(n, np.float64)
    fill_samples(values, shape, scale, rng=rng)
    return values


def iter_samples(
    shape: float, scale: float, *, rng: np.random.Generator | None = None
) -> Iterator[float]:
    WeibullShapeScale(shape=shape, scale=scale).validate()
    source = resolve_random_source(rng)
    return sample_stream(lambda: sample_unchecked(source, shape, scale))


def _estimate_shape(x: npt.NDArray[np.float64]) -> float:
    """
    Maximum likelihood shape by fixed-point iteration.

    Each step averages the current shape with ``Q = n s2 / (n s3 - s1 s2)``
    where ``s1 = Σ ln x``, ``s2 = Σ x^k`` and ``s3 = Σ x^k ln x``.
    """
    n = x.shape[0]
    log_x = np.log(x)
    s1 = float(np.sum(log_x))
    shape = _ESTIMATE_INITIAL_SHAPE
    previous = math.inf
    while abs(shape - previous) >= _ESTIMATE_TOLERANCE:
        powered = np.power(x, shape)
        s2 = float(np.sum(powered))
        s3 = float(np.sum(powered * log_x))
        previous = shape
        shape = 0.5 * (shape + n * s2 / (n * s3 - s1 * s2))
    return shape


class Weibull(ContinuousDistribution):
    """
    Weibull distribution.

    Parameters
    ----------
    shape : float
        Shape k > 0.
    scale : float
        Scale λ > 0.
    random_source : numpy.random.Generator, optional
        Generator used for sampling.
    """

    def __init__(
        self, shape: float, scale: float, random_source: np.random.Generator | None = None
    ) -> None:
        self._parameters = WeibullShapeScale(shape=shape, scale=scale)
        self._parameters.validate()
        self._shape = shape
        self._scale = scale
        self._random_source = resolve_random_source(random_source)

    @classmethod
    def estimate(
        cls, data: npt.ArrayLike, random_source: np.random.Generator | None = None
    ) -> Weibull:
        """
        Maximum likelihood estimate from observations.

        Non-positive observations are ignored. The input is not modified.

        Parameters
        ----------
        data : array_like
            Observations.
        random_source : numpy.random.Generator, optional
            Generator attached to the estimated distribution.

        Raises
        ------
        ValueError
            If fewer than two positive observations are given.
        """
        x = np.asarray(data, dtype=np.float64)
        x = x[x > 0]
        if x.shape[0] <= 1:
            raise ValueError("Weibull estimation requires at least two positive observations")
        shape = _estimate_shape(x)
        scale = float(np.mean(np.power(x, shape))) ** (1.0 / shape)
        return cls(shape, scale, random_source)

    def __repr__(self) -> str:
        return f"Weibull(shape={self._shape}, scale={self._scale})"

    @property
    def shape(self) -> float:
        return self._shape

    @property
    def scale(self) -> float:
        return self._scale

    @property
    def support(self) -> ContinuousSupport:
        return ContinuousSupport(0.0)

    @property
    def mean(self) -> float:
        return self._scale * special.gamma(1.0 + 1.0 / self._shape)

    @property
    def variance(self) -> float:
        mean = self.mean
        return self._scale * self._scale * special.gamma(1.0 + 2.0 / self._shape) - mean * mean

    @property
    def entropy(self) -> float:
        k = self._shape
        return np.euler_gamma * (1.0 - 1.0 / k) + math.log(self._scale / k) + 1.0

    @property
    def skewness(self) -> float:
        mean = self.mean
        variance = self.variance
        third = self._scale**3 * special.gamma(1.0 + 3.0 / self._shape)
        return (third - 3.0 * variance * mean - mean**3) / variance**1.5

    @property
    def mode(self) -> float:
        k = self._shape
        if k <= 1.0:
            return 0.0
        return self._scale * ((k - 1.0) / k) ** (1.0 / k)

    @property
    def median(self) -> float:
        return self._scale * math.log(2.0) ** (1.0 / self._shape)

    def density(self, x: float) -> float:
        return _pdf(self._shape, self._scale, x)

    def density_ln(self, x: float) -> float:
        return _pdf_ln(self._shape, self._scale, x)

    def cumulative_distribution(self, x: float) -> float:
        return _cdf(self._shape, self._scale, x)

    def inverse_cumulative_distribution(self, p: float) -> float:
        return _inv_cdf(self._shape, self._scale, p)

    def sample(self) -> float:
        return sample_unchecked(self._random_source, self._shape, self._scale)

    def fill_samples(self, values: npt.NDArray[np.float64]) -> None:
        _fill(self._random_source, values, self._shape, self._scale)
