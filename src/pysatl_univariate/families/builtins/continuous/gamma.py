"""
Gamma distribution.

Gamma distribution with shape k ≥ 0 and rate θ ≥ 0.

Probability density function:
    f(x) = θ^k * x^(k-1) * exp(-θx) / Γ(k), x ≥ 0

Degenerate parameters are resolved before the general formula, in this order:

1. ``rate = inf`` is the point mass at ``shape``.
2. ``shape = rate = 0`` has no mass anywhere; every statistic is NaN.
3. ``shape = 0`` with a positive rate is the point mass at 0.
4. ``shape = 1`` is the exponential distribution with the given rate.
5. Shapes above ``numeric_config().gamma_log_space_threshold`` are evaluated
   in log space.

Samples are drawn with the Marsaglia-Tsang squeeze method.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING

import numpy as np

from pysatl_univariate import special
from pysatl_univariate.config import numeric_config
from pysatl_univariate.distributions.distribution import ContinuousDistribution
from pysatl_univariate.distributions.sampling import (
    fill_sequentially,
    new_buffer,
    sample_stream,
    uniform_positive,
)
from pysatl_univariate.distributions.support import ContinuousSupport
from pysatl_univariate.errors import NotSupportedError, check_probability
from pysatl_univariate.families.builtins.continuous import normal
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
class GammaShapeRate(Parametrization):
    """
    Standard parametrization of gamma distribution.

    Parameters
    ----------
    shape : float
        Shape parameter (k)
    rate : float
        Rate parameter (θ), inverse scale
    """

    shape: float
    rate: float

    @constraint(description="shape >= 0")
    def check_shape_non_negative(self) -> bool:
        return self.shape >= 0

    @constraint(description="rate >= 0")
    def check_rate_non_negative(self) -> bool:
        return self.rate >= 0


@parametrization(name="shapeScale")
class GammaShapeScale(Parametrization):
    """
    Shape-scale parametrization of gamma distribution.

    Parameters
    ----------
    shape : float
        Shape parameter (k)
    scale : float
        Scale parameter, 1/θ
    """

    shape: float
    scale: float

    @constraint(description="shape >= 0")
    def check_shape_non_negative(self) -> bool:
        return self.shape >= 0

    @constraint(description="scale > 0")
    def check_scale_positive(self) -> bool:
        return self.scale > 0

    def transform_to_base_parametrization(self) -> Parametrization:
        return GammaShapeRate(shape=self.shape, rate=1.0 / self.scale)


def is_valid_parameter_set(shape: float, rate: float) -> bool:
    return GammaShapeRate(shape=shape, rate=rate).is_valid()


def pdf_unchecked(shape: float, rate: float, x: float) -> float:
    """Density for a parameter set assumed valid."""
    if math.isinf(rate):
        return math.inf if x == shape else 0.0
    if shape == 0.0 and rate == 0.0:
        return 0.0
    if shape == 0.0:
        return math.inf if x == 0.0 else 0.0
    if x < 0:
        return 0.0
    if shape == 1.0:
        return rate * math.exp(-rate * x)
    if shape > numeric_config().gamma_log_space_threshold:
        return math.exp(pdf_ln_unchecked(shape, rate, x))

    return (
        special.power(rate, shape)
        * special.power(x, shape - 1.0)
        * math.exp(-rate * x)
        / special.gamma(shape)
    )


def pdf_ln_unchecked(shape: float, rate: float, x: float) -> float:
    """Log density for a parameter set assumed valid."""
    if math.isinf(rate):
        return math.inf if x == shape else -math.inf
    if shape == 0.0 and rate == 0.0:
        return -math.inf
    if shape == 0.0:
        return math.inf if x == 0.0 else -math.inf
    if x < 0 or rate == 0.0:
        return -math.inf
    if shape == 1.0:
        return math.log(rate) - rate * x

    return (
        shape * math.log(rate)
        + special.xlogy(shape - 1.0, x)
        - rate * x
        - special.gamma_ln(shape)
    )


def cdf_unchecked(shape: float, rate: float, x: float) -> float:
    """Cumulative distribution for a parameter set assumed valid."""
    if math.isinf(rate):
        return 1.0 if x >= shape else 0.0
    if shape == 0.0 and rate == 0.0:
        return 0.0
    if shape == 0.0:
        return 1.0 if x >= 0.0 else 0.0
    if x <= 0:
        return 0.0
    if math.isinf(x):
        return 1.0
    return special.gamma_lower_regularized(shape, x * rate)


def inv_cdf_unchecked(shape: float, rate: float, p: float) -> float:
    """Quantile for a parameter set assumed valid."""
    check_probability(p)
    if math.isinf(rate):
        return shape
    if rate == 0.0:
        return math.inf if p > 0 else 0.0
    if shape == 0.0:
        return 0.0
    return special.gamma_lower_regularized_inv(shape, p) / rate


def pdf(shape: float, rate: float, x: float) -> float:
    """
    Probability density function for gamma distribution.

    Parameters
    ----------
    shape : float
        Shape parameter (k), non-negative
    rate : float
        Rate parameter (θ), non-negative
    x : float
        Point at which to evaluate the density

    Returns
    -------
    float
        Density at ``x``, 0 outside the support

    Raises
    ------
    InvalidParameterError
        If the parameter set is invalid
    """
    GammaShapeRate(shape=shape, rate=rate).validate()
    return pdf_unchecked(shape, rate, x)


def pdf_ln(shape: float, rate: float, x: float) -> float:
    """Log density from log-gamma terms, finite where ``pdf`` under- or overflows."""
    GammaShapeRate(shape=shape, rate=rate).validate()
    return pdf_ln_unchecked(shape, rate, x)


def cdf(shape: float, rate: float, x: float) -> float:
    """Cumulative distribution function ``P(k, θx)``."""
    GammaShapeRate(shape=shape, rate=rate).validate()
    return cdf_unchecked(shape, rate, x)


def inv_cdf(shape: float, rate: float, p: float) -> float:
    """Quantile function via the inverse regularized lower incomplete gamma."""
    GammaShapeRate(shape=shape, rate=rate).validate()
    return inv_cdf_unchecked(shape, rate, p)


def sample_unchecked(rng: np.random.Generator, shape: float, rate: float) -> float:
    """
    Draw one variate with the Marsaglia-Tsang method.

    The parameters are assumed valid. For ``shape < 1`` the variate is drawn
    with shape ``shape + 1`` and multiplied by ``U^(1/shape)``.
    """
    if math.isinf(rate):
        return shape
    if shape == 0.0:
        return 0.0
    if rate == 0.0:
        return math.inf

    a = shape
    alphafix = 1.0
    if shape < 1.0:
        a = shape + 1.0
        alphafix = float(rng.random()) ** (1.0 / shape)

    d = a - 1.0 / 3.0
    c = 1.0 / math.sqrt(9.0 * d)
    while True:
        x = normal.sample_unchecked(rng, 0.0, 1.0)
        v = 1.0 + c * x
        while v <= 0.0:
            x = normal.sample_unchecked(rng, 0.0, 1.0)
            v = 1.0 + c * x

        v = v * v * v
        u = uniform_positive(rng)
        x = x * x
        if u < 1.0 - 0.0331 * x * x:
            return alphafix * d * v / rate
        if math.log(u) < 0.5 * x + d * (1.0 - v + math.log(v)):
            return alphafix * d * v / rate


def sample(shape: float, rate: float, *, rng: np.random.Generator | None = None) -> float:
    GammaShapeRate(shape=shape, rate=rate).validate()
    return sample_unchecked(resolve_random_source(rng), shape, rate)


def fill_samples(
    values: npt.NDArray[np.float64],
    shape: float,
    rate: float,
    *,
    rng: np.random.Generator | None = None,
) -> None:
    GammaShapeRate(shape=shape, rate=rate).validate()
    source = resolve_random_source(rng)
    fill_sequentially(values, lambda: sample_unchecked(source, shape, rate))


def samples(
    n: int, shape: float, rate: float, *, rng: np.random.Generator | None = None
) -> FloatArray:
    values = new_buffer(n, np.float64)
    fill_samples(values, shape, rate, rng=rng)
    return values


def iter_samples(
    shape: float, rate: float, *, rng: np.random.Generator | None = None
) -> Iterator[float]:
    GammaShapeRate(shape=shape, rate=rate).validate()
    source = resolve_random_source(rng)
    return sample_stream(lambda: sample_unchecked(source, shape, rate))


class Gamma(ContinuousDistribution):
    """
    Gamma distribution.

    Parameters
    ----------
    shape : float
        Shape k ≥ 0.
    rate : float
        Rate θ ≥ 0; ``inf`` gives the point mass at ``shape``.
    random_source : numpy.random.Generator, optional
        Generator used for sampling.

    Raises
    ------
    InvalidParameterError
        If a parameter is negative or NaN.
    """

    def __init__(
        self, shape: float, rate: float, random_source: np.random.Generator | None = None
    ) -> None:
        self._parameters = GammaShapeRate(shape=shape, rate=rate)
        self._parameters.validate()
        self._shape = shape
        self._rate = rate
        self._random_source = resolve_random_source(random_source)

    @classmethod
    def with_shape_scale(
        cls, shape: float, scale: float, random_source: np.random.Generator | None = None
    ) -> Gamma:
        """Construct from shape and scale 1/θ."""
        return cls.from_parametrization(GammaShapeScale(shape=shape, scale=scale), random_source)

    def __repr__(self) -> str:
        return f"Gamma(shape={self._shape}, rate={self._rate})"

    @property
    def shape(self) -> float:
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

    def _is_point_mass(self) -> bool:
        return math.isinf(self._rate) or (self._shape == 0.0 and self._rate > 0.0)

    def _is_void(self) -> bool:
        return self._shape == 0.0 and self._rate == 0.0

    @property
    def mean(self) -> float:
        if self._is_point_mass():
            return self._shape
        if self._is_void():
            return math.nan
        if self._rate == 0.0:
            return math.inf
        return self._shape / self._rate

    @property
    def variance(self) -> float:
        if self._is_point_mass():
            return 0.0
        if self._is_void():
            return math.nan
        if self._rate == 0.0:
            return math.inf
        return self._shape / (self._rate * self._rate)

    @property
    def std_dev(self) -> float:
        if self._is_point_mass():
            return 0.0
        if self._is_void():
            return math.nan
        if self._rate == 0.0:
            return math.inf
        return math.sqrt(self._shape) / self._rate

    @property
    def entropy(self) -> float:
        if self._is_point_mass():
            return 0.0
        if self._is_void():
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
        if self._is_point_mass():
            return 0.0
        if self._is_void():
            return math.nan
        return 2.0 / math.sqrt(self._shape)

    @property
    def mode(self) -> float:
        if self._is_point_mass():
            return self._shape
        if self._is_void():
            return math.nan
        if self._shape <= 1.0:
            return 0.0
        if self._rate == 0.0:
            return math.inf
        return (self._shape - 1.0) / self._rate

    @property
    def median(self) -> float:
        raise NotSupportedError("Gamma median has no closed form")

    def density(self, x: float) -> float:
        return pdf_unchecked(self._shape, self._rate, x)

    def density_ln(self, x: float) -> float:
        return pdf_ln_unchecked(self._shape, self._rate, x)

    def cumulative_distribution(self, x: float) -> float:
        return cdf_unchecked(self._shape, self._rate, x)

    def inverse_cumulative_distribution(self, p: float) -> float:
        return inv_cdf_unchecked(self._shape, self._rate, p)

    def sample(self) -> float:
        return sample_unchecked(self._random_source, self._shape, self._rate)
