"""
Exponential distribution.

Contains the exponential distribution with rate λ ≥ 0.

Probability density function:
    f(x) = λ * exp(-λx), x ≥ 0

A zero rate puts all mass at infinity; an infinite rate is the point mass
at 0.
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


@parametrization(name="rate")
class ExponentialRate(Parametrization):
    """
    Rate parametrization of exponential distribution.

    Parameters
    ----------
    rate : float
        Rate parameter (λ)
    """

    rate: float

    @constraint(description="rate >= 0")
    def check_rate_non_negative(self) -> bool:
        return self.rate >= 0


@parametrization(name="scale")
class ExponentialScale(Parametrization):
    """
    Scale parametrization of exponential distribution.

    Parameters
    ----------
    scale : float
        Scale parameter (mean), 1/λ
    """

    scale: float

    @constraint(description="scale > 0")
    def check_scale_positive(self) -> bool:
        return self.scale > 0

    def transform_to_base_parametrization(self) -> Parametrization:
        return ExponentialRate(rate=1.0 / self.scale)


def is_valid_parameter_set(rate: float) -> bool:
    return ExponentialRate(rate=rate).is_valid()


def _pdf(rate: float, x: float) -> float:
    if x < 0:
        return 0.0
    if math.isinf(rate):
        return math.inf if x == 0 else 0.0
    return rate * math.exp(-rate * x)


def _pdf_ln(rate: float, x: float) -> float:
    if x < 0 or rate == 0:
        return -math.inf
    if math.isinf(rate):
        return math.inf if x == 0 else -math.inf
    return math.log(rate) - rate * x


def _cdf(rate: float, x: float) -> float:
    if x < 0:
        return 0.0
    if math.isinf(rate):
        return 1.0
    return -math.expm1(-rate * x)


def _inv_cdf(rate: float, p: float) -> float:
    check_probability(p)
    if p == 1.0:
        return math.inf
    if rate == 0:
        return math.inf if p > 0 else 0.0
    return -math.log1p(-p) / rate


def pdf(rate: float, x: float) -> float:
    """
    Probability density function for exponential distribution.

    Parameters
    ----------
    rate : float
        Rate parameter (λ), non-negative
    x : float
        Point at which to evaluate the density

    Returns
    -------
    float
        Density at ``x``, 0 for negative ``x``
    """
    ExponentialRate(rate=rate).validate()
    return _pdf(rate, x)


def pdf_ln(rate: float, x: float) -> float:
    ExponentialRate(rate=rate).validate()
    return _pdf_ln(rate, x)


def cdf(rate: float, x: float) -> float:
    """Cumulative distribution function ``1 - exp(-λx)``."""
    ExponentialRate(rate=rate).validate()
    return _cdf(rate, x)


def inv_cdf(rate: float, p: float) -> float:
    """Quantile function ``-ln(1 - p) / λ``."""
    ExponentialRate(rate=rate).validate()
    return _inv_cdf(rate, p)


def sample_unchecked(rng: np.random.Generator, rate: float) -> float:
    """Draw one variate; the rate is assumed valid."""
    if rate == 0:
        return math.inf
    return -math.log(uniform_positive(rng)) / rate


def _fill(rng: np.random.Generator, values: npt.NDArray[np.float64], rate: float) -> None:
    if rate == 0:
        values.fill(math.inf)
        return
    values[:] = -np.log1p(-rng.random(values.shape[0])) / rate


def sample(rate: float, *, rng: np.random.Generator | None = None) -> float:
    ExponentialRate(rate=rate).validate()
    return sample_unchecked(resolve_random_source(rng), rate)


def fill_samples(
    values: npt.NDArray[np.float64], rate: float, *, rng: np.random.Generator | None = None
) -> None:
    ExponentialRate(rate=rate).validate()
    _fill(resolve_random_source(rng), values, rate)


def samples(n: int, rate: float, *, rng: np.random.Generator | None = None) -> FloatArray:
    values = new_buffer(n, np.float64)
    fill_samples(values, rate, rng=rng)
    return values


def iter_samples(rate: float, *, rng: np.random.Generator | None = None) -> Iterator[float]:
    ExponentialRate(rate=rate).validate()
    source = resolve_random_source(rng)
    return sample_stream(lambda: sample_unchecked(source, rate))


class Exponential(ContinuousDistribution):
    """
    Exponential distribution.

    Parameters
    ----------
    rate : float, default=1.0
        Rate λ ≥ 0.
    random_source : numpy.random.Generator, optional
        Generator used for sampling.
    """

    def __init__(self, rate: float = 1.0, random_source: np.random.Generator | None = None) -> None:
        self._parameters = ExponentialRate(rate=rate)
        self._parameters.validate()
        self._rate = rate
        self._random_source = resolve_random_source(random_source)

    @classmethod
    def with_scale(
        cls, scale: float, random_source: np.random.Generator | None = None
    ) -> Exponential:
        """Construct from the scale (mean) 1/λ."""
        return cls.from_parametrization(ExponentialScale(scale=scale), random_source)

    def __repr__(self) -> str:
        return f"Exponential(rate={self._rate})"

    @property
    def rate(self) -> float:
        return self._rate

    @property
    def support(self) -> ContinuousSupport:
        return ContinuousSupport(0.0)

    @property
    def mean(self) -> float:
        return 1.0 / self._rate if self._rate > 0 else math.inf

    @property
    def variance(self) -> float:
        return 1.0 / (self._rate * self._rate) if self._rate > 0 else math.inf

    @property
    def std_dev(self) -> float:
        return self.mean

    @property
    def entropy(self) -> float:
        if self._rate == 0:
            return math.inf
        return 1.0 - math.log(self._rate)

    @property
    def skewness(self) -> float:
        return 2.0

    @property
    def mode(self) -> float:
        return 0.0

    @property
    def median(self) -> float:
        return math.log(2.0) / self._rate if self._rate > 0 else math.inf

    def density(self, x: float) -> float:
        return _pdf(self._rate, x)

    def density_ln(self, x: float) -> float:
        return _pdf_ln(self._rate, x)

    def cumulative_distribution(self, x: float) -> float:
        return _cdf(self._rate, x)

    def inverse_cumulative_distribution(self, p: float) -> float:
        return _inv_cdf(self._rate, p)

    def sample(self) -> float:
        return sample_unchecked(self._random_source, self._rate)

    def fill_samples(self, values: npt.NDArray[np.float64]) -> None:
        _fill(self._random_source, values, self._rate)
