"""
Logistic distribution.

Location-scale distribution whose CDF is the logistic function
``1 / (1 + exp(-(x - μ)/s))``. The density and the CDF are evaluated through
``exp(-|z|)`` so neither overflows in the tails. Samples are drawn by
inversion.
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


@parametrization(name="meanScale")
class LogisticMeanScale(Parametrization):
    """
    Standard parametrization of logistic distribution.

    Parameters
    ----------
    mean : float
        Mean (μ)
    scale : float
        Scale (s)
    """

    mean: float
    scale: float

    @constraint(description="scale > 0")
    def check_scale_positive(self) -> bool:
        return self.scale > 0

    @constraint(description="mean is not NaN")
    def check_mean_not_nan(self) -> bool:
        return not math.isnan(self.mean)


@parametrization(name="meanStdDev")
class LogisticMeanStdDev(Parametrization):
    mean: float
    std_dev: float

    @constraint(description="std_dev > 0")
    def check_std_dev_positive(self) -> bool:
        return self.std_dev > 0

    @constraint(description="mean is not NaN")
    def check_mean_not_nan(self) -> bool:
        return not math.isnan(self.mean)

    def transform_to_base_parametrization(self) -> Parametrization:
        return LogisticMeanScale(mean=self.mean, scale=math.sqrt(3.0) * self.std_dev / math.pi)


@parametrization(name="meanVariance")
class LogisticMeanVariance(Parametrization):
    mean: float
    variance: float

    @constraint(description="variance > 0")
    def check_variance_positive(self) -> bool:
        return self.variance > 0

    @constraint(description="mean is not NaN")
    def check_mean_not_nan(self) -> bool:
        return not math.isnan(self.mean)

    def transform_to_base_parametrization(self) -> Parametrization:
        return LogisticMeanStdDev(
            mean=self.mean, std_dev=math.sqrt(self.variance)
        ).transform_to_base_parametrization()


@parametrization(name="meanPrecision")
class LogisticMeanPrecision(Parametrization):
    mean: float
    precision: float

    @constraint(description="0 < precision < inf")
    def check_precision_positive(self) -> bool:
        return 0 < self.precision < math.inf

    @constraint(description="mean is not NaN")
    def check_mean_not_nan(self) -> bool:
        return not math.isnan(self.mean)

    def transform_to_base_parametrization(self) -> Parametrization:
        return LogisticMeanVariance(
            mean=self.mean, variance=1.0 / self.precision
        ).transform_to_base_parametrization()


def is_valid_parameter_set(mean: float, scale: float) -> bool:
    return LogisticMeanScale(mean=mean, scale=scale).is_valid()


def _pdf(mean: float, scale: float, x: float) -> float:
    e = math.exp(-abs(x - mean) / scale)
    return e / (scale * (1.0 + e) ** 2)


def _pdf_ln(mean: float, scale: float, x: float) -> float:
    a = abs(x - mean) / scale
    return -a - math.log(scale) - 2.0 * math.log1p(math.exp(-a))


def _cdf(mean: float, scale: float, x: float) -> float:
    z = (x - mean) / scale
    if z >= 0:
        return 1.0 / (1.0 + math.exp(-z))
    e = math.exp(z)
    return e / (1.0 + e)


def _inv_cdf(mean: float, scale: float, p: float) -> float:
    check_probability(p)
    if p == 0.0:
        return -math.inf
    if p == 1.0:
        return math.inf
    return mean + scale * math.log(p / (1.0 - p))


def pdf(mean: float, scale: float, x: float) -> float:
    LogisticMeanScale(mean=mean, scale=scale).validate()
    return _pdf(mean, scale, x)


def pdf_ln(mean: float, scale: float, x: float) -> float:
    LogisticMeanScale(mean=mean, scale=scale).validate()
    return _pdf_ln(mean, scale, x)


def cdf(mean: float, scale: float, x: float) -> float:
    LogisticMeanScale(mean=mean, scale=scale).validate()
    return _cdf(mean, scale, x)


def inv_cdf(mean: float, scale: float, p: float) -> float:
    """Quantile ``μ + s·ln(p / (1 - p))``."""
    LogisticMeanScale(mean=mean, scale=scale).validate()
    return _inv_cdf(mean, scale, p)


def sample_unchecked(rng: np.random.Generator, mean: float, scale: float) -> float:
    return _inv_cdf(mean, scale, uniform_open(rng))


def sample(mean: float, scale: float, *, rng: np.random.Generator | None = None) -> float:
    LogisticMeanScale(mean=mean, scale=scale).validate()
    return sample_unchecked(resolve_random_source(rng), mean, scale)


def fill_samples(
    values: npt.NDArray[np.float64],
    mean: float,
    scale: float,
    *,
    rng: np.random.Generator | None = None,
) -> None:
    LogisticMeanScale(mean=mean, scale=scale).validate()
    source = resolve_random_source(rng)
    fill_sequentially(values, lambda: sample_unchecked(source, mean, scale))


def samples(
    n: int, mean: float, scale: float, *, rng: np.random.Generator | None = None
) -> FloatArray:
    values = new_buffer(n, np.float64)
    fill_samples(values, mean, scale, rng=rng)
    return values


def iter_samples(
    mean: float, scale: float, *, rng: np.random.Generator | None = None
) -> Iterator[float]:
    LogisticMeanScale(mean=mean, scale=scale).validate()
    source = resolve_random_source(rng)
    return sample_stream(lambda: sample_unchecked(source, mean, scale))


class Logistic(ContinuousDistribution):
    """
    Logistic distribution.

    Parameters
    ----------
    mean : float
        Mean μ, defaults to 0.
    scale : float
        Scale s > 0, defaults to 1.
    random_source : numpy.random.Generator, optional
        Generator used for sampling.
    """

    def __init__(
        self,
        mean: float = 0.0,
        scale: float = 1.0,
        random_source: np.random.Generator | None = None,
    ) -> None:
        self._parameters = LogisticMeanScale(mean=mean, scale=scale)
        self._parameters.validate()
        self._mean = mean
        self._scale = scale
        self._random_source = resolve_random_source(random_source)

    @classmethod
    def with_mean_std_dev(
        cls, mean: float, std_dev: float, random_source: np.random.Generator | None = None
    ) -> Logistic:
        return cls.from_parametrization(
            LogisticMeanStdDev(mean=mean, std_dev=std_dev), random_source
        )

    @classmethod
    def with_mean_variance(
        cls, mean: float, variance: float, random_source: np.random.Generator | None = None
    ) -> Logistic:
        return cls.from_parametrization(
            LogisticMeanVariance(mean=mean, variance=variance), random_source
        )

    @classmethod
    def with_mean_precision(
        cls, mean: float, precision: float, random_source: np.random.Generator | None = None
    ) -> Logistic:
        return cls.from_parametrization(
            LogisticMeanPrecision(mean=mean, precision=precision), random_source
        )

    def __repr__(self) -> str:
        return f"Logistic(mean={self._mean}, scale={self._scale})"

    @property
    def scale(self) -> float:
        return self._scale

    @property
    def support(self) -> ContinuousSupport:
        return ContinuousSupport()

    @property
    def mean(self) -> float:
        return self._mean

    @property
    def variance(self) -> float:
        return (self._scale * math.pi) ** 2 / 3.0

    @property
    def entropy(self) -> float:
        return math.log(self._scale) + 2.0

    @property
    def skewness(self) -> float:
        return 0.0

    @property
    def mode(self) -> float:
        return self._mean

    @property
    def median(self) -> float:
        return self._mean

    def density(self, x: float) -> float:
        return _pdf(self._mean, self._scale, x)

    def density_ln(self, x: float) -> float:
        return _pdf_ln(self._mean, self._scale, x)

    def cumulative_distribution(self, x: float) -> float:
        return _cdf(self._mean, self._scale, x)

    def inverse_cumulative_distribution(self, p: float) -> float:
        return _inv_cdf(self._mean, self._scale, p)

    def sample(self) -> float:
        return sample_unchecked(self._random_source, self._mean, self._scale)
