"""
Continuous uniform distribution.

Uniform distribution on the closed interval [lower, upper]. A zero-width
interval is the point mass at ``lower``.
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


@parametrization(name="lowerUpper")
class UniformLowerUpper(Parametrization):
    """
    Standard parametrization of uniform distribution.

    Parameters
    ----------
    lower : float
        Lower bound of the interval
    upper : float
        Upper bound of the interval
    """

    lower: float
    upper: float

    @constraint(description="lower <= upper")
    def check_lower_le_upper(self) -> bool:
        """Check that lower bound does not exceed upper bound."""
        return self.lower <= self.upper


@parametrization(name="meanWidth")
class UniformMeanWidth(Parametrization):
    """
    Mean-width parametrization of uniform distribution.

    Parameters
    ----------
    mean : float
        Center of the interval
    width : float
        Length of the interval
    """

    mean: float
    width: float

    @constraint(description="width >= 0")
    def check_width_non_negative(self) -> bool:
        return self.width >= 0

    @constraint(description="mean is not NaN")
    def check_mean_not_nan(self) -> bool:
        return not math.isnan(self.mean)

    def transform_to_base_parametrization(self) -> Parametrization:
        half = 0.5 * self.width
        return UniformLowerUpper(lower=self.mean - half, upper=self.mean + half)


def is_valid_parameter_set(lower: float, upper: float) -> bool:
    return UniformLowerUpper(lower=lower, upper=upper).is_valid()


def _pdf(lower: float, upper: float, x: float) -> float:
    if not lower <= x <= upper:
        return 0.0
    if lower == upper:
        return math.inf
    return 1.0 / (upper - lower)


def _pdf_ln(lower: float, upper: float, x: float) -> float:
    if not lower <= x <= upper:
        return -math.inf
    if lower == upper:
        return math.inf
    return -math.log(upper - lower)


def _cdf(lower: float, upper: float, x: float) -> float:
    if x >= upper:
        return 1.0
    if x <= lower:
        return 0.0
    return (x - lower) / (upper - lower)


def _inv_cdf(lower: float, upper: float, p: float) -> float:
    check_probability(p)
    if p == 0.0:
        return lower
    if p == 1.0:
        return upper
    return lower * (1.0 - p) + upper * p


def pdf(lower: float, upper: float, x: float) -> float:
    """Density ``1 / (upper - lower)`` inside the interval, 0 outside."""
    UniformLowerUpper(lower=lower, upper=upper).validate()
    return _pdf(lower, upper, x)


def pdf_ln(lower: float, upper: float, x: float) -> float:
    UniformLowerUpper(lower=lower, upper=upper).validate()
    return _pdf_ln(lower, upper, x)


def cdf(lower: float, upper: float, x: float) -> float:
    UniformLowerUpper(lower=lower, upper=upper).validate()
    return _cdf(lower, upper, x)


def inv_cdf(lower: float, upper: float, p: float) -> float:
    """
    Quantile function, linear interpolation between the bounds.

    Raises
    ------
    InvalidParameterError
        If ``lower > upper``.
    OutOfRangeError
        If ``p`` is outside [0, 1].
    """
    UniformLowerUpper(lower=lower, upper=upper).validate()
    return _inv_cdf(lower, upper, p)


def sample_unchecked(rng: np.random.Generator, lower: float, upper: float) -> float:
    """Draw one variate; the parameters are assumed valid."""
    return lower + float(rng.random()) * (upper - lower)


def _fill(
    rng: np.random.Generator, values: npt.NDArray[np.float64], lower: float, upper: float
) -> None:
    values[:] = lower + rng.random(values.shape[0]) * (upper - lower)


def sample(lower: float, upper: float, *, rng: np.random.Generator | None = None) -> float:
    UniformLowerUpper(lower=lower, upper=upper).validate()
    return sample_unchecked(resolve_random_source(rng), lower, upper)


def fill_samples(
    values: npt.NDArray[np.float64],
    lower: float,
    upper: float,
    *,
    rng: np.random.Generator | None = None,
) -> None:
    UniformLowerUpper(lower=lower, upper=upper).validate()
    _fill(resolve_random_source(rng), values, lower, upper)


def samples(
    n: int, lower: float, upper: float, *, rng: np.random.Generator | None = None
) -> FloatArray:
    values = new_buffer(n, np.float64)
    fill_samples(values, lower, upper, rng=rng)
    return values


def iter_samples(
    lower: float, upper: float, *, rng: np.random.Generator | None = None
) -> Iterator[float]:
    UniformLowerUpper(lower=lower, upper=upper).validate()
    source = resolve_random_source(rng)
    return sample_stream(lambda: sample_unchecked(source, lower, upper))


class ContinuousUniform(ContinuousDistribution):
    """
    Continuous uniform distribution U(lower, upper).

    Parameters
    ----------
    lower : float, default=0.0
        Lower bound.
    upper : float, default=1.0
        Upper bound, not smaller than ``lower``.
    random_source : numpy.random.Generator, optional
        Generator used for sampling.
    """

    def __init__(
        self,
        lower: float = 0.0,
        upper: float = 1.0,
        random_source: np.random.Generator | None = None,
    ) -> None:
        self._parameters = UniformLowerUpper(lower=lower, upper=upper)
        self._parameters.validate()
        self._lower = lower
        self._upper = upper
        self._random_source = resolve_random_source(random_source)

    @classmethod
    def with_mean_width(
        cls, mean: float, width: float, random_source: np.random.Generator | None = None
    ) -> ContinuousUniform:
        """Construct from the interval center and length."""
        return cls.from_parametrization(UniformMeanWidth(mean=mean, width=width), random_source)

    def __repr__(self) -> str:
        return f"ContinuousUniform(lower={self._lower}, upper={self._upper})"

    @property
    def lower(self) -> float:
        return self._lower

    @property
    def upper(self) -> float:
        return self._upper

    @property
    def support(self) -> ContinuousSupport:
        return ContinuousSupport(self._lower, self._upper)

    @property
    def mean(self) -> float:
        return 0.5 * (self._lower + self._upper)

    @property
    def variance(self) -> float:
        width = self._upper - self._lower
        return width * width / 12.0

    @property
    def std_dev(self) -> float:
        return (self._upper - self._lower) / math.sqrt(12.0)

    @property
    def entropy(self) -> float:
        width = self._upper - self._lower
        return math.log(width) if width > 0 else -math.inf

    @property
    def skewness(self) -> float:
        return 0.0

    @property
    def mode(self) -> float:
        return 0.5 * (self._lower + self._upper)

    @property
    def median(self) -> float:
        return 0.5 * (self._lower + self._upper)

    def density(self, x: float) -> float:
        return _pdf(self._lower, self._upper, x)

    def density_ln(self, x: float) -> float:
        return _pdf_ln(self._lower, self._upper, x)

    def cumulative_distribution(self, x: float) -> float:
        return _cdf(self._lower, self._upper, x)

    def inverse_cumulative_distribution(self, p: float) -> float:
        return _inv_cdf(self._lower, self._upper, p)

    def sample(self) -> float:
        return sample_unchecked(self._random_source, self._lower, self._upper)

    def fill_samples(self, values: npt.NDArray[np.float64]) -> None:
        _fill(self._random_source, values, self._lower, self._upper)
