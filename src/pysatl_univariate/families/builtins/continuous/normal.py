"""
Normal distribution.

Gaussian distribution with mean μ and standard deviation σ ≥ 0. A zero
standard deviation is the point mass at μ.

Probability density function:
    f(x) = 1/(σ√(2π)) * exp(-(x-μ)²/(2σ²))

Samples are generated with the polar form of the Box-Muller transform: each
accepted pair of uniforms inside the unit disc yields two independent
standard normal variates.
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
from pysatl_univariate.distributions.sampling import new_buffer
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

_SQRT_2 = math.sqrt(2.0)
_SQRT_2PI = math.sqrt(2.0 * math.pi)
_LN_SQRT_2PI = math.log(_SQRT_2PI)
_LN_SQRT_2PIE = math.log(math.sqrt(2.0 * math.pi * math.e))


@parametrization(name="meanStdDev")
class NormalMeanStdDev(Parametrization):
    """
    Standard parametrization of normal distribution.

    Parameters
    ----------
    mean : float
        Mean of the distribution
    std_dev : float
        Standard deviation of the distribution
    """

    mean: float
    std_dev: float

    @constraint(description="std_dev >= 0")
    def check_std_dev_non_negative(self) -> bool:
        """Check that standard deviation is non-negative."""
        return self.std_dev >= 0

    @constraint(description="mean is not NaN")
    def check_mean_not_nan(self) -> bool:
        return not math.isnan(self.mean)


@parametrization(name="meanVariance")
class NormalMeanVariance(Parametrization):
    """
    Mean-variance parametrization of normal distribution.

    Parameters
    ----------
    mean : float
        Mean of the distribution
    variance : float
        Variance of the distribution
    """

    mean: float
    variance: float

    @constraint(description="variance >= 0")
    def check_variance_non_negative(self) -> bool:
        return self.variance >= 0

    @constraint(description="mean is not NaN")
    def check_mean_not_nan(self) -> bool:
        return not math.isnan(self.mean)

    def transform_to_base_parametrization(self) -> Parametrization:
        return NormalMeanStdDev(mean=self.mean, std_dev=math.sqrt(self.variance))


@parametrization(name="meanPrecision")
class NormalMeanPrecision(Parametrization):
    """
    Mean-precision parametrization of normal distribution.

    Parameters
    ----------
    mean : float
        Mean of the distribution
    precision : float
        Precision parameter (inverse variance); infinite precision is the
        point mass at the mean
    """

    mean: float
    precision: float

    @constraint(description="precision > 0")
    def check_precision_positive(self) -> bool:
        return self.precision > 0

    @constraint(description="mean is not NaN")
    def check_mean_not_nan(self) -> bool:
        return not math.isnan(self.mean)

    def transform_to_base_parametrization(self) -> Parametrization:
        return NormalMeanStdDev(mean=self.mean, std_dev=1.0 / math.sqrt(self.precision))


def is_valid_parameter_set(mean: float, std_dev: float) -> bool:
    """Check the normal parameter set without raising."""
    return NormalMeanStdDev(mean=mean, std_dev=std_dev).is_valid()


def _pdf(mean: float, std_dev: float, x: float) -> float:
    if std_dev == 0:
        return math.inf if x == mean else 0.0
    d = (x - mean) / std_dev
    return math.exp(-0.5 * d * d) / (_SQRT_2PI * std_dev)


def _pdf_ln(mean: float, std_dev: float, x: float) -> float:
    if std_dev == 0:
        return math.inf if x == mean else -math.inf
    d = (x - mean) / std_dev
    return -0.5 * d * d - math.log(std_dev) - _LN_SQRT_2PI


def _cdf(mean: float, std_dev: float, x: float) -> float:
    if std_dev == 0:
        return 1.0 if x >= mean else 0.0
    return 0.5 * special.erfc((mean - x) / (std_dev * _SQRT_2))


def _inv_cdf(mean: float, std_dev: float, p: float) -> float:
    check_probability(p)
    if std_dev == 0:
        return mean
    return mean - std_dev * _SQRT_2 * special.erfc_inv(2.0 * p)


def pdf(mean: float, std_dev: float, x: float) -> float:
    """
    Probability density function for normal distribution.

    Parameters
    ----------
    mean : float
        Mean of the distribution
    std_dev : float
        Standard deviation, non-negative
    x : float
        Point at which to evaluate the density

    Returns
    -------
    float
        Density at ``x``; ``inf`` at the atom of a zero-variance distribution

    Raises
    ------
    InvalidParameterError
        If the parameter set is invalid
    """
    NormalMeanStdDev(mean=mean, std_dev=std_dev).validate()
    return _pdf(mean, std_dev, x)


def pdf_ln(mean: float, std_dev: float, x: float) -> float:
    """Log density, evaluated directly rather than as ``log(pdf)``."""
    NormalMeanStdDev(mean=mean, std_dev=std_dev).validate()
    return _pdf_ln(mean, std_dev, x)


def cdf(mean: float, std_dev: float, x: float) -> float:
    """Cumulative distribution function ``0.5 * erfc((μ - x) / (σ√2))``."""
    NormalMeanStdDev(mean=mean, std_dev=std_dev).validate()
    return _cdf(mean, std_dev, x)


def inv_cdf(mean: float, std_dev: float, p: float) -> float:
    """
    Inverse cumulative distribution function for normal distribution.

    Parameters
    ----------
    mean : float
        Mean of the distribution
    std_dev : float
        Standard deviation, non-negative
    p : float
        Probability from [0, 1]

    Returns
    -------
    float
        Quantile at ``p``; ``-inf`` and ``inf`` at 0 and 1 correspondingly

    Raises
    ------
    InvalidParameterError
        If the parameter set is invalid
    OutOfRangeError
        If probability is outside [0, 1]
    """
    NormalMeanStdDev(mean=mean, std_dev=std_dev).validate()
    return _inv_cdf(mean, std_dev, p)


def sample_standard_pair(rng: np.random.Generator) -> tuple[float, float]:
    """
    Draw two independent standard normal variates.

    Pairs of uniforms mapped to the square [-1, 1]² are rejected until one
    falls strictly inside the unit disc and off its centre.
    """
    while True:
        v1 = 2.0 * float(rng.random()) - 1.0
        v2 = 2.0 * float(rng.random()) - 1.0
        r = v1 * v1 + v2 * v2
        if 0.0 < r < 1.0:
            break

    factor = math.sqrt(-2.0 * math.log(r) / r)
    return v1 * factor, v2 * factor


def sample_unchecked(rng: np.random.Generator, mean: float, std_dev: float) -> float:
    """Draw one variate; the parameters are assumed valid."""
    x, _ = sample_standard_pair(rng)
    return mean + std_dev * x


def _fill(
    rng: np.random.Generator, values: npt.NDArray[np.float64], mean: float, std_dev: float
) -> None:
    size = values.shape[0]
    if size == 0:
        return

    # Pre-draw enough uniforms for the expected acceptance rate of π/4.
    n = math.ceil(size * 4.0 / math.pi)
    n += n % 2
    v = 2.0 * rng.random(n).reshape(-1, 2) - 1.0
    r = np.sum(v * v, axis=1)
    accepted = (r > 0.0) & (r < 1.0)
    v, r = v[accepted], r[accepted]
    z = (v * np.sqrt(-2.0 * np.log(r) / r)[:, np.newaxis]).ravel()

    index = min(size, z.size)
    values[:index] = mean + std_dev * z[:index]

    while index < size:
        x, y = sample_standard_pair(rng)
        values[index] = mean + std_dev * x
        index += 1
        if index < size:
            values[index] = mean + std_dev * y
            index += 1


def _stream(rng: np.random.Generator, mean: float, std_dev: float) -> Iterator[float]:
    while True:
        x, y = sample_standard_pair(rng)
        yield mean + std_dev * x
        yield mean + std_dev * y


def sample(mean: float, std_dev: float, *, rng: np.random.Generator | None = None) -> float:
    """Draw a single variate from N(mean, std_dev²)."""
    NormalMeanStdDev(mean=mean, std_dev=std_dev).validate()
    return sample_unchecked(resolve_random_source(rng), mean, std_dev)


def fill_samples(
    values: npt.NDArray[np.float64],
    mean: float,
    std_dev: float,
    *,
    rng: np.random.Generator | None = None,
) -> None:
    """Overwrite ``values`` in place with independent variates."""
    NormalMeanStdDev(mean=mean, std_dev=std_dev).validate()
    _fill(resolve_random_source(rng), values, mean, std_dev)


def samples(
    n: int, mean: float, std_dev: float, *, rng: np.random.Generator | None = None
) -> FloatArray:
    """Draw ``n`` independent variates into a new array."""
    values = new_buffer(n, np.float64)
    fill_samples(values, mean, std_dev, rng=rng)
    return values


def iter_samples(
    mean: float, std_dev: float, *, rng: np.random.Generator | None = None
) -> Iterator[float]:
    """
    Infinite stream of variates.

    Both members of every polar pair are yielded in turn, so each element
    consumes its own share of the draws.
    """
    NormalMeanStdDev(mean=mean, std_dev=std_dev).validate()
    return _stream(resolve_random_source(rng), mean, std_dev)


class Normal(ContinuousDistribution):
    """
    Normal (Gaussian) distribution.

    Parameters
    ----------
    mean : float, default=0.0
        Mean μ of the distribution.
    std_dev : float, default=1.0
        Standard deviation σ ≥ 0.
    random_source : numpy.random.Generator, optional
        Generator used for sampling; the shared default generator if omitted.

    Raises
    ------
    InvalidParameterError
        If σ is negative or NaN, or μ is NaN.
    """

    def __init__(
        self,
        mean: float = 0.0,
        std_dev: float = 1.0,
        random_source: np.random.Generator | None = None,
    ) -> None:
        self._parameters = NormalMeanStdDev(mean=mean, std_dev=std_dev)
        self._parameters.validate()
        self._mean = mean
        self._std_dev = std_dev
        self._random_source = resolve_random_source(random_source)

    @classmethod
    def with_mean_variance(
        cls, mean: float, variance: float, random_source: np.random.Generator | None = None
    ) -> Normal:
        """Construct from mean and variance."""
        return cls.from_parametrization(
            NormalMeanVariance(mean=mean, variance=variance), random_source
        )

    @classmethod
    def with_mean_precision(
        cls, mean: float, precision: float, random_source: np.random.Generator | None = None
    ) -> Normal:
        """Construct from mean and precision (inverse variance)."""
        return cls.from_parametrization(
            NormalMeanPrecision(mean=mean, precision=precision), random_source
        )

    @classmethod
    def estimate(
        cls, data: npt.ArrayLike, random_source: np.random.Generator | None = None
    ) -> Normal:
        """
        Estimate the distribution from observations.

        Uses the sample mean and the unbiased sample standard deviation.

        Parameters
        ----------
        data : array_like
            At least two observations; not modified.
        random_source : numpy.random.Generator, optional
            Generator attached to the result.

        Returns
        -------
        Normal
            Fitted distribution.
        """
        values = np.asarray(data, dtype=np.float64)
        return cls(float(np.mean(values)), float(np.std(values, ddof=1)), random_source)

    def __repr__(self) -> str:
        return f"Normal(mean={self._mean}, std_dev={self._std_dev})"

    @property
    def support(self) -> ContinuousSupport:
        return ContinuousSupport()

    @property
    def precision(self) -> float:
        return 1.0 / (self._std_dev * self._std_dev) if self._std_dev > 0 else math.inf

    @property
    def mean(self) -> float:
        return self._mean

    @property
    def variance(self) -> float:
        return self._std_dev * self._std_dev

    @property
    def std_dev(self) -> float:
        return self._std_dev

    @property
    def entropy(self) -> float:
        if self._std_dev == 0:
            return -math.inf
        return math.log(self._std_dev) + _LN_SQRT_2PIE

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
        return _pdf(self._mean, self._std_dev, x)

    def density_ln(self, x: float) -> float:
        return _pdf_ln(self._mean, self._std_dev, x)

    def cumulative_distribution(self, x: float) -> float:
        return _cdf(self._mean, self._std_dev, x)

    def inverse_cumulative_distribution(self, p: float) -> float:
        return _inv_cdf(self._mean, self._std_dev, p)

    def sample(self) -> float:
        return sample_unchecked(self._random_source, self._mean, self._std_dev)

    def fill_samples(self, values: npt.NDArray[np.float64]) -> None:
        _fill(self._random_source, values, self._mean, self._std_dev)

    def iter_samples(self) -> Iterator[float]:
        return _stream(self._random_source, self._mean, self._std_dev)
