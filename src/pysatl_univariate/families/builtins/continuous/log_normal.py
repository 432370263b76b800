"""
Log-normal distribution.

Distribution of ``exp(X)`` for ``X ~ N(μ, σ²)``. Samples exponentiate normal
samples, so the buffer fill and the sample stream inherit the polar
Box-Muller generator of :mod:`.normal`.
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

_SQRT_2 = math.sqrt(2.0)
_LN_SQRT_2PI = math.log(math.sqrt(2.0 * math.pi))


@parametrization(name="muSigma")
class LogNormalMuSigma(Parametrization):
    """
    Standard parametrization of log-normal distribution.

    Parameters
    ----------
    mu : float
        Mean of the logarithm
    sigma : float
        Standard deviation of the logarithm
    """

    mu: float
    sigma: float

    @constraint(description="sigma >= 0")
    def check_sigma_non_negative(self) -> bool:
        return self.sigma >= 0

    @constraint(description="mu is not NaN")
    def check_mu_not_nan(self) -> bool:
        return not math.isnan(self.mu)


@parametrization(name="meanVariance")
class LogNormalMeanVariance(Parametrization):
    """
    Mean-variance parametrization of log-normal distribution.

    Parameters
    ----------
    mean : float
        Mean of the distribution itself, not of its logarithm
    variance : float
        Variance of the distribution itself
    """

    mean: float
    variance: float

    @constraint(description="mean > 0")
    def check_mean_positive(self) -> bool:
        return self.mean > 0

    @constraint(description="variance >= 0")
    def check_variance_non_negative(self) -> bool:
        return self.variance >= 0

    def transform_to_base_parametrization(self) -> Parametrization:
        sigma2 = math.log1p(self.variance / (self.mean * self.mean))
        return LogNormalMuSigma(mu=math.log(self.mean) - 0.5 * sigma2, sigma=math.sqrt(sigma2))


def is_valid_parameter_set(mu: float, sigma: float) -> bool:
    return LogNormalMuSigma(mu=mu, sigma=sigma).is_valid()


def _pdf(mu: float, sigma: float, x: float) -> float:
    if sigma == 0:
        return math.inf if x == math.exp(mu) else 0.0
    if x <= 0:
        return 0.0
    a = (math.log(x) - mu) / sigma
    return math.exp(-0.5 * a * a) / (x * sigma * math.sqrt(2.0 * math.pi))


def _pdf_ln(mu: float, sigma: float, x: float) -> float:
    if sigma == 0:
        return math.inf if x == math.exp(mu) else -math.inf
    if x <= 0:
        return -math.inf
    a = (math.log(x) - mu) / sigma
    return -0.5 * a * a - math.log(x * sigma) - _LN_SQRT_2PI


def _cdf(mu: float, sigma: float, x: float) -> float:
    if x <= 0:
        return 0.0
    if sigma == 0:
        return 1.0 if x >= math.exp(mu) else 0.0
    return 0.5 * special.erfc((mu - math.log(x)) / (sigma * _SQRT_2))


def _inv_cdf(mu: float, sigma: float, p: float) -> float:
    check_probability(p)
    if p == 0.0:
        return 0.0
    if p == 1.0:
        return math.inf
    return math.exp(mu - sigma * _SQRT_2 * special.erfc_inv(2.0 * p))


def pdf(mu: float, sigma: float, x: float) -> float:
    """
    Probability density function for log-normal distribution.

    Parameters
    ----------
    mu : float
        Mean of the logarithm
    sigma : float
        Standard deviation of the logarithm, non-negative
    x : float
        Point at which to evaluate the density

    Returns
    -------
    float
        Density at ``x``, 0 for ``x <= 0``
    """
    LogNormalMuSigma(mu=mu, sigma=sigma).validate()
    return _pdf(mu, sigma, x)


def pdf_ln(mu: float, sigma: float, x: float) -> float:
    LogNormalMuSigma(mu=mu, sigma=sigma).validate()
    return _pdf_ln(mu, sigma, x)


def cdf(mu: float, sigma: float, x: float) -> float:
    LogNormalMuSigma(mu=mu, sigma=sigma).validate()
    return _cdf(mu, sigma, x)


def inv_cdf(mu: float, sigma: float, p: float) -> float:
    """Quantile function, ``0`` at ``p = 0`` and ``inf`` at ``p = 1``."""
    LogNormalMuSigma(mu=mu, sigma=sigma).validate()
    return _inv_cdf(mu, sigma, p)


def sample_unchecked(rng: np.random.Generator, mu: float, sigma: float) -> float:
    """Draw one variate; the parameters are assumed valid."""
    return math.exp(normal.sample_unchecked(rng, mu, sigma))


def sample(mu: float, sigma: float, *, rng: np.random.Generator | None = None) -> float:
    LogNormalMuSigma(mu=mu, sigma=sigma).validate()
    return sample_unchecked(resolve_random_source(rng), mu, sigma)


def fill_samples(
    values: npt.NDArray[np.float64],
    mu: float,
    sigma: float,
    *,
    rng: np.random.Generator | None = None,
) -> None:
    LogNormalMuSigma(mu=mu, sigma=sigma).validate()
    normal.fill_samples(values, mu, sigma, rng=rng)
    np.exp(values, out=values)


def samples(
    n: int, mu: float, sigma: float, *, rng: np.random.Generator | None = None
) -> FloatArray:
    values = new_buffer(n, np.float64)
    fill_samples(values, mu, sigma, rng=rng)
    return values


def iter_samples(
    mu: float, sigma: float, *, rng: np.random.Generator | None = None
) -> Iterator[float]:
    LogNormalMuSigma(mu=mu, sigma=sigma).validate()
    return (math.exp(v) for v in normal.iter_samples(mu, sigma, rng=rng))


class LogNormal(ContinuousDistribution):
    """
    Log-normal distribution.

    Parameters
    ----------
    mu : float
        Mean μ of the logarithm.
    sigma : float
        Standard deviation σ ≥ 0 of the logarithm.
    random_source : numpy.random.Generator, optional
        Generator used for sampling.
    """

    def __init__(
        self, mu: float, sigma: float, random_source: np.random.Generator | None = None
    ) -> None:
        self._parameters = LogNormalMuSigma(mu=mu, sigma=sigma)
        self._parameters.validate()
        self._mu = mu
        self._sigma = sigma
        self._random_source = resolve_random_source(random_source)

    @classmethod
    def with_mean_variance(
        cls, mean: float, variance: float, random_source: np.random.Generator | None = None
    ) -> LogNormal:
        """Construct from the mean and variance of the distribution itself."""
        return cls.from_parametrization(
            LogNormalMeanVariance(mean=mean, variance=variance), random_source
        )

    @classmethod
    def estimate(
        cls, data: npt.ArrayLike, random_source: np.random.Generator | None = None
    ) -> LogNormal:
        """
        Estimate the distribution from positive observations.

        Uses the sample mean and unbiased standard deviation of the logarithms.
        The input is not modified.
        """
        logs = np.log(np.asarray(data, dtype=np.float64))
        return cls(float(np.mean(logs)), float(np.std(logs, ddof=1)), random_source)

    def __repr__(self) -> str:
        return f"LogNormal(mu={self._mu}, sigma={self._sigma})"

    @property
    def mu(self) -> float:
        return self._mu

    @property
    def sigma(self) -> float:
        return self._sigma

    @property
    def support(self) -> ContinuousSupport:
        return ContinuousSupport(0.0)

    @property
    def mean(self) -> float:
        return math.exp(self._mu + 0.5 * self._sigma * self._sigma)

    @property
    def variance(self) -> float:
        sigma2 = self._sigma * self._sigma
        return math.expm1(sigma2) * math.exp(2.0 * self._mu + sigma2)

    @property
    def entropy(self) -> float:
        if self._sigma == 0:
            return -math.inf
        return self._mu + 0.5 + math.log(self._sigma) + _LN_SQRT_2PI

    @property
    def skewness(self) -> float:
        sigma2 = self._sigma * self._sigma
        return (math.exp(sigma2) + 2.0) * math.sqrt(math.expm1(sigma2))

    @property
    def mode(self) -> float:
        return math.exp(self._mu - self._sigma * self._sigma)

    @property
    def median(self) -> float:
        return math.exp(self._mu)

    def density(self, x: float) -> float:
        return _pdf(self._mu, self._sigma, x)

    def density_ln(self, x: float) -> float:
        return _pdf_ln(self._mu, self._sigma, x)

    def cumulative_distribution(self, x: float) -> float:
        return _cdf(self._mu, self._sigma, x)

    def inverse_cumulative_distribution(self, p: float) -> float:
        return _inv_cdf(self._mu, self._sigma, p)

    def sample(self) -> float:
        return sample_unchecked(self._random_source, self._mu, self._sigma)

    def fill_samples(self, values: npt.NDArray[np.float64]) -> None:
        normal.fill_samples(values, self._mu, self._sigma, rng=self._random_source)
        np.exp(values, out=values)

    def iter_samples(self) -> Iterator[float]:
        return (
            math.exp(v) for v in normal.iter_samples(self._mu, self._sigma, rng=self._random_source)
        )
