"""
Inverse Gaussian distribution.

Wald distribution with mean μ > 0 and shape λ > 0, both finite.

Probability density function:
    f(x) = sqrt(λ / (2πx³)) * exp(-λ(x - μ)² / (2μ²x)), x > 0

The quantile has no closed form and is found by Newton-Raphson iterations
started at the mode, with tolerance and budget taken from
:func:`~pysatl_univariate.config.numeric_config`. Samples use the
transformation method of Michael, Schucany and Haas.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING

import numpy as np
from scipy import stats

from pysatl_univariate import special
from pysatl_univariate.distributions.distribution import ContinuousDistribution
from pysatl_univariate.distributions.sampling import new_buffer, sample_stream
from pysatl_univariate.distributions.support import ContinuousSupport
from pysatl_univariate.errors import NotSupportedError, check_probability
from pysatl_univariate.families.builtins.continuous import normal
from pysatl_univariate.families.parametrizations import (
    Parametrization,
    constraint,
    parametrization,
)
from pysatl_univariate.random_source import resolve_random_source
from pysatl_univariate.roots import find_root_newton

if TYPE_CHECKING:
    from collections.abc import Iterator

    import numpy.typing as npt

    from pysatl_univariate.types import FloatArray


@parametrization(name="muLambda")
class InverseGaussianMuLambda(Parametrization):
    """
    Standard parametrization of inverse Gaussian distribution.

    Parameters
    ----------
    mu : float
        Mean (μ)
    lambda_ : float
        Shape (λ)
    """

    mu: float
    lambda_: float

    @constraint(description="0 < mu < inf")
    def check_mu_positive_finite(self) -> bool:
        return 0 < self.mu < math.inf

    @constraint(description="0 < lambda < inf")
    def check_lambda_positive_finite(self) -> bool:
        return 0 < self.lambda_ < math.inf


def is_valid_parameter_set(mu: float, lambda_: float) -> bool:
    return InverseGaussianMuLambda(mu=mu, lambda_=lambda_).is_valid()


def _mode(mu: float, lambda_: float) -> float:
    ratio = 1.5 * mu / lambda_
    return mu * (math.sqrt(1.0 + ratio * ratio) - ratio)


def _pdf_ln(mu: float, lambda_: float, x: float) -> float:
    if x <= 0 or math.isinf(x):
        return -math.inf
    return 0.5 * (math.log(lambda_ / (2.0 * math.pi)) - 3.0 * math.log(x)) - lambda_ * (
        x - mu
    ) ** 2 / (2.0 * mu * mu * x)


def _pdf(mu: float, lambda_: float, x: float) -> float:
    if x <= 0 or math.isinf(x):
        return 0.0
    return math.exp(_pdf_ln(mu, lambda_, x))


def _cdf(mu: float, lambda_: float, x: float) -> float:
    if x <= 0:
        return 0.0
    if math.isinf(x):
        return 1.0
    root = math.sqrt(lambda_ / x)
    first = 0.5 * special.erfc(-root * (x / mu - 1.0) / math.sqrt(2.0))
    tail = 0.5 * special.erfc(root * (x / mu + 1.0) / math.sqrt(2.0))
    # exp(2λ/μ) overflows long before the product does
    second = math.exp(2.0 * lambda_ / mu + math.log(tail)) if tail > 0 else 0.0
    return min(1.0, first + second)


def _inv_cdf(mu: float, lambda_: float, p: float) -> float:
    check_probability(p)
    if p == 0.0:
        return 0.0
    if p == 1.0:
        return math.inf
    return find_root_newton(
        lambda x: _cdf(mu, lambda_, x) - p,
        lambda x: _pdf(mu, lambda_, x),
        _mode(mu, lambda_),
        lower=0.0,
    )


def pdf(mu: float, lambda_: float, x: float) -> float:
    InverseGaussianMuLambda(mu=mu, lambda_=lambda_).validate()
    return _pdf(mu, lambda_, x)


def pdf_ln(mu: float, lambda_: float, x: float) -> float:
    InverseGaussianMuLambda(mu=mu, lambda_=lambda_).validate()
    return _pdf_ln(mu, lambda_, x)


def cdf(mu: float, lambda_: float, x: float) -> float:
    """
    Cumulative distribution function.

    ``Φ(√(λ/x)(x/μ - 1)) + exp(2λ/μ)·Φ(-√(λ/x)(x/μ + 1))`` with the second
    term assembled in log space.
    """
    InverseGaussianMuLambda(mu=mu, lambda_=lambda_).validate()
    return _cdf(mu, lambda_, x)


def inv_cdf(mu: float, lambda_: float, p: float) -> float:
    """
    Quantile function found with Newton-Raphson iterations.

    Raises
    ------
    OutOfRangeError
        If ``p`` is outside ``[0, 1]``.
    NonConvergenceError
        If the iteration budget is exhausted before the tolerance is met.
    """
    InverseGaussianMuLambda(mu=mu, lambda_=lambda_).validate()
    return _inv_cdf(mu, lambda_, p)


def _transform(mu: float, lambda_: float, z: float, u: float) -> float:
    y = z * z
    x = mu + mu * mu * y / (2.0 * lambda_) - (mu / (2.0 * lambda_)) * math.sqrt(
        4.0 * mu * lambda_ * y + mu * mu * y * y
    )
    if u <= mu / (mu + x):
        return x
    return mu * mu / x


def sample_unchecked(rng: np.random.Generator, mu: float, lambda_: float) -> float:
    z = normal.sample_unchecked(rng, 0.0, 1.0)
    return _transform(mu, lambda_, z, float(rng.random()))


def sample(mu: float, lambda_: float, *, rng: np.random.Generator | None = None) -> float:
    InverseGaussianMuLambda(mu=mu, lambda_=lambda_).validate()
    return sample_unchecked(resolve_random_source(rng), mu, lambda_)


def _fill(
    rng: np.random.Generator, values: npt.NDArray[np.float64], mu: float, lambda_: float
) -> None:
    normal.fill_samples(values, 0.0, 1.0, rng=rng)
    tests = rng.random(values.shape[0])
    for i in range(values.shape[0]):
        values[i] = _transform(mu, lambda_, float(values[i]), float(tests[i]))


def fill_samples(
    values: npt.NDArray[np.float64],
    mu: float,
    lambda_: float,
    *,
    rng: np.random.Generator | None = None,
) -> None:
    InverseGaussianMuLambda(mu=mu, lambda_=lambda_).validate()
    _fill(resolve_random_source(rng), values, mu, lambda_)


def samples(
    n: int, mu: float, lambda_: float, *, rng: np.random.Generator | None = None
) -> FloatArray:
    values = new_buffer(n, np.float64)
    fill_samples(values, mu, lambda_, rng=rng)
    return values


def iter_samples(
    mu: float, lambda_: float, *, rng: np.random.Generator | None = None
) -> Iterator[float]:
    InverseGaussianMuLambda(mu=mu, lambda_=lambda_).validate()
    source = resolve_random_source(rng)
    return sample_stream(lambda: sample_unchecked(source, mu, lambda_))


class InverseGaussian(ContinuousDistribution):
    """
    Inverse Gaussian distribution.

    Parameters
    ----------
    mu : float
        Mean μ, positive and finite.
    lambda_ : float
        Shape λ, positive and finite.
    random_source : numpy.random.Generator, optional
        Generator used for sampling.
    """

    def __init__(
        self, mu: float, lambda_: float, random_source: np.random.Generator | None = None
    ) -> None:
        self._parameters = InverseGaussianMuLambda(mu=mu, lambda_=lambda_)
        self._parameters.validate()
        self._mu = mu
        self._lambda = lambda_
        self._random_source = resolve_random_source(random_source)

    @classmethod
    def estimate(
        cls, data: npt.ArrayLike, random_source: np.random.Generator | None = None
    ) -> InverseGaussian:
        """
        Estimate the distribution from positive observations.

        ``μ`` is the sample mean and ``1/λ = 1/H - 1/μ`` with the harmonic
        mean ``H``. The input is not modified.
        """
        observations = np.asarray(data, dtype=np.float64)
        mu = float(np.mean(observations))
        harmonic = float(stats.hmean(observations))
        return cls(mu, 1.0 / (1.0 / harmonic - 1.0 / mu), random_source)

    def __repr__(self) -> str:
        return f"InverseGaussian(mu={self._mu}, lambda_={self._lambda})"

    @property
    def mu(self) -> float:
        return self._mu

    @property
    def lambda_(self) -> float:
        return self._lambda

    @property
    def support(self) -> ContinuousSupport:
        return ContinuousSupport(0.0)

    @property
    def mean(self) -> float:
        return self._mu

    @property
    def variance(self) -> float:
        return self._mu**3 / self._lambda

    @property
    def entropy(self) -> float:
        raise NotSupportedError("Inverse Gaussian entropy is not implemented")

    @property
    def skewness(self) -> float:
        return 3.0 * math.sqrt(self._mu / self._lambda)

    @property
    def kurtosis(self) -> float:
        """Excess kurtosis ``15μ/λ``."""
        return 15.0 * self._mu / self._lambda

    @property
    def mode(self) -> float:
        return _mode(self._mu, self._lambda)

    @property
    def median(self) -> float:
        return _inv_cdf(self._mu, self._lambda, 0.5)

    def density(self, x: float) -> float:
        return _pdf(self._mu, self._lambda, x)

    def density_ln(self, x: float) -> float:
        return _pdf_ln(self._mu, self._lambda, x)

    def cumulative_distribution(self, x: float) -> float:
        return _cdf(self._mu, self._lambda, x)

    def inverse_cumulative_distribution(self, p: float) -> float:
        return _inv_cdf(self._mu, self._lambda, p)

    def sample(self) -> float:
        return sample_unchecked(self._random_source, self._mu, self._lambda)

    def fill_samples(self, values: npt.NDArray[np.float64]) -> None:
        _fill(self._random_source, values, self._mu, self._lambda)
