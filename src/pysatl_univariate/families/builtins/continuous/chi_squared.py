"""
Chi-squared distribution.

Distribution of a sum of k squared independent standard normal variates,
generalized to real degrees of freedom k > 0. It is the gamma distribution
with shape k/2 and rate 1/2.

Samples are drawn as an explicit sum of squared normals when k is an
integer and from the equivalent gamma distribution otherwise.
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
from pysatl_univariate.distributions.sampling import fill_sequentially, new_buffer, sample_stream
from pysatl_univariate.distributions.support import ContinuousSupport
from pysatl_univariate.errors import check_probability
from pysatl_univariate.families.builtins.continuous import gamma, normal
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

_LN_2 = math.log(2.0)


@parametrization(name="freedom")
class ChiSquaredFreedom(Parametrization):
    """
    Degrees-of-freedom parametrization of chi-squared distribution.

    Parameters
    ----------
    freedom : float
        Degrees of freedom (k)
    """

    freedom: float

    @constraint(description="freedom > 0")
    def check_freedom_positive(self) -> bool:
        return self.freedom > 0


def is_valid_parameter_set(freedom: float) -> bool:
    return ChiSquaredFreedom(freedom=freedom).is_valid()


def _pdf_at_zero(freedom: float) -> float:
    if freedom < 2.0:
        return math.inf
    return 0.5 if freedom == 2.0 else 0.0


def _pdf(freedom: float, x: float) -> float:
    if math.isinf(freedom) or math.isinf(x) or x < 0:
        return 0.0
    if x == 0:
        return _pdf_at_zero(freedom)
    if freedom > numeric_config().gamma_log_space_threshold:
        return math.exp(_pdf_ln(freedom, x))

    half = 0.5 * freedom
    return (
        special.power(x, half - 1.0)
        * math.exp(-0.5 * x)
        / (special.power(2.0, half) * special.gamma(half))
    )


def _pdf_ln(freedom: float, x: float) -> float:
    if math.isinf(freedom) or math.isinf(x) or x < 0:
        return -math.inf
    if x == 0:
        density = _pdf_at_zero(freedom)
        return math.log(density) if density > 0 else -math.inf

    half = 0.5 * freedom
    return (half - 1.0) * math.log(x) - 0.5 * x - half * _LN_2 - special.gamma_ln(half)


def _cdf(freedom: float, x: float) -> float:
    if x <= 0:
        return 0.0
    if math.isinf(x):
        return 1.0
    if math.isinf(freedom):
        return 0.0
    return special.gamma_lower_regularized(0.5 * freedom, 0.5 * x)


def _inv_cdf(freedom: float, p: float) -> float:
    check_probability(p)
    return 2.0 * special.gamma_lower_regularized_inv(0.5 * freedom, p)


def pdf(freedom: float, x: float) -> float:
    """
    Probability density function for chi-squared distribution.

    Parameters
    ----------
    freedom : float
        Degrees of freedom (k), positive
    x : float
        Point at which to evaluate the density

    Returns
    -------
    float
        Density at ``x``. At ``x = 0`` it is ``inf`` for k < 2, 1/2 for
        k = 2 and 0 otherwise
    """
    ChiSquaredFreedom(freedom=freedom).validate()
    return _pdf(freedom, x)


def pdf_ln(freedom: float, x: float) -> float:
    ChiSquaredFreedom(freedom=freedom).validate()
    return _pdf_ln(freedom, x)


def cdf(freedom: float, x: float) -> float:
    """Cumulative distribution function ``P(k/2, x/2)``."""
    ChiSquaredFreedom(freedom=freedom).validate()
    return _cdf(freedom, x)


def inv_cdf(freedom: float, p: float) -> float:
    ChiSquaredFreedom(freedom=freedom).validate()
    return _inv_cdf(freedom, p)


def sample_unchecked(rng: np.random.Generator, freedom: float) -> float:
    """Draw one variate; the degrees of freedom are assumed valid."""
    if float(freedom).is_integer():
        total = 0.0
        for _ in range(int(freedom)):
            z = normal.sample_unchecked(rng, 0.0, 1.0)
            total += z * z
        return total
    return gamma.sample_unchecked(rng, 0.5 * freedom, 0.5)


def sample(freedom: float, *, rng: np.random.Generator | None = None) -> float:
    ChiSquaredFreedom(freedom=freedom).validate()
    return sample_unchecked(resolve_random_source(rng), freedom)


def fill_samples(
    values: npt.NDArray[np.float64], freedom: float, *, rng: np.random.Generator | None = None
) -> None:
    ChiSquaredFreedom(freedom=freedom).validate()
    source = resolve_random_source(rng)
    fill_sequentially(values, lambda: sample_unchecked(source, freedom))


def samples(n: int, freedom: float, *, rng: np.random.Generator | None = None) -> FloatArray:
    values = new_buffer(n, np.float64)
    fill_samples(values, freedom, rng=rng)
    return values


def iter_samples(freedom: float, *, rng: np.random.Generator | None = None) -> Iterator[float]:
    ChiSquaredFreedom(freedom=freedom).validate()
    source = resolve_random_source(rng)
    return sample_stream(lambda: sample_unchecked(source, freedom))


class ChiSquared(ContinuousDistribution):
    """
    Chi-squared distribution.

    Parameters
    ----------
    freedom : float
        Degrees of freedom k > 0.
    random_source : numpy.random.Generator, optional
        Generator used for sampling.
    """

    def __init__(self, freedom: float, random_source: np.random.Generator | None = None) -> None:
        self._parameters = ChiSquaredFreedom(freedom=freedom)
        self._parameters.validate()
        self._freedom = freedom
        self._random_source = resolve_random_source(random_source)

    def __repr__(self) -> str:
        return f"ChiSquared(freedom={self._freedom})"

    @property
    def freedom(self) -> float:
        return self._freedom

    @property
    def support(self) -> ContinuousSupport:
        return ContinuousSupport(0.0)

    @property
    def mean(self) -> float:
        return self._freedom

    @property
    def variance(self) -> float:
        return 2.0 * self._freedom

    @property
    def std_dev(self) -> float:
        return math.sqrt(2.0 * self._freedom)

    @property
    def entropy(self) -> float:
        half = 0.5 * self._freedom
        return half + _LN_2 + special.gamma_ln(half) + (1.0 - half) * special.digamma(half)

    @property
    def skewness(self) -> float:
        return math.sqrt(8.0 / self._freedom)

    @property
    def mode(self) -> float:
        return max(self._freedom - 2.0, 0.0)

    @property
    def median(self) -> float:
        return _inv_cdf(self._freedom, 0.5)

    def density(self, x: float) -> float:
        return _pdf(self._freedom, x)

    def density_ln(self, x: float) -> float:
        return _pdf_ln(self._freedom, x)

    def cumulative_distribution(self, x: float) -> float:
        return _cdf(self._freedom, x)

    def inverse_cumulative_distribution(self, p: float) -> float:
        return _inv_cdf(self._freedom, p)

    def sample(self) -> float:
        return sample_unchecked(self._random_source, self._freedom)
