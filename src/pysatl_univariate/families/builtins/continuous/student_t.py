"""
Student's t-distribution.

Location-scale t-distribution with ν > 0 degrees of freedom. For ν at or
above ``numeric_config().student_t_normal_threshold`` the density is that of
the normal distribution with the same location and scale; an infinite ν
makes every function normal.

The quantile is found with Brent's method on the standardized variable.
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
from pysatl_univariate.errors import NotSupportedError, check_probability
from pysatl_univariate.families.builtins.continuous import gamma, normal
from pysatl_univariate.families.parametrizations import (
    Parametrization,
    constraint,
    parametrization,
)
from pysatl_univariate.random_source import resolve_random_source
from pysatl_univariate.roots import find_root_bracketed

if TYPE_CHECKING:
    from collections.abc import Iterator

    import numpy.typing as npt

    from pysatl_univariate.types import FloatArray

_QUANTILE_BRACKET = 800.0


@parametrization(name="locationScaleFreedom")
class StudentTLocationScaleFreedom(Parametrization):
    """
    Standard parametrization of Student's t-distribution.

    Parameters
    ----------
    location : float
        Location (μ)
    scale : float
        Scale (σ)
    freedom : float
        Degrees of freedom (ν)
    """

    location: float
    scale: float
    freedom: float

    @constraint(description="scale > 0")
    def check_scale_positive(self) -> bool:
        return self.scale > 0

    @constraint(description="freedom > 0")
    def check_freedom_positive(self) -> bool:
        return self.freedom > 0

    @constraint(description="location is not NaN")
    def check_location_not_nan(self) -> bool:
        return not math.isnan(self.location)


def is_valid_parameter_set(location: float, scale: float, freedom: float) -> bool:
    return StudentTLocationScaleFreedom(location=location, scale=scale, freedom=freedom).is_valid()


def _pdf_ln(location: float, scale: float, freedom: float, x: float) -> float:
    if freedom >= numeric_config().student_t_normal_threshold:
        return normal.pdf_ln(location, scale, x)
    d = (x - location) / scale
    return (
        special.gamma_ln(0.5 * (freedom + 1.0))
        - 0.5 * (freedom + 1.0) * math.log1p(d * d / freedom)
        - special.gamma_ln(0.5 * freedom)
        - 0.5 * math.log(freedom * math.pi)
        - math.log(scale)
    )


def _pdf(location: float, scale: float, freedom: float, x: float) -> float:
    if freedom >= numeric_config().student_t_normal_threshold:
        return normal.pdf(location, scale, x)
    if math.isinf(x):
        return 0.0
    return math.exp(_pdf_ln(location, scale, freedom, x))


def _standard_cdf(freedom: float, t: float) -> float:
    if math.isinf(t):
        return 0.0 if t < 0 else 1.0
    h = freedom / (freedom + t * t)
    ib = 0.5 * special.beta_regularized(0.5 * freedom, 0.5, h)
    return ib if t <= 0 else 1.0 - ib


def _cdf(location: float, scale: float, freedom: float, x: float) -> float:
    if math.isinf(freedom):
        return normal.cdf(location, scale, x)
    return _standard_cdf(freedom, (x - location) / scale)


def _inv_cdf(location: float, scale: float, freedom: float, p: float) -> float:
    check_probability(p)
    if math.isinf(freedom):
        return normal.inv_cdf(location, scale, p)
    if p == 0.0:
        return -math.inf
    if p == 1.0:
        return math.inf
    if p == 0.5:
        return location
    t = find_root_bracketed(
        lambda t: _standard_cdf(freedom, t) - p, -_QUANTILE_BRACKET, _QUANTILE_BRACKET
    )
    return location + scale * t


def pdf(location: float, scale: float, freedom: float, x: float) -> float:
    """
    Probability density function for Student's t-distribution.

    Parameters
    ----------
    location : float
        Location (μ)
    scale : float
        Scale (σ), positive
    freedom : float
        Degrees of freedom (ν), positive
    x : float
        Point at which to evaluate the density

    Returns
    -------
    float
        Density at ``x``
    """
    StudentTLocationScaleFreedom(location=location, scale=scale, freedom=freedom).validate()
    return _pdf(location, scale, freedom, x)


def pdf_ln(location: float, scale: float, freedom: float, x: float) -> float:
    StudentTLocationScaleFreedom(location=location, scale=scale, freedom=freedom).validate()
    return _pdf_ln(location, scale, freedom, x)


def cdf(location: float, scale: float, freedom: float, x: float) -> float:
    """CDF via the regularized incomplete beta function ``I_{ν/(ν+t²)}(ν/2, 1/2)``."""
    StudentTLocationScaleFreedom(location=location, scale=scale, freedom=freedom).validate()
    return _cdf(location, scale, freedom, x)


def inv_cdf(location: float, scale: float, freedom: float, p: float) -> float:
    StudentTLocationScaleFreedom(location=location, scale=scale, freedom=freedom).validate()
    return _inv_cdf(location, scale, freedom, p)


def sample_unchecked(
    rng: np.random.Generator, location: float, scale: float, freedom: float
) -> float:
    """Normal variate whose variance is scaled by an independent chi-squared draw."""
    if math.isinf(freedom):
        return normal.sample_unchecked(rng, location, scale)
    chi2 = gamma.sample_unchecked(rng, 0.5 * freedom, 0.5)
    return normal.sample_unchecked(rng, location, scale * math.sqrt(freedom / chi2))


def sample(
    location: float, scale: float, freedom: float, *, rng: np.random.Generator | None = None
) -> float:
    StudentTLocationScaleFreedom(location=location, scale=scale, freedom=freedom).validate()
    return sample_unchecked(resolve_random_source(rng), location, scale, freedom)


def fill_samples(
    values: npt.NDArray[np.float64],
    location: float,
    scale: float,
    freedom: float,
    *,
    rng: np.random.Generator | None = None,
) -> None:
    StudentTLocationScaleFreedom(location=location, scale=scale, freedom=freedom).validate()
    source = resolve_random_source(rng)
    fill_sequentially(values, lambda: sample_unchecked(source, location, scale, freedom))


def samples(
    n: int,
    location: float,
    scale: float,
    freedom: float,
    *,
    rng: np.random.Generator | None = None,
) -> FloatArray:
    values = new_buffer(n, np.float64)
    fill_samples(values, location, scale, freedom, rng=rng)
    return values


def iter_samples(
    location: float, scale: float, freedom: float, *, rng: np.random.Generator | None = None
) -> Iterator[float]:
    StudentTLocationScaleFreedom(location=location, scale=scale, freedom=freedom).validate()
    source = resolve_random_source(rng)
    return sample_stream(lambda: sample_unchecked(source, location, scale, freedom))


class StudentT(ContinuousDistribution):
    """
    Student's t-distribution.

    Parameters
    ----------
    location : float
        Location μ, defaults to 0.
    scale : float
        Scale σ > 0, defaults to 1.
    freedom : float
        Degrees of freedom ν > 0, defaults to 1 (the Cauchy distribution).
    random_source : numpy.random.Generator, optional
        Generator used for sampling.
    """

    def __init__(
        self,
        location: float = 0.0,
        scale: float = 1.0,
        freedom: float = 1.0,
        random_source: np.random.Generator | None = None,
    ) -> None:
        self._parameters = StudentTLocationScaleFreedom(
            location=location, scale=scale, freedom=freedom
        )
        self._parameters.validate()
        self._location = location
        self._scale = scale
        self._freedom = freedom
        self._random_source = resolve_random_source(random_source)

    def __repr__(self) -> str:
        return (
            f"StudentT(location={self._location}, scale={self._scale}, freedom={self._freedom})"
        )

    @property
    def location(self) -> float:
        return self._location

    @property
    def scale(self) -> float:
        return self._scale

    @property
    def freedom(self) -> float:
        return self._freedom

    @property
    def support(self) -> ContinuousSupport:
        return ContinuousSupport()

    @property
    def mean(self) -> float:
        """Location for ν > 1, NaN otherwise."""
        return self._location if self._freedom > 1.0 else math.nan

    @property
    def variance(self) -> float:
        """``νσ²/(ν-2)`` for ν > 2, ``inf`` for 1 < ν ≤ 2 and NaN for ν ≤ 1."""
        if math.isinf(self._freedom):
            return self._scale * self._scale
        if self._freedom > 2.0:
            return self._freedom * self._scale * self._scale / (self._freedom - 2.0)
        return math.inf if self._freedom > 1.0 else math.nan

    @property
    def entropy(self) -> float:
        nu = self._freedom
        if math.isinf(nu):
            return 0.5 * math.log(2.0 * math.pi * math.e * self._scale * self._scale)
        standard = 0.5 * (nu + 1.0) * (
            special.digamma(0.5 * (nu + 1.0)) - special.digamma(0.5 * nu)
        ) + 0.5 * math.log(nu) + special.beta_ln(0.5 * nu, 0.5)
        return standard + math.log(self._scale)

    @property
    def skewness(self) -> float:
        if self._freedom <= 3.0:
            raise NotSupportedError("Student's t skewness is undefined for freedom <= 3")
        return 0.0

    @property
    def mode(self) -> float:
        return self._location

    @property
    def median(self) -> float:
        return self._location

    def density(self, x: float) -> float:
        return _pdf(self._location, self._scale, self._freedom, x)

    def density_ln(self, x: float) -> float:
        return _pdf_ln(self._location, self._scale, self._freedom, x)

    def cumulative_distribution(self, x: float) -> float:
        return _cdf(self._location, self._scale, self._freedom, x)

    def inverse_cumulative_distribution(self, p: float) -> float:
        return _inv_cdf(self._location, self._scale, self._freedom, p)

    def sample(self) -> float:
        return sample_unchecked(self._random_source, self._location, self._scale, self._freedom)
