"""
Stable distribution.

Lévy alpha-stable distribution with stability α ∈ (0, 2], skewness
β ∈ [-1, 1], scale c > 0 and location μ.

The density, the CDF and the quantile have closed forms only in three
cases, which are the ones evaluated here:

- α = 2: the normal distribution with standard deviation ``√2·c``;
- α = 1, β = 0: the Cauchy distribution;
- α = 1/2, β = 1: the Lévy distribution on ``[μ, inf)``.

Other parameter sets raise
:class:`~pysatl_univariate.errors.NotSupportedError` for these functions but
can always be sampled with the Chambers-Mallows-Stuck method.
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
from pysatl_univariate.distributions.sampling import (
    fill_sequentially,
    new_buffer,
    sample_stream,
    uniform_open,
)
from pysatl_univariate.distributions.support import ContinuousSupport
from pysatl_univariate.errors import NotSupportedError, check_probability
from pysatl_univariate.families.builtins.continuous import cauchy, normal
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
_HALF_PI = 0.5 * math.pi


@parametrization(name="alphaBetaScaleLocation")
class StableParameters(Parametrization):
    """
    Standard parametrization of stable distribution.

    Parameters
    ----------
    alpha : float
        Stability (α)
    beta : float
        Skewness (β)
    scale : float
        Scale (c)
    location : float
        Location (μ)
    """

    alpha: float
    beta: float
    scale: float
    location: float

    @constraint(description="0 < alpha <= 2")
    def check_alpha_range(self) -> bool:
        return 0 < self.alpha <= 2

    @constraint(description="-1 <= beta <= 1")
    def check_beta_range(self) -> bool:
        return -1 <= self.beta <= 1

    @constraint(description="scale > 0")
    def check_scale_positive(self) -> bool:
        return self.scale > 0

    @constraint(description="location is not NaN")
    def check_location_not_nan(self) -> bool:
        return not math.isnan(self.location)


def is_valid_parameter_set(alpha: float, beta: float, scale: float, location: float) -> bool:
    return StableParameters(alpha=alpha, beta=beta, scale=scale, location=location).is_valid()


def _is_normal(alpha: float, beta: float) -> bool:
    return alpha == 2.0


def _is_cauchy(alpha: float, beta: float) -> bool:
    return alpha == 1.0 and beta == 0.0


def _is_levy(alpha: float, beta: float) -> bool:
    return alpha == 0.5 and beta == 1.0


def _no_closed_form(alpha: float, beta: float) -> NotSupportedError:
    return NotSupportedError(
        f"Stable distribution with alpha={alpha}, beta={beta} has no closed form"
    )


def _pdf(alpha: float, beta: float, scale: float, location: float, x: float) -> float:
    if _is_normal(alpha, beta):
        return normal.pdf(location, _SQRT_2 * scale, x)
    if _is_cauchy(alpha, beta):
        return cauchy.pdf(location, scale, x)
    if _is_levy(alpha, beta):
        if x <= location or math.isinf(x):
            return 0.0
        return math.exp(_pdf_ln(alpha, beta, scale, location, x))
    raise _no_closed_form(alpha, beta)


def _pdf_ln(alpha: float, beta: float, scale: float, location: float, x: float) -> float:
    if _is_normal(alpha, beta):
        return normal.pdf_ln(location, _SQRT_2 * scale, x)
    if _is_cauchy(alpha, beta):
        return cauchy.pdf_ln(location, scale, x)
    if _is_levy(alpha, beta):
        if x <= location or math.isinf(x):
            return -math.inf
        d = x - location
        return 0.5 * math.log(scale / (2.0 * math.pi)) - scale / (2.0 * d) - 1.5 * math.log(d)
    raise _no_closed_form(alpha, beta)


def _cdf(alpha: float, beta: float, scale: float, location: float, x: float) -> float:
    if _is_normal(alpha, beta):
        return normal.cdf(location, _SQRT_2 * scale, x)
    if _is_cauchy(alpha, beta):
        return cauchy.cdf(location, scale, x)
    if _is_levy(alpha, beta):
        if x <= location:
            return 0.0
        return special.erfc(math.sqrt(scale / (2.0 * (x - location))))
    raise _no_closed_form(alpha, beta)


def _inv_cdf(alpha: float, beta: float, scale: float, location: float, p: float) -> float:
    if _is_normal(alpha, beta):
        return normal.inv_cdf(location, _SQRT_2 * scale, p)
    if _is_cauchy(alpha, beta):
        return cauchy.inv_cdf(location, scale, p)
    if _is_levy(alpha, beta):
        check_probability(p)
        if p == 0.0:
            return location
        if p == 1.0:
            return math.inf
        root = special.erfc_inv(p)
        return location + scale / (2.0 * root * root)
    raise _no_closed_form(alpha, beta)


def pdf(alpha: float, beta: float, scale: float, location: float, x: float) -> float:
    """
    Probability density function for stable distribution.

    Raises
    ------
    InvalidParameterError
        If the parameter set is invalid.
    NotSupportedError
        If the parameters are not one of the closed-form cases.
    """
    StableParameters(alpha=alpha, beta=beta, scale=scale, location=location).validate()
    return _pdf(alpha, beta, scale, location, x)


def pdf_ln(alpha: float, beta: float, scale: float, location: float, x: float) -> float:
    StableParameters(alpha=alpha, beta=beta, scale=scale, location=location).validate()
    return _pdf_ln(alpha, beta, scale, location, x)


def cdf(alpha: float, beta: float, scale: float, location: float, x: float) -> float:
    StableParameters(alpha=alpha, beta=beta, scale=scale, location=location).validate()
    return _cdf(alpha, beta, scale, location, x)


def inv_cdf(alpha: float, beta: float, scale: float, location: float, p: float) -> float:
    """Quantile function; the Lévy case is ``μ + c / (2·erfcinv(p)²)``."""
    StableParameters(alpha=alpha, beta=beta, scale=scale, location=location).validate()
    return _inv_cdf(alpha, beta, scale, location, p)


def _chambers_mallows_stuck(
    alpha: float, beta: float, scale: float, location: float, theta: float, w: float
) -> float:
    if not math.isclose(alpha, 1.0):
        skew = beta * math.tan(_HALF_PI * alpha)
        shift = math.atan(skew) / alpha
        angle = alpha * (theta + shift)
        factor = special.power(1.0 + skew * skew, 1.0 / (2.0 * alpha))
        factor1 = math.sin(angle) / special.power(math.cos(theta), 1.0 / alpha)
        factor2 = special.power(math.cos(theta - angle) / w, (1.0 - alpha) / alpha)
        return location + scale * factor * factor1 * factor2

    part = _HALF_PI + beta * theta
    summand = part * math.tan(theta)
    subtrahend = beta * math.log(_HALF_PI * w * math.cos(theta) / part)
    return location + scale * (summand - subtrahend) / _HALF_PI


def sample_unchecked(
    rng: np.random.Generator, alpha: float, beta: float, scale: float, location: float
) -> float:
    """
    Draw one variate with the Chambers-Mallows-Stuck method.

    Uses ``θ ~ U(-π/2, π/2)`` and ``w ~ Exp(1)``; α = 1 takes the separate
    closed form of the method.
    """
    theta = math.pi * float(rng.random()) - _HALF_PI
    w = -math.log(uniform_open(rng))
    return _chambers_mallows_stuck(alpha, beta, scale, location, theta, w)


def sample(
    alpha: float,
    beta: float,
    scale: float,
    location: float,
    *,
    rng: np.random.Generator | None = None,
) -> float:
    StableParameters(alpha=alpha, beta=beta, scale=scale, location=location).validate()
    return sample_unchecked(resolve_random_source(rng), alpha, beta, scale, location)


def fill_samples(
    values: npt.NDArray[np.float64],
    alpha: float,
    beta: float,
    scale: float,
    location: float,
    *,
    rng: np.random.Generator | None = None,
) -> None:
    StableParameters(alpha=alpha, beta=beta, scale=scale, location=location).validate()
    source = resolve_random_source(rng)
    fill_sequentially(values, lambda: sample_unchecked(source, alpha, beta, scale, location))


def samples(
    n: int,
    alpha: float,
    beta: float,
    scale: float,
    location: float,
    *,
    rng: np.random.Generator | None = None,
) -> FloatArray:
    values = new_buffer(n, np.float64)
    fill_samples(values, alpha, beta, scale, location, rng=rng)
    return values


def iter_samples(
    alpha: float,
    beta: float,
    scale: float,
    location: float,
    *,
    rng: np.random.Generator | None = None,
) -> Iterator[float]:
    StableParameters(alpha=alpha, beta=beta, scale=scale, location=location).validate()
    source = resolve_random_source(rng)
    return sample_stream(lambda: sample_unchecked(source, alpha, beta, scale, location))


class Stable(ContinuousDistribution):
    """
    Stable distribution.

    Parameters
    ----------
    alpha : float
        Stability α ∈ (0, 2].
    beta : float
        Skewness β ∈ [-1, 1].
    scale : float
        Scale c > 0.
    location : float
        Location μ.
    random_source : numpy.random.Generator, optional
        Generator used for sampling.
    """

    def __init__(
        self,
        alpha: float,
        beta: float,
        scale: float,
        location: float,
        random_source: np.random.Generator | None = None,
    ) -> None:
        self._parameters = StableParameters(
            alpha=alpha, beta=beta, scale=scale, location=location
        )
        self._parameters.validate()
        self._alpha = alpha
        self._beta = beta
        self._scale = scale
        self._location = location
        self._random_source = resolve_random_source(random_source)

    def __repr__(self) -> str:
        return (
            f"Stable(alpha={self._alpha}, beta={self._beta}, "
            f"scale={self._scale}, location={self._location})"
        )

    @property
    def alpha(self) -> float:
        return self._alpha

    @property
    def beta(self) -> float:
        return self._beta

    @property
    def scale(self) -> float:
        return self._scale

    @property
    def location(self) -> float:
        return self._location

    @property
    def support(self) -> ContinuousSupport:
        if self._alpha < 1.0 and self._beta == 1.0:
            return ContinuousSupport(self._location)
        if self._alpha < 1.0 and self._beta == -1.0:
            return ContinuousSupport(right=self._location)
        return ContinuousSupport()

    @property
    def mean(self) -> float:
        if self._alpha <= 1.0:
            raise NotSupportedError("Stable mean is undefined for alpha <= 1")
        return self._location

    @property
    def variance(self) -> float:
        if self._alpha == 2.0:
            return 2.0 * self._scale * self._scale
        return math.inf

    @property
    def std_dev(self) -> float:
        if self._alpha == 2.0:
            return _SQRT_2 * self._scale
        return math.inf

    @property
    def entropy(self) -> float:
        raise NotSupportedError("Stable entropy is not implemented")

    @property
    def skewness(self) -> float:
        if self._alpha != 2.0:
            raise NotSupportedError("Stable skewness is undefined for alpha < 2")
        return 0.0

    @property
    def mode(self) -> float:
        if self._beta != 0.0:
            raise NotSupportedError("Stable mode has no closed form for beta != 0")
        return self._location

    @property
    def median(self) -> float:
        if self._beta != 0.0:
            raise NotSupportedError("Stable median has no closed form for beta != 0")
        return self._location

    def density(self, x: float) -> float:
        return _pdf(self._alpha, self._beta, self._scale, self._location, x)

    def density_ln(self, x: float) -> float:
        return _pdf_ln(self._alpha, self._beta, self._scale, self._location, x)

    def cumulative_distribution(self, x: float) -> float:
        return _cdf(self._alpha, self._beta, self._scale, self._location, x)

    def inverse_cumulative_distribution(self, p: float) -> float:
        return _inv_cdf(self._alpha, self._beta, self._scale, self._location, p)

    def sample(self) -> float:
        return sample_unchecked(
            self._random_source, self._alpha, self._beta, self._scale, self._location
        )
