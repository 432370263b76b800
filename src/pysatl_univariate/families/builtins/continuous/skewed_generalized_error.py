"""
Skewed generalized error distribution.

Theodossiou's skewed generalized error distribution with location μ, scale
σ > 0, skew λ ∈ (-1, 1) and shape p > 0, parametrized so that μ is the mean
and σ the standard deviation. Internally the density is centered at its
mode ``μ - m`` with scale ``v``:

    f(x) = p / (2vΓ(1/p)) * exp(-(|y| / (v(1 + λ·sgn y)))^p), y = x - μ + m

where ``v`` and ``m`` are the scale and mean shift that give mean μ and
variance σ². ``p = 2, λ = 0`` is the normal distribution and ``p = 1,
λ = 0`` the Laplace distribution.
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


@parametrization(name="locationScaleSkewP")
class SkewedGeneralizedErrorParameters(Parametrization):
    """
    Standard parametrization of skewed generalized error distribution.

    Parameters
    ----------
    location : float
        Mean (μ)
    scale : float
        Standard deviation (σ)
    skew : float
        Skewness parameter (λ)
    p : float
        Shape parameter controlling the peakedness
    """

    location: float
    scale: float
    skew: float
    p: float

    @constraint(description="scale > 0")
    def check_scale_positive(self) -> bool:
        return self.scale > 0

    @constraint(description="-1 < skew < 1")
    def check_skew_range(self) -> bool:
        return -1 < self.skew < 1

    @constraint(description="p > 0")
    def check_p_positive(self) -> bool:
        return self.p > 0

    @constraint(description="location is not NaN")
    def check_location_not_nan(self) -> bool:
        return not math.isnan(self.location)


def is_valid_parameter_set(location: float, scale: float, skew: float, p: float) -> bool:
    return SkewedGeneralizedErrorParameters(
        location=location, scale=scale, skew=skew, p=p
    ).is_valid()


def _gamma_ratio(k: int, p: float) -> float:
    # Γ((k + 1)/p) / Γ(1/p)
    return math.exp(special.gamma_ln((k + 1.0) / p) - special.gamma_ln(1.0 / p))


def _raw_moment(k: int, v: float, skew: float, p: float) -> float:
    """``E[Y^k]`` of the mode-centered variable with scale ``v``."""
    tails = (1.0 + skew) ** (k + 1) + (-1.0) ** k * (1.0 - skew) ** (k + 1)
    return 0.5 * v**k * _gamma_ratio(k, p) * tails


def _adjusted_scale(scale: float, skew: float, p: float) -> float:
    """Scale ``v`` for which the variance equals ``scale²``."""
    unit_variance = _raw_moment(2, 1.0, skew, p) - _raw_moment(1, 1.0, skew, p) ** 2
    return scale / math.sqrt(unit_variance)


def _mean_shift(v: float, skew: float, p: float) -> float:
    """Distance ``m`` from the mode to the mean."""
    return _raw_moment(1, v, skew, p)


def _standardized(location: float, scale: float, skew: float, p: float) -> tuple[float, float]:
    v = _adjusted_scale(scale, skew, p)
    return v, _mean_shift(v, skew, p) - location


def _pdf_ln(location: float, scale: float, skew: float, p: float, x: float) -> float:
    v, shift = _standardized(location, scale, skew, p)
    y = x + shift
    if math.isinf(y):
        return -math.inf
    side = v * (1.0 + skew * math.copysign(1.0, y))
    return (
        math.log(p)
        - math.log(2.0 * v)
        - special.gamma_ln(1.0 / p)
        - special.power(abs(y) / side, p)
    )


def _pdf(location: float, scale: float, skew: float, p: float, x: float) -> float:
    return math.exp(_pdf_ln(location, scale, skew, p, x))


def _cdf(location: float, scale: float, skew: float, p: float, x: float) -> float:
    v, shift = _standardized(location, scale, skew, p)
    y = x + shift
    flip = y < 0
    if flip:
        skew = -skew
        y = -y
    tail = special.gamma_lower_regularized(1.0 / p, special.power(y / (v * (1.0 + skew)), p))
    result = 0.5 * (1.0 - skew) + 0.5 * (1.0 + skew) * tail
    return 1.0 - result if flip else result


def _inv_cdf(location: float, scale: float, skew: float, p: float, probability: float) -> float:
    check_probability(probability)
    if probability == 0.0:
        return -math.inf
    if probability == 1.0:
        return math.inf
    v, shift = _standardized(location, scale, skew, p)
    flip = probability < 0.5 * (1.0 - skew)
    lam = skew
    if flip:
        probability = 1.0 - probability
        lam = -lam
    level = 2.0 * probability / (1.0 + lam) + (lam - 1.0) / (lam + 1.0)
    level = min(1.0, max(0.0, level))
    root = special.gamma_lower_regularized_inv(1.0 / p, level)
    y = v * (1.0 + lam) * special.power(root, 1.0 / p)
    return (-y if flip else y) - shift


def _skewness(scale: float, skew: float, p: float) -> float:
    if skew == 0:
        return 0.0
    v = _adjusted_scale(scale, skew, p)
    m1 = _raw_moment(1, v, skew, p)
    m2 = _raw_moment(2, v, skew, p)
    m3 = _raw_moment(3, v, skew, p)
    central3 = m3 - 3.0 * m1 * m2 + 2.0 * m1**3
    return central3 / scale**3


def pdf(location: float, scale: float, skew: float, p: float, x: float) -> float:
    """
    Probability density function for skewed generalized error distribution.

    Parameters
    ----------
    location : float
        Mean (μ)
    scale : float
        Standard deviation (σ), positive
    skew : float
        Skewness parameter (λ), in (-1, 1)
    p : float
        Shape, positive
    x : float
        Point at which to evaluate the density

    Returns
    -------
    float
        Density at ``x``
    """
    SkewedGeneralizedErrorParameters(location=location, scale=scale, skew=skew, p=p).validate()
    return _pdf(location, scale, skew, p, x)


def pdf_ln(location: float, scale: float, skew: float, p: float, x: float) -> float:
    SkewedGeneralizedErrorParameters(location=location, scale=scale, skew=skew, p=p).validate()
    return _pdf_ln(location, scale, skew, p, x)


def cdf(location: float, scale: float, skew: float, p: float, x: float) -> float:
    """CDF through the regularized lower incomplete gamma function ``P(1/p, ·)``."""
    SkewedGeneralizedErrorParameters(location=location, scale=scale, skew=skew, p=p).validate()
    return _cdf(location, scale, skew, p, x)


def inv_cdf(location: float, scale: float, skew: float, p: float, probability: float) -> float:
    SkewedGeneralizedErrorParameters(location=location, scale=scale, skew=skew, p=p).validate()
    return _inv_cdf(location, scale, skew, p, probability)


def sample_unchecked(
    rng: np.random.Generator, location: float, scale: float, skew: float, p: float
) -> float:
    return _inv_cdf(location, scale, skew, p, uniform_open(rng))


def sample(
    location: float,
    scale: float,
    skew: float,
    p: float,
    *,
    rng: np.random.Generator | None = None,
) -> float:
    SkewedGeneralizedErrorParameters(location=location, scale=scale, skew=skew, p=p).validate()
    return sample_unchecked(resolve_random_source(rng), location, scale, skew, p)


def fill_samples(
    values: npt.NDArray[np.float64],
    location: float,
    scale: float,
    skew: float,
    p: float,
    *,
    rng: np.random.Generator | None = None,
) -> None:
    SkewedGeneralizedErrorParameters(location=location, scale=scale, skew=skew, p=p).validate()
    source = resolve_random_source(rng)
    fill_sequentially(values, lambda: sample_unchecked(source, location, scale, skew, p))


def samples(
    n: int,
    location: float,
    scale: float,
    skew: float,
    p: float,
    *,
    rng: np.random.Generator | None = None,
) -> FloatArray:
    values = new_buffer(n, np.float64)
    fill_samples(values, location, scale, skew, p, rng=rng)
    return values


def iter_samples(
    location: float,
    scale: float,
    skew: float,
    p: float,
    *,
    rng: np.random.Generator | None = None,
) -> Iterator[float]:
    SkewedGeneralizedErrorParameters(location=location, scale=scale, skew=skew, p=p).validate()
    source = resolve_random_source(rng)
    return sample_stream(lambda: sample_unchecked(source, location, scale, skew, p))


class SkewedGeneralizedError(ContinuousDistribution):
    """
    Skewed generalized error distribution.

    Parameters
    ----------
    location : float
        Mean μ, defaults to 0.
    scale : float
        Standard deviation σ > 0, defaults to 1.
    skew : float
        Skewness parameter λ ∈ (-1, 1), defaults to 0.
    p : float
        Shape p > 0, defaults to 2 (the normal distribution).
    random_source : numpy.random.Generator, optional
        Generator used for sampling.
    """

    def __init__(
        self,
        location: float = 0.0,
        scale: float = 1.0,
        skew: float = 0.0,
        p: float = 2.0,
        random_source: np.random.Generator | None = None,
    ) -> None:
        self._parameters = SkewedGeneralizedErrorParameters(
            location=location, scale=scale, skew=skew, p=p
        )
        self._parameters.validate()
        self._location = location
        self._scale = scale
        self._skew = skew
        self._p = p
        self._skewness = _skewness(scale, skew, p)
        self._random_source = resolve_random_source(random_source)

    def __repr__(self) -> str:
        return (
            f"SkewedGeneralizedError(location={self._location}, scale={self._scale}, "
            f"skew={self._skew}, p={self._p})"
        )

    @property
    def location(self) -> float:
        return self._location

    @property
    def scale(self) -> float:
        return self._scale

    @property
    def skew(self) -> float:
        return self._skew

    @property
    def p(self) -> float:
        return self._p

    @property
    def support(self) -> ContinuousSupport:
        return ContinuousSupport()

    @property
    def mean(self) -> float:
        return self._location

    @property
    def variance(self) -> float:
        return self._scale * self._scale

    @property
    def std_dev(self) -> float:
        return self._scale

    @property
    def entropy(self) -> float:
        raise NotSupportedError("Skewed generalized error entropy is not implemented")

    @property
    def skewness(self) -> float:
        return self._skewness

    @property
    def mode(self) -> float:
        if self._skew == 0:
            return self._location
        v = _adjusted_scale(self._scale, self._skew, self._p)
        return self._location - _mean_shift(v, self._skew, self._p)

    @property
    def median(self) -> float:
        if self._skew == 0:
            return self._location
        return _inv_cdf(self._location, self._scale, self._skew, self._p, 0.5)

    def density(self, x: float) -> float:
        return _pdf(self._location, self._scale, self._skew, self._p, x)

    def density_ln(self, x: float) -> float:
        return _pdf_ln(self._location, self._scale, self._skew, self._p, x)

    def cumulative_distribution(self, x: float) -> float:
        return _cdf(self._location, self._scale, self._skew, self._p, x)

    def inverse_cumulative_distribution(self, p: float) -> float:
        return _inv_cdf(self._location, self._scale, self._skew, self._p, p)

    def sample(self) -> float:
        return sample_unchecked(
            self._random_source, self._location, self._scale, self._skew, self._p
        )
