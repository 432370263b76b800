"""
Skewed generalized t-distribution.

Hansen, McDonald and Newey's skewed generalized t-distribution with location
μ, scale σ > 0, skew λ ∈ (-1, 1) and shapes p > 0, q > 0 with ``pq > 2``,
parametrized so that μ is the mean and σ the standard deviation.

Limits of the shapes are handled by a delegate distribution chosen at
construction time, in this order:

1. ``p = inf``: the continuous uniform distribution on ``μ ± √3σ``;
2. ``q = inf``: :class:`.SkewedGeneralizedError` with the same μ, σ, λ, p.

Every function, statistic and sampler is then answered by the delegate.
Otherwise the full formulation is used, with the CDF and the quantile built
on the regularized incomplete beta function and its inverse.
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
from pysatl_univariate.families.builtins.continuous import skewed_generalized_error, uniform
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

_SQRT_3 = math.sqrt(3.0)


@parametrization(name="locationScaleSkewPQ")
class SkewedGeneralizedTParameters(Parametrization):
    """
    Standard parametrization of skewed generalized t-distribution.

    Parameters
    ----------
    location : float
        Mean (μ)
    scale : float
        Standard deviation (σ)
    skew : float
        Skewness parameter (λ)
    p : float
        First shape parameter, peakedness
    q : float
        Second shape parameter, tail thickness
    """

    location: float
    scale: float
    skew: float
    p: float
    q: float

    @constraint(description="scale > 0")
    def check_scale_positive(self) -> bool:
        return self.scale > 0

    @constraint(description="-1 < skew < 1")
    def check_skew_range(self) -> bool:
        return -1 < self.skew < 1

    @constraint(description="p > 0")
    def check_p_positive(self) -> bool:
        return self.p > 0

    @constraint(description="q > 0")
    def check_q_positive(self) -> bool:
        return self.q > 0

    @constraint(description="p * q > 2")
    def check_variance_finite(self) -> bool:
        return self.p * self.q > 2

    @constraint(description="location is not NaN")
    def check_location_not_nan(self) -> bool:
        return not math.isnan(self.location)


def is_valid_parameter_set(
    location: float, scale: float, skew: float, p: float, q: float
) -> bool:
    return SkewedGeneralizedTParameters(
        location=location, scale=scale, skew=skew, p=p, q=q
    ).is_valid()


def find_specialized_distribution(
    location: float,
    scale: float,
    skew: float,
    p: float,
    q: float,
    random_source: np.random.Generator | None = None,
) -> ContinuousDistribution | None:
    """
    Distribution equal to the given parameter set in a shape limit.

    Returns
    -------
    ContinuousDistribution or None
        Uniform distribution for ``p = inf``, skewed generalized error
        distribution for ``q = inf`` and ``None`` otherwise.
    """
    if math.isinf(p):
        half_width = _SQRT_3 * scale
        return uniform.ContinuousUniform(
            location - half_width, location + half_width, random_source
        )
    if math.isinf(q):
        return skewed_generalized_error.SkewedGeneralizedError(
            location, scale, skew, p, random_source
        )
    return None


def _beta_ratio(k: int, p: float, q: float) -> float:
    # B((k + 1)/p, q - k/p) / B(1/p, q)
    return math.exp(
        special.beta_ln((k + 1.0) / p, q - k / p) - special.beta_ln(1.0 / p, q)
    )


def _raw_moment(k: int, v: float, skew: float, p: float, q: float) -> float:
    """``E[Y^k]`` of the mode-centered variable with scale ``v``, finite for ``pq > k``."""
    tails = (1.0 + skew) ** (k + 1) + (-1.0) ** k * (1.0 - skew) ** (k + 1)
    return 0.5 * v**k * special.power(q, k / p) * _beta_ratio(k, p, q) * tails


def _adjusted_scale(scale: float, skew: float, p: float, q: float) -> float:
    unit_variance = _raw_moment(2, 1.0, skew, p, q) - _raw_moment(1, 1.0, skew, p, q) ** 2
    return scale / math.sqrt(unit_variance)


def _standardized(
    location: float, scale: float, skew: float, p: float, q: float
) -> tuple[float, float]:
    v = _adjusted_scale(scale, skew, p, q)
    return v, _raw_moment(1, v, skew, p, q) - location


def _full_pdf_ln(location: float, scale: float, skew: float, p: float, q: float, x: float) -> float:
    v, shift = _standardized(location, scale, skew, p, q)
    y = x + shift
    if math.isinf(y):
        return -math.inf
    side = v * (1.0 + skew * math.copysign(1.0, y))
    return (
        math.log(p)
        - math.log(2.0 * v)
        - math.log(q) / p
        - special.beta_ln(1.0 / p, q)
        - (1.0 / p + q) * math.log1p(special.power(abs(y) / side, p) / q)
    )


def _full_cdf(location: float, scale: float, skew: float, p: float, q: float, x: float) -> float:
    v, shift = _standardized(location, scale, skew, p, q)
    y = x + shift
    flip = y > 0
    if flip:
        skew = -skew
        y = -y
    if y == 0:
        level = 0.0
    else:
        level = 1.0 / (1.0 + q * special.power(v * (1.0 - skew) / -y, p))
    result = 0.5 * (1.0 - skew) - 0.5 * (1.0 - skew) * special.beta_regularized(1.0 / p, q, level)
    return 1.0 - result if flip else result


def _full_inv_cdf(
    location: float, scale: float, skew: float, p: float, q: float, probability: float
) -> float:
    if probability == 0.0:
        return -math.inf
    if probability == 1.0:
        return math.inf
    v, shift = _standardized(location, scale, skew, p, q)
    flip = probability > 0.5 * (1.0 - skew)
    lam = skew
    if flip:
        probability = 1.0 - probability
        lam = -lam
    level = min(1.0, max(0.0, 1.0 - 2.0 * probability / (1.0 - lam)))
    z = special.beta_regularized_inv(1.0 / p, q, level)
    if z == 0:
        y = 0.0
    else:
        y = v * (lam - 1.0) * special.power(max(0.0, 1.0 / (q * z) - 1.0 / q), -1.0 / p)
    return (-y if flip else y) - shift


def _pdf_ln(location: float, scale: float, skew: float, p: float, q: float, x: float) -> float:
    delegate = find_specialized_distribution(location, scale, skew, p, q)
    if delegate is not None:
        return delegate.density_ln(x)
    return _full_pdf_ln(location, scale, skew, p, q, x)


def _pdf(location: float, scale: float, skew: float, p: float, q: float, x: float) -> float:
    delegate = find_specialized_distribution(location, scale, skew, p, q)
    if delegate is not None:
        return delegate.density(x)
    return math.exp(_full_pdf_ln(location, scale, skew, p, q, x))


def _cdf(location: float, scale: float, skew: float, p: float, q: float, x: float) -> float:
    delegate = find_specialized_distribution(location, scale, skew, p, q)
    if delegate is not None:
        return delegate.cumulative_distribution(x)
    return _full_cdf(location, scale, skew, p, q, x)


def _inv_cdf(
    location: float, scale: float, skew: float, p: float, q: float, probability: float
) -> float:
    check_probability(probability)
    delegate = find_specialized_distribution(location, scale, skew, p, q)
    if delegate is not None:
        return delegate.inverse_cumulative_distribution(probability)
    return _full_inv_cdf(location, scale, skew, p, q, probability)


def _skewness(scale: float, skew: float, p: float, q: float) -> float:
    if p * q <= 3:
        raise NotSupportedError("Skewed generalized t skewness is undefined for p * q <= 3")
    if skew == 0:
        return 0.0
    v = _adjusted_scale(scale, skew, p, q)
    m1 = _raw_moment(1, v, skew, p, q)
    m2 = _raw_moment(2, v, skew, p, q)
    m3 = _raw_moment(3, v, skew, p, q)
    return (m3 - 3.0 * m1 * m2 + 2.0 * m1**3) / scale**3


def pdf(location: float, scale: float, skew: float, p: float, q: float, x: float) -> float:
    """
    Probability density function for skewed generalized t-distribution.

    Parameters
    ----------
    location : float
        Mean (μ)
    scale : float
        Standard deviation (σ), positive
    skew : float
        Skewness parameter (λ), in (-1, 1)
    p : float
        First shape, positive, may be infinite
    q : float
        Second shape, positive, may be infinite
    x : float
        Point at which to evaluate the density

    Returns
    -------
    float
        Density at ``x``, taken from the delegate distribution in a shape
        limit
    """
    SkewedGeneralizedTParameters(location=location, scale=scale, skew=skew, p=p, q=q).validate()
    return _pdf(location, scale, skew, p, q, x)


def pdf_ln(location: float, scale: float, skew: float, p: float, q: float, x: float) -> float:
    SkewedGeneralizedTParameters(location=location, scale=scale, skew=skew, p=p, q=q).validate()
    return _pdf_ln(location, scale, skew, p, q, x)


def cdf(location: float, scale: float, skew: float, p: float, q: float, x: float) -> float:
    SkewedGeneralizedTParameters(location=location, scale=scale, skew=skew, p=p, q=q).validate()
    return _cdf(location, scale, skew, p, q, x)


def inv_cdf(
    location: float, scale: float, skew: float, p: float, q: float, probability: float
) -> float:
    """Quantile through the inverse regularized incomplete beta function."""
    SkewedGeneralizedTParameters(location=location, scale=scale, skew=skew, p=p, q=q).validate()
    return _inv_cdf(location, scale, skew, p, q, probability)


def sample_unchecked(
    rng: np.random.Generator, location: float, scale: float, skew: float, p: float, q: float
) -> float:
    return _inv_cdf(location, scale, skew, p, q, uniform_open(rng))


def sample(
    location: float,
    scale: float,
    skew: float,
    p: float,
    q: float,
    *,
    rng: np.random.Generator | None = None,
) -> float:
    SkewedGeneralizedTParameters(location=location, scale=scale, skew=skew, p=p, q=q).validate()
    return sample_unchecked(resolve_random_source(rng), location, scale, skew, p, q)


def fill_samples(
    values: npt.NDArray[np.float64],
    location: float,
    scale: float,
    skew: float,
    p: float,
    q: float,
    *,
    rng: np.random.Generator | None = None,
) -> None:
    SkewedGeneralizedTParameters(location=location, scale=scale, skew=skew, p=p, q=q).validate()
    source = resolve_random_source(rng)
    fill_sequentially(values, lambda: sample_unchecked(source, location, scale, skew, p, q))


def samples(
    n: int,
    location: float,
    scale: float,
    skew: float,
    p: float,
    q: float,
    *,
    rng: np.random.Generator | None = None,
) -> FloatArray:
    values = new_buffer(n, np.float64)
    fill_samples(values, location, scale, skew, p, q, rng=rng)
    return values


def iter_samples(
    location: float,
    scale: float,
    skew: float,
    p: float,
    q: float,
    *,
    rng: np.random.Generator | None = None,
) -> Iterator[float]:
    SkewedGeneralizedTParameters(location=location, scale=scale, skew=skew, p=p, q=q).validate()
    source = resolve_random_source(rng)
    return sample_stream(lambda: sample_unchecked(source, location, scale, skew, p, q))


class SkewedGeneralizedT(ContinuousDistribution):
    """
    Skewed generalized t-distribution.

    Parameters
    ----------
    location : float
        Mean μ, defaults to 0.
    scale : float
        Standard deviation σ > 0, defaults to 1.
    skew : float
        Skewness parameter λ ∈ (-1, 1), defaults to 0.
    p : float
        First shape p > 0, defaults to 2.
    q : float
        Second shape q > 0, defaults to ``inf``; together with ``p = 2`` the
        normal distribution.
    random_source : numpy.random.Generator, optional
        Generator used for sampling, shared with the delegate.
    """

    def __init__(
        self,
        location: float = 0.0,
        scale: float = 1.0,
        skew: float = 0.0,
        p: float = 2.0,
        q: float = math.inf,
        random_source: np.random.Generator | None = None,
    ) -> None:
        self._parameters = SkewedGeneralizedTParameters(
            location=location, scale=scale, skew=skew, p=p, q=q
        )
        self._parameters.validate()
        self._location = location
        self._scale = scale
        self._skew = skew
        self._p = p
        self._q = q
        self._random_source = resolve_random_source(random_source)
        self._delegate = find_specialized_distribution(
            location, scale, skew, p, q, self._random_source
        )
        self._skewness: float | None = None

    def __repr__(self) -> str:
        return (
            f"SkewedGeneralizedT(location={self._location}, scale={self._scale}, "
            f"skew={self._skew}, p={self._p}, q={self._q})"
        )

    @property
    def random_source(self) -> np.random.Generator:
        return self._random_source

    @random_source.setter
    def random_source(self, value: np.random.Generator | None) -> None:
        self._random_source = resolve_random_source(value)
        if self._delegate is not None:
            self._delegate.random_source = self._random_source

    @property
    def delegate(self) -> ContinuousDistribution | None:
        """Specialized distribution answering every call, if any."""
        return self._delegate

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
    def q(self) -> float:
        return self._q

    @property
    def support(self) -> ContinuousSupport:
        if self._delegate is not None:
            return self._delegate.support
        return ContinuousSupport()

    @property
    def mean(self) -> float:
        if self._delegate is not None:
            return self._delegate.mean
        return self._location

    @property
    def variance(self) -> float:
        if self._delegate is not None:
            return self._delegate.variance
        return self._scale * self._scale

    @property
    def std_dev(self) -> float:
        if self._delegate is not None:
            return self._delegate.std_dev
        return self._scale

    @property
    def entropy(self) -> float:
        if self._delegate is not None:
            return self._delegate.entropy
        raise NotSupportedError("Skewed generalized t entropy is not implemented")

    @property
    def skewness(self) -> float:
        if self._delegate is not None:
            return self._delegate.skewness
        if self._skewness is None:
            self._skewness = _skewness(self._scale, self._skew, self._p, self._q)
        return self._skewness

    @property
    def mode(self) -> float:
        if self._delegate is not None:
            return self._delegate.mode
        if self._skew == 0:
            return self._location
        v = _adjusted_scale(self._scale, self._skew, self._p, self._q)
        return self._location - _raw_moment(1, v, self._skew, self._p, self._q)

    @property
    def median(self) -> float:
        if self._delegate is not None:
            return self._delegate.median
        if self._skew == 0:
            return self._location
        return _full_inv_cdf(self._location, self._scale, self._skew, self._p, self._q, 0.5)

    def density(self, x: float) -> float:
        if self._delegate is not None:
            return self._delegate.density(x)
        return math.exp(_full_pdf_ln(self._location, self._scale, self._skew, self._p, self._q, x))

    def density_ln(self, x: float) -> float:
        if self._delegate is not None:
            return self._delegate.density_ln(x)
        return _full_pdf_ln(self._location, self._scale, self._skew, self._p, self._q, x)

    def cumulative_distribution(self, x: float) -> float:
        if self._delegate is not None:
            return self._delegate.cumulative_distribution(x)
        return _full_cdf(self._location, self._scale, self._skew, self._p, self._q, x)

    def inverse_cumulative_distribution(self, p: float) -> float:
        if self._delegate is not None:
            return self._delegate.inverse_cumulative_distribution(p)
        check_probability(p)
        return _full_inv_cdf(self._location, self._scale, self._skew, self._p, self._q, p)

    def sample(self) -> float:
        if self._delegate is not None:
            return self._delegate.sample()
        u = uniform_open(self._random_source)
        return _full_inv_cdf(self._location, self._scale, self._skew, self._p, self._q, u)

    def fill_samples(self, values: npt.NDArray[np.float64]) -> None:
        if self._delegate is not None:
            self._delegate.fill_samples(values)
            return
        super().fill_samples(values)

    def iter_samples(self) -> Iterator[float]:
        if self._delegate is not None:
            return self._delegate.iter_samples()
        return super().iter_samples()
