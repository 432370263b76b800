"""
Triangular distribution.

Distribution on ``[lower, upper]`` whose density rises linearly from
``lower`` to its peak at ``mode`` and falls linearly to ``upper``. The CDF
is piecewise quadratic and is inverted in closed form. A zero-width
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


@parametrization(name="lowerUpperMode")
class TriangularLowerUpperMode(Parametrization):
    """
    Standard parametrization of triangular distribution.

    Parameters
    ----------
    lower : float
        Left end of the support (a)
    upper : float
        Right end of the support (b)
    mode : float
        Peak of the density (c)
    """

    lower: float
    upper: float
    mode: float

    @constraint(description="lower <= mode <= upper")
    def check_mode_inside(self) -> bool:
        return self.lower <= self.mode <= self.upper

    @constraint(description="bounds are finite")
    def check_bounds_finite(self) -> bool:
        return math.isfinite(self.lower) and math.isfinite(self.upper)


def is_valid_parameter_set(lower: float, upper: float, mode: float) -> bool:
    return TriangularLowerUpperMode(lower=lower, upper=upper, mode=mode).is_valid()


def _pdf(lower: float, upper: float, mode: float, x: float) -> float:
    if lower == upper:
        return math.inf if x == lower else 0.0
    if x < lower or x > upper:
        return 0.0
    if x < mode:
        return 2.0 * (x - lower) / ((upper - lower) * (mode - lower))
    if x == mode:
        return 2.0 / (upper - lower)
    return 2.0 * (upper - x) / ((upper - lower) * (upper - mode))


def _pdf_ln(lower: float, upper: float, mode: float, x: float) -> float:
    density = _pdf(lower, upper, mode, x)
    return math.log(density) if density > 0 else -math.inf


def _cdf(lower: float, upper: float, mode: float, x: float) -> float:
    if x < lower:
        return 0.0
    if x >= upper:
        return 1.0
    if x < mode:
        return (x - lower) ** 2 / ((upper - lower) * (mode - lower))
    if x == mode:
        return (mode - lower) / (upper - lower)
    return 1.0 - (upper - x) ** 2 / ((upper - lower) * (upper - mode))


def _inv_cdf(lower: float, upper: float, mode: float, p: float) -> float:
    check_probability(p)
    if p == 0.0 or lower == upper:
        return lower
    if p == 1.0:
        return upper
    width = upper - lower
    if p < (mode - lower) / width:
        return lower + math.sqrt(p * (mode - lower) * width)
    return upper - math.sqrt((1.0 - p) * (upper - mode) * width)


def pdf(lower: float, upper: float, mode: float, x: float) -> float:
    TriangularLowerUpperMode(lower=lower, upper=upper, mode=mode).validate()
    return _pdf(lower, upper, mode, x)


def pdf_ln(lower: float, upper: float, mode: float, x: float) -> float:
    TriangularLowerUpperMode(lower=lower, upper=upper, mode=mode).validate()
    return _pdf_ln(lower, upper, mode, x)


def cdf(lower: float, upper: float, mode: float, x: float) -> float:
    TriangularLowerUpperMode(lower=lower, upper=upper, mode=mode).validate()
    return _cdf(lower, upper, mode, x)


def inv_cdf(lower: float, upper: float, mode: float, p: float) -> float:
    """
    Quantile function.

    ``a + sqrt(p(c - a)(b - a))`` below the mode and
    ``b - sqrt((1 - p)(b - c)(b - a))`` above it.
    """
    TriangularLowerUpperMode(lower=lower, upper=upper, mode=mode).validate()
    return _inv_cdf(lower, upper, mode, p)


def sample_unchecked(rng: np.random.Generator, lower: float, upper: float, mode: float) -> float:
    return _inv_cdf(lower, upper, mode, float(rng.random()))


def sample(
    lower: float, upper: float, mode: float, *, rng: np.random.Generator | None = None
) -> float:
    TriangularLowerUpperMode(lower=lower, upper=upper, mode=mode).validate()
    return sample_unchecked(resolve_random_source(rng), lower, upper, mode)


def _fill(
    rng: np.random.Generator,
    values: npt.NDArray[np.float64],
    lower: float,
    upper: float,
    mode: float,
) -> None:
    if lower == upper:
        values.fill(lower)
        return
    width = upper - lower
    rng.random(out=values)
    left = values < (mode - lower) / width
    values[left] = lower + np.sqrt(values[left] * (mode - lower) * width)
    right = ~left
    values[right] = upper - np.sqrt((1.0 - values[right]) * (upper - mode) * width)


def fill_samples(
    values: npt.NDArray[np.float64],
    lower: float,
    upper: float,
    mode: float,
    *,
    rng: np.random.Generator | None = None,
) -> None:
    TriangularLowerUpperMode(lower=lower, upper=upper, mode=mode).validate()
    _fill(resolve_random_source(rng), values, lower, upper, mode)


def samples(
    n: int,
    lower: float,
    upper: float,
    mode: float,
    *,
    rng: np.random.Generator | None = None,
) -> FloatArray:
    values = new_buffer(n, np.float64)
    fill_samples(values, lower, upper, mode, rng=rng)
    return values


def iter_samples(
    lower: float, upper: float, mode: float, *, rng: np.random.Generator | None = None
) -> Iterator[float]:
    TriangularLowerUpperMode(lower=lower, upper=upper, mode=mode).validate()
    source = resolve_random_source(rng)
    return sample_stream(lambda: sample_unchecked(source, lower, upper, mode))


class Triangular(ContinuousDistribution):
    """
    Triangular distribution.

    Parameters
    ----------
    lower : float
        Left end a of the support, finite.
    upper : float
        Right end b of the support, finite.
    mode : float
        Peak c with ``a <= c <= b``.
    random_source : numpy.random.Generator, optional
        Generator used for sampling.
    """

    def __init__(
        self,
        lower: float,
        upper: float,
        mode: float,
        random_source: np.random.Generator | None = None,
    ) -> None:
        self._parameters = TriangularLowerUpperMode(lower=lower, upper=upper, mode=mode)
        self._parameters.validate()
        self._lower = lower
        self._upper = upper
        self._mode = mode
        self._random_source = resolve_random_source(random_source)

    def __repr__(self) -> str:
        return f"Triangular(lower={self._lower}, upper={self._upper}, mode={self._mode})"

    @property
    def lower(self) -> float:
        return self._lower

    @property
    def upper(self) -> float:
        return self._upper

    @property
    def support(self) -> ContinuousSupport:
        return ContinuousSupport(self._lower, self._upper)

    def _spread(self) -> float:
        a, b, c = self._lower, self._upper, self._mode
        return a * a + b * b + c * c - a * b - a * c - b * c

    @property
    def mean(self) -> float:
        return (self._lower + self._upper + self._mode) / 3.0

    @property
    def variance(self) -> float:
        return self._spread() / 18.0

    @property
    def entropy(self) -> float:
        if self._lower == self._upper:
            return -math.inf
        return 0.5 + math.log(0.5 * (self._upper - self._lower))

    @property
    def skewness(self) -> float:
        if self._lower == self._upper:
            return math.nan
        a, b, c = self._lower, self._upper, self._mode
        numerator = math.sqrt(2.0) * (a + b - 2.0 * c) * (2.0 * a - b - c) * (a - 2.0 * b + c)
        return numerator / (5.0 * self._spread() ** 1.5)

    @property
    def mode(self) -> float:
        return self._mode

    @property
    def median(self) -> float:
        a, b, c = self._lower, self._upper, self._mode
        if c >= 0.5 * (a + b):
            return a + math.sqrt(0.5 * (b - a) * (c - a))
        return b - math.sqrt(0.5 * (b - a) * (b - c))

    def density(self, x: float) -> float:
        return _pdf(self._lower, self._upper, self._mode, x)

    def density_ln(self, x: float) -> float:
        return _pdf_ln(self._lower, self._upper, self._mode, x)

    def cumulative_distribution(self, x: float) -> float:
        return _cdf(self._lower, self._upper, self._mode, x)

    def inverse_cumulative_distribution(self, p: float) -> float:
        return _inv_cdf(self._lower, self._upper, self._mode, p)

    def sample(self) -> float:
        return sample_unchecked(self._random_source, self._lower, self._upper, self._mode)

    def fill_samples(self, values: npt.NDArray[np.float64]) -> None:
        _fill(self._random_source, values, self._lower, self._upper, self._mode)
