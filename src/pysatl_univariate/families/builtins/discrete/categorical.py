"""
Categorical distribution.

Distribution over the indices ``0, ..., K-1`` with probabilities
proportional to a non-negative mass vector. The mass need not be normalized;
the distribution keeps the unnormalized cumulative sums and searches them
for quantiles and samples.

Quantile and sampling searches return the smallest index whose cumulative
value is at least the target, so zero-probability categories are never
returned.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING

import numpy as np

from pysatl_univariate import special
from pysatl_univariate.distributions.distribution import DiscreteDistribution
from pysatl_univariate.distributions.sampling import new_buffer, sample_stream
from pysatl_univariate.distributions.support import IntegerLatticeDiscreteSupport
from pysatl_univariate.errors import InvalidParameterError, NotSupportedError, check_probability
from pysatl_univariate.families.parametrizations import (
    Parametrization,
    constraint,
    parametrization,
)
from pysatl_univariate.random_source import resolve_random_source

if TYPE_CHECKING:
    from collections.abc import Iterator

    import numpy.typing as npt

    from pysatl_univariate.types import FloatArray, IntArray


@parametrization(name="probabilityMass")
class CategoricalProbabilityMass(Parametrization):
    """
    Standard parametrization of categorical distribution.

    Parameters
    ----------
    probability_mass : tuple of float
        Unnormalized mass of each category
    """

    probability_mass: tuple[float, ...]

    @constraint(description="probability_mass is not empty")
    def check_not_empty(self) -> bool:
        return len(self.probability_mass) > 0

    @constraint(description="every mass is non-negative")
    def check_non_negative(self) -> bool:
        return all(m >= 0 for m in self.probability_mass)

    @constraint(description="total mass > 0")
    def check_total_positive(self) -> bool:
        return math.fsum(self.probability_mass) > 0


def _as_mass(probability_mass: npt.ArrayLike) -> tuple[float, ...]:
    return tuple(float(m) for m in np.ravel(probability_mass))


def _validated(probability_mass: npt.ArrayLike) -> tuple[float, ...]:
    mass = _as_mass(probability_mass)
    CategoricalProbabilityMass(probability_mass=mass).validate()
    return mass


def is_valid_parameter_set(probability_mass: npt.ArrayLike) -> bool:
    return CategoricalProbabilityMass(probability_mass=_as_mass(probability_mass)).is_valid()


def is_valid_cumulative_distribution(cdf: npt.ArrayLike) -> bool:
    """
    Check an unnormalized cumulative array.

    Valid arrays are non-empty, non-negative, free of NaN, non-decreasing
    and end with a positive total.
    """
    values = np.asarray(cdf, dtype=np.float64).ravel()
    if values.shape[0] == 0 or np.isnan(values).any() or (values < 0).any():
        return False
    return bool((np.diff(values) >= 0).all() and values[-1] > 0)


def cumulative_distribution(probability_mass: npt.ArrayLike) -> FloatArray:
    """Running sums of the mass vector."""
    return np.cumsum(np.asarray(probability_mass, dtype=np.float64).ravel())


def _search(cumulative: FloatArray, u: float) -> int:
    if u == 0.0:
        # skip leading zero-probability categories
        return int(np.searchsorted(cumulative, 0.0, side="right"))
    idx = int(np.searchsorted(cumulative, u, side="left"))
    return min(idx, cumulative.shape[0] - 1)


def inv_cdf_with_cumulative_distribution(cdf: npt.ArrayLike, p: float) -> int:
    """
    Quantile from an unnormalized cumulative array.

    Parameters
    ----------
    cdf : array_like
        Unnormalized cumulative mass, see :func:`is_valid_cumulative_distribution`.
    p : float
        Probability in [0, 1].

    Returns
    -------
    int
        Smallest index whose cumulative value is at least ``p`` times the total.

    Raises
    ------
    InvalidParameterError
        If ``cdf`` is not a valid cumulative array.
    OutOfRangeError
        If ``p`` is not a probability.
    """
    cumulative = np.asarray(cdf, dtype=np.float64).ravel()
    if not is_valid_cumulative_distribution(cumulative):
        raise InvalidParameterError("cdf is non-decreasing, non-negative with positive total")
    check_probability(p)
    return _search(cumulative, p * cumulative[-1])


def _pmf(mass: tuple[float, ...], k: int) -> float:
    if k < 0 or k >= len(mass):
        return 0.0
    return mass[k] / math.fsum(mass)


def _pmf_ln(mass: tuple[float, ...], k: int) -> float:
    probability = _pmf(mass, k)
    return math.log(probability) if probability > 0 else -math.inf


def _cdf(cumulative: FloatArray, x: float) -> float:
    if x < 0.0:
        return 0.0
    if x >= cumulative.shape[0]:
        return 1.0
    return float(cumulative[math.floor(x)] / cumulative[-1])


def _inv_cdf(cumulative: FloatArray, p: float) -> int:
    check_probability(p)
    return _search(cumulative, p * cumulative[-1])


def pmf(probability_mass: npt.ArrayLike, k: int) -> float:
    """
    Probability mass function for categorical distribution.

    Parameters
    ----------
    probability_mass : array_like
        Non-negative unnormalized masses with a positive total
    k : int
        Category index

    Returns
    -------
    float
        Normalized mass of category ``k``, 0 outside ``0..K-1``
    """
    return _pmf(_validated(probability_mass), k)


def pmf_ln(probability_mass: npt.ArrayLike, k: int) -> float:
    return _pmf_ln(_validated(probability_mass), k)


def cdf(probability_mass: npt.ArrayLike, x: float) -> float:
    return _cdf(cumulative_distribution(_validated(probability_mass)), x)


def inv_cdf(probability_mass: npt.ArrayLike, p: float) -> int:
    return _inv_cdf(cumulative_distribution(_validated(probability_mass)), p)


def sample_unchecked(rng: np.random.Generator, cumulative: FloatArray) -> int:
    """Inverse-transform draw from an unnormalized cumulative array."""
    return _search(cumulative, float(rng.random()) * cumulative[-1])


def sample(probability_mass: npt.ArrayLike, *, rng: np.random.Generator | None = None) -> int:
    cumulative = cumulative_distribution(_validated(probability_mass))
    return sample_unchecked(resolve_random_source(rng), cumulative)


def _fill(
    rng: np.random.Generator, values: npt.NDArray[np.int64], cumulative: FloatArray
) -> None:
    u = rng.random(values.shape[0]) * cumulative[-1]
    idx = np.searchsorted(cumulative, u, side="left")
    idx[u == 0.0] = np.searchsorted(cumulative, 0.0, side="right")
    np.minimum(idx, cumulative.shape[0] - 1, out=idx)
    values[:] = idx


def fill_samples(
    values: npt.NDArray[np.int64],
    probability_mass: npt.ArrayLike,
    *,
    rng: np.random.Generator | None = None,
) -> None:
    cumulative = cumulative_distribution(_validated(probability_mass))
    _fill(resolve_random_source(rng), values, cumulative)


def samples(
    n: int, probability_mass: npt.ArrayLike, *, rng: np.random.Generator | None = None
) -> IntArray:
    values = new_buffer(n, np.int64)
    fill_samples(values, probability_mass, rng=rng)
    return values


def iter_samples(
    probability_mass: npt.ArrayLike, *, rng: np.random.Generator | None = None
) -> Iterator[int]:
    cumulative = cumulative_distribution(_validated(probability_mass))
    source = resolve_random_source(rng)
    return sample_stream(lambda: sample_unchecked(source, cumulative))


class Categorical(DiscreteDistribution):
    """
    Categorical distribution.

    Parameters
    ----------
    probability_mass : array_like
        Non-negative, unnormalized mass of each category with a positive
        total. Copied on construction.
    random_source : numpy.random.Generator, optional
        Generator used for sampling.
    """

    def __init__(
        self,
        probability_mass: npt.ArrayLike,
        random_source: np.random.Generator | None = None,
    ) -> None:
        mass = _as_mass(probability_mass)
        self._parameters = CategoricalProbabilityMass(probability_mass=mass)
        self._parameters.validate()
        self._cdf_unnormalized = cumulative_distribution(mass)
        self._pmf_normalized = np.asarray(mass, dtype=np.float64) / self._cdf_unnormalized[-1]
        self._random_source = resolve_random_source(random_source)

    def __repr__(self) -> str:
        return f"Categorical(dimension={self._pmf_normalized.shape[0]})"

    @property
    def p(self) -> FloatArray:
        """Normalized probabilities, as a copy."""
        return self._pmf_normalized.copy()

    @property
    def support(self) -> IntegerLatticeDiscreteSupport:
        return IntegerLatticeDiscreteSupport(0, self._pmf_normalized.shape[0] - 1)

    @property
    def mean(self) -> float:
        indices = np.arange(self._pmf_normalized.shape[0])
        return float(np.dot(indices, self._pmf_normalized))

    @property
    def variance(self) -> float:
        indices = np.arange(self._pmf_normalized.shape[0])
        centered = indices - self.mean
        return float(np.dot(centered * centered, self._pmf_normalized))

    @property
    def entropy(self) -> float:
        return -math.fsum(special.xlogy(p, p) for p in self._pmf_normalized)

    @property
    def skewness(self) -> float:
        raise NotSupportedError("Categorical skewness is not implemented")

    @property
    def mode(self) -> int:
        """Most probable category, the smallest index on ties."""
        return int(np.argmax(self._pmf_normalized))

    @property
    def median(self) -> float:
        return float(self.inverse_cumulative_distribution(0.5))

    def probability(self, k: int) -> float:
        if k < 0 or k >= self._pmf_normalized.shape[0]:
            return 0.0
        return float(self._pmf_normalized[k])

    def probability_ln(self, k: int) -> float:
        probability = self.probability(k)
        return math.log(probability) if probability > 0 else -math.inf

    def cumulative_distribution(self, x: float) -> float:
        return _cdf(self._cdf_unnormalized, x)

    def inverse_cumulative_distribution(self, p: float) -> int:
        """Smallest category whose cumulative probability is at least ``p``."""
        return _inv_cdf(self._cdf_unnormalized, p)

    def sample(self) -> int:
        return sample_unchecked(self._random_source, self._cdf_unnormalized)

    def fill_samples(self, values: npt.NDArray[np.int64]) -> None:
        _fill(self._random_source, values, self._cdf_unnormalized)
