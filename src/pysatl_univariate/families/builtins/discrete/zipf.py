"""
Zipf distribution.

Rank-frequency law on ``{1, ..., n}`` with mass proportional to ``k^-s``.
Moments are ratios of generalized harmonic numbers ``H(n, s)``.
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
from pysatl_univariate.distributions.sampling import new_buffer, sample_stream, uniform_positive
from pysatl_univariate.distributions.support import IntegerLatticeDiscreteSupport
from pysatl_univariate.errors import NotSupportedError
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


@parametrization(name="sN")
class ZipfSN(Parametrization):
    """
    Standard parametrization of Zipf distribution.

    Parameters
    ----------
    s : float
        Exponent
    n : int
        Number of ranks
    """

    s: float
    n: int

    @constraint(description="0 < s < inf")
    def check_s_positive(self) -> bool:
        return 0 < self.s < math.inf

    @constraint(description="n > 0")
    def check_n_positive(self) -> bool:
        return self.n > 0

    @constraint(description="n is an integer")
    def check_n_integer(self) -> bool:
        return float(self.n).is_integer()


def is_valid_parameter_set(s: float, n: int) -> bool:
    return ZipfSN(s=s, n=n).is_valid()


def _pmf(s: float, n: int, k: int) -> float:
    if k < 1 or k > n:
        return 0.0
    return special.power(k, -s) / special.general_harmonic(n, s)


def _pmf_ln(s: float, n: int, k: int) -> float:
    if k < 1 or k > n:
        return -math.inf
    return -s * math.log(k) - math.log(special.general_harmonic(n, s))


def _cdf(s: float, n: int, x: float) -> float:
    if x < 1:
        return 0.0
    if x >= n:
        return 1.0
    return special.general_harmonic(math.floor(x), s) / special.general_harmonic(n, s)


def pmf(s: float, n: int, k: int) -> float:
    """
    Probability mass function for Zipf distribution.

    Parameters
    ----------
    s : float
        Exponent, positive
    n : int
        Number of ranks, positive
    k : int
        Rank

    Returns
    -------
    float
        ``k^-s / H(n, s)`` for ``1 <= k <= n``, 0 otherwise
    """
    ZipfSN(s=s, n=n).validate()
    return _pmf(s, n, k)


def pmf_ln(s: float, n: int, k: int) -> float:
    ZipfSN(s=s, n=n).validate()
    return _pmf_ln(s, n, k)


def cdf(s: float, n: int, x: float) -> float:
    ZipfSN(s=s, n=n).validate()
    return _cdf(s, n, x)


def cumulative_masses(s: float, n: int) -> FloatArray:
    """Running sums of the normalized masses of ranks ``1..n``."""
    weights = np.power(np.arange(1, n + 1, dtype=np.float64), -s)
    cumulative = np.cumsum(weights)
    return cumulative / cumulative[-1]


def _search(cumulative: FloatArray, u: float) -> int:
    idx = int(np.searchsorted(cumulative, u, side="left"))
    return min(idx, cumulative.shape[0] - 1) + 1


def sample_unchecked(rng: np.random.Generator, s: float, n: int) -> int:
    """
    Inverse-transform draw by an upward scan over the ranks.

    The uniform variate is drawn from (0, 1] so rank 1 is returned for
    the smallest draws.
    """
    u = uniform_positive(rng)
    norm = 1.0 / special.general_harmonic(n, s)
    total = 0.0
    for k in range(1, n + 1):
        total += norm * special.power(k, -s)
        if total >= u:
            return k
    return n


def sample(s: float, n: int, *, rng: np.random.Generator | None = None) -> int:
    ZipfSN(s=s, n=n).validate()
    return sample_unchecked(resolve_random_source(rng), s, n)


def _fill(rng: np.random.Generator, values: npt.NDArray[np.int64], s: float, n: int) -> None:
    cumulative = cumulative_masses(s, n)
    u = 1.0 - rng.random(values.shape[0])
    idx = np.searchsorted(cumulative, u, side="left")
    np.minimum(idx, n - 1, out=idx)
    values[:] = idx + 1


def fill_samples(
    values: npt.NDArray[np.int64],
    s: float,
    n: int,
    *,
    rng: np.random.Generator | None = None,
) -> None:
    ZipfSN(s=s, n=n).validate()
    _fill(resolve_random_source(rng), values, s, n)


def samples(
    size: int, s: float, n: int, *, rng: np.random.Generator | None = None
) -> IntArray:
    values = new_buffer(size, np.int64)
    fill_samples(values, s, n, rng=rng)
    return values


def iter_samples(s: float, n: int, *, rng: np.random.Generator | None = None) -> Iterator[int]:
    ZipfSN(s=s, n=n).validate()
    source = resolve_random_source(rng)
    cumulative = cumulative_masses(s, n)
    return sample_stream(lambda: _search(cumulative, uniform_positive(source)))


class Zipf(DiscreteDistribution):
    """
    Zipf distribution on ``{1, ..., n}``.

    Parameters
    ----------
    s : float
        Exponent s > 0.
    n : int
        Number of ranks n ≥ 1.
    random_source : numpy.random.Generator, optional
        Generator used for sampling.
    """

    def __init__(self, s: float, n: int, random_source: np.random.Generator | None = None) -> None:
        self._parameters = ZipfSN(s=s, n=n)
        self._parameters.validate()
        self._s = s
        self._n = n
        self._random_source = resolve_random_source(random_source)

    def __repr__(self) -> str:
        return f"Zipf(s={self._s}, n={self._n})"

    @property
    def s(self) -> float:
        return self._s

    @property
    def n(self) -> int:
        return self._n

    def _raw_moment(self, order: int) -> float:
        return special.general_harmonic(self._n, self._s - order) / special.general_harmonic(
            self._n, self._s
        )

    @property
    def support(self) -> IntegerLatticeDiscreteSupport:
        return IntegerLatticeDiscreteSupport(1, self._n)

    @property
    def mean(self) -> float:
        return self._raw_moment(1)

    @property
    def variance(self) -> float:
        first = self._raw_moment(1)
        return max(self._raw_moment(2) - first * first, 0.0)

    @property
    def entropy(self) -> float:
        harmonic = special.general_harmonic(self._n, self._s)
        ranks = np.arange(1, self._n + 1, dtype=np.float64)
        weighted = float(np.sum(np.log(ranks) * np.power(ranks, -self._s)))
        return self._s / harmonic * weighted + math.log(harmonic)

    @property
    def skewness(self) -> float:
        first = self._raw_moment(1)
        variance = self.variance
        if variance == 0.0:
            raise NotSupportedError("Zipf skewness is undefined for a single rank")
        third_central = self._raw_moment(3) - 3.0 * first * self._raw_moment(2) + 2.0 * first**3
        return third_central / variance**1.5

    @property
    def mode(self) -> int:
        return 1

    @property
    def median(self) -> float:
        return float(_search(cumulative_masses(self._s, self._n), 0.5))

    def probability(self, k: int) -> float:
        return _pmf(self._s, self._n, k)

    def probability_ln(self, k: int) -> float:
        return _pmf_ln(self._s, self._n, k)

    def cumulative_distribution(self, x: float) -> float:
        return _cdf(self._s, self._n, x)

    def sample(self) -> int:
        return sample_unchecked(self._random_source, self._s, self._n)

    def fill_samples(self, values: npt.NDArray[np.int64]) -> None:
        _fill(self._random_source, values, self._s, self._n)
