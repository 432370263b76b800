"""
Hypergeometric distribution.

Number of successes in ``draws`` draws without replacement from a
population of size ``population`` containing ``success`` successes.
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
from pysatl_univariate.distributions.sampling import fill_sequentially, new_buffer, sample_stream
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

    from pysatl_univariate.types import IntArray


@parametrization(name="populationSuccessDraws")
class HypergeometricPopulationSuccessDraws(Parametrization):
    """
    Standard parametrization of hypergeometric distribution.

    Parameters
    ----------
    population : int
        Size of the population (N)
    success : int
        Number of successes in the population (M)
    draws : int
        Number of draws (n)
    """

    population: int
    success: int
    draws: int

    @constraint(description="population >= 0")
    def check_population_non_negative(self) -> bool:
        return self.population >= 0

    @constraint(description="0 <= success <= population")
    def check_success_range(self) -> bool:
        return 0 <= self.success <= self.population

    @constraint(description="0 <= draws <= population")
    def check_draws_range(self) -> bool:
        return 0 <= self.draws <= self.population

    @constraint(description="population, success and draws are integers")
    def check_counts_integer(self) -> bool:
        return all(
            float(value).is_integer() for value in (self.population, self.success, self.draws)
        )


def is_valid_parameter_set(population: int, success: int, draws: int) -> bool:
    return HypergeometricPopulationSuccessDraws(
        population=population, success=success, draws=draws
    ).is_valid()


def _min_k(population: int, success: int, draws: int) -> int:
    return max(0, draws + success - population)


def _max_k(success: int, draws: int) -> int:
    return min(success, draws)


def _pmf_ln(population: int, success: int, draws: int, k: int) -> float:
    return (
        special.binomial_ln(success, k)
        + special.binomial_ln(population - success, draws - k)
        - special.binomial_ln(population, draws)
    )


def _pmf(population: int, success: int, draws: int, k: int) -> float:
    return math.exp(_pmf_ln(population, success, draws, k))


def _cdf(population: int, success: int, draws: int, x: float) -> float:
    if x < _min_k(population, success, draws):
        return 0.0
    if x >= _max_k(success, draws):
        return 1.0
    total = math.fsum(
        _pmf(population, success, draws, k)
        for k in range(_min_k(population, success, draws), math.floor(x) + 1)
    )
    return min(total, 1.0)


def pmf(population: int, success: int, draws: int, k: int) -> float:
    """
    Probability mass function for hypergeometric distribution.

    Parameters
    ----------
    population : int
        Population size N
    success : int
        Successes M in the population
    draws : int
        Number of draws n
    k : int
        Number of drawn successes

    Returns
    -------
    float
        ``C(M, k) C(N - M, n - k) / C(N, n)``, 0 outside the support
    """
    HypergeometricPopulationSuccessDraws(
        population=population, success=success, draws=draws
    ).validate()
    return _pmf(population, success, draws, k)


def pmf_ln(population: int, success: int, draws: int, k: int) -> float:
    HypergeometricPopulationSuccessDraws(
        population=population, success=success, draws=draws
    ).validate()
    return _pmf_ln(population, success, draws, k)


def cdf(population: int, success: int, draws: int, x: float) -> float:
    HypergeometricPopulationSuccessDraws(
        population=population, success=success, draws=draws
    ).validate()
    return _cdf(population, success, draws, x)


def sample_unchecked(rng: np.random.Generator, population: int, success: int, draws: int) -> int:
    """Simulate the draws one at a time, shrinking the population after each."""
    x = 0
    while draws > 0:
        if rng.random() < success / population:
            x += 1
            success -= 1
        population -= 1
        draws -= 1
    return x


def sample(
    population: int, success: int, draws: int, *, rng: np.random.Generator | None = None
) -> int:
    HypergeometricPopulationSuccessDraws(
        population=population, success=success, draws=draws
    ).validate()
    return sample_unchecked(resolve_random_source(rng), population, success, draws)


def fill_samples(
    values: npt.NDArray[np.int64],
    population: int,
    success: int,
    draws: int,
    *,
    rng: np.random.Generator | None = None,
) -> None:
    HypergeometricPopulationSuccessDraws(
        population=population, success=success, draws=draws
    ).validate()
    source = resolve_random_source(rng)
    fill_sequentially(values, lambda: sample_unchecked(source, population, success, draws))


def samples(
    n: int,
    population: int,
    success: int,
    draws: int,
    *,
    rng: np.random.Generator | None = None,
) -> IntArray:
    values = new_buffer(n, np.int64)
    fill_samples(values, population, success, draws, rng=rng)
    return values


def iter_samples(
    population: int, success: int, draws: int, *, rng: np.random.Generator | None = None
) -> Iterator[int]:
    HypergeometricPopulationSuccessDraws(
        population=population, success=success, draws=draws
    ).validate()
    source = resolve_random_source(rng)
    return sample_stream(lambda: sample_unchecked(source, population, success, draws))


class Hypergeometric(DiscreteDistribution):
    """
    Hypergeometric distribution.

    Parameters
    ----------
    population : int
        Population size N ≥ 0.
    success : int
        Successes M in the population, ``0 <= M <= N``.
    draws : int
        Number of draws n, ``0 <= n <= N``.
    random_source : numpy.random.Generator, optional
        Generator used for sampling.
    """

    def __init__(
        self,
        population: int,
        success: int,
        draws: int,
        random_source: np.random.Generator | None = None,
    ) -> None:
        self._parameters = HypergeometricPopulationSuccessDraws(
            population=population, success=success, draws=draws
        )
        self._parameters.validate()
        self._population = population
        self._success = success
        self._draws = draws
        self._random_source = resolve_random_source(random_source)

    def __repr__(self) -> str:
        return (
            f"Hypergeometric(population={self._population}, success={self._success}, "
            f"draws={self._draws})"
        )

    @property
    def population(self) -> int:
        return self._population

    @property
    def success(self) -> int:
        return self._success

    @property
    def draws(self) -> int:
        return self._draws

    @property
    def support(self) -> IntegerLatticeDiscreteSupport:
        return IntegerLatticeDiscreteSupport(
            _min_k(self._population, self._success, self._draws),
            _max_k(self._success, self._draws),
        )

    @property
    def mean(self) -> float:
        if self._population == 0:
            return 0.0
        return self._success * self._draws / self._population

    @property
    def variance(self) -> float:
        big_n, m, n = self._population, self._success, self._draws
        if big_n <= 1:
            return 0.0
        return n * m * (big_n - n) * (big_n - m) / (big_n * big_n * (big_n - 1.0))

    @property
    def entropy(self) -> float:
        raise NotSupportedError("Hypergeometric entropy is not implemented")

    @property
    def skewness(self) -> float:
        big_n, m, n = self._population, self._success, self._draws
        spread = n * m * (big_n - m) * (big_n - n)
        if spread == 0 or big_n == 2:
            raise NotSupportedError("Hypergeometric skewness is undefined for a point mass")
        return (
            math.sqrt(big_n - 1.0)
            * (big_n - 2.0 * n)
            * (big_n - 2.0 * m)
            / (math.sqrt(spread) * (big_n - 2.0))
        )

    @property
    def mode(self) -> int:
        return (self._draws + 1) * (self._success + 1) // (self._population + 2)

    @property
    def median(self) -> float:
        raise NotSupportedError("Hypergeometric median is not implemented")

    def probability(self, k: int) -> float:
        return _pmf(self._population, self._success, self._draws, k)

    def probability_ln(self, k: int) -> float:
        return _pmf_ln(self._population, self._success, self._draws, k)

    def cumulative_distribution(self, x: float) -> float:
        return _cdf(self._population, self._success, self._draws, x)

    def sample(self) -> int:
        return sample_unchecked(self._random_source, self._population, self._success, self._draws)
