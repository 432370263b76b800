"""
Poisson distribution.

Number of events in a fixed interval for events occurring at rate λ.

Sampling uses two algorithms selected by the rate:

- below ``numeric_config().poisson_atkinson_threshold`` the count of
  uniform variates whose running product stays above ``exp(-λ)``;
- from the threshold on, Atkinson's rejection method PA with a logistic
  proposal.

Both branches sample the exact distribution.
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
from pysatl_univariate.distributions.distribution import DiscreteDistribution
from pysatl_univariate.distributions.sampling import (
    fill_sequentially,
    new_buffer,
    sample_stream,
    uniform_open,
    uniform_positive,
)
from pysatl_univariate.distributions.support import IntegerLatticeDiscreteSupport
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

# rates from which the entropy uses its asymptotic expansion
_ENTROPY_ASYMPTOTIC_RATE = 50.0


@parametrization(name="lambda")
class PoissonLambda(Parametrization):
    """
    Standard parametrization of Poisson distribution.

    Parameters
    ----------
    lambda_ : float
        Rate (λ), the mean number of events
    """

    lambda_: float

    @constraint(description="0 < lambda < inf")
    def check_lambda_positive(self) -> bool:
        return 0 < self.lambda_ < math.inf


def is_valid_parameter_set(lambda_: float) -> bool:
    return PoissonLambda(lambda_=lambda_).is_valid()


def _pmf_ln(lambda_: float, k: int) -> float:
    if k < 0:
        return -math.inf
    return -lambda_ + k * math.log(lambda_) - special.factorial_ln(k)


def _pmf(lambda_: float, k: int) -> float:
    if k < 0:
        return 0.0
    return math.exp(_pmf_ln(lambda_, k))


def _cdf(lambda_: float, x: float) -> float:
    if x < 0:
        return 0.0
    if math.isinf(x):
        return 1.0
    return special.gamma_upper_regularized(math.floor(x) + 1.0, lambda_)


def pmf(lambda_: float, k: int) -> float:
    """
    Probability mass function for Poisson distribution.

    Parameters
    ----------
    lambda_ : float
        Rate (λ), positive
    k : int
        Number of events

    Returns
    -------
    float
        ``λ^k e^(-λ) / k!`` for ``k >= 0``, 0 otherwise
    """
    PoissonLambda(lambda_=lambda_).validate()
    return _pmf(lambda_, k)


def pmf_ln(lambda_: float, k: int) -> float:
    PoissonLambda(lambda_=lambda_).validate()
    return _pmf_ln(lambda_, k)


def cdf(lambda_: float, x: float) -> float:
    """``Q(floor(x) + 1, λ)``, the regularized upper incomplete gamma function."""
    PoissonLambda(lambda_=lambda_).validate()
    return _cdf(lambda_, x)


def _sample_multiplicative(rng: np.random.Generator, lambda_: float) -> int:
    limit = math.exp(-lambda_)
    count = 0
    product = float(rng.random())
    while product >= limit:
        count += 1
        product *= float(rng.random())
    return count


def _sample_atkinson(rng: np.random.Generator, lambda_: float) -> int:
    """
    Atkinson's method PA.

    Proposes from a logistic distribution centred at λ and accepts by
    comparing the log envelope with the log mass.
    """
    c = 0.767 - 3.36 / lambda_
    beta = math.pi / math.sqrt(3.0 * lambda_)
    alpha = beta * lambda_
    k = math.log(c) - lambda_ - math.log(beta)
    log_lambda = math.log(lambda_)
    while True:
        u = uniform_open(rng)
        x = (alpha - math.log((1.0 - u) / u)) / beta
        n = math.floor(x + 0.5)
        if n < 0:
            continue
        v = uniform_positive(rng)
        y = alpha - beta * x
        # y + log(v / (1 + e^y)^2)
        lhs = y + math.log(v) - 2.0 * float(np.logaddexp(0.0, y))
        rhs = k + n * log_lambda - special.factorial_ln(n)
        if lhs <= rhs:
            return n


def sample_unchecked(rng: np.random.Generator, lambda_: float) -> int:
    if lambda_ < numeric_config().poisson_atkinson_threshold:
        return _sample_multiplicative(rng, lambda_)
    return _sample_atkinson(rng, lambda_)


def sample(lambda_: float, *, rng: np.random.Generator | None = None) -> int:
    PoissonLambda(lambda_=lambda_).validate()
    return sample_unchecked(resolve_random_source(rng), lambda_)


def _fill(rng: np.random.Generator, values: npt.NDArray[np.int64], lambda_: float) -> None:
    if lambda_ < numeric_config().poisson_atkinson_threshold:
        draw = _sample_multiplicative
    else:
        draw = _sample_atkinson
    fill_sequentially(values, lambda: draw(rng, lambda_))


def fill_samples(
    values: npt.NDArray[np.int64], lambda_: float, *, rng: np.random.Generator | None = None
) -> None:
    PoissonLambda(lambda_=lambda_).validate()
    _fill(resolve_random_source(rng), values, lambda_)


def samples(n: int, lambda_: float, *, rng: np.random.Generator | None = None) -> IntArray:
    values = new_buffer(n, np.int64)
    fill_samples(values, lambda_, rng=rng)
    return values


def iter_samples(lambda_: float, *, rng: np.random.Generator | None = None) -> Iterator[int]:
    PoissonLambda(lambda_=lambda_).validate()
    source = resolve_random_source(rng)
    return sample_stream(lambda: sample_unchecked(source, lambda_))


class Poisson(DiscreteDistribution):
    """
    Poisson distribution.

    Parameters
    ----------
    lambda_ : float
        Rate λ > 0.
    random_source : numpy.random.Generator, optional
        Generator used for sampling.
    """

    def __init__(self, lambda_: float, random_source: np.random.Generator | None = None) -> None:
        self._parameters = PoissonLambda(lambda_=lambda_)
        self._parameters.validate()
        self._lambda = lambda_
        self._random_source = resolve_random_source(random_source)

    def __repr__(self) -> str:
        return f"Poisson(lambda_={self._lambda})"

    @property
    def lambda_(self) -> float:
        return self._lambda

    @property
    def support(self) -> IntegerLatticeDiscreteSupport:
        return IntegerLatticeDiscreteSupport(0)

    @property
    def mean(self) -> float:
        return self._lambda

    @property
    def variance(self) -> float:
        return self._lambda

    @property
    def std_dev(self) -> float:
        return math.sqrt(self._lambda)

    @property
    def entropy(self) -> float:
        """
        Entropy in nats.

        Summed exactly over the bulk of the mass for small rates, from the
        asymptotic expansion in ``1/λ`` otherwise.
        """
        lam = self._lambda
        if lam >= _ENTROPY_ASYMPTOTIC_RATE:
            return (
                0.5 * math.log(2.0 * math.pi * math.e * lam)
                - 1.0 / (12.0 * lam)
                - 1.0 / (24.0 * lam * lam)
                - 19.0 / (360.0 * lam * lam * lam)
            )
        upper = math.ceil(lam + 40.0 * math.sqrt(lam) + 40.0)
        log_mass = np.array([_pmf_ln(lam, k) for k in range(upper + 1)])
        return float(-np.sum(np.exp(log_mass) * log_mass))

    @property
    def skewness(self) -> float:
        return 1.0 / math.sqrt(self._lambda)

    @property
    def mode(self) -> int:
        return math.floor(self._lambda)

    @property
    def median(self) -> float:
        return float(math.floor(self._lambda + 1.0 / 3.0 - 0.02 / self._lambda))

    def probability(self, k: int) -> float:
        return _pmf(self._lambda, k)

    def probability_ln(self, k: int) -> float:
        return _pmf_ln(self._lambda, k)

    def cumulative_distribution(self, x: float) -> float:
        return _cdf(self._lambda, x)

    def sample(self) -> int:
        return sample_unchecked(self._random_source, self._lambda)

    def fill_samples(self, values: npt.NDArray[np.int64]) -> None:
        _fill(self._random_source, values, self._lambda)
