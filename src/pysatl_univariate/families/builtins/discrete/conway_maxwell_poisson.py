"""
Conway-Maxwell-Poisson distribution.

Generalization of the Poisson distribution with rate λ > 0 and decay ν ≥ 0:

    P(X = k) = λ^k / (k!)^ν / Z(λ, ν)

``ν = 1`` is the Poisson distribution, ``ν = 0`` with ``λ < 1`` the
geometric distribution on ``{0, 1, ...}`` and ``ν → ∞`` a Bernoulli trial.

The normalization ``Z`` and the raw moments are infinite series. They are
summed in log space until a geometric bound on the remaining tail falls
below ``numeric_config().series_tolerance`` relative to the partial sum, or
until ``numeric_config().series_max_terms`` terms have been added, in which
case a :class:`~pysatl_univariate.errors.NumericalWarning` is issued.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
import warnings
from typing import TYPE_CHECKING

import numpy as np

from pysatl_univariate import special
from pysatl_univariate.config import numeric_config
from pysatl_univariate.distributions.distribution import DiscreteDistribution
from pysatl_univariate.distributions.sampling import fill_sequentially, new_buffer, sample_stream
from pysatl_univariate.distributions.support import IntegerLatticeDiscreteSupport
from pysatl_univariate.errors import NotSupportedError, NumericalWarning
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


@parametrization(name="lambdaNu")
class ConwayMaxwellPoissonLambdaNu(Parametrization):
    """
    Standard parametrization of Conway-Maxwell-Poisson distribution.

    Parameters
    ----------
    lambda_ : float
        Rate (λ)
    nu : float
        Decay (ν)
    """

    lambda_: float
    nu: float

    @constraint(description="0 < lambda < inf")
    def check_lambda_positive(self) -> bool:
        return 0 < self.lambda_ < math.inf

    @constraint(description="0 <= nu < inf")
    def check_nu_non_negative(self) -> bool:
        return 0 <= self.nu < math.inf


def is_valid_parameter_set(lambda_: float, nu: float) -> bool:
    return ConwayMaxwellPoissonLambdaNu(lambda_=lambda_, nu=nu).is_valid()


def _log_term(lambda_: float, nu: float, k: int) -> float:
    # log(λ^k / (k!)^ν)
    return k * math.log(lambda_) - nu * special.factorial_ln(k)


def _log_series(lambda_: float, nu: float, order: int) -> list[float]:
    """
    Logarithms of ``S_j = Σ_k k^j λ^k / (k!)^ν`` for ``j = 0..order``.

    Terms of ``S_order`` eventually shrink by the factor
    ``r_k = λ/(k+1)^ν · ((k+1)/k)^order``, which bounds the tail by
    ``t_k r_k / (1 - r_k)``.
    """
    config = numeric_config()
    log_tolerance = math.log(config.series_tolerance)
    log_sums = [0.0] + [-math.inf] * order
    for k in range(1, config.series_max_terms):
        log_term = _log_term(lambda_, nu, k)
        log_k = math.log(k)
        for j in range(order + 1):
            log_sums[j] = float(np.logaddexp(log_sums[j], j * log_k + log_term))
        ratio = lambda_ / special.power(k + 1.0, nu) * ((k + 1.0) / k) ** order
        if ratio == 0.0:
            return log_sums
        if ratio < 1.0:
            log_tail = order * log_k + log_term + math.log(ratio / (1.0 - ratio))
            if log_tail < log_tolerance + log_sums[order]:
                return log_sums
    warnings.warn(
        f"Conway-Maxwell-Poisson series for lambda={lambda_}, nu={nu} stopped after "
        f"{config.series_max_terms} terms without reaching tolerance",
        NumericalWarning,
        stacklevel=3,
    )
    return log_sums


def normalization_ln(lambda_: float, nu: float) -> float:
    """Logarithm of the normalization constant ``Z(λ, ν)``."""
    return _log_series(lambda_, nu, 0)[0]


def _pmf_ln(lambda_: float, nu: float, log_z: float, k: int) -> float:
    if k < 0:
        return -math.inf
    return _log_term(lambda_, nu, k) - log_z


def _pmf(lambda_: float, nu: float, log_z: float, k: int) -> float:
    if k < 0:
        return 0.0
    return math.exp(_pmf_ln(lambda_, nu, log_z, k))


def _cdf(lambda_: float, nu: float, log_z: float, x: float) -> float:
    """Masses summed upward from 0, stopping once the sum saturates at 1."""
    if x < 0:
        return 0.0
    if math.isinf(x):
        return 1.0
    total = 0.0
    k = 0
    while k <= x:
        mass = _pmf(lambda_, nu, log_z, k)
        total += mass
        if total >= 1.0:
            return 1.0
        if mass == 0.0 and lambda_ < special.power(k + 1.0, nu):
            return total
        k += 1
    return total


def _sample(rng: np.random.Generator, lambda_: float, nu: float, log_z: float) -> int:
    u = float(rng.random())
    k = 0
    mass = math.exp(-log_z)
    total = mass
    while u > total:
        k += 1
        mass = math.exp(_pmf_ln(lambda_, nu, log_z, k))
        total += mass
        # past the mode the masses only decrease
        if mass == 0.0 and lambda_ < special.power(k + 1.0, nu):
            break
    return k


def pmf(lambda_: float, nu: float, k: int) -> float:
    """
    Probability mass function for Conway-Maxwell-Poisson distribution.

    Parameters
    ----------
    lambda_ : float
        Rate (λ), positive
    nu : float
        Decay (ν), non-negative
    k : int
        Number of events

    Returns
    -------
    float
        ``λ^k / (k!)^ν / Z(λ, ν)`` for ``k >= 0``, 0 otherwise
    """
    ConwayMaxwellPoissonLambdaNu(lambda_=lambda_, nu=nu).validate()
    return _pmf(lambda_, nu, normalization_ln(lambda_, nu), k)


def pmf_ln(lambda_: float, nu: float, k: int) -> float:
    ConwayMaxwellPoissonLambdaNu(lambda_=lambda_, nu=nu).validate()
    return _pmf_ln(lambda_, nu, normalization_ln(lambda_, nu), k)


def cdf(lambda_: float, nu: float, x: float) -> float:
    ConwayMaxwellPoissonLambdaNu(lambda_=lambda_, nu=nu).validate()
    return _cdf(lambda_, nu, normalization_ln(lambda_, nu), x)


def sample(lambda_: float, nu: float, *, rng: np.random.Generator | None = None) -> int:
    ConwayMaxwellPoissonLambdaNu(lambda_=lambda_, nu=nu).validate()
    return _sample(resolve_random_source(rng), lambda_, nu, normalization_ln(lambda_, nu))


def fill_samples(
    values: npt.NDArray[np.int64],
    lambda_: float,
    nu: float,
    *,
    rng: np.random.Generator | None = None,
) -> None:
    ConwayMaxwellPoissonLambdaNu(lambda_=lambda_, nu=nu).validate()
    source = resolve_random_source(rng)
    log_z = normalization_ln(lambda_, nu)
    fill_sequentially(values, lambda: _sample(source, lambda_, nu, log_z))


def samples(
    n: int, lambda_: float, nu: float, *, rng: np.random.Generator | None = None
) -> IntArray:
    values = new_buffer(n, np.int64)
    fill_samples(values, lambda_, nu, rng=rng)
    return values


def iter_samples(
    lambda_: float, nu: float, *, rng: np.random.Generator | None = None
) -> Iterator[int]:
    ConwayMaxwellPoissonLambdaNu(lambda_=lambda_, nu=nu).validate()
    source = resolve_random_source(rng)
    log_z = normalization_ln(lambda_, nu)
    return sample_stream(lambda: _sample(source, lambda_, nu, log_z))


class ConwayMaxwellPoisson(DiscreteDistribution):
    """
    Conway-Maxwell-Poisson distribution.

    The normalization constant and the moments are computed on first use
    and cached.

    Parameters
    ----------
    lambda_ : float
        Rate λ > 0.
    nu : float
        Decay ν ≥ 0.
    random_source : numpy.random.Generator, optional
        Generator used for sampling.
    """

    def __init__(
        self, lambda_: float, nu: float, random_source: np.random.Generator | None = None
    ) -> None:
        self._parameters = ConwayMaxwellPoissonLambdaNu(lambda_=lambda_, nu=nu)
        self._parameters.validate()
        self._lambda = lambda_
        self._nu = nu
        self._log_z: float | None = None
        self._moments: tuple[float, float] | None = None
        self._random_source = resolve_random_source(random_source)

    def __repr__(self) -> str:
        return f"ConwayMaxwellPoisson(lambda_={self._lambda}, nu={self._nu})"

    @property
    def lambda_(self) -> float:
        return self._lambda

    @property
    def nu(self) -> float:
        return self._nu

    @property
    def normalization_ln(self) -> float:
        if self._log_z is None:
            self._log_z = normalization_ln(self._lambda, self._nu)
        return self._log_z

    def _raw_moments(self) -> tuple[float, float]:
        if self._moments is None:
            log_z, log_first, log_second = _log_series(self._lambda, self._nu, 2)
            if self._log_z is None:
                self._log_z = log_z
            self._moments = (math.exp(log_first - log_z), math.exp(log_second - log_z))
        return self._moments

    @property
    def support(self) -> IntegerLatticeDiscreteSupport:
        return IntegerLatticeDiscreteSupport(0)

    @property
    def mean(self) -> float:
        return self._raw_moments()[0]

    @property
    def variance(self) -> float:
        first, second = self._raw_moments()
        return second - first * first

    @property
    def entropy(self) -> float:
        raise NotSupportedError("Conway-Maxwell-Poisson entropy is not implemented")

    @property
    def skewness(self) -> float:
        raise NotSupportedError("Conway-Maxwell-Poisson skewness is not implemented")

    @property
    def mode(self) -> int:
        raise NotSupportedError("Conway-Maxwell-Poisson mode is not implemented")

    @property
    def median(self) -> float:
        raise NotSupportedError("Conway-Maxwell-Poisson median is not implemented")

    def probability(self, k: int) -> float:
        return _pmf(self._lambda, self._nu, self.normalization_ln, k)

    def probability_ln(self, k: int) -> float:
        return _pmf_ln(self._lambda, self._nu, self.normalization_ln, k)

    def cumulative_distribution(self, x: float) -> float:
        return _cdf(self._lambda, self._nu, self.normalization_ln, x)

    def sample(self) -> int:
        return _sample(self._random_source, self._lambda, self._nu, self.normalization_ln)
