"""
Distribution Register Configuration
===================================

This module registers the builtin distributions of the catalog in the
global :class:`~pysatl_univariate.families.registry.DistributionRegister`
under their :class:`~pysatl_univariate.types.DistributionName`.

Notes
-----
- Registration happens once per process; :func:`reset_distributions_register`
  clears both the cache and the registry.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from functools import lru_cache
from typing import TYPE_CHECKING

from pysatl_univariate.families.builtins import (
    Bernoulli,
    Beta,
    BetaBinomial,
    BetaScaled,
    Binomial,
    Categorical,
    Cauchy,
    ChiSquared,
    ContinuousUniform,
    ConwayMaxwellPoisson,
    DiscreteUniform,
    Erlang,
    Exponential,
    Gamma,
    Geometric,
    Hypergeometric,
    InverseGaussian,
    Laplace,
    Logistic,
    LogNormal,
    NegativeBinomial,
    Normal,
    Pareto,
    Poisson,
    Rayleigh,
    SkewedGeneralizedError,
    SkewedGeneralizedT,
    Stable,
    StudentT,
    Triangular,
    TruncatedPareto,
    Weibull,
    Zipf,
)
from pysatl_univariate.families.registry import DistributionRegister
from pysatl_univariate.types import DistributionName

if TYPE_CHECKING:
    from pysatl_univariate.distributions.distribution import UnivariateDistribution

_BUILTINS: dict[DistributionName, type[UnivariateDistribution]] = {
    DistributionName.BETA: Beta,
    DistributionName.BETA_SCALED: BetaScaled,
    DistributionName.CAUCHY: Cauchy,
    DistributionName.CHI_SQUARED: ChiSquared,
    DistributionName.CONTINUOUS_UNIFORM: ContinuousUniform,
    DistributionName.ERLANG: Erlang,
    DistributionName.EXPONENTIAL: Exponential,
    DistributionName.GAMMA: Gamma,
    DistributionName.INVERSE_GAUSSIAN: InverseGaussian,
    DistributionName.LAPLACE: Laplace,
    DistributionName.LOGISTIC: Logistic,
    DistributionName.LOG_NORMAL: LogNormal,
    DistributionName.NORMAL: Normal,
    DistributionName.PARETO: Pareto,
    DistributionName.RAYLEIGH: Rayleigh,
    DistributionName.SKEWED_GENERALIZED_ERROR: SkewedGeneralizedError,
    DistributionName.SKEWED_GENERALIZED_T: SkewedGeneralizedT,
    DistributionName.STABLE: Stable,
    DistributionName.STUDENT_T: StudentT,
    DistributionName.TRIANGULAR: Triangular,
    DistributionName.TRUNCATED_PARETO: TruncatedPareto,
    DistributionName.WEIBULL: Weibull,
    DistributionName.BERNOULLI: Bernoulli,
    DistributionName.BETA_BINOMIAL: BetaBinomial,
    DistributionName.BINOMIAL: Binomial,
    DistributionName.CATEGORICAL: Categorical,
    DistributionName.CONWAY_MAXWELL_POISSON: ConwayMaxwellPoisson,
    DistributionName.DISCRETE_UNIFORM: DiscreteUniform,
    DistributionName.GEOMETRIC: Geometric,
    DistributionName.HYPERGEOMETRIC: Hypergeometric,
    DistributionName.NEGATIVE_BINOMIAL: NegativeBinomial,
    DistributionName.POISSON: Poisson,
    DistributionName.ZIPF: Zipf,
}


@lru_cache(maxsize=1)
def configure_distributions_register() -> DistributionRegister:
    """
    Register every builtin distribution in the global registry.

    Returns
    -------
    DistributionRegister
        The global registry of distributions.
    """
    register = DistributionRegister()
    for name, distribution in _BUILTINS.items():
        register.register(name, distribution)
    return register


def reset_distributions_register() -> None:
    """
    Reset the cached distributions registry.
    """
    configure_distributions_register.cache_clear()
    DistributionRegister._reset()
