"""
Built-in continuous distributions.

One module per distribution, each exposing validated module-level functions
and the distribution class.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from pysatl_univariate.families.builtins.continuous.beta import Beta
from pysatl_univariate.families.builtins.continuous.beta_scaled import BetaScaled
from pysatl_univariate.families.builtins.continuous.cauchy import Cauchy
from pysatl_univariate.families.builtins.continuous.chi_squared import ChiSquared
from pysatl_univariate.families.builtins.continuous.erlang import Erlang
from pysatl_univariate.families.builtins.continuous.exponential import Exponential
from pysatl_univariate.families.builtins.continuous.gamma import Gamma
from pysatl_univariate.families.builtins.continuous.inverse_gaussian import InverseGaussian
from pysatl_univariate.families.builtins.continuous.laplace import Laplace
from pysatl_univariate.families.builtins.continuous.log_normal import LogNormal
from pysatl_univariate.families.builtins.continuous.logistic import Logistic
from pysatl_univariate.families.builtins.continuous.normal import Normal
from pysatl_univariate.families.builtins.continuous.pareto import Pareto
from pysatl_univariate.families.builtins.continuous.rayleigh import Rayleigh
from pysatl_univariate.families.builtins.continuous.skewed_generalized_error import (
    SkewedGeneralizedError,
)
from pysatl_univariate.families.builtins.continuous.skewed_generalized_t import (
    SkewedGeneralizedT,
)
from pysatl_univariate.families.builtins.continuous.stable import Stable
from pysatl_univariate.families.builtins.continuous.student_t import StudentT
from pysatl_univariate.families.builtins.continuous.triangular import Triangular
from pysatl_univariate.families.builtins.continuous.truncated_pareto import TruncatedPareto
from pysatl_univariate.families.builtins.continuous.uniform import ContinuousUniform
from pysatl_univariate.families.builtins.continuous.weibull import Weibull

__all__ = [
    "Beta",
    "BetaScaled",
    "Cauchy",
    "ChiSquared",
    "ContinuousUniform",
    "Erlang",
    "Exponential",
    "Gamma",
    "InverseGaussian",
    "Laplace",
    "LogNormal",
    "Logistic",
    "Normal",
    "Pareto",
    "Rayleigh",
    "SkewedGeneralizedError",
    "SkewedGeneralizedT",
    "Stable",
    "StudentT",
    "Triangular",
    "TruncatedPareto",
    "Weibull",
]
