"""
Built-in discrete distributions.

One module per distribution, each exposing validated module-level functions
and the distribution class.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from pysatl_univariate.families.builtins.discrete.bernoulli import Bernoulli
from pysatl_univariate.families.builtins.discrete.beta_binomial import BetaBinomial
from pysatl_univariate.families.builtins.discrete.binomial import Binomial
from pysatl_univariate.families.builtins.discrete.categorical import Categorical
from pysatl_univariate.families.builtins.discrete.conway_maxwell_poisson import (
    ConwayMaxwellPoisson,
)
from pysatl_univariate.families.builtins.discrete.discrete_uniform import DiscreteUniform
from pysatl_univariate.families.builtins.discrete.geometric import Geometric
from pysatl_univariate.families.builtins.discrete.hypergeometric import Hypergeometric
from pysatl_univariate.families.builtins.discrete.negative_binomial import NegativeBinomial
from pysatl_univariate.families.builtins.discrete.poisson import Poisson
from pysatl_univariate.families.builtins.discrete.zipf import Zipf

__all__ = [
    "Bernoulli",
    "BetaBinomial",
    "Binomial",
    "Categorical",
    "ConwayMaxwellPoisson",
    "DiscreteUniform",
    "Geometric",
    "Hypergeometric",
    "NegativeBinomial",
    "Poisson",
    "Zipf",
]
