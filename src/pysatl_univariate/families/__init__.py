"""
Families module of the univariate catalog.

This package provides the parametrization layer shared by every
distribution, the builtin distributions themselves and the global registry
mapping distribution names to classes.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov, Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from .builtins import *
from .builtins import __all__ as _builtins_all
from .configuration import configure_distributions_register, reset_distributions_register
from .parametrizations import (
    Parametrization,
    ParametrizationConstraint,
    constraint,
    parametrization,
)
from .registry import DistributionRegister

__all__ = [
    "DistributionRegister",
    "ParametrizationConstraint",
    "Parametrization",
    "constraint",
    "parametrization",
    "configure_distributions_register",
    "reset_distributions_register",
    *_builtins_all,
]

del _builtins_all
