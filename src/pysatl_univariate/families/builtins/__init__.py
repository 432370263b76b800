"""
Built-in distributions for PySATL univariate.

This package contains the continuous and discrete distributions that are
available by default.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from pysatl_univariate.families.builtins.continuous import *
from pysatl_univariate.families.builtins.continuous import __all__ as _continuous_all
from pysatl_univariate.families.builtins.discrete import *
from pysatl_univariate.families.builtins.discrete import __all__ as _discrete_all

__all__ = [
    *_continuous_all,
    *_discrete_all,
]

del _continuous_all
del _discrete_all
