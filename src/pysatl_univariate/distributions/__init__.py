"""
Distributions subpackage

Interfaces shared by every catalog member:

- distribution protocols with default behaviour (:mod:`.distribution`);
- sample buffers and infinite sample streams (:mod:`.sampling`);
- support objects (:mod:`.support`).
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"
from .distribution import ContinuousDistribution, DiscreteDistribution, UnivariateDistribution
from .support import ContinuousSupport, IntegerLatticeDiscreteSupport, Support

__all__ = [
    # distribution
    "UnivariateDistribution",
    "ContinuousDistribution",
    "DiscreteDistribution",
    # support
    "Support",
    "ContinuousSupport",
    "IntegerLatticeDiscreteSupport",
]
