"""
Numeric Configuration
=====================

Tuning constants of the iterative and threshold-based algorithms used by the
catalog: series truncation, root-finder budgets and the cut-over points at
which densities switch to log space or samplers switch algorithm.

The active configuration is an immutable :class:`NumericConfig` instance.
Use :func:`configure_numerics` to replace individual fields and
:func:`reset_numeric_config` to restore the defaults.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass, fields, replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any


@dataclass(frozen=True, slots=True)
class NumericConfig:
    """
    Numeric tuning constants.

    Parameters
    ----------
    series_max_terms : int
        Term cap of truncated series (Conway-Maxwell-Poisson normalization
        and moments).
    series_tolerance : float
        Relative tail bound at which a truncated series stops early.
    root_accuracy : float
        Absolute accuracy of bracketed root finding.
    root_max_iterations : int
        Iteration budget of bracketed root finding.
    newton_accuracy : float
        Absolute accuracy of Newton-Raphson root finding.
    newton_max_iterations : int
        Iteration budget of Newton-Raphson root finding.
    beta_log_space_threshold : float
        Beta shape above which the density is evaluated in log space.
    gamma_log_space_threshold : float
        Gamma shape above which the density is evaluated in log space.
    poisson_atkinson_threshold : float
        Poisson rate from which Atkinson's rejection method replaces the
        multiplicative method.
    student_t_normal_threshold : float
        Degrees of freedom from which the Student t density is replaced by
        the normal density.
    """

    series_max_terms: int = 1000
    series_tolerance: float = 1e-12
    root_accuracy: float = 1e-12
    root_max_iterations: int = 100
    newton_accuracy: float = 1e-8
    newton_max_iterations: int = 100
    beta_log_space_threshold: float = 80.0
    gamma_log_space_threshold: float = 160.0
    poisson_atkinson_threshold: float = 30.0
    student_t_normal_threshold: float = 1e8

    def __post_init__(self) -> None:
        for field in fields(self):
            value = getattr(self, field.name)
            if not value > 0:
                raise ValueError(f"{field.name} must be positive, got {value}")


_DEFAULT = NumericConfig()
_active = _DEFAULT


def numeric_config() -> NumericConfig:
    """Return the active numeric configuration."""
    return _active


def configure_numerics(**changes: Any) -> NumericConfig:
    """
    Replace fields of the active numeric configuration.

    Parameters
    ----------
    **changes : Any
        Field names of :class:`NumericConfig` with their new values.

    Returns
    -------
    NumericConfig
        The new active configuration.

    Raises
    ------
    TypeError
        If an unknown field is given.
    ValueError
        If a value is not positive.
    """
    global _active
    _active = replace(_active, **changes)
    return _active


def reset_numeric_config() -> None:
    """Restore the default numeric configuration."""
    global _active
    _active = _DEFAULT


__all__ = [
    "NumericConfig",
    "numeric_config",
    "configure_numerics",
    "reset_numeric_config",
]
