"""
Error Taxonomy
==============

Exceptions raised by distributions of the catalog and the warning category
used for non-fatal numerical diagnostics.

All exceptions derive from :class:`DistributionError` and additionally from
the closest built-in category, so code that catches ``ValueError`` or
``NotImplementedError`` keeps working.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


class DistributionError(Exception):
    """Base class for all errors raised by the distribution catalog."""


class InvalidParameterError(DistributionError, ValueError):
    """
    A parameter set violates one of its constraints.

    Parameters
    ----------
    description : str
        Human-readable description of the violated constraint.
    """

    def __init__(self, description: str) -> None:
        super().__init__(f'Constraint "{description}" does not hold')
        self.description = description


class NotSupportedError(DistributionError, NotImplementedError):
    """A statistic or function is undefined for the current parameters."""


class NonConvergenceError(DistributionError, RuntimeError):
    """
    An iterative algorithm exhausted its budget without reaching tolerance.

    Parameters
    ----------
    message : str
        Description of the failed computation.
    iterations : int
        Number of iterations performed before giving up.
    """

    def __init__(self, message: str, iterations: int) -> None:
        super().__init__(f"{message} (no convergence after {iterations} iterations)")
        self.iterations = iterations


class OutOfRangeError(DistributionError, ValueError):
    """An argument lies outside its admissible range, e.g. a probability outside [0, 1]."""


class NumericalWarning(RuntimeWarning):
    """A truncated numerical procedure stopped before reaching its tolerance."""


def check_probability(p: float) -> None:
    """
    Ensure that ``p`` is a probability.

    Raises
    ------
    OutOfRangeError
        If ``p`` is NaN or lies outside [0, 1].
    """
    if not 0.0 <= p <= 1.0:
        raise OutOfRangeError(f"Probability must be in [0, 1], got {p}")


__all__ = [
    "DistributionError",
    "InvalidParameterError",
    "NotSupportedError",
    "NonConvergenceError",
    "OutOfRangeError",
    "NumericalWarning",
    "check_probability",
]
