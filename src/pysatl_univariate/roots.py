"""
Root Finding
============

Root finders used by quantile functions without a closed form.

- :func:`find_root_bracketed` wraps :func:`scipy.optimize.brentq` and widens
  the starting interval until it brackets a sign change.
- :func:`find_root_newton` runs a bounded Newton-Raphson iteration.

Both raise :class:`~pysatl_univariate.errors.NonConvergenceError` instead of
returning an inaccurate value once their iteration budget is spent.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING

from scipy.optimize import brentq

from pysatl_univariate.config import numeric_config
from pysatl_univariate.errors import NonConvergenceError

if TYPE_CHECKING:
    from pysatl_univariate.types import ScalarFunc

_EXPANSION_FACTOR = 1.6
_EXPANSION_ITERATIONS = 50


def _expand_bracket(
    f: ScalarFunc,
    lower: float,
    upper: float,
    lower_limit: float = -math.inf,
    upper_limit: float = math.inf,
) -> tuple[float, float]:
    """
    Widen ``[lower, upper]`` until ``f`` changes sign on it.

    The interval never grows past ``[lower_limit, upper_limit]``; once both
    ends sit on their limits without a sign change the search stops.
    """
    f_lower = f(lower)
    f_upper = f(upper)
    for iteration in range(_EXPANSION_ITERATIONS):
        if f_lower == 0 or f_upper == 0:
            return lower, upper
        if math.copysign(1.0, f_lower) != math.copysign(1.0, f_upper):
            return lower, upper
        can_lower = lower > lower_limit
        can_upper = upper < upper_limit
        if not (can_lower or can_upper):
            raise NonConvergenceError(
                f"No sign change on the admissible interval [{lower}, {upper}]", iteration
            )
        width = upper - lower
        if can_lower and (abs(f_lower) < abs(f_upper) or not can_upper):
            lower = max(lower - _EXPANSION_FACTOR * width, lower_limit)
            f_lower = f(lower)
        else:
            upper = min(upper + _EXPANSION_FACTOR * width, upper_limit)
            f_upper = f(upper)
    raise NonConvergenceError(
        f"Unable to bracket a root starting from [{lower}, {upper}]", _EXPANSION_ITERATIONS
    )


def find_root_bracketed(
    f: ScalarFunc,
    lower: float,
    upper: float,
    accuracy: float | None = None,
    max_iterations: int | None = None,
    *,
    lower_limit: float = -math.inf,
    upper_limit: float = math.inf,
) -> float:
    """
    Find a root of ``f`` with Brent's method.

    Parameters
    ----------
    f : ScalarFunc
        Continuous scalar function.
    lower, upper : float
        Initial interval. Widened outwards if ``f`` has the same sign at
        both ends.
    accuracy : float, optional
        Absolute accuracy; defaults to ``numeric_config().root_accuracy``.
    max_iterations : int, optional
        Iteration budget; defaults to ``numeric_config().root_max_iterations``.
    lower_limit, upper_limit : float, optional
        Bounds the widened interval never crosses, such as the ends of a
        bounded support.

    Returns
    -------
    float
        Approximation of the root.

    Raises
    ------
    NonConvergenceError
        If no sign change is found or the budget is exhausted.
    """
    config = numeric_config()
    accuracy = config.root_accuracy if accuracy is None else accuracy
    max_iterations = config.root_max_iterations if max_iterations is None else max_iterations

    lower, upper = _expand_bracket(f, lower, upper, lower_limit, upper_limit)
    root, result = brentq(
        f, lower, upper, xtol=accuracy, maxiter=max_iterations, full_output=True, disp=False
    )
    if not result.converged:
        raise NonConvergenceError("Brent root finding failed", result.iterations)
    return float(root)


def find_root_newton(
    f: ScalarFunc,
    df: ScalarFunc,
    guess: float,
    lower: float = -math.inf,
    upper: float = math.inf,
    accuracy: float | None = None,
    max_iterations: int | None = None,
) -> float:
    """
    Find a root of ``f`` with Newton-Raphson iterations started at ``guess``.

    A step that leaves ``[lower, upper]`` is replaced by halving the distance
    between the current iterate and the violated bound.

    Parameters
    ----------
    f : ScalarFunc
        Function whose root is sought.
    df : ScalarFunc
        Derivative of ``f``.
    guess : float
        Starting point inside ``[lower, upper]``.
    lower, upper : float
        Admissible range of the root.
    accuracy : float, optional
        Required accuracy of both the step and the residual; defaults to
        ``numeric_config().newton_accuracy``.
    max_iterations : int, optional
        Iteration budget; defaults to ``numeric_config().newton_max_iterations``.

    Returns
    -------
    float
        Approximation of the root.

    Raises
    ------
    NonConvergenceError
        If the budget is exhausted or the derivative vanishes.
    """
    config = numeric_config()
    accuracy = config.newton_accuracy if accuracy is None else accuracy
    max_iterations = config.newton_max_iterations if max_iterations is None else max_iterations

    root = guess
    for iteration in range(1, max_iterations + 1):
        fx = f(root)
        dfx = df(root)
        if dfx == 0 or not math.isfinite(dfx):
            raise NonConvergenceError("Newton-Raphson hit a flat or singular derivative", iteration)

        step = fx / dfx
        candidate = root - step
        if candidate < lower:
            candidate = 0.5 * (root + lower)
        elif candidate > upper:
            candidate = 0.5 * (root + upper)

        converged = abs(candidate - root) < accuracy and abs(fx) < accuracy
        root = candidate
        if converged:
            return root

    raise NonConvergenceError("Newton-Raphson root finding failed", max_iterations)


__all__ = ["find_root_bracketed", "find_root_newton"]
