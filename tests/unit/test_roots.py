from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import pytest

from pysatl_univariate.config import configure_numerics
from pysatl_univariate.errors import NonConvergenceError
from pysatl_univariate.roots import find_root_bracketed, find_root_newton


def square_minus_two(x: float) -> float:
    return x * x - 2.0


def no_real_root(x: float) -> float:
    return x * x + 1.0


def twice(x: float) -> float:
    return 2.0 * x


class TestBracketedRoot:
    def test_root_inside_bracket(self) -> None:
        root = find_root_bracketed(square_minus_two, 0.0, 2.0)
        assert root == pytest.approx(math.sqrt(2.0), abs=1e-11)

    @pytest.mark.parametrize("lower, upper", [(0.0, 1.0), (3.0, 4.0), (-0.5, 0.5)])
    def test_bracket_is_widened(self, lower, upper) -> None:
        root = find_root_bracketed(math.atan, lower + 10.0, upper + 10.0)
        assert root == pytest.approx(0.0, abs=1e-11)

    def test_root_at_bound(self) -> None:
        assert find_root_bracketed(lambda x: x - 1.0, 1.0, 2.0) == 1.0

    def test_no_sign_change_raises(self) -> None:
        with pytest.raises(NonConvergenceError, match="Unable to bracket"):
            find_root_bracketed(no_real_root, 0.0, 1.0)

    def test_widening_stops_at_limits(self) -> None:
        root = find_root_bracketed(lambda x: x - 0.9, 0.0, 0.5, lower_limit=0.0, upper_limit=1.0)
        assert root == pytest.approx(0.9, abs=1e-11)

        root = find_root_bracketed(lambda x: x - 0.1, 0.2, 0.5, lower_limit=0.0, upper_limit=1.0)
        assert root == pytest.approx(0.1, abs=1e-11)

    def test_no_sign_change_within_limits_raises(self) -> None:
        with pytest.raises(NonConvergenceError, match="admissible interval") as info:
            find_root_bracketed(lambda x: 0.7, 0.0, 1.0, lower_limit=0.0, upper_limit=1.0)
        assert info.value.iterations == 0

        with pytest.raises(NonConvergenceError, match="admissible interval"):
            find_root_bracketed(no_real_root, 0.2, 0.5, lower_limit=0.0, upper_limit=1.0)

    def test_iteration_budget_from_config(self) -> None:
        configure_numerics(root_max_iterations=1)

        with pytest.raises(NonConvergenceError):
            find_root_bracketed(square_minus_two, 0.0, 2.0)

    def test_explicit_accuracy(self) -> None:
        root = find_root_bracketed(square_minus_two, 0.0, 2.0, accuracy=1e-3)
        assert abs(root - math.sqrt(2.0)) < 1e-3


class TestNewtonRoot:
    def test_converges(self) -> None:
        root = find_root_newton(square_minus_two, twice, 1.0)
        assert root == pytest.approx(math.sqrt(2.0), abs=1e-8)

    def test_steps_are_kept_inside_bounds(self) -> None:
        # a plain Newton step from 3 lands at a negative x where log is undefined
        root = find_root_newton(math.log, lambda x: 1.0 / x, 3.0, lower=0.0)
        assert root == pytest.approx(1.0, abs=1e-8)

    def test_flat_derivative_raises(self) -> None:
        with pytest.raises(NonConvergenceError, match="flat or singular"):
            find_root_newton(no_real_root, twice, 0.0)

    def test_budget_exhaustion_raises(self) -> None:
        configure_numerics(newton_max_iterations=3)

        with pytest.raises(NonConvergenceError) as info:
            find_root_newton(no_real_root, twice, 0.5)
        assert info.value.iterations == 3
