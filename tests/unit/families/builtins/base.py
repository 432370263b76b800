"""
Common fixtures and utilities for distribution tests.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


import math
from collections.abc import Iterable
from typing import Any

import numpy as np

from pysatl_univariate.distributions.distribution import (
    ContinuousDistribution,
    DiscreteDistribution,
)


class BaseDistributionTest:
    """Base class for all distributions' tests"""

    # Precision for floating point comparisons
    CALCULATION_PRECISION = 1e-10
    # Relative tolerance between density and exponentiated log density
    LOG_CONSISTENCY_PRECISION = 1e-9
    # Number of draws of sampling tests
    SAMPLE_SIZE = 100_000

    @staticmethod
    def assert_arrays_almost_equal(
        actual: np.ndarray[Any, Any], expected: np.ndarray[Any, Any], precision: float | None = None
    ) -> None:
        """Helper method to assert arrays are almost equal."""
        if precision is None:
            precision = BaseDistributionTest.CALCULATION_PRECISION

        np.testing.assert_array_almost_equal(actual, expected, decimal=int(-math.log10(precision)))

    @staticmethod
    def assert_density_consistent(dist: ContinuousDistribution, points: Iterable[float]) -> None:
        """``density(x)`` equals ``exp(density_ln(x))`` wherever the density is finite."""
        for x in points:
            density = dist.density(x)
            if math.isinf(density):
                continue
            assert math.isclose(
                density,
                math.exp(dist.density_ln(x)),
                rel_tol=BaseDistributionTest.LOG_CONSISTENCY_PRECISION,
                abs_tol=1e-300,
            )

    @staticmethod
    def assert_mass_consistent(dist: DiscreteDistribution, points: Iterable[int]) -> None:
        """``probability(k)`` equals ``exp(probability_ln(k))``."""
        for k in points:
            assert math.isclose(
                dist.probability(k),
                math.exp(dist.probability_ln(k)),
                rel_tol=BaseDistributionTest.LOG_CONSISTENCY_PRECISION,
                abs_tol=1e-300,
            )

    @staticmethod
    def assert_cdf_monotone(
        dist: ContinuousDistribution | DiscreteDistribution, points: Iterable[float]
    ) -> None:
        values = [dist.cumulative_distribution(x) for x in sorted(points)]
        assert all(0.0 <= v <= 1.0 for v in values)
        assert all(a <= b for a, b in zip(values, values[1:], strict=False))

    @staticmethod
    def assert_quantile_round_trip(
        dist: ContinuousDistribution,
        probabilities: Iterable[float] = (0.01, 0.1, 0.25, 0.5, 0.75, 0.9, 0.99),
        tolerance: float = 1e-8,
    ) -> None:
        for p in probabilities:
            x = dist.inverse_cumulative_distribution(p)
            assert abs(dist.cumulative_distribution(x) - p) < tolerance

    @staticmethod
    def assert_sample_moments(
        values: np.ndarray[Any, Any],
        mean: float,
        variance: float,
        mean_tolerance: float | None = None,
    ) -> None:
        """
        Empirical mean within ``mean_tolerance`` (default five standard
        errors) and empirical variance within 5 % of the analytic values.
        """
        n = values.shape[0]
        if mean_tolerance is None:
            mean_tolerance = 5.0 * math.sqrt(variance / n)
        assert abs(float(np.mean(values)) - mean) <= mean_tolerance
        assert abs(float(np.var(values)) - variance) <= 0.05 * variance + 1e-12
