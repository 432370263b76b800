"""
Tests for Truncated Pareto Distribution
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import numpy as np
import pytest
from scipy import integrate

from pysatl_univariate.types import ContinuousSupportShape1D
from pysatl_univariate.errors import InvalidParameterError, NotSupportedError
from pysatl_univariate.families.builtins.continuous import truncated_pareto
from pysatl_univariate.families.builtins.continuous.truncated_pareto import TruncatedPareto
from tests.unit.families.builtins.base import BaseDistributionTest


def numeric_moment(dist: TruncatedPareto, n: int) -> float:
    value, _ = integrate.quad(
        lambda x: x**n * dist.density(x), dist.scale, dist.truncation, epsabs=1e-13, epsrel=1e-12
    )
    return value


class TestTruncatedPareto(BaseDistributionTest):
    """Test suite for TruncatedPareto distribution."""

    def setup_method(self):
        self.truncated_pareto_dist_example = TruncatedPareto(scale=1.0, shape=1.5, truncation=10.0)

    @pytest.mark.parametrize(
        "scale, shape, truncation, message",
        [
            (0.0, 1.0, 2.0, "0 < scale < inf"),
            (1.0, -1.0, 2.0, "0 < shape < inf"),
            (2.0, 1.0, 2.0, "scale < truncation < inf"),
            (1.0, 1.0, math.inf, "scale < truncation < inf"),
        ],
    )
    def test_parametrization_constraints(self, scale, shape, truncation, message):
        with pytest.raises(InvalidParameterError, match=message):
            TruncatedPareto(scale, shape, truncation)

    def test_density_integrates_to_one(self):
        dist = self.truncated_pareto_dist_example

        assert abs(numeric_moment(dist, 0) - 1.0) < 1e-10

    @pytest.mark.parametrize("shape", [0.5, 1.0, 1.5, 2.0, 3.0, 4.5])
    def test_moments_against_integration(self, shape):
        dist = TruncatedPareto(scale=1.0, shape=shape, truncation=10.0)
        mean = numeric_moment(dist, 1)
        variance = numeric_moment(dist, 2) - mean * mean

        assert math.isclose(dist.mean, mean, rel_tol=1e-9)
        assert math.isclose(dist.variance, variance, rel_tol=1e-8)
        for n in (1, 2, 3):
            assert math.isclose(dist.moment(n), numeric_moment(dist, n), rel_tol=1e-9)

    def test_skewness_against_integration(self):
        dist = self.truncated_pareto_dist_example
        mean = dist.mean
        third_central, _ = integrate.quad(
            lambda x: (x - mean) ** 3 * dist.density(x), 1.0, 10.0, epsabs=1e-13, epsrel=1e-12
        )

        assert math.isclose(dist.skewness, third_central / dist.variance**1.5, rel_tol=1e-8)

    def test_mode_median_and_entropy(self):
        dist = self.truncated_pareto_dist_example

        assert dist.mode == 1.0
        assert abs(dist.cumulative_distribution(dist.median) - 0.5) < 1e-12
        with pytest.raises(NotSupportedError):
            _ = dist.entropy

    def test_functions(self):
        dist = self.truncated_pareto_dist_example
        mass = 1.0 - 10.0**-1.5

        assert dist.density(0.9) == 0.0
        assert dist.density(10.5) == 0.0
        assert abs(dist.density(2.0) - 1.5 * 2.0**-2.5 / mass) < self.CALCULATION_PRECISION
        assert dist.cumulative_distribution(1.0) == 0.0
        assert dist.cumulative_distribution(10.0) == 1.0
        assert abs(dist.cumulative_distribution(4.0) - (1.0 - 4.0**-1.5) / mass) < 1e-12
        self.assert_density_consistent(dist, [1.0, 1.5, 3.0, 9.99])
        self.assert_cdf_monotone(dist, np.linspace(0.0, 11.0, 50))

    def test_inverse_cdf(self):
        dist = self.truncated_pareto_dist_example

        assert dist.inverse_cumulative_distribution(0.0) == 1.0
        assert dist.inverse_cumulative_distribution(1.0) == 10.0
        self.assert_quantile_round_trip(dist, tolerance=1e-12)
        assert dist.support.shape == ContinuousSupportShape1D.BOUNDED_INTERVAL

    def test_sampling(self, rng):
        dist = self.truncated_pareto_dist_example
        values = truncated_pareto.samples(self.SAMPLE_SIZE, 1.0, 1.5, 10.0, rng=rng)

        assert values.min() >= 1.0
        assert values.max() <= 10.0
        self.assert_sample_moments(values, dist.mean, dist.variance)

    def test_single_and_stream(self, rng):
        dist = TruncatedPareto(2.0, 0.8, 5.0, random_source=rng)
        single = np.array([dist.sample() for _ in range(40_000)])
        stream = truncated_pareto.iter_samples(2.0, 0.8, 5.0, rng=rng)
        streamed = np.array([next(stream) for _ in range(40_000)])

        for values in (single, streamed):
            assert values.min() >= 2.0
            assert values.max() <= 5.0
            self.assert_sample_moments(values, dist.mean, dist.variance)
