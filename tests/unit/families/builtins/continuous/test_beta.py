"""
Tests for Beta Distribution

This module tests the beta distribution including the boundary shapes
that collapse to atoms at 0, 1/2 or 1.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import numpy as np
import pytest
from scipy import stats

from pysatl_univariate.errors import InvalidParameterError, NotSupportedError, OutOfRangeError
from pysatl_univariate.families.builtins.continuous import beta
from pysatl_univariate.families.builtins.continuous.beta import Beta
from tests.unit.families.builtins.base import BaseDistributionTest


class TestBeta(BaseDistributionTest):
    """Test suite for Beta distribution."""

    def setup_method(self):
        self.beta_dist_example = Beta(alpha=2.0, beta=5.0)
        self.reference = stats.beta(2.0, 5.0)

    def test_parametrization(self):
        assert self.beta_dist_example.parameters.name == "shapes"
        assert self.beta_dist_example.parameters.parameters == {"alpha": 2.0, "beta": 5.0}

    def test_parametrization_constraints(self):
        with pytest.raises(InvalidParameterError, match="alpha >= 0"):
            Beta(alpha=-0.5, beta=1.0)

        with pytest.raises(InvalidParameterError, match="beta >= 0"):
            Beta(alpha=1.0, beta=-0.5)

        with pytest.raises(InvalidParameterError, match=r'Constraint "alpha >= 0" does not hold'):
            beta.pdf(math.nan, 1.0, 0.5)

        assert beta.is_valid_parameter_set(0.0, math.inf)

    @pytest.mark.parametrize(
        "getter, expected",
        [
            (lambda d: d.mean, 2.0 / 7.0),
            (lambda d: d.variance, 10.0 / (49.0 * 8.0)),
            (lambda d: d.skewness, stats.beta(2.0, 5.0).stats(moments="s")),
            (lambda d: d.mode, 0.2),
            (lambda d: d.entropy, stats.beta(2.0, 5.0).entropy()),
        ],
    )
    def test_moments(self, getter, expected):
        assert abs(getter(self.beta_dist_example) - float(expected)) < self.CALCULATION_PRECISION

    def test_undefined_statistics(self):
        with pytest.raises(NotSupportedError):
            _ = Beta(0.5, 0.5).mode
        with pytest.raises(NotSupportedError):
            _ = self.beta_dist_example.median

    @pytest.mark.parametrize("alpha, beta_", [(2.0, 5.0), (0.5, 0.5), (1.0, 3.0), (7.5, 1.2)])
    def test_functions_against_scipy(self, alpha, beta_):
        dist = Beta(alpha, beta_)
        reference = stats.beta(alpha, beta_)
        points = np.array([0.01, 0.1, 0.3, 0.5, 0.8, 0.99])

        self.assert_arrays_almost_equal(
            np.array([dist.density(x) for x in points]), reference.pdf(points), 1e-9
        )
        self.assert_arrays_almost_equal(
            np.array([dist.cumulative_distribution(x) for x in points]), reference.cdf(points)
        )
        self.assert_density_consistent(dist, points)
        self.assert_quantile_round_trip(dist)

    def test_log_space_density(self):
        dist = Beta(alpha=120.0, beta=90.0)
        reference = stats.beta(120.0, 90.0)

        for x in (0.5, 0.57, 0.65):
            assert math.isclose(dist.density(x), reference.pdf(x), rel_tol=1e-8)

    def test_uniform_special_case(self):
        dist = Beta(1.0, 1.0)

        assert dist.density(0.3) == 1.0
        assert dist.density_ln(0.3) == 0.0
        assert dist.cumulative_distribution(0.3) == 0.3
        assert dist.mode == 0.5
        assert dist.skewness == 0.0

    def test_outside_unit_interval(self):
        dist = self.beta_dist_example

        assert dist.density(-0.1) == 0.0
        assert dist.density(1.1) == 0.0
        assert dist.density_ln(1.1) == -math.inf
        assert dist.cumulative_distribution(-0.1) == 0.0
        assert dist.cumulative_distribution(1.0) == 1.0

    def test_zero_shapes_split_mass(self):
        assert beta.pdf(0.0, 0.0, 0.5) == 0.0
        assert beta.pdf(0.0, 0.0, 0.0) == math.inf
        assert beta.pdf(0.0, 0.0, 1.0) == math.inf
        assert beta.cdf(0.0, 0.0, 0.5) == 0.5

        dist = Beta(0.0, 0.0)
        assert dist.mean == 0.5
        assert dist.variance == 0.25
        assert math.isclose(dist.entropy, math.log(2.0))

    def test_infinite_shapes(self):
        assert beta.cdf(math.inf, math.inf, 0.4) == 0.0
        assert beta.cdf(math.inf, math.inf, 0.5) == 1.0
        assert beta.pdf(math.inf, math.inf, 0.5) == math.inf
        assert beta.pdf(math.inf, 2.0, 1.0) == math.inf
        assert beta.cdf(math.inf, 2.0, 0.9) == 0.0
        assert beta.pdf(2.0, math.inf, 0.0) == math.inf
        assert beta.cdf(2.0, math.inf, 0.1) == 1.0
        assert Beta(math.inf, 2.0).mean == 1.0
        assert Beta(math.inf, 2.0).skewness == -2.0

    def test_single_zero_shape(self):
        assert beta.pdf(0.0, 2.0, 0.0) == math.inf
        assert beta.cdf(0.0, 2.0, 0.1) == 1.0
        assert beta.pdf(2.0, 0.0, 1.0) == math.inf
        assert beta.cdf(2.0, 0.0, 0.9) == 0.0

    def test_inverse_cdf(self):
        dist = self.beta_dist_example

        for p in (0.05, 0.5, 0.95):
            assert abs(dist.inverse_cumulative_distribution(p) - self.reference.ppf(p)) < 1e-9
        assert dist.inverse_cumulative_distribution(0.0) == 0.0
        assert dist.inverse_cumulative_distribution(1.0) == 1.0

        with pytest.raises(OutOfRangeError):
            beta.inv_cdf(2.0, 5.0, -0.5)

    @pytest.mark.parametrize(
        "alpha, beta_, atom",
        [
            (math.inf, math.inf, 0.5),
            (math.inf, 2.0, 1.0),
            (math.inf, 0.0, 1.0),
            (2.0, math.inf, 0.0),
            (0.0, math.inf, 0.0),
            (0.0, 2.0, 0.0),
            (2.0, 0.0, 1.0),
        ],
        ids=[
            "both_inf",
            "alpha_inf",
            "alpha_inf_beta_zero",
            "beta_inf",
            "alpha_zero_beta_inf",
            "alpha_zero",
            "beta_zero",
        ],
    )
    def test_point_mass_shapes(self, alpha, beta_, atom):
        dist = Beta(alpha, beta_)

        assert dist.density(atom) == math.inf
        assert dist.density(0.25) == 0.0
        assert dist.density_ln(0.25) == -math.inf
        assert dist.cumulative_distribution(atom - 1e-3) == 0.0
        assert dist.cumulative_distribution(atom) == 1.0
        for p in (0.0, 0.3, 0.5, 1.0):
            assert dist.inverse_cumulative_distribution(p) == atom
            assert beta.inv_cdf(alpha, beta_, p) == atom

    @pytest.mark.parametrize("p, expected", [(0.0, 0.0), (0.3, 0.0), (0.5, 0.0), (0.7, 1.0)])
    def test_zero_shapes_quantile(self, p, expected):
        assert Beta(0.0, 0.0).inverse_cumulative_distribution(p) == expected

    @pytest.mark.parametrize("p", [0.0, 0.125, 0.5, 0.9, 1.0])
    def test_uniform_shapes_quantile_is_exact(self, p):
        assert beta.inv_cdf(1.0, 1.0, p) == p

    def test_fill_matches_single_draws(self):
        filled = np.empty(200)
        beta.fill_samples(filled, 2.0, 5.0, rng=np.random.default_rng(7))
        source = np.random.default_rng(7)
        single = [beta.sample(2.0, 5.0, rng=source) for _ in range(200)]

        assert filled.tolist() == single

    def test_sampling(self, rng):
        values = beta.samples(50_000, 2.0, 5.0, rng=rng)

        assert values.min() >= 0.0
        assert values.max() <= 1.0
        self.assert_sample_moments(values, 2.0 / 7.0, 10.0 / 392.0)

    def test_sampling_boundary_shapes(self, rng):
        assert beta.sample(math.inf, math.inf, rng=rng) == 0.5
        assert beta.sample(math.inf, 1.0, rng=rng) == 1.0
        assert beta.sample(1.0, math.inf, rng=rng) == 0.0

        values = beta.samples(2_000, 0.0, 0.0, rng=rng)
        assert set(np.unique(values)) <= {0.0, 1.0}
        assert 0.4 < float(np.mean(values)) < 0.6

    def test_stream(self, rng):
        stream = Beta(3.0, 3.0, random_source=rng).iter_samples()
        values = np.array([next(stream) for _ in range(20_000)])

        self.assert_sample_moments(values, 0.5, 9.0 / (36.0 * 7.0))
