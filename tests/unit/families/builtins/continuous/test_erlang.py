"""
Tests for Erlang Distribution
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import numpy as np
import pytest
from scipy import stats

from pysatl_univariate.errors import InvalidParameterError, NotSupportedError
from pysatl_univariate.families.builtins.continuous import erlang
from pysatl_univariate.families.builtins.continuous.erlang import Erlang
from tests.unit.families.builtins.base import BaseDistributionTest


class TestErlang(BaseDistributionTest):
    """Test suite for Erlang distribution."""

    def setup_method(self):
        self.erlang_dist_example = Erlang(shape=3, rate=2.0)
        self.reference = stats.gamma(a=3, scale=0.5)

    def test_parametrizations(self):
        dist = Erlang.with_shape_scale(3, 0.5)

        assert dist.shape == 3
        assert abs(dist.rate - 2.0) < self.CALCULATION_PRECISION
        assert abs(dist.scale - 0.5) < self.CALCULATION_PRECISION

    @pytest.mark.parametrize("shape", [2.5, -1, math.nan])
    def test_shape_must_be_non_negative_integer(self, shape):
        with pytest.raises(InvalidParameterError, match="shape is a non-negative integer"):
            Erlang(shape=shape, rate=1.0)

    def test_integral_float_shape_accepted(self):
        dist = Erlang(shape=3.0, rate=1.0)

        assert dist.shape == 3
        assert isinstance(dist.shape, int)

    def test_rate_constraint(self):
        with pytest.raises(InvalidParameterError, match="rate >= 0"):
            erlang.pdf(2, -1.0, 1.0)
        assert not erlang.is_valid_parameter_set(2, -0.5)

    @pytest.mark.parametrize(
        "getter, expected",
        [
            (lambda d: d.mean, 1.5),
            (lambda d: d.variance, 0.75),
            (lambda d: d.std_dev, math.sqrt(0.75)),
            (lambda d: d.skewness, 2.0 / math.sqrt(3.0)),
            (lambda d: d.mode, 1.0),
            (lambda d: d.entropy, stats.gamma(a=3, scale=0.5).entropy()),
        ],
    )
    def test_moments(self, getter, expected):
        assert abs(getter(self.erlang_dist_example) - expected) < self.CALCULATION_PRECISION

    def test_undefined_statistics(self):
        with pytest.raises(NotSupportedError):
            _ = Erlang(shape=0, rate=1.0).mode
        with pytest.raises(NotSupportedError):
            _ = self.erlang_dist_example.median

    def test_zero_shape_is_point_mass_at_zero(self):
        dist = Erlang(shape=0, rate=2.0)

        assert dist.density(0.0) == math.inf
        assert dist.density(0.5) == 0.0
        assert dist.cumulative_distribution(0.0) == 1.0
        assert dist.inverse_cumulative_distribution(0.6) == 0.0
        assert erlang.inv_cdf(0, 2.0, 0.6) == 0.0
        assert dist.mean == 0.0
        assert dist.variance == 0.0
        assert dist.entropy == 0.0
        assert dist.skewness == 0.0
        assert dist.sample() == 0.0

    def test_functions_against_scipy(self):
        points = [0.0, 0.2, 1.0, 1.5, 4.0]
        dist = self.erlang_dist_example

        for x in points:
            assert abs(dist.density(x) - self.reference.pdf(x)) < 1e-12
            assert abs(dist.cumulative_distribution(x) - self.reference.cdf(x)) < 1e-12
            assert abs(erlang.cdf(3, 2.0, x) - self.reference.cdf(x)) < 1e-12
        self.assert_density_consistent(dist, points)
        self.assert_quantile_round_trip(dist)
        assert math.isclose(erlang.inv_cdf(3, 2.0, 0.3), self.reference.ppf(0.3), rel_tol=1e-9)

    def test_sampling(self, rng):
        values = erlang.samples(50_000, 3, 2.0, rng=rng)
        self.assert_sample_moments(values, 1.5, 0.75)

        single = erlang.sample(3, 2.0, rng=rng)
        assert single > 0.0

        stream = erlang.iter_samples(3, 2.0, rng=rng)
        assert all(next(stream) > 0.0 for _ in range(100))

    def test_fill_samples(self, rng):
        values = np.zeros(10)
        Erlang(2, 1.0, random_source=rng).fill_samples(values)

        assert np.all(values > 0.0)
