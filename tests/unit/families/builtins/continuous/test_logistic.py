"""
Tests for Logistic Distribution
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import numpy as np
import pytest
from scipy.stats import logistic as scipy_logistic

from pysatl_univariate.errors import InvalidParameterError
from pysatl_univariate.families.builtins.continuous import logistic
from pysatl_univariate.families.builtins.continuous.logistic import (
    Logistic,
    LogisticMeanPrecision,
    LogisticMeanStdDev,
    LogisticMeanVariance,
)
from tests.unit.families.builtins.base import BaseDistributionTest


class TestLogistic(BaseDistributionTest):
    """Test suite for Logistic distribution."""

    def setup_method(self):
        self.logistic_dist_example = Logistic(mean=3.0, scale=1.5)
        self.reference = scipy_logistic(loc=3.0, scale=1.5)

    @pytest.mark.parametrize(
        "parametrization",
        [
            LogisticMeanStdDev(mean=3.0, std_dev=1.5 * math.pi / math.sqrt(3.0)),
            LogisticMeanVariance(mean=3.0, variance=(1.5 * math.pi) ** 2 / 3.0),
            LogisticMeanPrecision(mean=3.0, precision=3.0 / (1.5 * math.pi) ** 2),
        ],
    )
    def test_parametrization_conversions(self, parametrization):
        base = parametrization.transform_to_base_parametrization()

        assert base.name == "meanScale"
        assert base.mean == 3.0
        assert abs(base.scale - 1.5) < self.CALCULATION_PRECISION

    def test_alternative_constructors(self):
        variance = self.logistic_dist_example.variance

        assert abs(Logistic.with_mean_variance(3.0, variance).scale - 1.5) < 1e-12
        assert abs(Logistic.with_mean_std_dev(3.0, math.sqrt(variance)).scale - 1.5) < 1e-12
        assert abs(Logistic.with_mean_precision(3.0, 1.0 / variance).scale - 1.5) < 1e-12

    def test_parametrization_constraints(self):
        with pytest.raises(InvalidParameterError, match="scale > 0"):
            Logistic(mean=0.0, scale=0.0)
        with pytest.raises(InvalidParameterError, match="std_dev > 0"):
            Logistic.with_mean_std_dev(0.0, -1.0)
        with pytest.raises(InvalidParameterError, match="variance > 0"):
            Logistic.with_mean_variance(0.0, 0.0)
        with pytest.raises(InvalidParameterError, match="0 < precision < inf"):
            Logistic.with_mean_precision(0.0, math.inf)
        with pytest.raises(InvalidParameterError, match="mean is not NaN"):
            Logistic(mean=math.nan, scale=1.0)

    @pytest.mark.parametrize(
        "getter, expected",
        [
            (lambda d: d.mean, 3.0),
            (lambda d: d.median, 3.0),
            (lambda d: d.mode, 3.0),
            (lambda d: d.variance, (1.5 * math.pi) ** 2 / 3.0),
            (lambda d: d.skewness, 0.0),
            (lambda d: d.entropy, scipy_logistic(loc=3.0, scale=1.5).entropy()),
        ],
    )
    def test_moments(self, getter, expected):
        assert abs(getter(self.logistic_dist_example) - expected) < self.CALCULATION_PRECISION

    def test_functions_against_scipy(self):
        dist = self.logistic_dist_example
        points = np.array([-800.0, -10.0, 0.0, 3.0, 4.5, 20.0, 800.0])

        self.assert_arrays_almost_equal(
            np.array([dist.density(x) for x in points]), self.reference.pdf(points)
        )
        self.assert_arrays_almost_equal(
            np.array([dist.cumulative_distribution(x) for x in points]),
            self.reference.cdf(points),
        )
        self.assert_density_consistent(dist, points[1:-1])
        for x in (-800.0, 800.0):
            assert math.isfinite(dist.density_ln(x))
        self.assert_quantile_round_trip(dist)
        assert abs(dist.inverse_cumulative_distribution(0.2) - self.reference.ppf(0.2)) < 1e-12

    def test_sampling(self, rng):
        values = logistic.samples(self.SAMPLE_SIZE, 3.0, 1.5, rng=rng)

        self.assert_sample_moments(values, 3.0, (1.5 * math.pi) ** 2 / 3.0)

    def test_single_draws(self, rng):
        values = np.array([logistic.sample(0.0, 1.0, rng=rng) for _ in range(50_000)])

        self.assert_sample_moments(values, 0.0, math.pi**2 / 3.0)
