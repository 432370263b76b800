"""
Tests for Laplace Distribution
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import numpy as np
import pytest
from scipy.stats import laplace as scipy_laplace

from pysatl_univariate.errors import InvalidParameterError
from pysatl_univariate.families.builtins.continuous import laplace
from pysatl_univariate.families.builtins.continuous.laplace import Laplace
from tests.unit.families.builtins.base import BaseDistributionTest


class TestLaplace(BaseDistributionTest):
    """Test suite for Laplace distribution."""

    def setup_method(self):
        self.laplace_dist_example = Laplace(location=-1.0, scale=0.5)
        self.reference = scipy_laplace(loc=-1.0, scale=0.5)

    def test_parametrization_constraints(self):
        with pytest.raises(InvalidParameterError, match="scale > 0"):
            Laplace(location=0.0, scale=0.0)
        with pytest.raises(InvalidParameterError, match="location is not NaN"):
            Laplace(location=math.nan, scale=1.0)

    @pytest.mark.parametrize(
        "getter, expected",
        [
            (lambda d: d.mean, -1.0),
            (lambda d: d.median, -1.0),
            (lambda d: d.mode, -1.0),
            (lambda d: d.variance, 0.5),
            (lambda d: d.std_dev, math.sqrt(0.5)),
            (lambda d: d.skewness, 0.0),
            (lambda d: d.entropy, scipy_laplace(loc=-1.0, scale=0.5).entropy()),
        ],
    )
    def test_moments(self, getter, expected):
        assert abs(getter(self.laplace_dist_example) - expected) < self.CALCULATION_PRECISION

    def test_functions_against_scipy(self):
        dist = self.laplace_dist_example
        points = np.array([-6.0, -1.5, -1.0, -0.99, 0.0, 3.0])

        self.assert_arrays_almost_equal(
            np.array([dist.density(x) for x in points]), self.reference.pdf(points)
        )
        self.assert_arrays_almost_equal(
            np.array([dist.cumulative_distribution(x) for x in points]),
            self.reference.cdf(points),
        )
        self.assert_density_consistent(dist, points)
        for p in (0.01, 0.3, 0.5, 0.7, 0.99):
            assert abs(dist.inverse_cumulative_distribution(p) - self.reference.ppf(p)) < 1e-12
        assert dist.inverse_cumulative_distribution(0.0) == -math.inf
        assert dist.inverse_cumulative_distribution(1.0) == math.inf

    def test_sampling(self, rng):
        values = laplace.samples(self.SAMPLE_SIZE, -1.0, 0.5, rng=rng)

        self.assert_sample_moments(values, -1.0, 0.5)

    def test_stream(self, rng):
        stream = Laplace(2.0, 1.0, random_source=rng).iter_samples()
        values = np.array([next(stream) for _ in range(50_000)])

        self.assert_sample_moments(values, 2.0, 2.0)
