"""
Tests for Rayleigh Distribution
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import numpy as np
import pytest
from scipy.stats import rayleigh as scipy_rayleigh

from pysatl_univariate.errors import InvalidParameterError
from pysatl_univariate.families.builtins.continuous import rayleigh
from pysatl_univariate.families.builtins.continuous.rayleigh import Rayleigh
from tests.unit.families.builtins.base import BaseDistributionTest


class TestRayleigh(BaseDistributionTest):
    """Test suite for Rayleigh distribution."""

    def setup_method(self):
        self.rayleigh_dist_example = Rayleigh(scale=1.7)
        self.reference = scipy_rayleigh(scale=1.7)

    @pytest.mark.parametrize("scale", [0.0, -1.0, math.inf, math.nan])
    def test_parametrization_constraints(self, scale):
        with pytest.raises(InvalidParameterError, match="0 < scale < inf"):
            Rayleigh(scale)

    @pytest.mark.parametrize(
        "getter, expected",
        [
            (lambda d: d.mean, scipy_rayleigh(scale=1.7).mean()),
            (lambda d: d.variance, scipy_rayleigh(scale=1.7).var()),
            (lambda d: d.std_dev, scipy_rayleigh(scale=1.7).std()),
            (lambda d: d.skewness, float(scipy_rayleigh(scale=1.7).stats(moments="s"))),
            (lambda d: d.entropy, scipy_rayleigh(scale=1.7).entropy()),
            (lambda d: d.median, scipy_rayleigh(scale=1.7).median()),
            (lambda d: d.mode, 1.7),
        ],
    )
    def test_moments(self, getter, expected):
        assert abs(getter(self.rayleigh_dist_example) - expected) < self.CALCULATION_PRECISION

    def test_functions_against_scipy(self):
        dist = self.rayleigh_dist_example
        points = np.array([-1.0, 0.0, 0.3, 1.7, 3.0, 9.0])

        self.assert_arrays_almost_equal(
            np.array([dist.density(x) for x in points]), self.reference.pdf(points)
        )
        self.assert_arrays_almost_equal(
            np.array([dist.cumulative_distribution(x) for x in points]),
            self.reference.cdf(points),
        )
        self.assert_density_consistent(dist, points)
        self.assert_quantile_round_trip(dist, tolerance=1e-12)
        assert dist.inverse_cumulative_distribution(0.0) == 0.0
        assert dist.inverse_cumulative_distribution(1.0) == math.inf

    def test_sampling(self, rng):
        values = rayleigh.samples(self.SAMPLE_SIZE, 1.7, rng=rng)

        assert values.min() >= 0.0
        self.assert_sample_moments(values, self.reference.mean(), self.reference.var())

    def test_single_stream_and_fill(self, rng):
        dist = Rayleigh(0.5, random_source=rng)
        single = np.array([dist.sample() for _ in range(40_000)])
        buffer = np.empty(40_000)
        dist.fill_samples(buffer)
        stream = rayleigh.iter_samples(0.5, rng=rng)
        streamed = np.array([next(stream) for _ in range(40_000)])

        for values in (single, buffer, streamed):
            self.assert_sample_moments(values, dist.mean, dist.variance)
