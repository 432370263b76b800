"""
Tests for Poisson Distribution
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import numpy as np
import pytest
from scipy.stats import poisson as scipy_poisson

from pysatl_univariate.config import configure_numerics
from pysatl_univariate.errors import InvalidParameterError
from pysatl_univariate.families.builtins.discrete import poisson
from pysatl_univariate.families.builtins.discrete.poisson import Poisson
from tests.unit.families.builtins.base import BaseDistributionTest


class TestPoisson(BaseDistributionTest):
    """Test suite for Poisson distribution."""

    def setup_method(self):
        self.poisson_dist_example = Poisson(lambda_=5.0)
        self.reference = scipy_poisson(5.0)

    @pytest.mark.parametrize("lambda_", [0.0, -1.0, math.inf, math.nan])
    def test_parametrization_constraints(self, lambda_):
        with pytest.raises(InvalidParameterError, match="0 < lambda < inf"):
            Poisson(lambda_)
        assert not poisson.is_valid_parameter_set(lambda_)

    @pytest.mark.parametrize(
        "getter, expected",
        [
            (lambda d: d.mean, 5.0),
            (lambda d: d.variance, 5.0),
            (lambda d: d.std_dev, math.sqrt(5.0)),
            (lambda d: d.skewness, 1.0 / math.sqrt(5.0)),
            (lambda d: d.entropy, scipy_poisson(5.0).entropy()),
            (lambda d: d.mode, 5),
            (lambda d: d.median, scipy_poisson(5.0).median()),
            (lambda d: d.minimum, 0),
            (lambda d: d.maximum, math.inf),
        ],
    )
    def test_moments(self, getter, expected):
        actual = getter(self.poisson_dist_example)
        assert abs(actual - expected) < self.CALCULATION_PRECISION

    @pytest.mark.parametrize("lambda_", [0.3, 3.7, 12.0, 49.0])
    def test_median_against_scipy(self, lambda_):
        assert Poisson(lambda_).median == scipy_poisson(lambda_).median()

    @pytest.mark.parametrize("lambda_", [60.0, 250.0])
    def test_entropy_for_large_rates(self, lambda_):
        assert abs(Poisson(lambda_).entropy - scipy_poisson(lambda_).entropy()) < 1e-6

    def test_functions_against_scipy(self):
        dist = self.poisson_dist_example
        ks = np.arange(-1, 30)

        self.assert_arrays_almost_equal(
            np.array([dist.probability(int(k)) for k in ks]), self.reference.pmf(ks)
        )
        self.assert_arrays_almost_equal(
            np.array([dist.cumulative_distribution(float(k)) for k in ks]),
            self.reference.cdf(ks),
        )
        self.assert_mass_consistent(dist, range(-1, 30))
        self.assert_cdf_monotone(dist, np.arange(-1.0, 20.0, 0.5))
        assert dist.cumulative_distribution(math.inf) == 1.0
        assert abs(poisson.pmf(5.0, 3) - self.reference.pmf(3)) < 1e-12
        assert abs(poisson.pmf_ln(5.0, 3) - self.reference.logpmf(3)) < 1e-12
        assert abs(poisson.cdf(5.0, 3.5) - self.reference.cdf(3)) < 1e-12

    def test_large_rate_log_mass(self):
        dist = Poisson(1e6)

        assert abs(dist.probability_ln(10**6) - scipy_poisson(1e6).logpmf(10**6)) < 1e-6

    def test_sampling(self, rng):
        values = poisson.samples(self.SAMPLE_SIZE, 5.0, rng=rng)

        assert values.min() >= 0
        assert abs(values.mean() - 5.0) < 0.1
        self.assert_sample_moments(values, 5.0, 5.0)

    @pytest.mark.parametrize("lambda_", [29.9, 30.1, 250.0])
    def test_sampling_around_method_switch(self, lambda_, rng):
        values = poisson.samples(20_000, lambda_, rng=rng)

        assert values.min() >= 0
        self.assert_sample_moments(values, lambda_, lambda_)

    def test_sampling_frequencies_above_switch(self, rng):
        values = poisson.samples(self.SAMPLE_SIZE, 40.0, rng=rng)
        ks = np.arange(25, 56)
        frequencies = np.array([np.mean(values == k) for k in ks])

        np.testing.assert_allclose(frequencies, scipy_poisson(40.0).pmf(ks), atol=0.005)

    def test_method_switch_follows_config(self, rng):
        configure_numerics(poisson_atkinson_threshold=1e9)
        values = poisson.samples(5_000, 80.0, rng=rng)

        self.assert_sample_moments(values, 80.0, 80.0)

    def test_fill_and_stream(self, rng):
        dist = Poisson(3.0, random_source=rng)
        buffer = np.zeros(20_000, dtype=np.int64)
        dist.fill_samples(buffer)
        stream = poisson.iter_samples(3.0, rng=rng)
        streamed = np.array([next(stream) for _ in range(20_000)])
        single = np.array([dist.sample() for _ in range(20_000)])

        for values in (buffer, streamed, single):
            self.assert_sample_moments(values, 3.0, 3.0)
