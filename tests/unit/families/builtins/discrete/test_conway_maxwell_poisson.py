"""
Tests for Conway-Maxwell-Poisson Distribution
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import numpy as np
import pytest
from scipy.stats import poisson

from pysatl_univariate.config import configure_numerics
from pysatl_univariate.errors import InvalidParameterError, NotSupportedError, NumericalWarning
from pysatl_univariate.families.builtins.discrete import conway_maxwell_poisson
from pysatl_univariate.families.builtins.discrete.conway_maxwell_poisson import (
    ConwayMaxwellPoisson,
)
from tests.unit.families.builtins.base import BaseDistributionTest


class TestConwayMaxwellPoisson(BaseDistributionTest):
    """Test suite for ConwayMaxwellPoisson distribution."""

    def setup_method(self):
        self.cmp_dist_example = ConwayMaxwellPoisson(lambda_=3.0, nu=1.5)

    @pytest.mark.parametrize(
        "lambda_, nu, message",
        [
            (0.0, 1.0, "0 < lambda < inf"),
            (math.inf, 1.0, "0 < lambda < inf"),
            (1.0, -0.5, "0 <= nu < inf"),
            (1.0, math.inf, "0 <= nu < inf"),
        ],
    )
    def test_parametrization_constraints(self, lambda_, nu, message):
        with pytest.raises(InvalidParameterError, match=message):
            ConwayMaxwellPoisson(lambda_, nu)

    def test_poisson_case(self):
        dist = ConwayMaxwellPoisson(lambda_=4.0, nu=1.0)
        reference = poisson(4.0)
        ks = np.arange(-1, 20)

        assert abs(dist.normalization_ln - 4.0) < 1e-10
        self.assert_arrays_almost_equal(
            np.array([dist.probability(int(k)) for k in ks]), reference.pmf(ks)
        )
        self.assert_arrays_almost_equal(
            np.array([dist.cumulative_distribution(float(k)) for k in ks]), reference.cdf(ks)
        )
        assert abs(dist.mean - 4.0) < 1e-10
        assert abs(dist.variance - 4.0) < 1e-9

    def test_geometric_case(self):
        dist = ConwayMaxwellPoisson(lambda_=0.4, nu=0.0)

        for k in range(6):
            assert abs(dist.probability(k) - 0.6 * 0.4**k) < 1e-12
        assert abs(dist.mean - 0.4 / 0.6) < 1e-10
        assert abs(dist.variance - 0.4 / 0.36) < 1e-9

    def test_large_decay_is_bernoulli(self):
        dist = ConwayMaxwellPoisson(lambda_=0.5, nu=60.0)

        assert abs(dist.probability(0) - 2.0 / 3.0) < 1e-12
        assert abs(dist.probability(1) - 1.0 / 3.0) < 1e-12
        assert dist.probability(3) < 1e-15

    def test_moments_against_direct_sum(self):
        dist = self.cmp_dist_example
        ks = np.arange(0, 80)
        masses = np.array([dist.probability(int(k)) for k in ks])
        mean = float(np.sum(ks * masses))

        assert abs(float(np.sum(masses)) - 1.0) < 1e-10
        assert abs(dist.mean - mean) < 1e-10
        assert abs(dist.variance - float(np.sum((ks - mean) ** 2 * masses))) < 1e-9
        self.assert_mass_consistent(dist, range(-1, 15))

    @pytest.mark.parametrize("statistic", ["entropy", "skewness", "mode", "median"])
    def test_missing_statistics(self, statistic):
        with pytest.raises(NotSupportedError):
            getattr(self.cmp_dist_example, statistic)

    def test_cdf(self):
        dist = self.cmp_dist_example

        assert dist.cumulative_distribution(-0.5) == 0.0
        assert dist.cumulative_distribution(math.inf) == 1.0
        assert abs(dist.cumulative_distribution(1e6) - 1.0) < 1e-10
        expected = sum(dist.probability(k) for k in range(3))
        assert abs(dist.cumulative_distribution(2.5) - expected) < 1e-15
        self.assert_cdf_monotone(dist, np.arange(-1.0, 20.0, 0.5))

    def test_series_budget_warning(self):
        configure_numerics(series_max_terms=5)

        with pytest.warns(NumericalWarning, match="stopped after 5 terms"):
            conway_maxwell_poisson.normalization_ln(10.0, 1.0)

    def test_function_wrappers(self):
        assert abs(conway_maxwell_poisson.pmf(2.0, 1.0, 1) - poisson.pmf(1, 2.0)) < 1e-12
        assert abs(conway_maxwell_poisson.pmf_ln(2.0, 1.0, 1) - poisson.logpmf(1, 2.0)) < 1e-12
        assert abs(conway_maxwell_poisson.cdf(2.0, 1.0, 3.0) - poisson.cdf(3, 2.0)) < 1e-12
        assert conway_maxwell_poisson.pmf(2.0, 1.0, -1) == 0.0
        with pytest.raises(InvalidParameterError):
            conway_maxwell_poisson.pmf(-2.0, 1.0, 1)

    def test_sampling(self, rng):
        dist = self.cmp_dist_example
        values = conway_maxwell_poisson.samples(40_000, 3.0, 1.5, rng=rng)

        assert values.min() >= 0
        self.assert_sample_moments(values, dist.mean, dist.variance)

    def test_single_and_stream(self, rng):
        dist = ConwayMaxwellPoisson(2.0, 1.0, random_source=rng)
        single = np.array([dist.sample() for _ in range(20_000)])
        stream = conway_maxwell_poisson.iter_samples(2.0, 1.0, rng=rng)
        streamed = np.array([next(stream) for _ in range(20_000)])

        for values in (single, streamed):
            self.assert_sample_moments(values, 2.0, 2.0)
