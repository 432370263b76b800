"""
Tests for Hypergeometric Distribution
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import numpy as np
import pytest
from scipy.stats import hypergeom

from pysatl_univariate.errors import InvalidParameterError, NotSupportedError
from pysatl_univariate.families.builtins.discrete import hypergeometric
from pysatl_univariate.families.builtins.discrete.hypergeometric import Hypergeometric
from tests.unit.families.builtins.base import BaseDistributionTest


class TestHypergeometric(BaseDistributionTest):
    """Test suite for Hypergeometric distribution."""

    def setup_method(self):
        self.hypergeometric_dist_example = Hypergeometric(population=20, success=7, draws=12)
        self.reference = hypergeom(20, 7, 12)

    @pytest.mark.parametrize(
        "population, success, draws, message",
        [
            (-1, 0, 0, "population >= 0"),
            (10, 11, 2, "0 <= success <= population"),
            (10, -1, 2, "0 <= success <= population"),
            (10, 3, 11, "0 <= draws <= population"),
            (5.5, 2, 2, "population, success and draws are integers"),
            (10, 2.5, 2, "population, success and draws are integers"),
            (10, 3, 2.5, "population, success and draws are integers"),
        ],
    )
    def test_parametrization_constraints(self, population, success, draws, message):
        with pytest.raises(InvalidParameterError, match=message):
            Hypergeometric(population, success, draws)
        assert not hypergeometric.is_valid_parameter_set(population, success, draws)

    @pytest.mark.parametrize(
        "getter, expected",
        [
            (lambda d: d.mean, hypergeom(20, 7, 12).mean()),
            (lambda d: d.variance, hypergeom(20, 7, 12).var()),
            (lambda d: d.skewness, float(hypergeom(20, 7, 12).stats(moments="s"))),
            (lambda d: d.mode, 4),
            (lambda d: d.minimum, 0),
            (lambda d: d.maximum, 7),
        ],
    )
    def test_moments(self, getter, expected):
        actual = getter(self.hypergeometric_dist_example)
        assert abs(actual - expected) < self.CALCULATION_PRECISION

    def test_mode_is_most_probable(self):
        dist = self.hypergeometric_dist_example
        masses = [dist.probability(k) for k in range(8)]
        assert dist.mode == int(np.argmax(masses))

    @pytest.mark.parametrize("statistic", ["entropy", "median"])
    def test_missing_statistics(self, statistic):
        with pytest.raises(NotSupportedError):
            getattr(self.hypergeometric_dist_example, statistic)

    def test_support_lower_bound(self):
        dist = Hypergeometric(10, 8, 5)

        assert dist.minimum == 3
        assert dist.maximum == 5
        assert dist.probability(2) == 0.0
        assert dist.probability_ln(2) == -math.inf
        assert dist.cumulative_distribution(2.5) == 0.0

    def test_functions_against_scipy(self):
        dist = self.hypergeometric_dist_example
        ks = np.arange(-1, 10)

        self.assert_arrays_almost_equal(
            np.array([dist.probability(int(k)) for k in ks]), self.reference.pmf(ks)
        )
        self.assert_arrays_almost_equal(
            np.array([dist.cumulative_distribution(float(k)) for k in ks]),
            self.reference.cdf(ks),
        )
        self.assert_mass_consistent(dist, range(-1, 10))
        self.assert_cdf_monotone(dist, np.arange(-1.0, 9.0, 0.25))
        assert abs(hypergeometric.pmf(20, 7, 12, 3) - self.reference.pmf(3)) < 1e-12
        assert abs(hypergeometric.cdf(20, 7, 12, 3.5) - self.reference.cdf(3)) < 1e-12

    def test_no_draws(self):
        dist = Hypergeometric(10, 4, 0)

        assert dist.probability(0) == 1.0
        assert dist.mean == 0.0
        assert dist.variance == 0.0
        assert dist.cumulative_distribution(0.0) == 1.0
        assert np.all(hypergeometric.samples(100, 10, 4, 0) == 0)
        with pytest.raises(NotSupportedError):
            _ = dist.skewness

    def test_empty_population(self):
        dist = Hypergeometric(0, 0, 0)

        assert dist.mean == 0.0
        assert dist.variance == 0.0
        assert dist.sample() == 0

    def test_sampling(self, rng):
        values = hypergeometric.samples(20_000, 20, 7, 12, rng=rng)

        assert values.min() >= 0
        assert values.max() <= 7
        self.assert_sample_moments(values, self.reference.mean(), self.reference.var())

    def test_fill_matches_single_draws(self):
        filled = np.empty(300, dtype=np.int64)
        hypergeometric.fill_samples(filled, 20, 7, 12, rng=np.random.default_rng(11))
        source = np.random.default_rng(11)
        single = [hypergeometric.sample(20, 7, 12, rng=source) for _ in range(300)]

        assert filled.tolist() == single

    def test_single_and_stream(self, rng):
        dist = Hypergeometric(30, 10, 6, random_source=rng)
        single = np.array([dist.sample() for _ in range(10_000)])
        stream = hypergeometric.iter_samples(30, 10, 6, rng=rng)
        streamed = np.array([next(stream) for _ in range(10_000)])

        for values in (single, streamed):
            self.assert_sample_moments(values, dist.mean, dist.variance)
