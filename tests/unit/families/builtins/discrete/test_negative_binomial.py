"""
Tests for Negative Binomial Distribution
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import numpy as np
import pytest
from scipy.stats import nbinom

from pysatl_univariate.errors import InvalidParameterError, NotSupportedError
from pysatl_univariate.families.builtins.discrete import negative_binomial
from pysatl_univariate.families.builtins.discrete.negative_binomial import NegativeBinomial
from tests.unit.families.builtins.base import BaseDistributionTest


class TestNegativeBinomial(BaseDistributionTest):
    """Test suite for NegativeBinomial distribution."""

    def setup_method(self):
        self.negative_binomial_dist_example = NegativeBinomial(r=3.5, p=0.4)
        self.reference = nbinom(3.5, 0.4)

    @pytest.mark.parametrize(
        "r, p, message",
        [
            (-1.0, 0.5, "0 <= r < inf"),
            (math.inf, 0.5, "0 <= r < inf"),
            (2.0, 0.0, "0 < p <= 1"),
            (2.0, 1.2, "0 < p <= 1"),
        ],
    )
    def test_parametrization_constraints(self, r, p, message):
        with pytest.raises(InvalidParameterError, match=message):
            NegativeBinomial(r, p)
        assert not negative_binomial.is_valid_parameter_set(r, p)

    @pytest.mark.parametrize(
        "getter, expected",
        [
            (lambda d: d.mean, nbinom(3.5, 0.4).mean()),
            (lambda d: d.variance, nbinom(3.5, 0.4).var()),
            (lambda d: d.skewness, float(nbinom(3.5, 0.4).stats(moments="s"))),
            (lambda d: d.mode, 3),
            (lambda d: d.minimum, 0),
            (lambda d: d.maximum, math.inf),
        ],
    )
    def test_moments(self, getter, expected):
        actual = getter(self.negative_binomial_dist_example)
        assert abs(actual - expected) < self.CALCULATION_PRECISION

    def test_mode(self):
        dist = self.negative_binomial_dist_example
        masses = [dist.probability(k) for k in range(30)]

        assert dist.mode == int(np.argmax(masses))
        assert NegativeBinomial(0.5, 0.3).mode == 0

    @pytest.mark.parametrize("statistic", ["entropy", "median"])
    def test_missing_statistics(self, statistic):
        with pytest.raises(NotSupportedError):
            getattr(self.negative_binomial_dist_example, statistic)

    def test_functions_against_scipy(self):
        dist = self.negative_binomial_dist_example
        ks = np.arange(-1, 40)

        self.assert_arrays_almost_equal(
            np.array([dist.probability(int(k)) for k in ks]), self.reference.pmf(ks)
        )
        self.assert_arrays_almost_equal(
            np.array([dist.cumulative_distribution(float(k)) for k in ks]),
            self.reference.cdf(ks),
        )
        self.assert_mass_consistent(dist, range(-1, 40))
        assert dist.cumulative_distribution(math.inf) == 1.0
        assert dist.cumulative_distribution(4.7) == dist.cumulative_distribution(4.0)
        assert abs(negative_binomial.pmf_ln(3.5, 0.4, 2) - self.reference.logpmf(2)) < 1e-12

    @pytest.mark.parametrize("r, p", [(0.0, 0.5), (2.0, 1.0)])
    def test_point_mass_at_zero(self, r, p):
        dist = NegativeBinomial(r, p)

        assert dist.probability(0) == 1.0
        assert dist.probability(1) == 0.0
        assert dist.probability_ln(1) == -math.inf
        assert dist.cumulative_distribution(0.0) == 1.0
        assert dist.mean == 0.0
        assert dist.variance == 0.0
        assert dist.skewness == math.inf
        assert np.all(negative_binomial.samples(100, r, p) == 0)

    def test_sampling(self, rng):
        values = negative_binomial.samples(40_000, 3.5, 0.4, rng=rng)

        assert values.min() >= 0
        self.assert_sample_moments(values, self.reference.mean(), self.reference.var())

    def test_single_and_stream(self, rng):
        dist = NegativeBinomial(2.0, 0.5, random_source=rng)
        single = np.array([dist.sample() for _ in range(20_000)])
        stream = negative_binomial.iter_samples(2.0, 0.5, rng=rng)
        streamed = np.array([next(stream) for _ in range(20_000)])

        for values in (single, streamed):
            self.assert_sample_moments(values, 2.0, 4.0)
