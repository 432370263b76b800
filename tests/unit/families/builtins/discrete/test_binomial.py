"""
Tests for Binomial Distribution
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import numpy as np
import pytest
from scipy.stats import binom

from pysatl_univariate.errors import InvalidParameterError
from pysatl_univariate.families.builtins.discrete import binomial
from pysatl_univariate.families.builtins.discrete.binomial import Binomial
from tests.unit.families.builtins.base import BaseDistributionTest


class TestBinomial(BaseDistributionTest):
    """Test suite for Binomial distribution."""

    def setup_method(self):
        self.binomial_dist_example = Binomial(p=0.3, n=10)
        self.reference = binom(n=10, p=0.3)

    def test_parametrization_constraints(self):
        with pytest.raises(InvalidParameterError, match="0 <= p <= 1"):
            Binomial(p=1.5, n=3)
        with pytest.raises(InvalidParameterError, match="n >= 0"):
            Binomial(p=0.5, n=-1)
        with pytest.raises(InvalidParameterError, match="n is an integer"):
            Binomial(p=0.5, n=2.5)
        assert not binomial.is_valid_parameter_set(0.5, 2.5)
        assert binomial.is_valid_parameter_set(0.5, 4.0)

    @pytest.mark.parametrize(
        "getter, expected",
        [
            (lambda d: d.mean, 3.0),
            (lambda d: d.variance, 2.1),
            (lambda d: d.skewness, float(binom(n=10, p=0.3).stats(moments="s"))),
            (lambda d: d.entropy, binom(n=10, p=0.3).entropy()),
            (lambda d: d.mode, 3),
            (lambda d: d.median, 3.0),
            (lambda d: d.maximum, 10),
        ],
    )
    def test_moments(self, getter, expected):
        assert abs(getter(self.binomial_dist_example) - expected) < self.CALCULATION_PRECISION

    def test_modes(self):
        assert Binomial(0.5, 3).modes == [2, 1]
        assert Binomial(0.3, 10).modes == [3]
        assert Binomial(1.0, 4).mode == 4
        assert Binomial(0.0, 4).modes == [0]

    def test_functions_against_scipy(self):
        dist = self.binomial_dist_example
        ks = np.arange(-2, 13)

        self.assert_arrays_almost_equal(
            np.array([dist.probability(int(k)) for k in ks]), self.reference.pmf(ks)
        )
        self.assert_arrays_almost_equal(
            np.array([dist.cumulative_distribution(float(k)) for k in ks]),
            self.reference.cdf(ks),
        )
        self.assert_mass_consistent(dist, range(0, 11))
        assert abs(dist.cumulative_distribution(3.7) - self.reference.cdf(3)) < 1e-12

    @pytest.mark.parametrize("p", [0.0, 1.0])
    def test_degenerate_probabilities(self, p):
        dist = Binomial(p, 5)
        certain = 5 if p == 1.0 else 0

        assert dist.probability(certain) == 1.0
        assert dist.probability_ln(certain) == 0.0
        assert dist.probability_ln(2) == -math.inf
        assert dist.entropy == 0.0
        assert dist.cumulative_distribution(2.0) == (0.0 if p == 1.0 else 1.0)

    def test_zero_trials(self):
        dist = Binomial(0.4, 0)

        assert dist.probability(0) == 1.0
        assert dist.cumulative_distribution(0.0) == 1.0
        assert np.all(binomial.samples(20, 0.4, 0) == 0)

    def test_sampling(self, rng):
        values = binomial.samples(50_000, 0.3, 10, rng=rng)

        assert values.min() >= 0
        assert values.max() <= 10
        self.assert_sample_moments(values, 3.0, 2.1)

    def test_single_and_stream(self, rng):
        dist = Binomial(0.7, 6, random_source=rng)
        single = np.array([dist.sample() for _ in range(20_000)])
        stream = binomial.iter_samples(0.7, 6, rng=rng)
        streamed = np.array([next(stream) for _ in range(20_000)])

        for values in (single, streamed):
            self.assert_sample_moments(values, 4.2, 1.26)
