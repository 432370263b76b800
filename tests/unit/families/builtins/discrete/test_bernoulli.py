"""
Tests for Bernoulli Distribution
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import numpy as np
import pytest
from scipy.stats import bernoulli as scipy_bernoulli

from pysatl_univariate.distributions.distribution import DiscreteDistribution
from pysatl_univariate.errors import InvalidParameterError
from pysatl_univariate.families.builtins.discrete import bernoulli
from pysatl_univariate.families.builtins.discrete.bernoulli import Bernoulli
from tests.unit.families.builtins.base import BaseDistributionTest


class TestBernoulli(BaseDistributionTest):
    """Test suite for Bernoulli distribution."""

    def setup_method(self):
        self.bernoulli_dist_example = Bernoulli(p=0.3)

    @pytest.mark.parametrize("p", [-0.1, 1.1, math.nan])
    def test_parametrization_constraints(self, p):
        with pytest.raises(InvalidParameterError, match="0 <= p <= 1"):
            Bernoulli(p)
        assert not bernoulli.is_valid_parameter_set(p)

    def test_protocol(self):
        assert DiscreteDistribution in type(self.bernoulli_dist_example).__mro__
        assert self.bernoulli_dist_example.minimum == 0
        assert self.bernoulli_dist_example.maximum == 1

    @pytest.mark.parametrize(
        "getter, expected",
        [
            (lambda d: d.mean, 0.3),
            (lambda d: d.variance, 0.21),
            (lambda d: d.std_dev, math.sqrt(0.21)),
            (lambda d: d.skewness, float(scipy_bernoulli(0.3).stats(moments="s"))),
            (lambda d: d.entropy, scipy_bernoulli(0.3).entropy()),
            (lambda d: d.mode, 0),
            (lambda d: d.median, 0.0),
        ],
    )
    def test_moments(self, getter, expected):
        assert abs(getter(self.bernoulli_dist_example) - expected) < self.CALCULATION_PRECISION

    @pytest.mark.parametrize(
        "p, mode, modes, median",
        [(0.2, 0, [0], 0.0), (0.5, 0, [0, 1], 0.5), (0.8, 1, [1], 1.0)],
    )
    def test_mode_and_median(self, p, mode, modes, median):
        dist = Bernoulli(p)

        assert dist.mode == mode
        assert dist.modes == modes
        assert dist.median == median

    def test_boundary_probabilities(self):
        assert Bernoulli(0.0).entropy == 0.0
        assert Bernoulli(1.0).entropy == 0.0
        assert Bernoulli(0.0).skewness == math.inf
        assert Bernoulli(1.0).skewness == -math.inf
        assert Bernoulli(1.0).probability_ln(0) == -math.inf

    def test_functions(self):
        dist = self.bernoulli_dist_example

        assert dist.probability(0) == pytest.approx(0.7)
        assert dist.probability(1) == 0.3
        assert dist.probability(2) == 0.0
        assert dist.probability(-1) == 0.0
        self.assert_mass_consistent(dist, range(-1, 3))
        assert dist.cumulative_distribution(-0.5) == 0.0
        assert dist.cumulative_distribution(0.5) == pytest.approx(0.7)
        assert dist.cumulative_distribution(1.0) == 1.0
        assert bernoulli.pmf(0.3, 1) == 0.3
        assert bernoulli.cdf(0.3, 0.0) == pytest.approx(0.7)

    def test_sampling(self, rng):
        values = bernoulli.samples(self.SAMPLE_SIZE, 0.3, rng=rng)

        assert values.dtype == np.int64
        assert set(np.unique(values)) <= {0, 1}
        self.assert_sample_moments(values, 0.3, 0.21)

    def test_single_and_stream(self, rng):
        dist = Bernoulli(0.6, random_source=rng)
        single = np.array([dist.sample() for _ in range(20_000)])
        stream = bernoulli.iter_samples(0.6, rng=rng)
        streamed = np.array([next(stream) for _ in range(20_000)])

        for values in (single, streamed):
            self.assert_sample_moments(values, 0.6, 0.24)
        assert np.all(bernoulli.samples(100, 0.0, rng=rng) == 0)
        assert np.all(bernoulli.samples(100, 1.0, rng=rng) == 1)

    def test_log_likelihood(self):
        dist = self.bernoulli_dist_example

        expected = 2 * math.log(0.3) + 3 * math.log(0.7)
        assert abs(dist.log_likelihood([1, 1, 0, 0, 0]) - expected) < self.CALCULATION_PRECISION
