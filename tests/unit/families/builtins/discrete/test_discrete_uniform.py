"""
Tests for Discrete Uniform Distribution
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import numpy as np
import pytest
from scipy.stats import randint

from pysatl_univariate.errors import InvalidParameterError
from pysatl_univariate.families.builtins.discrete import discrete_uniform
from pysatl_univariate.families.builtins.discrete.discrete_uniform import DiscreteUniform
from tests.unit.families.builtins.base import BaseDistributionTest


class TestDiscreteUniform(BaseDistributionTest):
    """Test suite for DiscreteUniform distribution."""

    def setup_method(self):
        self.discrete_uniform_dist_example = DiscreteUniform(lower=-2, upper=5)
        self.reference = randint(-2, 6)

    def test_parametrization_constraints(self):
        with pytest.raises(InvalidParameterError, match="lower <= upper"):
            DiscreteUniform(3, 2)
        with pytest.raises(InvalidParameterError, match="lower and upper are integers"):
            DiscreteUniform(0.5, 3)
        assert not discrete_uniform.is_valid_parameter_set(-2, math.inf)
        assert discrete_uniform.is_valid_parameter_set(4, 4)

    @pytest.mark.parametrize(
        "getter, expected",
        [
            (lambda d: d.mean, 1.5),
            (lambda d: d.variance, randint(-2, 6).var()),
            (lambda d: d.entropy, math.log(8.0)),
            (lambda d: d.skewness, 0.0),
            (lambda d: d.mode, 1),
            (lambda d: d.median, 1.5),
            (lambda d: d.minimum, -2),
            (lambda d: d.maximum, 5),
        ],
    )
    def test_moments(self, getter, expected):
        actual = getter(self.discrete_uniform_dist_example)
        assert abs(actual - expected) < self.CALCULATION_PRECISION

    def test_functions_against_scipy(self):
        dist = self.discrete_uniform_dist_example
        ks = np.arange(-4, 8)

        self.assert_arrays_almost_equal(
            np.array([dist.probability(int(k)) for k in ks]), self.reference.pmf(ks)
        )
        self.assert_arrays_almost_equal(
            np.array([dist.cumulative_distribution(float(k)) for k in ks]),
            self.reference.cdf(ks),
        )
        self.assert_mass_consistent(dist, range(-4, 8))
        assert dist.cumulative_distribution(0.5) == 3.0 / 8.0
        assert dist.probability_ln(6) == -math.inf

    def test_single_point(self):
        dist = DiscreteUniform(4, 4)

        assert dist.probability(4) == 1.0
        assert dist.variance == 0.0
        assert dist.entropy == 0.0
        assert np.all(discrete_uniform.samples(50, 4, 4) == 4)

    def test_sampling(self, rng):
        values = discrete_uniform.samples(self.SAMPLE_SIZE, -2, 5, rng=rng)

        assert values.min() == -2
        assert values.max() == 5
        self.assert_sample_moments(values, 1.5, self.reference.var())

    def test_single_and_stream(self, rng):
        dist = DiscreteUniform(1, 6, random_source=rng)
        single = np.array([dist.sample() for _ in range(20_000)])
        stream = discrete_uniform.iter_samples(1, 6, rng=rng)
        streamed = np.array([next(stream) for _ in range(20_000)])

        for values in (single, streamed):
            self.assert_sample_moments(values, 3.5, 35.0 / 12.0)
