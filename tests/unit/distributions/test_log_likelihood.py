from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import numpy as np
import pytest
from scipy.stats import norm, poisson

from pysatl_univariate.families.builtins.continuous.normal import Normal
from pysatl_univariate.families.builtins.continuous.uniform import ContinuousUniform
from pysatl_univariate.families.builtins.discrete.poisson import Poisson
from tests.unit.distributions.test_basic import DistributionTestBase


class TestLogLikelihood(DistributionTestBase):
    def test_uniform_all_in_support_is_zero(self) -> None:
        distr = ContinuousUniform(0.0, 1.0)
        # log L = sum log(1) = 0
        assert distr.log_likelihood([0.1, 0.9, 0.3]) == pytest.approx(0.0, abs=1e-12)

    def test_uniform_out_of_support_is_minus_inf(self) -> None:
        distr = ContinuousUniform(0.0, 1.0)
        assert np.isneginf(distr.log_likelihood(np.array([0.1, 1.5, 0.3])))

    def test_normal_matches_scipy(self) -> None:
        distr = self.make_normal()
        data = np.array([-1.0, 0.5, 2.0, 7.5])

        expected = float(np.sum(norm(1.0, 2.0).logpdf(data)))
        assert distr.log_likelihood(data) == pytest.approx(expected, rel=1e-12)

    def test_data_is_not_modified_and_shape_is_ignored(self) -> None:
        distr = self.make_normal()
        data = np.array([[0.0, 1.0], [2.0, 3.0]])
        copy = data.copy()

        assert distr.log_likelihood(data) == pytest.approx(
            distr.log_likelihood(data.ravel()), rel=1e-15
        )
        np.testing.assert_array_equal(data, copy)

    def test_poisson_matches_scipy(self) -> None:
        distr = Poisson(3.0)
        data = [0, 2, 3, 7]

        expected = float(np.sum(poisson(3.0).logpmf(data)))
        assert distr.log_likelihood(data) == pytest.approx(expected, rel=1e-12)

    def test_discrete_out_of_support_is_minus_inf(self) -> None:
        assert Poisson(3.0).log_likelihood([1, -1]) == -math.inf

    def test_empty_data_is_zero(self) -> None:
        assert Normal(0.0, 1.0).log_likelihood([]) == 0.0
        assert self.make_counter().log_likelihood([]) == 0.0

    def test_discrete_default_uses_probability_ln(self) -> None:
        counter = self.make_counter()
        assert counter.log_likelihood([0, 1]) == pytest.approx(-3.0 * math.log(2.0), rel=1e-15)
