from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import itertools
import math

import numpy as np
import pytest

from pysatl_univariate.distributions.distribution import (
    ContinuousDistribution,
    DiscreteDistribution,
    UnivariateDistribution,
)
from pysatl_univariate.distributions.support import IntegerLatticeDiscreteSupport
from pysatl_univariate.errors import InvalidParameterError
from pysatl_univariate.families.builtins.continuous.exponential import (
    Exponential,
    ExponentialScale,
)
from pysatl_univariate.families.builtins.continuous.normal import (
    Normal,
    NormalMeanPrecision,
    NormalMeanVariance,
)
from pysatl_univariate.families.builtins.discrete.poisson import Poisson
from pysatl_univariate.families.parametrizations import Parametrization, parametrization
from pysatl_univariate.random_source import default_random_source
from pysatl_univariate.types import UnivariateContinuous, UnivariateDiscrete


@parametrization(name="start")
class CounterStart(Parametrization):
    start: int


class CounterDistribution(DiscreteDistribution):
    """Deterministic stand-in that returns consecutive integers."""

    def __init__(self, start: int = 0, random_source: np.random.Generator | None = None) -> None:
        self._parameters = CounterStart(start=start)
        self._counter = itertools.count(start)
        self._random_source = random_source or default_random_source()

    @property
    def support(self) -> IntegerLatticeDiscreteSupport:
        return IntegerLatticeDiscreteSupport(self._parameters.start)

    @property
    def variance(self) -> float:
        return 6.25

    def probability_ln(self, k: int) -> float:
        return -math.log(2.0) * (k + 1)

    def sample(self) -> int:
        return next(self._counter)


class DistributionTestBase:
    def make_normal(self, rng: np.random.Generator | None = None) -> Normal:
        return Normal(mean=1.0, std_dev=2.0, random_source=rng)

    def make_counter(self, start: int = 0) -> CounterDistribution:
        return CounterDistribution(start)


class TestDistributionProtocol(DistributionTestBase):
    def test_builtins_subclass_protocols(self) -> None:
        normal = self.make_normal()
        poisson = Poisson(2.0)

        assert UnivariateDistribution in type(normal).__mro__
        assert ContinuousDistribution in type(normal).__mro__
        assert DiscreteDistribution in type(poisson).__mro__
        assert normal.distribution_type == UnivariateContinuous
        assert poisson.distribution_type == UnivariateDiscrete

    def test_parameters_expose_base_parametrization(self) -> None:
        normal = self.make_normal()

        assert normal.parameters.name == "meanStdDev"
        assert normal.parameters.parameters == {"mean": 1.0, "std_dev": 2.0}

    def test_std_dev_defaults_to_root_of_variance(self) -> None:
        assert self.make_counter().std_dev == 2.5

    def test_continuous_bounds_follow_support(self) -> None:
        exponential = Exponential(2.0)

        assert exponential.minimum == 0.0
        assert exponential.maximum == math.inf
        assert self.make_normal().minimum == -math.inf

    def test_discrete_bounds_follow_support(self) -> None:
        counter = self.make_counter(3)

        assert counter.minimum == 3
        assert counter.maximum == math.inf

    def test_random_source_setter(self, rng) -> None:
        normal = self.make_normal()
        assert normal.random_source is default_random_source()

        normal.random_source = rng
        assert normal.random_source is rng

        normal.random_source = None
        assert normal.random_source is default_random_source()

    def test_equal_seeds_give_identical_samples(self) -> None:
        first = self.make_normal(np.random.default_rng(7)).samples(5)
        second = self.make_normal(np.random.default_rng(7)).samples(5)
        np.testing.assert_array_equal(first, second)


class TestFromParametrization(DistributionTestBase):
    @pytest.mark.parametrize(
        "parameters",
        [
            NormalMeanVariance(mean=1.0, variance=4.0),
            NormalMeanPrecision(mean=1.0, precision=0.25),
        ],
        ids=["variance", "precision"],
    )
    def test_alternative_parametrizations(self, parameters) -> None:
        normal = Normal.from_parametrization(parameters)

        assert normal.mean == 1.0
        assert normal.std_dev == pytest.approx(2.0, rel=1e-15)

    def test_random_source_is_attached(self, rng) -> None:
        exponential = Exponential.from_parametrization(ExponentialScale(scale=0.5), rng)

        assert exponential.rate == 2.0
        assert exponential.random_source is rng

    def test_invalid_parameters_raise(self) -> None:
        with pytest.raises(InvalidParameterError, match="variance >= 0"):
            Normal.from_parametrization(NormalMeanVariance(mean=0.0, variance=-1.0))


class TestDefaultSamplingMethods(DistributionTestBase):
    def test_fill_samples_is_sequential(self) -> None:
        counter = self.make_counter(5)
        values = np.zeros(4, dtype=np.int64)

        counter.fill_samples(values)
        np.testing.assert_array_equal(values, [5, 6, 7, 8])

    def test_samples_allocates_integer_buffer(self) -> None:
        values = self.make_counter().samples(3)

        assert values.dtype == np.int64
        np.testing.assert_array_equal(values, [0, 1, 2])

    def test_iter_samples_continues_the_sequence(self) -> None:
        counter = self.make_counter()
        counter.sample()
        stream = counter.iter_samples()

        assert [next(stream) for _ in range(3)] == [1, 2, 3]

    def test_continuous_samples_are_float(self, rng) -> None:
        values = self.make_normal(rng).samples(10)

        assert values.dtype == np.float64
        assert values.shape == (10,)

    def test_zero_samples(self) -> None:
        assert self.make_normal().samples(0).shape == (0,)
        assert self.make_counter().samples(0).shape == (0,)

    def test_negative_sample_count_raises(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            self.make_normal().samples(-1)
