"""
Tests for Distribution Register Configuration

This module tests the registration of the builtin distributions in the
global DistributionRegister.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import pytest

from pysatl_univariate.distributions.distribution import (
    ContinuousDistribution,
    DiscreteDistribution,
)
from pysatl_univariate.families.builtins import Normal, Poisson
from pysatl_univariate.families.configuration import (
    configure_distributions_register,
    reset_distributions_register,
)
from pysatl_univariate.families.registry import DistributionRegister
from pysatl_univariate.types import DistributionName


class TestConfiguration:
    """Test suite for configuration functionality."""

    def setup_method(self):
        """Setup before each test method."""
        self.registry = configure_distributions_register()

    def test_configure_distributions_register_returns_registry(self):
        assert isinstance(self.registry, DistributionRegister)

    def test_configure_distributions_register_is_singleton(self):
        registry2 = configure_distributions_register()
        assert self.registry is registry2

    def test_every_builtin_is_registered(self):
        assert DistributionRegister.names() == sorted(DistributionName)

    @pytest.mark.parametrize(
        "name, expected_kind",
        [
            (DistributionName.BETA, ContinuousDistribution),
            (DistributionName.SKEWED_GENERALIZED_T, ContinuousDistribution),
            (DistributionName.WEIBULL, ContinuousDistribution),
            (DistributionName.BERNOULLI, DiscreteDistribution),
            (DistributionName.CONWAY_MAXWELL_POISSON, DiscreteDistribution),
            (DistributionName.ZIPF, DiscreteDistribution),
        ],
    )
    def test_registered_classes_implement_their_kind(self, name, expected_kind):
        assert expected_kind in self.registry.get(name).__mro__

    def test_reset_distributions_register(self):
        """Test that reset_distributions_register clears the cache."""
        registry1 = configure_distributions_register()
        reset_distributions_register()
        registry2 = configure_distributions_register()

        # They should be different instances after reset
        assert registry1 is not registry2

    def test_registry_singleton_pattern(self):
        registry1 = DistributionRegister()
        registry2 = DistributionRegister()
        assert registry1 is registry2

    def test_registry_get_method(self):
        assert self.registry.get(DistributionName.NORMAL) is Normal
        assert self.registry.get("Poisson") is Poisson

        with pytest.raises(ValueError, match="No distribution"):
            self.registry.get("NonExistentDistribution")

    def test_registry_contains(self):
        assert DistributionRegister.contains(DistributionName.STABLE)
        assert not DistributionRegister.contains("Gumbel")

    def test_duplicate_registration_raises(self):
        with pytest.raises(ValueError, match="already found"):
            self.registry.register(DistributionName.NORMAL, Normal)

    def test_lookup_then_construct(self):
        distribution = self.registry.get(DistributionName.POISSON)(lambda_=2.0)
        assert distribution.mean == 2.0
