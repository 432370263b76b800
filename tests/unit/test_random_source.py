from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import numpy as np

from pysatl_univariate.families.builtins.continuous.normal import Normal
from pysatl_univariate.families.builtins.discrete.poisson import Poisson
from pysatl_univariate.random_source import (
    default_random_source,
    reset_default_random_source,
    resolve_random_source,
)


class TestRandomSource:
    def test_default_is_shared(self) -> None:
        assert isinstance(default_random_source(), np.random.Generator)
        assert default_random_source() is default_random_source()

    def test_resolve_keeps_explicit_generator(self, rng) -> None:
        assert resolve_random_source(rng) is rng
        assert resolve_random_source(None) is default_random_source()

    def test_reset_creates_fresh_default(self) -> None:
        first = default_random_source()
        reset_default_random_source()

        assert default_random_source() is not first

    def test_distributions_share_default(self) -> None:
        normal = Normal()
        poisson = Poisson(1.0)

        assert normal.random_source is poisson.random_source

    def test_shared_generator_interleaves_draws(self) -> None:
        shared = np.random.default_rng(11)
        first = Normal(random_source=shared)
        second = Normal(random_source=shared)
        interleaved = [first.sample(), second.sample()]

        reference = np.random.default_rng(11)
        single = Normal(random_source=reference)
        assert interleaved == [single.sample(), single.sample()]
