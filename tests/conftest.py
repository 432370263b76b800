from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Generator
from typing import Any

import numpy as np
import pytest

from pysatl_univariate.config import reset_numeric_config
from pysatl_univariate.families.configuration import reset_distributions_register
from pysatl_univariate.random_source import reset_default_random_source

pytest.importorskip("scipy")


@pytest.fixture(autouse=True)
def _fresh_state() -> Generator[None, Any, None]:
    reset_distributions_register()
    reset_numeric_config()
    reset_default_random_source()
    yield
    reset_numeric_config()


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded generator for reproducible sampling tests."""
    return np.random.default_rng(20250101)
