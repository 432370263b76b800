"""
Random Source Resolution
========================

Every sampler draws from a :class:`numpy.random.Generator`. Distributions
hold a reference to a caller-supplied generator; when none is given they
share one process-wide default generator created on first use.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from functools import lru_cache

import numpy as np


@lru_cache(maxsize=1)
def default_random_source() -> np.random.Generator:
    """
    Return the shared default generator.

    Returns
    -------
    numpy.random.Generator
        Generator created with :func:`numpy.random.default_rng` on first call.
    """
    return np.random.default_rng()


def resolve_random_source(rng: np.random.Generator | None) -> np.random.Generator:
    """Return ``rng`` itself, or the shared default generator when it is ``None``."""
    return default_random_source() if rng is None else rng


def reset_default_random_source() -> None:
    """Drop the shared default generator so that the next use creates a fresh one."""
    default_random_source.cache_clear()


__all__ = [
    "default_random_source",
    "resolve_random_source",
    "reset_default_random_source",
]
