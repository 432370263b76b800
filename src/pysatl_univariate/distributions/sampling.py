"""
Sampling Helpers
================

Building blocks shared by the samplers of the catalog: sample buffers, the
sequential buffer fill, the infinite sample stream and uniform draws that
exclude zero.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from typing import Any

    import numpy.typing as npt


def new_buffer(n: int, dtype: npt.DTypeLike) -> npt.NDArray[Any]:
    """
    Allocate an uninitialized one-dimensional sample buffer.

    Raises
    ------
    ValueError
        If ``n`` is negative.
    """
    if n < 0:
        raise ValueError(f"Number of samples must be non-negative, got {n}")
    return np.empty(n, dtype=dtype)


def fill_sequentially(values: npt.NDArray[Any], draw: Callable[[], Any]) -> None:
    """Fill ``values`` in place, one ``draw()`` per slot, in index order."""
    for i in range(values.shape[0]):
        values[i] = draw()


def sample_stream(draw: Callable[[], Any]) -> Iterator[Any]:
    """Yield ``draw()`` forever."""
    while True:
        yield draw()


def uniform_positive(rng: np.random.Generator) -> float:
    """Draw ``U ~ U(0, 1]``, never exactly zero."""
    return 1.0 - float(rng.random())


def uniform_open(rng: np.random.Generator) -> float:
    """Draw ``U ~ U(0, 1)``, redrawing exact zeros."""
    u = float(rng.random())
    while u == 0.0:
        u = float(rng.random())
    return u


__all__ = [
    "new_buffer",
    "fill_sequentially",
    "sample_stream",
    "uniform_positive",
    "uniform_open",
]
