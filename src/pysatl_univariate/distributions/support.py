"""
Supports
========

Support descriptions of univariate distributions:

- :class:`ContinuousSupport` – an interval of the real line.
- :class:`IntegerLatticeDiscreteSupport` – a contiguous range of integers,
  possibly unbounded above.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import itertools
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, cast, overload, runtime_checkable

import numpy as np

from pysatl_univariate.types import BoolArray, Interval1D, Number, NumericArray

if TYPE_CHECKING:
    from collections.abc import Iterator


@runtime_checkable
class Support(Protocol):
    @overload
    def contains(self, x: Number) -> bool: ...
    @overload
    def contains(self, x: NumericArray) -> BoolArray: ...


class ContinuousSupport(Interval1D, Support): ...


@dataclass(frozen=True, slots=True)
class IntegerLatticeDiscreteSupport(Support):
    """
    Integers ``k`` with ``min_k <= k <= max_k``.

    Parameters
    ----------
    min_k : int
        Smallest point of the support.
    max_k : int or None, default=None
        Largest point of the support, ``None`` for an unbounded range.
    """

    min_k: int
    max_k: int | None = None

    def __post_init__(self) -> None:
        if self.max_k is not None and self.max_k < self.min_k:
            raise ValueError("max_k must not be smaller than min_k.")

    @overload
    def contains(self, x: Number) -> bool: ...
    @overload
    def contains(self, x: NumericArray) -> BoolArray: ...

    def contains(self, x: Number | NumericArray) -> bool | BoolArray:
        xf = np.asarray(x, dtype=float)
        mask = np.isfinite(xf) & (xf == np.floor(xf)) & (xf >= self.min_k)
        if self.max_k is not None:
            mask &= xf <= self.max_k

        if np.ndim(xf) == 0:
            return bool(mask)
        return cast(BoolArray, mask)

    def __contains__(self, x: object) -> bool:
        return bool(self.contains(cast(Number, x)))

    @property
    def is_bounded(self) -> bool:
        return self.max_k is not None

    def iter_points(self) -> Iterator[int]:
        if self.max_k is None:
            return itertools.count(self.min_k)
        return iter(range(self.min_k, self.max_k + 1))

    __iter__ = iter_points


__all__ = [
    "Support",
    "ContinuousSupport",
    "IntegerLatticeDiscreteSupport",
]
