"""
Distribution Interfaces
=======================

This module defines the public protocols satisfied by every distribution of
the catalog:

- :class:`UnivariateDistribution` – parameters, statistics, CDF, sampling and
  the attached random source.
- :class:`ContinuousDistribution` – adds density, log density and quantile.
- :class:`DiscreteDistribution` – adds probability mass and its logarithm.

Concrete distributions subclass the protocol of their kind explicitly and
inherit the default method bodies defined here.

Notes
-----
- Statistics are read-only properties. A statistic that is undefined for the
  current parameters raises :class:`~pysatl_univariate.errors.NotSupportedError`.
- ``fill_samples`` and ``iter_samples`` default to repeated ``sample()``
  calls; distributions with a batched algorithm override ``fill_samples``.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING, Protocol, Self, runtime_checkable

import numpy as np

from pysatl_univariate.distributions.sampling import fill_sequentially, new_buffer, sample_stream
from pysatl_univariate.random_source import resolve_random_source
from pysatl_univariate.types import UnivariateContinuous, UnivariateDiscrete

if TYPE_CHECKING:
    from collections.abc import Iterator
    from typing import Any

    import numpy.typing as npt

    from pysatl_univariate.distributions.support import (
        ContinuousSupport,
        IntegerLatticeDiscreteSupport,
        Support,
    )
    from pysatl_univariate.families.parametrizations import Parametrization
    from pysatl_univariate.types import EuclideanDistributionType, FloatArray, IntArray


@runtime_checkable
class UnivariateDistribution(Protocol):
    """Interface shared by continuous and discrete distributions."""

    _parameters: Parametrization
    _random_source: np.random.Generator

    @classmethod
    def from_parametrization(
        cls, parameters: Parametrization, random_source: np.random.Generator | None = None
    ) -> Self:
        """
        Create a distribution from any of its parametrizations.

        Parameters
        ----------
        parameters : Parametrization
            Parameter set, validated and then converted to the base
            parametrization whose fields match the constructor arguments.
        random_source : numpy.random.Generator, optional
            Generator used for sampling.

        Raises
        ------
        InvalidParameterError
            If a constraint of ``parameters`` does not hold.
        """
        parameters.validate()
        base = parameters.transform_to_base_parametrization()
        return cls(**base.parameters, random_source=random_source)

    @property
    def distribution_type(self) -> EuclideanDistributionType: ...

    @property
    def parameters(self) -> Parametrization:
        """Validated base parametrization."""
        return self._parameters

    @property
    def support(self) -> Support: ...

    @property
    def random_source(self) -> np.random.Generator:
        """Generator consumed by the sampling methods."""
        return self._random_source

    @random_source.setter
    def random_source(self, value: np.random.Generator | None) -> None:
        self._random_source = resolve_random_source(value)

    @property
    def mean(self) -> float: ...

    @property
    def variance(self) -> float: ...

    @property
    def std_dev(self) -> float:
        return math.sqrt(self.variance)

    @property
    def entropy(self) -> float: ...

    @property
    def skewness(self) -> float: ...

    @property
    def median(self) -> float: ...

    def cumulative_distribution(self, x: float) -> float: ...

    def sample(self) -> Any: ...

    def fill_samples(self, values: npt.NDArray[Any]) -> None:
        """Overwrite every slot of ``values`` with an independent sample."""
        fill_sequentially(values, self.sample)

    def iter_samples(self) -> Iterator[Any]:
        """Infinite stream of independent samples."""
        return sample_stream(self.sample)


@runtime_checkable
class ContinuousDistribution(UnivariateDistribution, Protocol):
    """Interface of univariate continuous distributions."""

    @property
    def distribution_type(self) -> EuclideanDistributionType:
        return UnivariateContinuous

    @property
    def support(self) -> ContinuousSupport: ...

    @property
    def mode(self) -> float: ...

    @property
    def minimum(self) -> float:
        return self.support.left

    @property
    def maximum(self) -> float:
        return self.support.right

    def density(self, x: float) -> float: ...

    def density_ln(self, x: float) -> float: ...

    def inverse_cumulative_distribution(self, p: float) -> float: ...

    def sample(self) -> float: ...

    def samples(self, n: int) -> FloatArray:
        """Draw ``n`` samples into a new float array."""
        values = new_buffer(n, np.float64)
        self.fill_samples(values)
        return values

    def log_likelihood(self, data: npt.ArrayLike) -> float:
        """
        Log-likelihood of the observations.

        Parameters
        ----------
        data : array_like
            Observations; not modified.

        Returns
        -------
        float
            Sum of ``density_ln`` over all observations.
        """
        return math.fsum(self.density_ln(float(x)) for x in np.ravel(data))


@runtime_checkable
class DiscreteDistribution(UnivariateDistribution, Protocol):
    """Interface of univariate discrete distributions on the integers."""

    @property
    def distribution_type(self) -> EuclideanDistributionType:
        return UnivariateDiscrete

    @property
    def support(self) -> IntegerLatticeDiscreteSupport: ...

    @property
    def mode(self) -> int: ...

    @property
    def minimum(self) -> int:
        return self.support.min_k

    @property
    def maximum(self) -> float:
        """Largest point of the support, ``inf`` when unbounded."""
        max_k = self.support.max_k
        return math.inf if max_k is None else max_k

    def probability(self, k: int) -> float: ...

    def probability_ln(self, k: int) -> float: ...

    def sample(self) -> int: ...

    def samples(self, n: int) -> IntArray:
        """Draw ``n`` samples into a new integer array."""
        values = new_buffer(n, np.int64)
        self.fill_samples(values)
        return values

    def log_likelihood(self, data: npt.ArrayLike) -> float:
        """Sum of ``probability_ln`` over integer observations."""
        return math.fsum(self.probability_ln(int(k)) for k in np.ravel(data))


__all__ = [
    "UnivariateDistribution",
    "ContinuousDistribution",
    "DiscreteDistribution",
]
