"""
Global registry of the catalog distributions using singleton pattern.

This module implements a centralized registry that maps distribution names to
their classes, enabling lookup by name across the application.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import ClassVar

    from pysatl_univariate.distributions.distribution import UnivariateDistribution


class DistributionRegister:
    """
    Singleton registry for distribution classes.

    Maintains a global mapping from distribution names to the classes
    implementing them.
    """

    _instance: ClassVar[DistributionRegister | None] = None
    _registered: dict[str, type[UnivariateDistribution]]

    def __new__(cls) -> DistributionRegister:
        """Create or return the singleton instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._registered = {}
        return cls._instance

    @classmethod
    def get(cls, name: str) -> type[UnivariateDistribution]:
        """
        Retrieve a distribution class by name.

        Parameters
        ----------
        name : str
            Name of the distribution to retrieve.

        Returns
        -------
        type[UnivariateDistribution]
            The requested distribution class.

        Raises
        ------
        ValueError
            If no distribution with the given name exists.
        """
        self = cls()
        if name not in self._registered:
            raise ValueError(f"No distribution {name} found in register")
        return self._registered[name]

    @classmethod
    def contains(cls, name: str) -> bool:
        """Check whether a distribution with the given name is registered."""
        return name in cls()._registered

    @classmethod
    def names(cls) -> list[str]:
        """Names of all registered distributions, sorted."""
        return sorted(cls()._registered)

    @classmethod
    def register(cls, name: str, distribution: type[UnivariateDistribution]) -> None:
        """
        Register a new distribution class.

        Parameters
        ----------
        name : str
            Name to register the class under.
        distribution : type[UnivariateDistribution]
            The class to register.

        Raises
        ------
        ValueError
            If a distribution with the same name is already registered.
        """
        self = cls()
        if name in self._registered:
            raise ValueError(f"Distribution {name} already found in register")
        self._registered[name] = distribution

    @classmethod
    def _reset(cls) -> None:
        """Drop the singleton instance together with its registrations."""
        cls._instance = None


__all__ = ["DistributionRegister"]
