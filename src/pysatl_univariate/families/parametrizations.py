"""
Parameterization classes and constraint validation for distributions.

This module provides the core abstractions for describing the parameter sets
of the catalog distributions, including constraint validation and conversion
from alternative parameterizations to the base one.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from abc import ABC
from dataclasses import dataclass, is_dataclass
from functools import wraps
from inspect import isfunction
from typing import TYPE_CHECKING, ParamSpec

from pysatl_univariate.errors import InvalidParameterError
from pysatl_univariate.types import ParametrizationName

if TYPE_CHECKING:
    from collections.abc import Callable
    from typing import Any, ClassVar


@dataclass(slots=True, frozen=True)
class ParametrizationConstraint:
    """
    Constraint on parameter values for a parametrization.

    Parameters
    ----------
    description : str
        Human-readable description of the constraint.
    check : Callable[[Any], bool]
        Validation function that returns True if constraint is satisfied.
    """

    description: str
    check: Callable[[Any], bool]


class Parametrization(ABC):
    """
    Abstract base class for distribution parametrizations.

    This class defines the interface for parametrizations, including
    parameter validation and conversion to base parametrization format.
    """

    # Set by the @parametrization decorator
    __param_name__: ClassVar[ParametrizationName]

    _constraints: ClassVar[list[ParametrizationConstraint]] = []

    @property
    def name(self) -> str:
        """Get the name of this parametrization."""
        return self.__class__.__param_name__

    @property
    def parameters(self) -> dict[str, Any]:
        """Get parameters as a dictionary."""
        fields = getattr(self, "__dataclass_fields__", None)
        if fields:
            return {f: getattr(self, f) for f in fields}
        ann = getattr(self, "__annotations__", {})
        return {k: getattr(self, k) for k in ann}

    @property
    def constraints(self) -> list[ParametrizationConstraint]:
        """Get constraints for this parametrization."""
        return self._constraints

    def violated_constraint(self) -> ParametrizationConstraint | None:
        """
        Find the first constraint that does not hold.

        Returns
        -------
        ParametrizationConstraint or None
            The first violated constraint in declaration order, or None if
            every constraint holds.
        """
        for constraint in self._constraints:
            if not constraint.check(self):
                return constraint
        return None

    def is_valid(self) -> bool:
        """Check all constraints without raising."""
        return self.violated_constraint() is None

    def validate(self) -> None:
        """
        Validate all constraints for this parametrization.

        Raises
        ------
        InvalidParameterError
            If any constraint is not satisfied.
        """
        violated = self.violated_constraint()
        if violated is not None:
            raise InvalidParameterError(violated.description)

    def transform_to_base_parametrization(self) -> Parametrization:
        """
        Convert this parametrization to the base parametrization.

        Returns
        -------
        Parametrization
            Equivalent parameters in the base parametrization.

        Notes
        -----
        Base implementation returns self. Subclasses should override
        if conversion to a different parametrization is needed.
        """
        return self


P = ParamSpec("P")


def constraint(description: str) -> Callable[[Callable[P, bool]], Callable[P, bool]]:
    """
    Decorator to mark an instance method as a parameter constraint.

    Parameters
    ----------
    description : str
        Human-readable description of the constraint.

    Returns
    -------
    Callable[[Callable[P, bool]], Callable[P, bool]]
        Decorator that marks the function as a constraint.

    Notes
    -----
    The decorated function must be a predicate returning bool. It must
    return False, not raise, for NaN or otherwise unusable inputs.
    """

    def decorator(func: Callable[P, bool]) -> Callable[P, bool]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> bool:
            return func(*args, **kwargs)

        setattr(wrapper, "__is_constraint", True)
        setattr(wrapper, "__constraint_description", description)
        return wrapper

    return decorator


def parametrization(*, name: str) -> Callable[[type[Parametrization]], type[Parametrization]]:
    """
    Decorator to declare a class as a named parametrization.

    Parameters
    ----------
    name : str
        Name of the parametrization.

    Returns
    -------
    Callable[[type[Parametrization]], type[Parametrization]]
        Class decorator that finalizes the parametrization.

    Notes
    -----
    Automatically converts the class to a frozen dataclass if not already one.
    Collects constraint methods marked with @constraint in declaration order.
    """

    def _collect_constraints(
        cls: type[Parametrization],
    ) -> list[ParametrizationConstraint]:
        """Collect constraint methods from the class."""
        constraints: list[ParametrizationConstraint] = []
        for attr_name, attr in cls.__dict__.items():
            if isinstance(attr, staticmethod):
                raise TypeError(
                    f"@constraint '{attr_name}' must be an instance method, not @staticmethod"
                )
            if isinstance(attr, classmethod):
                raise TypeError(
                    f"@constraint '{attr_name}' must be an instance method, not @classmethod"
                )

            func = attr if callable(attr) and isfunction(attr) else None
            if not func:
                continue
            if getattr(func, "__is_constraint", False):
                desc = getattr(func, "__constraint_description", func.__name__)
                constraints.append(ParametrizationConstraint(description=desc, check=func))
        return constraints

    def decorator(cls: type[Parametrization]) -> type[Parametrization]:
        if not is_dataclass(cls):
            cls = dataclass(slots=True, frozen=True)(cls)

        cls.__param_name__ = name
        cls._constraints = _collect_constraints(cls)
        return cls

    return decorator


__all__ = [
    "ParametrizationConstraint",
    "Parametrization",
    "constraint",
    "parametrization",
]
