from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import dataclasses
import math
from typing import Any

import pytest

from pysatl_univariate.errors import InvalidParameterError
from pysatl_univariate.families import (
    Parametrization,
    ParametrizationConstraint,
    constraint,
    parametrization,
)


@parametrization(name="base")
class BaseParams(Parametrization):
    value: float

    @constraint(description="value > 0")
    def check_positive(self) -> bool:
        return self.value > 0

    @constraint(description="value < 10")
    def check_small(self) -> bool:
        return self.value < 10


@parametrization(name="alt")
class AltParams(Parametrization):
    log_value: float

    def transform_to_base_parametrization(self) -> Parametrization:
        return BaseParams(value=math.exp(self.log_value))


class TestParametrizationAPI:
    def test_constraint_is_a_simple_holder(self) -> None:
        def is_positive(obj: object) -> bool:
            return getattr(obj, "value", 0) > 0

        c = ParametrizationConstraint(description="Value must be positive", check=is_positive)
        assert c.description == "Value must be positive"
        assert c.check is is_positive

    def test_constraint_decorator_marks_function(self) -> None:
        @constraint("Value must be positive")
        def check_positive(self: Any) -> bool:
            return getattr(self, "value", 0) > 0

        assert getattr(check_positive, "__is_constraint", False) is True
        assert getattr(check_positive, "__constraint_description", None) == "Value must be positive"

    def test_decorator_builds_frozen_dataclass(self) -> None:
        params = BaseParams(value=1.25)

        assert params.name == "base"
        assert params.parameters == {"value": 1.25}
        assert hasattr(BaseParams, "__dataclass_fields__")
        with pytest.raises(dataclasses.FrozenInstanceError):
            params.value = 2.0  # type: ignore[misc]

    def test_constraints_are_collected_in_declaration_order(self) -> None:
        descriptions = [c.description for c in BaseParams(value=1.0).constraints]
        assert descriptions == ["value > 0", "value < 10"]

    @pytest.mark.parametrize(
        "value, violated",
        [(1.0, None), (-1.0, "value > 0"), (20.0, "value < 10"), (math.nan, "value > 0")],
    )
    def test_violated_constraint(self, value, violated) -> None:
        params = BaseParams(value=value)
        constraint_ = params.violated_constraint()

        assert (constraint_.description if constraint_ else None) == violated
        assert params.is_valid() is (violated is None)

    def test_validate_raises_first_violation(self) -> None:
        with pytest.raises(InvalidParameterError, match='Constraint "value > 0" does not hold'):
            BaseParams(value=-1.0).validate()
        BaseParams(value=5.0).validate()

    def test_parametrization_without_constraints_is_valid(self) -> None:
        assert AltParams(log_value=100.0).is_valid()
        assert AltParams(log_value=100.0).constraints == []

    def test_transform_to_base(self) -> None:
        base = BaseParams(value=3.0)
        assert base.transform_to_base_parametrization() is base

        converted = AltParams(log_value=0.0).transform_to_base_parametrization()
        assert isinstance(converted, BaseParams)
        assert converted.value == 1.0

    def test_constraint_must_be_instance_method(self) -> None:
        with pytest.raises(TypeError, match="instance method"):

            @parametrization(name="broken")
            class Broken(Parametrization):
                value: float

                @staticmethod
                def check(value: float) -> bool:
                    return value > 0
