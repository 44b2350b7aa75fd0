"""
Connection parameter types.

This module contains the data type matrix shared by parameters, message
properties and authentication fields, and the ``ParameterSpec`` describing
one connection setting a connector needs.
"""

from __future__ import annotations

import numbers
from collections.abc import Iterable
from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class DataType(str, Enum):
    """Value types a parameter or property may declare."""

    BOOLEAN = "boolean"
    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"


def is_type_compatible(data_type: DataType | str, value: Any) -> bool:
    """
    Check whether a runtime value is acceptable for a declared data type.

    BOOLEAN accepts only ``bool``; STRING only ``str``; INTEGER any integral
    value; NUMBER any integral value, ``float`` or ``Decimal``. ``bool`` is
    never accepted as a number even though it subclasses ``int``.
    """
    data_type = DataType(data_type)
    if data_type is DataType.BOOLEAN:
        return isinstance(value, bool)
    if data_type is DataType.STRING:
        return isinstance(value, str)
    if isinstance(value, bool):
        return False
    if data_type is DataType.INTEGER:
        return isinstance(value, numbers.Integral)
    if data_type is DataType.NUMBER:
        return isinstance(value, (numbers.Integral, float, Decimal))
    return False


def value_in(value: Any, allowed_values: Iterable[Any]) -> bool:
    """Membership test that keeps ``True`` and ``1`` apart."""
    for allowed in allowed_values:
        if isinstance(allowed, bool) != isinstance(value, bool):
            continue
        if allowed == value:
            return True
    return False


def format_allowed_values(allowed_values: Iterable[Any]) -> str:
    """Render an allowed-value list for error messages."""
    return ", ".join("null" if v is None else str(v) for v in allowed_values)


def type_name(value: Any) -> str:
    """Short runtime type name used in error messages."""
    return type(value).__name__


class ParameterSpec(BaseModel):
    """
    Declaration of one connection parameter.

    Attributes:
        name: Parameter name, unique within a schema (case-insensitive)
        data_type: Expected value type
        display_name: Human-readable label
        description: Free-form description
        is_required: Whether the settings must supply a value
        is_sensitive: Whether the value is a secret (masked in output)
        default_value: Value assumed when the settings omit the parameter
        allowed_values: When non-empty, the value must be one of these
    """

    name: str
    data_type: DataType = DataType.STRING
    display_name: str | None = None
    description: str | None = None
    is_required: bool = False
    is_sensitive: bool = False
    default_value: Any = None
    allowed_values: tuple[Any, ...] = ()

    model_config = ConfigDict(frozen=True)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Parameter name must not be blank")
        return v

    @model_validator(mode="after")
    def validate_default(self) -> ParameterSpec:
        """The default must itself be an acceptable value."""
        if self.default_value is None:
            return self
        if not is_type_compatible(self.data_type, self.default_value):
            raise ValueError(
                f"Default value of parameter '{self.name}' is not compatible with "
                f"the type '{self.data_type.value}'"
            )
        if not self.is_allowed(self.default_value):
            raise ValueError(
                f"Default value '{self.default_value}' of parameter '{self.name}' "
                f"is not among the allowed values [{format_allowed_values(self.allowed_values)}]"
            )
        return self

    @property
    def has_default(self) -> bool:
        return self.default_value is not None

    def is_allowed(self, value: Any) -> bool:
        """Check the allowed-value constraint (always true when unconstrained)."""
        return not self.allowed_values or value_in(value, self.allowed_values)
