"""
Message property specifications.

A ``MessagePropertySpec`` declares one named property a message may carry
(e.g. ``Priority``, ``ValidityPeriod``) together with its own value checks.
Built-in checks cover type, allowed values, string length and pattern, and
numeric range; connector-specific checks plug in through ``custom_validator``.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .parameters import (
    DataType,
    format_allowed_values,
    is_type_compatible,
    type_name,
    value_in,
)
from .results import ValidationResult, validation_error

PropertyValidator = Callable[[Any], list[ValidationResult]]

E164_PATTERN = r"^\+[1-9]\d{1,14}$"


class MessagePropertySpec(BaseModel):
    """
    Declaration of one message property.

    Attributes:
        name: Property name, unique within a schema (case-insensitive)
        data_type: Expected value type
        display_name: Human-readable label
        description: Free-form description
        is_required: Whether every message must carry the property
        is_sensitive: Whether the value is a secret
        allowed_values: When non-empty, the value must be one of these
        min_length: Minimum string length
        max_length: Maximum string length
        pattern: Regular expression a string value must match
        min_value: Inclusive lower bound for numbers
        max_value: Inclusive upper bound for numbers
        custom_validator: Extra check run after the built-in ones
    """

    name: str
    data_type: DataType = DataType.STRING
    display_name: str | None = None
    description: str | None = None
    is_required: bool = False
    is_sensitive: bool = False
    allowed_values: tuple[Any, ...] = ()
    min_length: int | None = None
    max_length: int | None = None
    pattern: str | None = None
    min_value: int | float | Decimal | None = None
    max_value: int | float | Decimal | None = None
    custom_validator: PropertyValidator | None = Field(default=None, exclude=True)

    model_config = ConfigDict(frozen=True)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Message property name must not be blank")
        return v

    @field_validator("pattern")
    @classmethod
    def validate_pattern(cls, v: str | None) -> str | None:
        if v is not None:
            try:
                re.compile(v)
            except re.error as e:
                raise ValueError(f"Invalid pattern '{v}': {e}") from e
        return v

    def validate(self, value: Any) -> list[ValidationResult]:  # type: ignore[override]
        """
        Check one property value.

        An absent value (``None``) is only an error when the property is
        required. A value of the wrong type yields a single error and skips
        the remaining checks.
        """
        if value is None:
            if self.is_required:
                return [
                    validation_error(
                        f"Required message property '{self.name}' is missing.", self.name
                    )
                ]
            return []

        if not is_type_compatible(self.data_type, value):
            return [
                validation_error(
                    f"Message property '{self.name}' has an incompatible type. "
                    f"Expected: {self.data_type.value}, Actual: {type_name(value)}.",
                    self.name,
                )
            ]

        results: list[ValidationResult] = []

        if self.allowed_values and not value_in(value, self.allowed_values):
            results.append(
                validation_error(
                    f"Message property '{self.name}' has an invalid value '{value}'. "
                    f"Allowed values: [{format_allowed_values(self.allowed_values)}].",
                    self.name,
                )
            )

        if isinstance(value, str):
            results.extend(self._check_string(value))
        elif self.data_type in (DataType.INTEGER, DataType.NUMBER):
            results.extend(self._check_range(value))

        if self.custom_validator is not None:
            results.extend(self.custom_validator(value))

        return results

    def _check_string(self, value: str) -> list[ValidationResult]:
        results = []
        if self.min_length is not None and len(value) < self.min_length:
            results.append(
                validation_error(
                    f"Message property '{self.name}' must be at least "
                    f"{self.min_length} characters long.",
                    self.name,
                )
            )
        if self.max_length is not None and len(value) > self.max_length:
            results.append(
                validation_error(
                    f"Message property '{self.name}' must be at most "
                    f"{self.max_length} characters long.",
                    self.name,
                )
            )
        if self.pattern is not None and not re.search(self.pattern, value):
            results.append(
                validation_error(
                    f"Message property '{self.name}' does not match the required "
                    f"pattern '{self.pattern}'.",
                    self.name,
                )
            )
        return results

    def _check_range(self, value: Any) -> list[ValidationResult]:
        results = []
        if self.min_value is not None and value < self.min_value:
            results.append(
                validation_error(
                    f"Message property '{self.name}' must be greater than or equal "
                    f"to {self.min_value}.",
                    self.name,
                )
            )
        if self.max_value is not None and value > self.max_value:
            results.append(
                validation_error(
                    f"Message property '{self.name}' must be less than or equal "
                    f"to {self.max_value}.",
                    self.name,
                )
            )
        return results


def _check_e164(name: str) -> PropertyValidator:
    def check(value: Any) -> list[ValidationResult]:
        phone_number = str(value)
        if not phone_number.strip() or re.match(E164_PATTERN, phone_number):
            return []
        if not phone_number.startswith("+"):
            reason = "must start with '+' for E.164 format (e.g., +1234567890)"
        elif not 2 <= len(phone_number) <= 16:
            reason = "must be between 2 and 16 characters long in E.164 format"
        elif not phone_number[1:].isdigit():
            reason = "must contain only digits after the '+' sign for E.164 format"
        elif phone_number[1] == "0":
            reason = "cannot start with '+0' in E.164 format"
        else:
            reason = "must be a valid phone number in E.164 format (e.g., +1234567890)"
        return [validation_error(f"Property '{name}' {reason}.", name)]

    return check


def phone_number_property(
    name: str, *, is_required: bool = False, description: str | None = None
) -> MessagePropertySpec:
    """Property holding an E.164 phone number, with detailed format errors."""
    return MessagePropertySpec(
        name=name,
        data_type=DataType.STRING,
        is_required=is_required,
        description=description,
        custom_validator=_check_e164(name),
    )
