"""
Error types for channelspec.

Rule violations are never raised: validation functions return lists of
``ValidationResult``. The exceptions here signal misuse of the API, registry
failures and unreadable schema files.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from .ir.results import ValidationResult


class ChannelSpecError(Exception):
    """Base exception for all channelspec errors."""

    def __init__(self, message: str, context: ErrorContext | None = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class SettingsError(ChannelSpecError):
    """
    Raised when a connection setting is rejected by the bound schema.

    Examples:
    - Unknown parameter in a strict schema
    - Required parameter set to None
    - Value of the wrong type or outside the allowed values
    """

    pass


class RegistryError(ChannelSpecError):
    """
    Raised on connector registry misuse.

    Examples:
    - Registering the same connector twice
    - Registering a class without a channel schema
    - Looking up a connector that was never registered
    """

    pass


class SchemaLoadError(ChannelSpecError):
    """Raised when a schema, settings or message file cannot be read or parsed."""

    pass


class SchemaValidationError(ChannelSpecError):
    """
    Raised when a caller asks for validation failures to become an exception.

    Attributes:
        results: The validation results that caused the failure
    """

    def __init__(
        self,
        message: str,
        results: Iterable[ValidationResult] = (),
        context: ErrorContext | None = None,
    ):
        self.results = list(results)
        super().__init__(message, context)

    def _format_message(self) -> str:
        base = super()._format_message()
        if not self.results:
            return base
        details = "\n".join(f"  - {r.message}" for r in self.results)
        return f"{base}\n{details}"


@dataclass
class ErrorContext:
    """
    Where an error came from.

    Attributes:
        file: Path to the file being processed
        section: Optional key or table inside the file
    """

    file: Path
    section: str | None = None

    def format(self) -> str:
        """Format as ``path`` or ``path [section]``."""
        if self.section:
            return f"{self.file} [{self.section}]"
        return str(self.file)


def raise_for_results(results: Iterable[ValidationResult], message: str = "Validation failed") -> None:
    """
    Raise ``SchemaValidationError`` when the results are non-empty.

    Raises:
        SchemaValidationError: If any result was given
    """
    results = list(results)
    if results:
        raise SchemaValidationError(message, results)


def make_load_error(message: str, file: Path, section: str | None = None) -> SchemaLoadError:
    """Helper to create a SchemaLoadError with file context."""
    return SchemaLoadError(message, ErrorContext(file=file, section=section))
