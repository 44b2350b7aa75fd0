"""
Structural contracts consumed by the validation engine.

The engine reads settings and messages through these protocols, so any
object exposing the same attributes can be validated; ``ConnectionSettings``
and ``Message`` are the in-package implementations.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

# =============================================================================
# Settings
# =============================================================================


@runtime_checkable
class SettingsLike(Protocol):
    """Name to value lookup for connection settings."""

    def get_parameter(self, name: str) -> Any:
        """Return the value for a parameter name, or None when absent."""
        ...

    @property
    def parameters(self) -> Mapping[str, Any]:
        """The explicitly supplied parameters, for enumeration."""
        ...


# =============================================================================
# Messages
# =============================================================================


class EndpointLike(Protocol):
    @property
    def type(self) -> Any: ...

    @property
    def address(self) -> str: ...


class ContentLike(Protocol):
    @property
    def content_type(self) -> Any: ...


class PropertyLike(Protocol):
    @property
    def value(self) -> Any: ...


class MessageLike(Protocol):
    """The message surface the validation engine reads."""

    @property
    def id(self) -> str | None: ...

    @property
    def sender(self) -> EndpointLike | None: ...

    @property
    def receiver(self) -> EndpointLike | None: ...

    @property
    def content(self) -> ContentLike | None: ...

    @property
    def properties(self) -> Mapping[str, PropertyLike] | None: ...
