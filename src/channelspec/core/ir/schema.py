"""
Channel schema.

A ``ChannelSchema`` is the declarative description of one channel connector:
its identity (provider, type, version), capabilities, connection parameters,
content types, endpoints, authentication configurations and message
properties. Schemas are frozen. The derivation methods return modified
copies that keep the identity, which is how a runtime schema is narrowed
from a connector's master schema.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..environment import default_strict_mode
from .authentication import AuthenticationConfig, AuthenticationType, default_authentication
from .capabilities import (
    DEFAULT_CAPABILITIES,
    CapabilitySet,
    ChannelCapability,
    to_capability_set,
)
from .endpoints import EndpointSpec, EndpointType
from .messages import MessageContentType
from .parameters import ParameterSpec
from .properties import MessagePropertySpec


E = TypeVar("E", bound=Enum)


def _member_or_none(enum_type: type[E], value: Any) -> E | None:
    """Coerce a member or its value; unknown values give None."""
    try:
        return enum_type(value)
    except ValueError:
        return None


def _find_duplicates(names: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    duplicates = []
    for name in names:
        folded = name.casefold()
        if folded in seen:
            duplicates.append(name)
        seen.add(folded)
    return duplicates


class ChannelSchema(BaseModel):
    """
    Declarative description of a channel connector.

    Attributes:
        channel_provider: Provider name (e.g. "Twilio")
        channel_type: Channel kind (e.g. "SMS")
        version: Schema version string
        display_name: Human-readable name
        is_strict: Reject settings keys and message properties not declared here
        capabilities: Supported features
        parameters: Connection parameters (names unique, case-insensitive)
        content_types: Supported message content types
        endpoints: Accepted endpoint kinds
        authentication_configurations: Accepted authentication methods,
            at most one per type. Bare types are expanded to their flexible
            stock configuration.
        message_properties: Message properties (names unique, case-insensitive)
    """

    channel_provider: str
    channel_type: str
    version: str
    display_name: str | None = None
    is_strict: bool = Field(default_factory=default_strict_mode)
    capabilities: CapabilitySet = DEFAULT_CAPABILITIES
    parameters: tuple[ParameterSpec, ...] = ()
    content_types: frozenset[MessageContentType] = frozenset()
    endpoints: tuple[EndpointSpec, ...] = ()
    authentication_configurations: tuple[AuthenticationConfig, ...] = ()
    message_properties: tuple[MessagePropertySpec, ...] = ()

    model_config = ConfigDict(frozen=True)

    @field_validator("channel_provider", "channel_type", "version")
    @classmethod
    def validate_identity(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Schema identity values must not be blank")
        return v

    @field_validator("capabilities", mode="before")
    @classmethod
    def normalize_capabilities(cls, v: Any) -> Any:
        if v is None:
            return DEFAULT_CAPABILITIES
        return to_capability_set(v)

    @field_validator("authentication_configurations", mode="before")
    @classmethod
    def expand_authentication_types(cls, v: Any) -> Any:
        if v is None:
            return ()
        expanded = []
        for item in v:
            if isinstance(item, (AuthenticationType, str)):
                expanded.append(default_authentication(item))
            else:
                expanded.append(item)
        return tuple(expanded)

    @field_validator(
        "parameters", "content_types", "endpoints", "message_properties", mode="before"
    )
    @classmethod
    def none_as_empty(cls, v: Any) -> Any:
        return () if v is None else v

    @model_validator(mode="after")
    def check_unique_members(self) -> ChannelSchema:
        duplicates = _find_duplicates(p.name for p in self.parameters)
        if duplicates:
            raise ValueError(f"Duplicate parameter names: {', '.join(duplicates)}")

        duplicates = _find_duplicates(p.name for p in self.message_properties)
        if duplicates:
            raise ValueError(f"Duplicate message property names: {', '.join(duplicates)}")

        seen: set[AuthenticationType] = set()
        for config in self.authentication_configurations:
            if config.authentication_type in seen:
                raise ValueError(
                    f"Duplicate authentication configuration for type "
                    f"'{config.authentication_type.value}'"
                )
            seen.add(config.authentication_type)
        return self

    # =========================================================================
    # Derived views
    # =========================================================================

    @property
    def identity_key(self) -> tuple[str, str, str]:
        """Case-folded identity triple used for compatibility comparisons."""
        return (
            self.channel_provider.casefold(),
            self.channel_type.casefold(),
            self.version.casefold(),
        )

    @property
    def authentication_types(self) -> tuple[AuthenticationType, ...]:
        """Distinct authentication types in declaration order."""
        types: list[AuthenticationType] = []
        for config in self.authentication_configurations:
            if config.authentication_type not in types:
                types.append(config.authentication_type)
        return tuple(types)

    def known_parameter_names(self) -> set[str]:
        """Case-folded names of declared parameters and authentication fields."""
        names = {p.name.casefold() for p in self.parameters}
        for config in self.authentication_configurations:
            names.update(n.casefold() for n in config.get_all_field_names())
        return names

    # =========================================================================
    # Lookups
    # =========================================================================

    def get_parameter(self, name: str) -> ParameterSpec | None:
        folded = name.casefold()
        return next((p for p in self.parameters if p.name.casefold() == folded), None)

    def get_message_property(self, name: str) -> MessagePropertySpec | None:
        folded = name.casefold()
        return next(
            (p for p in self.message_properties if p.name.casefold() == folded), None
        )

    def get_authentication_configuration(
        self, authentication_type: AuthenticationType | str
    ) -> AuthenticationConfig | None:
        auth_type = _member_or_none(AuthenticationType, authentication_type)
        if auth_type is None:
            return None
        return next(
            (
                c
                for c in self.authentication_configurations
                if c.authentication_type is auth_type
            ),
            None,
        )

    def supports_authentication_type(self, authentication_type: AuthenticationType | str) -> bool:
        return self.get_authentication_configuration(authentication_type) is not None

    def supports_capability(self, capability: ChannelCapability | str) -> bool:
        member = _member_or_none(ChannelCapability, capability)
        return member is not None and member in self.capabilities

    def supports_content_type(self, content_type: MessageContentType | str) -> bool:
        member = _member_or_none(MessageContentType, content_type)
        return member is not None and member in self.content_types

    def supports_endpoint_type(self, endpoint_type: EndpointType | str) -> bool:
        """True when some endpoint spec matches the type (wildcards included)."""
        member = _member_or_none(EndpointType, endpoint_type)
        if member is None:
            return False
        return any(e.matches(member) for e in self.endpoints)

    # =========================================================================
    # Derivation
    # =========================================================================

    def derive(self, display_name: str | None = None) -> ChannelSchema:
        """Copy of this schema, optionally with a new display name."""
        if display_name is None:
            return self.model_copy()
        return self.model_copy(update={"display_name": display_name})

    def with_strict_mode(self, is_strict: bool) -> ChannelSchema:
        return self.model_copy(update={"is_strict": is_strict})

    def restrict_capabilities(
        self, allowed: ChannelCapability | str | Iterable[ChannelCapability | str]
    ) -> ChannelSchema:
        """Keep only the capabilities that are also in ``allowed``."""
        return self.model_copy(
            update={"capabilities": self.capabilities & to_capability_set(allowed)}
        )

    def remove_capability(self, capability: ChannelCapability | str) -> ChannelSchema:
        return self.model_copy(
            update={"capabilities": self.capabilities - {ChannelCapability(capability)}}
        )

    def restrict_content_types(self, *content_types: MessageContentType | str) -> ChannelSchema:
        """Keep only the listed content types that this schema already supports."""
        allowed = {MessageContentType(c) for c in content_types}
        return self.model_copy(update={"content_types": self.content_types & allowed})

    def restrict_authentication_types(
        self, *authentication_types: AuthenticationType | str
    ) -> ChannelSchema:
        """Keep only the authentication configurations of the listed types."""
        allowed = {AuthenticationType(a) for a in authentication_types}
        return self.model_copy(
            update={
                "authentication_configurations": tuple(
                    c
                    for c in self.authentication_configurations
                    if c.authentication_type in allowed
                )
            }
        )

    def remove_parameter(self, name: str) -> ChannelSchema:
        folded = name.casefold()
        return self.model_copy(
            update={
                "parameters": tuple(p for p in self.parameters if p.name.casefold() != folded)
            }
        )

    def remove_message_property(self, name: str) -> ChannelSchema:
        folded = name.casefold()
        return self.model_copy(
            update={
                "message_properties": tuple(
                    p for p in self.message_properties if p.name.casefold() != folded
                )
            }
        )

    def remove_endpoint(self, endpoint_type: EndpointType | str) -> ChannelSchema:
        """Drop every endpoint spec declared for exactly this type."""
        endpoint_type = EndpointType(endpoint_type)
        return self.model_copy(
            update={"endpoints": tuple(e for e in self.endpoints if e.type is not endpoint_type)}
        )

    def __str__(self) -> str:
        return self.display_name or f"{self.channel_provider}/{self.channel_type}/{self.version}"
