"""
Connector descriptor.

Pairs a connector class with its channel schema and answers capability,
content, endpoint and authentication questions by delegating to the schema.
"""

from __future__ import annotations

from collections.abc import Iterable

from .ir import (
    AuthenticationType,
    CapabilitySet,
    ChannelCapability,
    ChannelSchema,
    EndpointType,
    MessageContentType,
)
from .validator import get_logical_identity


class ConnectorDescriptor:
    """
    Read-only view of a connector and its schema.

    Two descriptors are equal when they describe the same connector type,
    whatever their schemas hold.
    """

    def __init__(self, connector_type: type, schema: ChannelSchema):
        if connector_type is None:
            raise TypeError("connector_type must not be None")
        if schema is None:
            raise TypeError("schema must not be None")
        self.connector_type = connector_type
        self.schema = schema

    @property
    def channel_provider(self) -> str:
        return self.schema.channel_provider

    @property
    def channel_type(self) -> str:
        return self.schema.channel_type

    @property
    def version(self) -> str:
        return self.schema.version

    @property
    def display_name(self) -> str:
        """Schema display name, or the connector class name."""
        return self.schema.display_name or self.connector_type.__name__

    @property
    def capabilities(self) -> CapabilitySet:
        return self.schema.capabilities

    def supports_capability(self, capability: ChannelCapability | str) -> bool:
        return self.schema.supports_capability(capability)

    def supports_any_capability(self, capabilities: Iterable[ChannelCapability | str]) -> bool:
        return any(self.supports_capability(c) for c in capabilities)

    def supports_all_capabilities(self, capabilities: Iterable[ChannelCapability | str]) -> bool:
        return all(self.supports_capability(c) for c in capabilities)

    def supports_content_type(self, content_type: MessageContentType | str) -> bool:
        return self.schema.supports_content_type(content_type)

    def supports_endpoint_type(self, endpoint_type: EndpointType | str) -> bool:
        return self.schema.supports_endpoint_type(endpoint_type)

    def supports_authentication_type(self, authentication_type: AuthenticationType | str) -> bool:
        return self.schema.supports_authentication_type(authentication_type)

    def get_logical_identity(self) -> str:
        return get_logical_identity(self.schema)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConnectorDescriptor):
            return NotImplemented
        return self.connector_type is other.connector_type

    def __hash__(self) -> int:
        return hash(self.connector_type)

    def __str__(self) -> str:
        return f"{self.display_name} ({self.get_logical_identity()})"

    def __repr__(self) -> str:
        return f"ConnectorDescriptor({self.connector_type.__name__}, {self.get_logical_identity()!r})"
