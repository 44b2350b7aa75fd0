"""
channelspec - Schema validation for messaging channel connectors.

Describe what a channel connector supports (connection parameters, content
types, endpoints, authentication methods, message properties) and check
connection settings, messages and narrower schemas against that description.
"""

from __future__ import annotations

from ._version import get_version

# Re-export commonly used types for convenience
from .core import ir
from .core.descriptor import ConnectorDescriptor
from .core.errors import (
    ChannelSpecError,
    RegistryError,
    SchemaLoadError,
    SchemaValidationError,
    SettingsError,
    raise_for_results,
)
from .core.ir import (
    AuthenticationType,
    ChannelCapability,
    ChannelSchema,
    DataType,
    EndpointSpec,
    EndpointType,
    Message,
    MessageContentType,
    MessagePropertySpec,
    ParameterSpec,
    ValidationResult,
)
from .core.registry import ConnectorRegistry, channel_schema
from .core.settings import ConnectionSettings
from .core.validator import (
    get_logical_identity,
    is_compatible_with,
    validate_as_restriction_of,
    validate_connection_settings,
    validate_message,
    validate_message_properties,
)

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    # Errors
    "ChannelSpecError",
    "RegistryError",
    "SchemaLoadError",
    "SchemaValidationError",
    "SettingsError",
    "raise_for_results",
    # Model
    "AuthenticationType",
    "ChannelCapability",
    "ChannelSchema",
    "DataType",
    "EndpointSpec",
    "EndpointType",
    "Message",
    "MessageContentType",
    "MessagePropertySpec",
    "ParameterSpec",
    "ValidationResult",
    "ConnectionSettings",
    # Engine
    "get_logical_identity",
    "is_compatible_with",
    "validate_as_restriction_of",
    "validate_connection_settings",
    "validate_message",
    "validate_message_properties",
    # Connectors
    "ConnectorDescriptor",
    "ConnectorRegistry",
    "channel_schema",
]
