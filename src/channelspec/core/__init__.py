"""Core channelspec functionality: schema model, validation engine, registry, loading."""

from . import ir
from .descriptor import ConnectorDescriptor
from .errors import (
    ChannelSpecError,
    ErrorContext,
    RegistryError,
    SchemaLoadError,
    SchemaValidationError,
    SettingsError,
    raise_for_results,
)
from .loader import load_message, load_schema, load_settings
from .registry import ConnectorRegistry, channel_schema
from .settings import ConnectionSettings
from .validator import (
    get_logical_identity,
    is_compatible_with,
    validate_as_restriction_of,
    validate_connection_settings,
    validate_message,
    validate_message_properties,
)

__all__ = [
    "ir",
    "ChannelSpecError",
    "ErrorContext",
    "RegistryError",
    "SchemaLoadError",
    "SchemaValidationError",
    "SettingsError",
    "raise_for_results",
    "ConnectorDescriptor",
    "ConnectorRegistry",
    "channel_schema",
    "ConnectionSettings",
    "load_message",
    "load_schema",
    "load_settings",
    "get_logical_identity",
    "is_compatible_with",
    "validate_as_restriction_of",
    "validate_connection_settings",
    "validate_message",
    "validate_message_properties",
]
