"""
channelspec schema and message types.

This package contains the declarative model: value specs, capabilities,
the channel schema itself, messages and validation results.
Types are organized into submodules and re-exported from here.
"""

# Authentication
from .authentication import (
    AuthenticationConfig,
    AuthenticationField,
    AuthenticationFieldGroup,
    AuthenticationType,
    api_key_authentication,
    basic_authentication,
    certificate_authentication,
    client_credentials_authentication,
    custom_authentication,
    custom_basic_authentication,
    default_authentication,
    flexible_api_key_authentication,
    flexible_basic_authentication,
    flexible_certificate_authentication,
    flexible_custom_authentication,
    flexible_token_authentication,
    no_authentication,
    token_authentication,
    twilio_basic_authentication,
)

# Capabilities
from .capabilities import (
    ALL_CAPABILITIES,
    DEFAULT_CAPABILITIES,
    NO_CAPABILITIES,
    CapabilitySet,
    ChannelCapability,
    capability_set,
    format_capabilities,
    to_capability_set,
)

# Collaborator contracts
from .contracts import MessageLike, SettingsLike

# Endpoints
from .endpoints import EndpointSpec, EndpointType, any_endpoint

# Messages
from .messages import (
    BinaryContent,
    Endpoint,
    HtmlContent,
    JsonContent,
    MediaContent,
    MediaType,
    Message,
    MessageContent,
    MessageContentType,
    MessageProperty,
    MultipartContent,
    TemplateContent,
    TextContent,
    to_content,
)

# Parameters
from .parameters import DataType, ParameterSpec, is_type_compatible

# Message properties
from .properties import MessagePropertySpec, PropertyValidator, phone_number_property

# Results
from .results import ValidationResult, validation_error

# Schema
from .schema import ChannelSchema

__all__ = [
    # Authentication
    "AuthenticationConfig",
    "AuthenticationField",
    "AuthenticationFieldGroup",
    "AuthenticationType",
    "api_key_authentication",
    "basic_authentication",
    "certificate_authentication",
    "client_credentials_authentication",
    "custom_authentication",
    "custom_basic_authentication",
    "default_authentication",
    "flexible_api_key_authentication",
    "flexible_basic_authentication",
    "flexible_certificate_authentication",
    "flexible_custom_authentication",
    "flexible_token_authentication",
    "no_authentication",
    "token_authentication",
    "twilio_basic_authentication",
    # Capabilities
    "ALL_CAPABILITIES",
    "DEFAULT_CAPABILITIES",
    "NO_CAPABILITIES",
    "CapabilitySet",
    "ChannelCapability",
    "capability_set",
    "format_capabilities",
    "to_capability_set",
    # Collaborator contracts
    "MessageLike",
    "SettingsLike",
    # Endpoints
    "EndpointSpec",
    "EndpointType",
    "any_endpoint",
    # Messages
    "BinaryContent",
    "Endpoint",
    "HtmlContent",
    "JsonContent",
    "MediaContent",
    "MediaType",
    "Message",
    "MessageContent",
    "MessageContentType",
    "MessageProperty",
    "MultipartContent",
    "TemplateContent",
    "TextContent",
    "to_content",
    # Parameters
    "DataType",
    "ParameterSpec",
    "is_type_compatible",
    # Message properties
    "MessagePropertySpec",
    "PropertyValidator",
    "phone_number_property",
    # Results
    "ValidationResult",
    "validation_error",
    # Schema
    "ChannelSchema",
]
