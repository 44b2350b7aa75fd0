"""
Validation engine for channel schemas.

Checks connection settings and messages against a ``ChannelSchema``, and one
schema against another (compatibility and restriction). Every rule is a pure
function returning its own list of ``ValidationResult``; the public
pipelines concatenate them. No rule stops another from running, except that
an incompatible identity ends a restriction check immediately.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .ir import (
    AuthenticationType,
    ChannelSchema,
    EndpointSpec,
    EndpointType,
    MessageContentType,
    MessageLike,
    SettingsLike,
    ValidationResult,
    format_capabilities,
    is_type_compatible,
    validation_error,
)
from .ir.parameters import format_allowed_values, type_name, value_in
from .settings import ConnectionSettings

logger = logging.getLogger("channelspec.validator")

__all__ = [
    "get_logical_identity",
    "is_compatible_with",
    "is_type_compatible",
    "validate_as_restriction_of",
    "validate_connection_settings",
    "validate_message",
    "validate_message_properties",
]


def _require(value: Any, name: str) -> Any:
    if value is None:
        raise TypeError(f"{name} must not be None")
    return value


def _as_settings(settings: SettingsLike | Mapping[str, Any], schema: ChannelSchema) -> SettingsLike:
    if isinstance(settings, SettingsLike):
        return settings
    if isinstance(settings, Mapping):
        return ConnectionSettings(settings, schema=schema)
    raise TypeError(f"Cannot validate {type(settings).__name__} as connection settings")


# =============================================================================
# Identity
# =============================================================================


def get_logical_identity(schema: ChannelSchema) -> str:
    """Return ``provider/type/version`` exactly as declared (no case folding)."""
    _require(schema, "schema")
    return f"{schema.channel_provider}/{schema.channel_type}/{schema.version}"


def is_compatible_with(schema: ChannelSchema, other: ChannelSchema) -> bool:
    """True when both schemas share provider, type and version, ignoring case."""
    _require(schema, "schema")
    _require(other, "other")
    return schema.identity_key == other.identity_key


# =============================================================================
# Connection settings
# =============================================================================


def check_required_parameters(
    schema: ChannelSchema, settings: SettingsLike
) -> list[ValidationResult]:
    """One error per required parameter that resolves to no value."""
    errors = []
    for parameter in schema.parameters:
        if not parameter.is_required:
            continue
        value = settings.get_parameter(parameter.name)
        if value is None:
            value = parameter.default_value
        if value is None:
            errors.append(
                validation_error(
                    f"Required parameter '{parameter.name}' is missing.", parameter.name
                )
            )
    return errors


def check_parameter_constraints(
    schema: ChannelSchema, settings: SettingsLike
) -> list[ValidationResult]:
    """Type and allowed-value checks for every supplied parameter value."""
    errors = []
    for parameter in schema.parameters:
        value = settings.get_parameter(parameter.name)
        # Absent values are covered by the required check or by the default
        if value is None:
            continue

        if not is_type_compatible(parameter.data_type, value):
            errors.append(
                validation_error(
                    f"Parameter '{parameter.name}' has an incompatible type. "
                    f"Expected: {parameter.data_type.value}, Actual: {type_name(value)}.",
                    parameter.name,
                )
            )

        if parameter.allowed_values and not value_in(value, parameter.allowed_values):
            errors.append(
                validation_error(
                    f"Parameter '{parameter.name}' has an invalid value '{value}'. "
                    f"Allowed values: [{format_allowed_values(parameter.allowed_values)}].",
                    parameter.name,
                )
            )
    return errors


def check_authentication(schema: ChannelSchema, settings: SettingsLike) -> list[ValidationResult]:
    """
    Authentication satisfaction across the schema's configurations.

    Passes when no configuration is declared, when only ``NONE`` is
    declared, or as soon as one configuration is satisfied. Otherwise a
    single error tagged ``Authentication`` lists every configuration with
    its own messages. Declaring ``NONE`` next to other types makes
    authentication optional.
    """
    configurations = schema.authentication_configurations
    if not configurations:
        return []

    types = schema.authentication_types
    if types == (AuthenticationType.NONE,):
        return []

    failures = []
    for config in configurations:
        if config.authentication_type is AuthenticationType.NONE:
            continue
        if config.is_satisfied_by(settings):
            return []
        failures.append(f"{config.display_name}: {', '.join(config.validate(settings))}")

    if AuthenticationType.NONE in types:
        return []

    supported = ", ".join(
        c.display_name
        for c in configurations
        if c.authentication_type is not AuthenticationType.NONE
    )
    return [
        validation_error(
            "Connection settings do not satisfy any of the supported authentication "
            f"configurations. Supported configurations: {supported}. "
            f"Validation errors: {'; '.join(failures)}",
            "Authentication",
        )
    ]


def check_unknown_parameters(
    schema: ChannelSchema, settings: SettingsLike
) -> list[ValidationResult]:
    """Settings keys that are neither declared parameters nor authentication fields."""
    known = schema.known_parameter_names()
    return [
        validation_error(f"Unknown parameter '{key}' is not supported by this schema.", key)
        for key in settings.parameters
        if key.casefold() not in known
    ]


def validate_connection_settings(
    schema: ChannelSchema, settings: SettingsLike | Mapping[str, Any]
) -> list[ValidationResult]:
    """
    Validate connection settings against a schema.

    Runs the required-parameter, constraint and authentication checks, plus
    the unknown-parameter check when the schema is strict. A plain mapping is
    accepted in place of ``ConnectionSettings``.

    Returns:
        All violations found; empty when the settings are valid

    Raises:
        TypeError: If schema or settings is None
    """
    _require(schema, "schema")
    _require(settings, "settings")
    settings = _as_settings(settings, schema)

    results = (
        check_required_parameters(schema, settings)
        + check_parameter_constraints(schema, settings)
        + check_authentication(schema, settings)
    )
    if schema.is_strict:
        results += check_unknown_parameters(schema, settings)

    logger.debug(
        "Validated connection settings against %s: %d error(s)",
        get_logical_identity(schema),
        len(results),
    )
    return results


# =============================================================================
# Messages
# =============================================================================


def _endpoint_types(endpoints: list[EndpointSpec]) -> str:
    return ", ".join(e.type.value for e in endpoints)


def _endpoint_value(endpoint_type: Any) -> str:
    return endpoint_type.value if isinstance(endpoint_type, EndpointType) else str(endpoint_type)


def check_message_id(message: MessageLike) -> list[ValidationResult]:
    if not message.id or not message.id.strip():
        return [validation_error("Message ID is required.", "Id")]
    return []


def check_sender(schema: ChannelSchema, message: MessageLike) -> list[ValidationResult]:
    sender = message.sender
    if sender is None or not schema.endpoints:
        return []
    if any(e.can_send and e.matches(sender.type) for e in schema.endpoints):
        return []
    senders = [e for e in schema.endpoints if e.can_send]
    return [
        validation_error(
            f"Sender endpoint type '{_endpoint_value(sender.type)}' is not supported or cannot "
            "send messages according to this schema. "
            f"Supported sender types: [{_endpoint_types(senders)}]",
            "Sender",
        )
    ]


def check_receiver(schema: ChannelSchema, message: MessageLike) -> list[ValidationResult]:
    receiver = message.receiver
    if receiver is None or not schema.endpoints:
        return []
    if any(e.can_receive and e.matches(receiver.type) for e in schema.endpoints):
        return []
    receivers = [e for e in schema.endpoints if e.can_receive]
    return [
        validation_error(
            f"Receiver endpoint type '{_endpoint_value(receiver.type)}' is not supported or "
            "cannot receive messages according to this schema. "
            f"Supported receiver types: [{_endpoint_types(receivers)}]",
            "Receiver",
        )
    ]


def _format_content_types(content_types: frozenset[MessageContentType]) -> str:
    return ", ".join(c.value for c in MessageContentType if c in content_types)


def check_content_type(schema: ChannelSchema, message: MessageLike) -> list[ValidationResult]:
    content = message.content
    if content is None or not schema.content_types:
        return []

    raw = content.content_type
    try:
        supported = MessageContentType(raw) in schema.content_types
    except ValueError:
        supported = False
    if supported:
        return []

    shown = raw.value if isinstance(raw, MessageContentType) else raw
    return [
        validation_error(
            f"Message content type '{shown}' is not supported by this schema. "
            f"Supported content types: [{_format_content_types(schema.content_types)}]",
            "Content",
        )
    ]


def _lookup(values: Mapping[str, Any], name: str) -> tuple[bool, Any]:
    folded = name.casefold()
    for key, value in values.items():
        if key.casefold() == folded:
            return True, value
    return False, None


def check_required_properties(
    schema: ChannelSchema, properties: Mapping[str, Any]
) -> list[ValidationResult]:
    errors = []
    for spec in schema.message_properties:
        if not spec.is_required:
            continue
        _, value = _lookup(properties, spec.name)
        if value is None:
            errors.append(
                validation_error(f"Required message property '{spec.name}' is missing.", spec.name)
            )
    return errors


def check_property_values(
    schema: ChannelSchema, properties: Mapping[str, Any]
) -> list[ValidationResult]:
    """Run each declared property's own checks on the values present."""
    errors: list[ValidationResult] = []
    for spec in schema.message_properties:
        found, value = _lookup(properties, spec.name)
        if found and value is not None:
            errors.extend(spec.validate(value))
    return errors


def check_unknown_properties(
    schema: ChannelSchema, properties: Mapping[str, Any]
) -> list[ValidationResult]:
    known = {p.name.casefold() for p in schema.message_properties}
    return [
        validation_error(
            f"Unknown message property '{key}' is not supported by this schema.", key
        )
        for key in properties
        if key.casefold() not in known
    ]


def validate_message_properties(
    schema: ChannelSchema, properties: Mapping[str, Any]
) -> list[ValidationResult]:
    """
    Validate a plain name to value mapping of message properties.

    Raises:
        TypeError: If schema or properties is None
    """
    _require(schema, "schema")
    _require(properties, "properties")

    results = check_required_properties(schema, properties) + check_property_values(
        schema, properties
    )
    if schema.is_strict:
        results += check_unknown_properties(schema, properties)
    return results


def _property_values(message: MessageLike) -> dict[str, Any]:
    properties = message.properties or {}
    return {key: getattr(prop, "value", None) for key, prop in properties.items()}


def validate_message(schema: ChannelSchema, message: MessageLike) -> list[ValidationResult]:
    """
    Validate a message against a schema.

    Checks the message id, sender and receiver endpoint types, content type
    and message properties. Endpoint and content-type checks only apply
    when the schema declares endpoints or content types.

    Returns:
        All violations found; empty when the message is valid

    Raises:
        TypeError: If schema or message is None
    """
    _require(schema, "schema")
    _require(message, "message")

    results = (
        check_message_id(message)
        + check_sender(schema, message)
        + check_receiver(schema, message)
        + check_content_type(schema, message)
        + validate_message_properties(schema, _property_values(message))
    )

    logger.debug(
        "Validated message %r against %s: %d error(s)",
        message.id,
        get_logical_identity(schema),
        len(results),
    )
    return results


# =============================================================================
# Restriction
# =============================================================================


def check_capability_subset(child: ChannelSchema, parent: ChannelSchema) -> list[ValidationResult]:
    if child.capabilities <= parent.capabilities:
        return []
    return [
        validation_error(
            f"Schema capabilities ({format_capabilities(child.capabilities)}) are not a subset "
            f"of target capabilities ({format_capabilities(parent.capabilities)})"
        )
    ]


def check_parameter_subset(child: ChannelSchema, parent: ChannelSchema) -> list[ValidationResult]:
    return [
        validation_error(
            f"Parameter '{p.name}' is not defined in target schema", p.name
        )
        for p in child.parameters
        if parent.get_parameter(p.name) is None
    ]


def check_content_type_subset(
    child: ChannelSchema, parent: ChannelSchema
) -> list[ValidationResult]:
    return [
        validation_error(f"Content type '{c.value}' is not supported by target schema")
        for c in MessageContentType
        if c in child.content_types and c not in parent.content_types
    ]


def check_authentication_subset(
    child: ChannelSchema, parent: ChannelSchema
) -> list[ValidationResult]:
    return [
        validation_error(f"Authentication type '{a.value}' is not supported by target schema")
        for a in child.authentication_types
        if not parent.supports_authentication_type(a)
    ]


def check_endpoint_subset(child: ChannelSchema, parent: ChannelSchema) -> list[ValidationResult]:
    """Every child endpoint type needs an entry of the same type in the parent."""
    parent_types = {e.type for e in parent.endpoints}
    errors = []
    reported: set[EndpointType] = set()
    for endpoint in child.endpoints:
        if endpoint.type in parent_types or endpoint.type in reported:
            continue
        reported.add(endpoint.type)
        errors.append(
            validation_error(
                f"Endpoint type '{endpoint.type.value}' is not defined in target schema"
            )
        )
    return errors


def check_message_property_subset(
    child: ChannelSchema, parent: ChannelSchema
) -> list[ValidationResult]:
    return [
        validation_error(f"Message property '{p.name}' is not defined in target schema", p.name)
        for p in child.message_properties
        if parent.get_message_property(p.name) is None
    ]


def validate_as_restriction_of(
    child: ChannelSchema, parent: ChannelSchema
) -> list[ValidationResult]:
    """
    Check that ``child`` is a narrower view of ``parent``.

    Schemas with different identities yield exactly one error and nothing
    else is compared. Otherwise every member of ``child`` (capabilities,
    parameters, content types, authentication types, endpoint types and
    message properties) must also exist in ``parent``. Value constraints
    such as allowed values are not compared.

    Raises:
        TypeError: If either schema is None
    """
    _require(child, "child")
    _require(parent, "parent")

    if not is_compatible_with(child, parent):
        return [
            validation_error(
                f"Schema is not compatible. Expected: {get_logical_identity(parent)}, "
                f"Actual: {get_logical_identity(child)}"
            )
        ]

    results = (
        check_capability_subset(child, parent)
        + check_parameter_subset(child, parent)
        + check_content_type_subset(child, parent)
        + check_authentication_subset(child, parent)
        + check_endpoint_subset(child, parent)
        + check_message_property_subset(child, parent)
    )

    logger.debug(
        "Checked %s as restriction of %s: %d error(s)",
        get_logical_identity(child),
        get_logical_identity(parent),
        len(results),
    )
    return results
