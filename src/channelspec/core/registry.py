"""
Connector registry.

Connector classes declare their master schema with the ``@channel_schema``
decorator and are registered in a ``ConnectorRegistry``. The registry answers
lookups by connector class or by provider/type, and checks runtime schemas
against the registered master schema before handing them out.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import TypeVar

from .descriptor import ConnectorDescriptor
from .errors import RegistryError, SchemaValidationError
from .ir import ChannelSchema, ValidationResult
from .validator import get_logical_identity, is_compatible_with, validate_as_restriction_of

logger = logging.getLogger("channelspec.registry")

SCHEMA_ATTRIBUTE = "__channel_schema__"

C = TypeVar("C", bound=type)

SchemaSource = ChannelSchema | Callable[[], ChannelSchema]


def channel_schema(schema: SchemaSource) -> Callable[[C], C]:
    """
    Class decorator attaching a master schema to a connector class.

    Args:
        schema: The schema, or a zero-argument factory building it. A factory
            is called once, at decoration time.

    Example:
        @channel_schema(twilio_sms_schema)
        class TwilioSmsConnector:
            ...
    """

    def decorator(connector_type: C) -> C:
        resolved = schema() if callable(schema) and not isinstance(schema, ChannelSchema) else schema
        if not isinstance(resolved, ChannelSchema):
            raise TypeError(
                f"Schema for '{connector_type.__name__}' must be a ChannelSchema, "
                f"got {type(resolved).__name__}"
            )
        setattr(connector_type, SCHEMA_ATTRIBUTE, resolved)
        return connector_type

    return decorator


def get_declared_schema(connector_type: type) -> ChannelSchema | None:
    """The schema attached by ``@channel_schema``, if any."""
    schema = getattr(connector_type, SCHEMA_ATTRIBUTE, None)
    return schema if isinstance(schema, ChannelSchema) else None


class ConnectorRegistry:
    """
    Thread-safe table of connector classes and their master schemas.

    Example:
        registry = ConnectorRegistry()
        registry.register(TwilioSmsConnector)
        schema = registry.resolve_schema(TwilioSmsConnector, runtime_schema)
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._schemas: dict[type, ChannelSchema] = {}

    def register(self, connector_type: type, schema: ChannelSchema | None = None) -> None:
        """
        Register a connector class.

        Args:
            connector_type: The connector class
            schema: Master schema; read from ``@channel_schema`` when omitted

        Raises:
            RegistryError: If the class is already registered or has no schema
        """
        if connector_type is None:
            raise TypeError("connector_type must not be None")
        if schema is None:
            schema = get_declared_schema(connector_type)
        if schema is None:
            raise RegistryError(
                f"Connector type '{connector_type.__name__}' must be decorated with @channel_schema."
            )

        with self._lock:
            if connector_type in self._schemas:
                raise RegistryError(
                    f"Connector type '{connector_type.__name__}' is already registered."
                )
            self._schemas[connector_type] = schema

        logger.info(
            "Registered connector %s for %s",
            connector_type.__name__,
            get_logical_identity(schema),
        )

    def unregister(self, connector_type: type) -> bool:
        """Remove a connector; returns False when it was not registered."""
        with self._lock:
            removed = self._schemas.pop(connector_type, None)
        if removed is not None:
            logger.info("Unregistered connector %s", connector_type.__name__)
        return removed is not None

    def is_registered(self, connector_type: type) -> bool:
        with self._lock:
            return connector_type in self._schemas

    def get_schema(self, connector_type: type) -> ChannelSchema:
        """
        Master schema of a registered connector.

        Raises:
            RegistryError: If the connector is not registered
        """
        with self._lock:
            schema = self._schemas.get(connector_type)
        if schema is None:
            raise RegistryError(f"Connector type '{connector_type.__name__}' is not registered.")
        return schema

    def _find(self, channel_provider: str, channel_type: str) -> tuple[type, ChannelSchema] | None:
        for name, value in (("channel_provider", channel_provider), ("channel_type", channel_type)):
            if not value or not value.strip():
                raise ValueError(f"{name} must not be blank")
        provider = channel_provider.casefold()
        kind = channel_type.casefold()
        with self._lock:
            entries = list(self._schemas.items())
        for connector_type, schema in entries:
            if (
                schema.channel_provider.casefold() == provider
                and schema.channel_type.casefold() == kind
            ):
                return connector_type, schema
        return None

    def find_schema(self, channel_provider: str, channel_type: str) -> ChannelSchema | None:
        """First registered schema for a provider and type (case-insensitive)."""
        found = self._find(channel_provider, channel_type)
        return found[1] if found else None

    def find_connector(self, channel_provider: str, channel_type: str) -> type | None:
        found = self._find(channel_provider, channel_type)
        return found[0] if found else None

    @property
    def connector_types(self) -> list[type]:
        with self._lock:
            return list(self._schemas)

    def get_descriptors(
        self, predicate: Callable[[ConnectorDescriptor], bool] | None = None
    ) -> list[ConnectorDescriptor]:
        with self._lock:
            entries = list(self._schemas.items())
        descriptors = [ConnectorDescriptor(t, s) for t, s in entries]
        if predicate is None:
            return descriptors
        return [d for d in descriptors if predicate(d)]

    def query_schemas(self, predicate: Callable[[ChannelSchema], bool]) -> list[ChannelSchema]:
        if predicate is None:
            raise TypeError("predicate must not be None")
        with self._lock:
            schemas = list(self._schemas.values())
        return [s for s in schemas if predicate(s)]

    def validate_schema(
        self, connector_type: type, runtime_schema: ChannelSchema
    ) -> list[ValidationResult]:
        """
        Check a runtime schema against the connector's master schema.

        Raises:
            RegistryError: If the connector is not registered
        """
        if runtime_schema is None:
            raise TypeError("runtime_schema must not be None")
        master = self.get_schema(connector_type)
        # validate_as_restriction_of reports an identity mismatch as its only error
        return validate_as_restriction_of(runtime_schema, master)

    def resolve_schema(
        self, connector_type: type, runtime_schema: ChannelSchema | None = None
    ) -> ChannelSchema:
        """
        Schema a connector instance should run with.

        Returns the master schema when no runtime schema is given, otherwise
        the runtime schema once it has been checked as a restriction of the
        master.

        Raises:
            RegistryError: If the connector is not registered
            SchemaValidationError: If the runtime schema is not a valid restriction
        """
        master = self.get_schema(connector_type)
        if runtime_schema is None:
            return master

        results = self.validate_schema(connector_type, runtime_schema)
        if results:
            logger.warning(
                "Rejected runtime schema %s for connector %s: %d error(s)",
                get_logical_identity(runtime_schema),
                connector_type.__name__,
                len(results),
            )
            reason = (
                "is not compatible with"
                if not is_compatible_with(runtime_schema, master)
                else "is not a valid restriction of"
            )
            raise SchemaValidationError(
                f"Runtime schema {get_logical_identity(runtime_schema)} {reason} "
                f"{get_logical_identity(master)}",
                results,
            )
        return runtime_schema

    def __len__(self) -> int:
        with self._lock:
            return len(self._schemas)

    def __contains__(self, connector_type: object) -> bool:
        with self._lock:
            return connector_type in self._schemas
