"""
Unit tests for ConnectorDescriptor and ConnectorRegistry.
"""

import logging
import threading

import pytest

from channelspec.core.descriptor import ConnectorDescriptor
from channelspec.core.errors import RegistryError, SchemaValidationError
from channelspec.core.ir import (
    AuthenticationType,
    ChannelCapability,
    ChannelSchema,
    EndpointType,
    MessageContentType,
)
from channelspec.core.registry import ConnectorRegistry, channel_schema, get_declared_schema


def make_schema(**overrides) -> ChannelSchema:
    data = {
        "channel_provider": "Acme",
        "channel_type": "Push",
        "version": "1.0",
        "capabilities": [ChannelCapability.SEND_MESSAGES, ChannelCapability.HEALTH_CHECK],
        "content_types": ["plain_text", "json"],
        "endpoints": [{"type": "device_id"}],
        "authentication_configurations": ["token"],
    }
    data.update(overrides)
    return ChannelSchema(**data)


@channel_schema(make_schema)
class PushConnector:
    pass


@channel_schema(make_schema(channel_provider="Other", channel_type="Mail", display_name="Other Mail"))
class MailConnector:
    pass


class PlainConnector:
    pass


class TestConnectorDescriptor:
    def test_identity_and_display_name(self):
        descriptor = ConnectorDescriptor(PushConnector, make_schema())
        assert descriptor.channel_provider == "Acme"
        assert descriptor.channel_type == "Push"
        assert descriptor.display_name == "PushConnector"
        assert descriptor.get_logical_identity() == "Acme/Push/1.0"
        assert str(descriptor) == "PushConnector (Acme/Push/1.0)"

    def test_display_name_from_schema(self):
        descriptor = ConnectorDescriptor(MailConnector, get_declared_schema(MailConnector))
        assert descriptor.display_name == "Other Mail"

    def test_query_helpers(self):
        descriptor = ConnectorDescriptor(PushConnector, make_schema())
        assert descriptor.supports_capability(ChannelCapability.HEALTH_CHECK)
        assert not descriptor.supports_capability("templates")
        assert descriptor.supports_any_capability(["templates", "health_check"])
        assert not descriptor.supports_all_capabilities(["templates", "health_check"])
        assert descriptor.supports_all_capabilities([])
        assert descriptor.supports_content_type(MessageContentType.JSON)
        assert not descriptor.supports_content_type("html")
        assert descriptor.supports_endpoint_type(EndpointType.DEVICE_ID)
        assert not descriptor.supports_endpoint_type("email_address")
        assert descriptor.supports_authentication_type(AuthenticationType.TOKEN)
        assert not descriptor.supports_authentication_type("basic")

    def test_unknown_names_answer_false(self):
        descriptor = ConnectorDescriptor(PushConnector, make_schema())
        assert not descriptor.supports_capability("teleport")
        assert not descriptor.supports_any_capability(["teleport", "templates"])
        assert descriptor.supports_any_capability(["teleport", "health_check"])
        assert not descriptor.supports_content_type("sms")
        assert not descriptor.supports_endpoint_type("fax")
        assert not descriptor.supports_authentication_type("oauth")

    def test_equality_by_connector_type_only(self):
        a = ConnectorDescriptor(PushConnector, make_schema())
        b = ConnectorDescriptor(PushConnector, make_schema(version="9.9", display_name="X"))
        c = ConnectorDescriptor(MailConnector, make_schema())
        assert a == b
        assert hash(a) == hash(b)
        assert a != c
        assert len({a, b, c}) == 2

    def test_none_arguments_rejected(self):
        with pytest.raises(TypeError):
            ConnectorDescriptor(None, make_schema())
        with pytest.raises(TypeError):
            ConnectorDescriptor(PushConnector, None)


class TestChannelSchemaDecorator:
    def test_factory_is_resolved(self):
        schema = get_declared_schema(PushConnector)
        assert isinstance(schema, ChannelSchema)
        assert schema.channel_type == "Push"

    def test_undecorated_class(self):
        assert get_declared_schema(PlainConnector) is None

    def test_rejects_non_schema(self):
        with pytest.raises(TypeError):

            @channel_schema(lambda: "not a schema")
            class Broken:
                pass


class TestConnectorRegistry:
    def test_register_from_decorator(self):
        registry = ConnectorRegistry()
        registry.register(PushConnector)
        assert registry.is_registered(PushConnector)
        assert PushConnector in registry
        assert registry.get_schema(PushConnector).channel_provider == "Acme"

    def test_register_with_explicit_schema(self):
        registry = ConnectorRegistry()
        registry.register(PlainConnector, make_schema(channel_type="Plain"))
        assert registry.get_schema(PlainConnector).channel_type == "Plain"

    def test_register_undecorated_fails(self):
        with pytest.raises(RegistryError, match="@channel_schema"):
            ConnectorRegistry().register(PlainConnector)

    def test_double_registration_fails(self):
        registry = ConnectorRegistry()
        registry.register(PushConnector)
        with pytest.raises(RegistryError, match="already registered"):
            registry.register(PushConnector)

    def test_unregister(self):
        registry = ConnectorRegistry()
        registry.register(PushConnector)
        assert registry.unregister(PushConnector)
        assert not registry.unregister(PushConnector)
        with pytest.raises(RegistryError, match="not registered"):
            registry.get_schema(PushConnector)

    def test_find_by_provider_and_type(self):
        registry = ConnectorRegistry()
        registry.register(PushConnector)
        registry.register(MailConnector)
        assert registry.find_connector("acme", "PUSH") is PushConnector
        assert registry.find_schema("Other", "Mail").display_name == "Other Mail"
        assert registry.find_schema("Acme", "Fax") is None
        with pytest.raises(ValueError):
            registry.find_schema("", "Push")

    def test_listing_and_queries(self):
        registry = ConnectorRegistry()
        registry.register(PushConnector)
        registry.register(MailConnector)
        assert registry.connector_types == [PushConnector, MailConnector]
        assert len(registry.get_descriptors()) == 2
        assert registry.get_descriptors(lambda d: d.channel_type == "Mail") == [
            ConnectorDescriptor(MailConnector, make_schema())
        ]
        assert [s.channel_type for s in registry.query_schemas(lambda s: s.display_name)] == ["Mail"]

    def test_validate_schema(self):
        registry = ConnectorRegistry()
        registry.register(PushConnector)
        narrower = make_schema(content_types=["plain_text"])
        assert registry.validate_schema(PushConnector, narrower) == []

        other = make_schema(version="2.0")
        results = registry.validate_schema(PushConnector, other)
        assert len(results) == 1
        assert "not compatible" in results[0].message

    def test_resolve_schema(self, caplog):
        registry = ConnectorRegistry()
        registry.register(PushConnector)
        master = registry.get_schema(PushConnector)
        assert registry.resolve_schema(PushConnector) is master

        narrower = master.restrict_content_types("json")
        assert registry.resolve_schema(PushConnector, narrower) is narrower

        wider = make_schema(content_types=["plain_text", "json", "html"])
        with caplog.at_level(logging.WARNING, logger="channelspec.registry"):
            with pytest.raises(SchemaValidationError) as exc_info:
                registry.resolve_schema(PushConnector, wider)
        assert len(exc_info.value.results) == 1
        assert "is not a valid restriction of" in str(exc_info.value)
        assert "Rejected runtime schema" in caplog.text

    def test_registration_is_logged(self, caplog):
        with caplog.at_level(logging.INFO, logger="channelspec.registry"):
            ConnectorRegistry().register(PushConnector)
        assert "Registered connector PushConnector for Acme/Push/1.0" in caplog.text

    def test_concurrent_registration(self):
        registry = ConnectorRegistry()
        connectors = [type(f"Connector{i}", (), {}) for i in range(20)]
        schema = make_schema()

        threads = [
            threading.Thread(target=registry.register, args=(c, schema)) for c in connectors
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(registry) == 20
