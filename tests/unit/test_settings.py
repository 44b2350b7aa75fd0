"""
Unit tests for ConnectionSettings.
"""

import pytest

from channelspec.core.errors import SettingsError
from channelspec.core.settings import ConnectionSettings


class TestLookup:
    def test_case_insensitive_get(self):
        settings = ConnectionSettings({"ApiKey": "k"})
        assert settings.get_parameter("apikey") == "k"
        assert settings["APIKEY"] == "k"
        assert "apiKey" in settings

    def test_parameters_keep_original_keys(self):
        settings = ConnectionSettings({"ApiKey": "k"})
        assert list(settings.parameters) == ["ApiKey"]

    def test_parameters_is_read_only(self):
        settings = ConnectionSettings({"ApiKey": "k"})
        with pytest.raises(TypeError):
            settings.parameters["Other"] = 1

    def test_falls_back_to_schema_default(self, sms_schema):
        settings = ConnectionSettings(schema=sms_schema)
        assert settings.get_parameter("Timeout") == 30
        assert not settings.has_parameter("Timeout")
        assert settings.get_parameter("Unknown") is None

    def test_constructor_copies_input(self):
        source = {"ApiKey": "k"}
        settings = ConnectionSettings(source)
        source["ApiKey"] = "changed"
        assert settings["ApiKey"] == "k"

    def test_get_typed(self):
        settings = ConnectionSettings({"Port": 25})
        assert settings.get_typed("Port", int) == 25
        with pytest.raises(SettingsError):
            settings.get_typed("Port", str)


class TestSetParameter:
    def test_without_schema_anything_goes(self):
        settings = ConnectionSettings()
        settings.set_parameter("Anything", object())
        assert len(settings) == 1

    def test_replaces_existing_key_case_insensitively(self):
        settings = ConnectionSettings({"ApiKey": "old"})
        settings.set_parameter("APIKEY", "new")
        assert dict(settings.parameters) == {"ApiKey": "new"}

    def test_unknown_parameter_rejected(self, sms_schema):
        with pytest.raises(SettingsError, match="not supported"):
            ConnectionSettings(schema=sms_schema).set_parameter("Foo", "bar")

    def test_required_none_rejected(self, sms_schema):
        with pytest.raises(SettingsError, match="required"):
            ConnectionSettings(schema=sms_schema).set_parameter("AccountSid", None)

    def test_optional_none_accepted(self, sms_schema):
        settings = ConnectionSettings(schema=sms_schema).set_parameter("WebhookUrl", None)
        assert settings.has_parameter("WebhookUrl")

    def test_wrong_type_rejected(self, sms_schema):
        with pytest.raises(SettingsError, match="not compatible"):
            ConnectionSettings(schema=sms_schema)["Timeout"] = "30"

    def test_disallowed_value_rejected(self, sms_schema):
        with pytest.raises(SettingsError, match="not allowed"):
            ConnectionSettings(schema=sms_schema).set_parameter("Region", "eu9")

    def test_with_parameter_returns_copy(self, sms_schema):
        original = ConnectionSettings({"AccountSid": "AC1"}, schema=sms_schema)
        updated = original.with_parameter("Region", "ie1")
        assert updated["Region"] == "ie1"
        assert original["Region"] == "us1"
        assert updated.schema is sms_schema
