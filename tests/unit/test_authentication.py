"""
Unit tests for authentication configurations.

Covers field checks, OR-across-groups / AND-within-group satisfaction and
the stock configuration factories.
"""

import pytest
from pydantic import ValidationError

from channelspec.core.ir import (
    AuthenticationConfig,
    AuthenticationField,
    AuthenticationFieldGroup,
    AuthenticationType,
    DataType,
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
from channelspec.core.settings import ConnectionSettings


def make_settings(**values) -> ConnectionSettings:
    """Helper to build settings from keyword arguments."""
    return ConnectionSettings(values)


class TestAuthenticationField:
    def test_missing_field(self):
        field = AuthenticationField(field_name="ApiKey")
        assert field.validate(make_settings()) == [
            "Required authentication field 'ApiKey' is missing."
        ]

    def test_type_and_allowed_values(self):
        field = AuthenticationField(
            field_name="Mode", data_type=DataType.STRING, allowed_values=("live", "test")
        )
        assert field.validate(make_settings(Mode="live")) == []
        errors = field.validate(make_settings(Mode=3))
        assert len(errors) == 2
        assert "incompatible type" in errors[0]
        assert "Allowed values: [live, test]" in errors[1]

    def test_bare_name_shorthand(self):
        group = AuthenticationFieldGroup.model_validate(["User", "Pass"])
        assert group.field_names == ("User", "Pass")

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            AuthenticationField(field_name="")

    def test_none_settings_rejected(self):
        with pytest.raises(TypeError):
            AuthenticationField(field_name="ApiKey").validate(None)


class TestAuthenticationConfig:
    def test_display_name_defaults_from_type(self):
        config = AuthenticationConfig(authentication_type=AuthenticationType.TOKEN)
        assert config.display_name == "Token Authentication"

    def test_no_alternatives_is_always_satisfied(self):
        config = no_authentication()
        assert config.is_satisfied_by(make_settings())
        assert config.validate(make_settings()) == []

    def test_and_within_group(self):
        config = basic_authentication()
        assert not config.is_satisfied_by(make_settings(Username="bob"))
        assert config.validate(make_settings(Username="bob")) == [
            "Required authentication field 'Password' is missing."
        ]
        assert config.is_satisfied_by(make_settings(Username="bob", Password="pw"))

    @pytest.mark.parametrize(
        "values",
        [
            {"Username": "u", "Password": "p"},
            {"AccountSid": "AC1", "AuthToken": "t"},
            {"User": "u", "Pass": "p"},
            {"ClientId": "c", "ClientSecret": "s"},
        ],
    )
    def test_or_across_groups(self, values):
        config = flexible_basic_authentication()
        assert config.is_satisfied_by(make_settings(**values))
        assert config.validate(make_settings(**values)) == []

    def test_lookup_is_case_insensitive(self):
        config = flexible_basic_authentication()
        assert config.is_satisfied_by(make_settings(username="u", PASSWORD="p"))

    def test_unsatisfied_groups_are_described(self):
        errors = flexible_basic_authentication().validate(make_settings())
        assert errors == [
            "Flexible Basic Authentication requires one of the following field groups: "
            "(Username, Password), (AccountSid, AuthToken), (User, Pass), "
            "(ClientId, ClientSecret)"
        ]

    def test_partially_supplied_group_is_explained(self):
        errors = flexible_basic_authentication().validate(make_settings(AccountSid="AC1"))
        assert len(errors) == 2
        assert "Required authentication field 'AuthToken' is missing." in errors

    def test_single_field_groups_are_listed_by_name(self):
        errors = flexible_api_key_authentication().validate(make_settings())
        assert errors == [
            "Flexible API Key Authentication requires one of the following fields: "
            "ApiKey, Key, AccessKey"
        ]

    def test_validate_is_empty_iff_satisfied(self):
        config = flexible_certificate_authentication()
        for settings in (
            make_settings(),
            make_settings(PfxFile="cert.pfx"),
            make_settings(PfxFile="cert.pfx", PfxPassword=123),
            make_settings(CertificatePath="/etc/cert.pem", CertificatePassword="pw"),
        ):
            assert (config.validate(settings) == []) is config.is_satisfied_by(settings)

    def test_optional_fields_checked_only_when_present(self):
        config = certificate_authentication()
        assert config.is_satisfied_by(make_settings(Certificate="PEM"))
        assert not config.is_satisfied_by(make_settings(Certificate="PEM", CertificatePassword=1))
        errors = config.validate(make_settings(Certificate="PEM", CertificatePassword=1))
        assert errors == [
            "Authentication field 'CertificatePassword' has an incompatible type. "
            "Expected: string, Actual: int."
        ]

    def test_get_all_field_names(self):
        config = flexible_certificate_authentication()
        assert config.get_all_field_names() == [
            "Certificate",
            "CertificatePath",
            "CertificateThumbprint",
            "PfxFile",
            "PfxPassword",
            "CertificatePassword",
        ]


class TestFactories:
    def test_twilio_basic(self):
        config = twilio_basic_authentication()
        assert config.authentication_type is AuthenticationType.BASIC
        assert config.get_all_field_names() == ["AccountSid", "AuthToken"]
        assert config.alternatives[0].fields[1].is_sensitive

    def test_custom_basic(self):
        config = custom_basic_authentication("Login", "Secret", "Portal Login")
        assert config.display_name == "Portal Login"
        assert config.is_satisfied_by(make_settings(Login="l", Secret="s"))

    def test_custom_basic_rejects_blank_names(self):
        with pytest.raises(ValueError):
            custom_basic_authentication("", "Secret")

    def test_api_key_and_token(self):
        assert api_key_authentication("XKey").get_all_field_names() == ["XKey"]
        assert token_authentication().is_satisfied_by(make_settings(Token="t"))
        assert flexible_token_authentication().is_satisfied_by(make_settings(BearerToken="t"))
        assert flexible_api_key_authentication("Secret").get_all_field_names() == ["Secret"]

    def test_client_credentials_needs_both(self):
        config = client_credentials_authentication()
        assert not config.is_satisfied_by(make_settings(ClientId="c"))
        assert config.is_satisfied_by(make_settings(ClientId="c", ClientSecret="s"))

    def test_flexible_custom(self):
        config = flexible_custom_authentication()
        assert config.is_satisfied_by(make_settings(Signature="sig"))
        assert "Hash" in config.get_all_field_names()

    def test_custom_authentication(self):
        config = custom_authentication(
            "HMAC",
            required_fields=["KeyId", "Secret"],
            optional_fields=["Algorithm"],
        )
        assert config.authentication_type is AuthenticationType.CUSTOM
        assert config.get_all_field_names() == ["KeyId", "Secret", "Algorithm"]
        assert config.is_satisfied_by(make_settings(KeyId="k", Secret="s"))
        assert not config.is_satisfied_by(make_settings(KeyId="k"))

    @pytest.mark.parametrize("auth_type", list(AuthenticationType))
    def test_default_authentication_covers_every_type(self, auth_type):
        assert default_authentication(auth_type).authentication_type is auth_type

    def test_default_authentication_accepts_string(self):
        assert default_authentication("api_key").display_name == "Flexible API Key Authentication"
