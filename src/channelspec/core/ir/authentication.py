"""
Authentication configuration types.

An ``AuthenticationConfig`` describes one authentication method a channel
accepts and which settings fields satisfy it. Fields are arranged in
alternative groups: the configuration is satisfied when ANY group has ALL
of its fields present and valid. Basic authentication, for instance, is
satisfied by Username+Password or by AccountSid+AuthToken.

The factory functions at the bottom of the module build the stock
configurations used by the bundled connectors.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from .contracts import SettingsLike
from .parameters import (
    DataType,
    format_allowed_values,
    is_type_compatible,
    type_name,
    value_in,
)


class AuthenticationType(str, Enum):
    """Authentication methods a channel may accept."""

    NONE = "none"
    BASIC = "basic"
    API_KEY = "api_key"
    TOKEN = "token"
    CLIENT_CREDENTIALS = "client_credentials"
    CERTIFICATE = "certificate"
    CUSTOM = "custom"


_DEFAULT_DISPLAY_NAMES = {
    AuthenticationType.NONE: "No Authentication",
    AuthenticationType.BASIC: "Basic Authentication",
    AuthenticationType.API_KEY: "API Key Authentication",
    AuthenticationType.TOKEN: "Token Authentication",
    AuthenticationType.CLIENT_CREDENTIALS: "Client Credentials Authentication",
    AuthenticationType.CERTIFICATE: "Certificate Authentication",
    AuthenticationType.CUSTOM: "Custom Authentication",
}


def _require_settings(settings: SettingsLike | None) -> SettingsLike:
    if settings is None:
        raise TypeError("settings must not be None")
    return settings


class AuthenticationField(BaseModel):
    """
    One settings field used for authentication.

    Attributes:
        field_name: Settings key holding the value
        data_type: Expected value type
        display_name: Human-readable label
        description: Free-form description
        is_sensitive: Whether the value is a secret
        allowed_values: When non-empty, the value must be one of these
        authentication_role: Role of the field (Username, Password, ApiKey, ...)
    """

    field_name: str
    data_type: DataType = DataType.STRING
    display_name: str | None = None
    description: str | None = None
    is_sensitive: bool = False
    allowed_values: tuple[Any, ...] = ()
    authentication_role: str | None = None

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def from_name(cls, data: Any) -> Any:
        """Allow a bare field name as shorthand."""
        if isinstance(data, str):
            return {"field_name": data}
        return data

    @field_validator("field_name")
    @classmethod
    def validate_field_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Authentication field name must not be blank")
        return v

    def validate(self, settings: SettingsLike) -> list[str]:  # type: ignore[override]
        """Check presence, type and allowed values of the field in the settings."""
        value = _require_settings(settings).get_parameter(self.field_name)
        if value is None:
            return [f"Required authentication field '{self.field_name}' is missing."]

        errors = []
        if not is_type_compatible(self.data_type, value):
            errors.append(
                f"Authentication field '{self.field_name}' has an incompatible type. "
                f"Expected: {self.data_type.value}, Actual: {type_name(value)}."
            )
        if self.allowed_values and not value_in(value, self.allowed_values):
            errors.append(
                f"Authentication field '{self.field_name}' has an invalid value '{value}'. "
                f"Allowed values: [{format_allowed_values(self.allowed_values)}]."
            )
        return errors

    def __str__(self) -> str:
        role = f" ({self.authentication_role})" if self.authentication_role else ""
        return f"{self.display_name or self.field_name}: {self.data_type.value}{role}"


class AuthenticationFieldGroup(BaseModel):
    """A set of fields that must all be present together."""

    fields: tuple[AuthenticationField, ...]

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def from_sequence(cls, data: Any) -> Any:
        """Allow a plain list of fields (or field names) as shorthand."""
        if isinstance(data, (list, tuple)):
            return {"fields": data}
        return data

    @field_validator("fields")
    @classmethod
    def validate_fields(cls, v: tuple[AuthenticationField, ...]) -> tuple[AuthenticationField, ...]:
        if not v:
            raise ValueError("An authentication field group needs at least one field")
        return v

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(f.field_name for f in self.fields)

    def is_supplied_in(self, settings: SettingsLike) -> bool:
        """True when at least one field of the group has a value."""
        return any(settings.get_parameter(name) is not None for name in self.field_names)

    def validate(self, settings: SettingsLike) -> list[str]:  # type: ignore[override]
        errors: list[str] = []
        for field in self.fields:
            errors.extend(field.validate(settings))
        return errors

    def is_satisfied_by(self, settings: SettingsLike) -> bool:
        return all(not field.validate(settings) for field in self.fields)

    def __str__(self) -> str:
        return f"({', '.join(self.field_names)})"


class AuthenticationConfig(BaseModel):
    """
    One authentication method plus the settings fields that satisfy it.

    Attributes:
        authentication_type: The authentication method
        display_name: Human-readable name used in error messages
        alternatives: Field groups; any one fully valid group satisfies the
            configuration. No groups means the configuration is always satisfied.
        optional_fields: Fields validated only when present (e.g. a
            certificate password)
    """

    authentication_type: AuthenticationType
    display_name: str = ""
    alternatives: tuple[AuthenticationFieldGroup, ...] = ()
    optional_fields: tuple[AuthenticationField, ...] = ()

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def default_display_name(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("display_name"):
            auth_type = data.get("authentication_type")
            if auth_type is not None:
                data = {**data, "display_name": _DEFAULT_DISPLAY_NAMES[AuthenticationType(auth_type)]}
        return data

    def is_satisfied_by(self, settings: SettingsLike) -> bool:
        """True when some alternative group is complete and present optional fields are valid."""
        settings = _require_settings(settings)
        if self.alternatives and not any(g.is_satisfied_by(settings) for g in self.alternatives):
            return False
        return not self._optional_field_errors(settings)

    def validate(self, settings: SettingsLike) -> list[str]:  # type: ignore[override]
        """
        Explain why the settings do not satisfy this configuration.

        Returns an empty list exactly when ``is_satisfied_by`` is true.
        """
        settings = _require_settings(settings)
        errors: list[str] = []

        if self.alternatives and not any(g.is_satisfied_by(settings) for g in self.alternatives):
            if len(self.alternatives) == 1:
                errors.extend(self.alternatives[0].validate(settings))
            else:
                errors.append(self._describe_alternatives())
                for group in self.alternatives:
                    if group.is_supplied_in(settings):
                        errors.extend(e for e in group.validate(settings) if e not in errors)

        errors.extend(self._optional_field_errors(settings))
        return errors

    def get_all_field_names(self) -> list[str]:
        """Every field name referenced by any alternative or optional field."""
        names: list[str] = []
        for group in self.alternatives:
            for name in group.field_names:
                if name not in names:
                    names.append(name)
        for field in self.optional_fields:
            if field.field_name not in names:
                names.append(field.field_name)
        return names

    def _optional_field_errors(self, settings: SettingsLike) -> list[str]:
        errors: list[str] = []
        for field in self.optional_fields:
            if settings.get_parameter(field.field_name) is not None:
                errors.extend(field.validate(settings))
        return errors

    def _describe_alternatives(self) -> str:
        if all(len(g.fields) == 1 for g in self.alternatives):
            names = ", ".join(g.fields[0].field_name for g in self.alternatives)
            return f"{self.display_name} requires one of the following fields: {names}"
        groups = ", ".join(str(g) for g in self.alternatives)
        return f"{self.display_name} requires one of the following field groups: {groups}"

    def __str__(self) -> str:
        return self.display_name


# =============================================================================
# Stock configurations
# =============================================================================


def _field(
    name: str,
    *,
    role: str | None = None,
    sensitive: bool = False,
    display_name: str | None = None,
    description: str | None = None,
) -> AuthenticationField:
    return AuthenticationField(
        field_name=name,
        data_type=DataType.STRING,
        display_name=display_name or name,
        description=description,
        is_sensitive=sensitive,
        authentication_role=role,
    )


def _require_name(value: str, label: str) -> str:
    if not value or not value.strip():
        raise ValueError(f"{label} must not be blank")
    return value


def _single_field_alternatives(
    names: Sequence[str], *, role: str, sensitive: bool = True
) -> tuple[AuthenticationFieldGroup, ...]:
    return tuple(
        AuthenticationFieldGroup(fields=(_field(n, role=role, sensitive=sensitive),))
        for n in names
    )


def no_authentication() -> AuthenticationConfig:
    """Explicitly open channel."""
    return AuthenticationConfig(authentication_type=AuthenticationType.NONE)


def basic_authentication() -> AuthenticationConfig:
    """Username and password."""
    return custom_basic_authentication("Username", "Password", "Basic Authentication")


def twilio_basic_authentication() -> AuthenticationConfig:
    """Account SID and auth token acting as username and password."""
    return AuthenticationConfig(
        authentication_type=AuthenticationType.BASIC,
        display_name="Twilio Basic Authentication",
        alternatives=(
            AuthenticationFieldGroup(
                fields=(
                    _field("AccountSid", role="Username", display_name="Account SID"),
                    _field(
                        "AuthToken", role="Password", sensitive=True, display_name="Auth Token"
                    ),
                )
            ),
        ),
    )


def custom_basic_authentication(
    username_field: str, password_field: str, display_name: str | None = None
) -> AuthenticationConfig:
    """Basic authentication over arbitrarily named username/password fields."""
    _require_name(username_field, "username_field")
    _require_name(password_field, "password_field")
    return AuthenticationConfig(
        authentication_type=AuthenticationType.BASIC,
        display_name=display_name or "Custom Basic Authentication",
        alternatives=(
            AuthenticationFieldGroup(
                fields=(
                    _field(username_field, role="Username"),
                    _field(password_field, role="Password", sensitive=True),
                )
            ),
        ),
    )


BASIC_FIELD_PAIRS: tuple[tuple[str, str], ...] = (
    ("Username", "Password"),
    ("AccountSid", "AuthToken"),
    ("User", "Pass"),
    ("ClientId", "ClientSecret"),
)


def flexible_basic_authentication() -> AuthenticationConfig:
    """Basic authentication satisfied by any of the common username/password pairs."""
    return AuthenticationConfig(
        authentication_type=AuthenticationType.BASIC,
        display_name="Flexible Basic Authentication",
        alternatives=tuple(
            AuthenticationFieldGroup(
                fields=(
                    _field(user, role="Username"),
                    _field(secret, role="Password", sensitive=True),
                )
            )
            for user, secret in BASIC_FIELD_PAIRS
        ),
    )


def api_key_authentication(key_field_name: str = "ApiKey") -> AuthenticationConfig:
    _require_name(key_field_name, "key_field_name")
    return AuthenticationConfig(
        authentication_type=AuthenticationType.API_KEY,
        display_name="API Key Authentication",
        alternatives=_single_field_alternatives([key_field_name], role="ApiKey"),
    )


def flexible_api_key_authentication(*field_names: str) -> AuthenticationConfig:
    """API key held in any one of the given fields (ApiKey, Key, AccessKey by default)."""
    names = field_names or ("ApiKey", "Key", "AccessKey")
    return AuthenticationConfig(
        authentication_type=AuthenticationType.API_KEY,
        display_name="Flexible API Key Authentication",
        alternatives=_single_field_alternatives(names, role="ApiKey"),
    )


def token_authentication(token_field_name: str = "Token") -> AuthenticationConfig:
    _require_name(token_field_name, "token_field_name")
    return AuthenticationConfig(
        authentication_type=AuthenticationType.TOKEN,
        display_name="Token Authentication",
        alternatives=_single_field_alternatives([token_field_name], role="Token"),
    )


def flexible_token_authentication(*field_names: str) -> AuthenticationConfig:
    names = field_names or ("Token", "AccessToken", "BearerToken", "AuthToken")
    return AuthenticationConfig(
        authentication_type=AuthenticationType.TOKEN,
        display_name="Flexible Token Authentication",
        alternatives=_single_field_alternatives(names, role="Token"),
    )


def client_credentials_authentication(
    client_id_field: str = "ClientId", client_secret_field: str = "ClientSecret"
) -> AuthenticationConfig:
    """OAuth client credentials."""
    _require_name(client_id_field, "client_id_field")
    _require_name(client_secret_field, "client_secret_field")
    return AuthenticationConfig(
        authentication_type=AuthenticationType.CLIENT_CREDENTIALS,
        display_name="Client Credentials Authentication",
        alternatives=(
            AuthenticationFieldGroup(
                fields=(
                    _field(client_id_field, role="ClientId", display_name="Client ID"),
                    _field(
                        client_secret_field,
                        role="ClientSecret",
                        sensitive=True,
                        display_name="Client Secret",
                    ),
                )
            ),
        ),
    )


def certificate_authentication(certificate_field_name: str = "Certificate") -> AuthenticationConfig:
    _require_name(certificate_field_name, "certificate_field_name")
    return AuthenticationConfig(
        authentication_type=AuthenticationType.CERTIFICATE,
        display_name="Certificate Authentication",
        alternatives=_single_field_alternatives([certificate_field_name], role="Certificate"),
        optional_fields=(
            _field("CertificatePassword", role="CertificatePassword", sensitive=True),
        ),
    )


def flexible_certificate_authentication() -> AuthenticationConfig:
    """Certificate given inline, by path, by thumbprint or as a PFX file."""
    return AuthenticationConfig(
        authentication_type=AuthenticationType.CERTIFICATE,
        display_name="Flexible Certificate Authentication",
        alternatives=tuple(
            AuthenticationFieldGroup(fields=(_field(name, role=name),))
            for name in ("Certificate", "CertificatePath", "CertificateThumbprint", "PfxFile")
        ),
        optional_fields=(
            _field("PfxPassword", role="PfxPassword", sensitive=True),
            _field("CertificatePassword", role="CertificatePassword", sensitive=True),
        ),
    )


CUSTOM_AUTHENTICATION_FIELDS: tuple[str, ...] = (
    "CustomAuth",
    "AuthenticationData",
    "Credentials",
    "AuthConfig",
    "SecretKey",
    "PrivateKey",
    "Signature",
    "Hash",
)


def flexible_custom_authentication() -> AuthenticationConfig:
    return AuthenticationConfig(
        authentication_type=AuthenticationType.CUSTOM,
        display_name="Custom Authentication",
        alternatives=_single_field_alternatives(
            CUSTOM_AUTHENTICATION_FIELDS, role="Custom", sensitive=False
        ),
    )


def custom_authentication(
    display_name: str,
    *,
    required_fields: Iterable[AuthenticationField | str] | None = None,
    alternatives: Iterable[Iterable[AuthenticationField | str]] | None = None,
    optional_fields: Iterable[AuthenticationField | str] | None = None,
) -> AuthenticationConfig:
    """
    Custom authentication.

    ``required_fields`` forms a single group that must be fully present;
    ``alternatives`` adds further groups of which any one suffices.
    """
    _require_name(display_name, "display_name")
    groups: list[Any] = []
    if required_fields:
        groups.append(list(required_fields))
    for group in alternatives or ():
        groups.append(list(group))
    return AuthenticationConfig.model_validate(
        {
            "authentication_type": AuthenticationType.CUSTOM,
            "display_name": display_name,
            "alternatives": groups,
            "optional_fields": list(optional_fields or ()),
        }
    )


_DEFAULT_FACTORIES = {
    AuthenticationType.NONE: no_authentication,
    AuthenticationType.BASIC: flexible_basic_authentication,
    AuthenticationType.API_KEY: flexible_api_key_authentication,
    AuthenticationType.TOKEN: flexible_token_authentication,
    AuthenticationType.CLIENT_CREDENTIALS: client_credentials_authentication,
    AuthenticationType.CERTIFICATE: flexible_certificate_authentication,
    AuthenticationType.CUSTOM: flexible_custom_authentication,
}


def default_authentication(authentication_type: AuthenticationType | str) -> AuthenticationConfig:
    """The flexible stock configuration for a bare authentication type."""
    return _DEFAULT_FACTORIES[AuthenticationType(authentication_type)]()
