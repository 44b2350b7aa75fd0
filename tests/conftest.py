"""Shared pytest fixtures for channelspec tests."""

import logging
from pathlib import Path

import pytest

from channelspec.core.ir import (
    AuthenticationConfig,
    AuthenticationType,
    ChannelCapability,
    ChannelSchema,
    DataType,
    EndpointSpec,
    EndpointType,
    MessageContentType,
    MessagePropertySpec,
    ParameterSpec,
    flexible_api_key_authentication,
    flexible_basic_authentication,
    phone_number_property,
)


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep CHANNELSPEC_* variables from the host out of the tests."""
    for name in ("CHANNELSPEC_STRICT", "CHANNELSPEC_LOG_LEVEL", "CHANNELSPEC_LOG_FORMAT"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _restore_channelspec_logger():
    """Undo handlers and levels installed by setup_logging (the CLI calls it)."""
    logger = logging.getLogger("channelspec")
    handlers, level = list(logger.handlers), logger.level
    yield
    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(level)


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def sms_schema() -> ChannelSchema:
    """A Twilio-like SMS schema used across the suite."""
    return ChannelSchema(
        channel_provider="Twilio",
        channel_type="SMS",
        version="1.0.0",
        display_name="Twilio SMS",
        is_strict=True,
        capabilities={
            ChannelCapability.SEND_MESSAGES,
            ChannelCapability.RECEIVE_MESSAGES,
            ChannelCapability.MESSAGE_STATUS_QUERY,
        },
        parameters=[
            ParameterSpec(name="AccountSid", is_required=True),
            ParameterSpec(name="AuthToken", is_required=True, is_sensitive=True),
            ParameterSpec(name="WebhookUrl"),
            ParameterSpec(name="Timeout", data_type=DataType.INTEGER, default_value=30),
            ParameterSpec(
                name="Region", allowed_values=("us1", "ie1", "au1"), default_value="us1"
            ),
        ],
        content_types={MessageContentType.PLAIN_TEXT, MessageContentType.MEDIA},
        endpoints=[
            EndpointSpec(type=EndpointType.PHONE_NUMBER),
            EndpointSpec(type=EndpointType.LABEL, can_receive=False),
        ],
        authentication_configurations=[flexible_basic_authentication()],
        message_properties=[
            MessagePropertySpec(name="ValidityPeriod", data_type=DataType.INTEGER, min_value=1),
            phone_number_property("CallbackNumber"),
        ],
    )


@pytest.fixture
def api_key_config() -> AuthenticationConfig:
    return flexible_api_key_authentication()


@pytest.fixture
def open_config() -> AuthenticationConfig:
    return AuthenticationConfig(authentication_type=AuthenticationType.NONE)
