"""
Unit tests for value specs: data types, parameters, properties, endpoints
and capabilities.
"""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from channelspec.core.ir import (
    ALL_CAPABILITIES,
    DEFAULT_CAPABILITIES,
    ChannelCapability,
    DataType,
    EndpointSpec,
    EndpointType,
    MessagePropertySpec,
    ParameterSpec,
    ValidationResult,
    any_endpoint,
    capability_set,
    format_capabilities,
    is_type_compatible,
    phone_number_property,
    to_capability_set,
    validation_error,
)


class TestTypeCompatibility:
    """Tests for the data type matrix."""

    @pytest.mark.parametrize(
        ("data_type", "value", "expected"),
        [
            (DataType.BOOLEAN, True, True),
            (DataType.BOOLEAN, 1, False),
            (DataType.BOOLEAN, "true", False),
            (DataType.STRING, "abc", True),
            (DataType.STRING, 5, False),
            (DataType.INTEGER, 5, True),
            (DataType.INTEGER, 5.0, False),
            (DataType.INTEGER, True, False),
            (DataType.NUMBER, 5, True),
            (DataType.NUMBER, 2.5, True),
            (DataType.NUMBER, Decimal("1.25"), True),
            (DataType.NUMBER, False, False),
            (DataType.NUMBER, "2.5", False),
        ],
    )
    def test_matrix(self, data_type, value, expected):
        assert is_type_compatible(data_type, value) is expected

    def test_accepts_string_type_names(self):
        assert is_type_compatible("integer", 3)


class TestParameterSpec:
    def test_defaults(self):
        param = ParameterSpec(name="ApiKey")
        assert param.data_type == DataType.STRING
        assert not param.is_required
        assert not param.has_default
        assert param.allowed_values == ()

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            ParameterSpec(name="  ")

    def test_is_allowed_keeps_bool_and_int_apart(self):
        param = ParameterSpec(name="Flag", data_type=DataType.INTEGER, allowed_values=(1, 2))
        assert param.is_allowed(1)
        assert not param.is_allowed(True)
        assert not param.is_allowed(3)

    def test_unconstrained_allows_anything(self):
        assert ParameterSpec(name="Any").is_allowed("whatever")

    def test_default_must_match_type(self):
        with pytest.raises(ValidationError, match="not compatible with the type 'integer'"):
            ParameterSpec(name="Timeout", data_type=DataType.INTEGER, default_value="30")

    def test_default_must_be_allowed(self):
        with pytest.raises(ValidationError, match="not among the allowed values"):
            ParameterSpec(name="Region", allowed_values=("us1", "ie1"), default_value="eu9")

    def test_valid_default_accepted(self):
        param = ParameterSpec(name="Region", allowed_values=("us1", "ie1"), default_value="ie1")
        assert param.has_default

    def test_frozen(self):
        param = ParameterSpec(name="ApiKey")
        with pytest.raises(ValidationError):
            param.name = "Other"


class TestMessagePropertySpec:
    def test_absent_optional_is_fine(self):
        assert MessagePropertySpec(name="Priority").validate(None) == []

    def test_absent_required_reports_presence(self):
        results = MessagePropertySpec(name="Priority", is_required=True).validate(None)
        assert len(results) == 1
        assert results[0].refers_to("priority")
        assert "missing" in results[0].message

    def test_wrong_type_stops_further_checks(self):
        spec = MessagePropertySpec(
            name="Priority", data_type=DataType.INTEGER, allowed_values=(1, 2), min_value=1
        )
        results = spec.validate("high")
        assert len(results) == 1
        assert "incompatible type" in results[0].message

    def test_allowed_values(self):
        spec = MessagePropertySpec(name="Priority", allowed_values=("low", "high"))
        assert spec.validate("low") == []
        results = spec.validate("urgent")
        assert results[0].message == (
            "Message property 'Priority' has an invalid value 'urgent'. "
            "Allowed values: [low, high]."
        )

    def test_string_length_and_pattern(self):
        spec = MessagePropertySpec(name="Code", min_length=2, max_length=4, pattern=r"^[A-Z]+$")
        assert spec.validate("AB") == []
        assert len(spec.validate("A")) == 1
        assert len(spec.validate("abcdef")) == 2  # too long and lowercase

    def test_numeric_range(self):
        spec = MessagePropertySpec(
            name="ValidityPeriod", data_type=DataType.NUMBER, min_value=1, max_value=10
        )
        assert spec.validate(5.5) == []
        assert "greater than or equal to 1" in spec.validate(0)[0].message
        assert "less than or equal to 10" in spec.validate(11)[0].message

    def test_invalid_pattern_rejected(self):
        with pytest.raises(ValidationError):
            MessagePropertySpec(name="Code", pattern="[unclosed")

    def test_custom_validator_runs_last(self):
        def no_spaces(value):
            if " " in value:
                return [validation_error("No spaces allowed", "Tag")]
            return []

        spec = MessagePropertySpec(name="Tag", custom_validator=no_spaces)
        assert spec.validate("a b") == [ValidationResult(message="No spaces allowed", member_names=("Tag",))]
        assert spec.validate("ab") == []

    def test_custom_validator_not_serialized(self):
        spec = MessagePropertySpec(name="Tag", custom_validator=lambda v: [])
        assert "custom_validator" not in spec.model_dump()


class TestPhoneNumberProperty:
    @pytest.mark.parametrize("number", ["+14155552671", "+447911123456"])
    def test_valid_numbers(self, number):
        assert phone_number_property("To").validate(number) == []

    @pytest.mark.parametrize(
        ("number", "fragment"),
        [
            ("14155552671", "must start with '+'"),
            ("+1415555267112345678", "between 2 and 16 characters"),
            ("+1415abc", "only digits"),
            ("+0123", "cannot start with '+0'"),
        ],
    )
    def test_invalid_numbers(self, number, fragment):
        results = phone_number_property("To").validate(number)
        assert len(results) == 1
        assert fragment in results[0].message
        assert results[0].member_names == ("To",)


class TestEndpointSpec:
    def test_wildcard_matches_everything(self):
        spec = any_endpoint()
        assert spec.is_wildcard
        assert all(spec.matches(t) for t in EndpointType)

    def test_exact_match_only(self):
        spec = EndpointSpec(type=EndpointType.EMAIL_ADDRESS)
        assert spec.matches(EndpointType.EMAIL_ADDRESS)
        assert spec.matches("email_address")
        assert not spec.matches(EndpointType.PHONE_NUMBER)

    def test_directions_default_to_true(self):
        spec = EndpointSpec(type=EndpointType.URL)
        assert spec.can_send and spec.can_receive
        assert not spec.is_required


class TestCapabilities:
    def test_default_is_send_only(self):
        assert DEFAULT_CAPABILITIES == {ChannelCapability.SEND_MESSAGES}

    def test_set_operations(self):
        send_receive = capability_set("send_messages", ChannelCapability.RECEIVE_MESSAGES)
        send = capability_set(ChannelCapability.SEND_MESSAGES)
        assert send <= send_receive
        assert not send_receive <= send
        assert send_receive & send == send
        assert send | send_receive == send_receive
        assert send_receive <= ALL_CAPABILITIES

    def test_unknown_capability_rejected(self):
        with pytest.raises(ValueError):
            capability_set("teleport")

    def test_to_capability_set_accepts_single_member(self):
        assert to_capability_set("templates") == {ChannelCapability.TEMPLATES}

    def test_format_in_declaration_order(self):
        caps = capability_set(ChannelCapability.TEMPLATES, ChannelCapability.SEND_MESSAGES)
        assert format_capabilities(caps) == "send_messages|templates"
        assert format_capabilities(frozenset()) == "none"
