"""
Endpoint types for channel schemas.

An ``EndpointSpec`` states which kind of endpoint (phone number, email
address, device id, ...) a channel accepts and in which direction.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class EndpointType(str, Enum):
    """Kinds of message endpoints."""

    PHONE_NUMBER = "phone_number"
    EMAIL_ADDRESS = "email_address"
    URL = "url"
    TOPIC = "topic"
    ID = "id"
    USER_ID = "user_id"
    APPLICATION_ID = "application_id"
    DEVICE_ID = "device_id"
    LABEL = "label"
    ANY = "any"  # Wildcard: matches every endpoint type


class EndpointSpec(BaseModel):
    """
    Declaration of an endpoint kind a channel handles.

    Attributes:
        type: Endpoint kind, or ``ANY`` to accept every kind
        can_send: Whether messages may be sent from this kind of endpoint
        can_receive: Whether messages may be delivered to this kind of endpoint
        is_required: Whether a message must carry such an endpoint
        description: Free-form description
    """

    type: EndpointType
    can_send: bool = True
    can_receive: bool = True
    is_required: bool = False
    description: str | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def is_wildcard(self) -> bool:
        return self.type is EndpointType.ANY

    def matches(self, endpoint_type: EndpointType | str) -> bool:
        """True when this spec is the wildcard or declares exactly that type."""
        if self.is_wildcard:
            return True
        return self.type == endpoint_type

    def __str__(self) -> str:
        return self.type.value


def any_endpoint() -> EndpointSpec:
    """Wildcard endpoint spec accepting every type in both directions."""
    return EndpointSpec(type=EndpointType.ANY, can_send=True, can_receive=True)
