"""
Channel capability types.

Capabilities are independent boolean features of a channel. A schema carries
them as a ``CapabilitySet``: a frozen set of ``ChannelCapability`` members,
so union (``|``), intersection (``&``) and subset (``<=``) tests are plain
set operations.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from typing import TypeAlias


class ChannelCapability(str, Enum):
    """Features a channel connector may support."""

    SEND_MESSAGES = "send_messages"
    RECEIVE_MESSAGES = "receive_messages"
    MESSAGE_STATUS_QUERY = "message_status_query"
    HANDLE_MESSAGE_STATE = "handle_message_state"  # Delivery receipts / status callbacks
    MEDIA_ATTACHMENTS = "media_attachments"
    TEMPLATES = "templates"
    BULK_MESSAGING = "bulk_messaging"
    HEALTH_CHECK = "health_check"


CapabilitySet: TypeAlias = frozenset[ChannelCapability]

ALL_CAPABILITIES: CapabilitySet = frozenset(ChannelCapability)
NO_CAPABILITIES: CapabilitySet = frozenset()
DEFAULT_CAPABILITIES: CapabilitySet = frozenset({ChannelCapability.SEND_MESSAGES})


def capability_set(*capabilities: ChannelCapability | str) -> CapabilitySet:
    """
    Build a capability set from members or their string values.

    Raises:
        ValueError: If a string does not name a known capability
    """
    return frozenset(ChannelCapability(c) for c in capabilities)


def to_capability_set(
    capabilities: ChannelCapability | str | Iterable[ChannelCapability | str],
) -> CapabilitySet:
    """Normalize a single capability or an iterable of them into a set."""
    if isinstance(capabilities, (ChannelCapability, str)):
        return capability_set(capabilities)
    return capability_set(*capabilities)


def format_capabilities(capabilities: Iterable[ChannelCapability]) -> str:
    """Render capabilities in declaration order, e.g. ``send_messages|templates``."""
    present = set(capabilities)
    if not present:
        return "none"
    return "|".join(c.value for c in ChannelCapability if c in present)
