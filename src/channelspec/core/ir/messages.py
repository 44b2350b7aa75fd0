"""
Message types.

Messages are plain data: an id, optional sender and receiver endpoints,
optional content and a bag of named properties. Content is a closed union of
variants discriminated by ``content_type``; ``to_content`` is the single
conversion point from loose input (strings, bytes, mappings) into a variant.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from .endpoints import EndpointType


class MessageContentType(str, Enum):
    """Content kinds a message may carry."""

    PLAIN_TEXT = "plain_text"
    HTML = "html"
    MULTIPART = "multipart"
    TEMPLATE = "template"
    MEDIA = "media"
    JSON = "json"
    BINARY = "binary"


class MediaType(str, Enum):
    IMAGE = "image"
    AUDIO = "audio"
    VIDEO = "video"
    DOCUMENT = "document"
    FILE = "file"


class Endpoint(BaseModel):
    """A concrete sender or receiver address."""

    type: EndpointType
    address: str

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.type.value}:{self.address}"


# =============================================================================
# Content variants
# =============================================================================


class TextContent(BaseModel):
    content_type: Literal["plain_text"] = "plain_text"
    text: str
    encoding: str | None = None

    model_config = ConfigDict(frozen=True)


class HtmlContent(BaseModel):
    content_type: Literal["html"] = "html"
    html: str

    model_config = ConfigDict(frozen=True)


class TemplateContent(BaseModel):
    """Reference to a provider-side template plus its substitution values."""

    content_type: Literal["template"] = "template"
    template_id: str
    parameters: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)


ContentPart = Annotated[Union[TextContent, HtmlContent], Field(discriminator="content_type")]


class MultipartContent(BaseModel):
    """Alternative renderings of the same body (e.g. text and HTML)."""

    content_type: Literal["multipart"] = "multipart"
    parts: tuple[ContentPart, ...] = ()

    model_config = ConfigDict(frozen=True)


class JsonContent(BaseModel):
    content_type: Literal["json"] = "json"
    data: Any = None

    model_config = ConfigDict(frozen=True)


class BinaryContent(BaseModel):
    content_type: Literal["binary"] = "binary"
    data: bytes
    mime_type: str = "application/octet-stream"

    model_config = ConfigDict(frozen=True)


class MediaContent(BaseModel):
    """Media attachment, given inline or by URL."""

    content_type: Literal["media"] = "media"
    media_type: MediaType
    file_name: str | None = None
    file_url: str | None = None
    data: bytes | None = None

    model_config = ConfigDict(frozen=True)


MessageContent = Annotated[
    Union[
        TextContent,
        HtmlContent,
        TemplateContent,
        MultipartContent,
        JsonContent,
        BinaryContent,
        MediaContent,
    ],
    Field(discriminator="content_type"),
]

CONTENT_VARIANTS = (
    TextContent,
    HtmlContent,
    TemplateContent,
    MultipartContent,
    JsonContent,
    BinaryContent,
    MediaContent,
)

_content_adapter: TypeAdapter[Any] = TypeAdapter(MessageContent)


def to_content(value: Any) -> MessageContent | None:
    """
    Convert loose input into a content variant.

    - ``None`` stays ``None``
    - a content variant is returned unchanged
    - ``str`` becomes ``TextContent``
    - ``bytes`` becomes ``BinaryContent``
    - a mapping is parsed by its ``content_type`` tag

    Raises:
        TypeError: For any other kind of value
        pydantic.ValidationError: For a mapping that is not a valid variant
    """
    if value is None:
        return None
    if isinstance(value, CONTENT_VARIANTS):
        return value
    if isinstance(value, str):
        return TextContent(text=value)
    if isinstance(value, (bytes, bytearray)):
        return BinaryContent(data=bytes(value))
    if isinstance(value, Mapping):
        return _content_adapter.validate_python(dict(value))
    raise TypeError(f"Cannot convert {type(value).__name__} to message content")


# =============================================================================
# Properties and message
# =============================================================================


class MessageProperty(BaseModel):
    name: str
    value: Any = None
    is_sensitive: bool = False

    model_config = ConfigDict(frozen=True)


_PROPERTY_KEYS = frozenset({"name", "value", "is_sensitive"})


def _is_property_table(value: Any) -> bool:
    """A mapping spelling out a MessageProperty, e.g. ``{"value": 3, "is_sensitive": true}``."""
    return isinstance(value, Mapping) and "value" in value and set(value) <= _PROPERTY_KEYS


class Message(BaseModel):
    """
    A message to validate.

    ``properties`` accepts either ``MessageProperty`` objects or raw values;
    raw values are wrapped on construction.
    """

    id: str = ""
    sender: Endpoint | None = None
    receiver: Endpoint | None = None
    content: MessageContent | None = None
    properties: dict[str, MessageProperty] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    @field_validator("content", mode="before")
    @classmethod
    def convert_content(cls, v: Any) -> Any:
        if isinstance(v, (str, bytes, bytearray)):
            return to_content(v)
        return v

    @field_validator("properties", mode="before")
    @classmethod
    def wrap_properties(cls, v: Any) -> Any:
        if v is None:
            return {}
        wrapped = {}
        for name, value in dict(v).items():
            if isinstance(value, MessageProperty):
                wrapped[name] = value
            elif _is_property_table(value):
                wrapped[name] = {**value, "name": name}
            else:
                wrapped[name] = MessageProperty(name=name, value=value)
        return wrapped

    def get_property(self, name: str) -> Any:
        """Return a property's value (case-insensitive), or None."""
        folded = name.casefold()
        for key, prop in self.properties.items():
            if key.casefold() == folded:
                return prop.value
        return None

    def property_values(self) -> dict[str, Any]:
        return {key: prop.value for key, prop in self.properties.items()}
