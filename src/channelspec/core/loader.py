"""
Schema, settings and message files.

Files are TOML (``.toml``) or JSON (``.json``). The parsed document is handed
to pydantic, so a file uses the same field names as the models:

    channel_provider = "Twilio"
    channel_type = "SMS"
    version = "1.0.0"
    capabilities = ["send_messages", "receive_messages"]
    content_types = ["plain_text", "media"]
    authentication_configurations = ["basic"]

    [[parameters]]
    name = "AccountSid"
    is_required = true

    [[endpoints]]
    type = "phone_number"

Authentication configurations may be bare type names (expanded to the
flexible stock configuration) or full tables with ``alternatives``.
"""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .errors import SchemaLoadError, make_load_error
from .ir import ChannelSchema, Message
from .settings import ConnectionSettings

logger = logging.getLogger("channelspec.loader")

SUPPORTED_SUFFIXES = (".toml", ".json")


def read_document(path: Path | str) -> dict[str, Any]:
    """
    Read a TOML or JSON file into a dictionary.

    Raises:
        SchemaLoadError: If the file is missing, has an unsupported suffix,
            cannot be parsed or does not hold a table/object at top level
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise make_load_error(
            f"Unsupported file type '{suffix or path.name}'. "
            f"Expected one of: {', '.join(SUPPORTED_SUFFIXES)}",
            path,
        )

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise make_load_error(f"Cannot read file: {e.strerror or e}", path) from e

    try:
        data = tomllib.loads(text) if suffix == ".toml" else json.loads(text)
    except (tomllib.TOMLDecodeError, json.JSONDecodeError) as e:
        raise make_load_error(f"Malformed {suffix[1:].upper()}: {e}", path) from e

    if not isinstance(data, dict):
        raise make_load_error("Top-level value must be a table or object", path)
    return data


def _format_validation_error(error: ValidationError) -> str:
    lines = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "<root>"
        lines.append(f"{location}: {item['msg']}")
    return "; ".join(lines)


def load_schema(path: Path | str) -> ChannelSchema:
    """
    Load a channel schema file.

    Raises:
        SchemaLoadError: If the file cannot be read or is not a valid schema
    """
    path = Path(path)
    data = read_document(path)
    try:
        schema = ChannelSchema.model_validate(data)
    except ValidationError as e:
        raise make_load_error(f"Invalid channel schema: {_format_validation_error(e)}", path) from e

    logger.debug("Loaded schema %s from %s", str(schema), path)
    return schema


def load_settings(path: Path | str, schema: ChannelSchema | None = None) -> ConnectionSettings:
    """
    Load connection settings from a flat table of name/value pairs.

    A document holding a ``parameters`` table uses that table instead.
    Values are not checked here; run ``validate_connection_settings`` on
    the result.
    """
    path = Path(path)
    data = read_document(path)
    parameters = data.get("parameters", data)
    if not isinstance(parameters, dict):
        raise make_load_error("'parameters' must be a table or object", path, "parameters")
    return ConnectionSettings(parameters, schema=schema)


def load_message(path: Path | str) -> Message:
    """
    Load a message file.

    ``content`` may be a string (plain text) or a table with a
    ``content_type`` tag; ``properties`` maps names to raw values.

    Raises:
        SchemaLoadError: If the file cannot be read or is not a valid message
    """
    path = Path(path)
    data = read_document(path)
    try:
        return Message.model_validate(data)
    except ValidationError as e:
        raise make_load_error(f"Invalid message: {_format_validation_error(e)}", path) from e


__all__ = [
    "SchemaLoadError",
    "load_message",
    "load_schema",
    "load_settings",
    "read_document",
]
