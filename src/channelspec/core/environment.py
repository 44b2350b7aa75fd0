"""
Environment configuration for channelspec.

All settings come from environment variables and fall back to safe
defaults, so the library works without any configuration.

Variables:
    CHANNELSPEC_STRICT: "true" (default) or "false". Strictness of schemas
        that do not set ``is_strict`` explicitly.
    CHANNELSPEC_LOG_LEVEL: Logging level name for ``setup_logging`` (default INFO).
    CHANNELSPEC_LOG_FORMAT: "console" (default) or "jsonl".

Usage:
    from channelspec.core.environment import default_strict_mode, get_log_format

    if get_log_format() == LogFormat.JSONL:
        ...
"""

from __future__ import annotations

import logging
import os
from enum import StrEnum


class LogFormat(StrEnum):
    """Log output formats."""

    CONSOLE = "console"
    JSONL = "jsonl"


STRICT_ENV_VAR = "CHANNELSPEC_STRICT"
LOG_LEVEL_ENV_VAR = "CHANNELSPEC_LOG_LEVEL"
LOG_FORMAT_ENV_VAR = "CHANNELSPEC_LOG_FORMAT"

_DEFAULT_LOG_LEVEL = "INFO"
_DEFAULT_LOG_FORMAT = LogFormat.CONSOLE

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def default_strict_mode() -> bool:
    """Get the default schema strictness from CHANNELSPEC_STRICT.

    Returns:
        bool: True unless the variable holds a false-like value.
        Unknown values log a warning and keep the default.
    """
    value = os.environ.get(STRICT_ENV_VAR, "").lower().strip()

    if value == "" or value in _TRUE_VALUES:
        return True
    elif value in _FALSE_VALUES:
        return False
    else:
        logging.getLogger(__name__).warning(
            "Unknown %s value '%s'. Valid values: true, false. Defaulting to true.",
            STRICT_ENV_VAR,
            value,
        )
        return True


def get_log_level() -> str:
    """Get the log level name from CHANNELSPEC_LOG_LEVEL (default INFO)."""
    value = os.environ.get(LOG_LEVEL_ENV_VAR, "").upper().strip()
    if not value:
        return _DEFAULT_LOG_LEVEL
    if not isinstance(logging.getLevelName(value), int):
        logging.getLogger(__name__).warning(
            "Unknown %s value '%s'. Defaulting to %s.",
            LOG_LEVEL_ENV_VAR,
            value,
            _DEFAULT_LOG_LEVEL,
        )
        return _DEFAULT_LOG_LEVEL
    return value


def get_log_format() -> LogFormat:
    """Get the log output format from CHANNELSPEC_LOG_FORMAT."""
    value = os.environ.get(LOG_FORMAT_ENV_VAR, "").lower().strip()
    if not value:
        return _DEFAULT_LOG_FORMAT
    try:
        return LogFormat(value)
    except ValueError:
        logging.getLogger(__name__).warning(
            "Unknown %s value '%s'. Valid values: console, jsonl. Defaulting to console.",
            LOG_FORMAT_ENV_VAR,
            value,
        )
        return _DEFAULT_LOG_FORMAT


def get_environment_info() -> dict[str, str | bool]:
    """Summary of the effective configuration, for debugging and the CLI."""
    return {
        "strict_default": default_strict_mode(),
        "log_level": get_log_level(),
        "log_format": get_log_format().value,
    }
