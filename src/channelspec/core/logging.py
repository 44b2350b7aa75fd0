"""
Logging setup for channelspec.

Library modules log through ``logging.getLogger("channelspec.<module>")`` and
never configure handlers themselves. Applications (and the CLI) call
``setup_logging`` to attach one of two formatters to the ``channelspec``
logger:

- console: short human-readable lines, coloured when writing to a terminal
- jsonl: one JSON object per line, for log shippers and agents

Level and format default to the CHANNELSPEC_LOG_LEVEL and
CHANNELSPEC_LOG_FORMAT environment variables.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, TextIO

from .environment import LogFormat, get_log_format, get_log_level

ROOT_LOGGER_NAME = "channelspec"

# =============================================================================
# Terminal Colors (respects NO_COLOR)
# =============================================================================


def _use_color(stream: TextIO) -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


class Colors:
    """ANSI color codes for terminal output."""

    RESET = "\033[0m"
    DIM = "\033[2m"
    COMPONENT = "\033[35m"  # Magenta

    DEBUG = "\033[36m"  # Cyan
    INFO = "\033[32m"  # Green
    WARNING = "\033[33m"  # Yellow
    ERROR = "\033[31m"  # Red
    CRITICAL = "\033[35m"  # Magenta


def _component(record: logging.LogRecord) -> str:
    """``channelspec.registry`` -> ``registry``."""
    explicit = getattr(record, "component", None)
    if explicit:
        return str(explicit)
    prefix = ROOT_LOGGER_NAME + "."
    if record.name.startswith(prefix):
        return record.name[len(prefix) :]
    return record.name


# =============================================================================
# Formatters
# =============================================================================


class JSONLFormatter(logging.Formatter):
    """
    Formats log records as JSON Lines.

    Each entry is a single JSON object containing:
    - timestamp: ISO 8601, UTC
    - level: DEBUG, INFO, WARNING, ERROR, CRITICAL
    - component: logger name below ``channelspec``
    - message: the formatted log message
    - context: the ``context`` extra, when given
    - source: file/line/function for warnings and above
    - exception: type and message when exception info is attached

    Example output:
    {"timestamp":"2025-01-15T10:30:45.123000Z","level":"WARNING","component":"registry","message":"Rejected runtime schema ..."}
    """

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: dict[str, Any] = {
            "timestamp": timestamp.strftime("%Y-%m-%dT%H:%M:%S.%fZ"),
            "level": record.levelname,
            "component": _component(record),
            "message": record.getMessage(),
        }

        context = getattr(record, "context", None)
        if context:
            entry["context"] = context

        if record.levelno >= logging.WARNING:
            source_info: dict[str, Any] = {}
            if record.pathname:
                source_info["file"] = record.pathname
            if record.lineno:
                source_info["line"] = record.lineno
            if record.funcName and record.funcName != "<module>":
                source_info["function"] = record.funcName
            if source_info:
                entry["source"] = source_info

        if record.exc_info and record.exc_info[0]:
            entry["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
            }

        return json.dumps(entry, default=str)


class ConsoleFormatter(logging.Formatter):
    """Human-readable formatter for console output."""

    LEVEL_COLORS = {
        logging.DEBUG: Colors.DEBUG,
        logging.INFO: Colors.INFO,
        logging.WARNING: Colors.WARNING,
        logging.ERROR: Colors.ERROR,
        logging.CRITICAL: Colors.CRITICAL,
    }

    def __init__(self, color: bool = False):
        super().__init__()
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        component = _component(record)
        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")

        if self.color:
            prefix = (
                f"{Colors.DIM}{timestamp}{Colors.RESET} "
                f"{Colors.COMPONENT}[{component}]{Colors.RESET}"
            )
        else:
            prefix = f"[{timestamp}] [{component}]"

        # INFO lines carry no level tag
        if record.levelno != logging.INFO:
            level_name = record.levelname
            if self.color:
                level_color = self.LEVEL_COLORS.get(record.levelno, "")
                level_name = f"{level_color}{level_name}{Colors.RESET}"
            prefix = f"{prefix} {level_name}:"

        message = f"{prefix} {record.getMessage()}"
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return message


# =============================================================================
# Logger Setup
# =============================================================================


def setup_logging(
    level: int | str | None = None,
    fmt: LogFormat | str | None = None,
    stream: TextIO | None = None,
    log_file: Path | str | None = None,
    max_bytes: int = 5 * 1024 * 1024,  # 5MB
    backup_count: int = 3,
) -> logging.Logger:
    """
    Configure the ``channelspec`` logger.

    Replaces any handlers installed by a previous call.

    Args:
        level: Minimum level (defaults to CHANNELSPEC_LOG_LEVEL)
        fmt: "console" or "jsonl" for the stream handler (defaults to
            CHANNELSPEC_LOG_FORMAT)
        stream: Stream for the handler (defaults to stderr)
        log_file: Optional file receiving JSONL output with rotation
        max_bytes: Max size per log file before rotation
        backup_count: Number of rotated files to keep

    Returns:
        The configured ``channelspec`` logger
    """
    if level is None:
        level = get_log_level()
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    log_format = LogFormat(fmt) if fmt is not None else get_log_format()
    stream = stream if stream is not None else sys.stderr

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    stream_handler = logging.StreamHandler(stream)
    if log_format is LogFormat.JSONL:
        stream_handler.setFormatter(JSONLFormatter())
    else:
        stream_handler.setFormatter(ConsoleFormatter(color=_use_color(stream)))
    stream_handler.setLevel(level)
    logger.addHandler(stream_handler)

    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(JSONLFormatter())
        file_handler.setLevel(level)
        logger.addHandler(file_handler)

    logger.debug(
        "Logging initialized",
        extra={"context": {"log_format": log_format.value, "log_file": str(log_file or "")}},
    )
    return logger
