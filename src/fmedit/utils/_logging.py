"""Logging utilities for fmedit.

This module provides standalone structlog logger factories that write
JSON-formatted or text-formatted logs to a file or to stderr. Each logger is
self-contained and does not modify global structlog configuration.
"""

import logging
import sys
from os import getenv
from pathlib import Path
from typing import TYPE_CHECKING, Literal, TextIO, cast

import structlog

from ._paths import get_fmedit_cli_log_file

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

LogFormatType = Literal["json", "text"]


def _get_log_level() -> int:
    """Get the log level from environment variables.

    Checks FMEDIT_DEBUG first (sets DEBUG if present), then FMEDIT_LOG_LEVEL.
    Defaults to INFO if neither is set.

    Returns:
        The logging level as an integer.
    """
    if getenv("FMEDIT_DEBUG", None):
        return logging.DEBUG

    log_levels = logging.getLevelNamesMapping()
    return log_levels.get(getenv("FMEDIT_LOG_LEVEL", "info").upper(), logging.INFO)


def _log_level_from_string(level: str, *, respect_env: bool = False) -> int:
    """Convert a log level string to a logging level integer.

    Args:
        level: Log level string (debug, info, warning, error).
        respect_env: If True, FMEDIT_DEBUG overrides to DEBUG level.

    Returns:
        The logging level as an integer.
    """
    if respect_env and getenv("FMEDIT_DEBUG", None):
        return logging.DEBUG

    log_levels = logging.getLevelNamesMapping()
    return log_levels.get(level.upper(), logging.INFO)


def _create_logger(
    stream: TextIO,
    *,
    log_level: int | None = None,
    log_format: LogFormatType = "json",
) -> "FilteringBoundLogger":  # noqa: UP037
    """Create a standalone structlog logger writing to *stream*.

    Args:
        stream: Open text stream receiving one line per event.
        log_level: Override log level (uses env vars if not specified).
        log_format: Output format, either "json" or "text".

    Returns:
        A configured FilteringBoundLogger instance.
    """
    effective_level = log_level if log_level is not None else _get_log_level()

    processors: list[structlog.typing.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if log_format == "json":
        # Add dict_tracebacks for structured exception logging in JSON
        processors.append(structlog.processors.dict_tracebacks)
        processors.append(structlog.processors.JSONRenderer())
    else:
        # Text format: "timestamp [level] event key=value ..."
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    wrapper_class = structlog.make_filtering_bound_logger(effective_level)

    # wrap_logger builds a standalone logger without touching global config
    return cast(
        "FilteringBoundLogger",
        structlog.wrap_logger(
            structlog.WriteLogger(file=stream),
            processors=processors,
            wrapper_class=wrapper_class,
            context_class=dict,
        ),
    )


def create_logger(
    *,
    level: str | None = None,
    log_format: LogFormatType = "json",
    log_file: str | Path | None = None,
) -> "FilteringBoundLogger":  # noqa: UP037
    """Create a logger for the editing engine.

    The log level is determined by (in order of precedence):
    1. FMEDIT_DEBUG environment variable (if set, enables DEBUG level)
    2. The `level` parameter (if provided)
    3. FMEDIT_LOG_LEVEL environment variable
    4. Default: INFO

    Args:
        level: Optional log level string (debug, info, warning, error).
        log_format: Output format, either "json" or "text".
        log_file: Path to a log file opened in append mode. None writes to
            stderr.

    Returns:
        A FilteringBoundLogger instance.
    """
    effective_level: int | None = None
    if level is not None:
        effective_level = _log_level_from_string(level, respect_env=True)

    if log_file is None:
        return _create_logger(
            sys.stderr, log_level=effective_level, log_format=log_format
        )

    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    return _create_logger(
        log_path.open("a", encoding="utf-8"),
        log_level=effective_level,
        log_format=log_format,
    )


def create_cli_logger(
    *,
    level: str = "info",
    log_format: LogFormatType = "json",
    log_file: str = "",
    command: str = "",
) -> "FilteringBoundLogger":  # noqa: UP037
    """Create a logger for CLI commands.

    Writes structured logs to the specified file, or to the default CLI log
    file in the platform log directory when none is given. The command name
    is bound to all log entries.

    Args:
        level: Log level threshold (debug, info, warning, error).
        log_format: Output format, either "json" or "text".
        log_file: Path to log file (uses the default if empty).
        command: Name of the CLI command for context.

    Returns:
        A FilteringBoundLogger instance configured for CLI logging.
    """
    effective_file = log_file if log_file else str(get_fmedit_cli_log_file())
    logger = create_logger(level=level, log_format=log_format, log_file=effective_file)

    if command:
        return logger.bind(command=command)
    return logger
