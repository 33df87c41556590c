"""Common configuration types.

Enums shared by the configuration sections and the source metadata record
produced during discovery.
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pathlib import Path


class LogLevel(StrEnum):
    """Log level threshold values, most verbose first."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LogFormat(StrEnum):
    """Log output format values."""

    JSON = "json"
    TEXT = "text"


class ConfigSourceName(StrEnum):
    """Configuration source names, highest precedence first."""

    CLI = "cli"
    ENV = "env"
    WORKTREE = "worktree"
    PROJECT = "project"
    USER = "user"
    DEFAULT = "default"


@dataclass(frozen=True, slots=True)
class ConfigSource:
    """A configuration source.

    Attributes:
        name: The source type identifier.
        path: Path to the config file, or None for CLI, ENV and DEFAULT.
        exists: Whether the file exists (or, for non-file sources, whether
            values are present).
        values: Configuration values from this source.
    """

    name: ConfigSourceName
    path: "Path | None"  # noqa: UP037
    exists: bool
    values: dict[str, Any]
