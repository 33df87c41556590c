"""fmedit CLI commands."""

from typing import TYPE_CHECKING

from ._config import app as config_app
from ._context import CLIContext
from ._document import register_document_commands
from ._shared import (
    ExitCode,
    FormattableData,
    exit_with_error,
    format_json,
    format_table,
    format_toml,
    format_yaml,
    get_error_console,
)

if TYPE_CHECKING:
    from cyclopts import App

__all__ = [
    "CLIContext",
    "ExitCode",
    "FormattableData",
    "config_app",
    "exit_with_error",
    "format_json",
    "format_table",
    "format_toml",
    "format_yaml",
    "get_error_console",
    "register_commands",
]


def register_commands(app: "App") -> None:  # noqa: UP037
    register_document_commands(app)
    app.command(config_app)
