"""Shared CLI utilities for commands.

- Standardized exit codes
- Output formatters (JSON, YAML, TOML, Markdown table)
- Console helpers for error handling
"""

from enum import IntEnum
from typing import TYPE_CHECKING, Any, Never

if TYPE_CHECKING:
    from rich.console import Console

type FormattableData = dict[str, Any]

__all__ = [
    "ExitCode",
    "FormattableData",
    "exit_with_error",
    "format_json",
    "format_table",
    "format_toml",
    "format_yaml",
    "get_error_console",
]


class ExitCode(IntEnum):
    """Standard exit codes for fmedit CLI commands."""

    SUCCESS = 0
    LOAD_ERROR = 1
    VALIDATION_ERROR = 2
    NOT_FOUND = 3
    IO_ERROR = 4
    INTERNAL_ERROR = 5


def format_json(data: object, *, indent: bool = True) -> str:
    """Format data as JSON."""
    from fmedit.utils import dump_json  # noqa: PLC0415

    return dump_json(data, indent=indent)


def format_yaml(data: FormattableData) -> str:
    """Format data as YAML, keeping key order."""
    import yaml  # noqa: PLC0415

    return yaml.safe_dump(
        data, default_flow_style=False, allow_unicode=True, sort_keys=False
    )


def format_toml(data: FormattableData) -> str:
    """Format data as TOML."""
    import tomli_w  # noqa: PLC0415

    return tomli_w.dumps(data)


def format_table(headers: list[str], rows: list[list[str]]) -> str:
    """Format rows as a Markdown table.

    Args:
        headers: Column headers for the table.
        rows: List of rows, where each row is a list of cell values.
    """
    from pytablewriter import MarkdownTableWriter  # noqa: PLC0415

    writer = MarkdownTableWriter(
        headers=headers,
        value_matrix=rows,
        margin=1,
    )
    return writer.dumps()


def get_error_console() -> "Console":  # noqa: UP037
    """Get a Rich console writing to stderr."""
    from rich.console import Console  # noqa: PLC0415

    return Console(stderr=True)


def exit_with_error(
    message: str,
    code: ExitCode = ExitCode.INTERNAL_ERROR,
    *,
    console: "Console | None" = None,  # noqa: UP037
) -> Never:
    """Print an error message and exit with *code*.

    Raises:
        SystemExit: Always.
    """
    if console is None:
        console = get_error_console()

    console.print(f"[red]Error:[/red] {message}")
    raise SystemExit(code)
