# ruff: noqa: A002, FBT002
"""Config commands for viewing fmedit configuration."""

from enum import StrEnum
from typing import Annotated

from cyclopts import App, Parameter

from fmedit.cli._commands._context import CLIContext
from fmedit.cli._commands._shared import (
    ExitCode,
    format_json,
    format_table,
    format_toml,
    format_yaml,
)
from fmedit.config import discover_sources, get_config_schema

app = App(name="config", help="View fmedit configuration")


class ConfigFormat(StrEnum):
    TOML = "toml"
    JSON = "json"
    YAML = "yaml"


@app.command(name="show")
def _show(
    *,
    format: Annotated[
        ConfigFormat,
        Parameter(name=["--format", "-f"], help="Output format"),
    ] = ConfigFormat.TOML,
    defaults: Annotated[
        bool,
        Parameter(name="--defaults", help="Include values equal to the defaults"),
    ] = False,
) -> None:
    """Show the effective configuration"""
    ctx = CLIContext.get_current()
    data = ctx.config.to_dict(include_defaults=defaults)

    match format:
        case ConfigFormat.TOML:
            output = format_toml(data)
        case ConfigFormat.JSON:
            output = format_json(data)
        case ConfigFormat.YAML:
            output = format_yaml(data)

    print(output.rstrip())  # noqa: T201
    raise SystemExit(ExitCode.SUCCESS)


@app.command(name="sources")
def _sources() -> None:
    """List configuration sources in precedence order"""
    ctx = CLIContext.get_current()
    rows = [
        [
            source.name.value,
            str(source.path) if source.path else "",
            "yes" if source.exists else "no",
        ]
        for source in discover_sources(project_root=ctx.project_root)
    ]
    print(format_table(["Source", "Path", "Exists"], rows))  # noqa: T201
    raise SystemExit(ExitCode.SUCCESS)


@app.command(name="schema")
def _schema(
    *,
    strict: Annotated[
        bool,
        Parameter(name="--strict", help="Schema that rejects unknown keys"),
    ] = False,
) -> None:
    """Print the JSON Schema of configuration files"""
    print(format_json(get_config_schema(strict=strict)))  # noqa: T201
    raise SystemExit(ExitCode.SUCCESS)


__all__ = ["ConfigFormat", "app"]
