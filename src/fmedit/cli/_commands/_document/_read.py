# ruff: noqa: TC003
"""Read-only document commands."""

from enum import StrEnum
from pathlib import Path
from typing import Annotated

from cyclopts import Parameter
from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from fmedit.cli._commands._shared import ExitCode, format_json, format_table
from fmedit.document import (
    Leaf,
    List,
    ScalarType,
    Section,
    decode,
    display_order,
    flatten,
)
from fmedit.storage import dump_yaml

from ._common import load_stored


class ShowFormat(StrEnum):
    TREE = "tree"
    JSON = "json"
    YAML = "yaml"


class FlattenFormat(StrEnum):
    PLAIN = "plain"
    TABLE = "table"
    JSON = "json"


def _leaf_label(key: str, leaf: Leaf) -> str:
    label = f"[bold]{escape(key)}[/bold]: {escape(leaf.value)}"
    if leaf.scalar is not ScalarType.STRING:
        label += f" [dim]({leaf.scalar.value})[/dim]"
    return label


def _add_section(tree: Tree, section: Section) -> None:
    for key, node in display_order(section):
        match node:
            case Leaf():
                _ = tree.add(_leaf_label(key, node))
            case List():
                branch = tree.add(f"[bold]{escape(key)}[/bold] [dim][{len(node)}][/dim]")
                for index, item in enumerate(node.items):
                    _ = branch.add(f"[dim]{index}[/dim] {escape(item)}")
            case Section():
                _add_section(tree.add(f"[bold]{escape(key)}[/bold]"), node)


def build_tree(label: str, section: Section) -> Tree:
    """Render *section* as a rich Tree in display order."""
    tree = Tree(escape(label))
    _add_section(tree, section)
    return tree


def show(
    file: Path,
    /,
    *,
    format: Annotated[  # noqa: A002
        ShowFormat,
        Parameter(name=["--format", "-f"], help="Output format"),
    ] = ShowFormat.TREE,
) -> None:
    """Show the front matter of a file

    The tree view groups plain fields before arrays before sections and
    sorts by key within each group; the stored order is not changed.
    """
    stored = load_stored(file)

    match format:
        case ShowFormat.TREE:
            Console().print(build_tree(str(file), decode(stored.wire)))
        case ShowFormat.JSON:
            print(format_json(stored.wire))  # noqa: T201
        case ShowFormat.YAML:
            print(dump_yaml(stored.wire).rstrip())  # noqa: T201

    raise SystemExit(ExitCode.SUCCESS)


def flatten_command(
    file: Path,
    /,
    *,
    format: Annotated[  # noqa: A002
        FlattenFormat,
        Parameter(name=["--format", "-f"], help="Output format"),
    ] = FlattenFormat.PLAIN,
) -> None:
    """List scalar fields as dot-notation pairs

    Arrays and null values are skipped.
    """
    pairs = flatten(decode(load_stored(file).wire))

    match format:
        case FlattenFormat.PLAIN:
            for key, value in pairs:
                print(f"{key}: {value}")  # noqa: T201
        case FlattenFormat.TABLE:
            print(format_table(["Key", "Value"], [[k, v] for k, v in pairs]))  # noqa: T201
        case FlattenFormat.JSON:
            print(format_json(dict(pairs)))  # noqa: T201

    raise SystemExit(ExitCode.SUCCESS)
