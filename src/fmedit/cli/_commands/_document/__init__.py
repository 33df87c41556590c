"""Commands that read and edit front matter documents."""

from typing import TYPE_CHECKING

from ._read import FlattenFormat, ShowFormat, build_tree, flatten_command, show
from ._write import (
    add,
    add_item,
    merge,
    remove,
    remove_item,
    remove_path,
    rename,
    set_item,
    set_value,
)

if TYPE_CHECKING:
    from cyclopts import App

__all__ = [
    "FlattenFormat",
    "ShowFormat",
    "build_tree",
    "register_document_commands",
]


def register_document_commands(app: "App") -> None:  # noqa: UP037
    app.command(show, name="show")
    app.command(flatten_command, name="flatten")
    app.command(set_value, name="set")
    app.command(rename, name="rename")
    app.command(add, name="add")
    app.command(remove, name="remove")
    app.command(add_item, name="add-item")
    app.command(remove_item, name="remove-item")
    app.command(set_item, name="set-item")
    app.command(merge, name="merge")
    app.command(remove_path, name="remove-path")
