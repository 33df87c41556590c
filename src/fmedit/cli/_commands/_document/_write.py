# ruff: noqa: TC003, FBT002
"""Document editing commands.

Each command opens a session on the file, applies one mutation, writes the
document back (unless --dry-run) and prints the change event as JSON.
"""

from pathlib import Path
from typing import Annotated

import orjson
from cyclopts import Parameter

from fmedit.cli._commands._shared import ExitCode, exit_with_error
from fmedit.document import (
    AddField,
    AddListItem,
    FieldKind,
    MergeFields,
    RemoveAtPath,
    RemoveField,
    RemoveListItem,
    RenameKey,
    Scalar,
    SetLeaf,
    SetListItem,
)

from ._common import key_path, mixed_path, open_session, run_mutation

DryRun = Annotated[
    bool,
    Parameter(name="--dry-run", help="Print the change without writing the file"),
]


def _parse_json_scalar(text: str) -> Scalar:
    try:
        value = orjson.loads(text)
    except orjson.JSONDecodeError:
        exit_with_error(f"Not a JSON value: {text}", ExitCode.VALIDATION_ERROR)
    if isinstance(value, (dict, list)):
        exit_with_error("Value must be a JSON scalar", ExitCode.VALIDATION_ERROR)
    return value


def set_value(
    file: Path,
    path: str,
    value: str,
    /,
    *,
    json: Annotated[
        bool,
        Parameter(name="--json", help="Parse VALUE as a JSON scalar (42, true, null)"),
    ] = False,
    dry_run: DryRun = False,
) -> None:
    """Set the value of a field

    Text keeps the field's current type when it is still valid for it
    (so "43" on a number stays a number); otherwise the field becomes text.
    """
    session, stored = open_session(file, command="set")
    scalar: Scalar = _parse_json_scalar(value) if json else value
    run_mutation(session, stored, SetLeaf(key_path(path), scalar), dry_run=dry_run)


def rename(
    file: Path,
    section: str,
    old_key: str,
    new_key: str,
    /,
    *,
    dry_run: DryRun = False,
) -> None:
    """Rename a key, keeping its position"""
    session, stored = open_session(file, command="rename")
    mutation = RenameKey(key_path(section), old_key, new_key)
    run_mutation(session, stored, mutation, dry_run=dry_run)


def add(
    file: Path,
    section: str,
    kind: FieldKind,
    /,
    *,
    key: Annotated[
        str | None,
        Parameter(name=["--key", "-k"], help="Key to use instead of the placeholder"),
    ] = None,
    dry_run: DryRun = False,
) -> None:
    """Add an empty field, array or section

    The entry is appended under a placeholder key (new_field, new_array,
    new_section by default), numbered when the key is already taken.
    """
    session, stored = open_session(file, command="add")
    mutation = AddField(key_path(section), kind, base_name=key)
    run_mutation(session, stored, mutation, dry_run=dry_run)


def remove(
    file: Path,
    section: str,
    key: str,
    /,
    *,
    dry_run: DryRun = False,
) -> None:
    """Remove a key from a section"""
    session, stored = open_session(file, command="remove")
    run_mutation(
        session, stored, RemoveField(key_path(section), key), dry_run=dry_run
    )


def add_item(
    file: Path,
    path: str,
    /,
    *,
    dry_run: DryRun = False,
) -> None:
    """Append an empty item to an array"""
    session, stored = open_session(file, command="add-item")
    run_mutation(session, stored, AddListItem(key_path(path)), dry_run=dry_run)


def remove_item(
    file: Path,
    path: str,
    index: int,
    /,
    *,
    dry_run: DryRun = False,
) -> None:
    """Remove an item from an array"""
    session, stored = open_session(file, command="remove-item")
    mutation = RemoveListItem(key_path(path), index)
    run_mutation(session, stored, mutation, dry_run=dry_run)


def set_item(
    file: Path,
    path: str,
    index: int,
    value: str,
    /,
    *,
    dry_run: DryRun = False,
) -> None:
    """Replace an item of an array"""
    session, stored = open_session(file, command="set-item")
    mutation = SetListItem(key_path(path), index, value)
    run_mutation(session, stored, mutation, dry_run=dry_run)


def merge(
    file: Path,
    fields: str,
    /,
    *,
    dry_run: DryRun = False,
) -> None:
    """Merge a JSON object into the top level

    Existing keys are replaced in place; new keys are appended.
    """
    try:
        data = orjson.loads(fields)
    except orjson.JSONDecodeError as e:
        exit_with_error(f"Invalid JSON: {e}", ExitCode.VALIDATION_ERROR)
    if not isinstance(data, dict):
        exit_with_error("FIELDS must be a JSON object", ExitCode.VALIDATION_ERROR)

    session, stored = open_session(file, command="merge")
    run_mutation(session, stored, MergeFields(data), dry_run=dry_run)


def remove_path(
    file: Path,
    path: str,
    /,
    *,
    dry_run: DryRun = False,
) -> None:
    """Remove whatever a path points at

    Components after an array are item indexes, e.g. inventory.items.0.
    """
    session, stored = open_session(file, command="remove-path")
    mutation = RemoveAtPath(mixed_path(session.document, path))
    run_mutation(session, stored, mutation, dry_run=dry_run)
