"""Pure mutation functions over document trees.

Every operation takes the current document and returns a MutationResult with
the new document and a Change describing what happened, or ``change=None``
when the call was a no-op. Inputs are never modified; only the sections
along the edited path are rebuilt.

Change descriptors always name the node whose value changed: the leaf for
leaf edits, the list for item edits, and the enclosing section for
structural edits (add, remove, rename, merge). ``old_value`` and
``new_value`` are that node before and after the edit.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from typing import cast

from fmedit.document._codec import WireValue, decode_value, encode_value
from fmedit.document._keys import (
    DEFAULT_MAX_PROBES,
    allocate_unique_key,
    is_unique,
    is_valid_key,
    normalize_key,
)
from fmedit.document._nodes import (
    Document,
    Leaf,
    List,
    Scalar,
    Section,
    ValueNode,
    node_kind,
)
from fmedit.document._paths import (
    KeyPath,
    replace,
    resolve,
    resolve_leaf,
    resolve_list,
    resolve_section,
    with_field,
    without_field,
)
from fmedit.exceptions import (
    DuplicateKeyError,
    IndexOutOfRangeError,
    InvalidKeyError,
    InvalidPathError,
    NotAListError,
    NotASectionError,
    PathNotFoundError,
)

# =============================================================================
# Result Types
# =============================================================================


class ChangeKind(StrEnum):
    """Kind of edit a Change describes."""

    SET_LEAF = "set_leaf"
    RENAME_KEY = "rename_key"
    ADD_LIST_ITEM = "add_list_item"
    REMOVE_LIST_ITEM = "remove_list_item"
    SET_LIST_ITEM = "set_list_item"
    ADD_FIELD = "add_field"
    REMOVE_FIELD = "remove_field"
    MERGE_FIELDS = "merge_fields"
    REMOVE_AT_PATH = "remove_at_path"


class FieldKind(StrEnum):
    """Kind of entry created by add_field."""

    FIELD = "field"
    ARRAY = "array"
    SECTION = "section"


DEFAULT_PLACEHOLDER_KEYS: Mapping[FieldKind, str] = {
    FieldKind.FIELD: "new_field",
    FieldKind.ARRAY: "new_array",
    FieldKind.SECTION: "new_section",
}
"""Placeholder key bases used when adding entries."""


def _encode_optional(node: ValueNode | None) -> WireValue:
    return None if node is None else encode_value(node)


@dataclass(frozen=True, slots=True)
class Change:
    """Description of a successful edit.

    Attributes:
        kind: The operation that produced the change.
        path: Path of the node whose value changed.
        old_value: That node before the edit (None if it did not exist).
        new_value: That node after the edit (None if it was removed).
        detail: Operation-specific extras (keys, indexes).
    """

    kind: ChangeKind
    path: tuple[str | int, ...]
    old_value: ValueNode | None
    new_value: ValueNode | None
    detail: Mapping[str, object] = field(default_factory=dict)

    def to_event(self) -> dict[str, object]:
        """Return the notification payload in wire form."""
        return {
            "path": list(self.path),
            "oldValue": _encode_optional(self.old_value),
            "newValue": _encode_optional(self.new_value),
        }


@dataclass(frozen=True, slots=True)
class MutationResult:
    """A new document and the change that produced it."""

    document: Document
    change: Change | None = None

    @property
    def changed(self) -> bool:
        """Whether the mutation altered the document."""
        return self.change is not None


def _check_index(lst: List, path: KeyPath, index: int) -> None:
    if not 0 <= index < len(lst.items):
        raise IndexOutOfRangeError(path=path, index=index, length=len(lst.items))


# =============================================================================
# Leaf Operations
# =============================================================================


def set_leaf(document: Document, path: KeyPath, new_value: Scalar) -> MutationResult:
    """Replace the value of the leaf at *path*.

    Text keeps the leaf's scalar type when it is still valid for it. Setting
    the current value is a no-op.

    Raises:
        NotALeafError: If *path* does not address a leaf.
    """
    leaf = resolve_leaf(document, path)
    updated = leaf.with_value(new_value)
    if updated == leaf:
        return MutationResult(document)
    return MutationResult(
        replace(document, path, updated),
        Change(ChangeKind.SET_LEAF, tuple(path), leaf, updated),
    )


# =============================================================================
# Key Operations
# =============================================================================


def rename_key(
    document: Document,
    section_path: KeyPath,
    old_key: str,
    new_key: str,
) -> MutationResult:
    """Rename *old_key* to the trimmed *new_key*, keeping its position.

    Raises:
        InvalidKeyError: If *new_key* is empty after trimming.
        PathNotFoundError: If *old_key* is not in the section.
        DuplicateKeyError: If another entry already uses the new key.
    """
    if not is_valid_key(new_key):
        msg = "Key must not be empty"
        raise InvalidKeyError(msg, key=new_key)
    key = normalize_key(new_key)

    section = resolve_section(document, section_path)
    if old_key not in section.fields:
        msg = f"Key {old_key!r} not found"
        raise PathNotFoundError(msg, path=(*section_path, old_key))
    if key == old_key:
        return MutationResult(document)
    if not is_unique(section, key, excluding_key=old_key):
        msg = f"Key {key!r} already exists"
        raise DuplicateKeyError(msg, key=key)

    renamed = Section(
        {(key if k == old_key else k): v for k, v in section.fields.items()}
    )
    return MutationResult(
        replace(document, section_path, renamed),
        Change(
            ChangeKind.RENAME_KEY,
            tuple(section_path),
            section,
            renamed,
            {"old_key": old_key, "new_key": key},
        ),
    )


# =============================================================================
# List Operations
# =============================================================================


def add_list_item(document: Document, list_path: KeyPath) -> MutationResult:
    """Append an empty-string item to the list at *list_path*.

    Raises:
        NotAListError: If *list_path* does not address a list.
    """
    lst = resolve_list(document, list_path)
    updated = List((*lst.items, ""))
    return MutationResult(
        replace(document, list_path, updated),
        Change(
            ChangeKind.ADD_LIST_ITEM,
            tuple(list_path),
            lst,
            updated,
            {"index": len(lst.items)},
        ),
    )


def remove_list_item(
    document: Document, list_path: KeyPath, index: int
) -> MutationResult:
    """Remove the item at *index*. Removing the last item leaves an empty list.

    Raises:
        NotAListError: If *list_path* does not address a list.
        IndexOutOfRangeError: If *index* is outside the list.
    """
    lst = resolve_list(document, list_path)
    _check_index(lst, list_path, index)
    updated = List(lst.items[:index] + lst.items[index + 1 :])
    return MutationResult(
        replace(document, list_path, updated),
        Change(
            ChangeKind.REMOVE_LIST_ITEM,
            tuple(list_path),
            lst,
            updated,
            {"index": index, "removed": lst.items[index]},
        ),
    )


def set_list_item(
    document: Document, list_path: KeyPath, index: int, new_value: str
) -> MutationResult:
    """Replace the item at *index*. Setting the current value is a no-op.

    Raises:
        NotAListError: If *list_path* does not address a list.
        IndexOutOfRangeError: If *index* is outside the list.
    """
    lst = resolve_list(document, list_path)
    _check_index(lst, list_path, index)
    if lst.items[index] == new_value:
        return MutationResult(document)
    items = list(lst.items)
    items[index] = new_value
    updated = List(tuple(items))
    return MutationResult(
        replace(document, list_path, updated),
        Change(
            ChangeKind.SET_LIST_ITEM,
            tuple(list_path),
            lst,
            updated,
            {"index": index},
        ),
    )


# =============================================================================
# Section Operations
# =============================================================================


def _empty_node(kind: FieldKind) -> ValueNode:
    match kind:
        case FieldKind.FIELD:
            return Leaf()
        case FieldKind.ARRAY:
            return List()
        case FieldKind.SECTION:
            return Section()


def add_field(
    document: Document,
    section_path: KeyPath,
    kind: FieldKind,
    *,
    base_name: str | None = None,
    max_probes: int = DEFAULT_MAX_PROBES,
) -> MutationResult:
    """Append an empty field, array or section under a placeholder key.

    Args:
        document: The current document.
        section_path: Path of the section receiving the entry.
        kind: What to create.
        base_name: Placeholder key base; defaults by kind
            (``new_field``, ``new_array``, ``new_section``).
        max_probes: Suffix probe limit for key allocation.

    Raises:
        NotASectionError: If *section_path* does not address a section.
        KeyAllocationError: If no placeholder key is free.
    """
    kind = FieldKind(kind)
    section = resolve_section(document, section_path)
    key = allocate_unique_key(
        section,
        base_name or DEFAULT_PLACEHOLDER_KEYS[kind],
        max_probes=max_probes,
    )
    updated = with_field(section, key, _empty_node(kind))
    return MutationResult(
        replace(document, section_path, updated),
        Change(
            ChangeKind.ADD_FIELD,
            tuple(section_path),
            section,
            updated,
            {"key": key, "field_kind": kind.value},
        ),
    )


def remove_field(document: Document, section_path: KeyPath, key: str) -> MutationResult:
    """Delete *key* from the section. A missing key is a no-op.

    Raises:
        NotASectionError: If *section_path* does not address a section.
    """
    section = resolve_section(document, section_path)
    if key not in section.fields:
        return MutationResult(document)
    updated = without_field(section, key)
    return MutationResult(
        replace(document, section_path, updated),
        Change(
            ChangeKind.REMOVE_FIELD,
            tuple(section_path),
            section,
            updated,
            {"key": key},
        ),
    )


def merge_fields(document: Document, wire: Mapping[str, WireValue]) -> MutationResult:
    """Shallow-merge a wire object into the root section.

    Existing keys are replaced in place; new keys are appended in wire order.
    Keys are trimmed before use.

    Raises:
        InvalidKeyError: If any incoming key is empty after trimming.
    """
    fields = dict(document.fields)
    for raw_key, raw_value in wire.items():
        if not is_valid_key(raw_key):
            msg = "Key must not be empty"
            raise InvalidKeyError(msg, key=raw_key)
        key = normalize_key(raw_key)
        fields[key] = decode_value(raw_value, path=(key,))
    merged = Section(fields)
    if merged == document:
        return MutationResult(document)
    return MutationResult(
        merged,
        Change(
            ChangeKind.MERGE_FIELDS,
            (),
            document,
            merged,
            {"keys": [normalize_key(k) for k in wire]},
        ),
    )


# =============================================================================
# Mixed Path Removal
# =============================================================================


def _remove(
    node: ValueNode,
    path: Sequence[str | int],
    walked: tuple[str | int, ...],
) -> ValueNode:
    component, rest = path[0], path[1:]
    if isinstance(node, Section):
        if not isinstance(component, str):
            raise NotAListError(path=walked, actual="section")
        if component not in node.fields:
            msg = f"Key {component!r} not found"
            raise PathNotFoundError(msg, path=(*walked, component))
        if not rest:
            return without_field(node, component)
        child = _remove(node.fields[component], rest, (*walked, component))
        return with_field(node, component, child)
    if isinstance(node, List):
        if isinstance(component, str):
            raise NotASectionError(path=walked, actual="list")
        if rest:
            raise NotASectionError(path=(*walked, component), actual="item")
        if not 0 <= component < len(node.items):
            raise IndexOutOfRangeError(
                path=walked, index=component, length=len(node.items)
            )
        return List(node.items[:component] + node.items[component + 1 :])
    if isinstance(component, str):
        raise NotASectionError(path=walked, actual=node_kind(node))
    raise NotAListError(path=walked, actual=node_kind(node))


def remove_at_path(document: Document, path: Sequence[str | int]) -> MutationResult:
    """Remove the entry addressed by a mixed key/index path.

    String components address section keys; integer components address
    list items.

    Raises:
        InvalidPathError: If *path* is empty.
        PathNotFoundError: If a key does not exist.
        IndexOutOfRangeError: If an index is outside its list.
        NotAListError: If an index is applied to a section or leaf.
        NotASectionError: If a key is applied to a list or leaf.
    """
    if not path:
        msg = "Path cannot be empty"
        raise InvalidPathError(msg, path=path)
    updated = cast("Section", _remove(document, path, ()))
    # Only the last component may be an index; anything else raised above.
    parent_path = cast("tuple[str, ...]", tuple(path[:-1]))
    return MutationResult(
        updated,
        Change(
            ChangeKind.REMOVE_AT_PATH,
            parent_path,
            resolve(document, parent_path),
            resolve(updated, parent_path),
            {"removed": path[-1]},
        ),
    )
