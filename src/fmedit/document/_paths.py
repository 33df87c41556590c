"""Path resolution and copy-on-write replacement inside a document.

A key path is a sequence of section keys walked from the root. The empty path
addresses the root section itself.
"""

from collections.abc import Sequence

from fmedit.document._nodes import Document, Leaf, List, Section, ValueNode, node_kind
from fmedit.exceptions import (
    NotALeafError,
    NotAListError,
    NotASectionError,
    PathNotFoundError,
)

type KeyPath = Sequence[str]


def parse_dotted_path(dotted: str) -> tuple[str, ...]:
    """Split a dot-notation path into keys. The empty string is the root.

    Example:
        >>> parse_dotted_path("inventory.items")
        ('inventory', 'items')
    """
    if not dotted:
        return ()
    return tuple(dotted.split("."))


def resolve(document: Document, path: KeyPath) -> ValueNode:
    """Return the node at *path*.

    Raises:
        PathNotFoundError: If a key along the path does not exist.
        NotASectionError: If the path walks through a leaf or list.
    """
    node: ValueNode = document
    for depth, key in enumerate(path):
        if not isinstance(node, Section):
            raise NotASectionError(path=path[:depth], actual=node_kind(node))
        if key not in node.fields:
            msg = f"Key {key!r} not found at {'.'.join(path[:depth]) or '<root>'}"
            raise PathNotFoundError(msg, path=path[: depth + 1])
        node = node.fields[key]
    return node


def resolve_section(document: Document, path: KeyPath) -> Section:
    """Return the section at *path*, or raise NotASectionError."""
    node = resolve(document, path)
    if not isinstance(node, Section):
        raise NotASectionError(path=path, actual=node_kind(node))
    return node


def resolve_list(document: Document, path: KeyPath) -> List:
    """Return the list at *path*, or raise NotAListError."""
    node = resolve(document, path)
    if not isinstance(node, List):
        raise NotAListError(path=path, actual=node_kind(node))
    return node


def resolve_leaf(document: Document, path: KeyPath) -> Leaf:
    """Return the leaf at *path*, or raise NotALeafError."""
    node = resolve(document, path)
    if not isinstance(node, Leaf):
        raise NotALeafError(path=path, actual=node_kind(node))
    return node


def with_field(section: Section, key: str, node: ValueNode) -> Section:
    """Return a copy of *section* with *key* set to *node*.

    An existing key keeps its position; a new key is appended.
    """
    fields = dict(section.fields)
    fields[key] = node
    return Section(fields)


def without_field(section: Section, key: str) -> Section:
    """Return a copy of *section* without *key*."""
    return Section({k: v for k, v in section.fields.items() if k != key})


def replace(document: Document, path: KeyPath, node: ValueNode) -> Document:
    """Return a new document with the node at *path* replaced by *node*.

    Only the sections along the path are rebuilt; untouched siblings are
    shared with the input document.

    Raises:
        PathNotFoundError: If a key along the path does not exist.
        NotASectionError: If the path walks through a leaf or list, or if the
            root is replaced by something other than a section.
    """
    if not path:
        if not isinstance(node, Section):
            raise NotASectionError(path=(), actual=node_kind(node))
        return node
    parent = resolve_section(document, path[:-1])
    key = path[-1]
    if key not in parent.fields:
        msg = f"Key {key!r} not found at {'.'.join(path[:-1]) or '<root>'}"
        raise PathNotFoundError(msg, path=path)
    return replace(document, path[:-1], with_field(parent, key, node))
