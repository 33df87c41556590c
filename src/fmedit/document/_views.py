"""Read-only views over a document for display and previews."""

from fmedit.document._nodes import Document, Leaf, List, ScalarType, Section, ValueNode

_KIND_PRIORITY = {Leaf: 0, List: 1, Section: 2}


def display_order(section: Section) -> list[tuple[str, ValueNode]]:
    """Return entries in editor display order.

    Leaves come first, then lists, then sections; entries of the same kind
    are sorted alphabetically by key. The section itself is not reordered.
    """
    return sorted(
        section.fields.items(),
        key=lambda entry: (_KIND_PRIORITY[type(entry[1])], entry[0]),
    )


def flatten(document: Document, prefix: str = "") -> list[tuple[str, str]]:
    """Flatten scalar leaves into dot-notation ``(key, text)`` pairs.

    Lists and null leaves are skipped; sections are recursed into. Pairs come
    out in document order.

    Example:
        >>> flatten(decode({"inventory": {"container": "drawer"}}))
        [('inventory.container', 'drawer')]
    """
    pairs: list[tuple[str, str]] = []
    for key, node in document.fields.items():
        full_key = f"{prefix}.{key}" if prefix else key
        if isinstance(node, Section):
            pairs.extend(flatten(node, full_key))
        elif isinstance(node, Leaf) and node.scalar is not ScalarType.NULL:
            pairs.append((full_key, node.value))
    return pairs
