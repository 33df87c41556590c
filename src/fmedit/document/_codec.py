"""Conversion between wire documents and value node trees.

The wire form is the loosely-typed JSON-like object returned by the page
metadata service: strings, arrays of strings, nested objects and the odd
number or boolean. Decoding never fails; anything the node model cannot
represent directly degrades to an opaque leaf so the editor can always
display what the backend returned.
"""

from collections.abc import Mapping
from typing import TYPE_CHECKING, cast

import orjson

from fmedit.document._keys import allocate_unique_key
from fmedit.document._nodes import Document, Leaf, List, ScalarType, Section

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

    from fmedit.document._nodes import ValueNode

type WireValue = (
    str | int | float | bool | None | list[WireValue] | dict[str, WireValue]
)
type WireDocument = dict[str, WireValue]


def _opaque_leaf(raw: object) -> Leaf:
    """Stringify an unrepresentable wire value into an opaque leaf."""
    try:
        text = orjson.dumps(raw).decode("utf-8")
    except TypeError:
        return Leaf(str(raw), ScalarType.STRING)
    return Leaf(text, ScalarType.OPAQUE)


def decode_value(
    raw: object,
    *,
    path: tuple[str, ...] = (),
    logger: "FilteringBoundLogger | None" = None,  # noqa: UP037
) -> "ValueNode":  # noqa: UP037
    """Decode a single wire value into a node.

    Args:
        raw: The wire value.
        path: Key path of the value, used for log context.
        logger: Optional logger notified when a value degrades.

    Returns:
        The decoded node.
    """
    if isinstance(raw, str):
        return Leaf(raw)
    if isinstance(raw, Mapping):
        return _decode_section(cast("Mapping[object, object]", raw), path, logger)
    if isinstance(raw, (list, tuple)):
        items = list(cast("list[object] | tuple[object, ...]", raw))
        if all(isinstance(item, str) for item in items):
            return List(tuple(cast("list[str]", items)))
        if logger is not None:
            logger.warning(
                "wire_value_degraded",
                path=list(path),
                reason="array contains non-string elements",
            )
        return _opaque_leaf(items)
    if raw is None or isinstance(raw, (bool, int, float)):
        return Leaf.from_scalar(raw)
    if logger is not None:
        logger.warning(
            "wire_value_degraded",
            path=list(path),
            reason=f"unsupported type {type(raw).__name__}",
        )
    return _opaque_leaf(raw)


def _decode_section(
    raw: Mapping[object, object],
    path: tuple[str, ...],
    logger: "FilteringBoundLogger | None",  # noqa: UP037
) -> Section:
    fields: dict[str, ValueNode] = {}
    for raw_key, raw_value in raw.items():
        key = raw_key if isinstance(raw_key, str) else str(raw_key)
        if key in fields:
            original = key
            key = allocate_unique_key(Section(fields), key)
            if logger is not None:
                logger.warning(
                    "wire_value_degraded",
                    path=[*path, original],
                    reason=f"duplicate key after stringifying, stored as {key!r}",
                )
        fields[key] = decode_value(raw_value, path=(*path, key), logger=logger)
    return Section(fields)


def decode(
    wire: object,
    *,
    logger: "FilteringBoundLogger | None" = None,  # noqa: UP037
) -> Document:
    """Decode a wire document into a document tree.

    ``None`` decodes to an empty document, and so does a top-level value that
    is not an object (logged as degraded).

    Example:
        >>> decode({"title": "Inventory Item", "tags": ["a", "b"]}).keys()
        ['title', 'tags']
    """
    if wire is None:
        return Section()
    if not isinstance(wire, Mapping):
        if logger is not None:
            logger.warning(
                "wire_value_degraded",
                path=[],
                reason=f"document is a {type(wire).__name__}, not an object",
            )
        return Section()
    return _decode_section(cast("Mapping[object, object]", wire), (), logger)


def encode_value(node: "ValueNode") -> WireValue:  # noqa: UP037
    """Encode a single node into its wire value."""
    if isinstance(node, Leaf):
        return cast("WireValue", node.to_scalar())
    if isinstance(node, List):
        return list(node.items)
    return {key: encode_value(child) for key, child in node.fields.items()}


def encode(document: Document) -> WireDocument:
    """Encode a document tree into a wire document, keys in document order."""
    return {key: encode_value(child) for key, child in document.fields.items()}


def to_json(document: Document, *, indent: bool = False) -> bytes:
    """Serialize a document to JSON bytes."""
    options = orjson.OPT_INDENT_2 if indent else 0
    return orjson.dumps(encode(document), option=options)


def from_json(data: bytes | str) -> Document:
    """Parse JSON text and decode it into a document.

    Raises:
        orjson.JSONDecodeError: If the text is not valid JSON.
    """
    return decode(orjson.loads(data))
