"""Value node types for front matter documents.

A document is a tree of three node kinds:
- Leaf: a scalar field, stored as text with a scalar type discriminator
- List: an ordered sequence of string items
- Section: an insertion-ordered mapping of keys to nodes

Nodes are immutable. Mutations build new nodes along the edited path and
reuse untouched subtrees.
"""

import math
import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType

import orjson


class ScalarType(StrEnum):
    """Wire type a leaf is re-emitted as."""

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    NULL = "null"
    OPAQUE = "opaque"


type Scalar = str | int | float | bool | None
type ValueNode = Leaf | List | Section

_INTEGER_TEXT = re.compile(r"-?(?:0|[1-9]\d*)")
_FLOAT_TEXT = re.compile(r"-?(?:0|[1-9]\d*)(?:\.\d+)?(?:[eE][+-]?\d+)?")


def _coerce_text(text: str, scalar: ScalarType) -> ScalarType:
    """Return *scalar* if *text* is still a valid literal of it, else STRING.

    Numbers must be plain JSON number literals; a float must also be finite.
    """
    match scalar:
        case ScalarType.INTEGER:
            if _INTEGER_TEXT.fullmatch(text) is None:
                return ScalarType.STRING
            return scalar
        case ScalarType.FLOAT:
            if _FLOAT_TEXT.fullmatch(text) is None or not math.isfinite(float(text)):
                return ScalarType.STRING
            return scalar
        case ScalarType.BOOLEAN:
            return scalar if text in ("true", "false") else ScalarType.STRING
        case ScalarType.NULL:
            return scalar if text == "" else ScalarType.STRING
        case ScalarType.OPAQUE:
            try:
                _ = orjson.loads(text)
            except orjson.JSONDecodeError:
                return ScalarType.STRING
            return scalar
        case _:
            return ScalarType.STRING


@dataclass(frozen=True, slots=True)
class Leaf:
    """A scalar field.

    Attributes:
        value: Text form of the scalar, as displayed and edited.
        scalar: Wire type the value is re-emitted as on encode.
    """

    value: str = ""
    scalar: ScalarType = ScalarType.STRING

    @classmethod
    def from_scalar(cls, raw: Scalar) -> "Leaf":
        """Build a leaf from a Python scalar, remembering its type.

        Example:
            >>> Leaf.from_scalar(32)
            Leaf(value='32', scalar=<ScalarType.INTEGER: 'integer'>)
        """
        # bool before int: bool is an int subclass
        if raw is None:
            return cls("", ScalarType.NULL)
        if isinstance(raw, bool):
            return cls("true" if raw else "false", ScalarType.BOOLEAN)
        if isinstance(raw, int):
            return cls(str(raw), ScalarType.INTEGER)
        if isinstance(raw, float):
            return cls(repr(raw), ScalarType.FLOAT)
        return cls(raw, ScalarType.STRING)

    def with_value(self, new_value: Scalar) -> "Leaf":
        """Return a leaf holding *new_value*.

        Text keeps this leaf's scalar type when it is still a valid literal of
        that type; otherwise the result is a string leaf. Non-text scalars carry
        their own type.
        """
        if not isinstance(new_value, str):
            return Leaf.from_scalar(new_value)
        if new_value == self.value:
            return self
        return Leaf(new_value, _coerce_text(new_value, self.scalar))

    def to_scalar(self) -> object:
        """Return the wire value for this leaf."""
        match self.scalar:
            case ScalarType.INTEGER:
                return int(self.value)
            case ScalarType.FLOAT:
                return float(self.value)
            case ScalarType.BOOLEAN:
                return self.value == "true"
            case ScalarType.NULL:
                return None
            case ScalarType.OPAQUE:
                try:
                    return orjson.loads(self.value)
                except orjson.JSONDecodeError:
                    return self.value
            case _:
                return self.value


@dataclass(frozen=True, slots=True)
class List:
    """An ordered array of string items. Empty strings are valid items."""

    items: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True, slots=True, eq=False)
class Section:
    """A nested group of fields with significant insertion order.

    Equality is order-sensitive: two sections are equal only when they hold
    equal entries in the same order.

    Attributes:
        fields: Read-only insertion-ordered mapping of key to node.
    """

    fields: Mapping[str, ValueNode] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Section):
            return NotImplemented
        return list(self.fields.items()) == list(other.fields.items())

    __hash__ = None  # pyright: ignore[reportAssignmentType]

    def __repr__(self) -> str:
        return f"Section(fields={dict(self.fields)!r})"

    def __contains__(self, key: object) -> bool:
        return key in self.fields

    def __getitem__(self, key: str) -> ValueNode:
        return self.fields[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def keys(self) -> list[str]:
        """Return the keys in order."""
        return list(self.fields)

    def items(self) -> list[tuple[str, ValueNode]]:
        """Return (key, node) pairs in order."""
        return list(self.fields.items())


Document = Section
"""A document is the root section; it has no key of its own."""


def node_kind(node: ValueNode) -> str:
    """Return the short kind name of a node (leaf, list or section)."""
    if isinstance(node, Leaf):
        return "leaf"
    if isinstance(node, List):
        return "list"
    return "section"
