"""Mutation commands accepted by the working-copy session.

Each command captures the arguments of one engine operation so callers (UI
event handlers, the CLI) can hand a single object to ``session.apply``.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from fmedit.document import _mutations as engine
from fmedit.document._keys import DEFAULT_MAX_PROBES
from fmedit.document._mutations import FieldKind

if TYPE_CHECKING:
    from fmedit.document._codec import WireValue
    from fmedit.document._mutations import MutationResult
    from fmedit.document._nodes import Document, Scalar


class Mutation(Protocol):
    """A single edit that can be applied to a document."""

    def apply(self, document: "Document") -> "MutationResult":  # noqa: UP037
        """Apply the edit and return the new document and change."""
        ...


@dataclass(frozen=True, slots=True)
class SetLeaf:
    path: tuple[str, ...]
    value: "Scalar"  # noqa: UP037

    def apply(self, document: "Document") -> "MutationResult":  # noqa: UP037
        return engine.set_leaf(document, self.path, self.value)


@dataclass(frozen=True, slots=True)
class RenameKey:
    section_path: tuple[str, ...]
    old_key: str
    new_key: str

    def apply(self, document: "Document") -> "MutationResult":  # noqa: UP037
        return engine.rename_key(document, self.section_path, self.old_key, self.new_key)


@dataclass(frozen=True, slots=True)
class AddListItem:
    list_path: tuple[str, ...]

    def apply(self, document: "Document") -> "MutationResult":  # noqa: UP037
        return engine.add_list_item(document, self.list_path)


@dataclass(frozen=True, slots=True)
class RemoveListItem:
    list_path: tuple[str, ...]
    index: int

    def apply(self, document: "Document") -> "MutationResult":  # noqa: UP037
        return engine.remove_list_item(document, self.list_path, self.index)


@dataclass(frozen=True, slots=True)
class SetListItem:
    list_path: tuple[str, ...]
    index: int
    value: str

    def apply(self, document: "Document") -> "MutationResult":  # noqa: UP037
        return engine.set_list_item(document, self.list_path, self.index, self.value)


@dataclass(frozen=True, slots=True)
class AddField:
    """Add an entry under a placeholder key.

    ``base_name`` and ``max_probes`` are usually filled from the editor
    configuration by the session.
    """

    section_path: tuple[str, ...]
    kind: FieldKind
    base_name: str | None = None
    max_probes: int = DEFAULT_MAX_PROBES

    def apply(self, document: "Document") -> "MutationResult":  # noqa: UP037
        return engine.add_field(
            document,
            self.section_path,
            self.kind,
            base_name=self.base_name,
            max_probes=self.max_probes,
        )


@dataclass(frozen=True, slots=True)
class RemoveField:
    section_path: tuple[str, ...]
    key: str

    def apply(self, document: "Document") -> "MutationResult":  # noqa: UP037
        return engine.remove_field(document, self.section_path, self.key)


@dataclass(frozen=True, slots=True)
class MergeFields:
    fields: "Mapping[str, WireValue]" = field(default_factory=dict)  # noqa: UP037

    def apply(self, document: "Document") -> "MutationResult":  # noqa: UP037
        return engine.merge_fields(document, self.fields)


@dataclass(frozen=True, slots=True)
class RemoveAtPath:
    path: tuple[str | int, ...]

    def apply(self, document: "Document") -> "MutationResult":  # noqa: UP037
        return engine.remove_at_path(document, self.path)
