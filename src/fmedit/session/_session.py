"""Working-copy session holding the document being edited.

A session is either EMPTY or LOADED. Opening decodes a wire document and
holds it; each applied mutation replaces the held tree with the engine's
result and notifies subscribers; closing drops the tree. Persistence is
left to the caller, who reads ``snapshot()`` and sends it wherever it goes.
"""

import dataclasses
from collections.abc import Callable
from enum import StrEnum
from typing import TYPE_CHECKING, Any, ClassVar

import pendulum
from pydantic import BaseModel, ConfigDict, PrivateAttr

from fmedit.config import EditorConfig
from fmedit.document import (
    AddField,
    Change,
    Document,
    FieldKind,
    decode,
    encode,
)
from fmedit.exceptions import FmEditError, SessionNotOpenError

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

    from fmedit.document import Mutation, WireDocument
    from fmedit.session._lookup import LookupTicket

type ChangeListener = Callable[[Change], None]


class SessionState(StrEnum):
    EMPTY = "empty"
    LOADED = "loaded"


class WorkingCopySession(BaseModel):
    """Editable working copy of one page's front matter.

    Attributes:
        page: Identifier of the page being edited. Informational only; it is
            bound into log entries.
        editor: Placeholder keys and probe limit used by AddField commands
            that do not name their own.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(arbitrary_types_allowed=True)

    page: str = ""
    editor: EditorConfig = EditorConfig()

    _logger: Any = PrivateAttr(default=None)
    _document: Document | None = PrivateAttr(default=None)
    _generation: int = PrivateAttr(default=0)
    _lookup_sequence: int = PrivateAttr(default=0)
    _listeners: list[ChangeListener] = PrivateAttr(default_factory=list)
    _opened_at: str | None = PrivateAttr(default=None)
    _modified_at: str | None = PrivateAttr(default=None)

    def __init__(
        self,
        *,
        page: str = "",
        editor: EditorConfig | None = None,
        logger: "FilteringBoundLogger | None" = None,  # noqa: UP037
    ) -> None:
        super().__init__(page=page, editor=editor or EditorConfig())
        self._logger = logger

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return SessionState.EMPTY if self._document is None else SessionState.LOADED

    @property
    def is_open(self) -> bool:
        return self._document is not None

    @property
    def generation(self) -> int:
        """Counter bumped on open, close and every applied change."""
        return self._generation

    @property
    def document(self) -> Document:
        """The held document tree.

        Raises:
            SessionNotOpenError: If no document is loaded.
        """
        return self._require_document("document")

    @property
    def opened_at(self) -> str | None:
        """ISO 8601 UTC timestamp of the last open, or None when empty."""
        return self._opened_at

    @property
    def modified_at(self) -> str | None:
        """ISO 8601 UTC timestamp of the last applied change, if any."""
        return self._modified_at

    @property
    def dirty(self) -> bool:
        """Whether a change was applied since the document was opened."""
        return self._modified_at is not None

    def _require_document(self, operation: str) -> Document:
        if self._document is None:
            msg = f"Cannot {operation}: no document is open"
            raise SessionNotOpenError(msg)
        return self._document

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def open(self, wire: "WireDocument | None") -> Document:  # noqa: UP037
        """Decode *wire* and hold it, discarding any previous document."""
        self._document = decode(wire, logger=self._logger)
        self._generation += 1
        self._opened_at = pendulum.now("UTC").to_iso8601_string()
        self._modified_at = None
        if self._logger is not None:
            self._logger.info(
                "document_opened",
                fields=len(self._document),
                generation=self._generation,
            )
        return self._document

    def close(self) -> None:
        """Drop the held document. Closing an empty session is a no-op."""
        if self._document is None:
            return
        self._document = None
        self._generation += 1
        self._opened_at = None
        self._modified_at = None
        if self._logger is not None:
            self._logger.info("document_closed", generation=self._generation)

    def snapshot(self) -> "WireDocument":  # noqa: UP037
        """Return the held document in wire form.

        Raises:
            SessionNotOpenError: If no document is loaded.
        """
        return encode(self._require_document("snapshot"))

    # -------------------------------------------------------------------------
    # Editing
    # -------------------------------------------------------------------------

    def _with_editor_defaults(self, mutation: "Mutation") -> "Mutation":  # noqa: UP037
        if not isinstance(mutation, AddField) or mutation.base_name is not None:
            return mutation
        base_names = {
            FieldKind.FIELD: self.editor.field_key,
            FieldKind.ARRAY: self.editor.array_key,
            FieldKind.SECTION: self.editor.section_key,
        }
        return dataclasses.replace(
            mutation,
            base_name=base_names[mutation.kind],
            max_probes=self.editor.max_key_probes,
        )

    def apply(self, mutation: "Mutation") -> Change | None:  # noqa: UP037
        """Apply *mutation* to the held document.

        Returns:
            The change descriptor, or None when the edit was a no-op.

        Raises:
            SessionNotOpenError: If no document is loaded.
            FmEditError: Whatever the engine rejects the edit with. The held
                document is left unchanged.
        """
        document = self._require_document("apply")
        mutation = self._with_editor_defaults(mutation)

        try:
            result = mutation.apply(document)
        except FmEditError as e:
            if self._logger is not None:
                self._logger.warning(
                    "mutation_rejected",
                    mutation=type(mutation).__name__,
                    error=type(e).__name__,
                    reason=str(e),
                )
            raise

        change = result.change
        if change is None:
            return None

        self._document = result.document
        self._generation += 1
        self._modified_at = pendulum.now("UTC").to_iso8601_string()
        if self._logger is not None:
            self._logger.info(
                "mutation_applied",
                kind=change.kind.value,
                path=list(change.path),
                generation=self._generation,
            )
        for listener in list(self._listeners):
            listener(change)
        return change

    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        """Register *listener* for every applied change.

        Returns:
            A callable that removes the listener again.
        """
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def begin_lookup(self, text: str = "") -> "LookupTicket":  # noqa: UP037
        """Start an asynchronous lookup against the current state.

        A newer ticket supersedes all older ones.
        """
        from fmedit.session._lookup import LookupTicket  # noqa: PLC0415

        self._lookup_sequence += 1
        return LookupTicket(
            generation=self._generation,
            sequence=self._lookup_sequence,
            text=text,
        )

    def is_current(self, ticket: "LookupTicket") -> bool:  # noqa: UP037
        """Whether a lookup result for *ticket* may still be applied."""
        return (
            self._document is not None
            and ticket.generation == self._generation
            and ticket.sequence == self._lookup_sequence
        )

    def discard(self, ticket: "LookupTicket", *, reason: str) -> None:  # noqa: UP037
        """Record that a lookup result was dropped."""
        if self._logger is not None:
            self._logger.debug(
                "lookup_discarded",
                text=ticket.text,
                ticket_generation=ticket.generation,
                generation=self._generation,
                reason=reason,
            )
