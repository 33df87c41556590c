"""Stale-result guard for asynchronous identifier lookups.

Lookups (for example, deriving a page identifier from a title as the user
types) run outside the mutation engine. Each one is issued a ticket bound to
the session's generation; a result whose ticket is no longer current is
dropped instead of applied. The in-flight request itself is never cancelled.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

import anyio

if TYPE_CHECKING:
    from fmedit.session._session import WorkingCopySession


@dataclass(frozen=True, slots=True)
class LookupTicket:
    """Marker for one issued lookup.

    Attributes:
        generation: Session generation when the lookup was issued.
        sequence: Position among all lookups issued by the session.
        text: The text being looked up.
    """

    generation: int
    sequence: int
    text: str = ""


@dataclass(frozen=True, slots=True)
class IdentifierCandidate:
    """Result of the identifier-generation collaborator.

    Attributes:
        identifier: Candidate identifier derived from the input text.
        is_unique: Whether no other page uses the identifier.
        existing_page: Title or path of the conflicting page, if any.
    """

    identifier: str
    is_unique: bool
    existing_page: str | None = None


type IdentifierLookup = Callable[[str], Awaitable[IdentifierCandidate]]


async def run_lookup(
    session: "WorkingCopySession",  # noqa: UP037
    lookup: IdentifierLookup,
    text: str,
    *,
    delay: float = 0.0,
) -> IdentifierCandidate | None:
    """Run *lookup* for *text* and return its result if still current.

    When *delay* is positive the call is debounced: the lookup is only made
    if no newer lookup was started and the document did not change while
    waiting.

    Args:
        session: Session whose state the result applies to.
        lookup: Async identifier-generation collaborator.
        text: Free text to derive the identifier from.
        delay: Debounce interval in seconds.

    Returns:
        The candidate, or None if the result went stale.
    """
    ticket = session.begin_lookup(text)

    if delay > 0:
        await anyio.sleep(delay)
        if not session.is_current(ticket):
            session.discard(ticket, reason="superseded_before_request")
            return None

    candidate = await lookup(text)

    if not session.is_current(ticket):
        session.discard(ticket, reason="stale_result")
        return None
    return candidate
