"""Working-copy editing session.

Example:
    >>> from fmedit.document import RenameKey
    >>> from fmedit.session import WorkingCopySession
    >>> session = WorkingCopySession(page="inventory/item")
    >>> _ = session.open({"a": "1", "b": "2"})
    >>> change = session.apply(RenameKey((), "b", "z"))
    >>> session.snapshot()
    {'a': '1', 'z': '2'}
"""

from ._lookup import IdentifierCandidate, IdentifierLookup, LookupTicket, run_lookup
from ._session import ChangeListener, SessionState, WorkingCopySession

__all__ = [
    "ChangeListener",
    "IdentifierCandidate",
    "IdentifierLookup",
    "LookupTicket",
    "SessionState",
    "WorkingCopySession",
    "run_lookup",
]
