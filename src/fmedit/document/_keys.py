"""Key validation and placeholder key allocation within a section."""

from typing import TYPE_CHECKING

from fmedit.exceptions import KeyAllocationError

if TYPE_CHECKING:
    from fmedit.document._nodes import Section

DEFAULT_MAX_PROBES = 1000
"""Maximum number of suffixed candidates tried by allocate_unique_key."""


def normalize_key(candidate: str) -> str:
    """Return the stored form of a key (surrounding whitespace removed)."""
    return candidate.strip()


def is_valid_key(candidate: str) -> bool:
    """Check that a key is non-empty after trimming."""
    return normalize_key(candidate) != ""


def is_unique(
    section: "Section",  # noqa: UP037
    candidate: str,
    excluding_key: str | None = None,
) -> bool:
    """Check that no other key in *section* equals the trimmed candidate.

    Args:
        section: The section whose keys are checked.
        candidate: Proposed key, trimmed before comparison.
        excluding_key: A key to ignore, typically the entry being renamed.

    Returns:
        True if the candidate would not collide with a sibling.
    """
    key = normalize_key(candidate)
    if key == excluding_key:
        return True
    return key not in section.fields


def allocate_unique_key(
    section: "Section",  # noqa: UP037
    base_name: str,
    *,
    max_probes: int = DEFAULT_MAX_PROBES,
) -> str:
    """Return *base_name*, or the first unused ``base_name_N`` suffix.

    Args:
        section: The section the key will be inserted into.
        base_name: Preferred key.
        max_probes: Maximum number of suffixed candidates to try.

    Returns:
        A key not present in the section.

    Raises:
        KeyAllocationError: If every probed candidate is taken.

    Example:
        >>> allocate_unique_key(Section({"new_field": Leaf()}), "new_field")
        'new_field_1'
    """
    if base_name not in section.fields:
        return base_name
    for counter in range(1, max_probes + 1):
        candidate = f"{base_name}_{counter}"
        if candidate not in section.fields:
            return candidate
    msg = f"No unused key found for {base_name!r} after {max_probes} attempts"
    raise KeyAllocationError(msg, base=base_name, attempts=max_probes)
