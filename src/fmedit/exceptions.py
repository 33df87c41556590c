"""fmedit exceptions."""

from collections.abc import Sequence
from pathlib import Path
from typing import Any


def _format_path(path: Sequence[str | int]) -> str:
    """Render a node path for error messages."""
    if not path:
        return "<root>"
    return ".".join(str(component) for component in path)


class FmEditError(Exception):
    """Base exception for fmedit errors."""


# =============================================================================
# Edit Exceptions
# =============================================================================


class EditError(FmEditError):
    """Base exception for rejected document edits."""


class InvalidKeyError(EditError, ValueError):
    """Raised when a key is empty or whitespace-only.

    Attributes:
        key: The rejected key as supplied by the caller.
    """

    def __init__(self, message: str, *, key: str) -> None:
        """Initialize with error message and the rejected key."""
        super().__init__(message)
        self.key: str = key


class DuplicateKeyError(EditError, ValueError):
    """Raised when a key collides with an existing sibling key.

    Attributes:
        key: The colliding key (trimmed).
    """

    def __init__(self, message: str, *, key: str) -> None:
        """Initialize with error message and the colliding key."""
        super().__init__(message)
        self.key: str = key


class KeyAllocationError(EditError):
    """Raised when no unused placeholder key is found within the probe limit.

    Attributes:
        base: The placeholder base name that was probed.
        attempts: Number of candidates tried.
    """

    def __init__(self, message: str, *, base: str, attempts: int) -> None:
        """Initialize with error message and probing context."""
        super().__init__(message)
        self.base: str = base
        self.attempts: int = attempts


class InvalidPathError(EditError, ValueError):
    """Raised when a path is unusable for the requested operation.

    Attributes:
        path: The offending path.
    """

    def __init__(self, message: str, *, path: Sequence[str | int]) -> None:
        """Initialize with error message and path context."""
        super().__init__(message)
        self.path: tuple[str | int, ...] = tuple(path)


# =============================================================================
# Path Resolution Exceptions
# =============================================================================


class NodeKindError(FmEditError, TypeError):
    """Raised when a path resolves to a node of the wrong kind.

    This signals a caller bug: the mutation does not match the rendered tree.

    Attributes:
        path: Path of the mismatched node.
        expected: Kind the operation required.
        actual: Kind that was found.
    """

    expected_kind: str = "node"

    def __init__(
        self,
        message: str | None = None,
        *,
        path: Sequence[str | int],
        actual: str,
    ) -> None:
        """Initialize with path and the kind that was actually found."""
        if message is None:
            message = (
                f"Expected a {self.expected_kind} at {_format_path(path)}, "
                f"found a {actual}"
            )
        super().__init__(message)
        self.path: tuple[str | int, ...] = tuple(path)
        self.expected: str = self.expected_kind
        self.actual: str = actual


class NotALeafError(NodeKindError):
    """Path does not resolve to a leaf."""

    expected_kind = "leaf"


class NotAListError(NodeKindError):
    """Path does not resolve to a list."""

    expected_kind = "list"


class NotASectionError(NodeKindError):
    """Path does not resolve to a section."""

    expected_kind = "section"


class PathNotFoundError(FmEditError, KeyError):
    """Raised when a path component names a key that does not exist.

    Attributes:
        path: The full path that failed to resolve.
    """

    def __init__(self, message: str, *, path: Sequence[str | int]) -> None:
        """Initialize with error message and path context."""
        super().__init__(message)
        self.path: tuple[str | int, ...] = tuple(path)

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message.
        return str(self.args[0]) if self.args else ""


class IndexOutOfRangeError(FmEditError, IndexError):
    """Raised when a list index is outside the list bounds.

    Usually a stale index from a view that raced a removal.

    Attributes:
        path: Path of the list.
        index: The requested index.
        length: Length of the list at the time of the request.
    """

    def __init__(
        self,
        message: str | None = None,
        *,
        path: Sequence[str | int],
        index: int,
        length: int,
    ) -> None:
        """Initialize with the list path, index and list length."""
        if message is None:
            message = (
                f"Index {index} out of range for list at {_format_path(path)} "
                f"(length {length})"
            )
        super().__init__(message)
        self.path: tuple[str | int, ...] = tuple(path)
        self.index: int = index
        self.length: int = length


# =============================================================================
# Session Exceptions
# =============================================================================


class SessionNotOpenError(FmEditError, RuntimeError):
    """Raised when a session operation requires a loaded document."""


# =============================================================================
# Storage Exceptions
# =============================================================================


class DocumentFormatError(FmEditError, ValueError):
    """Raised when a stored document cannot be read or has no usable format.

    Attributes:
        path: The file that was being read or written, if known.
    """

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        """Initialize with error message and the offending file."""
        super().__init__(message)
        self.path: Path | None = path


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigError(FmEditError):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when configuration cannot be loaded or parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and optional location context."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column


class ConfigValidationError(ConfigError):
    """Raised when configuration fails validation."""

    def __init__(
        self,
        message: str,
        *,
        key: str,
        value: Any,  # pyright: ignore[reportAny,reportExplicitAny]
        expected: str,
        source: str | None = None,
    ) -> None:
        """Initialize with error message and validation context."""
        super().__init__(message)
        self.key: str = key
        self.value: Any = value  # pyright: ignore[reportExplicitAny]
        self.expected: str = expected
        self.source: str | None = source
