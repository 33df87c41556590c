"""Helpers shared by the document commands."""

from pathlib import Path
from typing import Never

from fmedit.cli._commands._context import CLIContext
from fmedit.cli._commands._shared import ExitCode, exit_with_error, format_json
from fmedit.document import (
    Document,
    List,
    Mutation,
    Section,
    parse_dotted_path,
)
from fmedit.exceptions import DocumentFormatError, FmEditError, PathNotFoundError
from fmedit.session import WorkingCopySession
from fmedit.storage import StoredDocument, read_document, write_document


def load_stored(file: Path) -> StoredDocument:
    """Read *file*, exiting with a CLI error when that fails."""
    try:
        return read_document(file)
    except FileNotFoundError:
        exit_with_error(f"File not found: {file}", ExitCode.NOT_FOUND)
    except DocumentFormatError as e:
        exit_with_error(str(e), ExitCode.IO_ERROR)
    except OSError as e:
        exit_with_error(f"Cannot read {file}: {e}", ExitCode.IO_ERROR)


def open_session(file: Path, *, command: str) -> tuple[WorkingCopySession, StoredDocument]:
    """Read *file* and open a working-copy session on its document."""
    ctx = CLIContext.get_current()
    stored = load_stored(file)

    logger = None
    if ctx.logger is not None:
        logger = ctx.logger.bind(command=command, page=str(file))

    session = WorkingCopySession(page=str(file), editor=ctx.config.editor, logger=logger)
    _ = session.open(stored.wire)
    return session, stored


def key_path(text: str) -> tuple[str, ...]:
    """Parse a dot-separated path argument; the empty string is the root."""
    return parse_dotted_path(text)


def mixed_path(document: Document, text: str) -> tuple[str | int, ...]:
    """Parse a dotted path whose components index into lists where needed.

    A component following a list is read as an integer index; anywhere
    else it is a key, even if it looks like a number.
    """
    components: list[str | int] = []
    node: object = document
    for part in parse_dotted_path(text):
        if isinstance(node, List):
            try:
                index = int(part)
            except ValueError:
                exit_with_error(
                    f"'{part}' is not a list index", ExitCode.VALIDATION_ERROR
                )
            components.append(index)
            node = node.items[index] if 0 <= index < len(node) else None
        else:
            components.append(part)
            node = node[part] if isinstance(node, Section) and part in node else None
    return tuple(components)


def report_rejection(error: FmEditError) -> Never:
    if isinstance(error, PathNotFoundError):
        exit_with_error(str(error), ExitCode.NOT_FOUND)
    exit_with_error(str(error), ExitCode.VALIDATION_ERROR)


def run_mutation(
    session: WorkingCopySession,
    stored: StoredDocument,
    mutation: Mutation,
    *,
    dry_run: bool,
) -> None:
    """Apply *mutation*, write the result back and print the change event.

    A no-op prints ``null`` and leaves the file untouched.
    """
    try:
        change = session.apply(mutation)
    except FmEditError as e:
        report_rejection(e)

    if change is not None and not dry_run:
        try:
            write_document(stored, session.snapshot())
        except OSError as e:
            exit_with_error(f"Cannot write {stored.path}: {e}", ExitCode.IO_ERROR)

    session.close()
    print(format_json(None if change is None else change.to_event()))  # noqa: T201
    raise SystemExit(ExitCode.SUCCESS)
