"""Front matter blocks in markdown pages.

A page starts with a ``---`` line, followed by a YAML mapping and a closing
``---`` line. Everything after the closing line is the body and is kept
byte for byte.

YAML is read and written without the timestamp resolver, so ``2024-01-01``
stays the text it was written as instead of becoming a date.
"""

from typing import TYPE_CHECKING, Any, cast

import yaml

from fmedit.document import WireDocument
from fmedit.exceptions import DocumentFormatError

if TYPE_CHECKING:
    from pathlib import Path

FENCE = "---"

_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


def _without_timestamps(
    resolvers: dict[Any, list[tuple[str, Any]]],
) -> dict[Any, list[tuple[str, Any]]]:
    return {
        first: [(tag, regexp) for tag, regexp in entries if tag != _TIMESTAMP_TAG]
        for first, entries in resolvers.items()
    }


class PlainScalarLoader(yaml.SafeLoader):
    """SafeLoader that keeps timestamps as strings."""


class PlainScalarDumper(yaml.SafeDumper):
    """SafeDumper that writes date-like strings unquoted."""


PlainScalarLoader.yaml_implicit_resolvers = _without_timestamps(
    yaml.SafeLoader.yaml_implicit_resolvers
)
PlainScalarDumper.yaml_implicit_resolvers = _without_timestamps(
    yaml.SafeDumper.yaml_implicit_resolvers
)


def load_yaml(text: str) -> object:
    """Parse YAML text with the plain scalar loader.

    Raises:
        yaml.YAMLError: If the text is not valid YAML.
    """
    return yaml.load(text, Loader=PlainScalarLoader)  # noqa: S506


def _split(content: str) -> tuple[str, str] | None:
    first_break = content.find("\n")
    if first_break == -1 or content[:first_break].rstrip() != FENCE:
        return None

    start = first_break + 1
    position = start
    while position <= len(content):
        line_end = content.find("\n", position)
        line = content[position:] if line_end == -1 else content[position:line_end]
        if line.rstrip() == FENCE:
            body = "" if line_end == -1 else content[line_end + 1 :]
            return content[start:position], body
        if line_end == -1:
            return None
        position = line_end + 1
    return None


def parse_frontmatter(
    content: str,
    *,
    path: "Path | None" = None,  # noqa: UP037
) -> tuple[WireDocument | None, str]:
    """Split a page into its front matter and body.

    Args:
        content: The page text.
        path: File the page came from, for error context.

    Returns:
        A tuple of (front matter mapping or None, body). None means the page
        has no fenced block; the body is then the whole content. An empty
        block gives an empty mapping.

    Raises:
        DocumentFormatError: If the fenced block is not valid YAML or does not
            hold a mapping.
    """
    parts = _split(content)
    if parts is None:
        return None, content

    block, body = parts
    where = f" in {path}" if path is not None else ""
    try:
        data = load_yaml(block)
    except yaml.YAMLError as e:
        msg = f"Invalid YAML in front matter{where}: {e}"
        raise DocumentFormatError(msg, path=path) from e

    if data is None:
        return {}, body
    if not isinstance(data, dict):
        msg = (
            f"Front matter{where} must be a mapping, "
            f"got {type(data).__name__}"
        )
        raise DocumentFormatError(msg, path=path)
    return cast("WireDocument", data), body


def dump_yaml(wire: WireDocument) -> str:
    """Serialize a wire document as block-style YAML in key order."""
    return yaml.dump(
        wire,
        Dumper=PlainScalarDumper,
        default_flow_style=False,
        allow_unicode=True,
        sort_keys=False,
    )


def render_frontmatter(wire: WireDocument, body: str) -> str:
    """Join a wire document and a body back into page content."""
    block = dump_yaml(wire) if wire else ""
    return f"{FENCE}\n{block}{FENCE}\n{body}"
