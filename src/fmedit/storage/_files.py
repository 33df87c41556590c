"""Reading and writing wire documents on disk.

Three layouts are supported, chosen by file suffix:

- ``.json``: the whole file is one JSON object
- ``.yaml`` / ``.yml``: the whole file is one YAML mapping
- ``.md`` / ``.markdown``: a markdown page whose front matter is the document

Markdown bodies are preserved when the document is written back.
"""

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import cast

import orjson
import yaml

from fmedit.document import WireDocument
from fmedit.exceptions import DocumentFormatError
from fmedit.utils import dump_json

from ._frontmatter import (
    dump_yaml,
    load_yaml,
    parse_frontmatter,
    render_frontmatter,
)


class FileFormat(StrEnum):
    JSON = "json"
    YAML = "yaml"
    MARKDOWN = "markdown"


_SUFFIXES: dict[str, FileFormat] = {
    ".json": FileFormat.JSON,
    ".yaml": FileFormat.YAML,
    ".yml": FileFormat.YAML,
    ".md": FileFormat.MARKDOWN,
    ".markdown": FileFormat.MARKDOWN,
}


def detect_format(path: Path) -> FileFormat:
    """Pick the file format from *path*'s suffix.

    Raises:
        DocumentFormatError: For unknown suffixes.
    """
    try:
        return _SUFFIXES[path.suffix.lower()]
    except KeyError:
        supported = ", ".join(sorted(_SUFFIXES))
        msg = f"Unsupported file type '{path.suffix}' (expected one of {supported})"
        raise DocumentFormatError(msg, path=path) from None


@dataclass(frozen=True, slots=True)
class StoredDocument:
    """A wire document together with where and how it was stored.

    Attributes:
        path: The file the document came from.
        format: Layout of the file.
        wire: The front matter object.
        body: Markdown body following the front matter (empty otherwise).
    """

    path: Path
    format: FileFormat
    wire: WireDocument
    body: str = ""


def _require_mapping(data: object, path: Path) -> WireDocument:
    if data is None:
        return {}
    if not isinstance(data, dict):
        msg = f"Expected an object at the top level of {path}"
        raise DocumentFormatError(msg, path=path)
    return cast("WireDocument", data)


def read_document(path: Path) -> StoredDocument:
    """Read the wire document stored in *path*.

    Raises:
        FileNotFoundError: If the file does not exist.
        DocumentFormatError: If the file cannot be parsed or does not hold
            an object.
    """
    file_format = detect_format(path)

    if file_format is FileFormat.JSON:
        try:
            data = orjson.loads(path.read_bytes())
        except orjson.JSONDecodeError as e:
            msg = f"Invalid JSON in {path}: {e}"
            raise DocumentFormatError(msg, path=path) from e
        return StoredDocument(path, file_format, _require_mapping(data, path))

    content = path.read_text(encoding="utf-8")

    if file_format is FileFormat.YAML:
        try:
            data = load_yaml(content)
        except yaml.YAMLError as e:
            msg = f"Invalid YAML in {path}: {e}"
            raise DocumentFormatError(msg, path=path) from e
        return StoredDocument(path, file_format, _require_mapping(data, path))

    wire, body = parse_frontmatter(content, path=path)
    return StoredDocument(path, file_format, wire or {}, body)


def render_document(stored: StoredDocument, wire: WireDocument) -> str:
    """Render *wire* in the layout of *stored*."""
    match stored.format:
        case FileFormat.JSON:
            return dump_json(wire) + "\n"
        case FileFormat.YAML:
            return dump_yaml(wire)
        case FileFormat.MARKDOWN:
            return render_frontmatter(wire, stored.body)


def write_document(stored: StoredDocument, wire: WireDocument) -> None:
    """Replace the document in *stored*'s file with *wire*."""
    stored.path.write_text(render_document(stored, wire), encoding="utf-8")
