"""File storage for wire documents (JSON, YAML and markdown front matter)."""

from ._files import (
    FileFormat,
    StoredDocument,
    detect_format,
    read_document,
    render_document,
    write_document,
)
from ._frontmatter import (
    PlainScalarDumper,
    PlainScalarLoader,
    dump_yaml,
    load_yaml,
    parse_frontmatter,
    render_frontmatter,
)

__all__ = [
    "FileFormat",
    "PlainScalarDumper",
    "PlainScalarLoader",
    "StoredDocument",
    "detect_format",
    "dump_yaml",
    "load_yaml",
    "parse_frontmatter",
    "read_document",
    "render_document",
    "render_frontmatter",
    "write_document",
]
