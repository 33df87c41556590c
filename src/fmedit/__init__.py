"""fmedit: a structure-preserving front matter editing engine.

The engine decodes a page's front matter into an immutable tree of value
nodes, applies edits that keep key order intact, and encodes the result
back to the same JSON-like shape.

Subpackages:
    document: node model, codec, key registry and mutation engine
    session: working-copy session and stale lookup guard
    storage: JSON, YAML and markdown front matter files
    config: configuration loading and validation
    cli: the ``fmedit`` command
"""

__version__ = "0.1.0"
