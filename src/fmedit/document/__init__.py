"""Front matter document model and editing engine.

This package provides:
- Immutable value nodes (Leaf, List, Section) for front matter documents
- A codec between wire documents (JSON-like objects) and node trees
- Key validation and placeholder key allocation
- Pure mutation functions returning the new tree and a change descriptor
- Mutation command objects for the working-copy session

Example:
    >>> from fmedit.document import decode, encode, rename_key
    >>> doc = decode({"a": "1", "b": "2", "c": "3"})
    >>> result = rename_key(doc, (), "b", "z")
    >>> list(encode(result.document))
    ['a', 'z', 'c']
"""

from ._codec import (
    WireDocument,
    WireValue,
    decode,
    decode_value,
    encode,
    encode_value,
    from_json,
    to_json,
)
from ._commands import (
    AddField,
    AddListItem,
    MergeFields,
    Mutation,
    RemoveAtPath,
    RemoveField,
    RemoveListItem,
    RenameKey,
    SetLeaf,
    SetListItem,
)
from ._keys import (
    DEFAULT_MAX_PROBES,
    allocate_unique_key,
    is_unique,
    is_valid_key,
    normalize_key,
)
from ._mutations import (
    DEFAULT_PLACEHOLDER_KEYS,
    Change,
    ChangeKind,
    FieldKind,
    MutationResult,
    add_field,
    add_list_item,
    merge_fields,
    remove_at_path,
    remove_field,
    remove_list_item,
    rename_key,
    set_leaf,
    set_list_item,
)
from ._nodes import (
    Document,
    Leaf,
    List,
    Scalar,
    ScalarType,
    Section,
    ValueNode,
    node_kind,
)
from ._paths import (
    KeyPath,
    parse_dotted_path,
    replace,
    resolve,
    resolve_leaf,
    resolve_list,
    resolve_section,
)
from ._views import display_order, flatten

__all__ = [
    "DEFAULT_MAX_PROBES",
    "DEFAULT_PLACEHOLDER_KEYS",
    "AddField",
    "AddListItem",
    "Change",
    "ChangeKind",
    "Document",
    "FieldKind",
    "KeyPath",
    "Leaf",
    "List",
    "MergeFields",
    "Mutation",
    "MutationResult",
    "RemoveAtPath",
    "RemoveField",
    "RemoveListItem",
    "RenameKey",
    "Scalar",
    "ScalarType",
    "Section",
    "SetLeaf",
    "SetListItem",
    "ValueNode",
    "WireDocument",
    "WireValue",
    "add_field",
    "add_list_item",
    "allocate_unique_key",
    "decode",
    "decode_value",
    "display_order",
    "encode",
    "encode_value",
    "flatten",
    "from_json",
    "is_unique",
    "is_valid_key",
    "merge_fields",
    "node_kind",
    "normalize_key",
    "parse_dotted_path",
    "remove_at_path",
    "remove_field",
    "remove_list_item",
    "rename_key",
    "replace",
    "resolve",
    "resolve_leaf",
    "resolve_list",
    "resolve_section",
    "set_leaf",
    "set_list_item",
    "to_json",
]
