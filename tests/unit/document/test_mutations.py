import pytest

from fmedit.document import (
    ChangeKind,
    FieldKind,
    Leaf,
    List,
    ScalarType,
    Section,
    add_field,
    add_list_item,
    decode,
    encode,
    merge_fields,
    remove_at_path,
    remove_field,
    remove_list_item,
    rename_key,
    set_leaf,
    set_list_item,
)
from fmedit.exceptions import (
    DuplicateKeyError,
    IndexOutOfRangeError,
    InvalidKeyError,
    InvalidPathError,
    KeyAllocationError,
    NotALeafError,
    NotAListError,
    NotASectionError,
    PathNotFoundError,
)


@pytest.fixture
def document() -> Section:
    return decode(
        {
            "a": "1",
            "b": "2",
            "c": "3",
            "count": 32,
            "tags": ["x", "y"],
            "meta": {"author": "sam"},
        }
    )


class TestSetLeaf:
    def test_replaces_value_in_place(self, document: Section) -> None:
        result = set_leaf(document, ("b",), "two")

        assert encode(result.document)["b"] == "two"
        assert result.document.keys() == document.keys()

    def test_change_names_leaf(self, document: Section) -> None:
        result = set_leaf(document, ("meta", "author"), "kim")

        assert result.change is not None
        assert result.change.kind is ChangeKind.SET_LEAF
        assert result.change.path == ("meta", "author")
        assert result.change.to_event() == {
            "path": ["meta", "author"],
            "oldValue": "sam",
            "newValue": "kim",
        }

    def test_same_value_is_noop(self, document: Section) -> None:
        result = set_leaf(document, ("a",), "1")

        assert result.change is None
        assert not result.changed
        assert result.document == document

    def test_numeric_text_keeps_integer(self, document: Section) -> None:
        result = set_leaf(document, ("count",), "33")

        assert encode(result.document)["count"] == 33

    def test_rejects_non_leaf(self, document: Section) -> None:
        with pytest.raises(NotALeafError):
            _ = set_leaf(document, ("tags",), "x")

    def test_input_is_untouched(self, document: Section) -> None:
        _ = set_leaf(document, ("a",), "changed")

        assert document["a"] == Leaf("1")


class TestRenameKey:
    def test_preserves_position_and_value(self, document: Section) -> None:
        result = rename_key(document, (), "b", "z")

        assert result.document.keys() == ["a", "z", "c", "count", "tags", "meta"]
        assert result.document["z"] == Leaf("2")
        assert "b" not in result.document

    def test_trims_new_key(self, document: Section) -> None:
        result = rename_key(document, (), "b", "  z ")

        assert "z" in result.document
        assert result.change is not None
        assert result.change.detail == {"old_key": "b", "new_key": "z"}

    def test_change_names_section(self, document: Section) -> None:
        result = rename_key(document, ("meta",), "author", "writer")

        assert result.change is not None
        assert result.change.kind is ChangeKind.RENAME_KEY
        assert result.change.path == ("meta",)
        assert result.change.to_event()["newValue"] == {"writer": "sam"}

    def test_duplicate_is_rejected(self, document: Section) -> None:
        with pytest.raises(DuplicateKeyError) as exc_info:
            _ = rename_key(document, (), "b", "a")

        assert exc_info.value.key == "a"
        assert document.keys()[:3] == ["a", "b", "c"]

    @pytest.mark.parametrize("new_key", ["", "   "])
    def test_blank_key_is_rejected(self, document: Section, new_key: str) -> None:
        with pytest.raises(InvalidKeyError):
            _ = rename_key(document, (), "b", new_key)

    def test_same_key_is_noop(self, document: Section) -> None:
        result = rename_key(document, (), "b", " b ")

        assert result.change is None

    def test_missing_key(self, document: Section) -> None:
        with pytest.raises(PathNotFoundError):
            _ = rename_key(document, (), "nope", "x")


class TestListItems:
    def test_add_appends_empty_item(self, document: Section) -> None:
        result = add_list_item(document, ("tags",))

        assert result.document["tags"] == List(("x", "y", ""))
        assert result.change is not None
        assert result.change.detail == {"index": 2}

    def test_add_rejects_non_list(self, document: Section) -> None:
        with pytest.raises(NotAListError):
            _ = add_list_item(document, ("a",))

    def test_remove_item(self, document: Section) -> None:
        result = remove_list_item(document, ("tags",), 0)

        assert result.document["tags"] == List(("y",))
        assert result.change is not None
        assert result.change.detail == {"index": 0, "removed": "x"}

    def test_removing_last_item_leaves_empty_list(self) -> None:
        document = decode({"items": ["x"]})

        result = remove_list_item(document, ("items",), 0)

        assert encode(result.document) == {"items": []}

    @pytest.mark.parametrize("index", [-1, 2, 99])
    def test_remove_out_of_range(self, document: Section, index: int) -> None:
        with pytest.raises(IndexOutOfRangeError) as exc_info:
            _ = remove_list_item(document, ("tags",), index)

        assert exc_info.value.length == 2

    def test_set_item(self, document: Section) -> None:
        result = set_list_item(document, ("tags",), 1, "z")

        assert result.document["tags"] == List(("x", "z"))
        assert result.change is not None
        assert result.change.to_event() == {
            "path": ["tags"],
            "oldValue": ["x", "y"],
            "newValue": ["x", "z"],
        }

    def test_set_item_same_value_is_noop(self, document: Section) -> None:
        assert set_list_item(document, ("tags",), 0, "x").change is None

    def test_set_item_out_of_range(self, document: Section) -> None:
        with pytest.raises(IndexOutOfRangeError):
            _ = set_list_item(document, ("tags",), 5, "z")


class TestAddField:
    @pytest.mark.parametrize(
        ("kind", "key", "node"),
        [
            (FieldKind.FIELD, "new_field", Leaf()),
            (FieldKind.ARRAY, "new_array", List()),
            (FieldKind.SECTION, "new_section", Section()),
        ],
    )
    def test_appends_placeholder(
        self, document: Section, kind: FieldKind, key: str, node: object
    ) -> None:
        result = add_field(document, (), kind)

        assert result.document.keys()[-1] == key
        assert result.document[key] == node
        assert result.change is not None
        assert result.change.detail == {"key": key, "field_kind": kind.value}

    def test_numbers_taken_placeholders(self, document: Section) -> None:
        first = add_field(document, ("meta",), FieldKind.FIELD)
        second = add_field(first.document, ("meta",), FieldKind.FIELD)

        assert second.document["meta"].keys() == [  # pyright: ignore[reportAttributeAccessIssue]
            "author",
            "new_field",
            "new_field_1",
        ]

    def test_custom_base_name(self, document: Section) -> None:
        result = add_field(document, (), FieldKind.FIELD, base_name="a")

        assert result.document.keys()[-1] == "a_1"

    def test_probe_limit(self) -> None:
        document = decode({"new_field": "", "new_field_1": ""})

        with pytest.raises(KeyAllocationError):
            _ = add_field(document, (), FieldKind.FIELD, max_probes=1)

    def test_rejects_non_section(self, document: Section) -> None:
        with pytest.raises(NotASectionError):
            _ = add_field(document, ("tags",), FieldKind.FIELD)


class TestRemoveField:
    def test_removes_key_and_keeps_order(self, document: Section) -> None:
        result = remove_field(document, (), "b")

        assert result.document.keys() == ["a", "c", "count", "tags", "meta"]
        assert result.change is not None
        assert result.change.kind is ChangeKind.REMOVE_FIELD

    def test_missing_key_is_noop(self, document: Section) -> None:
        assert remove_field(document, (), "nope").change is None


class TestMergeFields:
    def test_replaces_in_place_and_appends_new(self, document: Section) -> None:
        result = merge_fields(document, {"b": "B", "new": ["n"]})

        assert result.document.keys() == [
            "a",
            "b",
            "c",
            "count",
            "tags",
            "meta",
            "new",
        ]
        assert encode(result.document)["b"] == "B"
        assert result.change is not None
        assert result.change.path == ()

    def test_identical_merge_is_noop(self, document: Section) -> None:
        assert merge_fields(document, {"a": "1"}).change is None

    def test_blank_key_is_rejected(self, document: Section) -> None:
        with pytest.raises(InvalidKeyError):
            _ = merge_fields(document, {" ": "x"})


class TestRemoveAtPath:
    def test_removes_nested_key(self, document: Section) -> None:
        result = remove_at_path(document, ("meta", "author"))

        assert result.document["meta"] == Section()
        assert result.change is not None
        assert result.change.path == ("meta",)
        assert result.change.detail == {"removed": "author"}

    def test_removes_list_item_by_index(self, document: Section) -> None:
        result = remove_at_path(document, ("tags", 1))

        assert result.document["tags"] == List(("x",))
        assert result.change is not None
        assert result.change.to_event()["newValue"] == ["x"]

    def test_empty_path(self, document: Section) -> None:
        with pytest.raises(InvalidPathError):
            _ = remove_at_path(document, ())

    def test_missing_key(self, document: Section) -> None:
        with pytest.raises(PathNotFoundError):
            _ = remove_at_path(document, ("meta", "nope"))

    def test_index_out_of_range(self, document: Section) -> None:
        with pytest.raises(IndexOutOfRangeError):
            _ = remove_at_path(document, ("tags", 9))

    def test_index_into_section(self, document: Section) -> None:
        with pytest.raises(NotAListError):
            _ = remove_at_path(document, ("meta", 0))

    def test_key_into_list(self, document: Section) -> None:
        with pytest.raises(NotASectionError):
            _ = remove_at_path(document, ("tags", "x"))


class TestOpaqueLeaves:
    def test_editing_opaque_leaf_with_plain_text_makes_string(self) -> None:
        document = decode({"mixed": ["a", 1]})

        result = set_leaf(document, ("mixed",), "plain")

        assert result.document["mixed"] == Leaf("plain", ScalarType.STRING)
