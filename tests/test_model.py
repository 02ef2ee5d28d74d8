"""Tests for mtojson.model."""

from dataclasses import FrozenInstanceError

import pytest

from mtojson.model import (
    Entry,
    JsonArray,
    JsonObject,
    Raw,
    RefSequence,
    ScalarBlock,
    TypeTag,
    as_object,
    check_value,
    is_entry_list,
)
from mtojson.errors import TreeError


class TestTypeTag:
    def test_seven_tags(self):
        assert [t.name for t in TypeTag] == [
            "ARRAY", "BOOLEAN", "INTEGER", "OBJECT", "STRING", "UINTEGER", "VALUE",
        ]


class TestEntry:
    def test_fields(self):
        e = Entry("key", "value", TypeTag.STRING)
        assert e.key == "key"
        assert e.value == "value"
        assert e.type == TypeTag.STRING

    def test_object_list_becomes_json_object(self):
        e = Entry("o", [Entry.integer("a", 1)], TypeTag.OBJECT)
        assert isinstance(e.value, JsonObject)
        assert len(e.value) == 1

    def test_factories(self):
        assert Entry.string("k", "v").type == TypeTag.STRING
        assert Entry.boolean("k", False).type == TypeTag.BOOLEAN
        assert Entry.integer("k", -1).type == TypeTag.INTEGER
        assert Entry.uinteger("k", 1).type == TypeTag.UINTEGER
        assert Entry.raw("k", "null").value == Raw("null")
        assert Entry.object("k", []).value == JsonObject([])
        arr = JsonArray.of(TypeTag.INTEGER, [1])
        assert Entry.array("k", arr).value is arr

    def test_raw_needs_raw_wrapper(self):
        with pytest.raises(TreeError):
            Entry("key", "not wrapped", TypeTag.VALUE)

    def test_bool_is_not_an_integer(self):
        with pytest.raises(TreeError):
            Entry.integer("k", True)

    def test_integer_range(self):
        Entry.integer("k", 2**63 - 1)
        with pytest.raises(TreeError):
            Entry.integer("k", 2**63)

    def test_negative_unsigned(self):
        with pytest.raises(TreeError):
            Entry.uinteger("k", -1)

    def test_bad_key(self):
        with pytest.raises(TreeError):
            Entry(None, 1, TypeTag.INTEGER)

    def test_bad_tag(self):
        with pytest.raises(TreeError):
            Entry("k", 1, "integer")

    def test_tree_error_is_type_error(self):
        with pytest.raises(TypeError):
            Entry.string("k", 5)


class TestJsonObject:
    def test_keeps_order_and_duplicates(self):
        obj = JsonObject([Entry.integer("k", 1), Entry.integer("k", 2)])
        assert [e.value for e in obj] == [1, 2]

    def test_empty(self):
        assert len(JsonObject()) == 0


class TestJsonArray:
    def test_of_picks_scalar_block(self):
        arr = JsonArray.of(TypeTag.BOOLEAN, [True, False])
        assert isinstance(arr.payload, ScalarBlock)
        assert arr.count == 2

    def test_of_picks_ref_sequence(self):
        arr = JsonArray.of(TypeTag.STRING, ["a"])
        assert isinstance(arr.payload, RefSequence)
        assert arr.element(0) == "a"

    def test_count_larger_than_storage(self):
        with pytest.raises(TreeError):
            JsonArray(TypeTag.INTEGER, ScalarBlock([1]), 2)

    def test_count_smaller_than_storage(self):
        arr = JsonArray(TypeTag.INTEGER, ScalarBlock([1, 2, 3]), 1)
        assert len(arr) == 1

    def test_zero_count_without_payload(self):
        assert JsonArray(TypeTag.ARRAY).count == 0

    def test_wrong_payload_variant(self):
        with pytest.raises(TreeError):
            JsonArray(TypeTag.INTEGER, RefSequence([1]))
        with pytest.raises(TreeError):
            JsonArray(TypeTag.STRING, ScalarBlock(["a"]))

    def test_element_type_checked(self):
        with pytest.raises(TreeError):
            JsonArray.of(TypeTag.INTEGER, [1, "2"])

    def test_elements_past_count_not_checked(self):
        arr = JsonArray(TypeTag.STRING, RefSequence(["a", None]), 1)
        assert arr.element(0) == "a"

    def test_bad_count_type(self):
        with pytest.raises(TreeError):
            JsonArray(TypeTag.INTEGER, ScalarBlock([1]), "1")


def test_check_value_array():
    check_value(TypeTag.ARRAY, JsonArray(TypeTag.STRING))
    with pytest.raises(TreeError):
        check_value(TypeTag.ARRAY, ["a"])


class TestFrozenNodes:
    def test_entry_cannot_be_reassigned(self):
        e = Entry.integer("k", 1)
        with pytest.raises(FrozenInstanceError):
            e.value = "x"

    def test_array_cannot_be_reassigned(self):
        arr = JsonArray.of(TypeTag.INTEGER, [1, 2])
        with pytest.raises(FrozenInstanceError):
            arr.count = 5

    def test_object_list_still_converted(self):
        e = Entry("o", [], TypeTag.OBJECT)
        assert e.value == JsonObject([])


def test_as_object():
    obj = JsonObject([Entry.integer("a", 1)])
    assert as_object(obj) is obj
    assert as_object([Entry.integer("a", 1)]) == JsonObject([Entry.integer("a", 1)])
    assert is_entry_list(())
    with pytest.raises(TreeError):
        as_object("not a tree")
