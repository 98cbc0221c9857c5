from __future__ import annotations

import pytest

from json_keyvalue.errors import MalformedInputError
from json_keyvalue.normalizer import normalize
from json_keyvalue.structure import is_list_like, is_map_like


def test_single_object_is_wrapped():
    items, wrapped = normalize({"name": "John"})
    assert items == [{"name": "John"}]
    assert wrapped is True


def test_list_of_objects_is_kept():
    data = [{"id": 1}, {"id": 2}]
    items, wrapped = normalize(data)
    assert items == data
    assert wrapped is False


def test_json_text_is_decoded():
    items, wrapped = normalize('[{"id": 1}, {"id": 2}]')
    assert [i["id"] for i in items] == [1, 2]
    assert wrapped is False


def test_json_bytes_are_decoded():
    items, _ = normalize(b'{"name": "John"}')
    assert items == [{"name": "John"}]


def test_malformed_text_raises():
    with pytest.raises(MalformedInputError):
        normalize('{"name": ')


def test_invalid_utf8_bytes_raise_malformed_input():
    with pytest.raises(MalformedInputError):
        normalize(b'{"name": "\xff"}')


@pytest.mark.parametrize("raw", [{}, [], None, 42, "[]", "{}", "null", True])
def test_empty_or_scalar_input_gives_nothing(raw):
    assert normalize(raw) == ([], False)


def test_index_keyed_mapping_counts_as_sequence():
    data = {"0": {"id": 1}, "1": {"id": 2}}
    items, wrapped = normalize(data)
    assert items == [{"id": 1}, {"id": 2}]
    assert wrapped is False


def test_non_contiguous_index_keys_are_one_item():
    data = {"0": "a", "2": "b"}
    items, wrapped = normalize(data)
    assert items == [data]
    assert wrapped is True


def test_non_object_elements_are_skipped():
    items, _ = normalize([{"id": 1}, "stray", [1, 2], {"id": 2}])
    assert items == [{"id": 1}, {"id": 2}]


@pytest.mark.parametrize("value,expected", [
    ([1, 2], True),
    ((), True),
    ({"0": "a", "1": "b"}, True),
    ({0: "a", 1: "b"}, True),
    ({"1": "a", "0": "b"}, False),
    ({"01": "a"}, False),
    ({True: "a"}, False),
    ({"a": 1}, False),
    ("text", False),
])
def test_is_list_like(value, expected):
    assert is_list_like(value) is expected


def test_is_map_like_rejects_empty_and_lists():
    assert is_map_like({"a": 1})
    assert not is_map_like({})
    assert not is_map_like([{"a": 1}])
    assert not is_map_like({"0": 1})
