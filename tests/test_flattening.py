from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from json_keyvalue.config import DEFAULT_SEPARATOR
from json_keyvalue.flattening import flatten
from json_keyvalue.structure import is_map_like

_KEYS = st.text(alphabet="abcdefghij_", min_size=1, max_size=6)
_LEAVES = st.one_of(
    st.none(),
    st.booleans(),
    st.integers(),
    st.text(max_size=5),
    st.lists(st.integers(), max_size=3),
)
_TREES = st.recursive(
    st.dictionaries(_KEYS, _LEAVES, max_size=4),
    lambda children: st.dictionaries(_KEYS, st.one_of(_LEAVES, children), max_size=4),
    max_leaves=20,
)


def _count_leaves(value) -> int:
    if is_map_like(value):
        return sum(_count_leaves(v) for v in value.values())
    return 1


def test_flatten_simple_nested_object():
    data = {"user": {"name": "John", "address": {"city": "Lagos"}}}
    assert flatten(data, DEFAULT_SEPARATOR) == {
        "user → name": "John",
        "user → address → city": "Lagos",
    }


def test_lists_and_empty_objects_are_leaves():
    data = {"tags": ["a", "b"], "meta": {}, "rows": [{"x": 1}]}
    assert flatten(data, ".") == data


def test_index_keyed_mapping_is_a_leaf():
    data = {"scores": {"0": 10, "1": 20}}
    assert flatten(data, ".") == data


def test_preorder_key_order():
    data = {"a": 1, "b": {"c": 2, "d": {"e": 3}}, "f": 4}
    assert list(flatten(data, ".")) == ["a", "b.c", "b.d.e", "f"]


def test_custom_separator():
    assert flatten({"user": {"name": "John"}}, " > ") == {"user > name": "John"}


@given(_TREES)
def test_one_key_per_leaf(tree):
    if not tree:
        assert flatten(tree, DEFAULT_SEPARATOR) == {}
        return
    assert len(flatten(tree, DEFAULT_SEPARATOR)) == _count_leaves(tree)


@given(_TREES)
def test_composite_keys_lead_back_to_their_leaf(tree):
    for key, leaf in flatten(tree, DEFAULT_SEPARATOR).items():
        node = tree
        for segment in key.split(DEFAULT_SEPARATOR):
            node = node[segment]
        assert node == leaf
        assert not is_map_like(node)
