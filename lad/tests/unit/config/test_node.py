"""
Unit tests for the read-only configuration node.
"""

import pytest

from lad.config.node import ConfigNode, freeze, get_path, set_path, thaw


class Handle:
    pass


def test_freeze_converts_nested_structures():
    node = freeze({"a": {"b": [1, {"c": 2}]}})

    assert isinstance(node, ConfigNode)
    assert isinstance(node["a"], ConfigNode)
    assert node["a"]["b"][0] == 1
    assert isinstance(node["a"]["b"], tuple)
    assert isinstance(node["a"]["b"][1], ConfigNode)


def test_freeze_keeps_handles_by_reference():
    handle = Handle()
    node = freeze({"email": {"transport": handle}})
    assert node["email"]["transport"] is handle


def test_node_rejects_writes():
    node = freeze({"a": {"b": 1}})

    with pytest.raises(TypeError):
        node["a"] = 2
    with pytest.raises(TypeError):
        node["a"]["b"] = 2
    with pytest.raises(AttributeError):
        node._data = {}


def test_node_equals_plain_mapping():
    assert freeze({"a": {"b": 1}}) == {"a": {"b": 1}}


def test_thaw_returns_mutable_copy():
    node = freeze({"a": {"b": [1, 2]}})
    thawed = thaw(node)

    thawed["a"]["b"].append(3)

    assert thawed == {"a": {"b": [1, 2, 3]}}
    assert node["a"]["b"] == (1, 2)


def test_get_path_reads_dotted_and_tuple_paths():
    tree = {"auth": {"providers": {"google": True}}}

    assert get_path(tree, "auth.providers.google") is True
    assert get_path(tree, ("auth", "providers")) == {"google": True}


@pytest.mark.parametrize("path", ["auth.missing", "auth.providers.google.deeper", "nope"])
def test_get_path_missing_raises_key_error(path):
    with pytest.raises(KeyError):
        get_path({"auth": {"providers": {"google": True}}}, path)


def test_set_path_creates_parents():
    tree = {}
    set_path(tree, "a.b.c", 1)
    assert tree == {"a": {"b": {"c": 1}}}
