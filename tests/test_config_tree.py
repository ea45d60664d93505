"""Tests for the configuration accessor."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import pytest

from dungeon_engine.core.config_tree import ConfigPath, ConfigTree, QueryResult
from dungeon_engine.core.errors import ConfigValueError, MissingRequiredFieldError


@pytest.fixture()
def tree():
    return ConfigTree({
        "dungeons": {
            "crypt": {"name": "Crypt", "depth": 3, "scale": 1.5, "tags": ["dark", "cold"]},
        },
        "empty": None,
    })


def test_config_path_parse_and_render():
    path = ConfigPath.parse("dungeons.crypt")
    assert path.segments == ("dungeons", "crypt")
    assert str(path) == "dungeons.crypt"
    assert str(ConfigPath()) == "<root>"
    assert ConfigPath.parse("a/b", separator="/").segments == ("a", "b")
    assert ConfigPath.coerce(["a", "b"]) == ConfigPath(("a", "b"))
    assert path.child("name") == ConfigPath(("dungeons", "crypt", "name"))


def test_query_walks_nested_path(tree):
    crypt = tree.query("dungeons.crypt").as_node()
    assert crypt.query("name").as_string() == "Crypt"
    assert crypt.query("depth").as_int() == 3
    assert crypt.query("scale").as_float() == 1.5
    assert crypt.query("tags").as_string_list() == ["dark", "cold"]
    assert crypt.get_keys() == ["name", "depth", "scale", "tags"]


def test_missing_key_reports_path(tree):
    with pytest.raises(MissingRequiredFieldError) as exc:
        tree.query("dungeons.tomb")
    assert exc.value.key == "tomb"
    assert exc.value.path == "dungeons"
    assert tree.try_query("dungeons.tomb") is None


def test_null_is_absent(tree):
    assert tree.root.try_query("empty") is None
    assert "empty" not in tree.root
    assert "dungeons" in tree.root


def test_type_mismatch_raises_config_value_error(tree):
    name = tree.query("dungeons.crypt.name")
    with pytest.raises(ConfigValueError) as exc:
        name.as_int()
    assert exc.value.path == "dungeons.crypt.name"
    with pytest.raises(ConfigValueError):
        name.as_node()
    with pytest.raises(ConfigValueError):
        tree.query("dungeons.crypt.depth").as_string()
    with pytest.raises(ConfigValueError):
        QueryResult(True, ConfigPath()).as_int()


def test_int_range_forms():
    assert QueryResult({"min": 2, "max": 5}, ConfigPath()).as_int_range() == (2, 5)
    assert QueryResult([1, 4], ConfigPath()).as_int_range() == (1, 4)
    with pytest.raises(ConfigValueError):
        QueryResult([1, 2, 3], ConfigPath()).as_int_range()
    with pytest.raises(MissingRequiredFieldError):
        QueryResult({"min": 2}, ConfigPath()).as_int_range()


def test_node_list_items_carry_index_path(tree):
    items = tree.query("dungeons.crypt.tags").as_node_list()
    assert [str(i.path) for i in items] == ["dungeons.crypt.tags.0", "dungeons.crypt.tags.1"]


def test_root_must_be_object():
    with pytest.raises(ConfigValueError):
        ConfigTree(["not", "an", "object"])
