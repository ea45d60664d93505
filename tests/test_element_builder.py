"""Tests for element classification and recursive element construction."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import pytest

from dungeon_engine.core.config_tree import ConfigNode, ConfigPath
from dungeon_engine.core.errors import ConfigValueError, MissingRequiredFieldError, UnknownElementKindError
from dungeon_engine.core.keys import DEFAULT_KEYS
from dungeon_engine.core.loader.elements import ElementBuilder, ReferenceCollector, classify_element
from dungeon_engine.core.model.base import (
    ConnectionElement,
    ElementKind,
    IntRange,
    MaxCount,
    NestedDungeonElement,
    NodeElement,
    OptionalNodeData,
)
from dungeon_engine.core.registry import PropertyDecoderRegistry


def _build(data, registry=None):
    builder = ElementBuilder(DEFAULT_KEYS, registry or PropertyDecoderRegistry())
    collector = ReferenceCollector()
    element = builder.build(ConfigNode(data, ConfigPath(("start-node",))), collector)
    return element, collector


def test_node_with_sub_node():
    element, collector = _build({"node": "room", "subs": [{"node": "hall"}]})
    assert isinstance(element, NodeElement)
    assert element.style == "room"
    assert len(element.children) == 1
    hall = element.children[0]
    assert isinstance(hall, NodeElement)
    assert hall.style == "hall"
    assert hall.children == ()
    assert len(collector) == 0


def test_node_without_subs_has_empty_children():
    element, _ = _build({"node": "room"})
    assert element.children == ()
    assert element.kind is ElementKind.NODE


def test_connection_with_length_and_children_in_order():
    element, _ = _build({
        "connection": "corridor",
        "length": {"min": 2, "max": 5},
        "subs": [{"node": "a"}, {"node": "b"}],
    })
    assert isinstance(element, ConnectionElement)
    assert element.style == "corridor"
    assert element.length == IntRange(2, 5)
    assert [c.style for c in element.children] == ["a", "b"]


def test_connection_without_length_fails():
    with pytest.raises(MissingRequiredFieldError) as exc:
        _build({"connection": "corridor"})
    assert exc.value.key == "length"
    assert exc.value.path == "start-node"


def test_nested_element_collects_reference_and_keeps_children():
    element, collector = _build({
        "node": "room",
        "subs": [
            {"nested": "dungeons.cave", "subs": [{"node": "exit"}]},
            {"nested": "dungeons.cave"},
            {"nested": "dungeons.tomb"},
        ],
    })
    first = element.children[0]
    assert isinstance(first, NestedDungeonElement)
    assert first.reference_path == "dungeons.cave"
    assert [c.style for c in first.children] == ["exit"]
    assert list(collector) == ["dungeons.cave", "dungeons.tomb"]


def test_marker_priority_node_first():
    config = ConfigNode({"nested": "x", "connection": "c", "node": "n", "length": [1, 2]})
    kind, marker = classify_element(config, DEFAULT_KEYS)
    assert kind is ElementKind.NODE
    assert marker.as_string() == "n"
    kind, _ = classify_element(ConfigNode({"nested": "x", "connection": "c"}), DEFAULT_KEYS)
    assert kind is ElementKind.CONNECTION


def test_unknown_element_kind():
    with pytest.raises(UnknownElementKindError) as exc:
        _build({"node": "room", "subs": [{"room": "oops"}]})
    assert exc.value.path == "start-node.subs.0"


def test_metadata_flags_and_tags():
    element, _ = _build({
        "node": "vault",
        "tags": ["treasure", "treasure", "locked"],
        "optional": True,
        "optional-endpoint": True,
        "branch-prototypes": ["side"],
        "branch-max-count": 1,
    })
    meta = element.metadata
    assert meta.tags == frozenset({"treasure", "locked"})
    assert meta.optional_endpoint is True
    assert meta.optional_node == OptionalNodeData(required=True)
    assert meta.branch_data.candidate_names == ("side",)
    assert meta.branch_data.cap == MaxCount(1)


def test_metadata_defaults():
    meta = _build({"node": "plain"})[0].metadata
    assert meta.tags == frozenset()
    assert meta.properties == {}
    assert meta.branch_data is None
    assert meta.optional_endpoint is False
    assert meta.optional_node is None


def test_element_properties_are_decoded():
    registry = PropertyDecoderRegistry({"light": lambda q: q.as_float()})
    element, _ = _build({"node": "room", "properties": {"light": 0.25}}, registry)
    assert element.metadata.properties == {"light": 0.25}


def test_marker_must_be_string():
    with pytest.raises(ConfigValueError):
        _build({"node": 5})


def test_building_is_deterministic():
    data = {"node": "room", "tags": ["a"], "subs": [{"connection": "c", "length": [1, 2], "subs": [{"nested": "x"}]}]}
    assert _build(data)[0] == _build(data)[0]
