"""Tests for structure metadata, property decoding and global tag propagation."""

import sys
import os
import logging
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import pytest

from dungeon_engine.core.config_tree import ConfigTree
from dungeon_engine.core.errors import PropertyDecodeError
from dungeon_engine.core.loader.structure_loader import StructureLoader
from dungeon_engine.core.loader.tags import propagate_global_tags
from dungeon_engine.core.model.base import NodeElement, NodeMetaData, find_elements, iter_elements
from dungeon_engine.core.registry import PropertyDecoderRegistry


def _structure(data, registry=None):
    return StructureLoader(ConfigTree({"main": data}), registry).build_structure("main")


def test_global_tags_reach_every_element():
    structure = _structure({
        "global-tags": ["lit"],
        "start-node": {"node": "room", "subs": [{"node": "hall"}]},
    })
    room = structure.root
    hall = room.children[0]
    assert room.style == "room" and hall.style == "hall"
    assert "lit" in room.metadata.tags
    assert "lit" in hall.metadata.tags
    assert structure.meta.global_tags.tags == frozenset({"lit"})


def test_global_tags_merge_with_local_tags_recursively():
    structure = _structure({
        "global-tags": ["lit", "damp"],
        "start-node": {
            "node": "room",
            "tags": ["start"],
            "subs": [{"connection": "c", "length": [1, 1], "subs": [{"node": "deep", "tags": ["end"]}]}],
        },
    })
    tags = {e.style: e.metadata.tags for e in iter_elements(structure.root)}
    assert tags == {
        "room": frozenset({"start", "lit", "damp"}),
        "c": frozenset({"lit", "damp"}),
        "deep": frozenset({"end", "lit", "damp"}),
    }


def test_global_tags_do_not_leak_into_embedded_structures():
    config = ConfigTree({
        "main": {
            "global-tags": ["lit"],
            "start-node": {"node": "room", "subs": [{"nested": "cave"}, {"nested": "tomb"}]},
            "nested-structures": {
                "tomb": {"global-tags": ["lit"], "start-node": {"node": "tomb"}},
            },
        },
        "cave": {"start-node": {"node": "cave", "subs": [{"node": "pool"}]}},
    })
    structure = StructureLoader(config).build_structure("main")
    nested = structure.root.children[0]
    assert "lit" in nested.metadata.tags
    cave = structure.embedded_dungeons["cave"]
    assert all("lit" not in e.metadata.tags for e in iter_elements(cave.root))
    tomb = structure.embedded_dungeons["tomb"]
    assert "lit" in tomb.root.metadata.tags


def test_structure_tags_and_margin_unit():
    structure = _structure({
        "structure-tags": ["boss", "boss"],
        "margin-unit": 2,
        "start-node": {"node": "room"},
    })
    assert structure.meta.structure_tags.tags == frozenset({"boss"})
    assert structure.meta.margin_unit == 2.0
    assert "boss" not in structure.root.metadata.tags


def test_margin_unit_defaults_to_zero():
    assert _structure({"start-node": {"node": "room"}}).meta.margin_unit == 0.0


def test_registered_property_is_decoded():
    registry = PropertyDecoderRegistry({"difficulty": lambda q: q.as_int() * 10})
    structure = _structure(
        {"structure-properties": {"difficulty": 3}, "start-node": {"node": "room"}},
        registry,
    )
    assert structure.meta.structure_tags.properties == {"difficulty": 30}


def test_unregistered_property_warns_and_is_skipped(caplog):
    registry = PropertyDecoderRegistry({"difficulty": lambda q: q.as_int()})
    with caplog.at_level(logging.WARNING):
        structure = _structure(
            {"structure-properties": {"difficulty": 3, "weather": "rain"}, "start-node": {"node": "room"}},
            registry,
        )
    assert structure.meta.structure_tags.properties == {"difficulty": 3}
    assert "weather" not in structure.meta.structure_tags.properties
    assert any("weather" in r.getMessage() for r in caplog.records if r.levelno == logging.WARNING)


def test_failing_decoder_aborts_build():
    def broken(result):
        raise RuntimeError("boom")

    registry = PropertyDecoderRegistry({"difficulty": broken})
    with pytest.raises(PropertyDecodeError) as exc:
        _structure({"structure-properties": {"difficulty": 3}, "start-node": {"node": "room"}}, registry)
    assert exc.value.path == "main.structure-properties.difficulty"


def test_propagation_returns_new_tree():
    original = NodeElement("room", NodeMetaData(), (NodeElement("hall"),))
    tagged = propagate_global_tags(original, ["lit"])
    assert original.metadata.tags == frozenset()
    assert original.children[0].metadata.tags == frozenset()
    assert tagged.children[0].metadata.tags == frozenset({"lit"})
    assert propagate_global_tags(original, []) is original


def test_find_elements_by_tag():
    structure = _structure({
        "global-tags": ["lit"],
        "start-node": {
            "node": "room",
            "tags": ["start"],
            "subs": [
                {"connection": "corridor", "length": [1, 2], "tags": ["narrow"]},
                {"node": "hall", "subs": [{"node": "vault", "tags": ["narrow"]}]},
            ],
        },
    })
    assert [e.style for e in find_elements(structure.root, "narrow")] == ["corridor", "vault"]
    assert [e.style for e in find_elements(structure.root, "start")] == ["room"]
    assert len(list(find_elements(structure.root, "lit"))) == 4
    assert list(find_elements(structure.root, "missing")) == []
