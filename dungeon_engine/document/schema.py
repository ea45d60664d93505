"""JSON schema for raw structure documents.

Generated from a StructureConfigKeys record so documents using custom key
names can be checked too. Unknown keys are allowed.
"""
from __future__ import annotations
from typing import Any, Dict

from ..core.keys import DEFAULT_KEYS, StructureConfigKeys

__all__ = ["build_structure_schema", "STRUCTURE_SCHEMA"]

_STRING_LIST = {"type": "array", "items": {"type": "string"}}


def _branch_properties(keys: StructureConfigKeys) -> Dict[str, Any]:
    return {
        keys.branch_prototypes: {"type": "array", "items": {"type": "string", "minLength": 1}, "minItems": 1},
        keys.branch_max_count: {"type": "integer", "minimum": 0},
        keys.branch_max_percent: {"type": "number", "minimum": 0},
    }


def _branch_rules(keys: StructureConfigKeys) -> Dict[str, Any]:
    # a cap requires candidates, and the two caps exclude each other
    return {
        "dependencies": {
            keys.branch_max_count: [keys.branch_prototypes],
            keys.branch_max_percent: [keys.branch_prototypes],
        },
        "not": {"required": [keys.branch_max_count, keys.branch_max_percent]},
    }


def build_structure_schema(keys: StructureConfigKeys = DEFAULT_KEYS) -> Dict[str, Any]:
    int_range = {
        "oneOf": [
            {
                "type": "object",
                "required": ["min", "max"],
                "properties": {"min": {"type": "integer"}, "max": {"type": "integer"}},
            },
            {"type": "array", "items": {"type": "integer"}, "minItems": 2, "maxItems": 2},
        ]
    }
    element = {
        "type": "object",
        "anyOf": [{"required": [marker]} for marker in keys.element_markers],
        "properties": {
            keys.node: {"type": "string"},
            keys.connection: {"type": "string"},
            keys.nested: {"type": "string", "minLength": 1},
            keys.subs: {"type": "array", "items": {"$ref": "#/definitions/element"}},
            keys.length: int_range,
            keys.tags: _STRING_LIST,
            keys.properties: {"type": "object"},
            **_branch_properties(keys),
        },
        **_branch_rules(keys),
    }
    return {
        "$schema": "http://json-schema.org/draft-07/schema#",
        "definitions": {
            "element": element,
            "structure": {
                "type": "object",
                "required": [keys.start_node],
                "properties": {
                    keys.start_node: {"$ref": "#/definitions/element"},
                    keys.inline_nested: {
                        "type": "object",
                        "additionalProperties": {"$ref": "#/definitions/structure"},
                    },
                    keys.global_tags: _STRING_LIST,
                    keys.structure_tags: _STRING_LIST,
                    keys.structure_properties: {"type": "object"},
                    keys.margin_unit: {"type": "number"},
                    **_branch_properties(keys),
                },
                **_branch_rules(keys),
            },
        },
        "$ref": "#/definitions/structure",
    }


STRUCTURE_SCHEMA = build_structure_schema()
