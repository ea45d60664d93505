"""Structure document shape validation.

Checks a raw (already parsed) structure node against the JSON schema before
the loader turns it into a dungeon structure.
"""
from __future__ import annotations
from typing import Any, Mapping, Optional

import jsonschema

from ..core.errors import SchemaViolationError
from ..core.keys import DEFAULT_KEYS, StructureConfigKeys
from .schema import STRUCTURE_SCHEMA, build_structure_schema

__all__ = ["validate_structure_document"]


def validate_structure_document(data: Mapping[str, Any], keys: StructureConfigKeys = DEFAULT_KEYS, path: Optional[str] = None):
    """Validate a structure node against the schema built from `keys`."""
    schema = STRUCTURE_SCHEMA if keys == DEFAULT_KEYS else build_structure_schema(keys)
    try:
        jsonschema.validate(data, schema)
    except jsonschema.ValidationError as e:
        where = ".".join(str(p) for p in e.absolute_path)
        if path:
            where = f"{path}.{where}" if where else path
        raise SchemaViolationError(f"Structure document does not match schema: {e.message}", where or None) from e
    return True
