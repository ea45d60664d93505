"""Tag and property aggregation.

Reads the structure level tag holders (global and structure tags plus
registry decoded properties) and pushes global tags down the element tree.
"""
from __future__ import annotations
import logging
from dataclasses import replace
from typing import Iterable

from ..config_tree import ConfigNode, QueryResult
from ..errors import PropertyDecodeError, StructureError
from ..keys import StructureConfigKeys
from ..model.base import AbstractDungeonElement, PropertyAndTagHolder, StructureMetaData
from ..registry import PropertyDecoderRegistry

__all__ = ["read_tags", "decode_properties", "read_structure_metadata", "propagate_global_tags"]

logger = logging.getLogger(__name__)


def read_tags(config: ConfigNode, key: str, holder: PropertyAndTagHolder) -> PropertyAndTagHolder:
    result = config.try_query(key)
    if result is not None:
        for tag in result.as_string_list():
            holder.add_tag(tag)
    return holder


def decode_properties(
    properties: QueryResult, registry: PropertyDecoderRegistry, holder: PropertyAndTagHolder
) -> PropertyAndTagHolder:
    """Decode every key of a properties block into `holder`.

    Keys without a registered decoder are skipped with a warning.
    """
    node = properties.as_node()
    for key in node.get_keys():
        decoder = registry.get(key)
        if decoder is None:
            logger.warning("No property decoder registered for key '%s' (at '%s')", key, node.path)
            continue
        raw = node.try_query(key)
        if raw is None:
            continue
        try:
            holder.add_property(key, decoder(raw))
        except StructureError:
            raise
        except Exception as e:
            raise PropertyDecodeError(f"Decoder for property '{key}' failed: {e}", str(raw.path)) from e
    return holder


def read_structure_metadata(
    config: ConfigNode, keys: StructureConfigKeys, registry: PropertyDecoderRegistry
) -> StructureMetaData:
    global_tags = read_tags(config, keys.global_tags, PropertyAndTagHolder())
    structure_tags = read_tags(config, keys.structure_tags, PropertyAndTagHolder())

    properties = config.try_query(keys.structure_properties)
    if properties is not None:
        decode_properties(properties, registry, structure_tags)

    margin = config.try_query(keys.margin_unit)
    margin_unit = margin.as_float() if margin is not None else 0.0

    return StructureMetaData(
        margin_unit=margin_unit,
        structure_tags=structure_tags.freeze(),
        global_tags=global_tags.freeze(),
    )


def propagate_global_tags(element: AbstractDungeonElement, tags: Iterable[str]) -> AbstractDungeonElement:
    """Return a copy of the tree with `tags` added to every element.

    Only the primary tree is touched; embedded structures carry their own
    global tags.
    """
    tags = frozenset(tags)
    if not tags:
        return element
    children = tuple(propagate_global_tags(child, tags) for child in element.children)
    return replace(element, metadata=element.metadata.with_tags(tags), children=children)
