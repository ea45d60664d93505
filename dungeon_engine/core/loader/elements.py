"""Element construction from configuration nodes.

Turns one config node into one dungeon element (node, connection or nested
structure reference), recursing into its `subs`. Names of referenced
structures are collected on the side for the structure loader to resolve.
"""
from __future__ import annotations
from typing import Dict, Optional, Tuple

from ..config_tree import ConfigNode, QueryResult
from ..errors import ConfigValueError, ConflictingBranchConstraintError, MissingBranchConstraintError, UnknownElementKindError
from ..keys import StructureConfigKeys
from ..model.base import (
    AbstractDungeonElement,
    BranchDataWrapper,
    ConnectionElement,
    ElementKind,
    IntRange,
    MaxCount,
    MaxPercent,
    NestedDungeonElement,
    NodeElement,
    NodeMetaData,
    OptionalNodeData,
    PropertyAndTagHolder,
)
from ..registry import PropertyDecoderRegistry
from .tags import decode_properties, read_tags

__all__ = ["ReferenceCollector", "ElementBuilder", "read_branch_data", "classify_element"]


class ReferenceCollector:
    """Ordered set of referenced structure names (first seen first)."""

    def __init__(self):
        self._names: Dict[str, None] = {}

    def add(self, name: str):
        self._names.setdefault(name, None)

    def update(self, names):
        for name in names:
            self.add(name)

    def __iter__(self):
        return iter(list(self._names))

    def __contains__(self, name: str) -> bool:
        return name in self._names

    def __len__(self) -> int:
        return len(self._names)


def read_branch_data(config: ConfigNode, keys: StructureConfigKeys) -> Optional[BranchDataWrapper]:
    """Read the branch spec of `config`, if it declares one.

    Exactly one of the count cap and the percentage cap must be given.
    """
    prototypes = config.try_query(keys.branch_prototypes)
    if prototypes is None:
        return None

    names = tuple(prototypes.as_string_list())
    if not names:
        raise ConfigValueError("Branch spec must name at least one candidate", str(prototypes.path))

    max_count = config.try_query(keys.branch_max_count)
    max_percent = config.try_query(keys.branch_max_percent)

    if max_count is not None and max_percent is not None:
        raise ConflictingBranchConstraintError(
            f"'{keys.branch_max_count}' and '{keys.branch_max_percent}' cannot both be set", str(config.path)
        )
    if max_count is not None:
        return BranchDataWrapper(names, MaxCount(max_count.as_int()))
    if max_percent is not None:
        return BranchDataWrapper(names, MaxPercent(max_percent.as_float()))
    raise MissingBranchConstraintError(
        f"Branch spec needs '{keys.branch_max_count}' or '{keys.branch_max_percent}'", str(config.path)
    )


def classify_element(config: ConfigNode, keys: StructureConfigKeys) -> Tuple[ElementKind, QueryResult]:
    """Return the element kind and its marker value.

    Markers are checked in order node, connection, nested; the first present
    one wins.
    """
    for kind, marker in zip(ElementKind, keys.element_markers):
        result = config.try_query(marker)
        if result is not None:
            return kind, result
    raise UnknownElementKindError(keys.element_markers, str(config.path))


class ElementBuilder:
    def __init__(self, keys: StructureConfigKeys, registry: PropertyDecoderRegistry):
        self.keys = keys
        self.registry = registry

    def build(self, config: ConfigNode, collector: ReferenceCollector) -> AbstractDungeonElement:
        kind, marker = classify_element(config, self.keys)
        value = marker.as_string()

        if kind is ElementKind.CONNECTION:
            lo, hi = config.query(self.keys.length).as_int_range()
            return ConnectionElement(
                style=value,
                length=IntRange(lo, hi),
                metadata=self.collect_metadata(config),
                children=self._build_children(config, collector),
            )
        if kind is ElementKind.NESTED:
            collector.add(value)
            return NestedDungeonElement(
                reference_path=value,
                metadata=self.collect_metadata(config),
                children=self._build_children(config, collector),
            )
        return NodeElement(
            style=value,
            metadata=self.collect_metadata(config),
            children=self._build_children(config, collector),
        )

    def _build_children(self, config: ConfigNode, collector: ReferenceCollector) -> Tuple[AbstractDungeonElement, ...]:
        subs = config.try_query(self.keys.subs)
        if subs is None:
            return ()
        return tuple(self.build(sub.as_node(), collector) for sub in subs.as_node_list())

    def collect_metadata(self, config: ConfigNode) -> NodeMetaData:
        holder = read_tags(config, self.keys.tags, PropertyAndTagHolder())
        properties = config.try_query(self.keys.properties)
        if properties is not None:
            decode_properties(properties, self.registry, holder)

        # both flags are presence-only
        optional_node = OptionalNodeData(required=True) if self.keys.optional in config else None
        return NodeMetaData(
            tag_holder=holder.freeze(),
            branch_data=read_branch_data(config, self.keys),
            optional_endpoint=self.keys.optional_endpoint in config,
            optional_node=optional_node,
        )
