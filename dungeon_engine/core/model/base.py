"""Data model for abstract dungeon structures.

This module only contains pure dataclasses without loading or validation
logic. Instances are immutable once the owning structure has been built;
downstream generation reads them, it never edits them.
"""
from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterable, Iterator, Mapping, Optional, Set, Tuple, Union

__all__ = [
    "ElementKind",
    "IntRange",
    "MaxCount",
    "MaxPercent",
    "BranchCap",
    "BranchDataWrapper",
    "OptionalNodeData",
    "PropertyAndTagHolder",
    "TagsAndProperties",
    "NodeMetaData",
    "NodeElement",
    "ConnectionElement",
    "NestedDungeonElement",
    "AbstractDungeonElement",
    "StructureMetaData",
    "AbstractDungeonStructure",
    "iter_elements",
    "find_elements",
]


class ElementKind(Enum):
    NODE = "node"
    CONNECTION = "connection"
    NESTED = "nested"


@dataclass(frozen=True)
class IntRange:
    min: int
    max: int

    def __contains__(self, value: int) -> bool:
        return self.min <= value <= self.max


@dataclass(frozen=True)
class MaxCount:
    """Select at most `value` of the branch candidates."""
    value: int


@dataclass(frozen=True)
class MaxPercent:
    """Select at most `value` (a fraction) of the branch candidates."""
    value: float


BranchCap = Union[MaxCount, MaxPercent]


@dataclass(frozen=True)
class BranchDataWrapper:
    candidate_names: Tuple[str, ...]
    cap: BranchCap

    @property
    def max_count(self) -> Optional[int]:
        return self.cap.value if isinstance(self.cap, MaxCount) else None

    @property
    def max_percent(self) -> Optional[float]:
        return self.cap.value if isinstance(self.cap, MaxPercent) else None


@dataclass(frozen=True)
class OptionalNodeData:
    required: bool = True


@dataclass(frozen=True)
class TagsAndProperties:
    tags: FrozenSet[str] = frozenset()
    # read-only view; not part of the hash
    properties: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        object.__setattr__(self, "properties", MappingProxyType(dict(self.properties)))

    def with_tags(self, tags: Iterable[str]) -> "TagsAndProperties":
        return replace(self, tags=self.tags | frozenset(tags))


@dataclass
class PropertyAndTagHolder:
    """Mutable accumulator used while a structure is being read."""
    tags: Set[str] = field(default_factory=set)
    properties: Dict[str, Any] = field(default_factory=dict)

    def add_tag(self, tag: str):
        self.tags.add(tag)

    def add_property(self, key: str, value: Any):
        self.properties[key] = value

    def freeze(self) -> TagsAndProperties:
        return TagsAndProperties(frozenset(self.tags), dict(self.properties))


@dataclass(frozen=True)
class NodeMetaData:
    tag_holder: TagsAndProperties = field(default_factory=TagsAndProperties)
    branch_data: Optional[BranchDataWrapper] = None
    optional_endpoint: bool = False
    optional_node: Optional[OptionalNodeData] = None

    @property
    def tags(self) -> FrozenSet[str]:
        return self.tag_holder.tags

    @property
    def properties(self) -> Mapping[str, Any]:
        return self.tag_holder.properties

    def with_tags(self, tags: Iterable[str]) -> "NodeMetaData":
        return replace(self, tag_holder=self.tag_holder.with_tags(tags))


@dataclass(frozen=True)
class NodeElement:
    style: str
    metadata: NodeMetaData = field(default_factory=NodeMetaData)
    children: Tuple["AbstractDungeonElement", ...] = ()

    kind = ElementKind.NODE


@dataclass(frozen=True)
class ConnectionElement:
    style: str
    length: IntRange
    metadata: NodeMetaData = field(default_factory=NodeMetaData)
    children: Tuple["AbstractDungeonElement", ...] = ()

    kind = ElementKind.CONNECTION


@dataclass(frozen=True)
class NestedDungeonElement:
    """Placeholder for another structure, looked up by `reference_path`.

    The element may still carry its own local children; both the referenced
    structure and the children are kept.
    """
    reference_path: str
    metadata: NodeMetaData = field(default_factory=NodeMetaData)
    children: Tuple["AbstractDungeonElement", ...] = ()

    kind = ElementKind.NESTED


AbstractDungeonElement = Union[NodeElement, ConnectionElement, NestedDungeonElement]


@dataclass(frozen=True)
class StructureMetaData:
    margin_unit: float = 0.0
    structure_tags: TagsAndProperties = field(default_factory=TagsAndProperties)
    global_tags: TagsAndProperties = field(default_factory=TagsAndProperties)


@dataclass(frozen=True)
class AbstractDungeonStructure:
    root: AbstractDungeonElement
    meta: StructureMetaData = field(default_factory=StructureMetaData)
    branch_data: Optional[BranchDataWrapper] = None
    embedded_dungeons: Mapping[str, "AbstractDungeonStructure"] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        object.__setattr__(self, "embedded_dungeons", MappingProxyType(dict(self.embedded_dungeons)))

    def nested_structure(self, element: NestedDungeonElement) -> "AbstractDungeonStructure":
        return self.embedded_dungeons[element.reference_path]

    def elements(self) -> Iterator[AbstractDungeonElement]:
        return iter_elements(self.root)


def iter_elements(root: AbstractDungeonElement) -> Iterator[AbstractDungeonElement]:
    """Pre-order walk of the primary tree (embedded structures excluded)."""
    stack = [root]
    while stack:
        element = stack.pop()
        yield element
        stack.extend(reversed(element.children))


def find_elements(root: AbstractDungeonElement, tag: str) -> Iterator[AbstractDungeonElement]:
    return (e for e in iter_elements(root) if tag in e.metadata.tags)
