"""Facade for the structure model & loader.

Re-exports dataclasses and the build/validate functions from the internal
modules to provide a stable import surface.
"""
from .model.base import (
    ElementKind,
    IntRange,
    MaxCount,
    MaxPercent,
    BranchDataWrapper,
    OptionalNodeData,
    PropertyAndTagHolder,
    TagsAndProperties,
    NodeMetaData,
    NodeElement,
    ConnectionElement,
    NestedDungeonElement,
    AbstractDungeonElement,
    StructureMetaData,
    AbstractDungeonStructure,
    iter_elements,
    find_elements,
)
from .loader.structure_loader import StructureLoader, build_structure
from .validation import ValidationPolicy, collect_structure_issues, validate_structure

__all__ = [
    "ElementKind",
    "IntRange",
    "MaxCount",
    "MaxPercent",
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
    "StructureLoader",
    "build_structure",
    "ValidationPolicy",
    "collect_structure_issues",
    "validate_structure",
]
