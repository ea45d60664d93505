"""Human readable and plain-data views of built structures."""
from __future__ import annotations
from typing import Any, Dict, List, Optional

from .model.base import (
    AbstractDungeonElement,
    AbstractDungeonStructure,
    BranchDataWrapper,
    ConnectionElement,
    NestedDungeonElement,
    NodeMetaData,
)

__all__ = ["describe_structure", "structure_to_dict", "element_to_dict"]

_INDENT = "  "


def _branch_label(branch: BranchDataWrapper) -> str:
    if branch.max_count is not None:
        cap = f"max {branch.max_count}"
    else:
        cap = f"max {branch.max_percent:.0%}"
    return f"branch[{', '.join(branch.candidate_names)}; {cap}]"


def _element_line(element: AbstractDungeonElement) -> str:
    meta = element.metadata
    if isinstance(element, ConnectionElement):
        head = f"connection {element.style} ({element.length.min}-{element.length.max})"
    elif isinstance(element, NestedDungeonElement):
        head = f"nested -> {element.reference_path}"
    else:
        head = f"node {element.style}"
    extras = []
    if meta.tags:
        extras.append("tags=" + ",".join(sorted(meta.tags)))
    if meta.properties:
        extras.append("props=" + ",".join(sorted(meta.properties)))
    if meta.branch_data is not None:
        extras.append(_branch_label(meta.branch_data))
    if meta.optional_endpoint:
        extras.append("optional-endpoint")
    if meta.optional_node is not None:
        extras.append("optional")
    return head + (" [" + " ".join(extras) + "]" if extras else "")


def describe_structure(structure: AbstractDungeonStructure, name: Optional[str] = None, depth: int = 0) -> List[str]:
    """Indented outline of a structure and, below it, its embedded structures."""
    pad = _INDENT * depth
    lines = [f"{pad}structure {name}" if name else f"{pad}structure"]
    meta = structure.meta
    if meta.margin_unit:
        lines.append(f"{pad}{_INDENT}margin unit: {meta.margin_unit}")
    if meta.global_tags.tags:
        lines.append(f"{pad}{_INDENT}global tags: {', '.join(sorted(meta.global_tags.tags))}")
    if meta.structure_tags.tags:
        lines.append(f"{pad}{_INDENT}structure tags: {', '.join(sorted(meta.structure_tags.tags))}")
    if meta.structure_tags.properties:
        lines.append(f"{pad}{_INDENT}properties: {', '.join(sorted(meta.structure_tags.properties))}")
    if structure.branch_data is not None:
        lines.append(f"{pad}{_INDENT}{_branch_label(structure.branch_data)}")

    def walk(element: AbstractDungeonElement, level: int):
        lines.append(_INDENT * level + "- " + _element_line(element))
        for child in element.children:
            walk(child, level + 1)

    walk(structure.root, depth + 1)
    for embedded_name, embedded in structure.embedded_dungeons.items():
        lines.extend(describe_structure(embedded, embedded_name, depth + 1))
    return lines


def _metadata_to_dict(meta: NodeMetaData) -> Dict[str, Any]:
    data: Dict[str, Any] = {"tags": sorted(meta.tags)}
    if meta.properties:
        data["properties"] = dict(meta.properties)
    if meta.branch_data is not None:
        data["branch"] = _branch_to_dict(meta.branch_data)
    if meta.optional_endpoint:
        data["optional_endpoint"] = True
    if meta.optional_node is not None:
        data["optional"] = {"required": meta.optional_node.required}
    return data


def _branch_to_dict(branch: BranchDataWrapper) -> Dict[str, Any]:
    data: Dict[str, Any] = {"candidates": list(branch.candidate_names)}
    if branch.max_count is not None:
        data["max_count"] = branch.max_count
    else:
        data["max_percent"] = branch.max_percent
    return data


def element_to_dict(element: AbstractDungeonElement) -> Dict[str, Any]:
    data: Dict[str, Any] = {"kind": element.kind.value}
    if isinstance(element, NestedDungeonElement):
        data["reference"] = element.reference_path
    else:
        data["style"] = element.style
    if isinstance(element, ConnectionElement):
        data["length"] = [element.length.min, element.length.max]
    data["metadata"] = _metadata_to_dict(element.metadata)
    data["children"] = [element_to_dict(child) for child in element.children]
    return data


def structure_to_dict(structure: AbstractDungeonStructure) -> Dict[str, Any]:
    meta = structure.meta
    data: Dict[str, Any] = {
        "margin_unit": meta.margin_unit,
        "global_tags": sorted(meta.global_tags.tags),
        "structure_tags": sorted(meta.structure_tags.tags),
        "properties": dict(meta.structure_tags.properties),
        "root": element_to_dict(structure.root),
        "embedded": {name: structure_to_dict(s) for name, s in structure.embedded_dungeons.items()},
    }
    if structure.branch_data is not None:
        data["branch"] = _branch_to_dict(structure.branch_data)
    return data
