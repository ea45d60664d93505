"""Final consistency checks for built dungeon structures.

collect_structure_issues() returns a list of human readable problems (empty
if the structure is fine); validate_structure() raises InvalidStructureError
when that list is not empty. The mandatory rules always run, the rest are
driven by ValidationPolicy.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Tuple

from config import is_strict_percent

from .errors import InvalidStructureError
from .model.base import (
    AbstractDungeonStructure,
    BranchDataWrapper,
    ConnectionElement,
    MaxCount,
    MaxPercent,
    NestedDungeonElement,
    iter_elements,
)

__all__ = ["StructureRule", "ValidationPolicy", "collect_structure_issues", "validate_structure"]

StructureRule = Callable[[AbstractDungeonStructure], Iterable[str]]


@dataclass(frozen=True)
class ValidationPolicy:
    allow_empty_style: bool = False
    allow_negative_length: bool = False
    # inclusive bounds for MaxPercent; None disables the check
    percent_bounds: Optional[Tuple[float, float]] = (0.0, 1.0)
    include_embedded: bool = False
    extra_rules: Tuple[StructureRule, ...] = ()

    @classmethod
    def from_settings(cls) -> "ValidationPolicy":
        """Default policy with percent bounds taken from DUNGEON_STRICT_PERCENT."""
        return cls(percent_bounds=(0.0, 1.0) if is_strict_percent() else None)


def _describe(element) -> str:
    label = getattr(element, "style", None) or getattr(element, "reference_path", "")
    return f"{element.kind.value} '{label}'"


def _branch_issues(where: str, branch: BranchDataWrapper, policy: ValidationPolicy) -> List[str]:
    issues: List[str] = []
    if not branch.candidate_names:
        issues.append(f"{where}: branch spec has no candidate names")
    elif any(not isinstance(n, str) or not n for n in branch.candidate_names):
        issues.append(f"{where}: branch spec has an empty candidate name")
    cap = branch.cap
    if isinstance(cap, MaxCount):
        if isinstance(cap.value, bool) or not isinstance(cap.value, int) or cap.value < 0:
            issues.append(f"{where}: branch max count must be a non-negative integer, got {cap.value!r}")
    elif isinstance(cap, MaxPercent):
        bounds = policy.percent_bounds
        if bounds is not None and not (bounds[0] <= cap.value <= bounds[1]):
            issues.append(f"{where}: branch max percent {cap.value} outside [{bounds[0]}, {bounds[1]}]")
    else:
        issues.append(f"{where}: branch spec needs exactly one of max count or max percent")
    return issues


def collect_structure_issues(
    structure: AbstractDungeonStructure, policy: Optional[ValidationPolicy] = None
) -> List[str]:
    policy = policy or ValidationPolicy()
    issues: List[str] = []

    if structure.branch_data is not None:
        issues.extend(_branch_issues("structure", structure.branch_data, policy))
        for name in structure.branch_data.candidate_names:
            if name not in structure.embedded_dungeons:
                issues.append(f"structure: branch candidate '{name}' has no embedded dungeon")

    for element in iter_elements(structure.root):
        where = _describe(element)
        if isinstance(element, ConnectionElement):
            length = element.length
            if not isinstance(length.min, int) or not isinstance(length.max, int):
                issues.append(f"{where}: length bounds must be integers")
            elif length.min > length.max:
                issues.append(f"{where}: length range [{length.min}, {length.max}] is inverted")
            elif length.min < 0 and not policy.allow_negative_length:
                issues.append(f"{where}: length range [{length.min}, {length.max}] is negative")
        if isinstance(element, NestedDungeonElement):
            if element.reference_path not in structure.embedded_dungeons:
                issues.append(f"{where}: referenced structure was not resolved")
        elif not element.style and not policy.allow_empty_style:
            issues.append(f"{element.kind.value} element has an empty style")
        if element.metadata.branch_data is not None:
            issues.extend(_branch_issues(where, element.metadata.branch_data, policy))

    for rule in policy.extra_rules:
        issues.extend(rule(structure))

    if policy.include_embedded:
        for name, embedded in structure.embedded_dungeons.items():
            issues.extend(f"[{name}] {issue}" for issue in collect_structure_issues(embedded, policy))
    return issues


def validate_structure(
    structure: AbstractDungeonStructure, policy: Optional[ValidationPolicy] = None, path: Optional[str] = None
):
    issues = collect_structure_issues(structure, policy)
    if issues:
        raise InvalidStructureError(issues, path)
