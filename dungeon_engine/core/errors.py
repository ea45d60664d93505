"""Exception taxonomy for structure loading.

Every failure raised while reading configuration or building a structure
derives from StructureError, so callers can catch a single type.
"""
from __future__ import annotations
from typing import List, Optional, Sequence

__all__ = [
    "StructureError",
    "ConfigValueError",
    "MissingRequiredFieldError",
    "UnknownElementKindError",
    "ConflictingBranchConstraintError",
    "MissingBranchConstraintError",
    "CyclicReferenceError",
    "InvalidStructureError",
    "PropertyDecodeError",
    "DuplicateDecoderError",
    "RegistryFrozenError",
    "SchemaViolationError",
]


class StructureError(Exception):
    """Base class; `path` is the config path where the problem was found."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.message = message
        self.path = path
        super().__init__(f"{message} (at '{path}')" if path else message)


class ConfigValueError(StructureError):
    """A config value has the wrong type or shape."""
    pass


class MissingRequiredFieldError(StructureError):
    def __init__(self, key: str, path: Optional[str] = None):
        self.key = key
        super().__init__(f"Missing required field '{key}'", path)


class UnknownElementKindError(StructureError):
    def __init__(self, markers: Sequence[str], path: Optional[str] = None):
        self.markers = tuple(markers)
        super().__init__(
            "Unknown dungeon element kind: expected one of " + ", ".join(f"'{m}'" for m in self.markers),
            path,
        )


class ConflictingBranchConstraintError(StructureError):
    pass


class MissingBranchConstraintError(StructureError):
    pass


class CyclicReferenceError(StructureError):
    """Nested structure resolution re-entered a structure still being built."""

    def __init__(self, chain: Sequence[str]):
        self.chain: List[str] = list(chain)
        super().__init__("Cyclic nested structure reference: " + " -> ".join(self.chain), self.chain[-1])


class InvalidStructureError(StructureError):
    def __init__(self, issues: Sequence[str], path: Optional[str] = None):
        self.issues: List[str] = list(issues)
        super().__init__("Invalid dungeon structure: " + "; ".join(self.issues), path)


class PropertyDecodeError(StructureError):
    pass


class DuplicateDecoderError(StructureError):
    pass


class RegistryFrozenError(StructureError):
    pass


class SchemaViolationError(StructureError):
    pass
