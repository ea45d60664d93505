"""Abstract dungeon structure loading.

Builds typed dungeon structures (rooms, connections, references to other
structures) from hierarchical JSON configuration.
"""

from .core.config_tree import ConfigPath, ConfigTree, ConfigNode, QueryResult
from .core.errors import (
    StructureError,
    ConfigValueError,
    MissingRequiredFieldError,
    UnknownElementKindError,
    ConflictingBranchConstraintError,
    MissingBranchConstraintError,
    CyclicReferenceError,
    InvalidStructureError,
    PropertyDecodeError,
    DuplicateDecoderError,
    RegistryFrozenError,
    SchemaViolationError,
)
from .core.keys import StructureConfigKeys, DEFAULT_KEYS
from .core.registry import PropertyDecoderRegistry
from .core.structure import (
    AbstractDungeonStructure,
    NodeElement,
    ConnectionElement,
    NestedDungeonElement,
    NodeMetaData,
    BranchDataWrapper,
    MaxCount,
    MaxPercent,
    IntRange,
    StructureLoader,
    build_structure,
    ValidationPolicy,
    validate_structure,
)

__all__ = [
    'ConfigPath', 'ConfigTree', 'ConfigNode', 'QueryResult',
    'StructureError', 'ConfigValueError', 'MissingRequiredFieldError', 'UnknownElementKindError',
    'ConflictingBranchConstraintError', 'MissingBranchConstraintError', 'CyclicReferenceError',
    'InvalidStructureError', 'PropertyDecodeError', 'DuplicateDecoderError', 'RegistryFrozenError',
    'SchemaViolationError',
    'StructureConfigKeys', 'DEFAULT_KEYS',
    'PropertyDecoderRegistry',
    'AbstractDungeonStructure', 'NodeElement', 'ConnectionElement', 'NestedDungeonElement',
    'NodeMetaData', 'BranchDataWrapper', 'MaxCount', 'MaxPercent', 'IntRange',
    'StructureLoader', 'build_structure',
    'ValidationPolicy', 'validate_structure',
]
