"""Names of the configuration keys read by the structure loader."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple

__all__ = ["StructureConfigKeys", "DEFAULT_KEYS"]


@dataclass(frozen=True)
class StructureConfigKeys:
    # structure scope
    start_node: str = "start-node"
    inline_nested: str = "nested-structures"
    global_tags: str = "global-tags"
    structure_tags: str = "structure-tags"
    structure_properties: str = "structure-properties"
    margin_unit: str = "margin-unit"
    # branch spec, valid at structure scope and on any element
    branch_prototypes: str = "branch-prototypes"
    branch_max_count: str = "branch-max-count"
    branch_max_percent: str = "branch-max-percent"
    # element scope
    node: str = "node"
    connection: str = "connection"
    nested: str = "nested"
    subs: str = "subs"
    length: str = "length"
    tags: str = "tags"
    properties: str = "properties"
    optional_endpoint: str = "optional-endpoint"
    optional: str = "optional"

    @property
    def element_markers(self) -> Tuple[str, str, str]:
        """Markers in classification order."""
        return (self.node, self.connection, self.nested)


DEFAULT_KEYS = StructureConfigKeys()
