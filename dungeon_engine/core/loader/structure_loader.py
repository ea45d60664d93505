"""Structure loading: configuration tree -> AbstractDungeonStructure.

Build order for one structure node:

1. build the element tree from the start node, collecting referenced names
2. read the structure level branch spec (its candidates are references too)
3. build every inline nested structure
4. build each remaining referenced name from its config path
5. read structure metadata and push global tags into the tree
6. validate

Any error aborts the whole build, nested builds included. Structures
resolved by path are built once per build_structure() call and shared
between every structure that references them.
"""
from __future__ import annotations
import logging
from typing import Dict, List, Optional

from ..config_tree import ConfigNode, ConfigPath, ConfigTree, PathLike
from ..errors import CyclicReferenceError
from ..keys import DEFAULT_KEYS, StructureConfigKeys
from ..model.base import AbstractDungeonStructure
from ..registry import PropertyDecoderRegistry
from ..validation import ValidationPolicy, validate_structure
from .elements import ElementBuilder, ReferenceCollector, read_branch_data
from .tags import propagate_global_tags, read_structure_metadata

__all__ = ["StructureLoader", "build_structure"]

logger = logging.getLogger(__name__)


class _BuildSession:
    """State shared by one top-level build and all of its nested builds."""

    def __init__(self):
        self.resolved: Dict[ConfigPath, AbstractDungeonStructure] = {}
        self.in_progress: List[ConfigPath] = []

    def enter(self, path: ConfigPath):
        if path in self.in_progress:
            chain = [str(p) for p in self.in_progress[self.in_progress.index(path):]] + [str(path)]
            raise CyclicReferenceError(chain)
        self.in_progress.append(path)

    def leave(self):
        self.in_progress.pop()


class StructureLoader:
    """Builds dungeon structures out of a ConfigTree."""

    def __init__(
        self,
        config: ConfigTree,
        registry: Optional[PropertyDecoderRegistry] = None,
        policy: Optional[ValidationPolicy] = None,
        keys: StructureConfigKeys = DEFAULT_KEYS,
    ):
        self.config = config
        self.registry = registry if registry is not None else PropertyDecoderRegistry()
        self.policy = policy or ValidationPolicy.from_settings()
        self.keys = keys
        self.elements = ElementBuilder(keys, self.registry)

    def build_structure(self, path: PathLike) -> AbstractDungeonStructure:
        """Build the structure stored at `path` together with everything it references."""
        config_path = ConfigPath.coerce(path, self.config.separator)
        return self._build_from_path(config_path, _BuildSession())

    def build_from_node(self, node: ConfigNode) -> AbstractDungeonStructure:
        """Build a structure from a node that is not addressed by a path."""
        return self._build_from_node(node, _BuildSession())

    def _build_from_path(self, path: ConfigPath, session: _BuildSession) -> AbstractDungeonStructure:
        cached = session.resolved.get(path)
        if cached is not None:
            logger.debug("Reusing structure '%s'", path)
            return cached
        session.enter(path)
        try:
            logger.debug("Building structure '%s'", path)
            structure = self._build_from_node(self.config.query(path).as_node(), session)
        finally:
            session.leave()
        session.resolved[path] = structure
        return structure

    def _build_from_node(self, node: ConfigNode, session: _BuildSession) -> AbstractDungeonStructure:
        keys = self.keys
        references = ReferenceCollector()

        root = self.elements.build(node.query(keys.start_node).as_node(), references)

        branch_data = read_branch_data(node, keys)
        if branch_data is not None:
            references.update(branch_data.candidate_names)

        embedded: Dict[str, AbstractDungeonStructure] = {}
        inline = node.try_query(keys.inline_nested)
        if inline is not None:
            inline_node = inline.as_node()
            for name in inline_node.get_keys():
                logger.debug("Building inline structure '%s' (at '%s')", name, inline_node.path)
                embedded[name] = self._build_from_node(inline_node.query(name).as_node(), session)

        for name in references:
            if name in embedded:
                continue
            nested_path = ConfigPath.parse(name, self.config.separator)
            embedded[name] = self._build_from_path(nested_path, session)

        meta = read_structure_metadata(node, keys, self.registry)
        root = propagate_global_tags(root, meta.global_tags.tags)

        structure = AbstractDungeonStructure(
            root=root,
            meta=meta,
            branch_data=branch_data,
            embedded_dungeons=embedded,
        )
        validate_structure(structure, self.policy, str(node.path))
        return structure


def build_structure(
    config: ConfigTree,
    path: PathLike,
    registry: Optional[PropertyDecoderRegistry] = None,
    policy: Optional[ValidationPolicy] = None,
) -> AbstractDungeonStructure:
    return StructureLoader(config, registry, policy).build_structure(path)
