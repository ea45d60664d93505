"""Bootstrap utilities: load structure documents and build a structure."""
from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional, Union

from config import get_config_dir, get_path_separator, is_schema_check_enabled
from dungeon_engine.core.config_tree import ConfigPath
from dungeon_engine.core.keys import DEFAULT_KEYS, StructureConfigKeys
from dungeon_engine.core.loader.structure_loader import StructureLoader
from dungeon_engine.core.model.base import AbstractDungeonStructure
from dungeon_engine.core.registry import PropertyDecoderRegistry
from dungeon_engine.core.validation import ValidationPolicy
from dungeon_engine.document.loader import load_config_dir, load_config_file
from dungeon_engine.document.validator import validate_structure_document

logger = logging.getLogger(__name__)


def load_structure(
    structure_path: str,
    config_dir: Optional[Union[str, Path]] = None,
    registry: Optional[PropertyDecoderRegistry] = None,
    policy: Optional[ValidationPolicy] = None,
    check_schema: Optional[bool] = None,
    keys: StructureConfigKeys = DEFAULT_KEYS,
) -> AbstractDungeonStructure:
    """Load the documents under `config_dir` (or a single JSON file) and build `structure_path`."""
    source = Path(config_dir) if config_dir is not None else get_config_dir()
    separator = get_path_separator()
    if source.is_file():
        config = load_config_file(source, separator)
    else:
        config = load_config_dir(source, separator=separator)

    if check_schema is None:
        check_schema = is_schema_check_enabled()
    if check_schema:
        path = ConfigPath.parse(structure_path, separator)
        validate_structure_document(config.query(path).value, keys, str(path))

    loader = StructureLoader(config, registry, policy, keys)
    structure = loader.build_structure(structure_path)
    logger.info("Built structure '%s' with %d embedded structure(s)", structure_path, len(structure.embedded_dungeons))
    return structure
