"""Load structure documents from JSON files.

A single file becomes a ConfigTree as-is. A directory is merged into one
tree where every *.json file is mounted under its relative path without the
extension, so `dungeons/crypt.json` holding {"main": {...}} is addressed as
`dungeons.crypt.main`.
"""
from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

from ..core.config_tree import ConfigTree
from ..core.errors import ConfigValueError

__all__ = ["load_config_file", "load_config_dir", "read_json"]

logger = logging.getLogger(__name__)


def read_json(path: Union[str, Path]) -> Any:
    """Read one JSON file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ConfigValueError: If the file is not valid JSON
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise FileNotFoundError(f"Structure file not found: {file_path}")
    try:
        with file_path.open("r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigValueError(f"Invalid JSON in structure file: {e}", str(file_path)) from e


def load_config_file(path: Union[str, Path], separator: str = ".") -> ConfigTree:
    data = read_json(path)
    logger.info("Loaded structure file %s", path)
    return ConfigTree(data, separator)


def _mount(root: Dict[str, Any], segments, data: Any, source: Path):
    target = root
    for segment in segments[:-1]:
        existing = target.setdefault(segment, {})
        if not isinstance(existing, dict):
            raise ConfigValueError(f"Cannot mount {source}: '{segment}' is already a value")
        target = existing
    leaf = segments[-1]
    if leaf in target:
        if isinstance(target[leaf], dict) and isinstance(data, dict) and not set(target[leaf]) & set(data):
            target[leaf].update(data)
            return
        raise ConfigValueError(f"Cannot mount {source}: '{'.'.join(segments)}' is defined twice")
    target[leaf] = data


def load_config_dir(path: Union[str, Path], recursive: bool = True, separator: str = ".") -> ConfigTree:
    base = Path(path)
    if not base.is_dir():
        raise FileNotFoundError(f"Structure directory not found: {base}")
    pattern = "**/*.json" if recursive else "*.json"
    root: Dict[str, Any] = {}
    count = 0
    for file_path in sorted(base.glob(pattern)):
        if not file_path.is_file():
            continue
        segments = list(file_path.relative_to(base).with_suffix("").parts)
        _mount(root, segments, read_json(file_path), file_path)
        count += 1
    logger.info("Loaded %d structure file(s) from %s", count, base)
    return ConfigTree(root, separator)
