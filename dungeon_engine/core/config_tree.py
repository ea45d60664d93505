"""Hierarchical access to already-parsed configuration data.

Wraps plain JSON data (dicts, lists, scalars) with path-aware accessors so
every lookup and type coercion can report exactly where it failed. No I/O is
performed here; see dungeon_engine.document.loader for reading files.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Sequence, Tuple, Union

from .errors import ConfigValueError, MissingRequiredFieldError

__all__ = ["ConfigPath", "QueryResult", "ConfigNode", "ConfigTree", "PathLike"]


@dataclass(frozen=True)
class ConfigPath:
    segments: Tuple[str, ...] = ()

    @classmethod
    def parse(cls, dotted: str, separator: str = ".") -> "ConfigPath":
        return cls(tuple(s for s in dotted.split(separator) if s))

    @classmethod
    def coerce(cls, value: "PathLike", separator: str = ".") -> "ConfigPath":
        if isinstance(value, ConfigPath):
            return value
        if isinstance(value, str):
            return cls.parse(value, separator)
        return cls(tuple(str(s) for s in value))

    def child(self, key: Union[str, int]) -> "ConfigPath":
        return ConfigPath(self.segments + (str(key),))

    def __str__(self) -> str:
        return ".".join(self.segments) or "<root>"


PathLike = Union[ConfigPath, str, Sequence[str]]


class QueryResult:
    """A single looked-up value plus the path it was found at."""

    def __init__(self, value: Any, path: ConfigPath):
        self.value = value
        self.path = path

    def __repr__(self) -> str:
        return f"QueryResult({self.value!r}, path='{self.path}')"

    def _fail(self, expected: str) -> ConfigValueError:
        return ConfigValueError(f"Expected {expected}, got {type(self.value).__name__}", str(self.path))

    def as_node(self) -> "ConfigNode":
        if not isinstance(self.value, Mapping):
            raise self._fail("an object")
        return ConfigNode(self.value, self.path)

    def as_string(self) -> str:
        if not isinstance(self.value, str):
            raise self._fail("a string")
        return self.value

    def as_int(self) -> int:
        v = self.value
        if isinstance(v, bool):
            raise self._fail("an integer")
        if isinstance(v, int):
            return v
        if isinstance(v, float) and v.is_integer():
            return int(v)
        if isinstance(v, str):
            try:
                return int(v.strip())
            except ValueError:
                pass
        raise self._fail("an integer")

    def as_float(self) -> float:
        v = self.value
        if isinstance(v, bool):
            raise self._fail("a number")
        if isinstance(v, (int, float)):
            return float(v)
        if isinstance(v, str):
            try:
                return float(v.strip())
            except ValueError:
                pass
        raise self._fail("a number")

    def as_node_list(self) -> List["QueryResult"]:
        if not isinstance(self.value, list):
            raise self._fail("a list")
        return [QueryResult(item, self.path.child(i)) for i, item in enumerate(self.value)]

    def as_string_list(self) -> List[str]:
        return [item.as_string() for item in self.as_node_list()]

    def as_int_range(self) -> Tuple[int, int]:
        """Read a (min, max) pair from {"min": a, "max": b} or [a, b]."""
        if isinstance(self.value, Mapping):
            node = self.as_node()
            return node.query("min").as_int(), node.query("max").as_int()
        if isinstance(self.value, list) and len(self.value) == 2:
            lo, hi = self.as_node_list()
            return lo.as_int(), hi.as_int()
        raise self._fail("a range ({min, max} or [min, max])")


class ConfigNode:
    """An object (mapping) inside the configuration tree."""

    def __init__(self, data: Mapping[str, Any], path: Optional[ConfigPath] = None):
        self.data = data
        self.path = path or ConfigPath()

    def __repr__(self) -> str:
        return f"ConfigNode(path='{self.path}', keys={self.get_keys()})"

    def __contains__(self, key: str) -> bool:
        return self.data.get(key) is not None

    def query(self, key: str) -> QueryResult:
        result = self.try_query(key)
        if result is None:
            raise MissingRequiredFieldError(key, str(self.path))
        return result

    def try_query(self, key: str) -> Optional[QueryResult]:
        # JSON null is treated the same as an absent key
        value = self.data.get(key)
        if value is None:
            return None
        return QueryResult(value, self.path.child(key))

    def get_keys(self) -> List[str]:
        return list(self.data.keys())


class ConfigTree:
    """Root of a configuration document, addressable by ConfigPath."""

    def __init__(self, data: Mapping[str, Any], separator: str = "."):
        if not isinstance(data, Mapping):
            raise ConfigValueError(f"Configuration root must be an object, got {type(data).__name__}")
        self.data = data
        self.separator = separator

    @property
    def root(self) -> ConfigNode:
        return ConfigNode(self.data)

    def query(self, path: PathLike) -> QueryResult:
        config_path = ConfigPath.coerce(path, self.separator)
        current = QueryResult(self.data, ConfigPath())
        for segment in config_path.segments:
            current = current.as_node().query(segment)
        return current

    def try_query(self, path: PathLike) -> Optional[QueryResult]:
        try:
            return self.query(path)
        except MissingRequiredFieldError:
            return None
