"""Property decoder registry.

Maps a property key to the function that turns its raw config value into a
typed object. The registry is an explicit object handed to the loader; fill
it during start-up, optionally freeze it, then share it between builds.
"""
from __future__ import annotations
import threading
from typing import Any, Callable, Dict, List, Mapping, Optional

from .config_tree import QueryResult
from .errors import DuplicateDecoderError, RegistryFrozenError

__all__ = ["PropertyDecoder", "PropertyDecoderRegistry"]

PropertyDecoder = Callable[[QueryResult], Any]


class PropertyDecoderRegistry:
    """Registry of property decoders keyed by property name."""

    def __init__(self, decoders: Optional[Mapping[str, PropertyDecoder]] = None):
        self._decoders: Dict[str, PropertyDecoder] = {}
        self._lock = threading.Lock()
        self._frozen = False
        for key, decoder in (decoders or {}).items():
            self.register(key, decoder)

    def register(self, key: str, decoder: PropertyDecoder):
        """Register `decoder` for `key`. A key can only be registered once."""
        if not isinstance(key, str) or not key.strip():
            raise ValueError("property key must be a non-empty string")
        if not callable(decoder):
            raise TypeError(f"decoder for '{key}' must be callable")
        with self._lock:
            if self._frozen:
                raise RegistryFrozenError(f"Cannot register '{key}': registry is frozen")
            if key in self._decoders:
                raise DuplicateDecoderError(f"A decoder is already registered for property '{key}'")
            self._decoders[key] = decoder

    def decoder(self, key: str):
        """Decorator form of register()."""
        def wrap(func: PropertyDecoder) -> PropertyDecoder:
            self.register(key, func)
            return func
        return wrap

    def get(self, key: str) -> Optional[PropertyDecoder]:
        return self._decoders.get(key)

    def keys(self) -> List[str]:
        return list(self._decoders)

    def freeze(self) -> "PropertyDecoderRegistry":
        with self._lock:
            self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __contains__(self, key: str) -> bool:
        return key in self._decoders

    def __len__(self) -> int:
        return len(self._decoders)
