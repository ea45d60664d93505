"""Loaders turning configuration trees into dungeon structures."""

from .structure_loader import StructureLoader, build_structure

__all__ = ["StructureLoader", "build_structure"]
