"""Reading structure documents from disk and checking their shape."""

from .loader import load_config_file, load_config_dir
from .validator import validate_structure_document

__all__ = ["load_config_file", "load_config_dir", "validate_structure_document"]
