"""
Registry builder: compiles a directory of TypeScript modules into a staged,
alias-rewritten copy plus one barrel index re-exporting every module.
"""

from .config import RegistryConfig, load_config
from .errors import ConfigValidationError, FilesystemError, ParseError, RegistryError

__all__ = [
    "RegistryConfig",
    "load_config",
    "RegistryError",
    "ParseError",
    "FilesystemError",
    "ConfigValidationError",
]

__version__ = "0.1.0"
