"""
Module scanning and import extraction.
Lists the eligible modules of a registry root and pulls the specifiers out of
their import declarations.
"""

from .imports import ImportReference, extract_imports, extract_references
from .scanner import SourceModule, read_module, scan_modules

__all__ = [
    "scan_modules",
    "read_module",
    "SourceModule",
    "extract_imports",
    "extract_references",
    "ImportReference",
]
