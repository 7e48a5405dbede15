"""
Alias rewriting: turns external module specifiers into deterministic local names.
"""

from .aliases import alias_for, rewrite_import_nodes, rewrite_module

__all__ = ["alias_for", "rewrite_module", "rewrite_import_nodes"]
