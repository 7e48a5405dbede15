"""
Derives local aliases for module specifiers and rewrites module content with them.
"""

import logging
import re
from typing import Iterable

from registry_builder.parser.imports import ImportReference

logger = logging.getLogger(__name__)

_UNSAFE = re.compile(r"[^A-Za-z0-9_]")


def alias_for(specifier: str) -> str:
    """
    Alias for a specifier: its last path segment with every character outside
    [A-Za-z0-9_] replaced by "_", prefixed with "_".

    "./icons" -> "_icons", "react" -> "_react", "@radix-ui/react-slot" -> "_react_slot".
    Distinct specifiers sharing a last segment get the same alias.
    """
    return "_" + _UNSAFE.sub("_", specifier.rsplit("/", 1)[-1])


def _distinct(specifiers: Iterable[str]) -> list[str]:
    seen: dict[str, None] = {}
    for s in specifiers:
        if s and s not in seen:
            seen[s] = None
    return list(seen)


def rewrite_module(content: str, specifiers: Iterable[str]) -> str:
    """
    Replace every occurrence of each specifier's text anywhere in content with its alias.

    This is plain text substitution, not limited to import declarations: a
    specifier that also appears in a comment or an unrelated string is
    rewritten there too. Specifiers are applied one after another in
    first-occurrence order, and a later specifier also matches text inside an
    earlier alias: "react" then "react-dom" turns "react-dom" into "_react-dom"
    and then "__react_dom".
    """
    for specifier in _distinct(specifiers):
        alias = alias_for(specifier)
        count = content.count(specifier)
        content = content.replace(specifier, alias)
        logger.debug("%r -> %r (%d occurrence(s))", specifier, alias, count)
    return content


def rewrite_import_nodes(content: str, references: Iterable[ImportReference]) -> str:
    """Replace only the specifier spans recorded for import declarations."""
    source = content.encode("utf-8")
    for ref in sorted(references, key=lambda r: r.start_byte, reverse=True):
        if not ref.specifier:
            continue
        source = source[: ref.start_byte] + alias_for(ref.specifier).encode("utf-8") + source[ref.end_byte :]
    return source.decode("utf-8")
