"""
Extracts module specifiers from TypeScript import declarations.

Content is parsed with tree-sitter; specifiers are returned as the literal text
between the quotes, unresolved. Any syntax error in the tree is a ParseError.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser

from registry_builder.errors import ParseError

logger = logging.getLogger(__name__)

TYPESCRIPT = Language(tree_sitter_typescript.language_typescript())
TSX = Language(tree_sitter_typescript.language_tsx())

_parsers: dict[str, Parser] = {}


@dataclass(frozen=True)
class ImportReference:
    """A specifier as written in one import declaration, with its byte span in the source."""

    specifier: str
    start_byte: int
    end_byte: int
    line: int


def _parser_for(path: str | Path | None) -> Parser:
    key = "tsx" if path is not None and Path(path).suffix.lower() == ".tsx" else "typescript"
    if key not in _parsers:
        _parsers[key] = Parser(TSX if key == "tsx" else TYPESCRIPT)
    return _parsers[key]


def _first_error(root: Node) -> Node | None:
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node
        stack.extend(reversed([c for c in node.children if c.has_error or c.is_missing]))
    return None


def _import_source(statement: Node) -> Node | None:
    source = statement.child_by_field_name("source")
    if source is not None:
        return source
    # import x = require("m")
    for child in statement.named_children:
        if child.type == "import_require_clause":
            return child.child_by_field_name("source")
    return None


def parse_source(content: str, path: str | Path | None = None) -> tuple[bytes, Node]:
    """Parse content and return (source bytes, root node); raises ParseError on invalid syntax."""
    source = content.encode("utf-8")
    tree = _parser_for(path).parse(source)
    root = tree.root_node
    if root.has_error:
        bad = _first_error(root) or root
        row, column = bad.start_point
        detail = f"missing {bad.type}" if bad.is_missing else "syntax error"
        raise ParseError(path, row + 1, column + 1, detail)
    return source, root


def extract_references(content: str, path: str | Path | None = None) -> list[ImportReference]:
    """
    Return every import declaration's specifier in document order, duplicates kept.
    Re-exports and dynamic import() calls are not import declarations.
    """
    source, root = parse_source(content, path)
    refs: list[ImportReference] = []
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "import_statement":
            string = _import_source(node)
            if string is not None:
                # strip the quotes
                start, end = string.start_byte + 1, string.end_byte - 1
                refs.append(
                    ImportReference(
                        specifier=source[start:end].decode("utf-8"),
                        start_byte=start,
                        end_byte=end,
                        line=string.start_point[0] + 1,
                    )
                )
            continue
        stack.extend(reversed(node.named_children))
    logger.debug("%s: %d import reference(s)", path or "<source>", len(refs))
    return refs


def extract_imports(content: str, path: str | Path | None = None) -> list[str]:
    """Return the specifier strings of every import declaration, in order, duplicates kept."""
    return [ref.specifier for ref in extract_references(content, path)]
