"""Parser module for import-order-fixer.

This module parses JavaScript and TypeScript sources with tree-sitter and
returns the top-level statements as import-order-fixer nodes.
"""

from bisect import bisect_left
from functools import lru_cache
from itertools import accumulate
from pathlib import Path
import re
from typing import List, Optional

import tree_sitter_typescript
from tree_sitter import Language, Node as TSNode, Parser

from import_order_fixer.nodes import (
    DEFAULT_SPECIFIER,
    NAMED_SPECIFIER,
    NAMESPACE_SPECIFIER,
    ImportDeclaration,
    Literal,
    Node,
    Specifier,
    Statement,
)

TYPESCRIPT_SUFFIXES = {".ts", ".mts", ".cts"}
SKIPPED_NODE_TYPES = {"comment", "hash_bang_line", "html_comment"}
IMPORT_KINDS = {"type", "typeof"}

_ESCAPE = re.compile(r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|\r\n|[\s\S])")
_SIMPLE_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "v": "\v", "0": "\0"}
_LINE_CONTINUATIONS = {"\n", "\r", "\r\n", "\u2028", "\u2029"}


class ParseError(ValueError):
    """Raised when a source file cannot be parsed."""

    def __init__(self, message: str, lineno: int = 0):
        super().__init__(message)
        self.lineno = lineno


@lru_cache(maxsize=None)
def _get_parser(dialect: str) -> Parser:
    if dialect == "typescript":
        language = Language(tree_sitter_typescript.language_typescript())
    else:
        language = Language(tree_sitter_typescript.language_tsx())
    return Parser(language)


def dialect_for(filename: str) -> str:
    """Pick the grammar for a file name: 'typescript' or 'tsx'."""
    return "typescript" if Path(filename).suffix in TYPESCRIPT_SUFFIXES else "tsx"


class _Converter:
    """Convert tree-sitter nodes using character offsets into the source."""

    def __init__(self, source: str):
        self.data = source.encode("utf-8")
        # Byte offset of every character, only needed for non-ASCII text
        self.byte_starts: Optional[List[int]] = None
        if len(self.data) != len(source):
            self.byte_starts = list(accumulate((len(c.encode("utf-8")) for c in source), initial=0))

    def text(self, node: TSNode) -> str:
        return self.data[node.start_byte:node.end_byte].decode("utf-8")

    def offset(self, byte_offset: int) -> int:
        if self.byte_starts is None:
            return byte_offset
        return bisect_left(self.byte_starts, byte_offset)

    def range(self, node: TSNode):
        return self.offset(node.start_byte), self.offset(node.end_byte)

    def literal(self, node: TSNode) -> Literal:
        raw = self.text(node)
        return Literal(value=unescape_string(raw[1:-1]), raw=raw)

    def specifier(self, node: TSNode) -> Specifier:
        kind = _keyword_kind(node)
        name = node.child_by_field_name("name")
        alias = node.child_by_field_name("alias")
        local = self.text(alias if alias is not None else name)
        if name.type == "string":
            raw = self.text(name)
            imported = unescape_string(raw[1:-1])
            return Specifier(NAMED_SPECIFIER, local, imported=imported, imported_raw=raw, import_kind=kind)
        return Specifier(NAMED_SPECIFIER, local, imported=self.text(name), import_kind=kind)

    def specifiers(self, clause: Optional[TSNode]) -> List[Specifier]:
        specifiers: List[Specifier] = []
        if clause is None:
            return specifiers
        for child in clause.named_children:
            if child.type == "identifier":
                specifiers.append(Specifier(DEFAULT_SPECIFIER, self.text(child)))
            elif child.type == "namespace_import":
                ident = [c for c in child.named_children if c.type == "identifier"][-1]
                specifiers.append(Specifier(NAMESPACE_SPECIFIER, self.text(ident)))
            elif child.type == "named_imports":
                specifiers.extend(
                    self.specifier(spec) for spec in child.named_children if spec.type == "import_specifier"
                )
        return specifiers

    def statement(self, node: TSNode) -> Node:
        source = node.child_by_field_name("source")
        # `import x = require("y")` is not an import declaration
        if node.type != "import_statement" or source is None or _child(node, "import_require_clause"):
            return Statement(type=node.type, range=self.range(node))

        attributes = _child(node, "import_attribute")
        return ImportDeclaration(
            source=self.literal(source),
            specifiers=tuple(self.specifiers(_child(node, "import_clause"))),
            import_kind=_keyword_kind(node),
            range=self.range(node),
            attributes=self.text(attributes) if attributes is not None else None,
        )


def _unescape_match(match) -> str:
    escape = match.group(1)
    if escape in _LINE_CONTINUATIONS:
        return ""
    if escape[0] == "u" and len(escape) > 1:
        return chr(int(escape[1:].strip("{}"), 16))
    if escape[0] == "x" and len(escape) == 3:
        return chr(int(escape[1:], 16))
    return _SIMPLE_ESCAPES.get(escape, escape)


def unescape_string(text: str) -> str:
    """Resolve the escape sequences of a string literal body."""
    return _ESCAPE.sub(_unescape_match, text)


def _child(node: TSNode, node_type: str) -> Optional[TSNode]:
    for child in node.named_children:
        if child.type == node_type:
            return child
    return None


def _keyword_kind(node: TSNode) -> str:
    """Return 'type'/'typeof' when the node carries that keyword, else 'value'."""
    for child in node.children:
        if not child.is_named and child.type in IMPORT_KINDS:
            return child.type
    return "value"


def _first_error(node: TSNode) -> Optional[TSNode]:
    if node.type == "ERROR" or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            found = _first_error(child)
            if found is not None:
                return found
    return None


def parse_program(source: str, filename: str = "<source>") -> List[Node]:
    """Parse source text and return its top-level statements.

    Args:
        source: JavaScript or TypeScript source text.
        filename: Used to choose the grammar and in error messages.

    Returns:
        ImportDeclaration and Statement nodes in source order. Comments are
        not statements.

    Raises:
        ParseError: If the source contains invalid syntax.
    """
    tree = _get_parser(dialect_for(filename)).parse(source.encode("utf-8"))
    root = tree.root_node
    if root.has_error:
        error = _first_error(root) or root
        lineno = error.start_point[0] + 1
        raise ParseError(f"invalid syntax in {filename} at line {lineno}", lineno)

    converter = _Converter(source)
    return [
        converter.statement(child)
        for child in root.named_children
        if child.type not in SKIPPED_NODE_TYPES
    ]


def extract_imports_from_file(file_path: str) -> List[ImportDeclaration]:
    """Parse a source file and return every top-level import declaration.

    Raises:
        ParseError: If the file contains invalid syntax.
    """
    with open(file_path, "r", encoding="utf-8") as f:
        source = f.read()

    return [node for node in parse_program(source, file_path) if isinstance(node, ImportDeclaration)]
