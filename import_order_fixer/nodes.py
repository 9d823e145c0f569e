"""Syntax node model consumed by the import ordering rule.

The shapes follow ESTree closely enough that an external host can feed its
own parse results through :func:`program_from_estree`.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any
from typing import Dict
from typing import List
from typing import Optional
from typing import Tuple
from typing import Union

IMPORT_DECLARATION = "ImportDeclaration"
NAMESPACE_SPECIFIER = "ImportNamespaceSpecifier"
DEFAULT_SPECIFIER = "ImportDefaultSpecifier"
NAMED_SPECIFIER = "ImportSpecifier"

Range = Tuple[int, int]


@dataclass(frozen=True)
class Literal:
    value: str
    raw: Optional[str] = None


@dataclass(frozen=True)
class Specifier:
    """One local binding of an import declaration.

    ``imported`` is only set for named specifiers. ``imported_raw`` keeps the
    quoted text when the imported name is a string literal instead of an
    identifier.
    """

    type: str
    local: str
    imported: Optional[str] = None
    imported_raw: Optional[str] = None
    import_kind: str = "value"

    @property
    def is_identifier(self) -> bool:
        return self.imported_raw is None


@dataclass(frozen=True)
class ImportDeclaration:
    source: Literal
    specifiers: Tuple[Specifier, ...] = ()
    import_kind: str = "value"
    range: Range = (0, 0)
    attributes: Optional[str] = None

    type = IMPORT_DECLARATION


@dataclass(frozen=True)
class Statement:
    """Any top-level statement that is not an import declaration."""

    type: str
    range: Range = (0, 0)


Node = Union[ImportDeclaration, Statement]


def _estree_range(node: Dict[str, Any]) -> Range:
    if node.get("range") is not None:
        start, end = node["range"]
        return int(start), int(end)
    return int(node.get("start", 0)), int(node.get("end", 0))


def _specifier_from_estree(spec: Dict[str, Any]) -> Specifier:
    local = spec["local"]["name"]
    kind = spec.get("importKind") or "value"
    if spec["type"] != NAMED_SPECIFIER:
        return Specifier(type=spec["type"], local=local, import_kind=kind)

    imported = spec.get("imported") or spec["local"]
    if imported.get("type") == "Identifier":
        return Specifier(type=NAMED_SPECIFIER, local=local, imported=imported["name"], import_kind=kind)
    value = str(imported.get("value", ""))
    raw = imported.get("raw") or '"%s"' % value
    return Specifier(type=NAMED_SPECIFIER, local=local, imported=value, imported_raw=raw, import_kind=kind)


def node_from_estree(node: Dict[str, Any]) -> Node:
    """Convert one ESTree statement dict into the node model."""
    if node.get("type") != IMPORT_DECLARATION:
        return Statement(type=str(node.get("type")), range=_estree_range(node))

    source = node["source"]
    return ImportDeclaration(
        source=Literal(value=str(source["value"]), raw=source.get("raw")),
        specifiers=tuple(_specifier_from_estree(s) for s in node.get("specifiers") or ()),
        import_kind=node.get("importKind") or "value",
        range=_estree_range(node),
    )


def program_from_estree(program: Dict[str, Any]) -> List[Node]:
    """Return the top-level statements of an ESTree ``Program`` dict."""
    return [node_from_estree(stmt) for stmt in program.get("body", ())]
