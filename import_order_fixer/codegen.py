"""Turn import declarations back into source text."""
from typing import Callable
from typing import List

from import_order_fixer.nodes import DEFAULT_SPECIFIER
from import_order_fixer.nodes import ImportDeclaration
from import_order_fixer.nodes import Literal
from import_order_fixer.nodes import NAMESPACE_SPECIFIER
from import_order_fixer.nodes import Specifier
from import_order_fixer.rules import ImportGroups

Renderer = Callable[[ImportDeclaration], str]


def render_source(source: Literal) -> str:
    """Return the raw module literal, or a double-quoted one built from its value."""
    return source.raw or '"%s"' % source.value


def _imported_name(spec: Specifier, value_import: bool) -> str:
    if spec.is_identifier:
        return spec.imported or spec.local
    # Type-only imports fall back to the default export for string names
    return spec.imported_raw if value_import else "default"


def _render_named(spec: Specifier, value_import: bool) -> str:
    imported = _imported_name(spec, value_import)
    text = imported if imported == spec.local else f"{imported} as {spec.local}"
    if value_import and spec.import_kind != "value":
        text = f"{spec.import_kind} {text}"
    return text


def render_type_import(node: ImportDeclaration) -> str:
    """Rebuild a type-only import declaration.

    Every specifier goes inside the braces: ``* as ns`` for namespaces, the
    bare local name for defaults, ``imported`` or ``imported as local`` for
    named ones.
    """
    source = render_source(node.source)
    if not node.specifiers:
        return f"import type {source}"

    parts = []
    for spec in node.specifiers:
        if spec.type == DEFAULT_SPECIFIER:
            parts.append(spec.local)
        elif spec.type == NAMESPACE_SPECIFIER:
            parts.append(f"* as {spec.local}")
        else:
            parts.append(_render_named(spec, value_import=False))
    return f"import type {{ {', '.join(parts)} }} from {source}"


def render_value_import(node: ImportDeclaration, semicolon: bool = False) -> str:
    """Render any import declaration the generic way.

    The default specifier leads, followed by either a namespace binding or a
    brace-enclosed list of named bindings.
    """
    head = "import" if node.import_kind == "value" else f"import {node.import_kind}"
    source = render_source(node.source)
    tail = f" {node.attributes}" if node.attributes else ""
    end = ";" if semicolon else ""

    if not node.specifiers:
        return f"{head} {source}{tail}{end}"

    clauses: List[str] = []
    specifiers = list(node.specifiers)
    if specifiers[0].type == DEFAULT_SPECIFIER:
        clauses.append(specifiers.pop(0).local)
    if specifiers and specifiers[0].type == NAMESPACE_SPECIFIER:
        clauses.append(f"* as {specifiers[0].local}")
    elif specifiers:
        names = ", ".join(_render_named(spec, value_import=True) for spec in specifiers)
        clauses.append(f"{{ {names} }}")
    return f"{head} {', '.join(clauses)} from {source}{tail}{end}"


def render_import(node: ImportDeclaration, render_declaration: Renderer = render_value_import) -> str:
    """Render one declaration; only non-type imports reach ``render_declaration``."""
    if node.import_kind == "type":
        return render_type_import(node)
    return render_declaration(node)


def format_import_groups(groups: ImportGroups, render_declaration: Renderer = render_value_import) -> str:
    """Render the groups as one block, one declaration per line."""
    return "\n".join(render_import(node, render_declaration) for node in groups.ordered())
