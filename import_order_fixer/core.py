#!/usr/bin/env python3
"""Core utilities for import-order-fixer. This module collects the leading
import declarations of a program, sorts them into canonical order, detects
whether the source diverges from that order and builds the replacement text.
It also exposes helpers to run the rule over source text and files.
"""
from __future__ import annotations
from dataclasses import dataclass
from dataclasses import field
from dataclasses import replace
from functools import lru_cache
import logging
from pathlib import Path
from typing import Iterable
from typing import Iterator
from typing import List
from typing import Optional
from typing import Sequence
from typing import Tuple

from pyuca import Collator

from import_order_fixer.codegen import Renderer
from import_order_fixer.codegen import format_import_groups
from import_order_fixer.codegen import render_value_import
from import_order_fixer.nodes import DEFAULT_SPECIFIER
from import_order_fixer.nodes import ImportDeclaration
from import_order_fixer.nodes import Node
from import_order_fixer.nodes import Range
from import_order_fixer.nodes import Specifier
from import_order_fixer.parser import ParseError
from import_order_fixer.parser import parse_program
from import_order_fixer.rules import ImportGroups
from import_order_fixer.rules import split_imports

LOG = logging.getLogger(__name__)

MISPLACED_IMPORT_MESSAGE = "Import declarations must not be declared after other declarations"
UNSORTED_IMPORTS_MESSAGE = (
    "Imports should be sorted alphabetically. Wildcard imports first. "
    "Default Imports second. Named Imports last."
)

RULE_META = {
    "type": "layout",
    "docs": {"description": "Sort imports by specifier"},
    "fixable": "code",
}


@dataclass(frozen=True)
class Fix:
    range: Range
    text: str


@dataclass(frozen=True)
class Diagnostic:
    node: Node
    message: str
    fix: Optional[Fix] = None


@dataclass
class AnalysisContext:
    """State of one file's analysis, from the entry hook to the exit hook."""

    import_nodes: List[ImportDeclaration] = field(default_factory=list)
    sorted_nodes: List[ImportDeclaration] = field(default_factory=list)
    import_end_reached: bool = False
    import_declared_afterwards: bool = False
    diagnostics: List[Diagnostic] = field(default_factory=list)

    def report(self, node: Node, message: str, fix: Optional[Fix] = None) -> None:
        self.diagnostics.append(Diagnostic(node=node, message=message, fix=fix))


@lru_cache(maxsize=None)
def _get_collator() -> Collator:
    return Collator()


def locale_key(text: str) -> Tuple[int, ...]:
    """Return the root-locale (DUCET) collation key of text.

    Base characters compare first with punctuation before symbols before
    digits before letters, then accents, then case with lowercase first.
    """
    return _get_collator().sort_key(text)


def first_specifier_name(node: ImportDeclaration) -> str:
    if node.specifiers:
        return node.specifiers[0].local
    return ""


def sort_specifiers(specifiers: Sequence[Specifier]) -> Tuple[Specifier, ...]:
    """Return specifiers with the default binding first, the rest by name."""
    return tuple(
        sorted(
            specifiers,
            key=lambda spec: (spec.type != DEFAULT_SPECIFIER, locale_key(spec.local.lower())),
        )
    )


def sort_import_groups(groups: ImportGroups) -> None:
    """Sort each group in place by the name of its first specifier.

    Specifiers are already sorted, so only the first one is compared.
    """
    for group in groups.groups():
        group.sort(key=lambda node: locale_key(first_specifier_name(node)))


def _specifier_fields(spec: Specifier) -> Tuple[str, str, Optional[str]]:
    return spec.type, spec.local, spec.imported


def are_nodes_equal(a: ImportDeclaration, b: ImportDeclaration) -> bool:
    if a.source.value != b.source.value:
        return False
    if len(a.specifiers) != len(b.specifiers):
        return False
    return [_specifier_fields(s) for s in a.specifiers] == [_specifier_fields(s) for s in b.specifiers]


def are_imports_equal(original: Sequence[ImportDeclaration], sorted_imports: Sequence[ImportDeclaration]) -> bool:
    if len(original) != len(sorted_imports):
        return False
    return all(are_nodes_equal(a, b) for a, b in zip(original, sorted_imports))


def check_and_fix_imports(
    context: AnalysisContext,
    original: Sequence[ImportDeclaration],
    groups: ImportGroups,
    render_declaration: Renderer = render_value_import,
) -> None:
    """Report a single fix spanning the import block if it is out of order."""
    if are_imports_equal(original, groups.ordered()):
        LOG.debug("Imports already in canonical order")
        return

    start = original[0].range[0]
    end = original[-1].range[1]
    text = format_import_groups(groups, render_declaration)
    LOG.debug("Imports out of order, replacing characters %d-%d", start, end)
    context.report(original[0], UNSORTED_IMPORTS_MESSAGE, Fix(range=(start, end), text=text))


def collect_imports(context: AnalysisContext, body: Iterable[Node]) -> None:
    """Collect the leading import declarations of a program body.

    An import placed after any other statement is reported and stops the scan.
    """
    for stmt in body:
        if not isinstance(stmt, ImportDeclaration):
            context.import_end_reached = True
            continue
        if context.import_end_reached:
            context.report(stmt, MISPLACED_IMPORT_MESSAGE)
            context.import_declared_afterwards = True
            break
        context.import_nodes.append(stmt)
        context.sorted_nodes.append(replace(stmt, specifiers=sort_specifiers(stmt.specifiers)))
    LOG.debug("Collected %d import declarations", len(context.import_nodes))


def finish_imports(context: AnalysisContext, render_declaration: Renderer = render_value_import) -> None:
    if not context.import_nodes or context.import_declared_afterwards:
        return

    groups = split_imports(context.sorted_nodes)
    sort_import_groups(groups)
    check_and_fix_imports(context, context.import_nodes, groups, render_declaration)


def analyze_program(body: Iterable[Node], render_declaration: Optional[Renderer] = None) -> List[Diagnostic]:
    """Run the rule over one program body and return its diagnostics."""
    context = AnalysisContext()
    collect_imports(context, body)
    finish_imports(context, render_declaration or render_value_import)
    return context.diagnostics


def apply_fix(source: str, fix: Fix) -> str:
    start, end = fix.range
    return source[:start] + fix.text + source[end:]


def process_source(
    source: str, filename: str = "<source>", semicolons: bool = False
) -> Tuple[Optional[str], List[Diagnostic]]:
    """Analyze source text.

    Returns (new_source, diagnostics); new_source is None when no fix applies.

    Raises:
        ParseError: If the source contains invalid syntax.
    """
    body = parse_program(source, filename)
    diagnostics = analyze_program(body, lambda node: render_value_import(node, semicolon=semicolons))
    new_source: Optional[str] = None
    for diagnostic in diagnostics:
        if diagnostic.fix is not None:
            new_source = apply_fix(source, diagnostic.fix)
    return new_source, diagnostics


def line_of(source: str, offset: int) -> int:
    return source.count("\n", 0, offset) + 1


def process_file(file_path: str, apply: bool = False, semicolons: bool = False) -> Tuple[bool, List[Tuple[int, str]]]:
    """Check the import order of a single file and optionally fix it in place.
    Returns (modified, warnings).
    """
    path_obj = Path(file_path)

    try:
        source = path_obj.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        return False, [(0, f"Could not read file: {e}")]
    try:
        new_source, diagnostics = process_source(source, str(path_obj), semicolons=semicolons)
    except ParseError as e:
        return False, [(e.lineno, f"Syntax error: {e}")]

    warnings = [(line_of(source, d.node.range[0]), d.message) for d in diagnostics]
    if new_source is None:
        return False, warnings

    if apply:
        try:
            path_obj.write_text(new_source, encoding="utf-8")
        except OSError as e:
            warnings.append((0, f"Could not write file: {e}"))
            return False, warnings
    return True, warnings


def iter_source_files(root: str, extensions: Iterable[str], ignore: Optional[Iterable[str]] = None) -> Iterator[Path]:
    """Yield source files under root with a matching suffix, skipping ignored directories."""
    suffixes = set(extensions)
    ignore_set = set(ignore or [])
    root_path = Path(root)
    for path in sorted(root_path.rglob("*")):
        if not path.is_file() or path.suffix not in suffixes:
            continue
        if ignore_set.intersection(path.relative_to(root_path).parts[:-1]):
            continue
        yield path
