"""Rules module for import-order-fixer.

This module classifies import declarations by the shape of their specifiers:
wildcard imports, default imports and named imports.
"""

from dataclasses import dataclass, field
from typing import Iterable, List

from import_order_fixer.nodes import DEFAULT_SPECIFIER, NAMESPACE_SPECIFIER, ImportDeclaration

STAR = "star"
DEFAULT = "default"
NAMED = "named"


@dataclass
class ImportGroups:
    star_imports: List[ImportDeclaration] = field(default_factory=list)
    default_imports: List[ImportDeclaration] = field(default_factory=list)
    named_imports: List[ImportDeclaration] = field(default_factory=list)

    def groups(self) -> List[List[ImportDeclaration]]:
        """Return the groups in canonical sequence."""
        return [self.star_imports, self.default_imports, self.named_imports]

    def ordered(self) -> List[ImportDeclaration]:
        return [node for group in self.groups() for node in group]


def classify_import(node: ImportDeclaration) -> str:
    """Classify an import declaration as 'star', 'default', or 'named'.

    Args:
        node: An import declaration.

    Returns:
        'star' if it owns a namespace specifier, else 'default' if it owns a
        default specifier, else 'named'. Side-effect imports are 'named'.
    """
    if any(spec.type == NAMESPACE_SPECIFIER for spec in node.specifiers):
        return STAR
    if any(spec.type == DEFAULT_SPECIFIER for spec in node.specifiers):
        return DEFAULT
    return NAMED


def split_imports(imports: Iterable[ImportDeclaration]) -> ImportGroups:
    """Split import declarations into groups, keeping input order in each.

    Args:
        imports: Import declarations in source order.

    Returns:
        The ImportGroups holding every declaration exactly once.
    """
    grouped = ImportGroups()
    targets = {
        STAR: grouped.star_imports,
        DEFAULT: grouped.default_imports,
        NAMED: grouped.named_imports,
    }
    for node in imports:
        targets[classify_import(node)].append(node)
    return grouped
