"""Top-level package for import-order-fixer.

This package exposes the core API for checking and fixing the order of
JavaScript and TypeScript import declarations.
"""

from import_order_fixer.core import analyze_program
from import_order_fixer.core import apply_fix
from import_order_fixer.core import Diagnostic
from import_order_fixer.core import Fix
from import_order_fixer.core import iter_source_files
from import_order_fixer.core import process_file
from import_order_fixer.core import process_source
from import_order_fixer.core import RULE_META
from import_order_fixer.core import sort_import_groups
from import_order_fixer.core import sort_specifiers
from import_order_fixer.nodes import program_from_estree
from import_order_fixer.parser import parse_program
from import_order_fixer.rules import classify_import
from import_order_fixer.rules import split_imports


__all__ = [
    "parse_program",
    "program_from_estree",
    "classify_import",
    "split_imports",
    "sort_specifiers",
    "sort_import_groups",
    "analyze_program",
    "apply_fix",
    "process_source",
    "process_file",
    "iter_source_files",
    "Diagnostic",
    "Fix",
    "RULE_META",
]
