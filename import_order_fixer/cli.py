#!/usr/bin/env python3
"""Command-line interface for import-order-fixer using Click."""

from importlib import metadata
import logging
from pathlib import Path
import sys
from typing import Optional

import click
from import_order_fixer import config as fixer_config
from import_order_fixer import core


try:
    VERSION = f"import-order-fixer {metadata.version('import_order_fixer')}"
except metadata.PackageNotFoundError:
    VERSION = "import-order-fixer"


def _handle_files(path: Path, apply_changes: bool, semicolons: Optional[bool] = None) -> int:
    """Process source files and report or fix import order issues.

    Args:
        path: File or directory to process.
        apply_changes: If True, apply fixes in place.
        semicolons: Overrides the configured semicolon style when set.
    Returns:
        0 if no changes, 1 if changes required, 2 if error occurred.
    """
    settings = fixer_config.read_config(str(path if path.is_dir() else path.parent))
    if not settings.enabled:
        logging.info("import-order-fixer is disabled by configuration.")
        return 0
    if semicolons is None:
        semicolons = settings.semicolons

    exit_code = 0
    total_warnings = 0

    # Handle single file or directory
    if path.is_file():
        file_paths = [path]
    else:
        file_paths = list(core.iter_source_files(str(path), settings.extensions, settings.exclude))

    for file_path in file_paths:
        try:
            modified, warnings = core.process_file(str(file_path), apply=apply_changes, semicolons=semicolons)
        except Exception as exc:
            logging.error("[%s] ERROR: %s", file_path, exc)
            exit_code = max(exit_code, 2)
            continue

        for lineno, msg in warnings:
            logging.warning("[%s] line %s: %s", file_path, lineno, msg)
            total_warnings += 1
            if msg.startswith(("Syntax error", "Could not")):
                exit_code = max(exit_code, 2)
            elif msg == core.MISPLACED_IMPORT_MESSAGE:
                exit_code = max(exit_code, 1)

        if modified:
            msg = "file updated." if apply_changes else "imports would be modified."
            logging.info("[%s] %s", file_path, msg)
            exit_code = max(exit_code, 1)

    if total_warnings:
        logging.info("Total warnings: %d", total_warnings)

    return exit_code


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Increase verbosity.")
@click.option("-q", "--quiet", is_flag=True, help="Suppress non-error output.")
@click.version_option(version=VERSION, prog_name="import-order-fixer CLI")
def cli(verbose: bool, quiet: bool) -> None:
    """Check and fix the order of JavaScript/TypeScript imports."""
    # Configure logging only once
    if not logging.getLogger().handlers:
        if quiet:
            logging.basicConfig(level=logging.ERROR, format="%(message)s")
        else:
            logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format="%(message)s")


semicolon_option = click.option(
    "--semicolons/--no-semicolons",
    default=None,
    help="Terminate rewritten imports with semicolons (default from config).",
)


@cli.command(help="Report import order issues without modifying files.")
@click.argument("path", type=click.Path(exists=True, file_okay=True, dir_okay=True))
@semicolon_option
def check(path: str, semicolons: Optional[bool]) -> None:
    exit_code = _handle_files(Path(path), apply_changes=False, semicolons=semicolons)
    sys.exit(exit_code)


@cli.command(help="Fix import order issues in place.")
@click.argument("path", type=click.Path(exists=True, file_okay=True, dir_okay=True))
@semicolon_option
def fix(path: str, semicolons: Optional[bool]) -> None:
    exit_code = _handle_files(Path(path), apply_changes=True, semicolons=semicolons)
    sys.exit(exit_code)


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    cli()
