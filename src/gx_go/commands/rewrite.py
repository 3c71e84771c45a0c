# SPDX-License-Identifier: MIT
"""Rewrite a project's imports between DVCS and gx paths."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import click

from ..errors import GxGoError
from ..mapping import build_rewrite_mapping, rewrite_for_deps
from ..package import PKG_FILE_NAME, load_package_file
from ..rewrite import apply_rewrite
from ..main import Context, echo_error, echo_info, echo_success, format_mapping, pass_context

logger = logging.getLogger(__name__)


@click.command()
@click.option(
    "--undo",
    is_flag=True,
    help="Rewrite import paths back to dvcs.",
)
@click.option(
    "--dry-run",
    is_flag=True,
    help="Print out mapping without touching files.",
)
@click.option(
    "--pkgdir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Alternative location of the package directory.",
)
@click.argument("deps", nargs=-1)
@pass_context
def rewrite(
    ctx: Context,
    undo: bool,
    dry_run: bool,
    pkgdir: Optional[Path],
    deps: tuple[str, ...],
) -> None:
    """Rewrite import paths to use vendored packages.

    With no DEPS, every dependency in the tree is rewritten. Otherwise only
    the named direct dependencies (by name or hash) are.

    \b
    Examples:
        gx-go rewrite                  # DVCS imports -> gx/ipfs/<hash>/<name>
        gx-go rewrite --undo           # gx/ipfs/<hash>/<name> -> DVCS imports
        gx-go rewrite --dry-run        # Print the mapping only
        gx-go rewrite go-log           # Rewrite a single dependency
    """
    go = ctx.load_context()

    try:
        pkg = load_package_file(go.cwd / PKG_FILE_NAME)

        search_dir = pkgdir if pkgdir is not None else go.vendor_dir

        logger.debug("  - building rewrite mapping")
        if deps:
            table = rewrite_for_deps(
                pkg, deps, search_dir, undo=undo, global_root=go.optional_global_dir()
            )
        else:
            table = build_rewrite_mapping(
                pkg, search_dir, undo=undo, global_root=go.optional_global_dir()
            )
        logger.debug("  - rewrite mapping complete")

        if dry_run:
            output = format_mapping(table.as_dict())
            if output:
                echo_info(output)
            return

        results = apply_rewrite(table, go.cwd)
    except (GxGoError, FileNotFoundError) as e:
        echo_error(str(e))
        raise SystemExit(1)

    changed = sum(1 for r in results if r.modified)
    if ctx.verbose:
        echo_success(f"Rewrote imports in {changed} of {len(results)} files")
