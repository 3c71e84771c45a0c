# SPDX-License-Identifier: MIT
"""Move a package's imports to a new import path."""

from __future__ import annotations

import click

from ..errors import GxGoError
from ..rewrite import update_imports
from ..main import Context, echo_error, echo_success, pass_context


@click.command()
@click.argument("old_import")
@click.argument("new_import")
@pass_context
def update(ctx: Context, old_import: str, new_import: str) -> None:
    """Update a package's imports to a new path.

    Every import of OLD_IMPORT, or of a package under it, is changed to the
    same path under NEW_IMPORT.
    """
    go = ctx.load_context()

    try:
        results = update_imports(go.cwd, old_import, new_import)
    except GxGoError as e:
        echo_error(str(e))
        raise SystemExit(1)

    if ctx.verbose:
        changed = sum(1 for r in results if r.modified)
        echo_success(f"Updated imports in {changed} files")
