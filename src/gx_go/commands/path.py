# SPDX-License-Identifier: MIT
"""Print the import path of the current package."""

from __future__ import annotations

import click

from ..errors import GxGoError
from ..paths import import_identity
from ..main import Context, echo_error, echo_info, pass_context


@click.command()
@pass_context
def path(ctx: Context) -> None:
    """Print the import path of the current package within GOPATH."""
    go = ctx.load_context()

    try:
        rel = import_identity(go.cwd, go.source_root)
    except GxGoError as e:
        echo_error(str(e))
        raise SystemExit(1)

    echo_info(rel)
