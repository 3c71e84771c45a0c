# SPDX-License-Identifier: MIT
"""Go specific hooks called by the gx package manager."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from .. import hooks
from ..errors import GxGoError
from ..main import Context, echo_error, echo_info, pass_context


def _fail(e: Exception) -> None:
    echo_error(str(e))
    raise SystemExit(1)


@click.group()
def hook() -> None:
    """Go specific hooks to be called by the gx tool."""


@hook.command("post-import")
@click.argument("dep_hash")
@pass_context
def post_import(ctx: Context, dep_hash: str) -> None:
    """Hook called after importing a new go package."""
    go = ctx.load_context()

    def confirm(question: str) -> bool:
        return click.confirm(question, default=False)

    try:
        hooks.post_import(go, dep_hash, confirm)
    except (GxGoError, FileNotFoundError) as e:
        _fail(e)


@hook.command("req-check")
@click.argument("pkgpath", type=click.Path(path_type=Path))
def req_check(pkgpath: Path) -> None:
    """Hook called to check if requirements of a package are met."""
    try:
        hooks.req_check(pkgpath)
    except (GxGoError, FileNotFoundError) as e:
        _fail(e)


@hook.command("install-path")
@click.option(
    "--global",
    "global_",
    is_flag=True,
    help="Print global install directory.",
)
@pass_context
def install_path(ctx: Context, global_: bool) -> None:
    """Print out install path."""
    go = ctx.load_context()

    try:
        echo_info(str(hooks.install_path(go, global_)))
    except GxGoError as e:
        _fail(e)


@hook.command("post-init")
@click.argument("directory", required=False, type=click.Path(path_type=Path))
@pass_context
def post_init(ctx: Context, directory: Optional[Path]) -> None:
    """Hook called to perform go specific package initialization."""
    go = ctx.load_context()

    try:
        hooks.post_init(go, directory)
    except (GxGoError, FileNotFoundError) as e:
        _fail(e)


@hook.command("post-install")
@click.option(
    "--global",
    "global_",
    is_flag=True,
    help="Specifies whether or not the install was global.",
)
@click.argument("install_dir", type=click.Path(path_type=Path))
@pass_context
def post_install(ctx: Context, global_: bool, install_dir: Path) -> None:
    """Post install hook for newly installed go packages.

    If the package is 'github.com/X/Y', imports matching 'github.com/X/Y*'
    are replaced with 'gx/ipfs/<hash>/Y*'.
    """
    go = ctx.load_context()

    try:
        hooks.post_install(go, install_dir)
    except (GxGoError, FileNotFoundError) as e:
        _fail(e)


@hook.command("post-update")
@click.argument("old_hash")
@click.argument("new_hash")
@pass_context
def post_update(ctx: Context, old_hash: str, new_hash: str) -> None:
    """Rewrite go package imports to new versions."""
    go = ctx.load_context()

    try:
        hooks.post_update(go, old_hash, new_hash)
    except GxGoError as e:
        _fail(e)
