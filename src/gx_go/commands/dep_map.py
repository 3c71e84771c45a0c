# SPDX-License-Identifier: MIT
"""Print the DVCS import to hash map of a package's dependency tree."""

from __future__ import annotations

import json

import click

from ..errors import GxGoError
from ..mapping import build_dep_map
from ..package import PKG_FILE_NAME, load_package_file
from ..main import Context, echo_error, echo_info, pass_context


@click.command("dep-map")
@pass_context
def dep_map(ctx: Context) -> None:
    """Print a JSON map of DVCS imports to package hashes."""
    go = ctx.load_context()

    try:
        pkg = load_package_file(go.cwd / PKG_FILE_NAME)
        mapping = build_dep_map(pkg, go.vendor_dir, global_root=go.optional_global_dir())
    except (GxGoError, FileNotFoundError) as e:
        echo_error(str(e))
        raise SystemExit(1)

    echo_info(json.dumps(mapping, indent=2, sort_keys=True))
