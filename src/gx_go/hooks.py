# SPDX-License-Identifier: MIT
"""Hooks invoked by the package manager at points in a package's lifecycle.

Each hook corresponds to one ``gx-go hook`` subcommand and receives the
positional arguments the package manager passes to it.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Callable, Optional

from .config import GoContext
from .errors import ConfigError, NotUnderRootError, RequirementError
from .loader import find_package_in_dir, load_dep
from .mapping import build_rewrite_mapping
from .package import PKG_FILE_NAME, Dependency, Package, load_package_file, save_package_file
from .paths import GX_IMPORT_PREFIX, enclosing_vendor_dir, gx_import, import_identity
from .rewrite import apply_rewrite, update_imports
from .rewriter import RewriteResult
from .version import compare, parse_go_version

logger = logging.getLogger(__name__)


def post_import(
    ctx: GoContext,
    dep_hash: str,
    confirm: Callable[[str], bool],
) -> list[RewriteResult]:
    """Offer to point the project's imports at a newly imported package.

    Args:
        ctx: Operation context; imports under ``ctx.cwd`` are updated
        dep_hash: Hash of the imported package
        confirm: Asks the user a yes/no question

    Returns:
        Results of the import update, or an empty list if nothing was done
    """
    dep = Dependency(name=dep_hash, hash=dep_hash)
    npkg = load_dep(dep, ctx.vendor_dir, ctx.optional_global_dir())

    dvcs = npkg.gx.dvcsimport
    if not dvcs:
        return []

    question = f"update imports of {dvcs} to the newly imported package?"
    if not confirm(question):
        return []

    return update_imports(ctx.cwd, dvcs, gx_import(dep_hash, npkg.name))


def installed_go_version() -> str:
    """Return the version of the ``go`` compiler on PATH.

    Raises:
        RequirementError: If no compiler is installed or its output is
            not recognized
    """
    try:
        result = subprocess.run(
            ["go", "version"],
            capture_output=True,
            text=True,
            check=True,
        )
    except (FileNotFoundError, subprocess.CalledProcessError) as e:
        raise RequirementError("no go compiler installed") from e

    try:
        return parse_go_version(result.stdout)
    except ValueError as e:
        raise RequirementError(str(e)) from e


def req_check(pkgpath: str | Path, go_version: Optional[str] = None) -> None:
    """Check that the compiler satisfies a package's version requirement.

    Args:
        pkgpath: Directory of the package being installed
        go_version: Installed compiler version; queried from ``go version``
            when omitted

    Raises:
        RequirementError: If the requirement is not met
        InvalidVersionError: If either version is malformed
    """
    npkg = load_package_file(Path(pkgpath) / PKG_FILE_NAME)

    required = npkg.gx.goversion
    if not required:
        return

    have = go_version if go_version is not None else installed_go_version()
    if compare(have, required):
        raise RequirementError(
            f"package '{npkg.name}' requires at least go version {required}, "
            f"you have {have} installed."
        )


def post_init(ctx: GoContext, directory: Optional[str | Path] = None) -> Package:
    """Record a new package's import path in its descriptor.

    Packages outside the source root are saved unchanged.
    """
    pkg_dir = Path(directory) if directory is not None else ctx.cwd
    pkgpath = pkg_dir / PKG_FILE_NAME
    pkg = load_package_file(pkgpath)

    try:
        imp = import_identity(pkg_dir.resolve(), ctx.source_root)
    except (ConfigError, NotUnderRootError) as e:
        logger.debug("not recording import path: %s", e)
        imp = ""

    if imp:
        pkg.gx.dvcsimport = imp

    save_package_file(pkg, pkgpath)
    return pkg


def post_install(ctx: GoContext, install_dir: str | Path) -> list[RewriteResult]:
    """Rewrite a newly installed package to use hash-qualified imports.

    The package lives in ``<install_dir>/<name>`` where ``install_dir`` is
    named after its hash. Its dependencies are looked up in the enclosing
    vendor directory when installed locally, and in the package's own
    directory (falling back to the global cache) otherwise. Imports of the
    package's own DVCS path are rewritten to its hash-qualified path too.
    """
    npkg = Path(install_dir)
    pkg = find_package_in_dir(npkg)

    pkg_dir = npkg / pkg.name
    reldir = enclosing_vendor_dir(npkg) or pkg_dir

    table = build_rewrite_mapping(pkg, reldir, global_root=ctx.optional_global_dir())

    if pkg.gx.dvcsimport:
        table[pkg.gx.dvcsimport] = gx_import(npkg.name, pkg.name)

    return apply_rewrite(table, pkg_dir)


def post_update(ctx: GoContext, old_hash: str, new_hash: str) -> list[RewriteResult]:
    """Point imports of a dependency's old version at its new version."""
    before = f"{GX_IMPORT_PREFIX}/{old_hash}"
    after = f"{GX_IMPORT_PREFIX}/{new_hash}"
    return update_imports(ctx.cwd, before, after)


def install_path(ctx: GoContext, global_: bool = False) -> Path:
    """Directory the package manager should install packages into."""
    if global_:
        return ctx.source_root / "src"
    return ctx.cwd / "vendor"
