# SPDX-License-Identifier: MIT
"""Import path identity and vendor directory conventions."""

from __future__ import annotations

import posixpath
from pathlib import Path

from .errors import NotUnderRootError

# Hash-qualified imports live under this prefix
GX_IMPORT_PREFIX = "gx/ipfs"

VENDOR_DIR = Path("vendor") / "gx" / "ipfs"


def gx_import(hash: str, name: str) -> str:
    """Return the hash-qualified import path of a package."""
    return f"{GX_IMPORT_PREFIX}/{hash}/{name}"


def import_identity(absolute_path: str | Path, source_root: str | Path) -> str:
    """Derive a package's canonical import path from its location.

    Args:
        absolute_path: Resolved directory of the package
        source_root: The configured source root (first GOPATH entry)

    Returns:
        The part of ``absolute_path`` after ``<source_root>/src/``

    Raises:
        NotUnderRootError: If the path is not under ``<source_root>/src/``

    Example:
        >>> import_identity("/home/me/go/src/github.com/x/y", "/home/me/go")
        'github.com/x/y'
    """
    path = str(absolute_path)
    srcdir = posixpath.join(posixpath.normpath(str(source_root)), "src") + "/"

    if not path.startswith(srcdir):
        raise NotUnderRootError(path, str(source_root))

    return path[len(srcdir):]


def vendor_dir(project_dir: Path) -> Path:
    """Local dependency directory of a project."""
    return project_dir / VENDOR_DIR


def global_dir(source_root: Path) -> Path:
    """Machine-wide dependency cache under the source root."""
    return source_root / "src" / "gx" / "ipfs"


def enclosing_vendor_dir(path: Path) -> Path | None:
    """Return the ``vendor/gx/ipfs`` directory containing ``path``, if any."""
    marker = str(VENDOR_DIR)
    text = str(path)
    if marker not in text:
        return None
    return Path(text.split(marker)[0]) / VENDOR_DIR
