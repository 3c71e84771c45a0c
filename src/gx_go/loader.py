# SPDX-License-Identifier: MIT
"""Locating and loading dependency descriptors.

A dependency with hash ``<hash>`` is installed as ``<root>/<hash>/<name>/``
with its descriptor at ``<root>/<hash>/<name>/package.json``. Dependencies are
looked up in the project's vendor directory first and in the global cache
under the source root second.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .errors import DependencyNotFoundError, PackageParseError
from .package import PKG_FILE_NAME, Dependency, Package, load_package_file

logger = logging.getLogger(__name__)


def find_package_in_dir(directory: str | Path) -> Package:
    """Load the package installed in a directory.

    Accepts either a directory holding package.json directly, or a hash
    directory whose single sub-directory holds it.

    Raises:
        FileNotFoundError: If no descriptor can be found
        PackageParseError: If the descriptor is malformed
    """
    dir_path = Path(directory)

    pkg_file = dir_path / PKG_FILE_NAME
    if pkg_file.is_file():
        return load_package_file(pkg_file)

    if not dir_path.is_dir():
        raise FileNotFoundError(f"no package found at {dir_path}")

    subdirs = [p for p in dir_path.iterdir() if p.is_dir() and not p.name.startswith(".")]
    if len(subdirs) != 1:
        raise FileNotFoundError(
            f"expected exactly one package directory in {dir_path}, found {len(subdirs)}"
        )

    pkg_file = subdirs[0] / PKG_FILE_NAME
    if not pkg_file.is_file():
        raise FileNotFoundError(f"no {PKG_FILE_NAME} in {subdirs[0]}")

    return load_package_file(pkg_file)


def load_dep(
    dep: Dependency,
    local_root: str | Path,
    global_root: str | Path | None = None,
) -> Package:
    """Resolve a dependency reference to its package descriptor.

    Args:
        dep: The dependency to load
        local_root: Directory holding hash directories, usually vendor/gx/ipfs
        global_root: Global cache holding hash directories, or None when
            no source root is configured

    Returns:
        The dependency's Package

    Raises:
        DependencyNotFoundError: If no location yields a valid descriptor
    """
    candidates = [Path(local_root) / dep.hash]
    if global_root is not None:
        candidates.append(Path(global_root) / dep.hash)

    logger.debug("  - fetching dep: %s (%s)", dep.name, dep.hash)
    for i, location in enumerate(candidates):
        if i > 0:
            logger.debug("  - checking in global namespace (%s)", location)
        try:
            return find_package_in_dir(location)
        except (FileNotFoundError, PackageParseError) as e:
            logger.debug("    %s", e)

    raise DependencyNotFoundError(dep.name, dep.hash, candidates)
