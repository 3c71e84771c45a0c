# SPDX-License-Identifier: MIT
"""Import rewrite tables built from a package's dependency tree.

A rewrite table maps import paths from one namespace to the other: from the
DVCS import of each dependency (``github.com/x/y``) to its hash-qualified path
(``gx/ipfs/<hash>/y``), or the reverse when undoing a rewrite.

The table is owned by the caller of :func:`build_rewrite_mapping` and has a
single writer: one build pass fills it, after which :meth:`RewriteTable.lookup`
only adds memoized entries. It is not safe to share between threads.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator

from .errors import DependencyChainError, DependencyNotFoundError, PackageParseError
from .loader import load_dep
from .package import Dependency, Package
from .paths import gx_import

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MappingConflict:
    """Two dependencies claimed the same import path with different targets.

    Attributes:
        key: The contested import path
        kept: Target of the first mapping, which is retained
        rejected: Target of the later mapping, which is dropped
        kept_hash: Hash of the dependency that produced the kept mapping
        rejected_hash: Hash of the dependency that produced the rejected mapping
    """

    key: str
    kept: str
    rejected: str
    kept_hash: str = ""
    rejected_hash: str = ""

    def __str__(self) -> str:
        return (
            f"have two dep packages with same import path: {self.key}\n"
            f"  - {self.kept_hash or self.kept}\n"
            f"  - {self.rejected_hash or self.rejected}"
        )


@dataclass
class RewriteTable:
    """Mapping from import path to import path with longest-prefix lookup."""

    entries: dict[str, str] = field(default_factory=dict)
    conflicts: list[MappingConflict] = field(default_factory=list)
    _origins: dict[str, str] = field(default_factory=dict, repr=False, compare=False)

    def add(self, key: str, value: str, origin: str = "") -> bool:
        """Insert a mapping unless the key is already mapped.

        The first mapping for a key wins. A later, different mapping is
        recorded in :attr:`conflicts` and logged, but does not fail.

        Args:
            key: Import path to translate
            value: Import path to translate it to
            origin: Hash of the dependency the mapping came from

        Returns:
            True if the entry was inserted
        """
        existing = self.entries.get(key)
        if existing is None:
            self.entries[key] = value
            self._origins[key] = origin
            return True

        if existing != value:
            conflict = MappingConflict(
                key=key,
                kept=existing,
                rejected=value,
                kept_hash=self._origins.get(key, ""),
                rejected_hash=origin,
            )
            self.conflicts.append(conflict)
            logger.warning("%s", conflict)
        return False

    def lookup(self, path: str) -> str:
        """Translate an import path.

        Exact entries are returned as-is. Otherwise the longest key ``k``
        for which ``path`` starts with ``k + "/"`` is used and the remainder
        of ``path`` is appended to its value. Paths matching nothing map to
        themselves. Every answer is cached in the table.
        """
        mapped = self.entries.get(path)
        if mapped is not None:
            return mapped

        best = ""
        for key in self.entries:
            if len(key) > len(best) and path.startswith(key + "/"):
                best = key

        if best:
            mapped = self.entries[best] + path[len(best):]
        else:
            mapped = path

        self.entries[path] = mapped
        return mapped

    def as_dict(self) -> dict[str, str]:
        return dict(self.entries)

    def __getitem__(self, key: str) -> str:
        return self.entries[key]

    def __setitem__(self, key: str, value: str) -> None:
        self.entries[key] = value

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


def add_rewrite_for_dep(dep: Dependency, pkg: Package, table: RewriteTable, undo: bool) -> None:
    """Add the mapping contributed by one dependency edge, if any."""
    if not pkg.gx.dvcsimport:
        return

    src = pkg.gx.dvcsimport
    dst = gx_import(dep.hash, pkg.name)
    if undo:
        src, dst = dst, src
    table.add(src, dst, origin=dep.hash)


def build_rewrite_mapping(
    pkg: Package,
    pkgdir: str | Path,
    table: RewriteTable | None = None,
    *,
    undo: bool = False,
    global_root: str | Path | None = None,
) -> RewriteTable:
    """Build the rewrite table for a package's whole dependency tree.

    Walks the dependency graph depth first, in declaration order, adding one
    entry for every dependency that has a DVCS import. Dependencies without
    one are still walked, since their own dependencies may have one.

    Args:
        pkg: The root package
        pkgdir: Local directory holding installed dependencies
        table: Table to fill; a new one is created if omitted
        undo: Map hash-qualified paths back to DVCS paths instead
        global_root: Global cache to fall back to for missing dependencies

    Returns:
        The filled table

    Raises:
        DependencyChainError: If a dependency cannot be loaded
    """
    if table is None:
        table = RewriteTable()

    _walk(pkg, Path(pkgdir), table, undo, global_root, [pkg.name], set())
    return table


def _walk(
    pkg: Package,
    pkgdir: Path,
    table: RewriteTable,
    undo: bool,
    global_root: str | Path | None,
    chain: list[str],
    ancestors: set[str],
) -> None:
    for dep in pkg.dependencies:
        if dep.hash in ancestors:
            logger.debug("  - skipping %s (%s): cycle through %s", dep.name, dep.hash, " -> ".join(chain))
            continue

        try:
            child = load_dep(dep, pkgdir, global_root)
        except (DependencyNotFoundError, PackageParseError) as e:
            raise DependencyChainError(dep.name, chain + [dep.name], e) from e

        add_rewrite_for_dep(dep, child, table, undo)

        ancestors.add(dep.hash)
        try:
            _walk(child, pkgdir, table, undo, global_root, chain + [dep.name], ancestors)
        finally:
            ancestors.discard(dep.hash)


def rewrite_for_deps(
    pkg: Package,
    refs: Iterable[str],
    pkgdir: str | Path,
    *,
    undo: bool = False,
    global_root: str | Path | None = None,
) -> RewriteTable:
    """Build a table covering only some direct dependencies.

    Args:
        pkg: The root package
        refs: Names or hashes of direct dependencies of ``pkg``
        pkgdir: Local directory holding installed dependencies
        undo: Map hash-qualified paths back to DVCS paths instead
        global_root: Global cache to fall back to

    Raises:
        DependencyNotFoundError: If a ref is not a dependency of ``pkg`` or
            cannot be loaded
    """
    table = RewriteTable()
    for ref in refs:
        dep = pkg.find_dep(ref)
        if dep is None:
            raise DependencyNotFoundError(ref, "")

        child = load_dep(dep, pkgdir, global_root)
        add_rewrite_for_dep(dep, child, table, undo)

    return table


def build_dep_map(
    pkg: Package,
    pkgdir: str | Path,
    *,
    global_root: str | Path | None = None,
    dep_map: dict[str, str] | None = None,
) -> dict[str, str]:
    """Map the DVCS import of every dependency in the tree to its hash.

    A package whose import path is already mapped is not walked again. If
    it carries a different hash, both hashes are logged.
    """
    if dep_map is None:
        dep_map = {}

    for dep in pkg.dependencies:
        child = load_dep(dep, pkgdir, global_root)

        dvcs = child.gx.dvcsimport
        if dvcs:
            existing = dep_map.get(dvcs)
            if existing is not None:
                if existing != dep.hash:
                    logger.warning("%s", MappingConflict(dvcs, existing, dep.hash, existing, dep.hash))
                continue
            dep_map[dvcs] = dep.hash

        build_dep_map(child, pkgdir, global_root=global_root, dep_map=dep_map)

    return dep_map
