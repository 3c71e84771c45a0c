# SPDX-License-Identifier: MIT
"""Applying rewrite tables and import-prefix updates to source trees."""

from __future__ import annotations

import logging
from pathlib import Path

from .mapping import RewriteTable
from .rewriter import FileFilter, GoImportRewriter, RewriteResult, SourceTreeRewriter, is_go_file

logger = logging.getLogger(__name__)


def apply_rewrite(
    table: RewriteTable,
    root: str | Path,
    file_filter: FileFilter = is_go_file,
    rewriter: SourceTreeRewriter | None = None,
) -> list[RewriteResult]:
    """Rewrite every import under ``root`` through a rewrite table.

    The table's lookup is total, so imports it has no entry for are left
    as they are. Lookups are cached back into ``table``.

    Args:
        table: The rewrite table
        root: Directory to rewrite
        file_filter: Selects the files to rewrite from their path relative to
            ``root``; Go files outside vendor, testdata and hidden
            directories by default
        rewriter: Source tree rewriter to delegate to

    Returns:
        One RewriteResult per file visited

    Raises:
        ImportRewriteError: If any file cannot be rewritten
    """
    if rewriter is None:
        rewriter = GoImportRewriter()

    logger.debug("  - rewriting imports")
    results = rewriter.rewrite_imports(root, table.lookup, file_filter)
    logger.debug("  - finished!")
    return results


def update_imports(
    root: str | Path,
    old: str,
    new: str,
    file_filter: FileFilter = is_go_file,
    rewriter: SourceTreeRewriter | None = None,
) -> list[RewriteResult]:
    """Move every import of ``old``, and of packages under it, to ``new``.

    Example:
        With old="github.com/x/y" and new="gx/ipfs/QmA/y",
        "github.com/x/y/sub" becomes "gx/ipfs/QmA/y/sub" while
        "github.com/x/yz" is left alone.
    """
    if rewriter is None:
        rewriter = GoImportRewriter()

    def lookup(path: str) -> str:
        if path == old:
            return new
        if path.startswith(old + "/"):
            return new + path[len(old):]
        return path

    logger.debug("  - updating imports %s -> %s", old, new)
    return rewriter.rewrite_imports(root, lookup, file_filter)
