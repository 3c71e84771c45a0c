# SPDX-License-Identifier: MIT
"""Rewriting import paths in Go source trees.

Only the import declarations at the top of each file are touched:

    import "github.com/x/y"
    import alias "github.com/x/y/sub"
    import (
        "fmt"
        _ "github.com/x/z"
    )

Every import path literal is passed through a lookup function and replaced
with its result. String literals elsewhere in the file are left alone.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Protocol

from .errors import ImportRewriteError

logger = logging.getLogger(__name__)

Lookup = Callable[[str], str]
FileFilter = Callable[[str], bool]

# Import declarations may only precede the first top-level declaration.
# Both are matched against the source with comments blanked out.
_HEADER_END = re.compile(r"^(?:func|type|var|const)\b", re.MULTILINE)
_IMPORT_BLOCK = re.compile(r"^(import\s*\()(.*?)(^[ \t]*\))", re.MULTILINE | re.DOTALL)
_IMPORT_SPEC = re.compile(r"^([ \t]*(?:[\w.]+[ \t]+)?)(\"[^\"\n]*\"|`[^`\n]*`)", re.MULTILINE)
_IMPORT_SINGLE = re.compile(r"^(import[ \t]+(?:[\w.]+[ \t]+)?)(\"[^\"\n]*\"|`[^`\n]*`)", re.MULTILINE)

# Directories the default filter rejects
_SKIP_DIRS = frozenset({"vendor", "testdata"})


@dataclass
class RewriteResult:
    """Result of rewriting imports in a file.

    Attributes:
        path: The source file
        imports_rewritten: Number of import paths that changed
        modified: Whether the file content changed
    """

    path: Path
    imports_rewritten: int = 0
    modified: bool = False


class SourceTreeRewriter(Protocol):
    """Anything that can rewrite the imports of a source tree."""

    def rewrite_imports(
        self,
        root_dir: str | Path,
        lookup: Lookup,
        file_filter: FileFilter,
    ) -> list[RewriteResult]: ...


def is_go_file(path: str) -> bool:
    """Default file filter: Go files outside directories the go tool ignores.

    ``path`` is relative to the root being rewritten. Files under
    ``vendor``, ``testdata`` or a directory starting with "." or "_" are
    rejected.
    """
    if not path.endswith(".go"):
        return False
    dirs = path.split("/")[:-1]
    return not any(d in _SKIP_DIRS or d.startswith((".", "_")) for d in dirs)


def _blank(chars: list[str], start: int, end: int) -> None:
    for i in range(start, end):
        if chars[i] != "\n":
            chars[i] = " "


def mask_comments(source: str) -> str:
    """Return ``source`` with every comment replaced by spaces.

    Line breaks and the positions of all other characters are kept, and
    comment markers inside string and rune literals are not comments.
    """
    chars = list(source)
    i, n = 0, len(source)
    while i < n:
        c = source[i]
        if source.startswith("//", i):
            end = source.find("\n", i)
            end = n if end == -1 else end
            _blank(chars, i, end)
            i = end
        elif source.startswith("/*", i):
            end = source.find("*/", i + 2)
            end = n if end == -1 else end + 2
            _blank(chars, i, end)
            i = end
        elif c == "`":
            end = source.find("`", i + 1)
            i = n if end == -1 else end + 1
        elif c in "\"'":
            j = i + 1
            while j < n and source[j] not in (c, "\n"):
                j += 2 if source[j] == "\\" else 1
            i = j + 1
        else:
            i += 1
    return "".join(chars)


def rewrite_source(source: str, lookup: Lookup) -> tuple[str, int]:
    """Rewrite the import paths of one Go source file.

    Args:
        source: Go source code
        lookup: Function mapping an import path to its replacement

    Returns:
        Tuple of (rewritten_source, imports_rewritten)
    """
    masked = mask_comments(source)
    end_match = _HEADER_END.search(masked)
    end = end_match.start() if end_match else len(masked)

    spans: list[tuple[int, int]] = []
    for block in _IMPORT_BLOCK.finditer(masked, 0, end):
        spans.extend(m.span(2) for m in _IMPORT_SPEC.finditer(masked, block.start(2), block.end(2)))
    spans.extend(m.span(2) for m in _IMPORT_SINGLE.finditer(masked, 0, end))
    spans.sort()

    count = 0
    parts: list[str] = []
    last = 0
    for start, stop in spans:
        literal = source[start:stop]
        quote = literal[0]
        old = literal[1:-1]
        new = lookup(old)
        if new == old:
            continue
        count += 1
        parts.append(source[last:start])
        parts.append(f"{quote}{new}{quote}")
        last = stop
    parts.append(source[last:])

    return "".join(parts), count


def _iter_files(root: Path, file_filter: FileFilter) -> list[Path]:
    """List every file under ``root`` the filter accepts.

    The filter is called with the path relative to ``root``, using "/" as
    the separator, and is the only thing deciding what gets visited.
    """
    files: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        for filename in sorted(filenames):
            path = Path(dirpath) / filename
            if file_filter(path.relative_to(root).as_posix()):
                files.append(path)
    return files


class GoImportRewriter:
    """Rewrites import paths in every matching file under a directory.

    All files are read and rewritten in memory before anything is written,
    so an unreadable or undecodable file aborts the run with the tree
    untouched. A failure while writing aborts the run as well; files
    written before it keep their new content.
    """

    def rewrite_imports(
        self,
        root_dir: str | Path,
        lookup: Lookup,
        file_filter: FileFilter = is_go_file,
    ) -> list[RewriteResult]:
        root = Path(root_dir)
        if not root.is_dir():
            raise ImportRewriteError(f"Source directory does not exist: {root}")

        staged: list[tuple[RewriteResult, str]] = []
        for path in _iter_files(root, file_filter):
            try:
                source = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                raise ImportRewriteError(f"Failed to read {path}: {e}") from e

            rewritten, count = rewrite_source(source, lookup)
            result = RewriteResult(path=path, imports_rewritten=count, modified=rewritten != source)
            staged.append((result, rewritten))

        for result, rewritten in staged:
            if not result.modified:
                continue
            logger.debug("    rewrote %d imports in %s", result.imports_rewritten, result.path)
            try:
                result.path.write_text(rewritten, encoding="utf-8")
            except OSError as e:
                raise ImportRewriteError(f"Failed to write {result.path}: {e}") from e

        return [result for result, _ in staged]


def rewrite_imports(
    root_dir: str | Path,
    lookup: Lookup,
    file_filter: FileFilter = is_go_file,
) -> list[RewriteResult]:
    """Rewrite import paths under ``root_dir`` with the default rewriter."""
    return GoImportRewriter().rewrite_imports(root_dir, lookup, file_filter)
