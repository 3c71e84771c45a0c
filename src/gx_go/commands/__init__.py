# SPDX-License-Identifier: MIT
"""CLI command implementations."""

from . import dep_map, hook, path, rewrite, update

__all__ = ["dep_map", "hook", "path", "rewrite", "update"]
