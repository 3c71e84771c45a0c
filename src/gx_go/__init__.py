# SPDX-License-Identifier: MIT
"""Translate Go import paths between DVCS and gx hash-qualified forms.

Example:
    >>> from gx_go import build_rewrite_mapping, apply_rewrite, load_package_file
    >>>
    >>> pkg = load_package_file("package.json")
    >>> table = build_rewrite_mapping(pkg, "vendor/gx/ipfs")
    >>> table.lookup("github.com/x/y/sub")
    'gx/ipfs/QmHash/y/sub'
    >>> apply_rewrite(table, ".")
"""

__version__ = "1.1.0"

from .config import GoContext
from .errors import (
    ConfigError,
    DependencyChainError,
    DependencyNotFoundError,
    GxGoError,
    ImportRewriteError,
    InvalidVersionError,
    NotUnderRootError,
    PackageParseError,
    RequirementError,
)
from .loader import find_package_in_dir, load_dep
from .mapping import (
    MappingConflict,
    RewriteTable,
    add_rewrite_for_dep,
    build_dep_map,
    build_rewrite_mapping,
    rewrite_for_deps,
)
from .package import (
    PKG_FILE_NAME,
    Dependency,
    GoInfo,
    Package,
    load_package_file,
    save_package_file,
)
from .paths import gx_import, import_identity
from .rewrite import apply_rewrite, update_imports
from .rewriter import GoImportRewriter, RewriteResult, rewrite_imports, rewrite_source
from .version import compare, parse_go_version

__all__ = [
    # Context
    "GoContext",
    # Errors
    "GxGoError",
    "ConfigError",
    "DependencyChainError",
    "DependencyNotFoundError",
    "ImportRewriteError",
    "InvalidVersionError",
    "NotUnderRootError",
    "PackageParseError",
    "RequirementError",
    # Packages
    "PKG_FILE_NAME",
    "Dependency",
    "GoInfo",
    "Package",
    "load_package_file",
    "save_package_file",
    "find_package_in_dir",
    "load_dep",
    # Mapping
    "MappingConflict",
    "RewriteTable",
    "add_rewrite_for_dep",
    "build_dep_map",
    "build_rewrite_mapping",
    "rewrite_for_deps",
    # Rewriting
    "apply_rewrite",
    "update_imports",
    "GoImportRewriter",
    "RewriteResult",
    "rewrite_imports",
    "rewrite_source",
    # Paths and versions
    "gx_import",
    "import_identity",
    "compare",
    "parse_go_version",
]
