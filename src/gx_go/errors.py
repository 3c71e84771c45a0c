# SPDX-License-Identifier: MIT
"""Exception types raised by gx-go."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence


class GxGoError(Exception):
    """Base class for all gx-go errors."""

    pass


class ConfigError(GxGoError):
    """Raised when the environment does not provide required settings."""

    pass


class InvalidVersionError(GxGoError):
    """Raised when a dotted version has a non-numeric component."""

    def __init__(self, version: str, component: str = ""):
        self.version = version
        self.component = component
        message = f"Invalid version: {version!r}"
        if component:
            message += f" (component {component!r} is not a number)"
        super().__init__(message)


class NotUnderRootError(GxGoError):
    """Raised when a path does not sit under the configured source root."""

    def __init__(self, path: str, source_root: str):
        self.path = path
        self.source_root = source_root
        super().__init__(f"{path} is not within {source_root}/src")


class PackageParseError(GxGoError):
    """Raised when a package descriptor cannot be read or decoded."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load package file {path}: {reason}")


class DependencyNotFoundError(GxGoError):
    """Raised when a dependency is missing from every searched location.

    Attributes:
        name: Dependency name
        hash: Dependency content hash
        locations: Every directory that was searched, in order
    """

    def __init__(self, name: str, hash: str, locations: Sequence[Path] = ()):
        self.name = name
        self.hash = hash
        self.locations = list(locations)
        message = f"failed to find package {name!r}"
        if hash:
            message += f" ({hash})"
        if self.locations:
            searched = "\n".join(f"  - {loc}" for loc in self.locations)
            message += f"\nsearched:\n{searched}"
        super().__init__(message)


class DependencyChainError(GxGoError):
    """Raised when loading a dependency fails somewhere in the tree.

    Attributes:
        package: The dependency that failed to load
        chain: Names of the packages leading from the root to the failure
        original_error: The underlying error
    """

    def __init__(self, package: str, chain: Sequence[str], original_error: Exception):
        self.package = package
        self.chain = list(chain)
        self.original_error = original_error
        chain_str = " -> ".join(self.chain) if self.chain else package
        super().__init__(
            f"Failed to load dependency {package!r}:\n"
            f"  Dependency chain: {chain_str}\n"
            f"  Error: {original_error}"
        )


class ImportRewriteError(GxGoError):
    """Raised when rewriting imports in a source tree fails."""

    pass


class RequirementError(GxGoError):
    """Raised when a package's requirements are not met."""

    pass
