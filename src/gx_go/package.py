# SPDX-License-Identifier: MIT
"""Package descriptor (package.json) models.

The descriptor schema is owned by the package manager; only the fields this
tool reads are modelled explicitly. Everything else is preserved so that a
descriptor can be loaded, updated and written back without loss.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import PackageParseError

PKG_FILE_NAME = "package.json"


class GoInfo(BaseModel):
    """Go specific metadata stored under the ``gx`` key.

    Attributes:
        dvcsimport: Repository import path the package was imported from,
            empty for hash-native packages
        goversion: Minimum compiler version; users installing the package
            with an older compiler are stopped
    """

    model_config = ConfigDict(extra="allow")

    dvcsimport: str = ""
    goversion: str = ""


class Dependency(BaseModel):
    """An edge in the dependency graph."""

    model_config = ConfigDict(extra="allow")

    name: str = ""
    hash: str
    version: str | None = None
    author: str | None = None


class Package(BaseModel):
    """A parsed package descriptor."""

    model_config = ConfigDict(extra="allow")

    name: str
    version: str | None = None
    language: str | None = None
    dependencies: list[Dependency] = Field(default_factory=list)
    gx: GoInfo = Field(default_factory=GoInfo)

    def find_dep(self, ref: str) -> Dependency | None:
        """Find a direct dependency by name or hash."""
        for dep in self.dependencies:
            if dep.name == ref or dep.hash == ref:
                return dep
        return None

    def to_dict(self) -> dict[str, Any]:
        """Serialize back to package.json form, omitting empty names and Go fields."""
        data = self.model_dump(mode="json", exclude_none=True)
        for dep in data.get("dependencies", []):
            if dep.get("name") == "":
                del dep["name"]
        gx = {k: v for k, v in data.pop("gx", {}).items() if v != ""}
        if gx:
            data["gx"] = gx
        return data


def load_package_file(path: str | Path) -> Package:
    """Load a package descriptor from a file.

    Args:
        path: Path to a package.json file

    Returns:
        The parsed Package

    Raises:
        FileNotFoundError: If the file does not exist
        PackageParseError: If the file is not a valid descriptor
    """
    pkg_path = Path(path)

    try:
        with open(pkg_path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        raise
    except json.JSONDecodeError as e:
        raise PackageParseError(pkg_path, f"invalid JSON: {e}") from e
    except OSError as e:
        raise PackageParseError(pkg_path, str(e)) from e

    if not isinstance(data, dict):
        raise PackageParseError(pkg_path, "expected a JSON object")

    try:
        return Package.model_validate(data)
    except ValidationError as e:
        raise PackageParseError(pkg_path, str(e)) from e


def save_package_file(pkg: Package, path: str | Path) -> None:
    """Write a package descriptor to a file."""
    Path(path).write_text(json.dumps(pkg.to_dict(), indent=2) + "\n", encoding="utf-8")
