# SPDX-License-Identifier: MIT
"""Pytest configuration and fixtures for gx-go tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Callable, Optional

import pytest
from click.testing import CliRunner

from gx_go.config import GoContext


def write_package(
    root: Path,
    hash: str,
    name: str,
    deps: Optional[list[tuple[str, str]]] = None,
    dvcs: str = "",
    goversion: str = "",
) -> Path:
    """Install a fake package as ``<root>/<hash>/<name>/package.json``."""
    pkg_dir = root / hash / name
    pkg_dir.mkdir(parents=True, exist_ok=True)

    data: dict = {
        "name": name,
        "language": "go",
        "dependencies": [
            {"name": dep_name, "hash": dep_hash, "version": "1.0.0"} for dep_name, dep_hash in deps or []
        ],
    }
    gx = {}
    if dvcs:
        gx["dvcsimport"] = dvcs
    if goversion:
        gx["goversion"] = goversion
    if gx:
        data["gx"] = gx

    (pkg_dir / "package.json").write_text(json.dumps(data, indent=2))
    return pkg_dir


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def gopath(tmp_path: Path) -> Path:
    """An empty GOPATH with a src directory."""
    root = tmp_path / "gopath"
    (root / "src").mkdir(parents=True)
    return root.resolve()


@pytest.fixture
def project(gopath: Path) -> Path:
    """A Go project inside GOPATH depending on two packages.

    app -> go-log (github.com/ipfs/go-log) -> go-logging (github.com/whyrusleeping/go-logging)
        -> go-cid (no dvcs import) -> go-multihash (github.com/multiformats/go-multihash)
    """
    project_dir = gopath / "src" / "github.com" / "example" / "app"
    project_dir.mkdir(parents=True)

    (project_dir / "package.json").write_text(
        json.dumps(
            {
                "name": "app",
                "language": "go",
                "dependencies": [
                    {"name": "go-log", "hash": "QmLog", "version": "1.2.0"},
                    {"name": "go-cid", "hash": "QmCid", "version": "0.7.0"},
                ],
                "gx": {"dvcsimport": "github.com/example/app"},
            },
            indent=2,
        )
    )

    vendor = project_dir / "vendor" / "gx" / "ipfs"
    write_package(vendor, "QmLog", "go-log", deps=[("go-logging", "QmLogging")], dvcs="github.com/ipfs/go-log")
    write_package(vendor, "QmLogging", "go-logging", dvcs="github.com/whyrusleeping/go-logging")
    write_package(vendor, "QmCid", "go-cid", deps=[("go-multihash", "QmMh")])
    write_package(vendor, "QmMh", "go-multihash", dvcs="github.com/multiformats/go-multihash")

    (project_dir / "main.go").write_text(
        """package main

import (
\t"fmt"

\tlog "github.com/ipfs/go-log"
\tmh "github.com/multiformats/go-multihash"
\t"github.com/whyrusleeping/go-logging/backend"
)

func main() {
\tfmt.Println("github.com/ipfs/go-log", log.Logger("app"), mh.SHA2_256)
}
"""
    )
    return project_dir


@pytest.fixture
def go_context(project: Path, gopath: Path) -> GoContext:
    """Context rooted at the sample project."""
    return GoContext.from_environment(cwd=project, environ={"GOPATH": str(gopath)})


@pytest.fixture
def package_factory() -> Callable[..., Path]:
    return write_package
