# SPDX-License-Identifier: MIT
"""Working directory and environment settings."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from .errors import ConfigError
from .paths import global_dir, vendor_dir


@dataclass
class GoContext:
    """Environment an operation runs in.

    Passed explicitly to every operation that needs the working directory
    or the source root, instead of reading process-wide state.

    Attributes:
        cwd: Working directory with symlinks resolved
        environ: Environment variables
    """

    cwd: Path
    environ: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_environment(
        cls,
        cwd: Optional[str | Path] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "GoContext":
        """Create a context from the process environment.

        Args:
            cwd: Working directory (defaults to the process's)
            environ: Environment (defaults to ``os.environ``)
        """
        directory = Path(cwd) if cwd is not None else Path.cwd()
        return cls(
            cwd=directory.resolve(),
            environ=dict(os.environ if environ is None else environ),
        )

    @property
    def source_root(self) -> Path:
        """First entry of GOPATH.

        Raises:
            ConfigError: If GOPATH is not set
        """
        gopath = self.environ.get("GOPATH", "")
        entries = [p for p in gopath.split(os.pathsep) if p]
        if not entries:
            raise ConfigError("GOPATH not set")
        return Path(entries[0])

    @property
    def vendor_dir(self) -> Path:
        return vendor_dir(self.cwd)

    @property
    def global_dir(self) -> Path:
        return global_dir(self.source_root)

    def optional_global_dir(self) -> Optional[Path]:
        """The global cache, or None when GOPATH is not set."""
        try:
            return self.global_dir
        except ConfigError:
            return None
