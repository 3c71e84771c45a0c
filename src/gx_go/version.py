# SPDX-License-Identifier: MIT
"""Dotted version comparison for compiler requirements.

This is deliberately not semantic versioning: both versions are truncated to
the length of the shorter one before comparing, so "1.4.2" satisfies a
requirement of "1.4" and "1.4" satisfies "1.4.2".

Example:
    >>> compare("1.3", "1.4")
    True
    >>> compare("1.4.2", "1.4")
    False
"""

from __future__ import annotations

from .errors import InvalidVersionError


def _component(version: str, part: str) -> int:
    if not part.isdecimal():
        raise InvalidVersionError(version, part)
    return int(part)


def compare(have: str, required: str) -> bool:
    """Check whether an installed version is older than a required one.

    Args:
        have: Installed version, e.g. "1.21.3"
        required: Minimum required version, e.g. "1.20"

    Returns:
        True if ``have`` is strictly less than ``required`` over the
        components both versions share, False otherwise

    Raises:
        InvalidVersionError: If a compared component is not a non-negative integer
    """
    have_parts = have.split(".")
    req_parts = required.split(".")

    length = min(len(have_parts), len(req_parts))
    for h, r in zip(have_parts[:length], req_parts[:length]):
        hv = _component(have, h)
        rv = _component(required, r)
        if hv < rv:
            return True
        if hv > rv:
            return False

    return False


def parse_go_version(output: str) -> str:
    """Extract the version number from ``go version`` output.

    Args:
        output: Output such as "go version go1.21.3 linux/amd64"

    Returns:
        The bare version, e.g. "1.21.3"

    Raises:
        ValueError: If the output is not recognized
    """
    parts = output.strip().split(" ")
    if len(parts) < 4 or not parts[2].startswith("go"):
        raise ValueError(f"unrecognized output from go compiler: {output.strip()!r}")
    return parts[2][2:]
