# SPDX-License-Identifier: MIT
"""CLI entry point for the gx-go command."""

from __future__ import annotations

import logging
import sys
from typing import Optional

import click

from .config import GoContext
from .errors import GxGoError


class Context:
    """CLI context object passed to commands."""

    def __init__(self) -> None:
        self.go: Optional[GoContext] = None
        self.verbose: bool = False

    def load_context(self) -> GoContext:
        """Capture the working directory and environment, caching the result."""
        if self.go is None:
            self.go = GoContext.from_environment()
        return self.go


pass_context = click.make_pass_decorator(Context, ensure=True)


def echo_error(message: str) -> None:
    """Print an error message to stderr."""
    click.secho(f"Error: {message}", fg="red", err=True)


def echo_success(message: str) -> None:
    """Print a success message."""
    click.secho(message, fg="green")


def echo_info(message: str) -> None:
    """Print an info message."""
    click.echo(message)


def echo_warning(message: str) -> None:
    """Print a warning message."""
    click.secho(f"Warning: {message}", fg="yellow", err=True)


def format_mapping(mapping: dict[str, str], headers: Optional[tuple[str, str]] = None) -> str:
    """Render a mapping as two aligned columns sorted by key."""
    rows = [(k, mapping[k]) for k in sorted(mapping)]
    if headers is not None:
        rows.insert(0, headers)
    if not rows:
        return ""

    width = max(12, max(len(k) for k, _ in rows) + 1)
    return "\n".join(f"{k.ljust(width)}{v}" for k, v in rows)


@click.group()
@click.version_option(package_name="gx-go")
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Turn on verbose output.",
)
@pass_context
def cli(ctx: Context, verbose: bool) -> None:
    """gx extensions for golang.

    Translate between DVCS import paths and hash-qualified gx import paths.

    \b
    Examples:
        gx-go rewrite
        gx-go rewrite --undo
        gx-go rewrite --dry-run
        gx-go update github.com/old/pkg github.com/new/pkg
        gx-go path
    """
    ctx.verbose = verbose
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
    )


# Import and register commands
from .commands import dep_map, hook, path, rewrite, update

cli.add_command(dep_map.dep_map)
cli.add_command(hook.hook)
cli.add_command(path.path)
cli.add_command(rewrite.rewrite)
cli.add_command(update.update)


def main() -> None:
    """Main entry point for the CLI."""
    try:
        cli()
    except GxGoError as e:
        echo_error(str(e))
        sys.exit(1)
    except FileNotFoundError as e:
        echo_error(str(e))
        sys.exit(1)
    except Exception as e:
        echo_error(f"Unexpected error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
