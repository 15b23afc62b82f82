"""``sealpack lock``: Resolve the manifest and write sealpack.lock.

Reads ``sealpack.yml``, resolves every direct and transitive dependency
against the registry (breadth-first, first version wins), and writes the
lockfile next to the manifest.

Exit Codes:
    0: Lockfile written.
    1: Resolution failed, or the manifest or registry reported an error.
    2: No manifest found.
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from sealpack.cli.context import CliContext, pass_cli_context
from sealpack.cli.output import (
    print_error,
    print_resolution_failure,
    print_resolution_summary,
)
from sealpack.core.dependency import DependencyResolver
from sealpack.core.lockfile import LOCKFILE_FILENAME
from sealpack.core.manifest import MANIFEST_FILENAME, Manifest
from sealpack.exceptions import ResolutionError, SealpackError


@click.command("lock")
@click.option(
    "--manifest", "-m", "manifest_path",
    type=click.Path(dir_okay=False),
    default=MANIFEST_FILENAME,
    show_default=True,
    help="Path to the project manifest.",
)
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False),
    default=None,
    help=f"Output path for the lockfile (default: {LOCKFILE_FILENAME} next to the manifest).",
)
@click.option(
    "--timeout",
    type=float,
    default=None,
    help="Overall resolution deadline in seconds.",
)
@pass_cli_context
def lock_command(
    state: CliContext,
    manifest_path: str,
    output: str | None,
    timeout: float | None,
) -> None:
    """Resolve dependencies and write a deterministic lockfile."""
    path = Path(manifest_path)
    if not path.is_file():
        click.echo(f"No manifest found at {path}.")
        sys.exit(2)

    try:
        manifest = Manifest.read(path)
        resolver = DependencyResolver(state.get_registry(), timeout=timeout)
        lockfile = resolver.resolve(manifest)
    except ResolutionError as exc:
        print_resolution_failure(exc)
        sys.exit(1)
    except SealpackError as exc:
        print_error(exc)
        sys.exit(1)

    out_path = Path(output) if output else path.parent / LOCKFILE_FILENAME
    lockfile.write(out_path)

    print_resolution_summary(lockfile)
    click.echo(f"\nLockfile written to: {out_path}")
    sys.exit(0)
