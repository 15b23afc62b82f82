"""``sealpack install``: Install every package pinned in sealpack.lock.

Downloads each locked artifact (reusing ones already on disk that verify)
and checks it against the recorded integrity string. When no lockfile
exists yet, the manifest is resolved first and the lockfile is written,
exactly as ``sealpack lock`` would; an existing lockfile is never
re-resolved.

Exit Codes:
    0: Every package installed and verified.
    1: Resolution failed, one or more packages failed, or the lockfile is
       malformed.
    2: Neither a lockfile nor a manifest found.
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from sealpack.cli.context import CliContext, pass_cli_context
from sealpack.cli.output import (
    print_error,
    print_install_report,
    print_resolution_failure,
    print_resolution_summary,
)
from sealpack.core.dependency import DependencyResolver
from sealpack.core.installer import Installer
from sealpack.core.lockfile import LOCKFILE_FILENAME, Lockfile
from sealpack.core.manifest import MANIFEST_FILENAME, Manifest
from sealpack.exceptions import ResolutionError, SealpackError


def _lock_from_manifest(state: CliContext, manifest_path: Path, lockfile_path: Path) -> Lockfile:
    click.echo(f"No lockfile found at {lockfile_path}; resolving {manifest_path}.")
    try:
        manifest = Manifest.read(manifest_path)
        lockfile = DependencyResolver(state.get_registry()).resolve(manifest)
    except ResolutionError as exc:
        print_resolution_failure(exc)
        sys.exit(1)
    except SealpackError as exc:
        print_error(exc)
        sys.exit(1)

    lockfile.write(lockfile_path)
    print_resolution_summary(lockfile)
    click.echo(f"Lockfile written to: {lockfile_path}")
    return lockfile


@click.command("install")
@click.option(
    "--lockfile", "-l", "lockfile_path",
    type=click.Path(dir_okay=False),
    default=LOCKFILE_FILENAME,
    show_default=True,
    help="Path to the lockfile.",
)
@click.option(
    "--manifest", "-m", "manifest_path",
    type=click.Path(dir_okay=False),
    default=MANIFEST_FILENAME,
    show_default=True,
    help="Manifest to resolve when the lockfile does not exist.",
)
@click.option(
    "--packages-dir", "-d",
    type=click.Path(file_okay=False),
    default=None,
    help="Where to store artifacts (default: from configuration).",
)
@pass_cli_context
def install_command(
    state: CliContext,
    lockfile_path: str,
    manifest_path: str,
    packages_dir: str | None,
) -> None:
    """Install the exact packages recorded in the lockfile."""
    lock_path = Path(lockfile_path)
    manifest = Path(manifest_path)
    if lock_path.is_file():
        lockfile = None
    elif manifest.is_file():
        lockfile = _lock_from_manifest(state, manifest, lock_path)
    else:
        click.echo(f"No lockfile found at {lock_path} and no manifest at {manifest}.")
        sys.exit(2)

    try:
        if lockfile is None:
            lockfile = Lockfile.read(lock_path)
        installer = Installer(state.get_registry(), state.packages_dir(packages_dir))
        report = installer.install(lockfile)
    except SealpackError as exc:
        print_error(exc)
        sys.exit(1)

    print_install_report(report)
    sys.exit(0 if report.ok else 1)
