"""sealpack CLI: reproducible installs for scoped registry packages.

Entry point for the ``sealpack`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    lock     Resolve sealpack.yml and write sealpack.lock.
    install  Download and verify every locked artifact.
    verify   Re-check installed artifacts against the lockfile.
    list     List packages published on the registry.
    publish  Upload an artifact for the project in sealpack.yml.
    delete   Delete one published version.

Usage::

    sealpack lock
    sealpack install --packages-dir ./vendor
    sealpack verify
    sealpack list --format json
    sealpack publish dist/my-project-1.0.0.tgz
    sealpack delete alice/postgres 1.0.0
"""

from __future__ import annotations

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from sealpack import __version__
from sealpack.cli.context import CliContext
from sealpack.cli.delete import delete_command
from sealpack.cli.install import install_command
from sealpack.cli.list_cmd import list_command
from sealpack.cli.lock import lock_command
from sealpack.cli.publish import publish_command
from sealpack.cli.verify import verify_command


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=verbose)],
        force=True,
    )


@click.group()
@click.version_option(version=__version__, prog_name="sealpack")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """sealpack: deterministic dependency locking with integrity checks.

    Resolve a project's declared dependencies against the registry, record
    the exact versions and content hashes in a lockfile, and install or
    verify artifacts from that lockfile alone.
    """
    _configure_logging(verbose)
    ctx.ensure_object(CliContext)


# Register all subcommands
cli.add_command(lock_command)
cli.add_command(install_command)
cli.add_command(verify_command)
cli.add_command(list_command)
cli.add_command(publish_command)
cli.add_command(delete_command)
