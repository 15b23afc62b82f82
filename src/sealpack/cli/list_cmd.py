"""``sealpack list``: List packages published on the registry."""

from __future__ import annotations

import json
import sys
from dataclasses import asdict

import click

from sealpack.cli.context import CliContext, pass_cli_context
from sealpack.cli.output import print_error, print_package_list
from sealpack.core.names import SCOPE_SIGIL, PackageName
from sealpack.exceptions import SealpackError
from sealpack.registry.models import PackageSummary


def _filter_scope(packages: list[PackageSummary], scope: str) -> list[PackageSummary]:
    """Keep packages in *scope*; registry names may carry the sigil."""
    return [p for p in packages if PackageName.parse(p.name).scope == scope]


@click.command("list")
@click.option(
    "--scope", "-s",
    default=None,
    help="Only list packages in this scope (e.g. alice or @alice).",
)
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text).",
)
@pass_cli_context
def list_command(state: CliContext, scope: str | None, output_format: str) -> None:
    """List every package on the configured registry."""
    if scope is not None:
        scope = scope.removeprefix(SCOPE_SIGIL).rstrip("/")

    try:
        packages = state.get_registry().list_packages()
        if scope is not None:
            packages = _filter_scope(packages, scope)
    except SealpackError as exc:
        print_error(exc)
        sys.exit(1)

    if output_format == "json":
        click.echo(json.dumps([asdict(p) for p in packages], indent=2))
    elif scope is not None and not packages:
        click.echo(f"No packages found for scope '{scope}'.")
    else:
        print_package_list(packages)
