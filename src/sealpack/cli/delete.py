"""``sealpack delete <package> <version>``: Delete one published version.

The registry still deletes a version that other packages depend on, but
reports the dependents; they are printed as a warning.
"""

from __future__ import annotations

import sys

import click

from sealpack.cli.context import CliContext, pass_cli_context
from sealpack.cli.output import print_delete_result, print_error
from sealpack.core.names import PackageName
from sealpack.core.semver import Version
from sealpack.exceptions import SealpackError


@click.command("delete")
@click.argument("package")
@click.argument("version")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation.")
@pass_cli_context
def delete_command(state: CliContext, package: str, version: str, yes: bool) -> None:
    """Delete VERSION of PACKAGE (``scope/name``) from the registry."""
    try:
        parsed = PackageName.parse(package)
        Version.parse(version)
    except SealpackError as exc:
        print_error(exc)
        sys.exit(2)

    if not yes:
        click.confirm(f"Delete {parsed}@{version} from the registry?", abort=True)

    try:
        result = state.get_registry().delete_package_version(parsed.scope, parsed.name, version)
    except SealpackError as exc:
        print_error(exc)
        sys.exit(1)

    print_delete_result(result)
