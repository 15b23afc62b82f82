"""``sealpack verify``: Check installed artifacts against sealpack.lock.

First validates the lockfile itself (closure, integrity format, versions,
metadata count), then re-hashes every installed artifact. No network
access is needed.

Exit Codes:
    0: Lockfile is consistent and every artifact matches.
    1: Lockfile problems, missing artifacts, or integrity mismatches.
    2: No lockfile found.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from sealpack.cli.context import CliContext, pass_cli_context
from sealpack.cli.output import print_error, print_lockfile_errors, print_verify_report
from sealpack.core.installer import VerifyReport, verify_installed
from sealpack.core.lockfile import LOCKFILE_FILENAME, Lockfile
from sealpack.exceptions import SealpackError


def _report_to_json(report: VerifyReport, lockfile_errors: list[str]) -> dict:
    return {
        "lockfile_errors": lockfile_errors,
        "verified": report.verified,
        "missing": report.missing,
        "mismatched": [
            {"subject": m.subject, "expected": m.expected, "actual": m.actual}
            for m in report.mismatched
        ],
    }


@click.command("verify")
@click.option(
    "--lockfile", "-l", "lockfile_path",
    type=click.Path(dir_okay=False),
    default=LOCKFILE_FILENAME,
    show_default=True,
    help="Path to the lockfile.",
)
@click.option(
    "--packages-dir", "-d",
    type=click.Path(file_okay=False),
    default=None,
    help="Where artifacts are stored (default: from configuration).",
)
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text).",
)
@pass_cli_context
def verify_command(
    state: CliContext,
    lockfile_path: str,
    packages_dir: str | None,
    output_format: str,
) -> None:
    """Verify installed packages against the lockfile's integrity strings."""
    path = Path(lockfile_path)
    if not path.is_file():
        click.echo(f"No lockfile found at {path}.")
        sys.exit(2)

    try:
        lockfile = Lockfile.read(path)
        report = verify_installed(lockfile, state.packages_dir(packages_dir))
    except SealpackError as exc:
        print_error(exc)
        sys.exit(1)

    lockfile_errors = lockfile.validate()

    if output_format == "json":
        click.echo(json.dumps(_report_to_json(report, lockfile_errors), indent=2))
    else:
        print_lockfile_errors(lockfile_errors)
        print_verify_report(report)

    sys.exit(0 if report.ok and not lockfile_errors else 1)
