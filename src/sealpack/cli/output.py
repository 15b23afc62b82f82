"""Rich output formatting helpers for the sealpack CLI.

Provides consistent terminal output for resolution summaries, install and
verify reports, registry listings, and errors.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from sealpack.core.installer import InstallReport, VerifyReport
from sealpack.core.lockfile import Lockfile
from sealpack.exceptions import (
    IntegrityMismatch,
    NoSatisfyingVersion,
    RegistryError,
    ResolutionConflict,
    SealpackError,
)
from sealpack.registry.models import DeleteResult, PackageSummary, UploadResult

console = Console()
err_console = Console(stderr=True)


def print_resolution_summary(lockfile: Lockfile) -> None:
    """Print the resolved packages in resolution order."""
    console.print(
        Panel("[bold green]Resolution successful[/bold green]",
              title="Dependency Resolution")
    )
    if not lockfile.packages:
        console.print("[dim]No dependencies to resolve.[/dim]")
        return

    table = Table(show_header=True)
    table.add_column("Package", style="bold")
    table.add_column("Version")
    table.add_column("Dependencies", justify="right")
    for package in lockfile.packages:
        table.add_row(package.name, package.version, str(len(package.dependencies)))
    console.print(table)


def print_resolution_failure(exc: SealpackError) -> None:
    """Print a resolution error with its structured details."""
    console.print(
        Panel("[bold red]Resolution failed[/bold red]",
              title="Dependency Resolution")
    )
    console.print(f"  [red]- {escape(str(exc))}[/red]")
    if isinstance(exc, ResolutionConflict):
        console.print(f"  Package:    [bold]{exc.name}[/bold]")
        console.print(f"  Locked at:  {exc.existing_version}")
        console.print(f"  Wanted:     {exc.constraint}")
    elif isinstance(exc, NoSatisfyingVersion):
        console.print(f"  Package:    [bold]{exc.name}[/bold]")
        console.print(f"  Available:  {', '.join(exc.available)}")


def print_install_report(report: InstallReport) -> None:
    console.print(
        f"Installed: [green]{len(report.installed)}[/green] | "
        f"Up to date: [cyan]{len(report.reused)}[/cyan] | "
        f"Failed: [red]{len(report.failed)}[/red]"
    )
    for failure in report.failed:
        console.print(f"  [red]- {escape(str(failure))}[/red]")


def print_verify_report(report: VerifyReport) -> None:
    """Print a per-artifact verification table followed by a summary line."""
    table = Table(title="Integrity Verification", show_header=True, header_style="bold")
    table.add_column("Package", style="bold")
    table.add_column("Status", justify="center")
    for key in report.verified:
        table.add_row(key, "[green]OK[/green]")
    for key in report.missing:
        table.add_row(key, "[yellow]MISSING[/yellow]")
    for mismatch in report.mismatched:
        table.add_row(mismatch.subject, "[bold red]MISMATCH[/bold red]")
    console.print(table)

    for mismatch in report.mismatched:
        _print_mismatch(mismatch)

    console.print(
        f"Verified: [green]{len(report.verified)}[/green] | "
        f"Missing: [yellow]{len(report.missing)}[/yellow] | "
        f"Mismatched: [red]{len(report.mismatched)}[/red]"
    )


def _print_mismatch(mismatch: IntegrityMismatch) -> None:
    console.print(f"  [red]{mismatch.subject}[/red]")
    console.print(f"    expected: {mismatch.expected}")
    console.print(f"    actual:   {mismatch.actual}")


def print_package_list(packages: list[PackageSummary]) -> None:
    if not packages:
        console.print("[dim]No packages published.[/dim]")
        return
    table = Table(title="Registry Packages", show_header=True, header_style="bold")
    table.add_column("Package", style="bold")
    table.add_column("Latest")
    table.add_column("Versions", justify="right")
    for package in packages:
        table.add_row(package.name, package.latest, str(package.version_count))
    console.print(table)


def print_upload_result(result: UploadResult) -> None:
    console.print(f"[green]Published[/green] [bold]{result.name}@{result.version}[/bold]")
    console.print(f"  integrity: {result.integrity}")
    console.print(f"  size:      {result.size} bytes")


def print_delete_result(result: DeleteResult) -> None:
    console.print(f"[green]Deleted[/green] [bold]{result.name}@{result.version}[/bold]")
    if result.warning is not None:
        console.print(f"[yellow]Warning:[/yellow] {escape(result.warning.message)}")
        for dependent in result.warning.dependents:
            console.print(f"  [yellow]- {dependent}[/yellow]")


def print_lockfile_errors(errors: list[str]) -> None:
    for error in errors:
        console.print(f"[red]Lockfile: {escape(error)}[/red]")


def print_error(exc: BaseException) -> None:
    """Print an error to stderr."""
    err_console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")


def print_publish_error(exc: SealpackError) -> None:
    """Print a failed publish, with guidance for the registry's permission codes."""
    code = exc.error_code if isinstance(exc, RegistryError) else None
    if code == "insufficient_permissions":
        err_console.print("[bold red]Error:[/bold red] Cannot verify organization membership.")
        err_console.print(
            "Publishing to an organization scope requires a token with the "
            "'read:org' permission. Issue a new token and set SEALPACK_TOKEN."
        )
    elif code == "forbidden":
        # The registry's message names the scope and who may publish to it.
        err_console.print("[bold red]Error:[/bold red] Failed to publish package:")
        err_console.print(escape(str(exc)))
    else:
        print_error(exc)

