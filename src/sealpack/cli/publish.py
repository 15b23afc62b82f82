"""``sealpack publish <artifact>``: Upload an artifact to the registry.

The package name and version come from ``sealpack.yml``. The integrity the
registry reports back must equal the one computed locally before upload.

Exit Codes:
    0: Published and integrity confirmed.
    1: Upload rejected, no token configured, or integrity disagreement.
    2: No manifest found.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from sealpack.cli.context import CliContext, pass_cli_context
from sealpack.cli.output import print_publish_error, print_upload_result
from sealpack.core.integrity import compute_integrity, verify_integrity
from sealpack.core.manifest import MANIFEST_FILENAME, Manifest
from sealpack.exceptions import SealpackError

logger = logging.getLogger(__name__)


@click.command("publish")
@click.argument("artifact", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--manifest", "-m", "manifest_path",
    type=click.Path(dir_okay=False),
    default=MANIFEST_FILENAME,
    show_default=True,
    help="Manifest naming the package and version to publish.",
)
@pass_cli_context
def publish_command(state: CliContext, artifact: str, manifest_path: str) -> None:
    """Publish ARTIFACT as the package and version declared in the manifest."""
    path = Path(manifest_path)
    if not path.is_file():
        click.echo(f"No manifest found at {path}.")
        sys.exit(2)

    try:
        manifest = Manifest.read(path)
        package = manifest.package_name
        data = Path(artifact).read_bytes()
        local_integrity = compute_integrity(data)
        logger.info("Publishing %s@%s (%s)", package, manifest.version, local_integrity)

        result = state.get_registry().upload_package(
            package.scope, package.name, manifest.version, data
        )
        verify_integrity(data, result.integrity, subject=f"{package}@{manifest.version}")
    except SealpackError as exc:
        print_publish_error(exc)
        sys.exit(1)

    print_upload_result(result)
