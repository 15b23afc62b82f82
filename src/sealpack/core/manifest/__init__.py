"""Project manifest: declared name, version and dependency constraints."""

from sealpack.core.manifest.manifest import MANIFEST_FILENAME, Manifest
from sealpack.core.manifest.models import DependencySpec

__all__ = [
    "DependencySpec",
    "MANIFEST_FILENAME",
    "Manifest",
]
