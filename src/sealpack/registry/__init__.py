"""Package registry access.

Public API::

    from sealpack.registry import RegistryClient, VersionIndexProvider
    from sealpack.registry.models import VersionIndex, VersionIndexEntry
"""

from __future__ import annotations

from sealpack.registry.base import VersionIndexProvider
from sealpack.registry.client import RegistryClient
from sealpack.registry.models import (
    DeleteResult,
    DeleteWarning,
    PackageSummary,
    UploadResult,
    VersionIndex,
    VersionIndexEntry,
)

__all__ = [
    "DeleteResult",
    "DeleteWarning",
    "PackageSummary",
    "RegistryClient",
    "UploadResult",
    "VersionIndex",
    "VersionIndexEntry",
    "VersionIndexProvider",
]
