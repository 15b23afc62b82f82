"""Shared test helpers: an in-memory registry and artifact factories."""

from __future__ import annotations

from pathlib import Path

from sealpack.core.integrity import compute_integrity
from sealpack.exceptions import RegistryError
from sealpack.registry.base import VersionIndexProvider
from sealpack.registry.models import (
    DeleteResult,
    DeleteWarning,
    PackageSummary,
    UploadResult,
    VersionIndex,
    VersionIndexEntry,
)


def artifact_bytes(name: str, version: str) -> bytes:
    """Deterministic artifact content for ``name@version``."""
    return f"artifact {name}@{version}\n".encode()


class FakeRegistry(VersionIndexProvider):
    """In-memory stand-in for ``RegistryClient``.

    Records every index request and download so tests can assert on
    network behaviour (e.g. one index fetch per resolved package).
    """

    def __init__(self) -> None:
        self._versions: dict[str, list[VersionIndexEntry]] = {}
        self.artifacts: dict[tuple[str, str], bytes] = {}
        self.index_requests: list[str] = []
        self.downloads: list[str] = []
        self.failing: set[str] = set()
        # key -> number of upcoming downloads that serve corrupted bytes
        self.corrupt_downloads: dict[str, int] = {}
        self.deleted: list[str] = []

    # -- Test setup -------------------------------------------------------

    def publish(
        self,
        name: str,
        version: str,
        dependencies: dict[str, str] | None = None,
        content: bytes | None = None,
    ) -> VersionIndexEntry:
        data = artifact_bytes(name, version) if content is None else content
        entry = VersionIndexEntry(
            version=version,
            integrity=compute_integrity(data),
            size=len(data),
            dependencies=dict(dependencies or {}),
        )
        self._versions.setdefault(name, []).append(entry)
        self.artifacts[(name, version)] = data
        return entry

    def add_empty(self, name: str) -> None:
        self._versions.setdefault(name, [])

    # -- VersionIndexProvider ---------------------------------------------

    def get_version_index(self, scope: str, name: str) -> VersionIndex:
        full = f"{scope}/{name}"
        self.index_requests.append(full)
        if full in self.failing:
            raise RegistryError(f"Service unavailable for {full}", status_code=503)
        if full not in self._versions:
            raise RegistryError(
                f"Package not found: {full}", status_code=404, error_code="NOT_FOUND"
            )
        versions = tuple(self._versions[full])
        return VersionIndex(
            name=full, versions=versions, latest=versions[-1] if versions else None
        )

    # -- Client operations used by install / publish / delete / list ------

    def download_package(self, scope: str, name: str, version: str, destination: Path) -> Path:
        full = f"{scope}/{name}"
        key = f"{full}@{version}"
        self.downloads.append(key)
        data = self.artifacts.get((full, version))
        if data is None:
            raise RegistryError(f"Package version not found: {key}", status_code=404)
        if self.corrupt_downloads.get(key, 0) > 0:
            self.corrupt_downloads[key] -= 1
            data = data + b"tampered"
        destination = Path(destination)
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_bytes(data)
        return destination

    def upload_package(self, scope: str, name: str, version: str, artifact: bytes) -> UploadResult:
        full = f"{scope}/{name}"
        entry = self.publish(full, version, content=artifact)
        return UploadResult(name=full, version=version, integrity=entry.integrity, size=entry.size)

    def delete_package_version(self, scope: str, name: str, version: str) -> DeleteResult:
        full = f"{scope}/{name}"
        entries = self._versions.get(full, [])
        remaining = [e for e in entries if e.version != version]
        if len(remaining) == len(entries):
            raise RegistryError(f"Package version not found: {full}@{version}", status_code=404)
        self._versions[full] = remaining
        self.deleted.append(f"{full}@{version}")

        dependents = tuple(
            f"{other}@{e.version}"
            for other, other_entries in self._versions.items()
            for e in other_entries
            if full in e.dependencies
        )
        warning = None
        if dependents:
            warning = DeleteWarning(
                dependents=dependents,
                message=f"{len(dependents)} package(s) depend on {full}",
            )
        return DeleteResult(name=full, version=version, warning=warning)

    def list_packages(self) -> list[PackageSummary]:
        return [
            PackageSummary(name=n, latest=entries[-1].version, version_count=len(entries))
            for n, entries in self._versions.items()
            if entries
        ]
