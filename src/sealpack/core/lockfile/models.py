"""Lockfile data models: ResolvedPackage and LockfileMetadata.

Pure data holders with no business logic, safe to import from anywhere
without circular-dependency concerns.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ResolvedPackage:
    """A single resolved package in a lock set.

    Represents the outcome of resolving one package name: the exact version
    chosen, where to fetch it, the integrity string its artifact must hash
    to, and the constraints it declares on its own dependencies.

    Attributes:
        name: Canonical package name (``scope/name``).
        version: Exact resolved version (e.g., "1.5.0").
        source: Registry-relative locator, ``scope/name/version``.
        integrity: Content hash in ``sha256-<base64>`` format.
        dependencies: Mapping of dependency name to constraint, exactly as
            published in the version index.
        size: Artifact size in bytes, when the registry reported one.
    """

    name: str
    version: str
    source: str
    integrity: str
    dependencies: dict[str, str] = field(default_factory=dict)
    size: int | None = None

    @property
    def key(self) -> str:
        """The lock set key, ``name@version``."""
        return f"{self.name}@{self.version}"


@dataclass
class LockfileMetadata:
    """Metadata section of the lockfile.

    Attributes:
        total_packages: Expected number of package entries. Used during
            validation to detect incomplete writes.
        resolution_strategy: The resolution algorithm that produced the
            lockfile ("bfs-first-wins", or "manual" for hand-authored files).
    """

    total_packages: int = 0
    resolution_strategy: str = "bfs-first-wins"
