"""Lockfile core class: package management and serialization.

The ``Lockfile`` class is the in-memory lock set and the central data
structure behind a ``sealpack.lock`` file. It provides:

- **Package management:** add, get, count, and list resolved packages.
- **Serialization:** ``to_dict``, ``to_json``, and ``write``.
- **Metadata:** resolution strategy and package count.

It has no resolution logic of its own. Install and verify workflows read it
and never need to run the resolver again.

Ordering guarantee: packages are kept, and written, in insertion order,
which for a resolver-built lockfile is resolution order. All object keys
within an entry are sorted, so two lockfiles with the same content differ
only in ``generated_at``.

References
----------
.. [npm-lock] npm documentation. "package-lock.json." File format
   guaranteeing deterministic installs across environments.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from sealpack.core.lockfile.models import LockfileMetadata, ResolvedPackage

LOCKFILE_FILENAME: str = "sealpack.lock"


class Lockfile:
    """An ordered lock set: one ``ResolvedPackage`` per package name.

    Keys are ``name@version`` in insertion order. At most one entry exists
    per package name.

    Example::

        lf = Lockfile()
        lf.add_package(ResolvedPackage(
            name="alice/postgres",
            version="1.5.0",
            source="alice/postgres/1.5.0",
            integrity="sha256-...",
            dependencies={"alice/jsonutil": "~2.1.0"},
        ))
        lf.write(Path("sealpack.lock"))
    """

    LOCKFILE_VERSION: str = "1.0"
    INTEGRITY_ALGORITHM: str = "sha256"

    def __init__(self) -> None:
        self._packages: dict[str, ResolvedPackage] = {}
        self._metadata = LockfileMetadata()

    # -- Package management -------------------------------------------------

    def add_package(self, package: ResolvedPackage) -> None:
        """Add a resolved package entry.

        If a package with the same name already exists, it is replaced
        (the new entry moves to the end). The metadata ``total_packages``
        counter is updated automatically.

        Args:
            package: The ``ResolvedPackage`` to add.
        """
        existing = self.get_package(package.name)
        if existing is not None:
            del self._packages[existing.key]
        self._packages[package.key] = package
        self._metadata.total_packages = len(self._packages)

    def get_package(self, name: str) -> ResolvedPackage | None:
        """Retrieve a resolved package by canonical name.

        Returns:
            The ``ResolvedPackage``, or None if not present.
        """
        for package in self._packages.values():
            if package.name == name:
                return package
        return None

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.get_package(name) is not None

    @property
    def packages(self) -> list[ResolvedPackage]:
        """All entries in insertion (resolution) order."""
        return list(self._packages.values())

    @property
    def keys(self) -> list[str]:
        """All ``name@version`` keys in insertion order."""
        return list(self._packages)

    @property
    def package_count(self) -> int:
        return len(self._packages)

    @property
    def package_names(self) -> list[str]:
        """Sorted list of all package names in the lockfile."""
        return sorted(p.name for p in self._packages.values())

    # -- Serialization ------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Serialize the lockfile to a dict matching the on-disk schema.

        Returns:
            A dictionary suitable for JSON serialization.
        """
        entries: list[dict[str, Any]] = []
        for package in self._packages.values():
            entry: dict[str, Any] = {
                "name": package.name,
                "version": package.version,
                "source": package.source,
                "integrity": package.integrity,
                "dependencies": dict(package.dependencies),
            }
            if package.size is not None:
                entry["size"] = package.size
            entries.append(entry)

        return {
            "lockfile_version": self.LOCKFILE_VERSION,
            "generated_by": "sealpack",
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "integrity_algorithm": self.INTEGRITY_ALGORITHM,
            "packages": entries,
            "metadata": {
                "total_packages": self._metadata.total_packages,
                "resolution_strategy": self._metadata.resolution_strategy,
            },
        }

    def to_json(self, indent: int = 2) -> str:
        """Serialize to a JSON string.

        Args:
            indent: JSON indentation level. Default 2 for readability.
        """
        return json.dumps(self.to_dict(), indent=indent, sort_keys=True) + "\n"

    def write(self, path: Path) -> None:
        """Write lockfile to disk as JSON.

        Creates parent directories if they do not exist.
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_json(), encoding="utf-8")

    # -- Metadata access ----------------------------------------------------

    @property
    def metadata(self) -> LockfileMetadata:
        """Return the lockfile metadata."""
        return self._metadata

    @metadata.setter
    def metadata(self, value: LockfileMetadata) -> None:
        self._metadata = value

    def __repr__(self) -> str:
        return f"Lockfile({self.keys!r})"
