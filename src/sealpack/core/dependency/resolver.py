"""Breadth-first, first-wins dependency resolution.

The resolver turns a ``Manifest`` into a ``Lockfile`` holding exactly one
version per package name. It keeps two pieces of state per run:

- ``resolved``: a ``Lockfile`` filled in resolution order.
- ``queue``: a FIFO of pending ``DependencySpec`` items, seeded with the
  manifest's direct dependencies in document order.

Each dequeued spec is either already covered by the version resolved
earlier for its name (discarded), in conflict with it (hard failure, no
backtracking), or resolved fresh against the registry's version index.
The chosen index entry carries its integrity, size and dependency map, so a
package costs exactly one index fetch. Its dependencies are appended to the
same queue, which makes expansion breadth-first: siblings are resolved
before grandchildren, and the first constraint dequeued for a name decides
its version.

Processing is strictly sequential. The outcome of a conflict depends on
dequeue order, so the same manifest against the same index always yields
the same lockfile or the same error.

References
----------
.. [npm-v2] npm v2 nested installs and the later flat ``node_modules``
   layout; first-encountered version wins the hoisted slot.
"""

from __future__ import annotations

import logging
import time
from collections import deque
from dataclasses import dataclass

from sealpack.core.lockfile import Lockfile, ResolvedPackage
from sealpack.core.manifest import DependencySpec, Manifest
from sealpack.core.semver import MatchStatus, find_max_satisfying, satisfies
from sealpack.exceptions import (
    ManifestError,
    NoSatisfyingVersion,
    NoVersionsAvailable,
    RegistryError,
    ResolutionConflict,
    ResolutionFailure,
    ResolutionTimeout,
)
from sealpack.registry.base import VersionIndexProvider
from sealpack.registry.models import VersionIndex, VersionIndexEntry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Pending:
    """A queued spec and the ``name@version`` key that asked for it."""

    spec: DependencySpec
    required_by: str | None = None


class DependencyResolver:
    """Resolve a manifest into a lock set against a version index provider.

    The resolver never reads configuration itself; the caller passes in a
    ready provider (the HTTP ``RegistryClient`` or an in-memory fake).

    Args:
        provider: Source of per-package version indices.
        timeout: Optional overall deadline in seconds, checked before every
            dequeue. None means no deadline beyond the provider's own
            request timeouts.
    """

    def __init__(
        self,
        provider: VersionIndexProvider,
        *,
        timeout: float | None = None,
    ) -> None:
        self._provider = provider
        self._timeout = timeout

    def resolve(self, manifest: Manifest) -> Lockfile:
        """Resolve every direct and transitive dependency of *manifest*.

        Returns:
            A ``Lockfile`` with one entry per package name, in resolution
            order. Every dependency named by an entry is itself an entry.

        Raises:
            ResolutionConflict: A constraint rejects a version resolved earlier.
            NoVersionsAvailable: The registry lists no versions for a package.
            NoSatisfyingVersion: No listed version satisfies a constraint.
            ResolutionFailure: The version index could not be fetched.
            ResolutionTimeout: The overall deadline passed.
            VersionFormatError: The index lists an unparsable version.
        """
        logger.info(
            "Resolving %d direct dependencies for %s",
            len(manifest.dependencies),
            manifest.name,
        )
        deadline = None if self._timeout is None else time.monotonic() + self._timeout

        resolved = Lockfile()
        queue: deque[_Pending] = deque(_Pending(spec) for spec in manifest.dependencies)

        while queue:
            if deadline is not None and time.monotonic() > deadline:
                raise ResolutionTimeout(self._timeout, len(queue))

            item = queue.popleft()
            spec = item.spec
            logger.debug("Dequeued %s (required by %s)", spec, item.required_by or "manifest")

            existing = resolved.get_package(spec.package_name)
            if existing is not None:
                self._check_existing(existing, item)
                continue

            package = self._resolve_one(item)
            resolved.add_package(package)
            logger.info("Resolved %s", package.key)

            for dep_spec in self._dependency_specs(package):
                queue.append(_Pending(dep_spec, package.key))

        logger.info("Resolution complete: %d packages", resolved.package_count)
        return resolved

    # -- Steps ----------------------------------------------------------------

    @staticmethod
    def _dependency_specs(package: ResolvedPackage) -> list[DependencySpec]:
        try:
            return [
                DependencySpec.of(dep_name, dep_constraint)
                for dep_name, dep_constraint in package.dependencies.items()
            ]
        except ManifestError as exc:
            raise ResolutionFailure(package.key, exc) from exc

    @staticmethod
    def _check_existing(existing: ResolvedPackage, item: _Pending) -> None:
        spec = item.spec
        if not satisfies(existing.version, spec.constraint):
            raise ResolutionConflict(
                spec.package_name,
                spec.constraint,
                existing.version,
                required_by=item.required_by,
            )
        logger.debug("%s already satisfied by %s", spec, existing.key)

    def _fetch_index(self, spec: DependencySpec) -> VersionIndex:
        parsed = spec.parsed_name
        try:
            return self._provider.get_version_index(parsed.scope, parsed.name)
        except RegistryError as exc:
            raise ResolutionFailure(spec.package_name, exc) from exc

    def _resolve_one(self, item: _Pending) -> ResolvedPackage:
        spec = item.spec
        index = self._fetch_index(spec)
        if not index.versions:
            raise NoVersionsAvailable(spec.package_name)

        available = index.version_strings
        result = find_max_satisfying(available, spec.constraint)
        if result.status is not MatchStatus.FOUND:
            raise NoSatisfyingVersion(
                spec.package_name,
                spec.constraint,
                available,
                required_by=item.required_by,
            )

        entry = index.find(result.version)
        return _to_resolved(spec.package_name, entry)


def _to_resolved(name: str, entry: VersionIndexEntry) -> ResolvedPackage:
    return ResolvedPackage(
        name=name,
        version=entry.version,
        source=f"{name}/{entry.version}",
        integrity=entry.integrity,
        dependencies=dict(entry.dependencies),
        size=entry.size,
    )
