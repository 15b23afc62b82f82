"""Install and verify workflows driven purely by a lockfile.

Neither workflow runs the resolver. ``Installer.install`` fetches each
locked artifact into the packages directory and checks its integrity;
``verify_installed`` re-hashes what is on disk without touching the
network.

On-disk layout::

    <packages_dir>/@<scope>/<name>/<version>.tgz
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from sealpack.core.integrity import compute_file_integrity, verify_file_integrity
from sealpack.core.lockfile import Lockfile, ResolvedPackage
from sealpack.core.names import PackageName
from sealpack.exceptions import IntegrityMismatch, RegistryError

logger = logging.getLogger(__name__)

ARTIFACT_SUFFIX: str = ".tgz"

# A fresh download that fails verification is fetched this many more times.
MAX_REFETCHES: int = 1


class ArtifactSource(Protocol):
    """The slice of the registry client the installer needs."""

    def download_package(
        self, scope: str, name: str, version: str, destination: Path
    ) -> Path: ...


def package_path(packages_dir: Path, package: ResolvedPackage) -> Path:
    """Return where *package*'s artifact lives under *packages_dir*."""
    parsed = PackageName.parse(package.name)
    return Path(packages_dir) / parsed.scoped_dir / parsed.name / f"{package.version}{ARTIFACT_SUFFIX}"


# ---------------------------------------------------------------------------
# Reports
# ---------------------------------------------------------------------------


@dataclass
class InstallFailure:
    """One package that could not be installed."""

    key: str
    error: Exception

    def __str__(self) -> str:
        return f"{self.key}: {self.error}"


@dataclass
class InstallReport:
    """Outcome of one install run.

    Attributes:
        installed: Keys downloaded and verified in this run.
        reused: Keys whose existing artifact already verified.
        failed: Packages that could not be installed, with the cause.
    """

    installed: list[str] = field(default_factory=list)
    reused: list[str] = field(default_factory=list)
    failed: list[InstallFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


@dataclass
class VerifyReport:
    """Outcome of checking installed artifacts against a lockfile.

    Attributes:
        verified: Keys whose artifact hashes to the locked integrity.
        missing: Keys with no artifact on disk.
        mismatched: One ``IntegrityMismatch`` per tampered or corrupt artifact.
    """

    verified: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)
    mismatched: list[IntegrityMismatch] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.missing and not self.mismatched


# ---------------------------------------------------------------------------
# Install
# ---------------------------------------------------------------------------


class Installer:
    """Fetch and verify every artifact in a lockfile.

    Installation is sequential, in lockfile order. Per-package failures are
    recorded in the report and do not stop the run.

    Args:
        registry: Anything with ``download_package`` (a ``RegistryClient``).
        packages_dir: Root of the on-disk package store.
    """

    def __init__(self, registry: ArtifactSource, packages_dir: Path) -> None:
        self._registry = registry
        self._packages_dir = Path(packages_dir)

    def install(self, lockfile: Lockfile) -> InstallReport:
        report = InstallReport()
        logger.info(
            "Installing %d packages into %s", lockfile.package_count, self._packages_dir
        )
        for package in lockfile.packages:
            try:
                fetched = self._install_one(package)
            except (RegistryError, IntegrityMismatch, OSError) as exc:
                logger.warning("Failed to install %s: %s", package.key, exc)
                report.failed.append(InstallFailure(package.key, exc))
                continue
            (report.installed if fetched else report.reused).append(package.key)
        return report

    def _install_one(self, package: ResolvedPackage) -> bool:
        """Install one package. Returns True if it was downloaded."""
        target = package_path(self._packages_dir, package)

        if target.is_file():
            if compute_file_integrity(target) == package.integrity:
                logger.debug("%s already installed", package.key)
                return False
            logger.warning("Existing artifact for %s is corrupt, re-fetching", package.key)
            target.unlink()

        parsed = PackageName.parse(package.name)
        attempts = 1 + MAX_REFETCHES
        for attempt in range(1, attempts + 1):
            self._registry.download_package(parsed.scope, parsed.name, package.version, target)
            try:
                verify_file_integrity(target, package.integrity)
            except IntegrityMismatch:
                target.unlink(missing_ok=True)
                if attempt == attempts:
                    raise
                logger.warning(
                    "Integrity mismatch for %s, re-fetching (attempt %d of %d)",
                    package.key, attempt + 1, attempts,
                )
                continue
            break

        logger.info("Installed %s", package.key)
        return True


# ---------------------------------------------------------------------------
# Verify
# ---------------------------------------------------------------------------


def verify_installed(lockfile: Lockfile, packages_dir: Path) -> VerifyReport:
    """Check every locked artifact under *packages_dir* against its integrity."""
    report = VerifyReport()
    for package in lockfile.packages:
        target = package_path(packages_dir, package)
        if not target.is_file():
            report.missing.append(package.key)
            continue
        try:
            verify_file_integrity(target, package.integrity)
        except IntegrityMismatch as exc:
            report.mismatched.append(exc)
            continue
        report.verified.append(package.key)
    return report
