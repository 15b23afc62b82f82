"""Typed registry response models.

Each model decodes its JSON payload strictly through ``from_dict``: required
fields must be present with the right type, optional fields are explicit,
and anything else raises ``RegistryError``. Call sites never inspect raw
dictionaries.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from sealpack.core.semver import Version
from sealpack.exceptions import RegistryError, VersionFormatError


def _malformed(what: str, detail: str) -> RegistryError:
    return RegistryError(f"Malformed registry response ({what}): {detail}")


def _req_str(data: dict[str, Any], key: str, what: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value:
        raise _malformed(what, f"missing string field {key!r}")
    return value


def _opt_int(data: dict[str, Any], key: str, what: str, default: int = 0) -> int:
    value = data.get(key, default)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int):
        raise _malformed(what, f"field {key!r} must be an integer")
    return value


def _parse_timestamp(value: Any, what: str) -> datetime | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise _malformed(what, "'uploadedAt' must be an ISO-8601 string")
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        raise _malformed(what, f"unparsable timestamp {value!r}") from None


def _as_object(data: Any, what: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise _malformed(what, "expected a JSON object")
    return data


# ---------------------------------------------------------------------------
# Version index
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class VersionIndexEntry:
    """One published version of a package, as listed in its version index.

    Carries everything resolution needs (integrity and dependency map) so
    that no per-version request is required.

    Attributes:
        version: Version string as published.
        integrity: ``sha256-<base64>`` digest of the artifact.
        size: Artifact size in bytes (0 when unreported).
        uploaded_at: Publication time, if reported.
        dependencies: Mapping of dependency name to constraint.
    """

    version: str
    integrity: str
    size: int = 0
    uploaded_at: datetime | None = None
    dependencies: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> VersionIndexEntry:
        what = "version entry"
        obj = _as_object(data, what)
        deps = obj.get("dependencies")
        if deps is None:
            deps = {}
        if not isinstance(deps, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in deps.items()
        ):
            raise _malformed(what, "'dependencies' must map names to constraint strings")
        return cls(
            version=_req_str(obj, "version", what),
            integrity=_req_str(obj, "integrity", what),
            size=_opt_int(obj, "size", what),
            uploaded_at=_parse_timestamp(obj.get("uploadedAt"), what),
            dependencies=dict(deps),
        )


@dataclass(frozen=True)
class VersionIndex:
    """The full version listing for one package.

    Attributes:
        name: Package name as reported by the registry.
        versions: Every published version, in registry order.
        latest: The registry's ``latest`` entry, or None for an empty index.
    """

    name: str
    versions: tuple[VersionIndexEntry, ...] = ()
    latest: VersionIndexEntry | None = None

    @classmethod
    def from_dict(cls, data: Any) -> VersionIndex:
        what = "version index"
        obj = _as_object(data, what)
        raw_versions = obj.get("versions")
        if raw_versions is None:
            raw_versions = []
        if not isinstance(raw_versions, list):
            raise _malformed(what, "'versions' must be a list")
        versions = tuple(VersionIndexEntry.from_dict(v) for v in raw_versions)

        raw_latest = obj.get("latest")
        latest: VersionIndexEntry | None = None
        if raw_latest is not None:
            # The registry reports ``latest`` either as a version string or
            # as a full entry; either way it must name a listed version.
            if isinstance(raw_latest, str):
                latest_version = raw_latest
            else:
                latest_version = _req_str(_as_object(raw_latest, what), "version", what)
            latest = next((v for v in versions if v.version == latest_version), None)
            if latest is None:
                raise _malformed(what, f"latest version {latest_version!r} not in versions list")

        return cls(name=_req_str(obj, "name", what), versions=versions, latest=latest)

    @property
    def version_strings(self) -> list[str]:
        return [v.version for v in self.versions]

    def find(self, version: str | Version) -> VersionIndexEntry | None:
        """Return the entry for *version*, or None.

        A string matches exactly; a ``Version`` matches by version equality
        (build metadata ignored), first listed entry wins.
        """
        if isinstance(version, str):
            return next((v for v in self.versions if v.version == version), None)
        for entry in self.versions:
            try:
                if Version.parse(entry.version) == version:
                    return entry
            except VersionFormatError:
                continue
        return None


# ---------------------------------------------------------------------------
# Publish / delete / list
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class UploadResult:
    """Registry acknowledgement of a published artifact."""

    name: str
    version: str
    integrity: str
    size: int

    @classmethod
    def from_dict(cls, data: Any) -> UploadResult:
        what = "upload response"
        obj = _as_object(data, what)
        body = obj.get("package", obj.get("packageInfo", obj))
        body = _as_object(body, what)
        return cls(
            name=_req_str(body, "name", what),
            version=_req_str(body, "version", what),
            integrity=_req_str(body, "integrity", what),
            size=_opt_int(body, "size", what),
        )


@dataclass(frozen=True)
class DeleteWarning:
    """Packages that still depend on a deleted version."""

    dependents: tuple[str, ...]
    message: str = ""


@dataclass(frozen=True)
class DeleteResult:
    """Registry acknowledgement of a deleted version."""

    name: str
    version: str
    warning: DeleteWarning | None = None

    @classmethod
    def from_dict(cls, data: Any) -> DeleteResult:
        what = "delete response"
        obj = _as_object(data, what)
        deleted = _as_object(obj.get("deleted"), what)

        warning = None
        raw_warning = obj.get("warning")
        if raw_warning is not None:
            warning_obj = _as_object(raw_warning, what)
            dependents = warning_obj.get("dependents")
            if not isinstance(dependents, list) or not all(isinstance(d, str) for d in dependents):
                raise _malformed(what, "'warning.dependents' must be a list of names")
            message = warning_obj.get("message") or ""
            warning = DeleteWarning(dependents=tuple(dependents), message=str(message))

        return cls(
            name=_req_str(deleted, "name", what),
            version=_req_str(deleted, "version", what),
            warning=warning,
        )


@dataclass(frozen=True)
class PackageSummary:
    """One row of the registry's package listing."""

    name: str
    latest: str
    version_count: int

    @classmethod
    def from_dict(cls, data: Any) -> PackageSummary:
        what = "package listing"
        obj = _as_object(data, what)
        return cls(
            name=_req_str(obj, "name", what),
            latest=_req_str(obj, "latest", what),
            version_count=_opt_int(obj, "versionCount", what),
        )
