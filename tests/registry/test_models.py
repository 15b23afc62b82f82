"""Tests for strict decoding of registry responses."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from sealpack.core.integrity import compute_integrity
from sealpack.core.semver import Version
from sealpack.exceptions import RegistryError
from sealpack.registry.models import (
    DeleteResult,
    PackageSummary,
    UploadResult,
    VersionIndex,
    VersionIndexEntry,
)

INTEGRITY = compute_integrity(b"x")


def _entry(version: str, **extra) -> dict:
    return {"version": version, "integrity": INTEGRITY, "size": 1, **extra}


class TestVersionIndexEntry:
    def test_full_entry(self) -> None:
        entry = VersionIndexEntry.from_dict(
            _entry("1.0.0", uploadedAt="2026-03-01T12:00:00Z", dependencies={"a/b": "^1.0.0"})
        )
        assert entry.version == "1.0.0"
        assert entry.uploaded_at == datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
        assert entry.dependencies == {"a/b": "^1.0.0"}

    def test_optional_fields_default(self) -> None:
        entry = VersionIndexEntry.from_dict({"version": "1.0.0", "integrity": INTEGRITY})
        assert entry.size == 0
        assert entry.uploaded_at is None
        assert entry.dependencies == {}

    @pytest.mark.parametrize(
        "payload",
        [
            "1.0.0",
            {"integrity": INTEGRITY},
            {"version": "1.0.0"},
            _entry("1.0.0", size="big"),
            _entry("1.0.0", size=True),
            _entry("1.0.0", dependencies=["a/b"]),
            _entry("1.0.0", dependencies={"a/b": 1}),
            _entry("1.0.0", uploadedAt="yesterday"),
            _entry("1.0.0", uploadedAt=12345),
        ],
    )
    def test_malformed(self, payload) -> None:
        with pytest.raises(RegistryError):
            VersionIndexEntry.from_dict(payload)


class TestVersionIndex:
    def test_latest_as_string(self) -> None:
        index = VersionIndex.from_dict(
            {"name": "a/b", "versions": [_entry("1.0.0"), _entry("1.1.0")], "latest": "1.1.0"}
        )
        assert index.latest is index.versions[1]
        assert index.version_strings == ["1.0.0", "1.1.0"]

    def test_latest_as_object(self) -> None:
        index = VersionIndex.from_dict(
            {"name": "a/b", "versions": [_entry("1.0.0")], "latest": _entry("1.0.0")}
        )
        assert index.latest.version == "1.0.0"

    def test_empty_index(self) -> None:
        index = VersionIndex.from_dict({"name": "a/b", "versions": [], "latest": None})
        assert index.versions == ()
        assert index.latest is None

    def test_latest_must_be_listed(self) -> None:
        with pytest.raises(RegistryError):
            VersionIndex.from_dict({"name": "a/b", "versions": [_entry("1.0.0")], "latest": "2.0.0"})

    def test_versions_must_be_list(self) -> None:
        with pytest.raises(RegistryError):
            VersionIndex.from_dict({"name": "a/b", "versions": {"1.0.0": {}}})

    def test_name_required(self) -> None:
        with pytest.raises(RegistryError):
            VersionIndex.from_dict({"versions": []})

    def test_find(self) -> None:
        index = VersionIndex.from_dict(
            {"name": "a/b", "versions": [_entry("1.0.0+build.1"), _entry("1.1.0")]}
        )
        assert index.find("1.1.0").version == "1.1.0"
        assert index.find("1.0.0") is None
        assert index.find(Version.parse("1.0.0")).version == "1.0.0+build.1"
        assert index.find(Version.parse("9.9.9")) is None


class TestOtherResponses:
    def test_upload_nested(self) -> None:
        result = UploadResult.from_dict(
            {"success": True, "package": {"name": "a/b", "version": "1.0.0", "integrity": INTEGRITY, "size": 3}}
        )
        assert (result.name, result.version, result.size) == ("a/b", "1.0.0", 3)

    def test_upload_flat(self) -> None:
        result = UploadResult.from_dict({"name": "a/b", "version": "1.0.0", "integrity": INTEGRITY})
        assert result.integrity == INTEGRITY

    def test_delete_with_warning(self) -> None:
        result = DeleteResult.from_dict(
            {
                "success": True,
                "deleted": {"name": "a/b", "version": "1.0.0"},
                "warning": {"dependents": ["a/c@2.0.0"], "message": "1 dependent"},
            }
        )
        assert result.warning.dependents == ("a/c@2.0.0",)
        assert result.warning.message == "1 dependent"

    def test_delete_without_warning(self) -> None:
        result = DeleteResult.from_dict({"deleted": {"name": "a/b", "version": "1.0.0"}})
        assert result.warning is None

    def test_delete_bad_dependents(self) -> None:
        with pytest.raises(RegistryError):
            DeleteResult.from_dict(
                {"deleted": {"name": "a/b", "version": "1.0.0"}, "warning": {"dependents": "a/c"}}
            )

    def test_delete_missing_body(self) -> None:
        with pytest.raises(RegistryError):
            DeleteResult.from_dict({"success": True})

    def test_package_summary(self) -> None:
        s = PackageSummary.from_dict({"name": "a/b", "latest": "1.2.0", "versionCount": 4})
        assert s.version_count == 4
