"""Tests for lockfile deserialization errors and validation."""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any

import pytest

from sealpack.core.integrity import compute_integrity
from sealpack.core.lockfile import Lockfile, ResolvedPackage
from sealpack.exceptions import LockfileError, MalformedLockFile

GOOD_INTEGRITY = compute_integrity(b"payload")


def _document() -> dict[str, Any]:
    return {
        "lockfile_version": "1.0",
        "generated_by": "sealpack",
        "generated_at": "2026-01-01T00:00:00+00:00",
        "integrity_algorithm": "sha256",
        "packages": [
            {
                "name": "a/x",
                "version": "1.0.0",
                "source": "a/x/1.0.0",
                "integrity": GOOD_INTEGRITY,
                "dependencies": {"a/y": "^1.0.0"},
                "size": 7,
            },
            {
                "name": "a/y",
                "version": "1.2.0",
                "source": "a/y/1.2.0",
                "integrity": GOOD_INTEGRITY,
                "dependencies": {},
            },
        ],
        "metadata": {"total_packages": 2, "resolution_strategy": "bfs-first-wins"},
    }


class TestFromDict:
    def test_valid_document(self) -> None:
        lf = Lockfile.from_dict(_document())
        assert lf.keys == ["a/x@1.0.0", "a/y@1.2.0"]
        assert lf.get_package("a/x").size == 7
        assert lf.get_package("a/y").size is None

    def test_sigil_normalized_on_read(self) -> None:
        doc = _document()
        doc["packages"][1]["name"] = "@a/y"
        assert "a/y" in Lockfile.from_dict(doc)

    def test_missing_metadata_defaults(self) -> None:
        doc = _document()
        del doc["metadata"]
        assert Lockfile.from_dict(doc).metadata.total_packages == 2

    def test_null_dependencies(self) -> None:
        doc = _document()
        doc["packages"][1]["dependencies"] = None
        assert Lockfile.from_dict(doc).get_package("a/y").dependencies == {}

    @pytest.mark.parametrize(
        "mutate",
        [
            lambda d: d.pop("packages"),
            lambda d: d.__setitem__("packages", {"a/x": {}}),
            lambda d: d.__setitem__("lockfile_version", "2.0"),
            lambda d: d.pop("lockfile_version"),
            lambda d: d["packages"][0].pop("integrity"),
            lambda d: d["packages"][0].__setitem__("version", 1),
            lambda d: d["packages"][0].__setitem__("name", "no-scope"),
            lambda d: d["packages"][0].__setitem__("dependencies", ["a/y"]),
            lambda d: d["packages"][0].__setitem__("dependencies", {"a/y": 1}),
            lambda d: d["packages"][0].__setitem__("size", "7"),
            lambda d: d["packages"].append("not an object"),
            lambda d: d.__setitem__("metadata", []),
            lambda d: d["metadata"].__setitem__("total_packages", "2"),
        ],
    )
    def test_structural_errors(self, mutate) -> None:
        doc = copy.deepcopy(_document())
        mutate(doc)
        with pytest.raises(MalformedLockFile) as excinfo:
            Lockfile.from_dict(doc)
        assert excinfo.value.reason

    def test_duplicate_name(self) -> None:
        doc = _document()
        doc["packages"][1]["name"] = "@a/x"
        with pytest.raises(MalformedLockFile, match="more than once"):
            Lockfile.from_dict(doc)

    def test_top_level_not_object(self) -> None:
        with pytest.raises(MalformedLockFile):
            Lockfile.from_dict([])

    def test_minor_version_bump_accepted(self) -> None:
        doc = _document()
        doc["lockfile_version"] = "1.3"
        assert Lockfile.from_dict(doc).package_count == 2


class TestFromJson:
    def test_invalid_json(self) -> None:
        with pytest.raises(MalformedLockFile):
            Lockfile.from_json("{not json")

    def test_malformed_is_lockfile_error(self) -> None:
        with pytest.raises(LockfileError):
            Lockfile.from_json("[]")

    def test_read_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            Lockfile.read(tmp_path / "sealpack.lock")

    def test_json_round_trip(self) -> None:
        lf = Lockfile.from_json(json.dumps(_document()))
        again = Lockfile.from_json(lf.to_json())
        assert again.packages == lf.packages


class TestValidate:
    def test_clean(self) -> None:
        assert Lockfile.from_dict(_document()).validate() == []

    def test_closure_violation(self) -> None:
        doc = _document()
        doc["packages"][0]["dependencies"] = {"a/missing": "1.0.0"}
        errors = Lockfile.from_dict(doc).validate()
        assert len(errors) == 1
        assert "a/missing" in errors[0]

    def test_dependency_with_sigil_counts_as_present(self) -> None:
        doc = _document()
        doc["packages"][0]["dependencies"] = {"@a/y": "^1.0.0"}
        assert Lockfile.from_dict(doc).validate() == []

    def test_bad_integrity(self) -> None:
        doc = _document()
        doc["packages"][1]["integrity"] = "md5-abc"
        errors = Lockfile.from_dict(doc).validate()
        assert any("integrity" in e for e in errors)

    def test_bad_version(self) -> None:
        doc = _document()
        doc["packages"][1]["version"] = "1.2"
        errors = Lockfile.from_dict(doc).validate()
        assert any("invalid version" in e for e in errors)

    def test_version_with_trailing_newline(self) -> None:
        doc = _document()
        doc["packages"][1]["version"] = "1.2.0\n"
        errors = Lockfile.from_dict(doc).validate()
        assert any("invalid version" in e for e in errors)

    def test_metadata_count_mismatch(self) -> None:
        doc = _document()
        doc["metadata"]["total_packages"] = 5
        errors = Lockfile.from_dict(doc).validate()
        assert any("total_packages" in e for e in errors)

    def test_cycles_are_legal(self) -> None:
        lf = Lockfile()
        for name, dep in (("a/x", "a/y"), ("a/y", "a/x")):
            lf.add_package(ResolvedPackage(
                name=name, version="1.0.0", source=f"{name}/1.0.0",
                integrity=GOOD_INTEGRITY, dependencies={dep: "1.0.0"},
            ))
        assert lf.validate() == []
