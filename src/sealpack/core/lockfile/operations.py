"""Lockfile operations: deserialization and validation.

This module extends the ``Lockfile`` class (defined in ``lockfile.py``) with
classmethods and instance methods for:

- **Deserialization:** ``from_dict``, ``from_json``, ``read`` (disk).
- **Validation:** internal consistency checks (closure, hashes, versions).

These are attached to the ``Lockfile`` class at import time (in
``__init__.py``) to keep each source file focused while presenting a single
unified API to callers.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from sealpack.core.integrity import is_valid_integrity
from sealpack.core.lockfile.models import LockfileMetadata, ResolvedPackage
from sealpack.core.names import normalize_name
from sealpack.core.semver import Version
from sealpack.exceptions import InvalidPackageName, MalformedLockFile, VersionFormatError

_SUPPORTED_MAJOR = "1"
_REQUIRED_STRING_FIELDS = ("name", "version", "source", "integrity")


def _require_str(entry: dict[str, Any], key: str, index: int) -> str:
    value = entry.get(key)
    if not isinstance(value, str) or not value:
        raise MalformedLockFile(f"packages[{index}] is missing a string {key!r}")
    return value


def _parse_entry(entry: Any, index: int) -> ResolvedPackage:
    if not isinstance(entry, dict):
        raise MalformedLockFile(f"packages[{index}] must be an object")

    fields = {key: _require_str(entry, key, index) for key in _REQUIRED_STRING_FIELDS}
    try:
        fields["name"] = normalize_name(fields["name"])
    except InvalidPackageName:
        raise MalformedLockFile(
            f"packages[{index}] has an invalid package name {fields['name']!r}"
        ) from None

    deps = entry.get("dependencies", {})
    if deps is None:
        deps = {}
    if not isinstance(deps, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in deps.items()
    ):
        raise MalformedLockFile(
            f"packages[{index}].dependencies must map package names to constraint strings"
        )

    size = entry.get("size")
    if size is not None and (isinstance(size, bool) or not isinstance(size, int)):
        raise MalformedLockFile(f"packages[{index}].size must be an integer")

    return ResolvedPackage(
        name=fields["name"],
        version=fields["version"],
        source=fields["source"],
        integrity=fields["integrity"],
        dependencies=dict(deps),
        size=size,
    )


def _from_dict(cls: type, data: Any) -> Any:
    """Deserialize a lockfile from a dict (parsed JSON).

    Accepts the dict format produced by ``to_dict()``. Metadata fields not
    present use default values.

    Args:
        data: Dictionary matching the lockfile schema.

    Returns:
        A new ``Lockfile`` instance populated from the dict.

    Raises:
        MalformedLockFile: If the document is structurally invalid, names an
            unsupported lockfile version, or lists a package name twice.
    """
    if not isinstance(data, dict):
        raise MalformedLockFile("top-level value must be an object")

    version = data.get("lockfile_version")
    if not isinstance(version, str) or version.split(".")[0] != _SUPPORTED_MAJOR:
        raise MalformedLockFile(f"unsupported lockfile_version {version!r}")

    entries = data.get("packages")
    if not isinstance(entries, list):
        raise MalformedLockFile("'packages' must be a list")

    lf = cls()
    for index, raw in enumerate(entries):
        package = _parse_entry(raw, index)
        if lf.get_package(package.name) is not None:
            raise MalformedLockFile(f"package {package.name!r} is listed more than once")
        lf._packages[package.key] = package

    meta = data.get("metadata", {})
    if not isinstance(meta, dict):
        raise MalformedLockFile("'metadata' must be an object")
    total = meta.get("total_packages", len(lf._packages))
    if isinstance(total, bool) or not isinstance(total, int):
        raise MalformedLockFile("metadata.total_packages must be an integer")
    lf._metadata = LockfileMetadata(
        total_packages=total,
        resolution_strategy=str(meta.get("resolution_strategy", "bfs-first-wins")),
    )

    return lf


def _from_json(cls: type, json_str: str) -> Any:
    """Deserialize from a JSON string.

    Raises:
        MalformedLockFile: If the string is not valid JSON or does not match
            the schema.
    """
    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as exc:
        raise MalformedLockFile(f"invalid JSON: {exc}") from exc
    return cls.from_dict(data)


def _read(cls: type, path: Path) -> Any:
    """Read a lockfile from disk.

    Raises:
        FileNotFoundError: If the file does not exist.
        MalformedLockFile: If the content is invalid.
    """
    text = Path(path).read_text(encoding="utf-8")
    return cls.from_json(text)


def _validate(self: Any) -> list[str]:
    """Validate the lockfile for internal consistency.

    Performs the following checks:

    1. **Closure:** Every dependency named by an entry must itself be an
       entry in the lockfile.
    2. **Integrity format:** Every integrity string must be a well-formed
       ``sha256-<base64>`` digest.
    3. **Versions:** Every version must parse as a semantic version.
    4. **Metadata consistency:** ``total_packages`` must match the actual
       number of entries.

    Dependency cycles are legal and not reported.

    Returns:
        List of validation error messages. Empty means the lockfile is valid.
    """
    errors: list[str] = []
    packages = self.packages
    names = {p.name for p in packages}

    for package in packages:
        for dep_name in package.dependencies:
            try:
                canonical = normalize_name(dep_name)
            except InvalidPackageName:
                errors.append(f"Package {package.key!r} names invalid dependency {dep_name!r}")
                continue
            if canonical not in names:
                errors.append(
                    f"Package {package.key!r} depends on {canonical!r} which is "
                    f"not in the lockfile"
                )

    for package in packages:
        if not is_valid_integrity(package.integrity):
            errors.append(
                f"Package {package.key!r} has invalid integrity string: "
                f"{package.integrity!r}"
            )

    for package in packages:
        try:
            Version.parse(package.version)
        except VersionFormatError:
            errors.append(f"Package {package.name!r} has invalid version {package.version!r}")

    if self._metadata.total_packages != len(packages):
        errors.append(
            f"Metadata total_packages ({self._metadata.total_packages}) "
            f"does not match actual count ({len(packages)})"
        )

    return errors
