"""Project manifest (``sealpack.yml``) parsing and writing.

Format::

    name: alice/my-project
    version: 1.0.0
    dependencies:
      alice/postgres: ^1.0.0
      bob/utils: 1.0.0

Dependencies keep document order, which fixes the order the resolver
seeds its queue with and therefore the lockfile it produces.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from sealpack.core.manifest.models import DependencySpec
from sealpack.core.names import PackageName
from sealpack.core.semver import Version
from sealpack.exceptions import (
    InvalidDependencySpec,
    ManifestError,
    ManifestMissingField,
    VersionFormatError,
)

MANIFEST_FILENAME: str = "sealpack.yml"


def _scalar_field(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None or value == "":
        raise ManifestMissingField(key)
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise ManifestError(f"Manifest field {key!r} must be a string, got {value!r}")
    text = str(value)
    if not text.strip():
        raise ManifestMissingField(key)
    return text


@dataclass(frozen=True)
class Manifest:
    """A project's declared identity and dependencies.

    Attributes:
        name: Project package name as written (may carry the ``@`` sigil).
        version: Project version string.
        dependencies: Declared dependencies, in document order.
    """

    name: str
    version: str
    dependencies: tuple[DependencySpec, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "dependencies", tuple(self.dependencies))

    # -- Parsing --------------------------------------------------------------

    @classmethod
    def from_dict(cls, data: Any) -> Manifest:
        """Build a manifest from an already-decoded document.

        Raises:
            ManifestMissingField: If ``name`` or ``version`` is absent or empty.
            InvalidDependencySpec: If a dependency name or constraint is invalid,
                or two entries normalize to the same package.
            ManifestError: For any other structural problem.
        """
        if not isinstance(data, dict):
            raise ManifestError("Manifest document must be a mapping")

        name = _scalar_field(data, "name")
        version = _scalar_field(data, "version")
        try:
            Version.parse(version)
        except VersionFormatError as exc:
            raise ManifestError(f"Manifest version is not a semantic version: {version!r}") from exc

        deps_data = data.get("dependencies")
        if deps_data is None:
            deps_data = {}
        if not isinstance(deps_data, dict):
            raise ManifestError("Manifest 'dependencies' must be a mapping of package to constraint")

        dependencies: list[DependencySpec] = []
        seen: set[str] = set()
        for raw_name, raw_constraint in deps_data.items():
            if isinstance(raw_constraint, (int, float)) and not isinstance(raw_constraint, bool):
                raw_constraint = str(raw_constraint)
            spec = DependencySpec.of(str(raw_name), raw_constraint)
            if spec.package_name in seen:
                raise InvalidDependencySpec(
                    str(raw_name), raw_constraint, "declared more than once"
                )
            seen.add(spec.package_name)
            dependencies.append(spec)

        return cls(name=name, version=version, dependencies=tuple(dependencies))

    @classmethod
    def parse(cls, text: str) -> Manifest:
        """Parse manifest YAML text.

        Raises:
            ManifestError: If the text is not valid YAML or is empty.
        """
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ManifestError(f"Manifest is not valid YAML: {exc}") from exc
        if data is None:
            raise ManifestError("Manifest file is empty")
        return cls.from_dict(data)

    @classmethod
    def read(cls, path: Path) -> Manifest:
        """Read and parse a manifest file.

        Raises:
            FileNotFoundError: If the file does not exist.
        """
        return cls.parse(Path(path).read_text(encoding="utf-8"))

    # -- Serialization --------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name, "version": self.version}
        if self.dependencies:
            # Names are stored canonically, so they are written sigil-free.
            data["dependencies"] = {
                dep.package_name: dep.constraint for dep in self.dependencies
            }
        return data

    def to_yaml(self) -> str:
        return yaml.safe_dump(self.to_dict(), sort_keys=False, default_flow_style=False)

    def write(self, path: Path) -> None:
        """Write the manifest as YAML, creating parent directories."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_yaml(), encoding="utf-8")

    # -- Accessors ------------------------------------------------------------

    @property
    def package_name(self) -> PackageName:
        """The project's own name, parsed.

        Raises:
            InvalidPackageName: If ``name`` is not a ``scope/name`` identifier.
        """
        return PackageName.parse(self.name)
