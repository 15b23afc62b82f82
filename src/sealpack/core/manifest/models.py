"""Dependency declarations.

A ``DependencySpec`` is one ``package -> constraint`` pair, produced either
from the manifest's ``dependencies`` mapping or from the dependency map of
a resolved version in the registry index.
"""

from __future__ import annotations

from dataclasses import dataclass

from sealpack.core.names import PackageName
from sealpack.core.semver import Constraint
from sealpack.exceptions import (
    ConstraintFormatError,
    InvalidDependencySpec,
    InvalidPackageName,
)


@dataclass(frozen=True)
class DependencySpec:
    """A declared dependency on a package.

    Attributes:
        package_name: Canonical ``scope/name`` (no ``@`` sigil).
        constraint: Constraint text (e.g., "^1.0.0", "~2.1.0", "1.4.2").
    """

    package_name: str
    constraint: str

    def __post_init__(self) -> None:
        try:
            canonical = str(PackageName.parse(self.package_name))
        except InvalidPackageName:
            raise InvalidDependencySpec(
                str(self.package_name), self.constraint, "invalid package name"
            ) from None
        if canonical != self.package_name:
            raise InvalidDependencySpec(
                self.package_name, self.constraint,
                "package name must not carry the '@' sigil; use DependencySpec.of",
            )
        if not isinstance(self.constraint, str) or not self.constraint.strip():
            raise InvalidDependencySpec(self.package_name, self.constraint, "empty constraint")

    @classmethod
    def of(cls, package_name: str, constraint: str) -> DependencySpec:
        """Build a spec from document values, normalizing and validating both.

        Strips a leading ``@`` from the name and checks that the constraint
        parses.

        Raises:
            InvalidDependencySpec: If the name or constraint is invalid.
        """
        try:
            canonical = str(PackageName.parse(package_name))
        except InvalidPackageName:
            raise InvalidDependencySpec(
                str(package_name), constraint, "invalid package name"
            ) from None
        if not isinstance(constraint, str) or not constraint.strip():
            raise InvalidDependencySpec(canonical, constraint, "empty constraint")
        try:
            Constraint.parse(constraint)
        except ConstraintFormatError:
            raise InvalidDependencySpec(
                canonical, constraint, "unparsable version constraint"
            ) from None
        return cls(package_name=canonical, constraint=constraint.strip())

    @property
    def parsed_name(self) -> PackageName:
        return PackageName.parse(self.package_name)

    def __str__(self) -> str:
        return f"{self.package_name}: {self.constraint}"
