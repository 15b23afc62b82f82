"""sealpack exception hierarchy.

All public exceptions inherit from SealpackError, giving callers a single
base class to catch when they want to handle any sealpack-specific failure
without swallowing unrelated errors.

Every exception carries the structured fields needed to render a precise
diagnostic (package name, constraint, expected vs. actual values, available
alternatives) as attributes, not only inside the message string.
"""

from __future__ import annotations

from collections.abc import Sequence


class SealpackError(Exception):
    """Base exception for all sealpack errors."""


# ---------------------------------------------------------------------------
# Versions and constraints
# ---------------------------------------------------------------------------


class VersionError(SealpackError):
    """Base class for version and constraint format errors."""


class VersionFormatError(VersionError):
    """Raised when a string is not a valid semantic version.

    Attributes:
        text: The offending input.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(f"Invalid version format: {text!r}")


class ConstraintFormatError(VersionError):
    """Raised when a version constraint cannot be parsed.

    Attributes:
        constraint: The offending constraint text.
    """

    def __init__(self, constraint: str) -> None:
        self.constraint = constraint
        super().__init__(f"Invalid version constraint: {constraint!r}")


# ---------------------------------------------------------------------------
# Manifest
# ---------------------------------------------------------------------------


class ManifestError(SealpackError):
    """Raised when a manifest document is structurally invalid."""


class ManifestMissingField(ManifestError):
    """Raised when a required top-level manifest field is absent or empty.

    Attributes:
        field: Name of the missing field ("name" or "version").
    """

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"Manifest must contain a non-empty {field!r} field")


class InvalidPackageName(ManifestError):
    """Raised when a package name does not follow the ``scope/name`` grammar.

    Attributes:
        name: The offending package name.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"Invalid package name {name!r}: expected 'scope/name' with "
            "letters, digits and '-' only"
        )


class InvalidDependencySpec(ManifestError):
    """Raised when a declared dependency has a bad name or constraint.

    Attributes:
        package_name: The dependency name as written.
        constraint: The constraint as written.
        reason: Short explanation of what is wrong.
    """

    def __init__(self, package_name: str, constraint: object, reason: str) -> None:
        self.package_name = package_name
        self.constraint = constraint
        self.reason = reason
        super().__init__(
            f"Invalid dependency {package_name!r}: {constraint!r} ({reason})"
        )


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------


class ResolutionError(SealpackError):
    """Raised when dependency resolution fails.

    Covers version conflicts, packages with no published versions,
    unsatisfiable constraints, and registry failures during resolution.
    """


class ResolutionConflict(ResolutionError):
    """Raised when a constraint is incompatible with an already-resolved version.

    Attributes:
        name: Package name.
        constraint: The constraint that could not be satisfied.
        existing_version: The version resolved earlier for ``name``.
        required_by: ``name@version`` of the package that declared the
            constraint, or None for a direct manifest dependency.
    """

    def __init__(
        self,
        name: str,
        constraint: str,
        existing_version: str,
        required_by: str | None = None,
    ) -> None:
        self.name = name
        self.constraint = constraint
        self.existing_version = existing_version
        self.required_by = required_by
        origin = f" (required by {required_by})" if required_by else ""
        super().__init__(
            f"Conflict: {name} requires version {constraint}{origin} "
            f"but {existing_version} is already resolved"
        )


class NoVersionsAvailable(ResolutionError):
    """Raised when the registry lists no versions at all for a package.

    Attributes:
        name: Package name.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"No versions found for package: {name}")


class NoSatisfyingVersion(ResolutionError):
    """Raised when no published version satisfies a constraint.

    Attributes:
        name: Package name.
        constraint: The unsatisfiable constraint.
        available: Every version the registry offered, in index order.
        required_by: ``name@version`` of the requesting package, or None.
    """

    def __init__(
        self,
        name: str,
        constraint: str,
        available: Sequence[str],
        required_by: str | None = None,
    ) -> None:
        self.name = name
        self.constraint = constraint
        self.available = tuple(available)
        self.required_by = required_by
        origin = f" (required by {required_by})" if required_by else ""
        super().__init__(
            f"No version of {name} satisfies constraint: {constraint}{origin} "
            f"(available: {', '.join(self.available)})"
        )


class ResolutionFailure(ResolutionError):
    """Raised when the registry cannot supply usable data for a package.

    Covers a failed index fetch and an index entry whose dependency map
    does not parse. The underlying error is chained as ``__cause__`` and also
    exposed as ``cause``.

    Attributes:
        name: Package name, or the ``name@version`` key whose dependency
            map was rejected.
        cause: The collaborator error.
    """

    def __init__(self, name: str, cause: BaseException) -> None:
        self.name = name
        self.cause = cause
        super().__init__(f"Failed to resolve {name} from the registry: {cause}")


class ResolutionTimeout(ResolutionError):
    """Raised when resolution exceeds its overall deadline.

    Attributes:
        timeout: The configured deadline in seconds.
        pending: Number of specs still queued when the deadline passed.
    """

    def __init__(self, timeout: float, pending: int) -> None:
        self.timeout = timeout
        self.pending = pending
        super().__init__(
            f"Resolution did not finish within {timeout:g}s "
            f"({pending} dependencies still pending)"
        )


# ---------------------------------------------------------------------------
# Lockfile and integrity
# ---------------------------------------------------------------------------


class LockfileError(SealpackError):
    """Raised for lockfile read or write failures."""


class MalformedLockFile(LockfileError):
    """Raised when a lockfile document is structurally invalid.

    Attributes:
        reason: What is wrong with the document.
    """

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Malformed lockfile: {reason}")


class IntegrityMismatch(SealpackError):
    """Raised when content does not hash to its expected integrity string.

    Attributes:
        expected: Integrity string recorded in the lockfile.
        actual: Integrity string computed from the content.
        subject: Human-readable description of what was checked.
    """

    def __init__(self, expected: str, actual: str, subject: str = "content") -> None:
        self.expected = expected
        self.actual = actual
        self.subject = subject
        super().__init__(
            f"Integrity verification failed for {subject}: "
            f"expected {expected}, got {actual}"
        )


# ---------------------------------------------------------------------------
# Registry and configuration
# ---------------------------------------------------------------------------


class RegistryError(SealpackError):
    """Raised when a registry operation fails (network errors, API errors).

    Attributes:
        status_code: HTTP status code, or None for transport failures.
        error_code: Machine-readable error code from the registry, if any.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        error_code: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.error_code = error_code
        super().__init__(message)


class AuthenticationRequired(RegistryError):
    """Raised when an operation needs a registry token and none is configured."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(
            f"{operation} requires a registry token "
            "(set SEALPACK_TOKEN or 'token' in the config file)"
        )


class ConfigError(SealpackError):
    """Raised when the client configuration file cannot be read."""
