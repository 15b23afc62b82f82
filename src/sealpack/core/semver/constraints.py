"""Version constraints and maximum-satisfying selection.

Three constraint forms are supported:

- Exact: ``1.2.3`` matches only 1.2.3 (prerelease included in equality,
  build metadata ignored).
- Caret: ``^1.2.3`` allows changes that do not modify the left-most
  non-zero component of the target:

  - ``^1.2.3`` means ``>=1.2.3 <2.0.0``
  - ``^0.2.3`` means ``>=0.2.3 <0.3.0``
  - ``^0.0.3`` means exactly ``0.0.3``

- Tilde: ``~1.2.3`` means ``>=1.2.3 <1.3.0``.

Lookups report absence through ``MatchResult`` rather than by raising or
returning None, so callers can tell "nothing to choose from" apart from
"nothing acceptable".
"""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass

from sealpack.core.semver.version import Version
from sealpack.exceptions import ConstraintFormatError, VersionFormatError


class ConstraintKind(enum.Enum):
    """The operator family of a constraint."""

    EXACT = ""
    CARET = "^"
    TILDE = "~"


@dataclass(frozen=True)
class Constraint:
    """A parsed version constraint.

    Attributes:
        kind: Exact, caret or tilde.
        version: The target (minimum) version.
        raw: The constraint text as authored, whitespace-trimmed.
    """

    kind: ConstraintKind
    version: Version
    raw: str

    @classmethod
    def parse(cls, text: str) -> Constraint:
        """Parse constraint text such as ``^1.0.0``, ``~2.1.0`` or ``1.4.2``.

        Raises:
            ConstraintFormatError: If the text is empty or its version part
                is not a valid semantic version.
        """
        if not isinstance(text, str) or not text.strip():
            raise ConstraintFormatError("" if text is None else str(text))
        stripped = text.strip()

        kind = ConstraintKind.EXACT
        body = stripped
        if stripped[0] == "^":
            kind, body = ConstraintKind.CARET, stripped[1:]
        elif stripped[0] == "~":
            kind, body = ConstraintKind.TILDE, stripped[1:]

        try:
            version = Version.parse(body)
        except VersionFormatError:
            raise ConstraintFormatError(text) from None
        return cls(kind=kind, version=version, raw=stripped)

    def satisfies(self, version: Version) -> bool:
        """Check whether *version* satisfies this constraint."""
        target = self.version
        if self.kind is ConstraintKind.EXACT:
            return version == target

        if version < target:
            return False

        if self.kind is ConstraintKind.TILDE:
            return version.major == target.major and version.minor == target.minor

        # Caret: the left-most non-zero component is pinned.
        if target.major > 0:
            return version.major == target.major
        if target.minor > 0:
            return version.major == 0 and version.minor == target.minor
        return (
            version.major == 0
            and version.minor == 0
            and version.patch == target.patch
        )

    def __str__(self) -> str:
        return self.raw


def _as_constraint(constraint: str | Constraint) -> Constraint:
    if isinstance(constraint, Constraint):
        return constraint
    return Constraint.parse(constraint)


def _as_version(version: str | Version) -> Version:
    if isinstance(version, Version):
        return version
    return Version.parse(version)


def satisfies(version: str | Version, constraint: str | Constraint) -> bool:
    """Check whether a version satisfies a constraint.

    Args:
        version: A ``Version`` or version string.
        constraint: A ``Constraint`` or constraint string.

    Raises:
        VersionFormatError: If *version* is an unparsable string.
        ConstraintFormatError: If *constraint* is an unparsable string.
    """
    return _as_constraint(constraint).satisfies(_as_version(version))


def is_valid_constraint(text: str) -> bool:
    """Return True if *text* parses as a constraint."""
    try:
        Constraint.parse(text)
    except ConstraintFormatError:
        return False
    return True


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------


class MatchStatus(enum.Enum):
    FOUND = "found"
    NO_CANDIDATES = "no_candidates"
    NO_MATCH = "no_match"


@dataclass(frozen=True)
class MatchResult:
    """Outcome of ``find_max_satisfying``.

    Attributes:
        status: Whether a version was found, and if not, why.
        version: The selected version when ``status`` is FOUND, else None.
    """

    status: MatchStatus
    version: Version | None = None

    @property
    def found(self) -> bool:
        return self.status is MatchStatus.FOUND


def find_max_satisfying(
    candidates: Iterable[str | Version],
    constraint: str | Constraint,
) -> MatchResult:
    """Select the highest candidate that satisfies *constraint*.

    Every candidate is parsed up front; one unparsable candidate fails the
    whole call rather than being skipped.

    Args:
        candidates: Version strings or ``Version`` objects.
        constraint: Constraint text or a parsed ``Constraint``.

    Returns:
        A ``MatchResult``: FOUND with the maximum satisfying version,
        NO_CANDIDATES for an empty candidate list, or NO_MATCH.

    Raises:
        VersionFormatError: If any candidate is not a valid version.
        ConstraintFormatError: If *constraint* cannot be parsed.
    """
    parsed_constraint = _as_constraint(constraint)
    versions = [_as_version(c) for c in candidates]
    if not versions:
        return MatchResult(MatchStatus.NO_CANDIDATES)

    matching = [v for v in versions if parsed_constraint.satisfies(v)]
    if not matching:
        return MatchResult(MatchStatus.NO_MATCH)
    return MatchResult(MatchStatus.FOUND, max(matching))


def find_latest(candidates: Iterable[str | Version]) -> Version | None:
    """Return the maximum version among *candidates*, or None if empty."""
    versions = [_as_version(c) for c in candidates]
    return max(versions) if versions else None
