"""Semantic version parsing and ordering.

A ``Version`` is ``MAJOR.MINOR.PATCH[-PRERELEASE][+BUILD]``. Ordering
compares the numeric triple first; a release outranks any prerelease of
the same triple, and two prerelease tags compare as plain strings. This is
deliberately simpler than SemVer 2.0.0 section 11 (no per-identifier
numeric comparison). Build metadata never takes part in ordering,
equality or hashing.

References
----------
.. [SemVer] Preston-Werner, T. (2013). "Semantic Versioning 2.0.0."
   https://semver.org/
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from sealpack.exceptions import VersionFormatError

_SEMVER_RE = re.compile(
    r"(?P<major>[0-9]+)\.(?P<minor>[0-9]+)\.(?P<patch>[0-9]+)"
    r"(?:-(?P<pre>[0-9A-Za-z\-.]+))?"
    r"(?:\+(?P<build>[0-9A-Za-z\-.]+))?"
)


@dataclass(frozen=True, eq=False)
class Version:
    """An immutable semantic version.

    Attributes:
        major: Major component (non-negative).
        minor: Minor component (non-negative).
        patch: Patch component (non-negative).
        prerelease: Prerelease tag without the leading ``-``, or None.
        build: Build metadata without the leading ``+``, or None. Ignored
            by comparisons.
    """

    major: int
    minor: int
    patch: int
    prerelease: str | None = None
    build: str | None = field(default=None)

    @classmethod
    def parse(cls, text: str) -> Version:
        """Parse a version string.

        Args:
            text: Semantic version string (e.g., "1.2.3", "1.0.0-rc.1+abc").

        Returns:
            The parsed ``Version``.

        Raises:
            VersionFormatError: If *text* does not match the version grammar.
        """
        if not isinstance(text, str):
            raise VersionFormatError(str(text))
        m = _SEMVER_RE.fullmatch(text)
        if not m:
            raise VersionFormatError(text)
        return cls(
            major=int(m.group("major")),
            minor=int(m.group("minor")),
            patch=int(m.group("patch")),
            prerelease=m.group("pre"),
            build=m.group("build"),
        )

    @property
    def is_prerelease(self) -> bool:
        return self.prerelease is not None

    @property
    def core(self) -> tuple[int, int, int]:
        """The numeric (major, minor, patch) triple."""
        return (self.major, self.minor, self.patch)

    def _key(self) -> tuple[int, int, int, bool, str]:
        # A release (no prerelease tag) sorts after every prerelease of the
        # same triple: False < True.
        return (
            self.major,
            self.minor,
            self.patch,
            self.prerelease is None,
            self.prerelease or "",
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __lt__(self, other: Version) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key() < other._key()

    def __le__(self, other: Version) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key() <= other._key()

    def __gt__(self, other: Version) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key() > other._key()

    def __ge__(self, other: Version) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key() >= other._key()

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease is not None:
            text += f"-{self.prerelease}"
        if self.build is not None:
            text += f"+{self.build}"
        return text

    def __repr__(self) -> str:
        return f"Version({str(self)!r})"


def compare(a: Version, b: Version) -> int:
    """Three-way comparison: -1 if a < b, 0 if equal, 1 if a > b."""
    if a < b:
        return -1
    if a > b:
        return 1
    return 0
