"""Package-name grammar shared by the manifest, resolver and lockfile.

Names are ``scope/name`` with both parts restricted to ``[a-zA-Z0-9-]+``.
Some documents write the scope with a leading ``@`` sigil
(``@alice/postgres``). Internally every name is stored without it; the
sigil is stripped when reading any document and only re-added where an
external layout asks for it (the on-disk package directory).
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from sealpack.exceptions import InvalidPackageName

SCOPE_SIGIL: str = "@"

_PACKAGE_NAME_RE = re.compile(r"[a-zA-Z0-9-]+/[a-zA-Z0-9-]+")


@dataclass(frozen=True)
class PackageName:
    """A parsed ``scope/name`` package identifier."""

    scope: str
    name: str

    @classmethod
    def parse(cls, text: str) -> PackageName:
        """Parse ``scope/name`` or ``@scope/name``.

        Raises:
            InvalidPackageName: If *text* does not follow the grammar.
        """
        if not isinstance(text, str):
            raise InvalidPackageName(str(text))
        canonical = text[1:] if text.startswith(SCOPE_SIGIL) else text
        if not _PACKAGE_NAME_RE.fullmatch(canonical):
            raise InvalidPackageName(text)
        scope, name = canonical.split("/")
        return cls(scope=scope, name=name)

    @property
    def scoped_dir(self) -> str:
        """Scope directory name with the sigil, as laid out on disk."""
        return f"{SCOPE_SIGIL}{self.scope}"

    def __str__(self) -> str:
        return f"{self.scope}/{self.name}"


def normalize_name(text: str) -> str:
    """Return the canonical (sigil-free) form of a package name.

    Raises:
        InvalidPackageName: If *text* does not follow the grammar.
    """
    return str(PackageName.parse(text))


def is_valid_name(text: str) -> bool:
    """Return True if *text* is a valid package name (sigil optional)."""
    try:
        PackageName.parse(text)
    except InvalidPackageName:
        return False
    return True
