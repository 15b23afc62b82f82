"""The registry collaborator contract consumed by the resolver.

The resolver depends only on ``VersionIndexProvider``. The HTTP client
implements it; tests substitute an in-memory provider.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from sealpack.registry.models import VersionIndex


class VersionIndexProvider(ABC):
    """Source of per-package version indices."""

    @abstractmethod
    def get_version_index(self, scope: str, name: str) -> VersionIndex:
        """Fetch the full version index for ``scope/name``.

        Every entry must carry its dependency map inline.

        Args:
            scope: Package scope, without the ``@`` sigil.
            name: Package name within the scope.

        Returns:
            The package's ``VersionIndex`` (possibly with no versions).

        Raises:
            RegistryError: On any transport or API failure.
        """
