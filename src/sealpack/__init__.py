"""sealpack: Reproducible, integrity-checked package installs from a semver manifest."""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"
