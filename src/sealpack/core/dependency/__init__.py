"""Breadth-first, first-wins dependency resolution.

All public names are re-exported here, so callers can write
``from sealpack.core.dependency import DependencyResolver``.
"""

from sealpack.core.dependency.resolver import DependencyResolver

__all__ = [
    "DependencyResolver",
]
