"""Lockfile: the durable record of a resolved lock set.

This package implements the ``sealpack.lock`` format. The lockfile captures
the exact resolved state of a project's dependencies: every package at its
resolved version, with its registry locator, content integrity string and
declared dependency constraints.

The package is split into focused submodules:

- ``models``: Data classes (``ResolvedPackage``, ``LockfileMetadata``).
- ``lockfile``: The ``Lockfile`` class with package management and
  serialization.
- ``operations``: Deserialization (``from_dict``, ``from_json``, ``read``)
  and validation.

All public names are re-exported here.
"""

from sealpack.core.lockfile.models import LockfileMetadata, ResolvedPackage

from sealpack.core.lockfile.lockfile import LOCKFILE_FILENAME, Lockfile

# Attach operations to Lockfile as methods/classmethods
from sealpack.core.lockfile import operations as _ops

Lockfile.from_dict = classmethod(_ops._from_dict)
Lockfile.from_json = classmethod(_ops._from_json)
Lockfile.read = classmethod(_ops._read)
Lockfile.validate = _ops._validate

__all__ = [
    "LOCKFILE_FILENAME",
    "Lockfile",
    "LockfileMetadata",
    "ResolvedPackage",
]
