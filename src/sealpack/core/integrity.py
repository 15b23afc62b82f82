"""Content integrity: SHA-256 digests in ``sha256-<base64>`` form.

The integrity string ties a lockfile entry to the exact bytes of an
artifact. It is computed at publish time by the registry, recorded in the
version index, copied into the lockfile during resolution, and checked
again after every download.

Verification compares the full strings, prefix included, so an entry
recorded with a different algorithm label never verifies.

References
----------
.. [SRI] W3C (2016). "Subresource Integrity." The ``<alg>-<base64>`` format
   used here follows SRI metadata.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
from pathlib import Path
from typing import BinaryIO

from sealpack.exceptions import IntegrityMismatch

INTEGRITY_PREFIX: str = "sha256-"
DEFAULT_CHUNK_SIZE: int = 64 * 1024

_SHA256_DIGEST_SIZE = 32


def _format(digest: bytes) -> str:
    return INTEGRITY_PREFIX + base64.b64encode(digest).decode("ascii")


def compute_integrity(data: bytes | str) -> str:
    """Compute the integrity string for in-memory content.

    Args:
        data: Raw bytes, or text (encoded as UTF-8).

    Returns:
        Integrity string in ``sha256-<base64>`` format.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    return _format(hashlib.sha256(data).digest())


def compute_file_integrity(
    source: Path | str | BinaryIO,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> str:
    """Compute the integrity string of a file without loading it whole.

    Args:
        source: A filesystem path, or an open binary file object positioned
            where hashing should start. File objects are not closed.
        chunk_size: Read size in bytes.

    Returns:
        Integrity string in ``sha256-<base64>`` format.

    Raises:
        OSError: If the file cannot be read.
    """
    digest = hashlib.sha256()
    if isinstance(source, (str, Path)):
        with open(source, "rb") as fh:
            for chunk in iter(lambda: fh.read(chunk_size), b""):
                digest.update(chunk)
    else:
        for chunk in iter(lambda: source.read(chunk_size), b""):
            digest.update(chunk)
    return _format(digest.digest())


def verify_integrity(data: bytes | str, expected: str, subject: str = "content") -> None:
    """Check in-memory content against an expected integrity string.

    Args:
        data: Content to hash.
        expected: Integrity string recorded for the content.
        subject: Description used in the error message.

    Raises:
        IntegrityMismatch: If the computed string differs from *expected*.
    """
    actual = compute_integrity(data)
    if actual != expected:
        raise IntegrityMismatch(expected=expected, actual=actual, subject=subject)


def verify_file_integrity(path: Path | str, expected: str) -> None:
    """Check a file on disk against an expected integrity string.

    Raises:
        IntegrityMismatch: If the computed string differs from *expected*.
        OSError: If the file cannot be read.
    """
    actual = compute_file_integrity(path)
    if actual != expected:
        raise IntegrityMismatch(expected=expected, actual=actual, subject=Path(path).name)


def is_valid_integrity(text: str) -> bool:
    """Check that *text* is a well-formed SHA-256 integrity string.

    Requires the ``sha256-`` prefix, strictly valid padded base64 in the
    standard alphabet, and a decoded length of exactly 32 bytes.
    """
    if not isinstance(text, str) or not text.startswith(INTEGRITY_PREFIX):
        return False
    encoded = text[len(INTEGRITY_PREFIX):]
    try:
        raw = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError):
        return False
    return len(raw) == _SHA256_DIGEST_SIZE
