"""Shared HTTP utilities for the registry client.

Provides standardised timeouts, the user-agent header, client construction
and decoding of registry error bodies, so that every registry call behaves
the same way and is testable through an injected ``httpx`` transport.

Raises ``RegistryError`` (a subclass of ``SealpackError``) on unrecoverable
HTTP failures.
"""

from __future__ import annotations

import logging

import httpx

from sealpack import __version__
from sealpack.exceptions import RegistryError

logger = logging.getLogger(__name__)

# Timeout for metadata requests (seconds).
DEFAULT_TIMEOUT: float = 30.0

# Timeout for artifact downloads and uploads (seconds).
DOWNLOAD_TIMEOUT: float = 300.0

# User-Agent sent with every request.
USER_AGENT: str = f"sealpack/{__version__}"


def build_client(
    base_url: str,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Create the ``httpx.Client`` used for all registry requests.

    Args:
        base_url: Registry root, e.g. ``https://registry.example.com/api``.
        timeout: Default request timeout in seconds.
        transport: Optional transport override (``httpx.MockTransport`` in
            tests).
    """
    return httpx.Client(
        base_url=base_url.rstrip("/"),
        timeout=timeout,
        headers={"User-Agent": USER_AGENT},
        follow_redirects=True,
        transport=transport,
    )


def error_from_response(response: httpx.Response) -> RegistryError:
    """Build a ``RegistryError`` from a non-success response.

    The registry reports failures as ``{"success": false, "error": <code>,
    "message": <text>}``. Bodies that are not in that shape fall back to a
    generic status message.
    """
    status = response.status_code
    try:
        url = str(response.request.url)
    except RuntimeError:
        # Responses built by hand carry no request.
        url = "registry"
    logger.warning("HTTP %d from %s", status, url)

    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict) and isinstance(body.get("message"), str):
        code = body.get("error")
        return RegistryError(
            body["message"],
            status_code=status,
            error_code=code if isinstance(code, str) else None,
        )
    return RegistryError(f"Registry returned HTTP {status} for {url}", status_code=status)


def transport_error(exc: httpx.HTTPError, what: str) -> RegistryError:
    """Translate an ``httpx`` transport failure into a ``RegistryError``."""
    if isinstance(exc, httpx.TimeoutException):
        logger.warning("Timeout during %s", what)
        return RegistryError(f"Timed out during {what}")
    logger.warning("Request error during %s: %s", what, exc)
    return RegistryError(f"Request failed during {what}: {exc}")
