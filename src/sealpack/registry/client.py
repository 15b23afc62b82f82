"""HTTP client for the sealpack package registry.

Endpoints (relative to the configured base URL)::

    GET    /packages                        list packages
    GET    /packages/{scope}/{name}         version index
    POST   /packages/{scope}/{name}/{ver}   upload artifact (auth, 201)
    GET    /packages/{scope}/{name}/{ver}   download artifact
    DELETE /packages/{scope}/{name}/{ver}   delete version (auth)

Every response body is decoded into a typed model from
``sealpack.registry.models``. Any transport failure, non-success status or
malformed body raises ``RegistryError``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import httpx

from sealpack.exceptions import AuthenticationRequired, RegistryError
from sealpack.registry.base import VersionIndexProvider
from sealpack.registry.http_client import (
    DEFAULT_TIMEOUT,
    DOWNLOAD_TIMEOUT,
    build_client,
    error_from_response,
    transport_error,
)
from sealpack.registry.models import (
    DeleteResult,
    PackageSummary,
    UploadResult,
    VersionIndex,
)

logger = logging.getLogger(__name__)

ARTIFACT_CONTENT_TYPE: str = "application/gzip"


class RegistryClient(VersionIndexProvider):
    """Synchronous registry client.

    Args:
        base_url: Registry root URL.
        token: Bearer token for publish and delete. Read-only operations
            work without one.
        timeout: Timeout for metadata requests, in seconds.
        download_timeout: Timeout for artifact transfers, in seconds.
        transport: Optional ``httpx`` transport override.

    Usable as a context manager; ``close()`` releases the connection pool.
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        download_timeout: float = DOWNLOAD_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._token = token
        self._download_timeout = download_timeout
        self._client = build_client(self.base_url, timeout=timeout, transport=transport)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> RegistryClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # -- Plumbing -------------------------------------------------------------

    def _auth_headers(self, operation: str) -> dict[str, str]:
        if not self._token:
            raise AuthenticationRequired(operation)
        return {"Authorization": f"Bearer {self._token}"}

    def _request(
        self,
        method: str,
        path: str,
        *,
        what: str,
        expected: tuple[int, ...] = (200,),
        **kwargs: Any,
    ) -> httpx.Response:
        logger.debug("%s %s", method, path)
        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            raise transport_error(exc, what) from exc
        if response.status_code not in expected:
            raise error_from_response(response)
        return response

    @staticmethod
    def _json(response: httpx.Response, what: str) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise RegistryError(f"Invalid JSON in {what} response") from exc

    # -- Read operations ------------------------------------------------------

    def get_version_index(self, scope: str, name: str) -> VersionIndex:
        what = f"version index fetch for {scope}/{name}"
        response = self._request("GET", f"/packages/{scope}/{name}", what=what)
        return VersionIndex.from_dict(self._json(response, what))

    def list_packages(self) -> list[PackageSummary]:
        """Return every package the registry hosts, in registry order."""
        what = "package listing"
        data = self._json(self._request("GET", "/packages", what=what), what)
        if not isinstance(data, dict) or not isinstance(data.get("packages"), list):
            raise RegistryError("Malformed registry response (package listing): "
                                "expected a 'packages' list")
        return [PackageSummary.from_dict(item) for item in data["packages"]]

    def download_package(self, scope: str, name: str, version: str, destination: Path) -> Path:
        """Stream an artifact to *destination*.

        The body is written to a ``.part`` sibling first and renamed into
        place once complete, so an interrupted download never leaves a
        truncated artifact at *destination*.

        Returns:
            *destination*.

        Raises:
            RegistryError: On any transport failure or non-200 status.
        """
        destination = Path(destination)
        destination.parent.mkdir(parents=True, exist_ok=True)
        partial = destination.with_name(destination.name + ".part")
        path = f"/packages/{scope}/{name}/{version}"
        what = f"download of {scope}/{name}@{version}"

        try:
            with self._client.stream("GET", path, timeout=self._download_timeout) as response:
                if response.status_code != 200:
                    response.read()
                    raise error_from_response(response)
                with open(partial, "wb") as fh:
                    for chunk in response.iter_bytes():
                        fh.write(chunk)
        except httpx.HTTPError as exc:
            partial.unlink(missing_ok=True)
            raise transport_error(exc, what) from exc
        except (RegistryError, OSError):
            partial.unlink(missing_ok=True)
            raise

        partial.replace(destination)
        logger.debug("Downloaded %s to %s", path, destination)
        return destination

    # -- Write operations -----------------------------------------------------

    def upload_package(self, scope: str, name: str, version: str, artifact: bytes) -> UploadResult:
        """Publish *artifact* as ``scope/name@version``.

        Raises:
            AuthenticationRequired: If no token is configured.
            RegistryError: If the registry rejects the upload.
        """
        what = f"upload of {scope}/{name}@{version}"
        headers = self._auth_headers("Publishing")
        headers["Content-Type"] = ARTIFACT_CONTENT_TYPE
        response = self._request(
            "POST",
            f"/packages/{scope}/{name}/{version}",
            what=what,
            expected=(201,),
            content=artifact,
            headers=headers,
            timeout=self._download_timeout,
        )
        return UploadResult.from_dict(self._json(response, what))

    def delete_package_version(self, scope: str, name: str, version: str) -> DeleteResult:
        """Delete one published version.

        The result carries a warning when other packages still depend on
        the deleted version.

        Raises:
            AuthenticationRequired: If no token is configured.
            RegistryError: If the registry rejects the deletion.
        """
        what = f"deletion of {scope}/{name}@{version}"
        response = self._request(
            "DELETE",
            f"/packages/{scope}/{name}/{version}",
            what=what,
            headers=self._auth_headers("Deleting"),
        )
        return DeleteResult.from_dict(self._json(response, what))
