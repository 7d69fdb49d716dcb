"""Fetch SCIP documents from a remote code-intelligence service."""

import logging
from typing import Optional
from urllib.parse import quote

import httpx

from ..storage.index_store import Document, document_from_dict


logger = logging.getLogger(__name__)


class ProviderTransportError(RuntimeError):
    """The remote service could not be reached or answered with an error.

    Distinct from a missing document, which is reported as None.
    """

    def __init__(self, path: str, message: str, status_code: Optional[int] = None):
        super().__init__(f"Failed to fetch {path}: {message}")
        self.path = path
        self.status_code = status_code


class HttpDocumentProvider:
    """Document provider backed by an HTTP endpoint.

    GET {base_url}/documents/{path} must return a SCIP document as JSON
    (`relative_path` and `occurrences`). A 404 means the document does not
    exist. No retries are attempted.
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.transport = transport

    def _headers(self) -> dict:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"token {self.token}"
        return headers

    async def lookup(self, path: str) -> Optional[Document]:
        """Fetch one document, or None if the service has no such path."""
        url = f"{self.base_url}/documents/{quote(path)}"

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(url, headers=self._headers())
        except httpx.HTTPError as e:
            logger.warning("Transport error fetching %s: %s", url, e)
            raise ProviderTransportError(path, str(e)) from e

        if response.status_code == 404:
            return None

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning("HTTP %d fetching %s", response.status_code, url)
            raise ProviderTransportError(path, str(e), status_code=response.status_code) from e

        try:
            return document_from_dict(response.json())
        except (ValueError, TypeError, AttributeError) as e:
            # IndexFormatError and JSON decode errors are ValueErrors
            raise ProviderTransportError(path, f"malformed document: {e}") from e
