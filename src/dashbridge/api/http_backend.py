"""HTTP backend API client.

Forwards capability calls to the backend gateway as JSON POST requests.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from dashbridge.api.base import BackendApi, BackendError

logger = logging.getLogger(__name__)


class HttpBackendApi(BackendApi):
    """Calls the backend over HTTP.

    Capability calls POST ``{"context", "method", "params"}`` to
    ``<base_url>/<capability>`` and return the response text untouched;
    the bridge decodes it when it builds the response envelope.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:10000",
        timeout: float | None = None,
        credential: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(credential=credential)
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def connect(self) -> None:
        """Create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
            )
            logger.info("Backend client ready for %s", self._base_url)

    async def disconnect(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            logger.info("Backend client closed")

    async def call(self, capability: str, context: str, method: str, params: Any) -> Any:
        payload = {"context": context, "method": method, "params": params}
        resp = await self._post(f"/{capability}", capability, json=payload)
        logger.debug("%s.%s -> %d bytes", capability, method, len(resp.content))
        return resp.text

    async def upload(self, account_id: str, file_name: str, body: bytes) -> Any:
        resp = await self._post(
            f"/upload/{account_id}/{file_name}",
            "upload",
            content=body,
            headers={"Content-Type": "application/octet-stream"},
        )
        logger.info("Uploaded %s for %s", file_name, account_id)
        return resp.text

    def _headers(self) -> dict[str, str]:
        return {"X-ApiKey": self.credential} if self.credential else {}

    async def _post(self, path: str, capability: str, **kwargs: Any) -> httpx.Response:
        """Send a POST request to the backend."""
        if self._client is None:
            raise BackendError("Not connected to backend", capability=capability)
        headers = {**self._headers(), **kwargs.pop("headers", {})}
        try:
            resp = await self._client.post(path, headers=headers, **kwargs)
        except httpx.HTTPError as e:
            raise BackendError(f"HTTP request to {path} failed: {e}", capability=capability) from e
        if resp.is_error:
            raise BackendError(resp.text or resp.reason_phrase, capability=capability)
        return resp
