"""Outbound HTTP lookups made on behalf of the dashboard routes.

Two lookups with deliberately different failure policies:

    newest_version() -- plain HTTP, no timeout, errors propagate
    destinations()   -- HTTPS with a hard socket timeout; every failure
                        collapses to a sentinel body
"""

from __future__ import annotations

import logging

import httpx

from dashbridge.config.settings import Settings
from dashbridge.proxy.credential import CredentialStore

logger = logging.getLogger(__name__)

NETWORK_SENTINEL = "network"
NO_CREDENTIAL_SENTINEL = "false"

DESTINATIONS_PATH = "/api/vpc/list/"


class BoundedProxy:
    """Performs the outbound requests behind ``/version`` and ``/destinations``.

    Args:
        settings: Server settings holding the upstream hosts and timeout.
        credentials: Store for the locally saved API key.
        transport: Optional httpx transport (for testing).
    """

    def __init__(
        self,
        settings: Settings,
        credentials: CredentialStore,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._credentials = credentials
        self._transport = transport

    @property
    def version_url(self) -> str:
        cfg = self._settings.version_check
        return f"http://{cfg.host}:{cfg.port}{cfg.path}"

    def destinations_url(self, credential: str) -> str:
        cfg = self._settings.accounts
        return f"https://{cfg.host}:{cfg.port}{DESTINATIONS_PATH}{credential}"

    async def newest_version(self) -> str:
        """Fetch the newest published version string, newlines stripped.

        No timeout is applied: a stalled upstream stalls the caller.

        Raises:
            httpx.HTTPError: On any transport failure.
        """
        async with httpx.AsyncClient(timeout=httpx.Timeout(None), transport=self._transport) as client:
            resp = await client.get(self.version_url)
        return resp.text.replace("\n", "")

    async def destinations(self) -> str:
        """List push destinations for the stored credential.

        Returns exactly one of: the upstream body verbatim, ``"network"``
        on timeout or transport failure, or ``"false"`` when no credential
        is stored (no request is made in that case).
        """
        credential = await self._credentials.read()
        if credential is None:
            logger.info("No credential stored, skipping destination lookup")
            return NO_CREDENTIAL_SENTINEL

        timeout = self._settings.accounts.timeout
        try:
            async with httpx.AsyncClient(timeout=timeout, transport=self._transport) as client:
                resp = await client.get(self.destinations_url(credential))
        except httpx.TimeoutException:
            logger.warning("Destination lookup timed out after %.1fs, aborted", timeout)
            return NETWORK_SENTINEL
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning("Destination lookup failed: %s", e)
            return NETWORK_SENTINEL
        return resp.text
