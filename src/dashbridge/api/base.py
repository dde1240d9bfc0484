"""Abstract base class for the backend API capability.

The bridge treats the backend as an opaque object exposing one coroutine
per channel plus an upload operation. Implementations can talk to the
backend over any transport; the bridge only relies on this interface.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

logger = logging.getLogger(__name__)


class BackendApi(ABC):
    """Abstract interface to the backend API.

    Each channel capability takes ``(context, method, params)`` and returns
    the raw backend result, which may be a wire-encoded JSON string or an
    already decoded value. Failures are raised as :class:`BackendError`
    carrying the backend's own error value.

    Example usage::

        async with HttpBackendApi(base_url="http://localhost:10000") as api:
            result = await api.manager("v2", "getFlows", ["app1"])
    """

    def __init__(self, credential: str | None = None) -> None:
        self.credential = credential

    async def metadata(self, context: str, method: str, params: Any) -> Any:
        return await self.call("metadata", context, method, params)

    async def far(self, context: str, method: str, params: Any) -> Any:
        return await self.call("far", context, method, params)

    async def gateway(self, context: str, method: str, params: Any) -> Any:
        return await self.call("gateway", context, method, params)

    async def monitor(self, context: str, method: str, params: Any) -> Any:
        return await self.call("monitor", context, method, params)

    async def manager(self, context: str, method: str, params: Any) -> Any:
        return await self.call("manager", context, method, params)

    @abstractmethod
    async def call(self, capability: str, context: str, method: str, params: Any) -> Any:
        """Invoke ``method`` on the named backend capability.

        Args:
            capability: Capability name (``metadata``, ``manager``, ...).
            context: Version string, or the gateway key placeholder.
            method: Backend method name, forwarded verbatim.
            params: Method parameters, forwarded verbatim.

        Raises:
            BackendError: If the backend reports a failure.
        """
        ...

    @abstractmethod
    async def upload(self, account_id: str, file_name: str, body: bytes) -> Any:
        """Upload an application archive on behalf of ``account_id``.

        Raises:
            BackendError: If the upload is rejected or cannot be sent.
        """
        ...

    async def connect(self) -> None:
        """Prepare any underlying transport. No-op by default."""

    async def disconnect(self) -> None:
        """Release the underlying transport. Safe to call multiple times."""

    async def __aenter__(self) -> BackendApi:
        await self.connect()
        return self

    async def __aexit__(self, exc_type: type | None, exc_val: Exception | None, exc_tb: object) -> None:
        await self.disconnect()


class BackendError(Exception):
    """Raised when the backend API reports a failure.

    ``payload`` is the backend's error value and is what the bridge puts,
    unchanged, into the response envelope.
    """

    def __init__(self, payload: Any, capability: str = "") -> None:
        super().__init__(str(payload))
        self.payload = payload
        self.capability = capability
