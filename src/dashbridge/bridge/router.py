"""Channel routing for the dashboard socket.

Binds the five named channels of one connection to the matching backend
capabilities and wraps the correlator around each call.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from dashbridge.api.base import BackendApi, BackendError
from dashbridge.bridge.connection import Connection, EventHandler
from dashbridge.bridge.correlator import decode_response, emit_response
from dashbridge.bridge.normalizer import normalize_int64_fields
from dashbridge.domain.models import GATEWAY_CONTEXT_KEY, BridgeRequest, Channel

logger = logging.getLogger(__name__)


class ChannelRouter:
    """Wires channel events on a connection to backend capabilities.

    Binding is pure wiring: nothing is sent until a request arrives. Each
    request is handled start to finish by its own task, so requests on any
    channel may complete in any order.
    """

    def __init__(self, api: BackendApi) -> None:
        self._api = api

    def bind(self, connection: Connection, name: str, version: str) -> None:
        """Register all channel handlers on ``connection``."""
        for channel in Channel:
            connection.on(channel.value, self._handler(connection, channel, version))
        logger.debug("Bound %d channels on %s (%s %s)", len(Channel), connection.connection_id, name, version)

    def _handler(self, connection: Connection, channel: Channel, version: str) -> EventHandler:
        async def handle(payload: Any) -> None:
            await self.handle(connection, channel, version, payload)

        return handle

    async def handle(self, connection: Connection, channel: Channel, version: str, payload: Any) -> None:
        """Run one request through the backend and emit its single envelope."""
        try:
            request = BridgeRequest.model_validate(payload)
        except ValidationError as e:
            if not isinstance(payload, dict):
                logger.warning("Ignoring malformed %s request on %s: %r", channel.value, connection.connection_id, payload)
                return
            logger.warning("Rejecting invalid %s request on %s: %r", channel.value, connection.connection_id, payload)
            # Echo whatever was sent so the client can still match the reply by id
            rejected = BridgeRequest.model_construct(method=payload.get("method"), params=None, id=payload.get("id"))
            await emit_response(connection, rejected, _describe_invalid(e), None)
            return

        context = GATEWAY_CONTEXT_KEY if channel is Channel.GATEWAY else version
        capability = getattr(self._api, channel.value)

        error: Any = None
        response: Any = None
        try:
            response = await capability(context, request.method, request.params)
        except BackendError as e:
            error = e.payload
        except Exception as e:
            logger.exception("%s.%s failed unexpectedly", channel.value, request.method)
            error = str(e)

        if channel is Channel.MANAGER:
            response = normalize_int64_fields(decode_response(response))

        await emit_response(connection, request, error, response)


def _describe_invalid(error: ValidationError) -> str:
    problems = "; ".join(
        f"{'.'.join(str(part) for part in item['loc']) or 'request'}: {item['msg']}" for item in error.errors()
    )
    return f"Invalid request: {problems}"
