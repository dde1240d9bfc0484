"""Response correlation for channel requests.

Wraps one backend result into the ``exec`` envelope tagged with the
originating request's method and correlation id.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from dashbridge.bridge.connection import Connection
from dashbridge.domain.models import (
    EXEC_EVENT,
    BridgeRequest,
    ResponseEnvelope,
    ResponsePayload,
    ResultShape,
    classify_result,
)

logger = logging.getLogger(__name__)


def decode_response(response: Any) -> Any:
    """Decode a wire-encoded JSON string result; pass anything else through.

    A string that is not valid JSON is returned as-is so the request still
    gets its envelope.
    """
    if classify_result(response) is not ResultShape.RAW_STRING:
        return response
    try:
        return json.loads(response)
    except ValueError:
        logger.warning("Backend result is not JSON, passing raw string through")
        return response


def build_envelope(request: BridgeRequest, error: Any, response: Any) -> ResponseEnvelope:
    return ResponseEnvelope(
        error=error,
        payload=ResponsePayload(
            method=request.method,
            params=decode_response(response),
            id=request.id,
        ),
    )


async def emit_response(
    connection: Connection,
    request: BridgeRequest,
    error: Any,
    response: Any,
) -> bool:
    """Emit exactly one ``exec`` event for ``request`` on ``connection``.

    A result or error that cannot be written as JSON is replaced by an
    envelope carrying the serialization failure as its error, so the
    caller still hears back about ``request.id``.

    Returns False when the connection has closed and the envelope was dropped.
    """
    envelope = build_envelope(request, error, response)
    try:
        return await connection.emit(EXEC_EVENT, *envelope.to_args())
    except (TypeError, ValueError) as e:
        logger.warning("Could not serialize %s result for id %r: %s", request.method, request.id, e)
        fallback = build_envelope(request, f"Result could not be serialized: {e}", None)
    return await connection.emit(EXEC_EVENT, *fallback.to_args())
