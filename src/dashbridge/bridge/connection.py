"""Event-frame wrapper around the dashboard WebSocket.

Every frame is a JSON object ``{"event": <name>, "args": [...]}``. The
wrapper lets the bridge register one handler per inbound event and emit
outbound events, and runs each inbound event as its own task so a slow
backend call on one channel never holds up another.
"""

from __future__ import annotations

import asyncio
import json
import logging
import math
import uuid
from typing import Any, Awaitable, Callable

from fastapi import WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from dashbridge.domain.models import EventFrame

logger = logging.getLogger(__name__)

EventHandler = Callable[[Any], Awaitable[None]]


def wire_safe(value: Any) -> Any:
    """Replace non-finite floats with ``None`` so the frame is valid JSON."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {k: wire_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [wire_safe(v) for v in value]
    return value


def encode_frame(event: str, *args: Any) -> str:
    return json.dumps({"event": event, "args": wire_safe(list(args))})


def decode_frame(text: str) -> EventFrame | None:
    """Parse an inbound frame, or return None if it is malformed."""
    try:
        return EventFrame.model_validate_json(text)
    except ValidationError:
        logger.warning("Dropping malformed frame: %s", text[:200])
        return None


class Connection:
    """One live dashboard socket.

    Emitting on a connection that has gone away is dropped rather than
    raised: completions for requests that arrived on an old connection
    may still finish after the browser reconnected.
    """

    def __init__(self, websocket: WebSocket, connection_id: str | None = None) -> None:
        self._websocket = websocket
        self.connection_id = connection_id or uuid.uuid4().hex[:8]
        self._handlers: dict[str, EventHandler] = {}
        self._tasks: set[asyncio.Task[None]] = set()
        self._send_lock = asyncio.Lock()
        self._open = True

    @property
    def is_open(self) -> bool:
        return self._open

    @property
    def pending(self) -> int:
        """Number of inbound events still being handled."""
        return len(self._tasks)

    def on(self, event: str, handler: EventHandler) -> None:
        """Register the handler for an inbound event, replacing any previous one."""
        self._handlers[event] = handler

    async def emit(self, event: str, *args: Any) -> bool:
        """Send an event to the client. Returns False if it was dropped."""
        if not self._open:
            logger.debug("Connection %s closed, dropping %r", self.connection_id, event)
            return False
        frame = encode_frame(event, *args)
        try:
            async with self._send_lock:
                await self._websocket.send_text(frame)
        except (WebSocketDisconnect, RuntimeError, OSError) as e:
            self._open = False
            logger.debug("Emit of %r on %s failed: %s", event, self.connection_id, e)
            return False
        return True

    def dispatch(self, event: str, args: list[Any]) -> asyncio.Task[None] | None:
        """Start handling an inbound event in its own task."""
        handler = self._handlers.get(event)
        if handler is None:
            logger.warning("No handler for event %r on %s", event, self.connection_id)
            return None
        payload = args[0] if args else None
        task = asyncio.create_task(handler(payload), name=f"{self.connection_id}:{event}")
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def serve(self) -> None:
        """Read frames until the client disconnects.

        Handlers still in flight when the socket closes are left to finish;
        their emits are dropped.
        """
        try:
            while True:
                text = await self._websocket.receive_text()
                frame = decode_frame(text)
                if frame is not None:
                    self.dispatch(frame.event, frame.args)
        except WebSocketDisconnect as e:
            logger.info("Connection %s disconnected (code=%s)", self.connection_id, e.code)
        finally:
            self._open = False

    async def drain(self) -> None:
        """Wait for all in-flight handlers to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
