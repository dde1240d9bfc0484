"""Tests for the event-frame connection wrapper."""

from __future__ import annotations

import json
import math
from unittest.mock import AsyncMock

import pytest
from fastapi import WebSocketDisconnect

from dashbridge.bridge.connection import Connection, decode_frame, encode_frame


class TestFrames:
    def test_encode_frame(self) -> None:
        assert json.loads(encode_frame("exec", None, {"id": 1})) == {
            "event": "exec",
            "args": [None, {"id": 1}],
        }

    def test_encode_nan_as_null(self) -> None:
        frame = json.loads(encode_frame("exec", None, {"params": [{"startTime": math.nan}]}))
        assert frame["args"][1]["params"][0]["startTime"] is None

    def test_decode_frame(self) -> None:
        frame = decode_frame('{"event": "manager", "args": [{"method": "getFlows"}]}')
        assert frame is not None
        assert frame.event == "manager"
        assert frame.args == [{"method": "getFlows"}]

    @pytest.mark.parametrize("text", ["not json", "[]", '{"args": []}', '{"event": 5}'])
    def test_decode_malformed(self, text: str) -> None:
        assert decode_frame(text) is None


class TestConnection:
    @pytest.mark.asyncio
    async def test_emit_sends_frame(self, connection: Connection, fake_websocket: AsyncMock, frames) -> None:
        assert await connection.emit("env", {"name": "test"}) is True
        assert frames(fake_websocket) == [{"event": "env", "args": [{"name": "test"}]}]

    @pytest.mark.asyncio
    async def test_emit_failure_closes(self, connection: Connection, fake_websocket: AsyncMock) -> None:
        fake_websocket.send_text.side_effect = RuntimeError("socket closed")
        assert await connection.emit("exec", None, {}) is False
        assert connection.is_open is False
        assert await connection.emit("exec", None, {}) is False
        assert fake_websocket.send_text.await_count == 1

    @pytest.mark.asyncio
    async def test_dispatch_unknown_event(self, connection: Connection) -> None:
        assert connection.dispatch("nope", [{}]) is None

    @pytest.mark.asyncio
    async def test_dispatch_runs_handler_with_first_arg(self, connection: Connection) -> None:
        received = []

        async def handler(payload: object) -> None:
            received.append(payload)

        connection.on("far", handler)
        task = connection.dispatch("far", [{"method": "m"}, "ignored"])
        assert task is not None
        await task
        assert received == [{"method": "m"}]
        assert connection.pending == 0

    @pytest.mark.asyncio
    async def test_serve_skips_malformed_frames(self, connection: Connection, fake_websocket: AsyncMock) -> None:
        received = []

        async def handler(payload: object) -> None:
            received.append(payload)

        connection.on("monitor", handler)
        fake_websocket.receive_text = AsyncMock(
            side_effect=[
                "garbage",
                json.dumps({"event": "monitor", "args": [{"method": "getMetric", "id": 1}]}),
                json.dumps({"event": "unknown", "args": []}),
                WebSocketDisconnect(code=1000),
            ]
        )

        await connection.serve()
        await connection.drain()

        assert received == [{"method": "getMetric", "id": 1}]
        assert connection.is_open is False
