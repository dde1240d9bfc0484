"""Shared test fixtures for the dashbridge test suite.

Provides a controllable in-memory backend API, a fake WebSocket for
driving connections without a server, and settings pointed at a
temporary credential file.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock

import pytest

from dashbridge.api.base import BackendApi
from dashbridge.bridge.connection import Connection
from dashbridge.config.settings import ServerConfig, Settings


class FakeBackendApi(BackendApi):
    """In-memory backend with per-method results and completion gates.

    ``results[method]`` is returned (or raised, if it is an exception).
    When ``gates[method]`` is set, the call waits on that event first,
    which lets tests control completion order.
    """

    def __init__(self, credential: str | None = None) -> None:
        super().__init__(credential=credential)
        self.calls: list[tuple[str, str, str, Any]] = []
        self.results: dict[str, Any] = {}
        self.gates: dict[str, asyncio.Event] = {}
        self.uploads: list[tuple[str, str, bytes]] = []
        self.upload_result: Any = '{"status": "deployed"}'

    async def call(self, capability: str, context: str, method: str, params: Any) -> Any:
        self.calls.append((capability, context, method, params))
        gate = self.gates.get(method)
        if gate is not None:
            await gate.wait()
        result = self.results.get(method)
        if isinstance(result, Exception):
            raise result
        return result

    async def upload(self, account_id: str, file_name: str, body: bytes) -> Any:
        self.uploads.append((account_id, file_name, body))
        if isinstance(self.upload_result, Exception):
            raise self.upload_result
        return self.upload_result


def sent_frames(websocket: AsyncMock) -> list[dict[str, Any]]:
    """Decode every frame sent through a fake WebSocket."""
    return [json.loads(c.args[0]) for c in websocket.send_text.call_args_list]


# ---------------------------------------------------------------------------
# Backend / Connection Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def backend() -> FakeBackendApi:
    return FakeBackendApi()


@pytest.fixture
def fake_websocket() -> AsyncMock:
    """A WebSocket stand-in whose send_text calls are recorded."""
    websocket = AsyncMock()
    websocket.send_text = AsyncMock()
    return websocket


@pytest.fixture
def connection(fake_websocket: AsyncMock) -> Connection:
    return Connection(fake_websocket, connection_id="conn-1")


# ---------------------------------------------------------------------------
# Settings Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def credential_path(tmp_path: Path) -> Path:
    return tmp_path / ".credential"


@pytest.fixture
def settings(tmp_path: Path, credential_path: Path) -> Settings:
    """Settings with no static dir and a temp credential file."""
    return Settings(
        credential_file=str(credential_path),
        server=ServerConfig(
            env_name="test",
            static_dir=None,
            version_file=str(tmp_path / "VERSION"),
        ),
    )


@pytest.fixture
def frames():
    """Helper that decodes the frames sent through a fake WebSocket."""
    return sent_frames
