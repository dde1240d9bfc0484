"""Core domain models for the dashbridge system.

These models represent the data flowing over the dashboard socket:
channel requests from the browser, the response envelopes sent back,
and the environment announcement each new connection receives.
"""

from __future__ import annotations

import enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class Channel(str, enum.Enum):
    """Named logical sub-streams of the dashboard socket.

    Each channel maps 1:1 to the backend capability of the same name.
    """

    METADATA = "metadata"
    FAR = "far"
    GATEWAY = "gateway"
    MONITOR = "monitor"
    MANAGER = "manager"


class ResultShape(str, enum.Enum):
    """Structural classification of a raw backend result."""

    RAW_STRING = "raw_string"  # Wire-encoded JSON text, decoded before emit
    RECORD_SEQUENCE = "record_sequence"  # Non-empty list holding at least one mapping
    RECORD = "record"
    SCALAR = "scalar"  # Anything else, including empty lists and None


# Outbound event names
ENV_EVENT = "env"
EXEC_EVENT = "exec"

# The gateway capability is keyed by this constant instead of the version
GATEWAY_CONTEXT_KEY = "apikey"

# Result-record fields that arrive as 64-bit values
INT64_FIELDS = frozenset({"lastStarted", "lastStopped", "startTime", "endTime"})


def classify_result(result: Any) -> ResultShape:
    """Tag a raw backend result with its structural shape."""
    if isinstance(result, str):
        return ResultShape.RAW_STRING
    if isinstance(result, list) and any(isinstance(r, dict) for r in result):
        return ResultShape.RECORD_SEQUENCE
    if isinstance(result, dict):
        return ResultShape.RECORD
    return ResultShape.SCALAR


# ---------------------------------------------------------------------------
# Socket Models
# ---------------------------------------------------------------------------


class BridgeRequest(BaseModel):
    """A channel-scoped request from the browser client.

    ``id`` is issued by the client and echoed back untouched; ``method``
    and ``params`` are forwarded verbatim to the backend capability.
    """

    model_config = ConfigDict(frozen=True)

    method: str = Field(description="Backend method name")
    params: Any = Field(default=None, description="Opaque method parameters")
    id: Any = Field(default=None, description="Caller-issued correlation id")


class ResponsePayload(BaseModel):
    """Second argument of the ``exec`` event."""

    method: Any = None
    params: Any = None
    id: Any = None


class ResponseEnvelope(BaseModel):
    """One response to one request, emitted as ``exec(error, payload)``."""

    error: Any = None
    payload: ResponsePayload

    def to_args(self) -> list[Any]:
        return [self.error, self.payload.model_dump()]


class EnvAnnouncement(BaseModel):
    """Environment state announced once per new connection."""

    name: str
    version: str
    credential: str | None = None


class EventFrame(BaseModel):
    """A single frame on the socket: an event name plus positional args."""

    event: str
    args: list[Any] = Field(default_factory=list)
