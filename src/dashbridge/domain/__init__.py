"""Domain models for dashbridge.

This package contains the socket-level data structures, enumerations, and
constants used throughout the bridge. All models use Pydantic v2 for
validation and serialization.
"""

from dashbridge.domain.models import (
    INT64_FIELDS,
    BridgeRequest,
    Channel,
    EnvAnnouncement,
    EventFrame,
    ResponseEnvelope,
    ResponsePayload,
    ResultShape,
    classify_result,
)

__all__ = [
    "INT64_FIELDS",
    "BridgeRequest",
    "Channel",
    "EnvAnnouncement",
    "EventFrame",
    "ResponseEnvelope",
    "ResponsePayload",
    "ResultShape",
    "classify_result",
]
