"""Realtime command bridge for the dashboard socket.

Public API:
    Connection -- Event-frame wrapper around one WebSocket
    BridgeContext -- Shared state (active connection, credential, settings)
    ChannelRouter -- Binds channels to backend capabilities
    ConnectionLifecycleManager -- Handles new connections
"""

from dashbridge.bridge.connection import Connection
from dashbridge.bridge.context import BridgeContext
from dashbridge.bridge.lifecycle import ConnectionLifecycleManager
from dashbridge.bridge.router import ChannelRouter

__all__ = ["BridgeContext", "ChannelRouter", "Connection", "ConnectionLifecycleManager"]
