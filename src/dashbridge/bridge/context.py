"""Shared state for the bridge and the HTTP routes."""

from __future__ import annotations

from dataclasses import dataclass

from dashbridge.api.base import BackendApi
from dashbridge.bridge.connection import Connection
from dashbridge.config.settings import UNKNOWN_VERSION, Settings


@dataclass
class BridgeContext:
    """State threaded through the lifecycle manager and the routes.

    The credential lives on the backend API object so calls made through
    it always carry the latest key; the context only exposes it.
    """

    settings: Settings
    api: BackendApi
    version: str = UNKNOWN_VERSION
    active_connection: Connection | None = None

    @property
    def credential(self) -> str | None:
        return self.api.credential

    @credential.setter
    def credential(self, value: str | None) -> None:
        self.api.credential = value

    @property
    def is_connected(self) -> bool:
        return self.active_connection is not None and self.active_connection.is_open
