"""Connection lifecycle for the dashboard socket.

Tracks the one active connection. A new connection replaces the tracked
reference, receives the environment announcement and gets its own
channel bindings. There is no disconnect transition: a dropped connection
is simply left behind and anything still emitted to it is discarded.
"""

from __future__ import annotations

import logging

from dashbridge.bridge.connection import Connection
from dashbridge.bridge.context import BridgeContext
from dashbridge.bridge.router import ChannelRouter
from dashbridge.domain.models import ENV_EVENT, EnvAnnouncement

logger = logging.getLogger(__name__)


class ConnectionLifecycleManager:
    """Owns the active connection reference held in the bridge context."""

    def __init__(self, context: BridgeContext, router: ChannelRouter | None = None) -> None:
        self._context = context
        self._router = router or ChannelRouter(context.api)

    async def on_connect(self, connection: Connection) -> None:
        previous = self._context.active_connection
        self._context.active_connection = connection
        if previous is not None and previous is not connection:
            logger.info("Connection %s replaces %s", connection.connection_id, previous.connection_id)
        else:
            logger.info("Connection %s established", connection.connection_id)

        name = self._context.settings.server.env_name
        version = self._context.version
        announcement = EnvAnnouncement(name=name, version=version, credential=self._context.credential)
        await connection.emit(ENV_EVENT, announcement.model_dump())

        self._router.bind(connection, name, version)
