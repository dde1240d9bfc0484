"""HTTP and socket server for dashbridge."""

from dashbridge.server.app import create_app

__all__ = ["create_app"]
