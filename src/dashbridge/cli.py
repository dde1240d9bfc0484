"""Command-line interface for dashbridge.

Provides the main entry point for running the dashboard backend and a
couple of one-shot diagnostics for the outbound lookups.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="dashbridge",
        description="Realtime command bridge for the developer dashboard",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="Path to YAML configuration file (default: config/dashbridge.yaml)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    serve_parser = subparsers.add_parser("serve", help="Run the dashboard backend server")
    serve_parser.add_argument("--host", type=str, default=None, help="Override server.host")
    serve_parser.add_argument("--port", type=int, default=None, help="Override server.port")

    subparsers.add_parser("check-version", help="Compare the local version with the newest release")
    subparsers.add_parser("destinations", help="List push destinations for the stored credential")

    return parser.parse_args(argv)


async def _check_version(settings) -> None:
    from dashbridge.config.settings import read_version
    from dashbridge.proxy.bounded import BoundedProxy
    from dashbridge.proxy.credential import CredentialStore

    proxy = BoundedProxy(settings, CredentialStore(settings.credential_file))
    newest = await proxy.newest_version()
    print(f"Current: {read_version(settings.server.version_file)}")
    print(f"Newest:  {newest}")


async def _destinations(settings) -> None:
    from dashbridge.proxy.bounded import BoundedProxy
    from dashbridge.proxy.credential import CredentialStore

    proxy = BoundedProxy(settings, CredentialStore(settings.credential_file))
    print(await proxy.destinations())


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the dashbridge CLI."""
    args = parse_args(argv)

    if args.command is None:
        parse_args(["--help"])
        return

    from dashbridge.config.settings import load_settings
    from dashbridge.utils.logging import setup_logging

    settings = load_settings(args.config)

    if args.verbose:
        settings.logging.level = "DEBUG"

    setup_logging(settings.logging)

    if args.command == "serve":
        if args.host:
            settings.server.host = args.host
        if args.port:
            settings.server.port = args.port
        logger.info("Starting dashboard backend on %s:%d", settings.server.host, settings.server.port)
        from dashbridge.server.app import main as serve
        serve(settings)

    elif args.command == "check-version":
        asyncio.run(_check_version(settings))

    elif args.command == "destinations":
        asyncio.run(_destinations(settings))


if __name__ == "__main__":
    main()
