"""FastAPI application for the dashboard backend.

Routes:

    WS   /socket             <- {"event": "<channel>", "args": [{method, params, id}]}
                             -> {"event": "env",  "args": [{name, version, credential}]}
                             -> {"event": "exec", "args": [error, {method, params, id}]}
    GET  /health             -> {"status": "ok", ...}
    POST /upload/{file}      <- raw archive bytes
    GET  /version            -> {"current": ..., "newest": ...}
    GET  /destinations       -> upstream body | "network" | "false"
    POST /credential         <- {"apiKey": "..."} -> "true"

Static client files are served from the configured directory when it
exists.
"""

from __future__ import annotations

import json
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

import httpx
import uvicorn
from fastapi import FastAPI, HTTPException, Request, WebSocket
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel

from dashbridge import __version__
from dashbridge.api.base import BackendApi, BackendError
from dashbridge.bridge.connection import Connection
from dashbridge.bridge.context import BridgeContext
from dashbridge.bridge.correlator import decode_response
from dashbridge.bridge.lifecycle import ConnectionLifecycleManager
from dashbridge.config.settings import Settings, read_version
from dashbridge.proxy.bounded import BoundedProxy
from dashbridge.proxy.credential import CredentialStore, CredentialWriteError

logger = logging.getLogger(__name__)

UPLOAD_ACCOUNT_ID = "developer"
CREDENTIAL_WRITE_ERROR = "Error: Could not write credentials file."
CREDENTIAL_MISSING_ERROR = "Error: apiKey is required."
CREDENTIAL_BODY_ERROR = "Error: Request body is not valid JSON."

# Not a typo: existing dashboard clients match on this exact content type.
VERSION_CONTENT_TYPE = "application-json"


class HealthResponse(BaseModel):
    status: str = "ok"
    connected: bool = False
    version: str = ""


def create_app(
    settings: Settings | None = None,
    api: BackendApi | None = None,
    version: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Create the dashboard backend application.

    Args:
        settings: Server settings. Defaults to ``Settings()``.
        api: Backend API capability. Defaults to an HTTP client built
             from ``settings.backend``.
        version: Local server version. Defaults to the version file.
        transport: Optional httpx transport for the outbound lookups
                   (for testing).
    """
    settings = settings or Settings()
    if api is None:
        from dashbridge.api.http_backend import HttpBackendApi

        api = HttpBackendApi(base_url=settings.backend.base_url, timeout=settings.backend.timeout)
    if version is None:
        version = read_version(settings.server.version_file)

    context = BridgeContext(settings=settings, api=api, version=version)
    credentials = CredentialStore(settings.credential_file)
    proxy = BoundedProxy(settings, credentials, transport=transport)
    lifecycle = ConnectionLifecycleManager(context)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await api.connect()
        if context.credential is None:
            context.credential = await credentials.read()
        logger.info("Dashboard backend started (version=%s, env=%s)", version, settings.server.env_name)
        yield
        await api.disconnect()
        logger.info("Dashboard backend stopped")

    app = FastAPI(
        title="dashbridge",
        description="Realtime command bridge and proxy backend for the developer dashboard",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.context = context
    app.state.credentials = credentials
    app.state.proxy = proxy
    app.state.lifecycle = lifecycle

    @app.get("/health")
    async def health_check() -> HealthResponse:
        return HealthResponse(status="ok", connected=context.is_connected, version=context.version)

    @app.websocket("/socket")
    async def dashboard_socket(websocket: WebSocket) -> None:
        await websocket.accept()
        connection = Connection(websocket)
        await lifecycle.on_connect(connection)
        await connection.serve()

    @app.post("/upload/{file}")
    async def upload(file: str, request: Request) -> Response:
        body = await request.body()
        try:
            result = await context.api.upload(UPLOAD_ACCOUNT_ID, file, body)
        except BackendError as e:
            logger.warning("Upload of %s failed: %s", file, e)
            return PlainTextResponse(str(e.payload), status_code=500)
        return JSONResponse(decode_response(result))

    @app.get("/version")
    async def version_check() -> Response:
        try:
            newest = await proxy.newest_version()
        except httpx.HTTPError as e:
            logger.warning("Version check against %s failed: %s", proxy.version_url, e)
            raise HTTPException(status_code=502, detail="Version check failed") from e
        body = json.dumps({"current": context.version, "newest": newest})
        return Response(content=body, media_type=VERSION_CONTENT_TYPE)

    @app.get("/destinations")
    async def destinations() -> PlainTextResponse:
        return PlainTextResponse(await proxy.destinations())

    @app.post("/credential")
    async def save_credential(request: Request) -> PlainTextResponse:
        if request.headers.get("content-type", "").startswith("application/json"):
            try:
                data = await request.json()
            except ValueError:
                return PlainTextResponse(CREDENTIAL_BODY_ERROR, status_code=400)
        else:
            data = await request.form()
        api_key = data.get("apiKey") if hasattr(data, "get") else None
        if not isinstance(api_key, str):
            return PlainTextResponse(CREDENTIAL_MISSING_ERROR, status_code=400)

        try:
            await credentials.write(api_key)
        except CredentialWriteError as e:
            logger.warning("Could not write %s: %s", credentials.path, e)
            return PlainTextResponse(CREDENTIAL_WRITE_ERROR)

        context.credential = api_key
        return PlainTextResponse("true")

    _mount_static(app, settings.server.static_dir)
    return app


def _mount_static(app: FastAPI, static_dir: str | None) -> None:
    """Serve the browser client, trying the packaged layout first."""
    if not static_dir:
        return
    for candidate in (Path(static_dir), Path("..") / static_dir):
        if candidate.is_dir():
            app.mount("/", StaticFiles(directory=candidate, html=True), name="client")
            logger.info("Serving client files from %s", candidate)
            return
    logger.info("No client directory found for %s", static_dir)


def main(settings: Settings | None = None) -> None:
    """Run the dashboard backend."""
    settings = settings or Settings()
    app = create_app(settings)
    uvicorn.run(app, host=settings.server.host, port=settings.server.port)


if __name__ == "__main__":
    main()
