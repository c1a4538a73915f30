"""Streamable HTTP transport: JSON-RPC over `POST /mcp` with header sessions."""

from __future__ import annotations

import asyncio
import json
import logging
import time
from collections import OrderedDict
from typing import TYPE_CHECKING, Any, Awaitable, Callable

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, Response

from ..mcp.protocol import (
    INVALID_REQUEST,
    PARSE_ERROR,
    ProtocolSession,
    error_response,
    is_initialize_request,
)

if TYPE_CHECKING:
    from ..container import ServerContainer

logger = logging.getLogger(__name__)

MCP_SESSION_HEADER = "Mcp-Session-Id"
SESSION_NOT_FOUND = -32001
DISCONNECT_POLL_SECONDS = 0.1
DEFAULT_SESSION_IDLE_SECONDS = 3600.0
DEFAULT_MAX_SESSIONS = 1000


class SessionManager:
    """In-memory table of live HTTP sessions.

    Sessions idle for longer than `idle_seconds` are dropped on the next
    lookup or create. When `max_sessions` are live, creating another evicts
    the least recently used one.
    """

    def __init__(
        self,
        *,
        idle_seconds: float = DEFAULT_SESSION_IDLE_SECONDS,
        max_sessions: int = DEFAULT_MAX_SESSIONS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.idle_seconds = idle_seconds
        self.max_sessions = max_sessions
        self._clock = clock
        self._sessions: OrderedDict[str, tuple[ProtocolSession, float]] = OrderedDict()

    def create(self) -> ProtocolSession:
        self._prune_expired()
        while len(self._sessions) >= self.max_sessions:
            evicted_id, _ = self._sessions.popitem(last=False)
            logger.info(
                "session evicted; session limit reached", extra={"session_id": evicted_id}
            )
        session = ProtocolSession(transport="http")
        self._sessions[session.session_id] = (session, self._clock())
        logger.info("session created", extra={"session_id": session.session_id})
        return session

    def get(self, session_id: str) -> ProtocolSession | None:
        self._prune_expired()
        entry = self._sessions.get(session_id)
        if entry is None:
            return None
        session, _ = entry
        self._sessions[session_id] = (session, self._clock())
        self._sessions.move_to_end(session_id)
        return session

    def close(self, session_id: str) -> bool:
        entry = self._sessions.pop(session_id, None)
        if entry is None:
            return False
        logger.info("session closed", extra={"session_id": session_id})
        return True

    def _prune_expired(self) -> None:
        cutoff = self._clock() - self.idle_seconds
        # Entries are kept in last-used order, oldest first.
        while self._sessions:
            session_id, (_, last_seen) = next(iter(self._sessions.items()))
            if last_seen > cutoff:
                break
            del self._sessions[session_id]
            logger.info("session expired after idling", extra={"session_id": session_id})

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions


def _format_sse(message: Any) -> str:
    data = json.dumps(message, separators=(",", ":"), ensure_ascii=False)
    return f"event: message\ndata: {data}\n\n"


def _wants_event_stream(accept: str | None) -> bool:
    """True only when the client accepts `text/event-stream` and nothing else."""
    if not accept:
        return False
    media_types = [part.split(";", 1)[0].strip().lower() for part in accept.split(",")]
    media_types = [media_type for media_type in media_types if media_type]
    return bool(media_types) and all(media_type == "text/event-stream" for media_type in media_types)


def _jsonrpc_error(status_code: int, code: int, message: str) -> JSONResponse:
    return JSONResponse(error_response(None, code, message), status_code=status_code)


class ClientDisconnected(Exception):
    """The HTTP client went away before its reply was ready."""


async def _run_until_disconnect(request: Request, work: Awaitable[Any], session_id: str) -> Any:
    """Await `work`, cancelling it if the client disconnects first."""
    task = asyncio.ensure_future(work)
    while True:
        done, _ = await asyncio.wait({task}, timeout=DISCONNECT_POLL_SECONDS)
        if done:
            return task.result()
        if await request.is_disconnected():
            task.cancel()
            await asyncio.wait({task})
            logger.info(
                "client disconnected; cancelled in-flight request",
                extra={"session_id": session_id},
            )
            raise ClientDisconnected(session_id)


def create_http_app(container: "ServerContainer") -> FastAPI:
    """Build the FastAPI app serving `container.protocol`."""

    from ..container import shutdown as shutdown_container

    app = FastAPI(title="API Colombia MCP", version=container.protocol.server_version)
    transport_settings = container.settings.transport
    sessions = SessionManager(
        idle_seconds=transport_settings.http_session_idle_seconds,
        max_sessions=transport_settings.http_max_sessions,
    )
    app.state.container = container
    app.state.sessions = sessions

    @app.on_event("shutdown")
    async def on_shutdown() -> None:
        await shutdown_container(container)

    @app.get("/health")
    async def health() -> JSONResponse:
        return JSONResponse({"status": "ok"})

    @app.post("/mcp")
    async def mcp_post(request: Request) -> Response:
        body = await request.body()
        try:
            payload = json.loads(body)
        except ValueError:
            return _jsonrpc_error(status.HTTP_400_BAD_REQUEST, PARSE_ERROR, "Parse error")

        session_id = request.headers.get(MCP_SESSION_HEADER)
        if is_initialize_request(payload):
            session = sessions.create()
        elif not session_id:
            return _jsonrpc_error(
                status.HTTP_400_BAD_REQUEST,
                INVALID_REQUEST,
                f"Bad Request: missing {MCP_SESSION_HEADER} header",
            )
        else:
            existing = sessions.get(session_id)
            if existing is None:
                return _jsonrpc_error(
                    status.HTTP_404_NOT_FOUND, SESSION_NOT_FOUND, "Session not found"
                )
            session = existing

        try:
            reply = await _run_until_disconnect(
                request,
                container.protocol.handle_payload(session, payload),
                session.session_id,
            )
        except ClientDisconnected:
            return Response(status_code=499)

        headers = {MCP_SESSION_HEADER: session.session_id}
        if reply is None:
            return Response(status_code=status.HTTP_202_ACCEPTED, headers=headers)
        if _wants_event_stream(request.headers.get("accept")):
            headers["Cache-Control"] = "no-cache"
            return Response(
                content=_format_sse(reply),
                media_type="text/event-stream",
                headers=headers,
            )
        return JSONResponse(reply, headers=headers)

    @app.delete("/mcp")
    async def mcp_delete(request: Request) -> Response:
        session_id = request.headers.get(MCP_SESSION_HEADER)
        if not session_id:
            return _jsonrpc_error(
                status.HTTP_400_BAD_REQUEST,
                INVALID_REQUEST,
                f"Bad Request: missing {MCP_SESSION_HEADER} header",
            )
        if not sessions.close(session_id):
            return _jsonrpc_error(status.HTTP_404_NOT_FOUND, SESSION_NOT_FOUND, "Session not found")
        return Response(status_code=status.HTTP_200_OK)

    @app.get("/mcp")
    async def mcp_get() -> Response:
        return JSONResponse(
            error_response(None, INVALID_REQUEST, "Method not allowed: server does not stream"),
            status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
            headers={"Allow": "POST, DELETE"},
        )

    return app


async def run_http(container: "ServerContainer") -> None:
    """Serve the HTTP app with uvicorn until interrupted."""
    import uvicorn

    transport = container.settings.transport
    config = uvicorn.Config(
        create_http_app(container),
        host=transport.http_host,
        port=transport.http_port,
        log_config=None,
        lifespan="on",
    )
    server = uvicorn.Server(config)
    logger.info(
        "streamable HTTP transport listening on http://%s:%s/mcp",
        transport.http_host,
        transport.http_port,
    )
    await server.serve()
