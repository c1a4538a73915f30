"""JSON-RPC 2.0 message handling shared by every transport.

Transports decode frames and hand the payload to `ProtocolHandler`; the
handler answers the MCP handshake itself and forwards tool traffic to the
`ToolDispatcher`.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Mapping
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, ValidationError

from .dispatcher import ToolDispatcher
from .schema import ToolRequest

logger = logging.getLogger(__name__)

JSONRPC_VERSION = "2.0"
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603

SUPPORTED_PROTOCOL_VERSIONS = ("2025-06-18", "2025-03-26", "2024-11-05")
LATEST_PROTOCOL_VERSION = SUPPORTED_PROTOCOL_VERSIONS[0]


def iso_timestamp() -> str:
    """Return an ISO-8601 timestamp string (UTC)."""
    return datetime.now(timezone.utc).isoformat()


class JsonRpcRequest(BaseModel):
    """A JSON-RPC 2.0 request or notification."""

    model_config = ConfigDict(extra="ignore")

    jsonrpc: str = JSONRPC_VERSION
    method: str
    id: int | str | None = None
    params: dict[str, Any] | None = None


class InvalidParams(Exception):
    """Raised by method handlers when `params` do not match the method."""


@dataclass
class ProtocolSession:
    """Transport-level session state; never visible to tool handlers."""

    session_id: str = field(default_factory=lambda: uuid4().hex)
    transport: str = "stdio"
    initialized: bool = False
    protocol_version: str | None = None
    client_info: dict[str, Any] = field(default_factory=dict)
    created_at: str = field(default_factory=iso_timestamp)


def error_response(request_id: Any, code: int, message: str, data: Any = None) -> dict[str, Any]:
    error: dict[str, Any] = {"code": code, "message": message}
    if data is not None:
        error["data"] = data
    return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "error": error}


def success_response(request_id: Any, result: Mapping[str, Any]) -> dict[str, Any]:
    return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "result": dict(result)}


def is_initialize_request(payload: Any) -> bool:
    if isinstance(payload, list):
        return any(is_initialize_request(item) for item in payload)
    return isinstance(payload, dict) and payload.get("method") == "initialize" and "id" in payload


MethodHandler = Callable[[ProtocolSession, dict[str, Any]], Awaitable[dict[str, Any]]]


class ProtocolHandler:
    """Answers JSON-RPC payloads for one shared dispatcher."""

    def __init__(
        self,
        dispatcher: ToolDispatcher,
        *,
        server_name: str,
        server_version: str,
        instructions: str | None = None,
    ):
        self.dispatcher = dispatcher
        self.server_name = server_name
        self.server_version = server_version
        self.instructions = instructions
        self._methods: dict[str, MethodHandler] = {
            "initialize": self._initialize,
            "ping": self._ping,
            "tools/list": self._list_tools,
            "tools/call": self._call_tool,
        }

    async def handle_payload(self, session: ProtocolSession, payload: Any) -> Any:
        """Handle a single message or a batch; returns None when nothing to reply."""
        if isinstance(payload, list):
            if not payload:
                return error_response(None, INVALID_REQUEST, "Invalid Request: empty batch")
            replies = await asyncio.gather(
                *(self.handle_message(session, message) for message in payload)
            )
            collected = [reply for reply in replies if reply is not None]
            return collected or None
        return await self.handle_message(session, payload)

    async def handle_message(self, session: ProtocolSession, message: Any) -> dict[str, Any] | None:
        log_extra = {"session_id": session.session_id}
        if not isinstance(message, dict):
            return error_response(None, INVALID_REQUEST, "Invalid Request: expected an object")
        raw_id = message.get("id")
        request_id = raw_id if isinstance(raw_id, (int, str)) else None
        try:
            request = JsonRpcRequest.model_validate(message)
        except ValidationError as exc:
            return error_response(
                request_id,
                INVALID_REQUEST,
                "Invalid Request",
                [error.get("msg") for error in exc.errors()],
            )

        if "id" not in message:
            self._handle_notification(session, request)
            return None

        handler = self._methods.get(request.method)
        if handler is None:
            logger.info("unsupported method=%s", request.method, extra=log_extra)
            return error_response(request.id, METHOD_NOT_FOUND, f"Method not found: {request.method}")
        try:
            result = await handler(session, dict(request.params or {}))
        except InvalidParams as exc:
            return error_response(request.id, INVALID_PARAMS, f"Invalid params: {exc}")
        except Exception:
            logger.exception("protocol method failed method=%s", request.method, extra=log_extra)
            return error_response(request.id, INTERNAL_ERROR, "Internal error")
        return success_response(request.id, result)

    def _handle_notification(self, session: ProtocolSession, request: JsonRpcRequest) -> None:
        if request.method == "notifications/initialized":
            session.initialized = True
            logger.info(
                "session initialized transport=%s protocol=%s",
                session.transport,
                session.protocol_version,
                extra={"session_id": session.session_id},
            )
            return
        logger.debug(
            "ignoring notification method=%s",
            request.method,
            extra={"session_id": session.session_id},
        )

    async def _initialize(self, session: ProtocolSession, params: dict[str, Any]) -> dict[str, Any]:
        requested = params.get("protocolVersion")
        version = requested if requested in SUPPORTED_PROTOCOL_VERSIONS else LATEST_PROTOCOL_VERSION
        client_info = params.get("clientInfo")
        session.protocol_version = version
        session.client_info = dict(client_info) if isinstance(client_info, dict) else {}
        logger.info(
            "initialize requested=%s negotiated=%s client=%s",
            requested,
            version,
            session.client_info.get("name", "unknown"),
            extra={"session_id": session.session_id},
        )
        result: dict[str, Any] = {
            "protocolVersion": version,
            "capabilities": {"tools": {"listChanged": False}},
            "serverInfo": {"name": self.server_name, "version": self.server_version},
        }
        if self.instructions:
            result["instructions"] = self.instructions
        return result

    async def _ping(self, session: ProtocolSession, params: dict[str, Any]) -> dict[str, Any]:
        return {}

    async def _list_tools(self, session: ProtocolSession, params: dict[str, Any]) -> dict[str, Any]:
        logger.info("list tools", extra={"session_id": session.session_id})
        return {"tools": [descriptor.to_wire() for descriptor in self.dispatcher.list_tools()]}

    async def _call_tool(self, session: ProtocolSession, params: dict[str, Any]) -> dict[str, Any]:
        if params.get("arguments") is None:
            params.pop("arguments", None)
        try:
            request = ToolRequest.model_validate(params)
        except ValidationError as exc:
            details = "; ".join(
                f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg')}"
                for error in exc.errors()
            )
            raise InvalidParams(details) from exc
        response = await self.dispatcher.call_tool(request, session_id=session.session_id)
        return response.to_wire()
