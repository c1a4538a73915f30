"""Routes protocol tool requests to registered handlers."""

from __future__ import annotations

import logging

from .registry import ToolRegistry
from .schema import ToolDescriptor, ToolRequest, ToolResponse, create_error_response

logger = logging.getLogger(__name__)


class ToolDispatcher:
    """Transport-agnostic entry point for `tools/list` and `tools/call`.

    Holds no per-session state, so one instance serves every session.
    """

    def __init__(self, registry: ToolRegistry):
        self.registry = registry

    def list_tools(self) -> list[ToolDescriptor]:
        return self.registry.list_descriptors()

    async def call_tool(self, request: ToolRequest, *, session_id: str = "system") -> ToolResponse:
        log_extra = {"session_id": session_id}
        entry = self.registry.get(request.name)
        if entry is None:
            logger.info("unknown tool requested name=%s", request.name, extra=log_extra)
            return create_error_response(f"Error: Unknown tool: {request.name}")
        logger.info("tool call name=%s", request.name, extra=log_extra)
        try:
            return await entry.handler(request)
        except Exception as exc:
            logger.exception(
                "tool handler raised name=%s",
                request.name,
                extra=log_extra,
            )
            return create_error_response(f"Error: {exc}")
