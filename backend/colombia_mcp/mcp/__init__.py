"""MCP protocol core: schema, validation, registry and dispatch."""

from .dispatcher import ToolDispatcher
from .protocol import ProtocolHandler, ProtocolSession
from .registry import DuplicateToolError, ToolEntry, ToolRegistry, build_tool_registry
from .schema import ToolDescriptor, ToolRequest, ToolResponse

__all__ = [
    "DuplicateToolError",
    "ProtocolHandler",
    "ProtocolSession",
    "ToolDescriptor",
    "ToolDispatcher",
    "ToolEntry",
    "ToolRegistry",
    "ToolRequest",
    "ToolResponse",
    "build_tool_registry",
]
