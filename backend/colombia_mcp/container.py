"""Explicit dependency container for the server runtime.

Nothing here runs on import. `build_container` wires the graph once per
process and every transport shares the result.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .mcp.dispatcher import ToolDispatcher
    from .mcp.protocol import ProtocolHandler
    from .mcp.registry import ToolRegistry
    from .settings import Settings
    from .upstream.client import UpstreamClient

SERVER_NAME = "mcp-api-colombia"
SERVER_INSTRUCTIONS = (
    "Read-only access to public data about Colombia (regions, departments, "
    "cities, presidents, tourism, natural areas, holidays and more) from "
    "api-colombia.com. Tool results are the upstream JSON payloads."
)


@dataclass
class ServerContainer:
    """Holds the constructed runtime dependencies for the server."""

    settings: Settings
    upstream: UpstreamClient
    registry: ToolRegistry
    dispatcher: ToolDispatcher
    protocol: ProtocolHandler


def build_container(
    *,
    settings: "Settings" | None = None,
    upstream: "UpstreamClient" | None = None,
) -> ServerContainer:
    """Construct the dependency graph without opening any transport."""

    # Local imports keep this module side-effect-free on import.
    from . import __version__
    from .mcp.dispatcher import ToolDispatcher
    from .mcp.protocol import ProtocolHandler
    from .mcp.registry import build_tool_registry
    from .settings import get_settings
    from .upstream.client import ApiColombiaClient

    settings = settings or get_settings()
    if upstream is None:
        upstream = ApiColombiaClient(
            settings.upstream.base_url,
            timeout=settings.upstream.timeout_seconds,
        )
    registry = build_tool_registry(upstream)
    dispatcher = ToolDispatcher(registry)
    protocol = ProtocolHandler(
        dispatcher,
        server_name=SERVER_NAME,
        server_version=__version__,
        instructions=SERVER_INSTRUCTIONS,
    )
    return ServerContainer(
        settings=settings,
        upstream=upstream,
        registry=registry,
        dispatcher=dispatcher,
        protocol=protocol,
    )


async def shutdown(container: ServerContainer) -> None:
    """Release resources owned by the container."""

    close = getattr(container.upstream, "aclose", None)
    if close is not None:
        await close()
