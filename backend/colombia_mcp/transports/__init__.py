"""Transport adapters that feed JSON-RPC payloads to the protocol handler."""

from .http import SessionManager, create_http_app, run_http
from .stdio import StdioTransport, StdioTransportError, open_stdio_streams, run_stdio

__all__ = [
    "SessionManager",
    "StdioTransport",
    "StdioTransportError",
    "create_http_app",
    "open_stdio_streams",
    "run_http",
    "run_stdio",
]
