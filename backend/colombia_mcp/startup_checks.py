"""Startup validation to keep deployments predictable."""

from __future__ import annotations

import logging
from urllib.parse import urlparse

from .settings import TRANSPORT_MODES, Settings

logger = logging.getLogger(__name__)


class StartupCheckError(RuntimeError):
    """Raised when configuration is unusable and the server must not start."""


def _ensure_transport(settings: Settings) -> None:
    mode = settings.transport.mode
    if mode not in TRANSPORT_MODES:
        raise StartupCheckError(f"MCP_TRANSPORT must be stdio|http, got {mode!r}")


def _ensure_port(settings: Settings) -> None:
    port = settings.transport.http_port
    if not 1 <= port <= 65535:
        raise StartupCheckError(f"MCP_HTTP_PORT must be within 1..65535, got {port}")


def _ensure_session_limits(settings: Settings) -> None:
    idle_seconds = settings.transport.http_session_idle_seconds
    if idle_seconds <= 0:
        raise StartupCheckError(
            f"MCP_HTTP_SESSION_IDLE_SECONDS must be positive, got {idle_seconds}"
        )
    max_sessions = settings.transport.http_max_sessions
    if max_sessions < 1:
        raise StartupCheckError(f"MCP_HTTP_MAX_SESSIONS must be at least 1, got {max_sessions}")


def _ensure_base_url(settings: Settings) -> None:
    base_url = settings.upstream.base_url
    parsed = urlparse(base_url)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise StartupCheckError(
            f"API_COLOMBIA_BASE_URL must be an absolute http(s) URL, got {base_url!r}"
        )


def _ensure_timeout(settings: Settings) -> None:
    timeout = settings.upstream.timeout_seconds
    if timeout <= 0:
        raise StartupCheckError(f"API_COLOMBIA_TIMEOUT_SECONDS must be positive, got {timeout}")


def run_startup_checks(settings: Settings) -> None:
    """Fail fast when configuration is invalid."""
    _ensure_transport(settings)
    if settings.transport.mode == "http":
        _ensure_port(settings)
        _ensure_session_limits(settings)
    _ensure_base_url(settings)
    _ensure_timeout(settings)
    logger.info(
        "Startup checks passed transport=%s upstream=%s",
        settings.transport.mode,
        settings.upstream.base_url,
    )
