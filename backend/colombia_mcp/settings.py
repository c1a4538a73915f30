"""Application settings resolved from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace

from .upstream.client import DEFAULT_BASE_URL


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _env_str(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None:
        return default
    normalized = value.strip()
    return normalized or default


TRANSPORT_MODES: tuple[str, ...] = ("stdio", "http")


@dataclass(frozen=True)
class TransportSettings:
    """Which front door to open and where the HTTP one binds."""

    mode: str
    http_host: str
    http_port: int
    http_session_idle_seconds: float = 3600.0
    http_max_sessions: int = 1000

    @classmethod
    def from_env(cls) -> "TransportSettings":
        raw_mode = (_env_str("MCP_TRANSPORT", "stdio") or "stdio").lower()
        return cls(
            mode=raw_mode,
            http_host=_env_str("MCP_HTTP_HOST", "127.0.0.1") or "127.0.0.1",
            http_port=_env_int("MCP_HTTP_PORT", 3000),
            http_session_idle_seconds=_env_float("MCP_HTTP_SESSION_IDLE_SECONDS", 3600.0),
            http_max_sessions=_env_int("MCP_HTTP_MAX_SESSIONS", 1000),
        )


@dataclass(frozen=True)
class UpstreamSettings:
    """Connection details for the api-colombia.com REST catalog."""

    base_url: str
    timeout_seconds: float

    @classmethod
    def from_env(cls) -> "UpstreamSettings":
        return cls(
            base_url=_env_str("API_COLOMBIA_BASE_URL", DEFAULT_BASE_URL) or DEFAULT_BASE_URL,
            timeout_seconds=_env_float("API_COLOMBIA_TIMEOUT_SECONDS", 30.0),
        )


@dataclass(frozen=True)
class LoggingSettings:
    level: str

    @classmethod
    def from_env(cls) -> "LoggingSettings":
        return cls(level=(_env_str("LOG_LEVEL", "INFO") or "INFO").upper())


class Settings:
    """Container for application settings."""

    def __init__(
        self,
        *,
        transport: TransportSettings,
        upstream: UpstreamSettings,
        logging: LoggingSettings,
    ) -> None:
        self.transport = transport
        self.upstream = upstream
        self.logging = logging

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            transport=TransportSettings.from_env(),
            upstream=UpstreamSettings.from_env(),
            logging=LoggingSettings.from_env(),
        )

    def with_overrides(
        self,
        *,
        transport: str | None = None,
        host: str | None = None,
        port: int | None = None,
        log_level: str | None = None,
    ) -> "Settings":
        """Return a copy with CLI flags applied on top of the environment."""
        transport_settings = self.transport
        if transport is not None:
            transport_settings = replace(transport_settings, mode=transport.lower())
        if host is not None:
            transport_settings = replace(transport_settings, http_host=host)
        if port is not None:
            transport_settings = replace(transport_settings, http_port=port)
        logging_settings = self.logging
        if log_level is not None:
            logging_settings = LoggingSettings(level=log_level.upper())
        return Settings(
            transport=transport_settings,
            upstream=self.upstream,
            logging=logging_settings,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    """Return a cached Settings instance built from the current environment."""

    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS
