"""Shared pytest fixtures."""

from __future__ import annotations

import inspect
from typing import Any, Callable, Mapping

import pytest

from colombia_mcp.container import ServerContainer, build_container
from colombia_mcp.mcp.dispatcher import ToolDispatcher
from colombia_mcp.mcp.protocol import ProtocolHandler
from colombia_mcp.mcp.registry import ToolRegistry, build_tool_registry
from colombia_mcp.settings import LoggingSettings, Settings, TransportSettings, UpstreamSettings
from colombia_mcp.upstream.operations import UpstreamOperation


class FakeUpstream:
    """Records every upstream call and answers with a canned payload."""

    def __init__(
        self,
        payload: Any = None,
        *,
        error: Exception | None = None,
        responder: Callable[..., Any] | None = None,
    ):
        self.payload = payload
        self.error = error
        self.responder = responder
        self.calls: list[tuple[str, dict[str, Any], dict[str, Any]]] = []

    async def request(
        self,
        operation: UpstreamOperation,
        *,
        path: Mapping[str, Any] | None = None,
        query: Mapping[str, Any] | None = None,
    ) -> Any:
        self.calls.append((operation.operation_id, dict(path or {}), dict(query or {})))
        if self.error is not None:
            raise self.error
        if self.responder is not None:
            result = self.responder(operation, dict(path or {}), dict(query or {}))
            if inspect.isawaitable(result):
                result = await result
            return result
        return self.payload


def make_settings(**transport: Any) -> Settings:
    return Settings(
        transport=TransportSettings(
            mode=transport.get("mode", "stdio"),
            http_host=transport.get("http_host", "127.0.0.1"),
            http_port=transport.get("http_port", 3000),
            http_session_idle_seconds=transport.get("http_session_idle_seconds", 3600.0),
            http_max_sessions=transport.get("http_max_sessions", 1000),
        ),
        upstream=UpstreamSettings(base_url="https://api-colombia.com", timeout_seconds=30.0),
        logging=LoggingSettings(level="INFO"),
    )


@pytest.fixture
def fake_upstream() -> FakeUpstream:
    return FakeUpstream({"id": 3, "name": "Andina"})


@pytest.fixture
def registry(fake_upstream: FakeUpstream) -> ToolRegistry:
    return build_tool_registry(fake_upstream)


@pytest.fixture
def dispatcher(registry: ToolRegistry) -> ToolDispatcher:
    return ToolDispatcher(registry)


@pytest.fixture
def container(fake_upstream: FakeUpstream) -> ServerContainer:
    return build_container(settings=make_settings(), upstream=fake_upstream)


@pytest.fixture
def protocol(container: ServerContainer) -> ProtocolHandler:
    return container.protocol
