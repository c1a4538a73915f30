"""Tests for the command-line entrypoint."""

from __future__ import annotations

import pytest

from colombia_mcp import cli
from colombia_mcp.container import build_container

from .conftest import FakeUpstream


@pytest.fixture
def quiet_cli(monkeypatch):
    for name in ("MCP_TRANSPORT", "MCP_HTTP_PORT", "API_COLOMBIA_BASE_URL", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(cli, "configure_logging", lambda level: None)
    monkeypatch.setattr(cli, "load_dotenv_if_present", lambda: None)
    monkeypatch.setattr(
        cli,
        "build_container",
        lambda settings: build_container(settings=settings, upstream=FakeUpstream([])),
    )
    return monkeypatch


def test_invalid_port_exits_with_one(quiet_cli) -> None:
    served = []

    async def fake_serve(container):
        served.append(container)

    quiet_cli.setattr(cli, "_serve", fake_serve)
    assert cli.main(["--transport", "http", "--port", "0"]) == 1
    assert served == []


def test_serves_selected_transport(quiet_cli) -> None:
    served = []

    async def fake_serve(container):
        served.append(container.settings.transport.mode)

    quiet_cli.setattr(cli, "_serve", fake_serve)
    assert cli.main(["--transport", "http", "--port", "3100"]) == 0
    assert served == ["http"]


def test_fatal_error_exits_with_one(quiet_cli) -> None:
    async def fake_serve(container):
        raise RuntimeError("stdout closed")

    quiet_cli.setattr(cli, "_serve", fake_serve)
    assert cli.main([]) == 1


def test_unknown_transport_flag_is_rejected(quiet_cli) -> None:
    with pytest.raises(SystemExit):
        cli.main(["--transport", "websocket"])
