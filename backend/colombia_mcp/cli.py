"""Command-line entrypoint: `api-colombia-mcp` / `python -m colombia_mcp`."""

from __future__ import annotations

import argparse
import asyncio
import logging
from typing import Sequence

from dotenv import find_dotenv, load_dotenv

from .container import ServerContainer, build_container, shutdown
from .logging_config import configure_logging
from .settings import TRANSPORT_MODES, Settings
from .startup_checks import StartupCheckError, run_startup_checks

logger = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="api-colombia-mcp",
        description="Serve the api-colombia.com catalog as MCP tools.",
    )
    parser.add_argument(
        "--transport",
        choices=TRANSPORT_MODES,
        default=None,
        help="Transport to serve (default: MCP_TRANSPORT or stdio).",
    )
    parser.add_argument("--host", default=None, help="Bind host for the HTTP transport.")
    parser.add_argument("--port", type=int, default=None, help="Bind port for the HTTP transport.")
    parser.add_argument("--log-level", default=None, help="Root log level (default: LOG_LEVEL or INFO).")
    return parser.parse_args(list(argv) if argv is not None else None)


def load_dotenv_if_present() -> None:
    """Load environment variables from a .env file found from the cwd upwards."""
    dotenv_path = find_dotenv(filename=".env", usecwd=True)
    if dotenv_path:
        load_dotenv(dotenv_path=dotenv_path)


async def _serve(container: ServerContainer) -> None:
    from .transports.http import run_http
    from .transports.stdio import run_stdio

    try:
        if container.settings.transport.mode == "http":
            await run_http(container)
        else:
            await run_stdio(container.protocol)
    finally:
        await shutdown(container)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    load_dotenv_if_present()
    settings = Settings.from_env().with_overrides(
        transport=args.transport,
        host=args.host,
        port=args.port,
        log_level=args.log_level,
    )
    configure_logging(settings.logging.level)

    try:
        run_startup_checks(settings)
    except StartupCheckError as exc:
        logger.error("Startup check failed: %s", exc)
        return 1

    container = build_container(settings=settings)
    logger.info(
        "starting server transport=%s tools=%s",
        settings.transport.mode,
        len(container.registry),
    )
    try:
        asyncio.run(_serve(container))
    except KeyboardInterrupt:
        logger.info("Interrupted; shutting down")
        return 0
    except Exception:
        logger.exception("Fatal error; server stopped")
        return 1
    return 0
