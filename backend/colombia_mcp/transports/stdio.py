"""Newline-delimited JSON-RPC over stdin/stdout.

stdout carries protocol frames only; logs go to stderr.
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from typing import Any, Protocol

from ..mcp.protocol import PARSE_ERROR, ProtocolHandler, ProtocolSession, error_response

logger = logging.getLogger(__name__)

# Upstream list payloads can be large; the default 64 KiB line limit is too tight.
STREAM_LIMIT = 16 * 1024 * 1024


class StdioTransportError(RuntimeError):
    """Raised when the stdio stream breaks and the server cannot continue."""


class LineWriter(Protocol):
    def write(self, data: bytes) -> None: ...

    async def drain(self) -> None: ...


def encode_frame(message: Any) -> bytes:
    return json.dumps(message, separators=(",", ":"), ensure_ascii=False).encode("utf-8") + b"\n"


class StdioTransport:
    """Serves one MCP session over a pair of byte streams.

    Each input line is handled as its own task, so a slow upstream call does
    not block the lines after it. Replies may therefore be written out of
    order; clients match them by id.
    """

    def __init__(self, protocol: ProtocolHandler, session: ProtocolSession | None = None):
        self.protocol = protocol
        self.session = session or ProtocolSession(transport="stdio")
        self._write_lock = asyncio.Lock()
        self._failure: BaseException | None = None

    async def serve(self, reader: asyncio.StreamReader, writer: LineWriter) -> None:
        """Read lines until EOF, then wait for in-flight requests to finish.

        A failed write stops the loop at once, even while stdin stays open.
        """
        log_extra = {"session_id": self.session.session_id}
        pending: set[asyncio.Task[None]] = set()
        failed = asyncio.Event()

        def _on_done(task: asyncio.Task[None]) -> None:
            pending.discard(task)
            if task.cancelled() or self._failure is not None:
                return
            exc = task.exception()
            if exc is not None:
                self._failure = exc
                failed.set()

        logger.info("stdio transport listening", extra=log_extra)
        failure_wait = asyncio.ensure_future(failed.wait())
        read: asyncio.Future[bytes] | None = None
        try:
            while True:
                read = asyncio.ensure_future(reader.readline())
                await asyncio.wait({read, failure_wait}, return_when=asyncio.FIRST_COMPLETED)
                if failed.is_set():
                    break
                line = read.result()
                if not line:
                    break
                line = line.strip()
                if not line:
                    continue
                task = asyncio.create_task(self._handle_line(line, writer))
                pending.add(task)
                task.add_done_callback(_on_done)
            while pending and not failed.is_set():
                    await asyncio.wait(set(pending), return_when=asyncio.FIRST_EXCEPTION)
        finally:
            leftovers = [*pending, failure_wait]
            if read is not None and not read.done():
                leftovers.append(read)
            for task in leftovers:
                task.cancel()
            await asyncio.wait(leftovers)
        if self._failure is not None:
            raise StdioTransportError(f"stdio transport failed: {self._failure}") from self._failure
        logger.info("stdin closed; stdio transport stopped", extra=log_extra)

    async def _handle_line(self, line: bytes, writer: LineWriter) -> None:
        try:
            payload = json.loads(line)
        except ValueError as exc:
            logger.info(
                "discarding undecodable frame: %s",
                exc,
                extra={"session_id": self.session.session_id},
            )
            reply: Any = error_response(None, PARSE_ERROR, "Parse error")
        else:
            reply = await self.protocol.handle_payload(self.session, payload)
        if reply is None:
            return
        await self._write(writer, reply)

    async def _write(self, writer: LineWriter, message: Any) -> None:
        frame = encode_frame(message)
        async with self._write_lock:
            writer.write(frame)
            await writer.drain()


async def open_stdio_streams() -> tuple[asyncio.StreamReader, asyncio.StreamWriter]:
    """Wrap the process stdin/stdout in asyncio streams."""
    loop = asyncio.get_running_loop()
    reader = asyncio.StreamReader(limit=STREAM_LIMIT)
    await loop.connect_read_pipe(lambda: asyncio.StreamReaderProtocol(reader), sys.stdin)
    write_transport, write_protocol = await loop.connect_write_pipe(
        asyncio.streams.FlowControlMixin, sys.stdout
    )
    writer = asyncio.StreamWriter(write_transport, write_protocol, reader, loop)
    return reader, writer


async def run_stdio(protocol: ProtocolHandler) -> None:
    """Serve the process stdin/stdout until EOF or a fatal loop error."""
    loop = asyncio.get_running_loop()
    transport = StdioTransport(protocol)
    fatal: asyncio.Future[None] = loop.create_future()

    def _exception_handler(loop: asyncio.AbstractEventLoop, context: dict[str, Any]) -> None:
        exc = context.get("exception")
        logger.error(
            "unhandled event loop error: %s",
            context.get("message", "unknown"),
            exc_info=exc,
            extra={"session_id": transport.session.session_id},
        )
        if not fatal.done():
            fatal.set_exception(
                StdioTransportError(context.get("message", "unhandled event loop error"))
            )

    loop.set_exception_handler(_exception_handler)
    reader, writer = await open_stdio_streams()
    serve_task = asyncio.create_task(transport.serve(reader, writer))
    try:
        await asyncio.wait({serve_task, fatal}, return_when=asyncio.FIRST_COMPLETED)
        if fatal.done():
            serve_task.cancel()
            fatal.result()
        await serve_task
    finally:
        loop.set_exception_handler(None)
