"""Tests for the newline-delimited stdio transport."""

from __future__ import annotations

import asyncio
import json

import pytest

from colombia_mcp.mcp.protocol import PARSE_ERROR
from colombia_mcp.transports.stdio import StdioTransport, StdioTransportError


class _CollectingWriter:
    def __init__(self) -> None:
        self.buffer = bytearray()

    def write(self, data: bytes) -> None:
        self.buffer.extend(data)

    async def drain(self) -> None:
        return None

    def frames(self) -> list[dict]:
        return [json.loads(line) for line in self.buffer.decode("utf-8").splitlines()]


class _BrokenWriter(_CollectingWriter):
    async def drain(self) -> None:
        raise BrokenPipeError("stdout closed")


def _reader(*lines: str) -> asyncio.StreamReader:
    reader = asyncio.StreamReader()
    for line in lines:
        reader.feed_data(line.encode("utf-8") + b"\n")
    reader.feed_eof()
    return reader


def _line(message: dict) -> str:
    return json.dumps(message)


@pytest.mark.asyncio
async def test_each_request_line_gets_one_reply(protocol) -> None:
    writer = _CollectingWriter()
    reader = _reader(
        _line({"jsonrpc": "2.0", "id": 1, "method": "initialize", "params": {}}),
        "",
        "   ",
        _line({"jsonrpc": "2.0", "method": "notifications/initialized"}),
        _line({"jsonrpc": "2.0", "id": 2, "method": "tools/list"}),
    )
    transport = StdioTransport(protocol)

    await transport.serve(reader, writer)

    frames = sorted(writer.frames(), key=lambda frame: frame["id"])
    assert [frame["id"] for frame in frames] == [1, 2]
    assert frames[0]["result"]["serverInfo"]["name"] == "mcp-api-colombia"
    assert len(frames[1]["result"]["tools"]) > 0
    assert transport.session.initialized is True


@pytest.mark.asyncio
async def test_tool_call_round_trip(protocol) -> None:
    writer = _CollectingWriter()
    reader = _reader(
        _line(
            {
                "jsonrpc": "2.0",
                "id": 7,
                "method": "tools/call",
                "params": {"name": "get-region-by-id", "arguments": {"id": 3}},
            }
        )
    )

    await StdioTransport(protocol).serve(reader, writer)

    (frame,) = writer.frames()
    assert frame["id"] == 7
    assert frame["result"]["content"][0]["text"] == '{"id":3,"name":"Andina"}'


@pytest.mark.asyncio
async def test_undecodable_line_gets_parse_error(protocol) -> None:
    writer = _CollectingWriter()

    await StdioTransport(protocol).serve(_reader("{not json"), writer)

    (frame,) = writer.frames()
    assert frame["id"] is None
    assert frame["error"]["code"] == PARSE_ERROR


@pytest.mark.asyncio
async def test_notifications_produce_no_output(protocol) -> None:
    writer = _CollectingWriter()

    await StdioTransport(protocol).serve(
        _reader(_line({"jsonrpc": "2.0", "method": "notifications/initialized"})), writer
    )

    assert writer.buffer == bytearray()


@pytest.mark.asyncio
async def test_slow_request_does_not_block_later_lines(protocol, fake_upstream) -> None:
    release = asyncio.Event()

    async def responder(operation, path, query):
        await release.wait()
        return {"id": path["id"]}

    fake_upstream.responder = responder
    writer = _CollectingWriter()
    reader = asyncio.StreamReader()
    transport = StdioTransport(protocol)
    serve_task = asyncio.create_task(transport.serve(reader, writer))

    reader.feed_data(
        _line(
            {
                "jsonrpc": "2.0",
                "id": 1,
                "method": "tools/call",
                "params": {"name": "get-region-by-id", "arguments": {"id": 1}},
            }
        ).encode()
        + b"\n"
    )
    reader.feed_data(_line({"jsonrpc": "2.0", "id": 2, "method": "ping"}).encode() + b"\n")
    for _ in range(50):
        if writer.buffer:
            break
        await asyncio.sleep(0.01)
    assert [frame["id"] for frame in writer.frames()] == [2]

    release.set()
    reader.feed_eof()
    await asyncio.wait_for(serve_task, timeout=1)
    assert [frame["id"] for frame in writer.frames()] == [2, 1]


@pytest.mark.asyncio
async def test_write_failure_is_fatal(protocol) -> None:
    reader = _reader(_line({"jsonrpc": "2.0", "id": 1, "method": "ping"}))

    with pytest.raises(StdioTransportError):
        await StdioTransport(protocol).serve(reader, _BrokenWriter())


@pytest.mark.asyncio
async def test_write_failure_stops_serving_while_stdin_stays_open(protocol) -> None:
    reader = asyncio.StreamReader()
    reader.feed_data(_line({"jsonrpc": "2.0", "id": 1, "method": "ping"}).encode() + b"\n")

    with pytest.raises(StdioTransportError, match="stdout closed"):
        await asyncio.wait_for(StdioTransport(protocol).serve(reader, _BrokenWriter()), timeout=2)
