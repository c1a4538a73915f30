"""Tests for the api-colombia.com HTTP client."""

from __future__ import annotations

import httpx
import pytest

from colombia_mcp.upstream.client import ApiColombiaClient, UpstreamError
from colombia_mcp.upstream.operations import get_operation


def _client(handler) -> ApiColombiaClient:
    return ApiColombiaClient("https://api.example.test/", transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_renders_path_and_returns_json() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"id": 3, "name": "Andina"})

    client = _client(handler)
    try:
        payload = await client.request(get_operation("getApiV1RegionById"), path={"id": 3})
    finally:
        await client.aclose()

    assert payload == {"id": 3, "name": "Andina"}
    assert seen[0].method == "GET"
    assert seen[0].url.host == "api.example.test"
    assert seen[0].url.path == "/api/v1/Region/3"
    assert seen[0].headers["accept"] == "application/json"


@pytest.mark.asyncio
async def test_query_drops_absent_values() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"page": 1, "data": []})

    client = _client(handler)
    try:
        await client.request(
            get_operation("getApiV1CityPagedList"),
            query={"Page": 1, "PageSize": 10, "SortBy": None},
        )
    finally:
        await client.aclose()

    assert dict(seen[0].url.params) == {"Page": "1", "PageSize": "10"}


@pytest.mark.asyncio
async def test_path_values_are_escaped() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[])

    client = _client(handler)
    try:
        await client.request(get_operation("getApiV1CityNameByName"), path={"name": "Santa Marta"})
    finally:
        await client.aclose()

    assert seen[0].url.path == "/api/v1/City/name/Santa Marta"
    assert b"Santa%20Marta" in seen[0].url.raw_path


@pytest.mark.asyncio
async def test_error_status_raises_upstream_error() -> None:
    client = _client(lambda request: httpx.Response(404, text="not here"))
    try:
        with pytest.raises(UpstreamError) as excinfo:
            await client.request(get_operation("getApiV1RegionById"), path={"id": 99})
    finally:
        await client.aclose()

    assert str(excinfo.value) == "Upstream responded with HTTP 404 Not Found"
    assert excinfo.value.details["status_code"] == 404
    assert excinfo.value.details["operation"] == "getApiV1RegionById"


@pytest.mark.asyncio
async def test_redirect_is_reported_as_upstream_error() -> None:
    client = _client(
        lambda request: httpx.Response(302, headers={"location": "https://elsewhere.test/"})
    )
    try:
        with pytest.raises(UpstreamError) as excinfo:
            await client.request(get_operation("getApiV1Region"))
    finally:
        await client.aclose()

    assert str(excinfo.value) == "Upstream responded with HTTP 302 Found"
    assert excinfo.value.details["status_code"] == 302


@pytest.mark.asyncio
async def test_empty_success_body_is_reported_as_empty() -> None:
    client = _client(lambda request: httpx.Response(204))
    try:
        with pytest.raises(UpstreamError, match="empty response") as excinfo:
            await client.request(get_operation("getApiV1Region"))
    finally:
        await client.aclose()

    assert "HTTP 204 No Content" in str(excinfo.value)


@pytest.mark.asyncio
async def test_network_failure_raises_upstream_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = _client(handler)
    try:
        with pytest.raises(UpstreamError) as excinfo:
            await client.request(get_operation("getApiV1Region"))
    finally:
        await client.aclose()

    assert "connection refused" in str(excinfo.value)
    assert excinfo.value.details["error"] == "ConnectError"


@pytest.mark.asyncio
async def test_malformed_body_raises_upstream_error() -> None:
    client = _client(lambda request: httpx.Response(200, text="<html>"))
    try:
        with pytest.raises(UpstreamError, match="malformed JSON"):
            await client.request(get_operation("getApiV1Region"))
    finally:
        await client.aclose()


def test_missing_path_parameter_is_rejected() -> None:
    with pytest.raises(ValueError):
        get_operation("getApiV1RegionById").render_path({})
