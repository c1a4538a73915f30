"""Async HTTP client for the api-colombia.com REST catalog."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Protocol

import httpx

from .operations import UpstreamOperation

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api-colombia.com"


class UpstreamError(Exception):
    """Raised when the upstream API cannot fulfill a request."""

    def __init__(self, message: str, *, details: Mapping[str, Any] | None = None):
        super().__init__(message)
        self.details = dict(details or {})


class UpstreamClient(Protocol):
    """What tool handlers need from the upstream collaborator."""

    async def request(
        self,
        operation: UpstreamOperation,
        *,
        path: Mapping[str, Any] | None = None,
        query: Mapping[str, Any] | None = None,
    ) -> Any: ...


class ApiColombiaClient:
    """Executes upstream operations and returns the decoded JSON payload.

    Network failures, non-2xx statuses and undecodable bodies all surface as
    `UpstreamError`; callers never see raw httpx exceptions.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            headers={
                "Accept": "application/json",
                "User-Agent": "api-colombia-mcp",
            },
        )

    async def request(
        self,
        operation: UpstreamOperation,
        *,
        path: Mapping[str, Any] | None = None,
        query: Mapping[str, Any] | None = None,
    ) -> Any:
        url = operation.render_path(path)
        params = {key: value for key, value in (query or {}).items() if value is not None}
        logger.debug(
            "upstream request operation=%s url=%s params=%s",
            operation.operation_id,
            url,
            params,
        )
        try:
            response = await self._client.request(operation.method, url, params=params)
        except httpx.HTTPError as exc:
            message = str(exc) or exc.__class__.__name__
            raise UpstreamError(
                f"Request to {url} failed: {message}",
                details={"operation": operation.operation_id, "error": exc.__class__.__name__},
            ) from exc
        status_line = f"HTTP {response.status_code} {response.reason_phrase}".rstrip()
        details = {
            "operation": operation.operation_id,
            "status_code": response.status_code,
            "body": response.text[:200],
        }
        if not response.is_success:
            raise UpstreamError(f"Upstream responded with {status_line}", details=details)
        if not response.content:
            raise UpstreamError(f"Upstream returned an empty response ({status_line})", details=details)
        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamError("Upstream returned a malformed JSON payload", details=details) from exc

    async def aclose(self) -> None:
        await self._client.aclose()
