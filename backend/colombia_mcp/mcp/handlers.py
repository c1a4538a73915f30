"""Tool handlers: extract, validate, call upstream, shape the response."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Mapping

from pydantic import BaseModel

from ..upstream.client import UpstreamClient, UpstreamError
from ..upstream.operations import get_operation
from .results import Failure, FailureKind, Result, Success
from .schema import ToolRequest, ToolResponse, create_error_response, create_tool_response

if TYPE_CHECKING:
    from ..tools.catalog import ToolSpec

logger = logging.getLogger(__name__)

ToolHandler = Callable[[ToolRequest], Awaitable[ToolResponse]]


def _map_fields(values: Mapping[str, Any], mapping: Mapping[str, str]) -> dict[str, Any]:
    return {
        upstream_key: values[field_name]
        for field_name, upstream_key in mapping.items()
        if values.get(field_name) is not None
    }


def describe_call(label: str, values: Mapping[str, Any]) -> str:
    """Render `label (field=value, ...)` for log lines and error messages."""
    if not values:
        return label
    rendered = ", ".join(f"{name}={value!r}" for name, value in values.items())
    return f"{label} ({rendered})"


def shape_response(spec: "ToolSpec", values: Mapping[str, Any], result: Result[Any]) -> ToolResponse:
    if isinstance(result, Success):
        return create_tool_response(result.value)
    if result.kind is FailureKind.VALIDATION:
        report = json.dumps(result.report, ensure_ascii=False)
        return create_error_response(
            f"Invalid input: {describe_call(spec.label, values)}: {report}"
        )
    return create_error_response(f"{spec.label}: {result.detail}")


def build_handler(spec: "ToolSpec", upstream: UpstreamClient) -> ToolHandler:
    """Bind a tool declaration to the upstream client."""

    operation = get_operation(spec.operation_id)

    async def _invoke(validated: BaseModel) -> Result[Any]:
        values = validated.model_dump()
        try:
            payload = await upstream.request(
                operation,
                path=_map_fields(values, spec.path_params) or None,
                query=_map_fields(values, spec.query_params) or None,
            )
        except UpstreamError as exc:
            logger.warning(
                "upstream call failed tool=%s operation=%s error=%s details=%s",
                spec.name,
                operation.operation_id,
                exc,
                exc.details,
            )
            return Failure(FailureKind.UPSTREAM, str(exc), exc.details)
        return Success(payload)

    async def handler(request: ToolRequest) -> ToolResponse:
        values = spec.schema.extract(request.arguments)
        validation = spec.schema.validate(values)
        if isinstance(validation, Failure):
            logger.info(
                "invalid tool input tool=%s report=%s",
                spec.name,
                validation.report,
            )
            return shape_response(spec, values, validation)
        result = await _invoke(validation.value)
        return shape_response(spec, values, result)

    handler.__name__ = f"handle_{spec.name.replace('-', '_')}"
    return handler
