"""Shared MCP schema models."""

from __future__ import annotations

import json
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class ToolDescriptor(BaseModel):
    """Structured metadata describing a tool exposed to protocol callers."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    name: str
    description: str
    input_schema: dict[str, Any] = Field(default_factory=dict, alias="inputSchema")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class ToolRequest(BaseModel):
    """Incoming `tools/call` parameters (`_meta` and other extras are ignored)."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str
    arguments: dict[str, Any] = Field(default_factory=dict)


class TextContent(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    type: Literal["text"] = "text"
    text: str


class ToolResponse(BaseModel):
    """Response envelope returned for every tool invocation."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    content: list[TextContent]
    is_error: bool = Field(default=False, alias="isError")
    meta: dict[str, Any] = Field(default_factory=dict, alias="_meta")

    @property
    def text(self) -> str:
        return "".join(item.text for item in self.content)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


def serialize_payload(data: Any) -> str:
    """Serialize an upstream payload as compact JSON, keeping non-ASCII text."""
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False)


def create_tool_response(data: Any) -> ToolResponse:
    return ToolResponse(content=[TextContent(text=serialize_payload(data))])


def create_error_response(message: str) -> ToolResponse:
    return ToolResponse(content=[TextContent(text=message)], is_error=True)
