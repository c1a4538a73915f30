"""Tool declarations for the api-colombia.com resources."""

from .catalog import ResourceFamily, ToolSpec, build_tool_specs

__all__ = ["ResourceFamily", "ToolSpec", "build_tool_specs"]
