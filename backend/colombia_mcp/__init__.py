"""MCP server exposing the api-colombia.com catalog as tools."""

__version__ = "1.0.0"
