"""MCP server exposing the trustthenverify.com agent registry as tools."""

__version__ = "1.1.0"
