"""MCP stdio server wiring the tool catalog to the dispatcher."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import CallToolResult, TextContent, Tool

from trust_mcp.config import TrustMCPConfig
from trust_mcp.dispatcher import Dispatcher
from trust_mcp.registry_client import RegistryClient
from trust_mcp.tools import TOOLS

logger = logging.getLogger(__name__)


async def handle_list_tools() -> list[Tool]:
	return TOOLS


async def handle_call_tool(dispatcher: Dispatcher, name: str, arguments: dict[str, Any] | None) -> CallToolResult:
	result = await dispatcher.invoke(name, arguments)
	return CallToolResult(
		content=[TextContent(type="text", text=result.text)],
		isError=result.is_error,
	)


def build_server(config: TrustMCPConfig, dispatcher: Dispatcher) -> Server:
	"""Create an MCP Server whose handlers close over the given dispatcher."""
	server: Server = Server(config.server.name, version=config.server.version)

	@server.list_tools()
	async def list_tools() -> list[Tool]:
		return await handle_list_tools()

	@server.call_tool()
	async def call_tool(name: str, arguments: dict[str, Any]) -> CallToolResult:
		return await handle_call_tool(dispatcher, name, arguments)

	return server


async def serve(config: TrustMCPConfig) -> None:
	async with RegistryClient(config.registry) as client:
		server = build_server(config, Dispatcher(client))
		async with stdio_server() as (read_stream, write_stream):
			logger.info("Trust MCP server running on stdio (registry: %s)", config.registry.base_url)
			await server.run(read_stream, write_stream, server.create_initialization_options())


def run_mcp_server(config: TrustMCPConfig) -> None:
	"""Entry point for `trust-mcp serve`."""
	asyncio.run(serve(config))
