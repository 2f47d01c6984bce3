"""Tests for MCP server handlers and tool catalog."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

pytest.importorskip("mcp", reason="mcp package not installed")

from mcp.server import Server
from mcp.types import CallToolResult

from trust_mcp.config import TrustMCPConfig
from trust_mcp.dispatcher import Dispatcher
from trust_mcp.mcp_server import build_server, handle_call_tool, handle_list_tools, run_mcp_server
from trust_mcp.models import ToolName
from trust_mcp.tools import TOOLS, get_tool

from conftest import FakeRegistry, make_trust


class TestCatalog:
	def test_one_entry_per_tool(self) -> None:
		names = [t.name for t in TOOLS]
		assert len(names) == len(set(names))
		assert set(names) == {t.value for t in ToolName}

	def test_schemas_are_objects_with_known_required_fields(self) -> None:
		for tool in TOOLS:
			schema = tool.inputSchema
			assert schema["type"] == "object"
			for field in schema.get("required", []):
				assert field in schema["properties"], f"{tool.name}: {field}"

	def test_chain_enum(self) -> None:
		tool = get_tool("trust_verify")
		assert tool is not None
		assert tool.inputSchema["properties"]["chain"]["enum"] == ["lightning", "nostr", "ethereum"]

	def test_review_rating_bounds(self) -> None:
		rating = get_tool("trust_review").inputSchema["properties"]["rating"]
		assert (rating["minimum"], rating["maximum"]) == (1, 5)

	def test_get_tool_unknown(self) -> None:
		assert get_tool("nope") is None

	@pytest.mark.asyncio
	async def test_list_tools_returns_catalog(self) -> None:
		assert await handle_list_tools() is TOOLS


class TestCallTool:
	@pytest.mark.asyncio
	async def test_success_result(self, dispatcher: Dispatcher, registry: FakeRegistry) -> None:
		registry.add("GET", "/v1/trust/a1b2c3", json=make_trust())
		result = await handle_call_tool(dispatcher, "trust_lookup", {"agent_id": "a1b2c3"})

		assert isinstance(result, CallToolResult)
		assert result.isError is False
		assert len(result.content) == 1
		assert result.content[0].type == "text"
		assert "PaymentBot" in result.content[0].text

	@pytest.mark.asyncio
	async def test_error_result_flagged(self, dispatcher: Dispatcher) -> None:
		result = await handle_call_tool(dispatcher, "nonexistent", {})
		assert result.isError is True
		assert result.content[0].text == "Unknown tool: nonexistent"


class TestServer:
	def test_build_server_registers_handlers(self, dispatcher: Dispatcher) -> None:
		from mcp import types

		server = build_server(TrustMCPConfig(), dispatcher)
		assert isinstance(server, Server)
		assert server.name == "trust-mcp"
		assert types.ListToolsRequest in server.request_handlers
		assert types.CallToolRequest in server.request_handlers

	def test_run_mcp_server_uses_asyncio_run(self) -> None:
		with patch("trust_mcp.mcp_server.asyncio.run") as mock_run, \
			patch("trust_mcp.mcp_server.serve", new_callable=MagicMock) as mock_serve:
			mock_serve.return_value = "coro"
			run_mcp_server(TrustMCPConfig())
		mock_run.assert_called_once_with("coro")

	@pytest.mark.asyncio
	async def test_serve_closes_client(self) -> None:
		from trust_mcp import mcp_server

		fake_streams = MagicMock()
		fake_streams.__aenter__ = AsyncMock(return_value=(MagicMock(), MagicMock()))
		fake_streams.__aexit__ = AsyncMock(return_value=False)

		with patch.object(mcp_server, "stdio_server", return_value=fake_streams), \
			patch.object(Server, "run", new_callable=AsyncMock) as mock_run, \
			patch.object(mcp_server.RegistryClient, "close", new_callable=AsyncMock) as mock_close:
			await mcp_server.serve(TrustMCPConfig())

		mock_run.assert_awaited_once()
		mock_close.assert_awaited_once()
