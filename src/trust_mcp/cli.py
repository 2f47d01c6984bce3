"""CLI interface for trust-mcp."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
import tomllib
from typing import Any

from trust_mcp.config import TrustMCPConfig, load_config, validate_config
from trust_mcp.dispatcher import Dispatcher
from trust_mcp.models import ToolResult
from trust_mcp.registry_client import RegistryClient
from trust_mcp.tools import TOOLS

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(
		prog="trust-mcp",
		description="Trust registry tools for AI agents over MCP",
	)
	parser.add_argument("--config", default=None, help="Path to a trust-mcp.toml file")
	parser.add_argument("--log-level", default=None, help="Override server.log_level (e.g. DEBUG)")
	sub = parser.add_subparsers(dest="command")

	# trust-mcp serve
	sub.add_parser("serve", help="Start the MCP server on stdio (default)")

	# trust-mcp tools
	sub.add_parser("tools", help="Print the tool catalog as JSON")

	# trust-mcp call
	call = sub.add_parser("call", help="Invoke one tool against the registry and print the result")
	call.add_argument("tool", help="Tool name, e.g. trust_lookup")
	call.add_argument("--args", default="{}", help="Tool arguments as a JSON object")

	# trust-mcp validate-config
	sub.add_parser("validate-config", help="Check configuration for problems")

	return parser


def cmd_serve(args: argparse.Namespace, config: TrustMCPConfig) -> int:
	"""Start the MCP server."""
	from trust_mcp.mcp_server import run_mcp_server

	run_mcp_server(config)
	return 0


def cmd_tools(args: argparse.Namespace, config: TrustMCPConfig) -> int:
	catalog = [tool.model_dump(exclude_none=True) for tool in TOOLS]
	print(json.dumps(catalog, indent=2, ensure_ascii=False))
	return 0


async def _invoke_once(config: TrustMCPConfig, tool: str, arguments: dict[str, Any]) -> ToolResult:
	async with RegistryClient(config.registry) as client:
		return await Dispatcher(client).invoke(tool, arguments)


def cmd_call(args: argparse.Namespace, config: TrustMCPConfig) -> int:
	"""Run a single tool call, mostly for poking at a registry by hand."""
	try:
		arguments = json.loads(args.args)
	except json.JSONDecodeError as e:
		print(f"Invalid --args JSON: {e}")
		return 1
	if not isinstance(arguments, dict):
		print("--args must be a JSON object")
		return 1

	result = asyncio.run(_invoke_once(config, args.tool, arguments))
	print(result.text)
	return 1 if result.is_error else 0


def cmd_validate_config(args: argparse.Namespace, config: TrustMCPConfig) -> int:
	issues = validate_config(config)
	for level, msg in issues:
		print(f"[{level.upper()}] {msg}")

	if not issues:
		print("Config OK")

	errors = [i for i in issues if i[0] == "error"]
	return 1 if errors else 0


COMMANDS = {
	"serve": cmd_serve,
	"tools": cmd_tools,
	"call": cmd_call,
	"validate-config": cmd_validate_config,
}


def main(argv: list[str] | None = None) -> int:
	parser = build_parser()
	args = parser.parse_args(argv)

	try:
		config = load_config(args.config)
	except (FileNotFoundError, tomllib.TOMLDecodeError, ValueError) as e:
		print(f"Error: {e}", file=sys.stderr)
		return 1

	if args.log_level:
		config.server.log_level = args.log_level.upper()
	level = logging.getLevelName(config.server.log_level)
	# stdout carries the MCP stream, so logs go to stderr
	logging.basicConfig(
		level=level if isinstance(level, int) else logging.INFO,
		format="%(asctime)s %(levelname)s %(name)s: %(message)s",
		datefmt="%H:%M:%S",
		stream=sys.stderr,
		force=True,
	)

	handler = COMMANDS[args.command or "serve"]
	return handler(args, config)


if __name__ == "__main__":
	sys.exit(main())
