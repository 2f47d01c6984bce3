"""Tests for CLI argument parsing and commands."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from trust_mcp.cli import build_parser, main
from trust_mcp.config import REGISTRY_URL_ENV
from trust_mcp.models import ToolName, ToolResult


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
	monkeypatch.delenv(REGISTRY_URL_ENV, raising=False)


class TestArgParsing:
	def test_call_defaults(self) -> None:
		args = build_parser().parse_args(["call", "trust_lookup"])
		assert args.command == "call"
		assert args.tool == "trust_lookup"
		assert args.args == "{}"

	def test_global_options(self) -> None:
		args = build_parser().parse_args(["--config", "x.toml", "--log-level", "debug", "tools"])
		assert args.config == "x.toml"
		assert args.log_level == "debug"

	def test_no_command_serves(self) -> None:
		with patch("trust_mcp.mcp_server.run_mcp_server") as mock_run:
			assert main([]) == 0
		mock_run.assert_called_once()

	def test_missing_config_file(self, tmp_path: Path) -> None:
		assert main(["--config", str(tmp_path / "nope.toml"), "tools"]) == 1

	def test_non_numeric_timeout(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
		toml = tmp_path / "trust-mcp.toml"
		toml.write_text('[registry]\ntimeout = "soon"\n')
		assert main(["--config", str(toml), "tools"]) == 1
		assert "Error:" in capsys.readouterr().err


class TestTools:
	def test_prints_catalog(self, capsys: pytest.CaptureFixture[str]) -> None:
		assert main(["tools"]) == 0
		catalog = json.loads(capsys.readouterr().out)
		assert {t["name"] for t in catalog} == {t.value for t in ToolName}
		assert all("inputSchema" in t for t in catalog)


class TestCall:
	def test_success(self, capsys: pytest.CaptureFixture[str]) -> None:
		with patch("trust_mcp.cli._invoke_once", new_callable=MagicMock) as mock_invoke:
			mock_invoke.return_value = _coro(ToolResult(text="✅ Review submitted!"))
			code = main(["call", "trust_review", "--args", '{"agent_id": "a1", "rating": 5, "comment": "ok"}'])

		assert code == 0
		assert capsys.readouterr().out.strip() == "✅ Review submitted!"
		_, tool, arguments = mock_invoke.call_args[0]
		assert tool == "trust_review"
		assert arguments == {"agent_id": "a1", "rating": 5, "comment": "ok"}

	def test_error_result_exits_1(self) -> None:
		with patch("trust_mcp.cli._invoke_once", new_callable=MagicMock) as mock_invoke:
			mock_invoke.return_value = _coro(ToolResult(text="Unknown tool: x", is_error=True))
			assert main(["call", "x"]) == 1

	def test_invalid_json(self, capsys: pytest.CaptureFixture[str]) -> None:
		assert main(["call", "trust_list", "--args", "{oops"]) == 1
		assert "Invalid --args JSON" in capsys.readouterr().out

	def test_args_must_be_object(self) -> None:
		assert main(["call", "trust_list", "--args", "[1, 2]"]) == 1


class TestValidateConfig:
	def test_ok(self, capsys: pytest.CaptureFixture[str]) -> None:
		assert main(["validate-config"]) == 0
		assert "Config OK" in capsys.readouterr().out

	def test_bad_env_url(self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
		monkeypatch.setenv(REGISTRY_URL_ENV, "registry.local")
		assert main(["validate-config"]) == 1
		assert "[ERROR]" in capsys.readouterr().out

	def test_warning_only_exits_0(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
		toml = tmp_path / "trust-mcp.toml"
		toml.write_text('[server]\nlog_level = "loud"\n')
		assert main(["--config", str(toml), "validate-config"]) == 0
		assert "[WARNING]" in capsys.readouterr().out


async def _coro(value: ToolResult) -> ToolResult:
	return value
