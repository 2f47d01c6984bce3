"""TOML configuration loader for trust-mcp."""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

from trust_mcp import __version__

DEFAULT_REGISTRY_URL = "https://trustthenverify.com"
REGISTRY_URL_ENV = "TRUST_REGISTRY_URL"


@dataclass
class RegistryConfig:
	"""Remote registry connection settings."""

	url: str = DEFAULT_REGISTRY_URL
	timeout: float = 30.0  # seconds, applied to the whole request
	user_agent: str = f"trust-mcp/{__version__}"

	@property
	def base_url(self) -> str:
		return self.url.rstrip("/")


@dataclass
class ServerConfig:
	"""MCP server identity and logging."""

	name: str = "trust-mcp"
	version: str = __version__
	log_level: str = "INFO"


@dataclass
class TrustMCPConfig:
	"""Top-level trust-mcp configuration."""

	registry: RegistryConfig = field(default_factory=RegistryConfig)
	server: ServerConfig = field(default_factory=ServerConfig)


def _build_registry(data: dict[str, Any]) -> RegistryConfig:
	rc = RegistryConfig()
	if "url" in data:
		rc.url = str(data["url"])
	if "timeout" in data:
		rc.timeout = float(data["timeout"])
	if "user_agent" in data:
		rc.user_agent = str(data["user_agent"])
	return rc


def _build_server(data: dict[str, Any]) -> ServerConfig:
	sc = ServerConfig()
	if "name" in data:
		sc.name = str(data["name"])
	if "version" in data:
		sc.version = str(data["version"])
	if "log_level" in data:
		sc.log_level = str(data["log_level"]).upper()
	return sc


def load_config(path: str | Path | None = None) -> TrustMCPConfig:
	"""Build the configuration, optionally from a trust-mcp.toml file.

	The TRUST_REGISTRY_URL environment variable, when set and non-empty,
	overrides the registry URL from the file.

	Args:
		path: Optional path to a TOML config file.

	Returns:
		Parsed TrustMCPConfig.

	Raises:
		FileNotFoundError: If a path is given and the file doesn't exist.
		tomllib.TOMLDecodeError: If the file is invalid TOML.
	"""
	cfg = TrustMCPConfig()
	if path is not None:
		config_path = Path(path)
		if not config_path.exists():
			raise FileNotFoundError(f"Config file not found: {config_path}")

		with open(config_path, "rb") as f:
			data = tomllib.load(f)

		if "registry" in data:
			cfg.registry = _build_registry(data["registry"])
		if "server" in data:
			cfg.server = _build_server(data["server"])

	env_url = os.environ.get(REGISTRY_URL_ENV, "").strip()
	if env_url:
		cfg.registry.url = env_url
	return cfg


def validate_config(config: TrustMCPConfig) -> list[tuple[str, str]]:
	"""Perform semantic validation of a loaded TrustMCPConfig.

	Returns a list of (level, message) tuples where level is 'error' or 'warning'.
	"""
	issues: list[tuple[str, str]] = []

	parsed = urlparse(config.registry.url)
	if parsed.scheme not in ("http", "https") or not parsed.netloc:
		issues.append(("error", f"registry.url must be an http(s) URL, got {config.registry.url!r}"))

	if config.registry.timeout <= 0:
		issues.append(("error", f"registry.timeout must be positive, got {config.registry.timeout}"))

	if not isinstance(logging.getLevelName(config.server.log_level), int):
		issues.append(("warning", f"Unknown server.log_level {config.server.log_level!r}, INFO will be used"))

	return issues
