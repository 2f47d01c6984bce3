"""Data models for tool invocations and registry responses."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, ValidationError, field_validator

logger = logging.getLogger(__name__)


class ToolName(str, Enum):
	"""Tools advertised to the MCP host."""

	LOOKUP = "trust_lookup"
	REGISTER = "trust_register"
	REVIEW = "trust_review"
	LIST = "trust_list"
	SEARCH = "trust_search"
	CHALLENGE = "trust_challenge"
	VERIFY = "trust_verify"
	EVIDENCE = "trust_evidence"
	DISPUTE = "trust_dispute"
	ENDORSE = "trust_endorse"
	TRANSACTION = "trust_transaction"
	HISTORY = "trust_history"


class Chain(str, Enum):
	"""Identity chains the registry can issue challenges for."""

	LIGHTNING = "lightning"
	NOSTR = "nostr"
	ETHEREUM = "ethereum"


# Identity field forwarded to /registry/verify/{chain}, per chain
CHAIN_IDENTITY_FIELD: dict[Chain, str] = {
	Chain.LIGHTNING: "pubkey",
	Chain.NOSTR: "npub",
	Chain.ETHEREUM: "address",
}

EVIDENCE_TYPES: tuple[str, ...] = ("github", "website", "domain", "social", "lightning_node", "other")
TRANSACTION_OUTCOMES: tuple[str, ...] = ("success", "failed", "disputed")


@dataclass
class ToolResult:
	"""Rendered outcome of one tool call."""

	text: str
	is_error: bool = False


@dataclass
class RegistryResponse:
	"""HTTP status plus the loosely-typed JSON body of a registry answer.

	Accessors return the given default when a field is missing or has the
	wrong JSON type. No coercion is attempted: "42" is not a number and
	True is not an int.
	"""

	status_code: int
	body: dict[str, Any] = field(default_factory=dict)

	@property
	def ok(self) -> bool:
		return 200 <= self.status_code < 300

	def get_str(self, key: str, default: str = "") -> str:
		value = self.body.get(key)
		return value if isinstance(value, str) else default

	def get_float(self, key: str, default: float = 0.0) -> float:
		value = self.body.get(key)
		if isinstance(value, bool) or not isinstance(value, (int, float)):
			return default
		return float(value)

	def get_int(self, key: str, default: int = 0) -> int:
		value = self.body.get(key)
		if isinstance(value, bool) or not isinstance(value, int):
			return default
		return value

	def get_bool(self, key: str, default: bool = False) -> bool:
		value = self.body.get(key)
		return value if isinstance(value, bool) else default

	def get_list(self, key: str) -> list[Any]:
		value = self.body.get(key)
		return value if isinstance(value, list) else []

	def get_dict(self, key: str) -> dict[str, Any]:
		value = self.body.get(key)
		return value if isinstance(value, dict) else {}

	def child(self, key: str) -> RegistryResponse:
		"""Nested object under key, wrapped with the same status."""
		return RegistryResponse(status_code=self.status_code, body=self.get_dict(key))

	def error_message(self) -> str:
		"""Registry-supplied error text, or the HTTP status as fallback."""
		return self.get_str("error") or self.get_str("message") or f"HTTP {self.status_code}"


class AgentSummary(BaseModel, extra="ignore"):
	"""One agent entry from /registry/agents or /registry/search."""

	id: str = ""
	name: str = ""
	trust_score: float = 0.0
	lightning_pubkey: str | None = None
	verified: bool = False
	capabilities: list[str] = []

	@field_validator("id", "name", mode="before")
	@classmethod
	def _blank_if_null(cls, value: Any) -> Any:
		if value is None:
			return ""
		if isinstance(value, int) and not isinstance(value, bool):
			return str(value)
		return value

	@field_validator("verified", mode="before")
	@classmethod
	def _false_if_null(cls, value: Any) -> Any:
		return False if value is None else value

	@field_validator("capabilities", mode="before")
	@classmethod
	def _empty_if_null(cls, value: Any) -> Any:
		return [] if value is None else value

	@field_validator("trust_score", mode="before")
	@classmethod
	def _unwrap_score(cls, value: Any) -> Any:
		# Some endpoints nest the composite as {"total": n, ...}
		if isinstance(value, dict):
			return value.get("total", 0.0)
		if value is None:
			return 0.0
		return value


def parse_agents(entries: list[Any]) -> list[AgentSummary]:
	"""Validate agent entries, skipping the ones that don't fit."""
	agents: list[AgentSummary] = []
	for entry in entries:
		try:
			agents.append(AgentSummary.model_validate(entry))
		except ValidationError as exc:
			logger.warning("Skipping malformed agent entry: %s", exc.errors()[0].get("msg", exc))
	return agents
