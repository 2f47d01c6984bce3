"""Tool dispatcher: tool call -> registry request(s) -> rendered ToolResult."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from trust_mcp.models import (
	CHAIN_IDENTITY_FIELD,
	AgentSummary,
	Chain,
	RegistryResponse,
	ToolName,
	ToolResult,
	parse_agents,
)
from trust_mcp.registry_client import RegistryClient, RegistryError, path_segment
from trust_mcp.rendering import (
	failure,
	name_of,
	render_agent_list,
	render_challenge,
	render_dispute,
	render_endorsement,
	render_evidence,
	render_history,
	render_lookup,
	render_not_found,
	render_register,
	render_review,
	render_search,
	render_transaction,
	render_verify,
	score_of,
)

logger = logging.getLogger(__name__)

DEFAULT_LIST_LIMIT = 20

Handler = Callable[[dict[str, Any]], Awaitable[ToolResult]]

# Verb used in "❌ <action> failed: ..." texts
ACTIONS: dict[ToolName, str] = {
	ToolName.LOOKUP: "Lookup",
	ToolName.REGISTER: "Registration",
	ToolName.REVIEW: "Review",
	ToolName.LIST: "Agent listing",
	ToolName.SEARCH: "Search",
	ToolName.CHALLENGE: "Challenge",
	ToolName.VERIFY: "Verification",
	ToolName.EVIDENCE: "Evidence submission",
	ToolName.DISPUTE: "Dispute",
	ToolName.ENDORSE: "Endorsement",
	ToolName.TRANSACTION: "Transaction recording",
	ToolName.HISTORY: "History",
}


def _opt_str(args: dict[str, Any], key: str) -> str | None:
	value = args.get(key)
	if isinstance(value, str):
		return value.strip() or None
	if isinstance(value, (int, float)) and not isinstance(value, bool):
		return str(value)
	return None


def _opt_num(args: dict[str, Any], key: str) -> int | float | None:
	value = args.get(key)
	if isinstance(value, bool) or not isinstance(value, (int, float)):
		return None
	if isinstance(value, float) and value.is_integer():
		return int(value)
	return value


def _opt_bool(args: dict[str, Any], key: str) -> bool | None:
	value = args.get(key)
	return value if isinstance(value, bool) else None


def _opt_str_list(args: dict[str, Any], key: str) -> list[str] | None:
	value = args.get(key)
	if not isinstance(value, list):
		return None
	items = [v.strip() for v in value if isinstance(v, str) and v.strip()]
	return items or None


def _chain(args: dict[str, Any]) -> Chain | None:
	try:
		return Chain(_opt_str(args, "chain") or "")
	except ValueError:
		return None


def _missing(action: str, *fields: str) -> ToolResult:
	return failure(action, f"missing required argument(s): {', '.join(fields)}")


class Dispatcher:
	"""Routes a tool invocation to its handler.

	Stateless apart from the shared RegistryClient; every call is
	independent of every other.
	"""

	def __init__(self, client: RegistryClient) -> None:
		self._client = client
		self._handlers: dict[ToolName, Handler] = {
			ToolName.LOOKUP: self._lookup,
			ToolName.REGISTER: self._register,
			ToolName.REVIEW: self._review,
			ToolName.LIST: self._list,
			ToolName.SEARCH: self._search,
			ToolName.CHALLENGE: self._challenge,
			ToolName.VERIFY: self._verify,
			ToolName.EVIDENCE: self._evidence,
			ToolName.DISPUTE: self._dispute,
			ToolName.ENDORSE: self._endorse,
			ToolName.TRANSACTION: self._transaction,
			ToolName.HISTORY: self._history,
		}

	@property
	def handled_tools(self) -> frozenset[ToolName]:
		return frozenset(self._handlers)

	@property
	def base_url(self) -> str:
		return self._client.base_url

	async def invoke(self, name: str, arguments: dict[str, Any] | None) -> ToolResult:
		try:
			tool = ToolName(name)
		except ValueError:
			return ToolResult(text=f"Unknown tool: {name}", is_error=True)

		args = arguments if isinstance(arguments, dict) else {}
		try:
			return await self._handlers[tool](args)
		except RegistryError as exc:
			return failure(ACTIONS[tool], str(exc))
		except Exception:
			logger.exception("Unhandled error while running %s", name)
			return failure(ACTIONS[tool], "Unknown error")

	# -- Lookup --

	async def _lookup(self, args: dict[str, Any]) -> ToolResult:
		query = _opt_str(args, "agent_id")
		if not query:
			return _missing(ACTIONS[ToolName.LOOKUP], "agent_id")

		resp = await self._client.get(f"/v1/trust/{path_segment(query)}")
		if resp.ok:
			return render_lookup(name_of(resp), score_of(resp), query, self.base_url)

		logger.debug("Direct lookup of %r returned %d, searching by name", query, resp.status_code)
		match = await self._find_agent(query)
		if match is None:
			return render_not_found(query, self.base_url)
		if not match.id:
			return render_lookup(match.name, match.trust_score, query, self.base_url)

		resolved = await self._client.get(f"/v1/trust/{path_segment(match.id)}")
		if resolved.ok:
			return render_lookup(name_of(resolved) or match.name, score_of(resolved), match.id, self.base_url)
		return render_lookup(match.name, match.trust_score, match.id, self.base_url)

	async def _find_agent(self, query: str) -> AgentSummary | None:
		"""First listed agent whose name matches case-insensitively or whose id matches exactly."""
		resp = await self._client.get("/registry/agents")
		if not resp.ok:
			return None
		wanted = query.lower()
		for agent in parse_agents(resp.get_list("agents")):
			if agent.name.lower() == wanted or agent.id == query:
				return agent
		return None

	# -- Registration and reviews --

	async def _register(self, args: dict[str, Any]) -> ToolResult:
		action = ACTIONS[ToolName.REGISTER]
		name = _opt_str(args, "name")
		contact = _opt_str(args, "contact")
		if not name or not contact:
			return _missing(action, *[k for k, v in (("name", name), ("contact", contact)) if not v])

		resp = await self._client.post("/register", {
			"name": name,
			"contact": contact,
			"description": _opt_str(args, "description"),
			"lightning_pubkey": _opt_str(args, "lightning_pubkey"),
			"website": _opt_str(args, "website"),
			"capabilities": _opt_str_list(args, "capabilities"),
		})
		if not resp.ok:
			return failure(action, resp.error_message())
		return render_register(resp)

	async def _review(self, args: dict[str, Any]) -> ToolResult:
		action = ACTIONS[ToolName.REVIEW]
		agent_id = _opt_str(args, "agent_id")
		rating = _opt_num(args, "rating")
		if not agent_id:
			return _missing(action, "agent_id")
		if rating is None:
			return failure(action, "rating must be a number between 1 and 5")

		proof = _opt_str(args, "proof_of_payment")
		resp = await self._client.post("/registry/review", {
			"agent_id": agent_id,
			"rating": rating,
			"comment": _opt_str(args, "comment") or "",
			"reviewer_pubkey": _opt_str(args, "reviewer_pubkey"),
			"proof_of_payment": proof,
		})
		if not resp.ok:
			return failure(action, resp.error_message())
		return render_review(resp, verified=proof is not None)

	# -- Listing and search --

	async def _list(self, args: dict[str, Any]) -> ToolResult:
		limit = _opt_num(args, "limit")
		resp = await self._client.get("/registry/agents", {
			"page": _opt_num(args, "page"),
			"limit": limit,
		})
		if not resp.ok:
			return failure(ACTIONS[ToolName.LIST], resp.error_message())

		agents = parse_agents(resp.get_list("agents"))
		shown = int(limit) if limit is not None and limit >= 1 else DEFAULT_LIST_LIMIT
		agents = agents[:shown]
		total = resp.get_int("total") if "total" in resp.body else None
		return render_agent_list(agents, total, self.base_url)

	async def _search(self, args: dict[str, Any]) -> ToolResult:
		query = _opt_str(args, "q")
		resp = await self._client.get("/registry/search", {
			"q": query,
			"min_score": _opt_num(args, "min_score"),
			"has_lightning": _opt_bool(args, "has_lightning"),
			"verified": _opt_bool(args, "verified"),
			"capability": _opt_str(args, "capability"),
			"limit": _opt_num(args, "limit"),
		})
		if not resp.ok:
			return failure(ACTIONS[ToolName.SEARCH], resp.error_message())

		entries = resp.get_list("agents") or resp.get_list("results")
		return render_search(parse_agents(entries), query)

	# -- Identity verification --

	async def _challenge(self, args: dict[str, Any]) -> ToolResult:
		action = ACTIONS[ToolName.CHALLENGE]
		agent_id = _opt_str(args, "agent_id")
		chain = _chain(args)
		if not agent_id:
			return _missing(action, "agent_id")
		if chain is None:
			return failure(action, _unsupported_chain(args))

		resp = await self._client.get(f"/registry/challenge/{path_segment(agent_id)}/{chain.value}")
		if not resp.ok:
			return failure(action, resp.error_message())
		return render_challenge(resp, chain)

	async def _verify(self, args: dict[str, Any]) -> ToolResult:
		action = ACTIONS[ToolName.VERIFY]
		chain = _chain(args)
		if chain is None:
			return failure(action, _unsupported_chain(args))

		identity_field = CHAIN_IDENTITY_FIELD[chain]
		payload = {
			"agent_id": _opt_str(args, "agent_id"),
			"challenge": _opt_str(args, "challenge"),
			"signature": _opt_str(args, "signature"),
			identity_field: _opt_str(args, identity_field),
		}
		missing = [k for k, v in payload.items() if v is None]
		if missing:
			return _missing(action, *missing)

		resp = await self._client.post(f"/registry/verify/{chain.value}", payload)
		if not resp.ok:
			return failure(action, resp.error_message())
		return render_verify(resp, chain)

	# -- Evidence, disputes, endorsements, transactions --

	async def _evidence(self, args: dict[str, Any]) -> ToolResult:
		action = ACTIONS[ToolName.EVIDENCE]
		payload = {
			"agent_id": _opt_str(args, "agent_id"),
			"evidence_type": _opt_str(args, "evidence_type"),
			"value": _opt_str(args, "value"),
		}
		missing = [k for k, v in payload.items() if v is None]
		if missing:
			return _missing(action, *missing)

		payload["description"] = _opt_str(args, "description")
		payload["signature"] = _opt_str(args, "signature")
		return await self._submit(ToolName.EVIDENCE, "/registry/evidence/submit", payload)

	async def _dispute(self, args: dict[str, Any]) -> ToolResult:
		action = ACTIONS[ToolName.DISPUTE]
		agent_id = _opt_str(args, "agent_id")
		reason = _opt_str(args, "reason")
		if not agent_id or not reason:
			return _missing(action, *[k for k, v in (("agent_id", agent_id), ("reason", reason)) if not v])

		return await self._submit(ToolName.DISPUTE, "/registry/dispute", {
			"agent_id": agent_id,
			"reason": reason,
			"evidence": _opt_str(args, "evidence"),
			"reporter_id": _opt_str(args, "reporter_id"),
			"transaction_id": _opt_str(args, "transaction_id"),
		})

	async def _endorse(self, args: dict[str, Any]) -> ToolResult:
		action = ACTIONS[ToolName.ENDORSE]
		endorser_id = _opt_str(args, "endorser_id")
		agent_id = _opt_str(args, "agent_id")
		if not endorser_id or not agent_id:
			return _missing(action, *[k for k, v in (("endorser_id", endorser_id), ("agent_id", agent_id)) if not v])

		return await self._submit(ToolName.ENDORSE, "/registry/endorsement", {
			"endorser_id": endorser_id,
			"agent_id": agent_id,
			"comment": _opt_str(args, "comment"),
			"signature": _opt_str(args, "signature"),
		})

	async def _transaction(self, args: dict[str, Any]) -> ToolResult:
		action = ACTIONS[ToolName.TRANSACTION]
		payload: dict[str, Any] = {
			"agent_id": _opt_str(args, "agent_id"),
			"counterparty_id": _opt_str(args, "counterparty_id"),
			"amount_sats": _opt_num(args, "amount_sats"),
			"outcome": _opt_str(args, "outcome"),
		}
		missing = [k for k, v in payload.items() if v is None]
		if missing:
			return _missing(action, *missing)

		payload["description"] = _opt_str(args, "description")
		payload["payment_hash"] = _opt_str(args, "payment_hash")
		return await self._submit(ToolName.TRANSACTION, "/registry/transaction", payload)

	async def _submit(self, tool: ToolName, path: str, payload: dict[str, Any]) -> ToolResult:
		resp = await self._client.post(path, payload)
		if not resp.ok:
			return failure(ACTIONS[tool], resp.error_message())
		return _SUBMISSION_RENDERERS[tool](resp)

	# -- History --

	async def _history(self, args: dict[str, Any]) -> ToolResult:
		action = ACTIONS[ToolName.HISTORY]
		agent_id = _opt_str(args, "agent_id")
		if not agent_id:
			return _missing(action, "agent_id")

		resp = await self._client.get(
			f"/v1/trust/{path_segment(agent_id)}/history",
			{"limit": _opt_num(args, "limit")},
		)
		if not resp.ok:
			return failure(action, resp.error_message())
		return render_history(resp, agent_id)


_SUBMISSION_RENDERERS: dict[ToolName, Callable[[RegistryResponse], ToolResult]] = {
	ToolName.EVIDENCE: render_evidence,
	ToolName.DISPUTE: render_dispute,
	ToolName.ENDORSE: render_endorsement,
	ToolName.TRANSACTION: render_transaction,
}


def _unsupported_chain(args: dict[str, Any]) -> str:
	supported = ", ".join(c.value for c in Chain)
	return f"unsupported chain {args.get('chain')!r} (expected one of: {supported})"
