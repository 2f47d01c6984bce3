"""Display templates turning registry answers into tool result text."""

from __future__ import annotations

from typing import Any

from trust_mcp.models import AgentSummary, Chain, RegistryResponse, ToolResult
from trust_mcp.tiers import advice, get_tier


def fmt_score(score: float) -> str:
	return f"{score:g}"


def failure(action: str, message: str) -> ToolResult:
	return ToolResult(text=f"❌ {action} failed: {message}", is_error=True)


def score_of(resp: RegistryResponse) -> float:
	"""Composite score from a /v1/trust answer.

	The registry reports either {"trust_score": {"total": n}}, a bare
	number under trust_score or score, or the agent record's own score.
	"""
	composite = resp.child("trust_score")
	if composite.body:
		return composite.get_float("total")
	agent_score = resp.child("agent").get_float("trust_score")
	return resp.get_float("trust_score", resp.get_float("score", agent_score))


def name_of(resp: RegistryResponse) -> str:
	return resp.get_str("name") or resp.child("agent").get_str("name")


def render_lookup(name: str, score: float, agent_id: str, base_url: str) -> ToolResult:
	tier = get_tier(score)
	text = (
		f"{tier.badge} **{name or agent_id}**\n\n"
		f"Trust Score: {fmt_score(score)}/100 ({tier.label})\n\n"
		f"{advice(score)}\n\n"
		f"Details: {base_url}/registry/agent/{agent_id}"
	)
	return ToolResult(text=text)


def render_not_found(query: str, base_url: str) -> ToolResult:
	text = (
		f'⚠️ Agent "{query}" not found in registry.\n\n'
		f"This agent is UNVERIFIED. Proceed with caution or ask them to register at {base_url}"
	)
	return ToolResult(text=text)


def render_register(resp: RegistryResponse) -> ToolResult:
	agent_id = resp.get_str("agent_id")
	if not agent_id:
		return failure("Registration", resp.get_str("error") or "Unknown error")

	steps = []
	for step in resp.get_list("next_steps"):
		if isinstance(step, dict) and step.get("action"):
			steps.append(f"- {step['action']} ({step.get('points', '?')})")
	next_steps = "\n".join(steps) or "- Add Lightning pubkey\n- Get verified reviews"

	text = (
		"✅ Registered successfully!\n\n"
		f"Agent ID: {agent_id}\n"
		f"Trust Score: {fmt_score(resp.get_float('trust_score', 5))}/100\n"
		f"Badge: {resp.get_str('badge') or '⚪'}\n\n"
		f"Next steps to increase your score:\n{next_steps}"
	)
	return ToolResult(text=text)


def render_review(resp: RegistryResponse, verified: bool) -> ToolResult:
	if not resp.get_bool("success"):
		return failure("Review", resp.get_str("error") or "Unknown error")
	suffix = " (VERIFIED with proof-of-payment)" if verified else ""
	return ToolResult(text=f"✅ Review submitted{suffix}!")


def _agent_line(agent: AgentSummary) -> str:
	tier = get_tier(agent.trust_score)
	line = f"{tier.badge} {agent.name or agent.id} ({fmt_score(agent.trust_score)}/100)"
	if agent.verified:
		line += " [verified]"
	return line


def render_agent_list(agents: list[AgentSummary], total: int | None, base_url: str) -> ToolResult:
	listing = "\n".join(_agent_line(a) for a in agents) or "No agents registered yet."
	heading = f"**Registered Agents ({len(agents)})**"
	if total is not None and total != len(agents):
		heading = f"**Registered Agents ({len(agents)} of {total})**"
	return ToolResult(text=f"{heading}\n\n{listing}\n\nRegistry: {base_url}")


def render_search(agents: list[AgentSummary], query: str | None) -> ToolResult:
	if not agents:
		return ToolResult(text="No agents found matching your search.")
	heading = f'**Search results for "{query}" ({len(agents)})**' if query else f"**Search results ({len(agents)})**"
	lines = []
	for agent in agents:
		line = _agent_line(agent)
		if agent.capabilities:
			line += f" - {', '.join(agent.capabilities)}"
		lines.append(line)
	return ToolResult(text=heading + "\n\n" + "\n".join(lines))


_SIGNING_HINTS: dict[Chain, str] = {
	Chain.LIGHTNING: "Sign it with `lncli signmessage` using your node key.",
	Chain.NOSTR: "Sign it as a kind-1 note content with your nsec.",
	Chain.ETHEREUM: "Sign it with personal_sign from your wallet.",
}


def render_challenge(resp: RegistryResponse, chain: Chain) -> ToolResult:
	challenge = resp.get_str("challenge")
	if not challenge:
		return failure("Challenge", resp.get_str("error") or "Registry returned no challenge")
	lines = [
		f"🔐 {chain.value} challenge issued\n",
		f"Challenge: {challenge}",
	]
	expires = resp.get_str("expires_at")
	if expires:
		lines.append(f"Expires: {expires}")
	lines.append("")
	lines.append(resp.get_str("instructions") or _SIGNING_HINTS[chain])
	lines.append("Then call trust_verify with the signature.")
	return ToolResult(text="\n".join(lines))


def render_verify(resp: RegistryResponse, chain: Chain) -> ToolResult:
	if not resp.get_bool("verified", resp.get_bool("success")):
		return failure("Verification", resp.get_str("error") or resp.get_str("reason") or "Signature not accepted")
	text = f"✅ {chain.value} identity verified!"
	if "trust_score" in resp.body:
		text += f"\n\nNew Trust Score: {fmt_score(score_of(resp))}/100"
	return ToolResult(text=text)


def _submission(title: str, resp: RegistryResponse, id_key: str, extras: list[tuple[str, str]]) -> ToolResult:
	lines = [f"✅ {title}"]
	record_id = resp.get_str(id_key) or resp.get_str("id")
	if record_id:
		lines.append(f"\nID: {record_id}")
	for label, key in extras:
		value: Any = resp.body.get(key)
		if isinstance(value, (str, int, float)) and not isinstance(value, bool) and value != "":
			lines.append(f"{label}: {value}")
	return ToolResult(text="\n".join(lines))


def render_evidence(resp: RegistryResponse) -> ToolResult:
	return _submission("Evidence submitted!", resp, "evidence_id", [("Status", "status"), ("Points", "points")])


def render_dispute(resp: RegistryResponse) -> ToolResult:
	return _submission("Dispute opened.", resp, "dispute_id", [("Status", "status")])


def render_endorsement(resp: RegistryResponse) -> ToolResult:
	return _submission("Endorsement recorded!", resp, "endorsement_id", [("Weight", "weight")])


def render_transaction(resp: RegistryResponse) -> ToolResult:
	return _submission("Transaction recorded!", resp, "transaction_id", [("Status", "status")])


def render_history(resp: RegistryResponse, agent_id: str) -> ToolResult:
	entries = [e for e in resp.get_list("history") if isinstance(e, dict)]
	if not entries:
		return ToolResult(text=f"No score history recorded for {agent_id}.")
	lines = [f"**Trust history for {agent_id} ({len(entries)})**", ""]
	for raw in entries:
		entry = RegistryResponse(status_code=resp.status_code, body=raw)
		score = entry.get_float("score", entry.get_float("total"))
		when = entry.get_str("timestamp") or entry.get_str("recorded_at") or "?"
		reason = entry.get_str("reason") or entry.get_str("event")
		line = f"- {when}: {get_tier(score).badge} {fmt_score(score)}/100"
		if reason:
			line += f" ({reason})"
		lines.append(line)
	return ToolResult(text="\n".join(lines))
