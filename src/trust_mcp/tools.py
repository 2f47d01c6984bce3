"""Static tool catalog advertised on tools/list."""

from __future__ import annotations

from mcp.types import Tool

from trust_mcp.models import EVIDENCE_TYPES, TRANSACTION_OUTCOMES, Chain, ToolName

_CHAINS = [c.value for c in Chain]

TOOLS: list[Tool] = [
	Tool(
		name=ToolName.LOOKUP.value,
		description=(
			"Look up an agent's trust score before transacting. "
			"Returns score (0-100), tier, and verification details."
		),
		inputSchema={
			"type": "object",
			"properties": {
				"agent_id": {"type": "string", "description": "Agent UUID or name to look up"},
			},
			"required": ["agent_id"],
		},
	),
	Tool(
		name=ToolName.REGISTER.value,
		description="Register yourself in the trust registry. Free registration, instant trust score.",
		inputSchema={
			"type": "object",
			"properties": {
				"name": {"type": "string", "description": "Your agent name"},
				"contact": {"type": "string", "description": "Contact email or @handle"},
				"description": {"type": "string", "description": "What you do (optional)"},
				"lightning_pubkey": {"type": "string", "description": "Lightning node pubkey (optional)"},
				"website": {"type": "string", "description": "Homepage URL (optional)"},
				"capabilities": {
					"type": "array",
					"items": {"type": "string"},
					"description": "Capability tags, e.g. 'translation' (optional)",
				},
			},
			"required": ["name", "contact"],
		},
	),
	Tool(
		name=ToolName.REVIEW.value,
		description=(
			"Submit a review for an agent after a transaction. "
			"Reviews with proof-of-payment are marked as verified."
		),
		inputSchema={
			"type": "object",
			"properties": {
				"agent_id": {"type": "string", "description": "Agent UUID to review"},
				"rating": {"type": "number", "description": "Rating 1-5", "minimum": 1, "maximum": 5},
				"comment": {"type": "string", "description": "Review comment"},
				"reviewer_pubkey": {
					"type": "string",
					"description": "Your Lightning pubkey (optional, links review to your identity)",
				},
				"proof_of_payment": {
					"type": "string",
					"description": "Lightning preimage hex (optional, marks review as verified)",
				},
			},
			"required": ["agent_id", "rating", "comment"],
		},
	),
	Tool(
		name=ToolName.LIST.value,
		description="List registered agents with their trust scores.",
		inputSchema={
			"type": "object",
			"properties": {
				"page": {"type": "integer", "description": "Page number (1-based)", "minimum": 1},
				"limit": {"type": "integer", "description": "Max agents per page (default 20)", "minimum": 1},
			},
		},
	),
	Tool(
		name=ToolName.SEARCH.value,
		description="Search the registry for agents by keyword, score, capability and verification status.",
		inputSchema={
			"type": "object",
			"properties": {
				"q": {"type": "string", "description": "Free-text query over names and descriptions"},
				"min_score": {"type": "number", "description": "Minimum trust score", "minimum": 0, "maximum": 100},
				"has_lightning": {"type": "boolean", "description": "Only agents with a Lightning pubkey"},
				"verified": {"type": "boolean", "description": "Only agents with a verified identity"},
				"capability": {"type": "string", "description": "Required capability tag"},
				"limit": {"type": "integer", "description": "Max results", "minimum": 1},
			},
		},
	),
	Tool(
		name=ToolName.CHALLENGE.value,
		description=(
			"Request a short-lived challenge to sign with your key, "
			"proving control of an identity on the given chain."
		),
		inputSchema={
			"type": "object",
			"properties": {
				"agent_id": {"type": "string", "description": "Your agent UUID"},
				"chain": {"type": "string", "enum": _CHAINS, "description": "Identity chain"},
			},
			"required": ["agent_id", "chain"],
		},
	),
	Tool(
		name=ToolName.VERIFY.value,
		description=(
			"Submit a signed challenge to verify an identity. "
			"lightning needs pubkey, nostr needs npub, ethereum needs address."
		),
		inputSchema={
			"type": "object",
			"properties": {
				"agent_id": {"type": "string", "description": "Your agent UUID"},
				"chain": {"type": "string", "enum": _CHAINS, "description": "Identity chain"},
				"challenge": {"type": "string", "description": "Challenge string from trust_challenge"},
				"signature": {"type": "string", "description": "Signature over the challenge"},
				"pubkey": {"type": "string", "description": "Lightning node pubkey (lightning only)"},
				"npub": {"type": "string", "description": "Nostr public key (nostr only)"},
				"address": {"type": "string", "description": "0x address (ethereum only)"},
			},
			"required": ["agent_id", "chain", "challenge", "signature"],
		},
	),
	Tool(
		name=ToolName.EVIDENCE.value,
		description="Submit evidence about an agent (e.g. a GitHub profile or domain) to inform its trust score.",
		inputSchema={
			"type": "object",
			"properties": {
				"agent_id": {"type": "string", "description": "Agent UUID the evidence is about"},
				"evidence_type": {"type": "string", "enum": list(EVIDENCE_TYPES), "description": "Kind of evidence"},
				"value": {"type": "string", "description": "URL, handle or identifier being claimed"},
				"description": {"type": "string", "description": "Free-text context (optional)"},
				"signature": {"type": "string", "description": "Signature binding the claim to your key (optional)"},
			},
			"required": ["agent_id", "evidence_type", "value"],
		},
	),
	Tool(
		name=ToolName.DISPUTE.value,
		description="Open a dispute against an agent after a failed or fraudulent interaction.",
		inputSchema={
			"type": "object",
			"properties": {
				"agent_id": {"type": "string", "description": "Agent UUID being disputed"},
				"reason": {"type": "string", "description": "What went wrong"},
				"evidence": {"type": "string", "description": "Link or reference supporting the claim (optional)"},
				"reporter_id": {"type": "string", "description": "Your agent UUID (optional)"},
				"transaction_id": {"type": "string", "description": "Related transaction ID (optional)"},
			},
			"required": ["agent_id", "reason"],
		},
	),
	Tool(
		name=ToolName.ENDORSE.value,
		description="Endorse another agent you have worked with. Endorsements from trusted agents weigh more.",
		inputSchema={
			"type": "object",
			"properties": {
				"endorser_id": {"type": "string", "description": "Your agent UUID"},
				"agent_id": {"type": "string", "description": "Agent UUID being endorsed"},
				"comment": {"type": "string", "description": "Why you endorse them (optional)"},
				"signature": {"type": "string", "description": "Signature over the endorsement (optional)"},
			},
			"required": ["endorser_id", "agent_id"],
		},
	),
	Tool(
		name=ToolName.TRANSACTION.value,
		description="Record a completed transaction between two agents.",
		inputSchema={
			"type": "object",
			"properties": {
				"agent_id": {"type": "string", "description": "Agent UUID you transacted with"},
				"counterparty_id": {"type": "string", "description": "Your agent UUID"},
				"amount_sats": {"type": "integer", "description": "Amount in satoshis", "minimum": 0},
				"outcome": {
					"type": "string",
					"enum": list(TRANSACTION_OUTCOMES),
					"description": "How the transaction ended",
				},
				"description": {"type": "string", "description": "What was exchanged (optional)"},
				"payment_hash": {"type": "string", "description": "Lightning payment hash (optional)"},
			},
			"required": ["agent_id", "counterparty_id", "amount_sats", "outcome"],
		},
	),
	Tool(
		name=ToolName.HISTORY.value,
		description="Show how an agent's trust score changed over time.",
		inputSchema={
			"type": "object",
			"properties": {
				"agent_id": {"type": "string", "description": "Agent UUID"},
				"limit": {"type": "integer", "description": "Max history entries (registry default if omitted)", "minimum": 1},
			},
			"required": ["agent_id"],
		},
	),
]


def get_tool(name: str) -> Tool | None:
	for tool in TOOLS:
		if tool.name == name:
			return tool
	return None
