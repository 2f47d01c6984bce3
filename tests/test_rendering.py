"""Tests for result text templates."""

from __future__ import annotations

from trust_mcp.models import AgentSummary, Chain, RegistryResponse
from trust_mcp.rendering import (
	fmt_score,
	render_agent_list,
	render_challenge,
	render_lookup,
	render_not_found,
	render_review,
	render_search,
	score_of,
)


class TestScoreOf:
	def test_composite_total(self) -> None:
		assert score_of(RegistryResponse(200, {"trust_score": {"total": 73, "reviews": 30}})) == 73

	def test_bare_trust_score(self) -> None:
		assert score_of(RegistryResponse(200, {"trust_score": 41})) == 41

	def test_score_key(self) -> None:
		assert score_of(RegistryResponse(200, {"score": 12.5})) == 12.5

	def test_nested_agent_score(self) -> None:
		assert score_of(RegistryResponse(200, {"agent": {"name": "Fresh", "trust_score": 55}})) == 55

	def test_missing(self) -> None:
		assert score_of(RegistryResponse(200, {})) == 0


class TestFormatting:
	def test_fmt_score_drops_trailing_zero(self) -> None:
		assert fmt_score(58.0) == "58"
		assert fmt_score(58.25) == "58.25"

	def test_lookup_template(self) -> None:
		result = render_lookup("Bot", 80, "id-1", "https://r.test")
		assert result.text == (
			"🏆 **Bot**\n\n"
			"Trust Score: 80/100 (Highly Trusted)\n\n"
			"✅ Safe to transact\n\n"
			"Details: https://r.test/registry/agent/id-1"
		)
		assert not result.is_error

	def test_not_found_is_not_error(self) -> None:
		result = render_not_found("ghost", "https://r.test")
		assert not result.is_error
		assert "UNVERIFIED" in result.text

	def test_review_plain(self) -> None:
		assert render_review(RegistryResponse(200, {"success": True}), verified=False).text == "✅ Review submitted!"

	def test_review_without_success_flag_fails(self) -> None:
		result = render_review(RegistryResponse(200, {}), verified=False)
		assert result.is_error
		assert result.text.startswith("❌ Review failed:")

	def test_review_verified(self) -> None:
		text = render_review(RegistryResponse(200, {"success": True}), verified=True).text
		assert "(VERIFIED" in text

	def test_agent_list_falls_back_to_id(self) -> None:
		result = render_agent_list([AgentSummary(id="anon-1")], None, "https://r.test")
		assert "⚪ anon-1 (0/100)" in result.text

	def test_search_without_query(self) -> None:
		result = render_search([AgentSummary(id="a", name="Bot", trust_score=20)], None)
		assert result.text.startswith("**Search results (1)**")

	def test_search_empty(self) -> None:
		assert render_search([], "x").text == "No agents found matching your search."

	def test_challenge_prefers_registry_instructions(self) -> None:
		resp = RegistryResponse(200, {"challenge": "abc", "instructions": "Sign with your node."})
		text = render_challenge(resp, Chain.LIGHTNING).text
		assert "Sign with your node." in text
		assert "lncli" not in text
		assert "Expires" not in text
