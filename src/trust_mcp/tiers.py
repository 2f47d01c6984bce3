"""Score-to-tier step function."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Tier:
	threshold: int
	label: str
	badge: str


# Ordered highest threshold first; the first tier the score reaches wins.
TIERS: tuple[Tier, ...] = (
	Tier(80, "Highly Trusted", "🏆"),
	Tier(60, "Trusted", "✅"),
	Tier(40, "Moderate", "🔵"),
	Tier(20, "New/Limited", "🟡"),
	Tier(0, "Unverified", "⚪"),
)

SAFE_THRESHOLD = 60
CAUTION_THRESHOLD = 40


def get_tier(score: float) -> Tier:
	"""Return the tier with the highest threshold <= score."""
	for tier in TIERS:
		if score >= tier.threshold:
			return tier
	return TIERS[-1]


def advice(score: float) -> str:
	if score >= SAFE_THRESHOLD:
		return "✅ Safe to transact"
	if score >= CAUTION_THRESHOLD:
		return "⚠️ Moderate trust - verify details"
	return "🚨 Low trust - proceed with caution"
