"""
Tier classification for Aura scores.

Tiers are a static table scanned from the highest threshold down; the first
tier whose minimum the score reaches wins.
"""

from typing import Tuple

from .models import AuraTier, AuraTierInfo

AURA_TIERS: Tuple[AuraTierInfo, ...] = (
    AuraTierInfo(
        tier=AuraTier.LEGENDARY,
        label="Legendary Aura",
        min_score=850,
        description="You are the gold standard of DeFi trustworthiness.",
    ),
    AuraTierInfo(
        tier=AuraTier.STRONG,
        label="Strong Aura",
        min_score=700,
        description="Reliable borrower with an excellent track record.",
    ),
    AuraTierInfo(
        tier=AuraTier.RISING,
        label="Rising Aura",
        min_score=550,
        description="Building a solid reputation on-chain.",
    ),
    AuraTierInfo(
        tier=AuraTier.NEUTRAL,
        label="Neutral Aura",
        min_score=400,
        description="Average history. Room to grow.",
    ),
    AuraTierInfo(
        tier=AuraTier.WEAK,
        label="Weak Aura",
        min_score=200,
        description="Concerning patterns detected. Improve your repayments.",
    ),
    AuraTierInfo(
        tier=AuraTier.BROKEN,
        label="Broken Aura",
        min_score=0,
        description="Major trust issues. Defaults are killing your score.",
    ),
)

# Only reachable for values below every threshold, i.e. outside [0, 1000]
UNRANKED_TIER = AuraTierInfo(
    tier=AuraTier.UNRANKED,
    label="Unranked",
    min_score=0,
    description="No reputation data available.",
)


def get_tier_for_score(score: int) -> AuraTierInfo:
    """Return the tier for a score (850 is Legendary, 849 is Strong)."""
    for tier in AURA_TIERS:
        if score >= tier.min_score:
            return tier
    return UNRANKED_TIER
