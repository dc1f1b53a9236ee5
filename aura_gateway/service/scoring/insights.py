"""
Improvement tips derived from an Aura result.
"""

from typing import List

from .models import AuraResult, Tip
from .tiers import AURA_TIERS

LEGENDARY_THRESHOLD = AURA_TIERS[0].min_score


def improvement_tips(result: AuraResult) -> List[Tip]:
    """
    Suggest what the wallet owner can do to raise their score.

    Tips are ordered high, medium, low. A wallet without history gets the
    single "first loan" tip and nothing else.
    """
    m = result.metrics

    if not m.has_history:
        return [Tip("Take your first loan to start building your Aura score.", "high")]

    tips: List[Tip] = []

    if m.defaulted_bnpl_loans > 0:
        tips.append(Tip("Defaults heavily damage your score. Avoid missing payments.", "high"))
    if m.late_bnpl_loans > 0:
        tips.append(Tip(
            f"You have {m.late_bnpl_loans} overdue BNPL loan(s). "
            "Pay them ASAP to stop score damage.",
            "high",
        ))
    if m.late_nft_loans > 0:
        tips.append(Tip(
            f"You have {m.late_nft_loans} overdue NFT loan(s). Repay before liquidation.",
            "high",
        ))

    if m.collateral_locked > 0:
        tips.append(Tip(
            f"Claim your collateral on {m.collateral_locked} repaid loan(s) "
            "to boost your collateral score.",
            "medium",
        ))
    if m.total_bnpl_loans > 0 and m.total_nft_loans == 0:
        tips.append(Tip(
            "Try an NFT-backed loan to earn the Portfolio Diversity bonus (+50).",
            "medium",
        ))
    elif m.total_nft_loans > 0 and m.total_bnpl_loans == 0:
        tips.append(Tip(
            "Take a BNPL loan to earn the Portfolio Diversity bonus (+50).",
            "medium",
        ))

    if m.total_loans < 3:
        tips.append(Tip(
            "Take more loans and repay them to build your Borrowing Experience score.",
            "low",
        ))
    if result.score >= LEGENDARY_THRESHOLD:
        tips.append(Tip("Your Aura is Legendary! Keep up the flawless record.", "low"))

    return tips
