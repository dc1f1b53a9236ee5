"""
Factor Calculations for the Aura reputation engine.

This module turns AuraMetrics into the six named factors of the Aura score:
- Repayment Reliability (40%)
- Payment Discipline (25%)
- Borrowing Experience (15%)
- Portfolio Diversity (8%)
- Collateral Behavior (6%)
- NFT Lending Track Record (6%)

Each factor is clamped to its own range independently; the final score is
the base score plus the factor sum, clamped once more.
"""

import math
from typing import Tuple

from .models import AuraFactor, AuraMetrics
from .settings import ScoringSettings, scoring_settings

SECONDS_PER_DAY = 86400

REPAYMENT_RELIABILITY = "Repayment Reliability"
PAYMENT_DISCIPLINE = "Payment Discipline"
BORROWING_EXPERIENCE = "Borrowing Experience"
PORTFOLIO_DIVERSITY = "Portfolio Diversity"
COLLATERAL_BEHAVIOR = "Collateral Behavior"
NFT_TRACK_RECORD = "NFT Lending Track Record"

FACTOR_NAMES = (
    REPAYMENT_RELIABILITY,
    PAYMENT_DISCIPLINE,
    BORROWING_EXPERIENCE,
    PORTFOLIO_DIVERSITY,
    COLLATERAL_BEHAVIOR,
    NFT_TRACK_RECORD,
)

# (min_score, max_score, weight)
FACTOR_RANGES = {
    REPAYMENT_RELIABILITY: (-300, 200, "40%"),
    PAYMENT_DISCIPLINE: (-100, 150, "25%"),
    BORROWING_EXPERIENCE: (0, 100, "15%"),
    PORTFOLIO_DIVERSITY: (0, 50, "8%"),
    COLLATERAL_BEHAVIOR: (-50, 50, "6%"),
    NFT_TRACK_RECORD: (-50, 50, "6%"),
}

# Ratio ladder for Repayment Reliability, highest threshold first
REPAYMENT_LADDER = ((1.0, 200), (0.9, 170), (0.8, 130), (0.6, 60), (0.4, 0))
REPAYMENT_LADDER_FLOOR = -100

# Total-loan ladder for Borrowing Experience, highest threshold first
EXPERIENCE_LADDER = ((10, 100), (7, 80), (5, 60), (3, 40), (2, 25), (1, 10))


def clamp(value, lo, hi):
    """Clamp value into [lo, hi]."""
    return max(lo, min(hi, value))


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer with halves going up (12.5 -> 13).

    Python's round() uses banker's rounding (12.5 -> 12), which would shift
    scores by one point on exact halves. Only non-negative quantities are
    rounded by the factors, where half-up equals half-away-from-zero.
    """
    return int(math.floor(value + 0.5))


def _factor(name: str, description: str, raw: int) -> AuraFactor:
    min_score, max_score, weight = FACTOR_RANGES[name]
    return AuraFactor(
        name=name,
        description=description,
        score=clamp(raw, min_score, max_score),
        min_score=min_score,
        max_score=max_score,
        weight=weight,
    )


def score_repayment_reliability(metrics: AuraMetrics) -> AuraFactor:
    """
    Score the share of closed loans that were repaid.

    Algorithm:
        1. closed = repaid + defaulted, across BNPL and NFT
        2. No closed loans: 0
        3. Otherwise map the repaid ratio through the ladder
           (>=1.0: 200, >=0.9: 170, >=0.8: 130, >=0.6: 60, >=0.4: 0, else -100)
        4. Subtract 75 per default on top of the ladder value

    Business Rationale:
        Defaults are the strongest signal a lender has. The ladder rewards
        high ratios steeply, and the per-default penalty keeps a long clean
        record from hiding repeated defaults.
    """
    repaid = metrics.repaid_bnpl_loans + metrics.repaid_nft_loans
    defaulted = metrics.defaulted_bnpl_loans + metrics.defaulted_nft_loans
    closed = repaid + defaulted

    raw = 0
    if closed > 0:
        ratio = repaid / closed
        raw = REPAYMENT_LADDER_FLOOR
        for threshold, points in REPAYMENT_LADDER:
            if ratio >= threshold:
                raw = points
                break
        raw -= defaulted * 75

    return _factor(
        REPAYMENT_RELIABILITY,
        f"{repaid}/{closed} loans repaid, {defaulted} defaults",
        raw,
    )


def score_payment_discipline(metrics: AuraMetrics) -> AuraFactor:
    """
    Score installment completion and the state of currently active loans.

    Algorithm:
        1. base = round(paid / max_possible * 200) - 50 (0 without BNPL loans)
           100% -> +150, 50% -> +50, 25% -> 0
        2. -30 per overdue BNPL loan, -25 per overdue NFT loan
        3. +10 per on-time BNPL loan, +8 per on-time NFT loan
    """
    raw = 0
    if metrics.max_possible_installments > 0:
        ratio = metrics.total_installments_paid / metrics.max_possible_installments
        raw = round_half_up(ratio * 200) - 50

    raw -= metrics.late_bnpl_loans * 30
    raw -= metrics.late_nft_loans * 25
    raw += metrics.on_time_bnpl_loans * 10
    raw += metrics.on_time_nft_loans * 8

    overdue = metrics.late_bnpl_loans + metrics.late_nft_loans
    return _factor(
        PAYMENT_DISCIPLINE,
        f"{metrics.total_installments_paid}/{metrics.max_possible_installments} "
        f"installments paid, {overdue} overdue",
        raw,
    )


def account_age_bonus(
    metrics: AuraMetrics,
    now,
    settings: ScoringSettings = scoring_settings,
) -> int:
    """
    Points for the age of the wallet's first loan.

    Each completed period (30 days by default) adds a step of 5 points,
    capped at 20. A first loan dated after `now` yields a negative bonus,
    which the factor clamp absorbs.
    """
    if metrics.first_loan_timestamp <= 0:
        return 0
    age_days = (now - metrics.first_loan_timestamp) / SECONDS_PER_DAY
    periods = math.floor(age_days / settings.age_bonus_period_days)
    return min(settings.age_bonus_cap, periods * settings.age_bonus_per_period)


def score_borrowing_experience(
    metrics: AuraMetrics,
    now,
    settings: ScoringSettings = scoring_settings,
) -> AuraFactor:
    """Score how many loans the wallet has taken and how long ago it started."""
    total = metrics.total_loans

    raw = 0
    for threshold, points in EXPERIENCE_LADDER:
        if total >= threshold:
            raw = points
            break
    raw += account_age_bonus(metrics, now, settings)

    return _factor(BORROWING_EXPERIENCE, f"{total} total loans taken", raw)


def score_portfolio_diversity(metrics: AuraMetrics) -> AuraFactor:
    """Reward using both loan products: both 50, one 20, none 0."""
    has_bnpl = metrics.total_bnpl_loans > 0
    has_nft = metrics.total_nft_loans > 0

    if has_bnpl and has_nft:
        raw, description = 50, "Both BNPL & NFT loans used"
    elif has_bnpl:
        raw, description = 20, "BNPL only"
    elif has_nft:
        raw, description = 20, "NFT only"
    else:
        raw, description = 0, "No loans"

    return _factor(PORTFOLIO_DIVERSITY, description, raw)


def score_collateral_behavior(metrics: AuraMetrics) -> AuraFactor:
    """
    Score whether repaid BNPL collateral gets claimed back from the vault.

    Algorithm:
        1. No collateral events (claimed + locked + defaulted BNPL): 0
        2. round(claimed / max(1, repaid BNPL) * 50)
        3. -25 per defaulted BNPL loan (its collateral was liquidated)
    """
    raw = 0
    events = (
        metrics.collateral_claimed
        + metrics.collateral_locked
        + metrics.defaulted_bnpl_loans
    )
    if events > 0:
        claim_ratio = metrics.collateral_claimed / max(1, metrics.repaid_bnpl_loans)
        raw = round_half_up(claim_ratio * 50)
        raw -= metrics.defaulted_bnpl_loans * 25

    return _factor(
        COLLATERAL_BEHAVIOR,
        f"{metrics.collateral_claimed} claimed, {metrics.collateral_locked} still locked",
        raw,
    )


def score_nft_track_record(metrics: AuraMetrics) -> AuraFactor:
    """
    Score the repayment record on NFT-backed loans alone.

    Algorithm:
        1. No NFT loans: 0
        2. round(repaid / closed * 80) - 30 when any NFT loan is closed
           100% -> +50, 50% -> +10, 0% -> -30
        3. -20 per defaulted or liquidated NFT loan
    """
    if metrics.total_nft_loans == 0:
        return _factor(NFT_TRACK_RECORD, "No NFT lending history", 0)

    raw = 0
    closed = metrics.repaid_nft_loans + metrics.defaulted_nft_loans
    if closed > 0:
        raw = round_half_up(metrics.repaid_nft_loans / closed * 80) - 30
    # Applies even with nothing closed; defaults are closed loans so it is 0 there.
    raw -= metrics.defaulted_nft_loans * 20

    return _factor(
        NFT_TRACK_RECORD,
        f"{metrics.repaid_nft_loans}/{metrics.total_nft_loans} NFT loans repaid",
        raw,
    )


def compute_factors(
    metrics: AuraMetrics,
    now,
    settings: ScoringSettings = scoring_settings,
) -> Tuple[AuraFactor, ...]:
    """Compute all six factors in their fixed display order."""
    return (
        score_repayment_reliability(metrics),
        score_payment_discipline(metrics),
        score_borrowing_experience(metrics, now, settings),
        score_portfolio_diversity(metrics),
        score_collateral_behavior(metrics),
        score_nft_track_record(metrics),
    )
