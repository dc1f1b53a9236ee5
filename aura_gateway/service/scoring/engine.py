"""
Aura Engine for the on-chain reputation score.

This module orchestrates the complete scoring process:
1. Validate the loan records and the evaluation timestamp
2. Aggregate the records into AuraMetrics
3. Compute the six factors
4. Combine them with the base score and clamp to [0, 1000]
5. Classify the score into a tier

This is the main entry point for the scoring module. It performs no I/O and
never reads the clock: the same records and "now" always give the same result.
"""

from typing import Sequence

from .aggregation import aggregate_metrics, validate_now
from .factors import clamp, compute_factors
from .models import (
    AuraMetrics,
    AuraResult,
    InvalidLoanHistoryError,
    LoanRecord,
    NFTLoanRecord,
)
from .settings import ScoringSettings, scoring_settings
from .tiers import get_tier_for_score


def compute_aura_score(
    bnpl_loans: Sequence[LoanRecord],
    nft_loans: Sequence[NFTLoanRecord],
    now,
    settings: ScoringSettings = scoring_settings,
) -> AuraResult:
    """
    Compute the Aura score of a wallet from its loan records.

    Missing History:
        A wallet with no loans is not an error. It scores exactly the base
        score (500) with all six factors at 0 and has_history=False, so the
        caller can tell "no history" apart from a failed computation.

    Args:
        bnpl_loans: All BNPL loans of the wallet
        nft_loans: All NFT-backed loans of the wallet
        now: Evaluation time in unix seconds (must be positive)
        settings: Scoring settings (uses defaults if not provided)

    Returns:
        AuraResult with score, tier, six factors and the metrics behind them

    Raises:
        InvalidLoanHistoryError: If the timestamp or any record is malformed
    """
    metrics = aggregate_metrics(bnpl_loans, nft_loans, now, settings)
    return score_metrics(metrics, now, settings)


def score_metrics(
    metrics: AuraMetrics,
    now,
    settings: ScoringSettings = scoring_settings,
) -> AuraResult:
    """
    Score already-aggregated metrics.

    Raises:
        InvalidLoanHistoryError: If the metrics are negative or inconsistent
    """
    errors = validate_now(now) + metrics.validate()
    if errors:
        raise InvalidLoanHistoryError(errors)

    factors = compute_factors(metrics, now, settings)
    raw_score = settings.base_score + sum(f.score for f in factors)
    score = clamp(raw_score, settings.score_floor, settings.score_ceiling)

    return AuraResult(
        score=score,
        tier=get_tier_for_score(score),
        factors=factors,
        metrics=metrics,
        evaluated_at=int(now),
    )


def explain_aura(result: AuraResult) -> str:
    """
    Render a human-readable explanation of a result for logs and support.

    Example:
        Aura score 745 (Strong Aura)
          Repayment Reliability: +200 [-300, +200] 4/4 loans repaid, 0 defaults
          ...
    """
    lines = [f"Aura score {result.score} ({result.tier.label})"]
    if not result.has_history:
        lines.append("  No loan history; base score applies.")
    for factor in result.factors:
        lines.append(
            f"  {factor.name}: {factor.score:+d} "
            f"[{factor.min_score:+d}, {factor.max_score:+d}] {factor.description}"
        )
    return "\n".join(lines)
