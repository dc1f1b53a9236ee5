"""
Aura Scoring Module for the on-chain reputation gateway
"""

from .models import (
    AuraFactor,
    AuraMetrics,
    AuraResult,
    AuraTier,
    AuraTierInfo,
    InvalidLoanHistoryError,
    LoanRecord,
    LoanStatus,
    NFTLoanRecord,
    NFTLoanStatus,
    Tip,
)
from .settings import ScoringSettings, scoring_settings
from .aggregation import aggregate_metrics, validate_loan_history
from .factors import (
    FACTOR_NAMES,
    clamp,
    compute_factors,
    round_half_up,
    score_repayment_reliability,
    score_payment_discipline,
    score_borrowing_experience,
    score_portfolio_diversity,
    score_collateral_behavior,
    score_nft_track_record,
)
from .tiers import AURA_TIERS, UNRANKED_TIER, get_tier_for_score
from .engine import compute_aura_score, explain_aura, score_metrics
from .insights import improvement_tips

__all__ = [
    # Settings
    "ScoringSettings",
    "scoring_settings",
    # Models
    "AuraFactor",
    "AuraMetrics",
    "AuraResult",
    "AuraTier",
    "AuraTierInfo",
    "InvalidLoanHistoryError",
    "LoanRecord",
    "LoanStatus",
    "NFTLoanRecord",
    "NFTLoanStatus",
    "Tip",
    # Aggregation
    "aggregate_metrics",
    "validate_loan_history",
    # Factors
    "FACTOR_NAMES",
    "clamp",
    "compute_factors",
    "round_half_up",
    "score_repayment_reliability",
    "score_payment_discipline",
    "score_borrowing_experience",
    "score_portfolio_diversity",
    "score_collateral_behavior",
    "score_nft_track_record",
    # Tiers
    "AURA_TIERS",
    "UNRANKED_TIER",
    "get_tier_for_score",
    # Engine
    "compute_aura_score",
    "explain_aura",
    "score_metrics",
    # Insights
    "improvement_tips",
]
