"""Application services (use cases)."""

from .history_collector import FALLBACK_POLICY, LoanHistoryCollector
from .aura_service import AuraService

__all__ = [
    "FALLBACK_POLICY",
    "LoanHistoryCollector",
    "AuraService",
]
