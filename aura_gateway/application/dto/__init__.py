"""Data Transfer Objects for application layer."""

from .aura import (
    AuraRequest,
    AuraResponse,
    AuraHistoryResponse,
    AuraSnapshotSummary,
    ScoreRecordsRequest,
    normalize_wallet,
    validate_wallet,
)

__all__ = [
    "AuraRequest",
    "AuraResponse",
    "AuraHistoryResponse",
    "AuraSnapshotSummary",
    "ScoreRecordsRequest",
    "normalize_wallet",
    "validate_wallet",
]
