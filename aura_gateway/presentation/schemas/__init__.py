"""Pydantic schemas for API request/response validation."""

from .aura import (
    AuraFactorSchema,
    AuraHistoryResponseSchema,
    AuraMetricsSchema,
    AuraResponseSchema,
    AuraSnapshotSchema,
    AuraSnapshotSummarySchema,
    AuraTierSchema,
    LoanRecordSchema,
    NFTLoanRecordSchema,
    ScoreRequestSchema,
    TipSchema,
)
from .error import ErrorResponseSchema

__all__ = [
    "AuraFactorSchema",
    "AuraHistoryResponseSchema",
    "AuraMetricsSchema",
    "AuraResponseSchema",
    "AuraSnapshotSchema",
    "AuraSnapshotSummarySchema",
    "AuraTierSchema",
    "LoanRecordSchema",
    "NFTLoanRecordSchema",
    "ScoreRequestSchema",
    "TipSchema",
    "ErrorResponseSchema",
]
