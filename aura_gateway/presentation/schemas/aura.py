"""Aura-related Pydantic schemas."""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from aura_gateway.service.scoring import (
    LoanRecord,
    LoanStatus,
    NFTLoanRecord,
    NFTLoanStatus,
)


# =============================================================================
# Request Schemas
# =============================================================================

class LoanRecordSchema(BaseModel):
    """Schema for a BNPL loan supplied to POST /v1/aura/score."""

    id: int = Field(..., description="Ledger loan identifier", examples=[1])
    status: Literal["ACTIVE", "REPAID", "DEFAULTED"] = Field(
        ...,
        description="Lifecycle state of the loan",
        examples=["REPAID"],
    )
    installments_paid: int = Field(
        ...,
        description="Installments paid so far (0-4)",
        examples=[4],
    )
    product_price: int = Field(
        ...,
        description="Purchase price in wei (JSON number or decimal string)",
        examples=["1000000000000000000"],
    )
    next_due_timestamp: Optional[int] = Field(
        None,
        description="Unix seconds of the next installment (required for ACTIVE loans)",
        examples=[1767225600],
    )
    collateral_locked: bool = Field(
        False,
        description="Whether the vault still holds the loan's collateral",
    )
    created_at: int = Field(
        ...,
        description="Unix seconds when the loan was opened",
        examples=[1760000000],
    )

    @model_validator(mode="after")
    def check_active_due_date(self) -> "LoanRecordSchema":
        if self.status == "ACTIVE" and self.next_due_timestamp is None:
            raise ValueError("next_due_timestamp is required for ACTIVE loans")
        return self

    def to_record(self) -> LoanRecord:
        return LoanRecord(
            id=self.id,
            status=LoanStatus(self.status),
            installments_paid=self.installments_paid,
            product_price=self.product_price,
            # Closed loans have no next installment; the ledger reports 0
            next_due_timestamp=self.next_due_timestamp or 0,
            collateral_locked=self.collateral_locked,
            created_at=self.created_at,
        )


class NFTLoanRecordSchema(BaseModel):
    """Schema for an NFT-backed loan supplied to POST /v1/aura/score."""

    id: int = Field(..., description="Ledger loan identifier", examples=[7])
    status: Literal["ACTIVE", "REPAID", "DEFAULTED", "LIQUIDATED"] = Field(
        ...,
        description="Lifecycle state of the loan",
        examples=["ACTIVE"],
    )
    loan_amount: int = Field(
        ...,
        description="Principal in wei (JSON number or decimal string)",
        examples=["500000000000000000"],
    )
    interest_amount: int = Field(0, description="Interest owed in wei")
    total_repaid: int = Field(0, description="Amount repaid so far in wei")
    due_timestamp: int = Field(
        ...,
        description="Unix seconds when the loan falls due",
        examples=[1767225600],
    )
    created_at: int = Field(
        ...,
        description="Unix seconds when the loan was opened",
        examples=[1760000000],
    )

    def to_record(self) -> NFTLoanRecord:
        return NFTLoanRecord(
            id=self.id,
            status=NFTLoanStatus(self.status),
            loan_amount=self.loan_amount,
            interest_amount=self.interest_amount,
            total_repaid=self.total_repaid,
            due_timestamp=self.due_timestamp,
            created_at=self.created_at,
        )


class ScoreRequestSchema(BaseModel):
    """Schema for POST /v1/aura/score request body."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "now": 1767225600,
                    "bnpl_loans": [
                        {
                            "id": 1,
                            "status": "REPAID",
                            "installments_paid": 4,
                            "product_price": "1000000000000000000",
                            "collateral_locked": False,
                            "created_at": 1760000000,
                        }
                    ],
                    "nft_loans": [],
                }
            ]
        }
    )

    bnpl_loans: list[LoanRecordSchema] = Field(
        default_factory=list,
        description="All BNPL loans of the wallet",
    )
    nft_loans: list[NFTLoanRecordSchema] = Field(
        default_factory=list,
        description="All NFT-backed loans of the wallet",
    )
    now: int = Field(
        ...,
        gt=0,
        description="Evaluation time in unix seconds",
        examples=[1767225600],
    )


# =============================================================================
# Response Schemas
# =============================================================================

class AuraFactorSchema(BaseModel):
    """Schema for one factor of the score breakdown."""

    name: str = Field(..., description="Factor name", examples=["Repayment Reliability"])
    description: str = Field(
        ...,
        description="Inputs behind the factor value",
        examples=["4/4 loans repaid, 0 defaults"],
    )
    score: int = Field(..., description="Clamped factor value", examples=[200])
    min_score: int = Field(..., description="Lowest value of this factor", examples=[-300])
    max_score: int = Field(..., description="Highest value of this factor", examples=[200])
    weight: str = Field(..., description="Nominal weight in the model", examples=["40%"])


class AuraTierSchema(BaseModel):
    """Schema for the tier a score falls into."""

    name: str = Field(..., description="Tier name", examples=["Strong"])
    label: str = Field(..., description="Display label", examples=["Strong Aura"])
    min_score: int = Field(..., description="Lowest score of the tier", examples=[700])
    description: str = Field(
        ...,
        description="One-line tier description",
        examples=["Reliable borrower with an excellent track record."],
    )


class AuraMetricsSchema(BaseModel):
    """Schema for the aggregated loan metrics behind a score."""

    total_bnpl_loans: int
    active_bnpl_loans: int
    repaid_bnpl_loans: int
    defaulted_bnpl_loans: int
    total_installments_paid: int
    max_possible_installments: int
    total_bnpl_volume: str = Field(..., description="Sum of BNPL prices in wei")
    on_time_bnpl_loans: int
    late_bnpl_loans: int
    collateral_claimed: int
    collateral_locked: int
    total_nft_loans: int
    active_nft_loans: int
    repaid_nft_loans: int
    defaulted_nft_loans: int
    total_nft_volume: str = Field(..., description="Sum of NFT loan principals in wei")
    on_time_nft_loans: int
    late_nft_loans: int
    first_loan_timestamp: int
    has_history: bool


class TipSchema(BaseModel):
    """Schema for an improvement tip."""

    tip: str = Field(..., examples=["Take your first loan to start building your Aura score."])
    priority: Literal["high", "medium", "low"] = Field(..., examples=["high"])


class AuraResponseSchema(BaseModel):
    """Schema for Aura evaluation responses."""

    wallet: Optional[str] = Field(
        None,
        description="Normalized wallet address (null for supplied records)",
        examples=["0x52908400098527886e0f7030069857d2e4169ee7"],
    )
    score: int = Field(
        ...,
        ge=0,
        le=1000,
        description="Aura score (0-1000, higher is better)",
        examples=[745],
    )
    tier: AuraTierSchema
    has_history: bool = Field(
        ...,
        description="False when the wallet has no loans and the base score applies",
    )
    factors: list[AuraFactorSchema] = Field(
        ...,
        description="The six factors in fixed order",
    )
    metrics: AuraMetricsSchema
    tips: list[TipSchema] = Field(..., description="Suggestions to raise the score")
    explanation: str = Field(..., description="Human-readable score breakdown")
    degraded: list[str] = Field(
        default_factory=list,
        description="Ledger lookups that failed and were replaced by their fallback",
        examples=[["collateral_locked:3"]],
    )
    snapshot_id: Optional[str] = Field(
        None,
        description="UUID of the stored snapshot (null for supplied records)",
    )
    evaluated_at: int = Field(..., description="Evaluation time in unix seconds")


class AuraSnapshotSummarySchema(BaseModel):
    """Schema for a snapshot summary in history."""

    snapshot_id: str = Field(..., description="UUID of the snapshot")
    score: int = Field(..., ge=0, le=1000, description="Aura score")
    tier: str = Field(..., description="Tier name", examples=["Strong"])
    has_history: bool = Field(..., description="Whether the wallet had any loans")
    degraded: list[str] = Field(..., description="Lookups that used their fallback")
    evaluated_at: int = Field(..., description="Evaluation time in unix seconds")
    created_at: str = Field(..., description="ISO 8601 timestamp the snapshot was stored")


class AuraHistoryResponseSchema(BaseModel):
    """Schema for GET /v1/aura/{wallet}/history response."""

    wallet: str = Field(..., description="Normalized wallet address")
    snapshots: list[AuraSnapshotSummarySchema] = Field(
        ...,
        description="Past evaluations, newest first",
    )


class AuraSnapshotSchema(BaseModel):
    """Schema for GET /v1/aura/snapshots/{snapshot_id} response."""

    snapshot_id: str
    wallet: str
    score: int = Field(..., ge=0, le=1000)
    tier: str
    has_history: bool
    factors: list[AuraFactorSchema]
    metrics: AuraMetricsSchema
    degraded: list[str]
    evaluated_at: int
    created_at: str
