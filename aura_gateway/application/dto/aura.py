"""Data transfer objects for Aura scoring operations."""

import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from aura_gateway.service.scoring import AuraResult, LoanRecord, NFTLoanRecord, Tip
from aura_gateway.service.scoring.aggregation import validate_now

WALLET_PATTERN = re.compile(r"^0x[0-9a-fA-F]{40}$")


def normalize_wallet(wallet: str) -> str:
    """Lower-case a wallet address; callers validate it first."""
    return wallet.strip().lower()


def validate_wallet(wallet: str) -> List[str]:
    if not wallet or not WALLET_PATTERN.match(wallet.strip()):
        return [f"wallet must be 0x followed by 40 hex characters, got {wallet!r}"]
    return []


@dataclass(frozen=True)
class AuraRequest:
    """Input data for evaluating a wallet against the ledger."""
    wallet: str
    now: int

    def validate(self) -> List[str]:
        return validate_wallet(self.wallet) + validate_now(self.now)


@dataclass(frozen=True)
class ScoreRecordsRequest:
    """Input data for scoring caller-supplied records without any I/O."""
    bnpl_loans: Tuple[LoanRecord, ...]
    nft_loans: Tuple[NFTLoanRecord, ...]
    now: int

    def validate(self) -> List[str]:
        # Record-level checks run inside the scorer
        return validate_now(self.now)


@dataclass(frozen=True)
class AuraResponse:
    """Response data for an Aura evaluation."""

    result: AuraResult
    tips: List[Tip]
    explanation: str
    wallet: Optional[str] = None
    degraded: List[str] = field(default_factory=list)
    snapshot_id: Optional[str] = None

    @property
    def score(self) -> int:
        return self.result.score


@dataclass(frozen=True)
class AuraSnapshotSummary:
    """Brief summary of a stored evaluation for history listings."""

    snapshot_id: str
    score: int
    tier: str
    has_history: bool
    degraded: List[str]
    evaluated_at: int
    created_at: str


@dataclass(frozen=True)
class AuraHistoryResponse:
    """Response containing a wallet's past evaluations."""

    wallet: str
    snapshots: List[AuraSnapshotSummary]

    @classmethod
    def from_entities(cls, wallet: str, snapshots: list) -> "AuraHistoryResponse":
        summaries = [
            AuraSnapshotSummary(
                snapshot_id=str(s.id),
                score=s.score,
                tier=s.tier,
                has_history=s.has_history,
                degraded=list(s.degraded),
                evaluated_at=s.evaluated_at,
                created_at=s.created_at_iso,
            )
            for s in snapshots
        ]
        return cls(wallet=wallet, snapshots=summaries)
