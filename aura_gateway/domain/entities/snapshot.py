"""AuraSnapshot entity: one persisted evaluation of a wallet."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, List
from uuid import UUID, uuid4

from aura_gateway.service.scoring import AuraResult


@dataclass
class AuraSnapshot:
    """
    Audit record of an Aura score computed for a wallet.

    Snapshots are append-only: each evaluation of a wallet produces a new
    one, so the history shows how the score moved over time.
    """

    wallet: str
    score: int
    tier: str
    has_history: bool
    factors: List[dict[str, Any]]
    metrics: dict[str, Any]
    evaluated_at: int
    degraded: List[str] = field(default_factory=list)
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)

    @classmethod
    def from_result(
        cls,
        wallet: str,
        result: AuraResult,
        degraded: List[str] | None = None,
    ) -> "AuraSnapshot":
        """Build a snapshot from a freshly computed result."""
        return cls(
            wallet=wallet,
            score=result.score,
            tier=result.tier.tier.value,
            has_history=result.has_history,
            factors=[f.to_dict() for f in result.factors],
            metrics=result.metrics.to_dict(),
            evaluated_at=result.evaluated_at,
            degraded=list(degraded or []),
        )

    @property
    def created_at_iso(self) -> str:
        # Stored as UTC; Postgres hands it back tz-aware, SQLite naive
        return self.created_at.replace(tzinfo=None).isoformat() + "Z"

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "snapshot_id": str(self.id),
            "wallet": self.wallet,
            "score": self.score,
            "tier": self.tier,
            "has_history": self.has_history,
            "factors": self.factors,
            "metrics": self.metrics,
            "degraded": self.degraded,
            "evaluated_at": self.evaluated_at,
            "created_at": self.created_at_iso,
        }
