"""PostgreSQL implementation of SnapshotRepository."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import select, text
from sqlalchemy.ext.asyncio import AsyncSession

from aura_gateway.domain.entities import AuraSnapshot
from aura_gateway.domain.interfaces import SnapshotRepository
from aura_gateway.infrastructure.database.models import AuraSnapshotModel


class PostgresSnapshotRepository(SnapshotRepository):
    """
    PostgreSQL implementation of the Snapshot repository.

    Uses SQLAlchemy async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def save(self, snapshot: AuraSnapshot) -> AuraSnapshot:
        """Persist a snapshot to the database."""
        model = AuraSnapshotModel(
            id=str(snapshot.id),
            wallet=snapshot.wallet,
            score=snapshot.score,
            tier=snapshot.tier,
            has_history=snapshot.has_history,
            factors=snapshot.factors,
            metrics=snapshot.metrics,
            degraded=list(snapshot.degraded),
            evaluated_at=snapshot.evaluated_at,
            created_at=snapshot.created_at,
        )

        self._session.add(model)
        await self._session.flush()

        return snapshot

    async def get_by_id(self, snapshot_id: UUID) -> Optional[AuraSnapshot]:
        """Retrieve a snapshot by ID."""
        stmt = select(AuraSnapshotModel).where(AuraSnapshotModel.id == str(snapshot_id))
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._to_entity(model)

    async def get_by_wallet(
        self,
        wallet: str,
        limit: int = 10,
        offset: int = 0,
    ) -> List[AuraSnapshot]:
        """Retrieve snapshots for a wallet, ordered by created_at descending."""
        stmt = (
            select(AuraSnapshotModel)
            .where(AuraSnapshotModel.wallet == wallet)
            .order_by(AuraSnapshotModel.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self._session.execute(stmt)
        models = result.scalars().all()

        return [self._to_entity(model) for model in models]

    async def ping(self) -> None:
        """Run a trivial query on the session's connection."""
        await self._session.execute(text("SELECT 1"))

    def _to_entity(self, model: AuraSnapshotModel) -> AuraSnapshot:
        """Convert database model to domain entity."""
        return AuraSnapshot(
            id=UUID(model.id),
            wallet=model.wallet,
            score=model.score,
            tier=model.tier,
            has_history=model.has_history,
            factors=list(model.factors),
            metrics=dict(model.metrics),
            degraded=list(model.degraded or []),
            evaluated_at=model.evaluated_at,
            created_at=model.created_at,
        )
