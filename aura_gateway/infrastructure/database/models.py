"""SQLAlchemy ORM models for Aura snapshots."""

from datetime import datetime
from uuid import uuid4

from sqlalchemy import BigInteger, Boolean, DateTime, Integer, JSON, String, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class AuraSnapshotModel(Base):
    """Persisted Aura evaluation of a wallet."""

    __tablename__ = "aura_snapshots"

    id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    wallet: Mapped[str] = mapped_column(String(42), nullable=False, index=True)
    score: Mapped[int] = mapped_column(Integer, nullable=False)
    tier: Mapped[str] = mapped_column(String(20), nullable=False)
    has_history: Mapped[bool] = mapped_column(Boolean, nullable=False)
    factors: Mapped[list] = mapped_column(JSON, nullable=False)
    metrics: Mapped[dict] = mapped_column(JSON, nullable=False)
    degraded: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    evaluated_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=datetime.utcnow,
    )
