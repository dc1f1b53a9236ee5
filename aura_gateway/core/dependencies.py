"""Dependency injection for FastAPI."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from aura_gateway.infrastructure.database import get_db_session
from aura_gateway.infrastructure.repositories import PostgresSnapshotRepository
from aura_gateway.infrastructure.clients import HttpLedgerClient
from aura_gateway.application.services import AuraService, LoanHistoryCollector
from aura_gateway.domain.interfaces import LedgerClient


# Repository dependencies
async def get_snapshot_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> PostgresSnapshotRepository:
    """Get a SnapshotRepository instance."""
    return PostgresSnapshotRepository(session)


# External client dependencies
def get_ledger_client() -> HttpLedgerClient:
    """Get a LedgerClient instance."""
    return HttpLedgerClient()


def get_history_collector(
    ledger_client: Annotated[LedgerClient, Depends(get_ledger_client)],
) -> LoanHistoryCollector:
    """Get a LoanHistoryCollector reading from the ledger client."""
    return LoanHistoryCollector(ledger_client)


# Service dependencies
async def get_aura_service(
    snapshot_repo: Annotated[PostgresSnapshotRepository, Depends(get_snapshot_repository)],
    collector: Annotated[LoanHistoryCollector, Depends(get_history_collector)],
) -> AuraService:
    """Get an AuraService instance with all dependencies."""
    return AuraService(
        collector=collector,
        snapshot_repository=snapshot_repo,
    )
