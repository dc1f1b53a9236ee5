"""Health check endpoint reporting database and ledger readiness."""

from typing import Annotated, Awaitable, Literal, Optional

import structlog
from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel, Field
from sqlalchemy.exc import SQLAlchemyError

from aura_gateway import __version__
from aura_gateway.core.dependencies import get_ledger_client, get_snapshot_repository
from aura_gateway.domain.exceptions import DomainException
from aura_gateway.domain.interfaces import LedgerClient, SnapshotRepository

logger = structlog.get_logger(__name__)

health_router = APIRouter()


class DependencyStatus(BaseModel):
    status: Literal["ok", "unavailable"]
    detail: Optional[str] = None


class HealthResponse(BaseModel):
    status: Literal["healthy", "degraded"] = Field(
        ...,
        description="degraded when the snapshot store or the ledger cannot be reached",
    )
    version: str
    dependencies: dict[str, DependencyStatus]


async def _check(name: str, ping: Awaitable[None]) -> DependencyStatus:
    try:
        await ping
    except (DomainException, SQLAlchemyError, OSError) as exc:
        logger.warning("health_check_failed", dependency=name, error=str(exc))
        return DependencyStatus(status="unavailable", detail=type(exc).__name__)
    return DependencyStatus(status="ok")


@health_router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="""
    Reports whether the service can do its work.

    Answers 200 when the snapshot store and the ledger read gateway both
    respond, 503 otherwise. Wallet scoring needs both.
    """,
    responses={503: {"model": HealthResponse, "description": "A dependency is down"}},
)
async def health_check(
    response: Response,
    snapshot_repo: Annotated[SnapshotRepository, Depends(get_snapshot_repository)],
    ledger_client: Annotated[LedgerClient, Depends(get_ledger_client)],
) -> HealthResponse:
    dependencies = {
        "database": await _check("database", snapshot_repo.ping()),
        "ledger": await _check("ledger", ledger_client.ping()),
    }

    healthy = all(d.status == "ok" for d in dependencies.values())
    if not healthy:
        response.status_code = 503

    return HealthResponse(
        status="healthy" if healthy else "degraded",
        version=__version__,
        dependencies=dependencies,
    )
