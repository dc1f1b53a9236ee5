"""Aura API endpoints."""

import time
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query

from aura_gateway.application.dto import AuraRequest, AuraResponse, ScoreRecordsRequest
from aura_gateway.application.services import AuraService
from aura_gateway.core.dependencies import get_aura_service
from aura_gateway.core.metrics import record_score, track_score_latency
from aura_gateway.presentation.schemas import (
    AuraHistoryResponseSchema,
    AuraResponseSchema,
    AuraSnapshotSchema,
    ErrorResponseSchema,
    ScoreRequestSchema,
)
from aura_gateway.presentation.schemas.aura import AuraSnapshotSummarySchema

aura_router = APIRouter(
    prefix="/v1/aura",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
        503: {"model": ErrorResponseSchema, "description": "Ledger unavailable"},
    },
)


def _to_schema(response: AuraResponse) -> AuraResponseSchema:
    result = response.result.to_dict()
    return AuraResponseSchema(
        wallet=response.wallet,
        score=result["score"],
        tier=result["tier"],
        has_history=result["has_history"],
        factors=result["factors"],
        metrics=result["metrics"],
        tips=[t.to_dict() for t in response.tips],
        explanation=response.explanation,
        degraded=response.degraded,
        snapshot_id=response.snapshot_id,
        evaluated_at=result["evaluated_at"],
    )


@aura_router.post(
    "/score",
    response_model=AuraResponseSchema,
    summary="Score Supplied Records",
    description="""
    Compute an Aura score from caller-supplied loan records.

    Nothing is read from the ledger and nothing is stored.
    """,
)
async def score_records(
    request: ScoreRequestSchema,
    aura_service: Annotated[AuraService, Depends(get_aura_service)],
) -> AuraResponseSchema:
    dto = ScoreRecordsRequest(
        bnpl_loans=tuple(loan.to_record() for loan in request.bnpl_loans),
        nft_loans=tuple(loan.to_record() for loan in request.nft_loans),
        now=request.now,
    )

    response = aura_service.score_records(dto)

    result = response.result
    record_score(result.tier.tier.value, result.has_history, result.score, source="supplied")

    return _to_schema(response)


@aura_router.get(
    "/snapshots/{snapshot_id}",
    response_model=AuraSnapshotSchema,
    summary="Get Aura Snapshot",
    description="Retrieve a single stored evaluation by its ID.",
    responses={
        404: {"model": ErrorResponseSchema, "description": "Snapshot not found"},
    },
)
async def get_snapshot(
    snapshot_id: UUID,
    aura_service: Annotated[AuraService, Depends(get_aura_service)],
) -> AuraSnapshotSchema:
    snapshot = await aura_service.get_snapshot(snapshot_id)
    return AuraSnapshotSchema(**snapshot.to_dict())


@aura_router.get(
    "/{wallet}",
    response_model=AuraResponseSchema,
    summary="Evaluate Wallet",
    description="""
    Read a wallet's BNPL and NFT-backed loans from the ledger, compute its
    Aura score and store the evaluation.

    `now` defaults to the current time. Lookups that failed and fell back to
    their default value are listed in `degraded`.
    """,
)
async def evaluate_wallet(
    wallet: Annotated[str, Path(description="Wallet address (0x + 40 hex characters)")],
    aura_service: Annotated[AuraService, Depends(get_aura_service)],
    now: Annotated[
        int | None,
        Query(gt=0, description="Evaluation time in unix seconds (defaults to now)"),
    ] = None,
) -> AuraResponseSchema:
    dto = AuraRequest(
        wallet=wallet,
        now=now if now is not None else int(time.time()),
    )

    with track_score_latency():
        response = await aura_service.evaluate_wallet(dto)

    result = response.result
    record_score(result.tier.tier.value, result.has_history, result.score, source="ledger")

    return _to_schema(response)


@aura_router.get(
    "/{wallet}/history",
    response_model=AuraHistoryResponseSchema,
    summary="Get Aura History",
    description="""
    Retrieve the stored evaluations of a wallet.

    Returns snapshots ordered by date (newest first).
    """,
)
async def get_history(
    wallet: Annotated[str, Path(description="Wallet address (0x + 40 hex characters)")],
    aura_service: Annotated[AuraService, Depends(get_aura_service)],
    limit: Annotated[
        int,
        Query(ge=1, le=100, description="Maximum number of snapshots to return"),
    ] = 10,
) -> AuraHistoryResponseSchema:
    response = await aura_service.get_history(wallet, limit)

    return AuraHistoryResponseSchema(
        wallet=response.wallet,
        snapshots=[
            AuraSnapshotSummarySchema(
                snapshot_id=s.snapshot_id,
                score=s.score,
                tier=s.tier,
                has_history=s.has_history,
                degraded=s.degraded,
                evaluated_at=s.evaluated_at,
                created_at=s.created_at,
            )
            for s in response.snapshots
        ],
    )
