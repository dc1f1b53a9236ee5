"""Aura service - orchestrates the wallet reputation use cases."""

from typing import Sequence
from uuid import UUID

import structlog

from aura_gateway.application.dto import (
    AuraHistoryResponse,
    AuraRequest,
    AuraResponse,
    ScoreRecordsRequest,
    normalize_wallet,
    validate_wallet,
)
from aura_gateway.application.services.history_collector import LoanHistoryCollector
from aura_gateway.domain.entities import AuraSnapshot
from aura_gateway.domain.exceptions import (
    InvalidAuraRequestException,
    SnapshotNotFoundException,
)
from aura_gateway.domain.interfaces import SnapshotRepository
from aura_gateway.service.scoring import (
    AuraResult,
    InvalidLoanHistoryError,
    LoanRecord,
    NFTLoanRecord,
    ScoringSettings,
    compute_aura_score,
    explain_aura,
    improvement_tips,
    scoring_settings,
)

logger = structlog.get_logger(__name__)


class AuraService:
    """
    Application service for Aura reputation use cases.
    """

    def __init__(
        self,
        collector: LoanHistoryCollector,
        snapshot_repository: SnapshotRepository,
        settings: ScoringSettings = scoring_settings,
    ):
        self._collector = collector
        self._snapshot_repo = snapshot_repository
        self._settings = settings

    async def evaluate_wallet(self, request: AuraRequest) -> AuraResponse:
        """
        Collect a wallet's loans from the ledger, score them and store the result.

        Args:
            request: The wallet and the evaluation time

        Returns:
            AuraResponse with result, tips and the lookups that were degraded

        Raises:
            InvalidAuraRequestException: If request validation fails
            LedgerAPIException: If a BNPL lookup fails
            LedgerAPITimeoutException: If a BNPL lookup times out
            LedgerDataException: If a BNPL record is malformed
        """
        errors = request.validate()
        if errors:
            raise InvalidAuraRequestException("; ".join(errors), errors)

        wallet = normalize_wallet(request.wallet)
        log = logger.bind(wallet=wallet, now=request.now)
        log.info("aura_requested")

        history = await self._collector.collect(wallet)
        result = self._score(history.bnpl_loans, history.nft_loans, request.now)
        if history.is_degraded:
            log.warning("aura_scored_with_fallbacks", degraded=list(history.degraded))

        snapshot = AuraSnapshot.from_result(wallet, result, list(history.degraded))
        await self._snapshot_repo.save(snapshot)

        log.info(
            "aura_computed",
            score=result.score,
            tier=result.tier.tier.value,
            has_history=result.has_history,
            degraded=list(history.degraded),
            snapshot_id=str(snapshot.id),
        )
        log.debug("aura_explained", explanation=explain_aura(result))

        return AuraResponse(
            result=result,
            tips=improvement_tips(result),
            explanation=explain_aura(result),
            wallet=wallet,
            degraded=list(history.degraded),
            snapshot_id=str(snapshot.id),
        )

    def score_records(self, request: ScoreRecordsRequest) -> AuraResponse:
        """
        Score caller-supplied records. Performs no I/O and stores nothing.

        Raises:
            InvalidAuraRequestException: If the timestamp or any record is malformed
        """
        errors = request.validate()
        if errors:
            raise InvalidAuraRequestException("; ".join(errors), errors)

        result = self._score(request.bnpl_loans, request.nft_loans, request.now)
        logger.info(
            "aura_scored_from_records",
            score=result.score,
            bnpl_loans=len(request.bnpl_loans),
            nft_loans=len(request.nft_loans),
        )

        return AuraResponse(
            result=result,
            tips=improvement_tips(result),
            explanation=explain_aura(result),
        )

    async def get_history(self, wallet: str, limit: int = 10) -> AuraHistoryResponse:
        """
        Get the past evaluations of a wallet, newest first.

        Raises:
            InvalidAuraRequestException: If the wallet address is malformed
        """
        errors = validate_wallet(wallet)
        if errors:
            raise InvalidAuraRequestException("; ".join(errors), errors)

        wallet = normalize_wallet(wallet)
        snapshots = await self._snapshot_repo.get_by_wallet(wallet, limit=limit)
        return AuraHistoryResponse.from_entities(wallet, snapshots)

    async def get_snapshot(self, snapshot_id: UUID) -> AuraSnapshot:
        """
        Get a stored evaluation by ID.

        Raises:
            SnapshotNotFoundException: If the snapshot does not exist
        """
        snapshot = await self._snapshot_repo.get_by_id(snapshot_id)
        if snapshot is None:
            raise SnapshotNotFoundException(str(snapshot_id))
        return snapshot

    def _score(
        self,
        bnpl_loans: Sequence[LoanRecord],
        nft_loans: Sequence[NFTLoanRecord],
        now,
    ) -> AuraResult:
        try:
            return compute_aura_score(bnpl_loans, nft_loans, now, self._settings)
        except InvalidLoanHistoryError as exc:
            raise InvalidAuraRequestException(str(exc), exc.errors) from exc
