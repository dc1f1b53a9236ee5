"""Loan history collector - reads a wallet's full loan history from the ledger."""

import asyncio
from dataclasses import replace
from typing import Any, Awaitable, Dict, List, Tuple

import structlog

from aura_gateway.core.metrics import record_lookup_fallback
from aura_gateway.domain.entities import LoanHistorySnapshot, LookupResult
from aura_gateway.domain.exceptions import DomainException
from aura_gateway.domain.interfaces import LedgerClient
from aura_gateway.service.scoring import LoanRecord, NFTLoanRecord

logger = structlog.get_logger(__name__)

COLLATERAL_LOCKED = "collateral_locked"
NFT_LOANS = "nft_loans"

# Value a failed lookup degrades to. Lookups not listed here have no
# fallback and their error propagates to the caller.
FALLBACK_POLICY: Dict[str, Any] = {
    COLLATERAL_LOCKED: False,
    NFT_LOANS: (),
}


async def _gather(*awaitables: Awaitable) -> list:
    """
    asyncio.gather that cancels the remaining awaitables when one fails.

    The cancelled tasks are awaited before the error is re-raised.
    """
    tasks = [asyncio.ensure_future(a) for a in awaitables]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


async def _lookup(awaitable: Awaitable) -> LookupResult:
    """Await a ledger call and capture a ledger error as a failed result."""
    try:
        return LookupResult.success(await awaitable)
    except DomainException as exc:
        return LookupResult.failure(exc)


class LoanHistoryCollector:
    """
    Collects every BNPL and NFT-backed loan of a wallet.

    BNPL loans, their per-loan collateral lookups and the NFT loan list are
    fetched concurrently. Partial failure follows FALLBACK_POLICY: a failed
    collateral lookup reads as "not locked", a failed NFT list (ids or any
    single NFT loan) reads as "no NFT loans", and any BNPL failure aborts
    the collection after cancelling the lookups still in flight.
    """

    def __init__(self, ledger_client: LedgerClient):
        self._client = ledger_client

    async def collect(self, wallet: str) -> LoanHistorySnapshot:
        """
        Fetch the complete loan history of a wallet.

        Args:
            wallet: Normalized wallet address

        Returns:
            LoanHistorySnapshot with the degraded lookups listed

        Raises:
            LedgerAPIException: If a BNPL lookup fails
            LedgerAPITimeoutException: If a BNPL lookup times out
            LedgerDataException: If a BNPL record is malformed
        """
        log = logger.bind(wallet=wallet)
        degraded: List[str] = []

        (bnpl_loans, bnpl_degraded), nft_result = await _gather(
            self._collect_bnpl(wallet, log),
            _lookup(self._collect_nft(wallet)),
        )
        degraded.extend(bnpl_degraded)

        nft_loans = self._apply_policy(NFT_LOANS, nft_result, degraded, log)

        log.info(
            "loan_history_collected",
            bnpl_loans=len(bnpl_loans),
            nft_loans=len(nft_loans),
            degraded=degraded,
        )

        return LoanHistorySnapshot(
            wallet=wallet,
            bnpl_loans=tuple(bnpl_loans),
            nft_loans=tuple(nft_loans),
            degraded=tuple(degraded),
        )

    async def _collect_bnpl(self, wallet: str, log) -> Tuple[List[LoanRecord], List[str]]:
        loan_ids = await self._client.get_bnpl_loan_ids(wallet)
        results = await _gather(
            *(self._collect_bnpl_loan(wallet, loan_id, log) for loan_id in loan_ids)
        )
        loans = [loan for loan, _ in results]
        degraded = [name for _, name in results if name is not None]
        return loans, degraded

    async def _collect_bnpl_loan(self, wallet: str, loan_id: int, log):
        loan, collateral = await _gather(
            self._client.get_bnpl_loan(loan_id),
            _lookup(self._client.get_collateral_locked(wallet, loan_id)),
        )

        degraded: List[str] = []
        locked = self._apply_policy(
            COLLATERAL_LOCKED, collateral, degraded, log, loan_id=loan_id
        )
        loan = replace(loan, collateral_locked=bool(locked))
        return loan, (degraded[0] if degraded else None)

    async def _collect_nft(self, wallet: str) -> List[NFTLoanRecord]:
        loan_ids = await self._client.get_nft_loan_ids(wallet)
        return list(
            await _gather(*(self._client.get_nft_loan(i) for i in loan_ids))
        )

    def _apply_policy(
        self,
        field: str,
        result: LookupResult,
        degraded: List[str],
        log,
        loan_id: int | None = None,
    ):
        """Return the lookup's value, or its fallback when the policy has one."""
        if result.ok:
            return result.value
        if field not in FALLBACK_POLICY:
            raise result.error

        name = field if loan_id is None else f"{field}:{loan_id}"
        degraded.append(name)
        record_lookup_fallback(field)
        log.warning(
            "ledger_lookup_degraded",
            field=field,
            loan_id=loan_id,
            error=str(result.error),
            error_code=getattr(result.error, "code", None),
            fallback=FALLBACK_POLICY[field],
        )
        return FALLBACK_POLICY[field]
