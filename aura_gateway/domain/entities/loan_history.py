"""Collected loan history of a wallet and the per-lookup result wrapper."""

from dataclasses import dataclass, field
from typing import Generic, Optional, Tuple, TypeVar

from aura_gateway.service.scoring import LoanRecord, NFTLoanRecord

T = TypeVar("T")


@dataclass(frozen=True)
class LookupResult(Generic[T]):
    """
    Outcome of a single ledger lookup: either a value or the error it raised.

    The collector decides per field what a failed lookup turns into; this
    type only carries the outcome so that decision stays explicit.
    """

    value: Optional[T] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "LookupResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: BaseException) -> "LookupResult[T]":
        return cls(error=error)


@dataclass(frozen=True)
class LoanHistorySnapshot:
    """
    Read-only view of every loan of a wallet at collection time.

    Attributes:
        wallet: Normalized (lower-case) wallet address
        bnpl_loans: All BNPL loans of the wallet
        nft_loans: All NFT-backed loans of the wallet
        degraded: Names of lookups that failed and were replaced by their
            fallback value (e.g. "collateral_locked:3", "nft_loans")
    """

    wallet: str
    bnpl_loans: Tuple[LoanRecord, ...] = ()
    nft_loans: Tuple[NFTLoanRecord, ...] = ()
    degraded: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_degraded(self) -> bool:
        return bool(self.degraded)
