"""External client interfaces."""

from abc import ABC, abstractmethod
from typing import List

from aura_gateway.service.scoring import LoanRecord, NFTLoanRecord


class LedgerClient(ABC):
    """
    Abstract read-only client for the loan ledger.

    Exposes the BNPL loan book, the collateral vault and the NFT-backed loan
    book. Implementations never mutate ledger state.
    """

    @abstractmethod
    async def get_bnpl_loan_ids(self, wallet: str) -> List[int]:
        """
        Fetch the ids of every BNPL loan taken by a wallet.

        Args:
            wallet: Normalized wallet address

        Returns:
            Loan ids in ledger order (empty for a wallet with no loans)

        Raises:
            LedgerAPIException: If the API returns an error
            LedgerAPITimeoutException: If the request times out
            LedgerDataException: If the response is malformed
        """
        ...

    @abstractmethod
    async def get_bnpl_loan(self, loan_id: int) -> LoanRecord:
        """
        Fetch a single BNPL loan.

        The returned record has collateral_locked=False; the vault is the
        source of truth for collateral and is queried separately.
        """
        ...

    @abstractmethod
    async def get_collateral_locked(self, wallet: str, loan_id: int) -> bool:
        """Return whether the vault still holds the collateral of a loan."""
        ...

    @abstractmethod
    async def get_nft_loan_ids(self, wallet: str) -> List[int]:
        """Fetch the ids of every NFT-backed loan taken by a wallet."""
        ...

    @abstractmethod
    async def get_nft_loan(self, loan_id: int) -> NFTLoanRecord:
        """Fetch a single NFT-backed loan."""
        ...

    @abstractmethod
    async def ping(self) -> None:
        """
        Check that the ledger can be reached.

        Raises:
            LedgerAPIException: If the ledger is unreachable or unhealthy
        """
        ...
