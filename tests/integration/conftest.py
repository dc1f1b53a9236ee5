"""
Fixtures for integration tests.

Provides:
- Test client for FastAPI app
- Fake ledger client with in-memory loan data
- In-memory database for testing
"""

from typing import AsyncGenerator, Dict, List, Optional

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from aura_gateway.main import app
from aura_gateway.core.dependencies import get_ledger_client, get_snapshot_repository
from aura_gateway.domain.interfaces import LedgerClient
from aura_gateway.infrastructure.database import Base
from aura_gateway.infrastructure.repositories import PostgresSnapshotRepository
from aura_gateway.service.scoring import (
    LoanRecord,
    LoanStatus,
    NFTLoanRecord,
    NFTLoanStatus,
)


# =============================================================================
# Test Data
# =============================================================================

NOW = 1_767_225_600  # 2026-01-01T00:00:00Z
DAY = 86400
ETH = 10**18

WALLET_GOOD = "0x52908400098527886e0f7030069857d2e4169ee7"
WALLET_MIXED = "0x8617e340b3d01fa5f11f306f4090fd50e238070d"
WALLET_NEW = "0xde0b295669a9fd93d5f28d9ec85e40f4cb697bae"


def bnpl_loan(
    loan_id: int,
    status: LoanStatus = LoanStatus.REPAID,
    installments_paid: int = 4,
    next_due_timestamp: int = 0,
    created_at: int = NOW - 10 * DAY,
) -> LoanRecord:
    """A BNPL loan as the ledger returns it (custody not yet known)."""
    return LoanRecord(
        id=loan_id,
        status=status,
        installments_paid=installments_paid,
        product_price=ETH,
        next_due_timestamp=next_due_timestamp,
        collateral_locked=False,
        created_at=created_at,
    )


def nft_loan(
    loan_id: int,
    status: NFTLoanStatus = NFTLoanStatus.REPAID,
    due_timestamp: int = NOW + 7 * DAY,
) -> NFTLoanRecord:
    return NFTLoanRecord(
        id=loan_id,
        status=status,
        loan_amount=ETH // 2,
        interest_amount=ETH // 40,
        total_repaid=0,
        due_timestamp=due_timestamp,
        created_at=NOW - 10 * DAY,
    )


def default_ledger_data() -> dict:
    """
    Loan data per wallet.

    - WALLET_GOOD: four repaid BNPL loans, all collateral claimed (score 960)
    - WALLET_MIXED: BNPL and NFT loans with a default and an overdue loan
    - WALLET_NEW: no loans at all
    """
    return {
        "bnpl": {
            WALLET_GOOD: [bnpl_loan(i) for i in (1, 2, 3, 4)],
            WALLET_MIXED: [
                bnpl_loan(10),
                bnpl_loan(11, LoanStatus.DEFAULTED, 1),
                bnpl_loan(12, LoanStatus.ACTIVE, 2, next_due_timestamp=NOW - DAY),
            ],
        },
        "nft": {
            WALLET_MIXED: [
                nft_loan(20),
                nft_loan(21, NFTLoanStatus.ACTIVE, due_timestamp=NOW + DAY),
            ],
        },
        "locked": {10: True},
    }


# =============================================================================
# Fake Clients
# =============================================================================

class FakeLedgerClient(LedgerClient):
    """
    In-memory ledger that can be told to fail specific calls.

    Failures are keyed by call name ("bnpl_loan_ids", "bnpl_loan",
    "collateral", "nft_loan_ids", "nft_loan", "ping"), optionally suffixed with a
    loan id ("collateral:10") to fail a single loan.
    """

    def __init__(
        self,
        bnpl: Optional[Dict[str, List[LoanRecord]]] = None,
        nft: Optional[Dict[str, List[NFTLoanRecord]]] = None,
        locked: Optional[Dict[int, bool]] = None,
    ):
        data = default_ledger_data()
        self.bnpl = data["bnpl"] if bnpl is None else bnpl
        self.nft = data["nft"] if nft is None else nft
        self.locked = data["locked"] if locked is None else locked
        self.failures: Dict[str, Exception] = {}
        self.calls: List[str] = []

    def fail(self, call: str, exc: Exception, loan_id: Optional[int] = None) -> None:
        key = call if loan_id is None else f"{call}:{loan_id}"
        self.failures[key] = exc

    def _enter(self, call: str, loan_id: Optional[int] = None) -> None:
        self.calls.append(call)
        for key in (call, f"{call}:{loan_id}"):
            if key in self.failures:
                raise self.failures[key]

    async def get_bnpl_loan_ids(self, wallet: str) -> List[int]:
        self._enter("bnpl_loan_ids")
        return [loan.id for loan in self.bnpl.get(wallet, [])]

    async def get_bnpl_loan(self, loan_id: int) -> LoanRecord:
        self._enter("bnpl_loan", loan_id)
        for loans in self.bnpl.values():
            for loan in loans:
                if loan.id == loan_id:
                    return loan
        raise AssertionError(f"unknown bnpl loan {loan_id}")

    async def get_collateral_locked(self, wallet: str, loan_id: int) -> bool:
        self._enter("collateral", loan_id)
        return self.locked.get(loan_id, False)

    async def get_nft_loan_ids(self, wallet: str) -> List[int]:
        self._enter("nft_loan_ids")
        return [loan.id for loan in self.nft.get(wallet, [])]

    async def get_nft_loan(self, loan_id: int) -> NFTLoanRecord:
        self._enter("nft_loan", loan_id)
        for loans in self.nft.values():
            for loan in loans:
                if loan.id == loan_id:
                    return loan
        raise AssertionError(f"unknown nft loan {loan_id}")

    async def ping(self) -> None:
        self._enter("ping")


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def test_engine():
    """Create an in-memory SQLite async engine for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def test_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async_session = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )

    async with async_session() as session:
        yield session


# =============================================================================
# Fake Client Fixtures
# =============================================================================

@pytest.fixture
def ledger_client() -> FakeLedgerClient:
    """Create a fake ledger with the default wallets."""
    return FakeLedgerClient()


# =============================================================================
# App Client Fixtures
# =============================================================================

def install_overrides(session: AsyncSession, ledger: LedgerClient) -> None:
    """Point the app at the test session and a fake ledger."""
    async def override_get_snapshot_repository():
        return PostgresSnapshotRepository(session)

    def override_get_ledger_client():
        return ledger

    app.dependency_overrides[get_snapshot_repository] = override_get_snapshot_repository
    app.dependency_overrides[get_ledger_client] = override_get_ledger_client


@pytest_asyncio.fixture
async def client(
    test_session: AsyncSession,
    ledger_client: FakeLedgerClient,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client with mocked dependencies.

    This client:
    - Uses an in-memory SQLite database
    - Reads loans from the fake ledger (mutable through `ledger_client`)
    """
    install_overrides(test_session, ledger_client)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# =============================================================================
# Helper Fixtures
# =============================================================================

@pytest.fixture
def perfect_score_request() -> dict:
    """POST /v1/aura/score body with four repaid, claimed BNPL loans."""
    return {
        "now": NOW,
        "bnpl_loans": [
            {
                "id": i,
                "status": "REPAID",
                "installments_paid": 4,
                "product_price": str(ETH),
                "created_at": NOW - 10 * DAY,
            }
            for i in (1, 2, 3, 4)
        ],
        "nft_loans": [],
    }
