"""HTTP implementation of LedgerClient."""

import asyncio
from typing import Any, List

import httpx
import structlog

from aura_gateway.core.config import settings
from aura_gateway.core.metrics import (
    record_ledger_fetch_failure,
    record_ledger_fetch_retry,
    record_ledger_fetch_success,
    track_ledger_fetch_latency,
)
from aura_gateway.domain.exceptions import (
    LedgerAPIException,
    LedgerAPITimeoutException,
    LedgerDataException,
)
from aura_gateway.domain.interfaces import LedgerClient
from aura_gateway.service.scoring import LoanRecord, NFTLoanRecord, scoring_settings

from .ledger_codec import (
    parse_bnpl_loan,
    parse_collateral_locked,
    parse_loan_ids,
    parse_nft_loan,
)

logger = structlog.get_logger(__name__)


class HttpLedgerClient(LedgerClient):
    """
    HTTP client for the ledger read gateway.

    Reads loans and collateral with retry logic and exponential backoff.
    Timeouts, connection errors and 5xx responses are retried; 404 and
    other 4xx responses fail immediately.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = (base_url or settings.ledger_api_url).rstrip("/")
        self._timeout = timeout or settings.ledger_api_timeout
        self._max_retries = max_retries or settings.ledger_max_retries
        self._transport = transport

    async def get_bnpl_loan_ids(self, wallet: str) -> List[int]:
        data = await self._get_json("bnpl_loan_ids", f"/bnpl/buyers/{wallet}/loans")
        return self._decode("bnpl_loan_ids", parse_loan_ids, data, "bnpl loan ids")

    async def get_bnpl_loan(self, loan_id: int) -> LoanRecord:
        data = await self._get_json("bnpl_loan", f"/bnpl/loans/{loan_id}")
        return self._decode(
            "bnpl_loan", parse_bnpl_loan, data, scoring_settings.installments_per_loan
        )

    async def get_collateral_locked(self, wallet: str, loan_id: int) -> bool:
        data = await self._get_json("collateral", f"/vault/collateral/{wallet}/{loan_id}")
        return self._decode("collateral", parse_collateral_locked, data, loan_id)

    async def get_nft_loan_ids(self, wallet: str) -> List[int]:
        data = await self._get_json("nft_loan_ids", f"/nft-loans/borrowers/{wallet}/loans")
        return self._decode("nft_loan_ids", parse_loan_ids, data, "nft loan ids")

    async def get_nft_loan(self, loan_id: int) -> NFTLoanRecord:
        data = await self._get_json("nft_loan", f"/nft-loans/loans/{loan_id}")
        return self._decode("nft_loan", parse_nft_loan, data)

    async def ping(self) -> None:
        """Single GET of the gateway's /health, without retries."""
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.get(f"{self._base_url}/health")
        except httpx.TimeoutException:
            raise LedgerAPITimeoutException()
        except httpx.HTTPError as e:
            raise LedgerAPIException(f"Ledger unreachable: {e}")

        if response.status_code >= 400:
            raise LedgerAPIException(
                message=f"Ledger health check failed: {response.status_code}",
                status_code=response.status_code,
            )

    def _decode(self, call: str, parser, data: Any, *args):
        try:
            return parser(data, *args)
        except LedgerDataException as e:
            record_ledger_fetch_failure(call, "bad_data")
            logger.error("ledger_bad_data", call=call, error=e.message)
            raise

    async def _get_json(self, call: str, path: str) -> Any:
        """
        GET a ledger resource and return its decoded JSON body.

        Implements retry logic with exponential backoff.
        """
        url = f"{self._base_url}{path}"
        last_exception = None

        for attempt in range(self._max_retries):
            try:
                with track_ledger_fetch_latency(call):
                    async with httpx.AsyncClient(
                        timeout=self._timeout,
                        transport=self._transport,
                    ) as client:
                        response = await client.get(url)

                if response.status_code == 404:
                    record_ledger_fetch_failure(call, "not_found")
                    raise LedgerAPIException(
                        message=f"Ledger resource not found: {path}",
                        status_code=404,
                    )

                if response.status_code >= 500:
                    record_ledger_fetch_failure(call, "error")
                    last_exception = LedgerAPIException(
                        message=f"Ledger API error: {response.status_code}",
                        status_code=response.status_code,
                    )
                    logger.warning(
                        "ledger_api_server_error",
                        call=call,
                        status_code=response.status_code,
                        attempt=attempt + 1,
                        max_retries=self._max_retries,
                    )
                elif response.status_code >= 400:
                    record_ledger_fetch_failure(call, "error")
                    raise LedgerAPIException(
                        message=f"Ledger API error: {response.text}",
                        status_code=response.status_code,
                    )
                else:
                    try:
                        data = response.json()
                    except ValueError:
                        record_ledger_fetch_failure(call, "bad_data")
                        raise LedgerDataException(f"{call}: response is not valid JSON")
                    record_ledger_fetch_success(call)
                    return data

            except httpx.TimeoutException:
                record_ledger_fetch_failure(call, "timeout")
                last_exception = LedgerAPITimeoutException()
                logger.warning(
                    "ledger_api_timeout",
                    call=call,
                    attempt=attempt + 1,
                    max_retries=self._max_retries,
                )
            except httpx.HTTPError as e:
                record_ledger_fetch_failure(call, "error")
                last_exception = LedgerAPIException(
                    message=f"Unexpected error: {str(e)}",
                )
                logger.error(
                    "ledger_api_error",
                    call=call,
                    attempt=attempt + 1,
                    error=str(e),
                )

            # Exponential backoff
            if attempt < self._max_retries - 1:
                record_ledger_fetch_retry(call)
                await asyncio.sleep(2**attempt * 0.1)

        raise last_exception or LedgerAPIException(f"Failed to fetch {path}")
