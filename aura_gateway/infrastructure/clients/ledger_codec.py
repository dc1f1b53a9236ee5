"""
Ledger record codec.

Translates the ledger read gateway's JSON bodies into validated scoring
records. The ledger encodes statuses as small integers and monetary amounts
as decimal strings (wei) or integers; this is the only module that knows
those encodings.
"""

import re
from typing import Any, Dict, List

from aura_gateway.domain.exceptions import LedgerDataException
from aura_gateway.service.scoring import (
    LoanRecord,
    LoanStatus,
    NFTLoanRecord,
    NFTLoanStatus,
)

BNPL_STATUS_BY_CODE = {
    0: LoanStatus.ACTIVE,
    1: LoanStatus.REPAID,
    2: LoanStatus.DEFAULTED,
}

NFT_STATUS_BY_CODE = {
    0: NFTLoanStatus.ACTIVE,
    1: NFTLoanStatus.REPAID,
    2: NFTLoanStatus.DEFAULTED,
    3: NFTLoanStatus.LIQUIDATED,
}

_INTEGER = re.compile(r"^-?\d+$")


def _require(data: Any, key: str, what: str) -> Any:
    if not isinstance(data, dict):
        raise LedgerDataException(f"{what}: expected an object, got {type(data).__name__}")
    if key not in data or data[key] is None:
        raise LedgerDataException(f"{what}: missing field '{key}'")
    return data[key]


def parse_int(data: Dict[str, Any], key: str, what: str) -> int:
    """Read an integer field that may be encoded as a JSON number or decimal string."""
    value = _require(data, key, what)
    if isinstance(value, bool):
        raise LedgerDataException(f"{what}: field '{key}' must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and _INTEGER.match(value.strip()):
        return int(value.strip())
    raise LedgerDataException(f"{what}: field '{key}' must be an integer, got {value!r}")


def _optional_str(data: Dict[str, Any], key: str) -> str:
    value = data.get(key)
    return value if isinstance(value, str) else ""


def _optional_int(data: Dict[str, Any], key: str, what: str) -> int:
    if data.get(key) is None:
        return 0
    return parse_int(data, key, what)


def _check(record, errors: List[str]):
    if errors:
        raise LedgerDataException("; ".join(errors))
    return record


def parse_loan_ids(data: Any, what: str = "loan ids") -> List[int]:
    """Parse a `{"loan_ids": [...]}` body."""
    raw_ids = _require(data, "loan_ids", what)
    if not isinstance(raw_ids, list):
        raise LedgerDataException(f"{what}: 'loan_ids' must be a list")

    loan_ids = []
    for index, raw in enumerate(raw_ids):
        loan_id = parse_int({"id": raw}, "id", f"{what}[{index}]")
        if loan_id < 0:
            raise LedgerDataException(f"{what}[{index}]: loan id must be non-negative")
        loan_ids.append(loan_id)
    return loan_ids


def parse_bnpl_status(code: int) -> LoanStatus:
    try:
        return BNPL_STATUS_BY_CODE[code]
    except KeyError:
        raise LedgerDataException(f"unknown BNPL loan status code {code}") from None


def parse_nft_status(code: int) -> NFTLoanStatus:
    try:
        return NFT_STATUS_BY_CODE[code]
    except KeyError:
        raise LedgerDataException(f"unknown NFT loan status code {code}") from None


def parse_bnpl_loan(data: Any, max_installments: int = 4) -> LoanRecord:
    """
    Parse a BNPL loan body into a LoanRecord.

    The returned record has collateral_locked=False; collateral custody is
    read from the vault separately.

    Raises:
        LedgerDataException: On missing fields, bad encodings, unknown
            status codes or values the record rejects
    """
    what = "bnpl loan"
    loan_id = parse_int(data, "id", what)
    what = f"bnpl loan {loan_id}"

    record = LoanRecord(
        id=loan_id,
        status=parse_bnpl_status(parse_int(data, "status", what)),
        installments_paid=parse_int(data, "installmentsPaid", what),
        product_price=parse_int(data, "productPrice", what),
        next_due_timestamp=parse_int(data, "nextDueTimestamp", what),
        collateral_locked=False,
        created_at=parse_int(data, "createdAt", what),
        buyer=_optional_str(data, "buyer"),
        merchant=_optional_str(data, "merchant"),
        product_id=_optional_int(data, "productId", what),
        total_repaid=_optional_int(data, "totalRepaid", what),
        installment_amount=_optional_int(data, "installmentAmount", what),
    )
    return _check(record, record.validate(max_installments))


def parse_nft_loan(data: Any) -> NFTLoanRecord:
    """
    Parse an NFT-backed loan body into an NFTLoanRecord.

    `totalDue` is derived from principal and interest and not read.

    Raises:
        LedgerDataException: On missing fields, bad encodings, unknown
            status codes or values the record rejects
    """
    what = "nft loan"
    loan_id = parse_int(data, "id", what)
    what = f"nft loan {loan_id}"

    record = NFTLoanRecord(
        id=loan_id,
        status=parse_nft_status(parse_int(data, "status", what)),
        loan_amount=parse_int(data, "loanAmount", what),
        interest_amount=parse_int(data, "interestAmount", what),
        total_repaid=parse_int(data, "totalRepaid", what),
        due_timestamp=parse_int(data, "dueTimestamp", what),
        created_at=parse_int(data, "createdAt", what),
        borrower=_optional_str(data, "borrower"),
        nft_contract=_optional_str(data, "nftContract"),
        token_id=_optional_int(data, "tokenId", what),
    )
    return _check(record, record.validate())


def parse_collateral_locked(data: Any, loan_id: int) -> bool:
    """Parse a vault collateral body and return its `locked` flag."""
    locked = _require(data, "locked", f"collateral of loan {loan_id}")
    if not isinstance(locked, bool):
        raise LedgerDataException(
            f"collateral of loan {loan_id}: field 'locked' must be a boolean"
        )
    return locked
