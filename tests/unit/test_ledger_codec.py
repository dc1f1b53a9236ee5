"""
Unit Tests for the ledger record codec.

These tests verify:
1. Status codes map to loan statuses (and unknown codes are rejected)
2. Amounts are accepted as JSON numbers or decimal strings
3. Missing or malformed fields raise LedgerDataException
4. Records the scoring model would reject are rejected at the boundary
"""

import pytest

from aura_gateway.domain.exceptions import LedgerDataException
from aura_gateway.infrastructure.clients.ledger_codec import (
    parse_bnpl_loan,
    parse_bnpl_status,
    parse_collateral_locked,
    parse_int,
    parse_loan_ids,
    parse_nft_loan,
    parse_nft_status,
)
from aura_gateway.service.scoring import LoanStatus, NFTLoanStatus


# =============================================================================
# Test Fixtures
# =============================================================================

def bnpl_body(**overrides) -> dict:
    body = {
        "id": 3,
        "buyer": "0x52908400098527886e0f7030069857d2e4169ee7",
        "merchant": "0x8617e340b3d01fa5f11f306f4090fd50e238070d",
        "productId": 12,
        "productPrice": "2500000000000000000",
        "totalRepaid": "1250000000000000000",
        "installmentAmount": "625000000000000000",
        "installmentsPaid": 2,
        "nextDueTimestamp": 1767225600,
        "createdAt": 1762000000,
        "status": 0,
    }
    body.update(overrides)
    return body


def nft_body(**overrides) -> dict:
    body = {
        "id": 7,
        "borrower": "0x52908400098527886e0f7030069857d2e4169ee7",
        "nftContract": "0xde0b295669a9fd93d5f28d9ec85e40f4cb697bae",
        "tokenId": "42",
        "loanAmount": "500000000000000000",
        "interestAmount": "25000000000000000",
        "totalDue": "525000000000000000",
        "totalRepaid": "0",
        "dueTimestamp": 1767225600,
        "createdAt": 1762000000,
        "status": 3,
    }
    body.update(overrides)
    return body


# =============================================================================
# Primitive Tests
# =============================================================================

class TestPrimitives:
    """Tests for integer and id decoding."""

    def test_parse_int_accepts_decimal_strings(self):
        assert parse_int({"v": "123456789012345678901234"}, "v", "x") == 123456789012345678901234
        assert parse_int({"v": 17}, "v", "x") == 17

    @pytest.mark.parametrize("value", [True, 1.5, "0x10", "", "12abc", [1]])
    def test_parse_int_rejects_non_integers(self, value):
        with pytest.raises(LedgerDataException):
            parse_int({"v": value}, "v", "x")

    def test_parse_int_missing_field(self):
        with pytest.raises(LedgerDataException) as exc_info:
            parse_int({}, "createdAt", "bnpl loan 3")

        assert "missing field 'createdAt'" in exc_info.value.message

    def test_parse_loan_ids(self):
        assert parse_loan_ids({"loan_ids": [1, "2", 30]}) == [1, 2, 30]
        assert parse_loan_ids({"loan_ids": []}) == []

    @pytest.mark.parametrize(
        "body",
        [{}, {"loan_ids": "1,2"}, {"loan_ids": [-1]}, [1, 2], {"loan_ids": None}],
    )
    def test_parse_loan_ids_rejects_malformed_bodies(self, body):
        with pytest.raises(LedgerDataException):
            parse_loan_ids(body)


# =============================================================================
# Status Tests
# =============================================================================

class TestStatusCodes:
    """Tests for ledger status code mapping."""

    @pytest.mark.parametrize(
        "code,status",
        [(0, LoanStatus.ACTIVE), (1, LoanStatus.REPAID), (2, LoanStatus.DEFAULTED)],
    )
    def test_bnpl_status_codes(self, code, status):
        assert parse_bnpl_status(code) == status

    @pytest.mark.parametrize(
        "code,status",
        [
            (0, NFTLoanStatus.ACTIVE),
            (1, NFTLoanStatus.REPAID),
            (2, NFTLoanStatus.DEFAULTED),
            (3, NFTLoanStatus.LIQUIDATED),
        ],
    )
    def test_nft_status_codes(self, code, status):
        assert parse_nft_status(code) == status

    def test_unknown_bnpl_status_code(self):
        """Code 3 exists for NFT loans only."""
        with pytest.raises(LedgerDataException):
            parse_bnpl_status(3)

    def test_unknown_nft_status_code(self):
        with pytest.raises(LedgerDataException):
            parse_nft_status(4)


# =============================================================================
# Record Tests
# =============================================================================

class TestRecords:
    """Tests for full loan record decoding."""

    def test_parse_bnpl_loan(self):
        loan = parse_bnpl_loan(bnpl_body())

        assert loan.id == 3
        assert loan.status == LoanStatus.ACTIVE
        assert loan.installments_paid == 2
        assert loan.product_price == 2_500_000_000_000_000_000
        assert loan.next_due_timestamp == 1767225600
        assert loan.created_at == 1762000000
        assert loan.product_id == 12
        # Custody comes from the vault, never from the loan body
        assert loan.collateral_locked is False

    def test_parse_bnpl_loan_without_optional_fields(self):
        body = bnpl_body()
        for key in ("buyer", "merchant", "productId", "totalRepaid", "installmentAmount"):
            del body[key]

        loan = parse_bnpl_loan(body)

        assert loan.buyer == ""
        assert loan.total_repaid == 0

    def test_parse_bnpl_loan_rejects_too_many_installments(self):
        with pytest.raises(LedgerDataException) as exc_info:
            parse_bnpl_loan(bnpl_body(installmentsPaid=5))

        assert "installments_paid" in exc_info.value.message

    def test_parse_bnpl_loan_rejects_unknown_status(self):
        with pytest.raises(LedgerDataException):
            parse_bnpl_loan(bnpl_body(status=9))

    def test_parse_bnpl_loan_rejects_non_object(self):
        with pytest.raises(LedgerDataException):
            parse_bnpl_loan(["not", "a", "loan"])

    def test_parse_nft_loan(self):
        loan = parse_nft_loan(nft_body())

        assert loan.id == 7
        assert loan.status == NFTLoanStatus.LIQUIDATED
        assert loan.loan_amount == 500_000_000_000_000_000
        assert loan.total_due == 525_000_000_000_000_000
        assert loan.token_id == 42

    def test_parse_nft_loan_rejects_negative_amount(self):
        with pytest.raises(LedgerDataException):
            parse_nft_loan(nft_body(loanAmount="-1"))

    def test_parse_nft_loan_missing_due_timestamp(self):
        body = nft_body()
        del body["dueTimestamp"]

        with pytest.raises(LedgerDataException):
            parse_nft_loan(body)

    def test_parse_collateral_locked(self):
        assert parse_collateral_locked({"locked": True, "amount": "100"}, 3) is True
        assert parse_collateral_locked({"locked": False}, 3) is False

    @pytest.mark.parametrize("body", [{}, {"locked": 1}, {"locked": "true"}])
    def test_parse_collateral_locked_requires_boolean(self, body):
        with pytest.raises(LedgerDataException):
            parse_collateral_locked(body, 3)
