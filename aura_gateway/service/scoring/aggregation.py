"""
Metrics Aggregation for the Aura reputation engine.

This module reduces a wallet's full loan history into the fixed AuraMetrics
struct the factors are computed from:
- Status counts for BNPL and NFT-backed loans
- Installment completion and lending volume
- Overdue detection for active loans (against a caller-supplied "now")
- Collateral claim behaviour after repayment
- Age of the wallet's first loan

The reduction is exact: every count is an integer, every volume is summed in
the ledger's smallest unit, and nothing here reads the wall clock.
"""

import math
from typing import List, Sequence

from .models import (
    AuraMetrics,
    InvalidLoanHistoryError,
    LoanRecord,
    LoanStatus,
    NFTLoanRecord,
    NFTLoanStatus,
    is_integer,
)
from .settings import ScoringSettings, scoring_settings


def validate_now(now) -> List[str]:
    """Return validation errors for an evaluation timestamp."""
    if isinstance(now, bool) or not isinstance(now, (int, float)):
        return [f"now must be a unix timestamp in seconds, got {now!r}"]
    if not math.isfinite(now):
        return [f"now must be a finite timestamp, got {now!r}"]
    if now <= 0:
        return [f"now must be positive, got {now}"]
    return []


def validate_loan_history(
    bnpl_loans: Sequence[LoanRecord],
    nft_loans: Sequence[NFTLoanRecord],
    now,
    settings: ScoringSettings = scoring_settings,
) -> None:
    """
    Validate raw scoring input, collecting every problem before failing.

    Raises:
        InvalidLoanHistoryError: If the timestamp or any record is malformed
    """
    errors = validate_now(now)

    for loan in bnpl_loans:
        if not isinstance(loan, LoanRecord):
            errors.append(f"expected LoanRecord, got {type(loan).__name__}")
            continue
        errors.extend(loan.validate(settings.installments_per_loan))

    for loan in nft_loans:
        if not isinstance(loan, NFTLoanRecord):
            errors.append(f"expected NFTLoanRecord, got {type(loan).__name__}")
            continue
        errors.extend(loan.validate())

    errors.extend(_duplicate_id_errors("bnpl", bnpl_loans))
    errors.extend(_duplicate_id_errors("nft", nft_loans))

    if errors:
        raise InvalidLoanHistoryError(errors)


def _duplicate_id_errors(kind: str, loans: Sequence) -> List[str]:
    seen = set()
    duplicates = set()
    for loan in loans:
        loan_id = getattr(loan, "id", None)
        if not is_integer(loan_id):
            continue
        if loan_id in seen:
            duplicates.add(loan_id)
        seen.add(loan_id)
    return [f"duplicate {kind} loan id {loan_id}" for loan_id in sorted(duplicates)]


def aggregate_metrics(
    bnpl_loans: Sequence[LoanRecord],
    nft_loans: Sequence[NFTLoanRecord],
    now,
    settings: ScoringSettings = scoring_settings,
) -> AuraMetrics:
    """
    Reduce a wallet's loans into AuraMetrics.

    Algorithm:
        1. Count BNPL loans by status; sum installments paid and price volume
        2. Split ACTIVE BNPL loans into late (next due strictly before now)
           and on-time (due now or later)
        3. Split REPAID BNPL loans by whether collateral is still locked
        4. Count NFT loans by status; DEFAULTED and LIQUIDATED are both
           "closed, not repaid"
        5. Split ACTIVE NFT loans into late and on-time the same way
        6. Track the earliest non-zero creation timestamp across both kinds

    Edge Cases:
        - No loans at all: all-zero metrics with has_history=False. This is
          the valid "new wallet" state, not an error.
        - createdAt of 0 is treated as unknown and ignored for loan age.

    Args:
        bnpl_loans: All BNPL loans of the wallet
        nft_loans: All NFT-backed loans of the wallet
        now: Evaluation time in unix seconds (must be positive)
        settings: Scoring settings (uses defaults if not provided)

    Returns:
        The aggregated metrics

    Raises:
        InvalidLoanHistoryError: If the timestamp or any record is malformed
    """
    validate_loan_history(bnpl_loans, nft_loans, now, settings)

    active_bnpl = repaid_bnpl = defaulted_bnpl = 0
    installments_paid = 0
    bnpl_volume = 0
    late_bnpl = on_time_bnpl = 0
    collateral_claimed = collateral_locked = 0
    first_timestamp = None

    for loan in bnpl_loans:
        installments_paid += loan.installments_paid
        bnpl_volume += loan.product_price
        if loan.created_at > 0 and (first_timestamp is None or loan.created_at < first_timestamp):
            first_timestamp = loan.created_at

        if loan.status == LoanStatus.ACTIVE:
            active_bnpl += 1
            if loan.next_due_timestamp < now:
                late_bnpl += 1
            else:
                on_time_bnpl += 1
        elif loan.status == LoanStatus.REPAID:
            repaid_bnpl += 1
            if loan.collateral_locked:
                collateral_locked += 1
            else:
                collateral_claimed += 1
        elif loan.status == LoanStatus.DEFAULTED:
            defaulted_bnpl += 1

    active_nft = repaid_nft = defaulted_nft = 0
    nft_volume = 0
    late_nft = on_time_nft = 0

    for loan in nft_loans:
        nft_volume += loan.loan_amount
        if loan.created_at > 0 and (first_timestamp is None or loan.created_at < first_timestamp):
            first_timestamp = loan.created_at

        if loan.status == NFTLoanStatus.ACTIVE:
            active_nft += 1
            if loan.due_timestamp < now:
                late_nft += 1
            else:
                on_time_nft += 1
        elif loan.status == NFTLoanStatus.REPAID:
            repaid_nft += 1
        elif loan.status.is_closed_unpaid:
            defaulted_nft += 1

    total_bnpl = len(bnpl_loans)
    total_nft = len(nft_loans)

    return AuraMetrics(
        total_bnpl_loans=total_bnpl,
        active_bnpl_loans=active_bnpl,
        repaid_bnpl_loans=repaid_bnpl,
        defaulted_bnpl_loans=defaulted_bnpl,
        total_installments_paid=installments_paid,
        max_possible_installments=settings.installments_per_loan * total_bnpl,
        total_bnpl_volume=bnpl_volume,
        on_time_bnpl_loans=on_time_bnpl,
        late_bnpl_loans=late_bnpl,
        collateral_claimed=collateral_claimed,
        collateral_locked=collateral_locked,
        total_nft_loans=total_nft,
        active_nft_loans=active_nft,
        repaid_nft_loans=repaid_nft,
        defaulted_nft_loans=defaulted_nft,
        total_nft_volume=nft_volume,
        on_time_nft_loans=on_time_nft,
        late_nft_loans=late_nft,
        first_loan_timestamp=first_timestamp or 0,
        has_history=(total_bnpl + total_nft) > 0,
    )
