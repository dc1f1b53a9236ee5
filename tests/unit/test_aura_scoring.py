"""
Unit Tests for the Aura Scoring Module.

These tests verify:
1. Metrics aggregation from BNPL and NFT loan records
2. Each of the six factors and their clamps
3. Final score bounds and the empty-history baseline
4. Tier classification boundaries
5. Input validation (malformed records, bad timestamps)
6. Improvement tips and explanations

Test Categories:
- test_aggregate_*: Metrics aggregation tests
- test_factor_*: Individual factor tests
- test_score_*: End-to-end score tests
- test_tier_*: Tier boundary tests
- test_invalid_*: Validation tests
- test_tips_*: Insight tests
"""

import math

import pytest
from pydantic import ValidationError

from aura_gateway.service.scoring import (
    FACTOR_NAMES,
    AuraMetrics,
    AuraTier,
    InvalidLoanHistoryError,
    LoanRecord,
    LoanStatus,
    NFTLoanRecord,
    NFTLoanStatus,
    ScoringSettings,
    aggregate_metrics,
    compute_aura_score,
    explain_aura,
    get_tier_for_score,
    improvement_tips,
    round_half_up,
    score_metrics,
)


# =============================================================================
# Test Fixtures
# =============================================================================

NOW = 1_767_225_600  # 2026-01-01T00:00:00Z
DAY = 86400
ETH = 10**18


def make_bnpl(
    loan_id: int,
    status: LoanStatus = LoanStatus.REPAID,
    installments_paid: int = 4,
    product_price: int = ETH,
    next_due_timestamp: int = 0,
    collateral_locked: bool = False,
    created_at: int = NOW - 10 * DAY,
) -> LoanRecord:
    """Helper to create a BNPL loan record."""
    return LoanRecord(
        id=loan_id,
        status=status,
        installments_paid=installments_paid,
        product_price=product_price,
        next_due_timestamp=next_due_timestamp,
        collateral_locked=collateral_locked,
        created_at=created_at,
    )


def make_nft(
    loan_id: int,
    status: NFTLoanStatus = NFTLoanStatus.REPAID,
    loan_amount: int = ETH // 2,
    due_timestamp: int = NOW + 7 * DAY,
    created_at: int = NOW - 10 * DAY,
) -> NFTLoanRecord:
    """Helper to create an NFT-backed loan record."""
    return NFTLoanRecord(
        id=loan_id,
        status=status,
        loan_amount=loan_amount,
        interest_amount=loan_amount // 20,
        total_repaid=0,
        due_timestamp=due_timestamp,
        created_at=created_at,
    )


def factor_scores(result) -> dict:
    return {f.name: f.score for f in result.factors}


# =============================================================================
# Aggregation Tests
# =============================================================================

class TestAggregation:
    """Tests for aggregate_metrics."""

    def test_aggregate_empty_history(self):
        """No loans should aggregate to all zeros without history."""
        metrics = aggregate_metrics([], [], NOW)

        assert metrics == AuraMetrics()
        assert metrics.has_history is False

    def test_aggregate_counts_by_status(self):
        """Loans should be counted by status for both loan types."""
        bnpl = [
            make_bnpl(1, LoanStatus.ACTIVE, 2, next_due_timestamp=NOW + DAY),
            make_bnpl(2, LoanStatus.REPAID),
            make_bnpl(3, LoanStatus.DEFAULTED, 1),
        ]
        nft = [
            make_nft(10, NFTLoanStatus.ACTIVE),
            make_nft(11, NFTLoanStatus.REPAID),
            make_nft(12, NFTLoanStatus.DEFAULTED),
            make_nft(13, NFTLoanStatus.LIQUIDATED),
        ]

        metrics = aggregate_metrics(bnpl, nft, NOW)

        assert metrics.total_bnpl_loans == 3
        assert metrics.active_bnpl_loans == 1
        assert metrics.repaid_bnpl_loans == 1
        assert metrics.defaulted_bnpl_loans == 1
        assert metrics.total_installments_paid == 7
        assert metrics.max_possible_installments == 12
        assert metrics.total_bnpl_volume == 3 * ETH

        assert metrics.total_nft_loans == 4
        assert metrics.active_nft_loans == 1
        assert metrics.repaid_nft_loans == 1
        # Liquidated counts as defaulted
        assert metrics.defaulted_nft_loans == 2
        assert metrics.total_nft_volume == 4 * (ETH // 2)
        assert metrics.has_history is True

    def test_aggregate_overdue_boundary_is_strict(self):
        """A loan due exactly now is on time; one second earlier is late."""
        due_now = aggregate_metrics(
            [make_bnpl(1, LoanStatus.ACTIVE, 1, next_due_timestamp=NOW)], [], NOW
        )
        assert due_now.on_time_bnpl_loans == 1
        assert due_now.late_bnpl_loans == 0

        overdue = aggregate_metrics(
            [make_bnpl(1, LoanStatus.ACTIVE, 1, next_due_timestamp=NOW - 1)], [], NOW
        )
        assert overdue.on_time_bnpl_loans == 0
        assert overdue.late_bnpl_loans == 1

    def test_aggregate_nft_overdue_boundary(self):
        """NFT loans use the same strict comparison on due_timestamp."""
        metrics = aggregate_metrics(
            [],
            [
                make_nft(1, NFTLoanStatus.ACTIVE, due_timestamp=NOW),
                make_nft(2, NFTLoanStatus.ACTIVE, due_timestamp=NOW - 1),
            ],
            NOW,
        )
        assert metrics.on_time_nft_loans == 1
        assert metrics.late_nft_loans == 1

    def test_aggregate_collateral_only_counts_repaid_loans(self):
        """Collateral claimed/locked is tracked for REPAID BNPL loans only."""
        metrics = aggregate_metrics(
            [
                make_bnpl(1, LoanStatus.REPAID, collateral_locked=False),
                make_bnpl(2, LoanStatus.REPAID, collateral_locked=True),
                make_bnpl(3, LoanStatus.ACTIVE, 2, NOW + DAY, collateral_locked=True),
            ],
            [],
            NOW,
        )
        assert metrics.collateral_claimed == 1
        assert metrics.collateral_locked == 1

    def test_aggregate_first_loan_ignores_zero_timestamps(self):
        """The earliest non-zero createdAt across both types is used."""
        metrics = aggregate_metrics(
            [make_bnpl(1, created_at=0), make_bnpl(2, created_at=NOW - 5 * DAY)],
            [make_nft(1, created_at=NOW - 40 * DAY)],
            NOW,
        )
        assert metrics.first_loan_timestamp == NOW - 40 * DAY

    def test_aggregate_first_loan_zero_when_unknown(self):
        metrics = aggregate_metrics([make_bnpl(1, created_at=0)], [], NOW)
        assert metrics.first_loan_timestamp == 0


# =============================================================================
# Factor Tests
# =============================================================================

class TestFactors:
    """Tests for the six factor calculations."""

    def test_factor_repayment_single_default(self):
        """A single defaulted BNPL loan: ratio 0 -> -100, minus 75."""
        result = compute_aura_score([make_bnpl(1, LoanStatus.DEFAULTED, 1)], [], NOW)

        assert factor_scores(result)["Repayment Reliability"] == -175

    @pytest.mark.parametrize(
        "repaid,defaulted,expected",
        [
            (10, 0, 200),
            (9, 1, 170 - 75),
            (4, 1, 130 - 75),
            (3, 2, 60 - 150),
            (2, 3, 0 - 225),
            (1, 4, -300),  # -100 - 300 clamps to -300
        ],
    )
    def test_factor_repayment_ladder(self, repaid, defaulted, expected):
        bnpl = [make_bnpl(i) for i in range(repaid)]
        bnpl += [
            make_bnpl(100 + i, LoanStatus.DEFAULTED, 0) for i in range(defaulted)
        ]
        result = compute_aura_score(bnpl, [], NOW)

        assert factor_scores(result)["Repayment Reliability"] == expected

    def test_factor_repayment_zero_without_closed_loans(self):
        result = compute_aura_score(
            [make_bnpl(1, LoanStatus.ACTIVE, 1, next_due_timestamp=NOW + DAY)], [], NOW
        )
        assert factor_scores(result)["Repayment Reliability"] == 0

    def test_factor_payment_discipline_perfect(self):
        result = compute_aura_score([make_bnpl(i) for i in range(3)], [], NOW)
        assert factor_scores(result)["Payment Discipline"] == 150

    def test_factor_payment_discipline_rounds_half_up(self):
        """1 of 16 installments is 12.5 points, which must round to 13."""
        bnpl = [make_bnpl(1, LoanStatus.DEFAULTED, 1)]
        bnpl += [make_bnpl(i, LoanStatus.DEFAULTED, 0) for i in range(2, 5)]

        result = compute_aura_score(bnpl, [], NOW)

        assert factor_scores(result)["Payment Discipline"] == 13 - 50

    def test_factor_payment_discipline_active_loans(self):
        """Overdue loans cost 30/25 points; on-time loans add 10/8."""
        bnpl = [
            make_bnpl(1, LoanStatus.ACTIVE, 2, next_due_timestamp=NOW - DAY),
            make_bnpl(2, LoanStatus.ACTIVE, 2, next_due_timestamp=NOW + DAY),
        ]
        nft = [
            make_nft(1, NFTLoanStatus.ACTIVE, due_timestamp=NOW - DAY),
            make_nft(2, NFTLoanStatus.ACTIVE, due_timestamp=NOW + DAY),
        ]
        result = compute_aura_score(bnpl, nft, NOW)

        # 4/8 installments -> 100 - 50 = 50; -30 + 10 - 25 + 8
        assert factor_scores(result)["Payment Discipline"] == 50 - 30 + 10 - 25 + 8

    def test_factor_payment_discipline_floor(self):
        bnpl = [
            make_bnpl(i, LoanStatus.ACTIVE, 0, next_due_timestamp=NOW - DAY)
            for i in range(5)
        ]
        result = compute_aura_score(bnpl, [], NOW)
        assert factor_scores(result)["Payment Discipline"] == -100

    @pytest.mark.parametrize(
        "loan_count,expected",
        [(1, 10), (2, 25), (3, 40), (5, 60), (7, 80), (10, 100)],
    )
    def test_factor_borrowing_experience_ladder(self, loan_count, expected):
        bnpl = [make_bnpl(i, created_at=NOW - DAY) for i in range(loan_count)]
        result = compute_aura_score(bnpl, [], NOW)
        assert factor_scores(result)["Borrowing Experience"] == expected

    def test_factor_borrowing_experience_age_bonus(self):
        """Each full 30 days of history adds 5 points."""
        result = compute_aura_score([make_bnpl(1, created_at=NOW - 95 * DAY)], [], NOW)
        assert factor_scores(result)["Borrowing Experience"] == 10 + 15

    def test_factor_borrowing_experience_age_bonus_capped(self):
        result = compute_aura_score([make_bnpl(1, created_at=NOW - 400 * DAY)], [], NOW)
        assert factor_scores(result)["Borrowing Experience"] == 10 + 20

    def test_factor_borrowing_experience_clamped_at_100(self):
        bnpl = [make_bnpl(i, created_at=NOW - 400 * DAY) for i in range(10)]
        result = compute_aura_score(bnpl, [], NOW)
        assert factor_scores(result)["Borrowing Experience"] == 100

    def test_factor_borrowing_experience_future_first_loan(self):
        """A first loan after `now` gives a negative age bonus, clamped at 0."""
        result = compute_aura_score([make_bnpl(1, created_at=NOW + 31 * DAY)], [], NOW)
        assert factor_scores(result)["Borrowing Experience"] == 0

    def test_factor_portfolio_diversity(self):
        both = compute_aura_score([make_bnpl(1)], [make_nft(1)], NOW)
        bnpl_only = compute_aura_score([make_bnpl(1)], [], NOW)
        nft_only = compute_aura_score([], [make_nft(1)], NOW)
        none = compute_aura_score([], [], NOW)

        assert factor_scores(both)["Portfolio Diversity"] == 50
        assert factor_scores(bnpl_only)["Portfolio Diversity"] == 20
        assert factor_scores(nft_only)["Portfolio Diversity"] == 20
        assert factor_scores(none)["Portfolio Diversity"] == 0
        assert both.factor("Portfolio Diversity").description == "Both BNPL & NFT loans used"
        assert nft_only.factor("Portfolio Diversity").description == "NFT only"

    def test_factor_collateral_partially_claimed(self):
        result = compute_aura_score(
            [make_bnpl(1), make_bnpl(2, collateral_locked=True)], [], NOW
        )
        factor = result.factor("Collateral Behavior")
        assert factor.score == 25
        assert factor.description == "1 claimed, 1 still locked"

    def test_factor_collateral_default_penalty(self):
        """Defaulted BNPL loans count as collateral events even with nothing repaid."""
        result = compute_aura_score([make_bnpl(1, LoanStatus.DEFAULTED, 2)], [], NOW)
        assert factor_scores(result)["Collateral Behavior"] == -25

    def test_factor_collateral_zero_without_events(self):
        result = compute_aura_score(
            [make_bnpl(1, LoanStatus.ACTIVE, 1, next_due_timestamp=NOW + DAY)], [], NOW
        )
        assert factor_scores(result)["Collateral Behavior"] == 0

    def test_factor_nft_track_record(self):
        perfect = compute_aura_score([], [make_nft(1), make_nft(2)], NOW)
        mixed = compute_aura_score(
            [], [make_nft(1), make_nft(2, NFTLoanStatus.LIQUIDATED)], NOW
        )
        active_only = compute_aura_score([], [make_nft(1, NFTLoanStatus.ACTIVE)], NOW)
        none = compute_aura_score([make_bnpl(1)], [], NOW)

        assert factor_scores(perfect)["NFT Lending Track Record"] == 50
        # round(0.5 * 80) - 30 - 20
        assert factor_scores(mixed)["NFT Lending Track Record"] == -10
        assert factor_scores(active_only)["NFT Lending Track Record"] == 0
        assert factor_scores(none)["NFT Lending Track Record"] == 0
        assert mixed.factor("NFT Lending Track Record").description == "1/2 NFT loans repaid"
        assert none.factor("NFT Lending Track Record").description == "No NFT lending history"

    def test_round_half_up(self):
        assert round_half_up(12.5) == 13
        assert round_half_up(2.5) == 3
        assert round_half_up(0.5) == 1
        assert round_half_up(12.49) == 12
        assert round_half_up(0) == 0


# =============================================================================
# Score Tests
# =============================================================================

class TestScore:
    """End-to-end tests for compute_aura_score."""

    def test_score_empty_history_baseline(self):
        """No history scores exactly 500 with six zero factors."""
        result = compute_aura_score([], [], NOW)

        assert result.score == 500
        assert result.has_history is False
        assert [f.name for f in result.factors] == list(FACTOR_NAMES)
        assert all(f.score == 0 for f in result.factors)
        assert result.tier.tier == AuraTier.NEUTRAL

    def test_score_perfect_bnpl_history(self):
        """Four fully repaid, claimed BNPL loans."""
        result = compute_aura_score([make_bnpl(i) for i in range(4)], [], NOW)

        scores = factor_scores(result)
        assert scores["Repayment Reliability"] == 200
        assert scores["Payment Discipline"] == 150
        assert scores["Borrowing Experience"] == 40
        assert scores["Portfolio Diversity"] == 20
        assert scores["Collateral Behavior"] == 50
        assert scores["NFT Lending Track Record"] == 0
        assert result.score == 960
        assert result.tier.tier == AuraTier.LEGENDARY

    def test_score_is_deterministic(self):
        bnpl = [
            make_bnpl(1),
            make_bnpl(2, LoanStatus.ACTIVE, 1, next_due_timestamp=NOW - DAY),
        ]
        nft = [make_nft(1, NFTLoanStatus.LIQUIDATED)]

        assert compute_aura_score(bnpl, nft, NOW) == compute_aura_score(bnpl, nft, NOW)

    def test_score_records_evaluation_time(self):
        result = compute_aura_score([], [], NOW)
        assert result.evaluated_at == NOW

    @pytest.mark.parametrize(
        "bnpl,nft",
        [
            ([make_bnpl(i, LoanStatus.DEFAULTED, 0) for i in range(20)],
             [make_nft(i, NFTLoanStatus.LIQUIDATED) for i in range(20)]),
            ([make_bnpl(i, created_at=NOW - 500 * DAY) for i in range(30)],
             [make_nft(i) for i in range(30)]),
            ([make_bnpl(i, LoanStatus.ACTIVE, 0, next_due_timestamp=NOW - DAY) for i in range(8)],
             [make_nft(i, NFTLoanStatus.ACTIVE, due_timestamp=NOW - DAY) for i in range(8)]),
        ],
    )
    def test_score_and_factors_stay_in_bounds(self, bnpl, nft):
        result = compute_aura_score(bnpl, nft, NOW)

        assert 0 <= result.score <= 1000
        for factor in result.factors:
            assert factor.min_score <= factor.score <= factor.max_score

    def test_score_all_defaults_is_broken(self):
        bnpl = [make_bnpl(i, LoanStatus.DEFAULTED, 0) for i in range(3)]
        nft = [make_nft(i, NFTLoanStatus.LIQUIDATED) for i in range(3)]

        result = compute_aura_score(bnpl, nft, NOW)

        # -300 - 50 + 60 + 50 - 50 - 50
        assert result.score == 160
        assert result.tier.tier == AuraTier.BROKEN

    def test_score_with_custom_base_score(self):
        settings = ScoringSettings(base_score=400)
        result = compute_aura_score([], [], NOW, settings)
        assert result.score == 400

    def test_score_metrics_directly(self):
        metrics = AuraMetrics(
            total_bnpl_loans=2,
            repaid_bnpl_loans=2,
            total_installments_paid=8,
            max_possible_installments=8,
            collateral_claimed=2,
            has_history=True,
        )
        result = score_metrics(metrics, NOW)
        # 200 + 150 + 25 + 20 + 50
        assert result.score == 945

    def test_to_dict_serializes_volumes_as_strings(self):
        result = compute_aura_score([make_bnpl(1, product_price=3 * ETH)], [], NOW)
        data = result.to_dict()

        assert data["metrics"]["total_bnpl_volume"] == str(3 * ETH)
        assert data["tier"]["name"] == "Legendary"
        assert len(data["factors"]) == 6


# =============================================================================
# Tier Tests
# =============================================================================

class TestTiers:
    """Tests for get_tier_for_score."""

    @pytest.mark.parametrize(
        "score,tier",
        [
            (1000, AuraTier.LEGENDARY),
            (850, AuraTier.LEGENDARY),
            (849, AuraTier.STRONG),
            (700, AuraTier.STRONG),
            (699, AuraTier.RISING),
            (550, AuraTier.RISING),
            (549, AuraTier.NEUTRAL),
            (400, AuraTier.NEUTRAL),
            (399, AuraTier.WEAK),
            (200, AuraTier.WEAK),
            (199, AuraTier.BROKEN),
            (0, AuraTier.BROKEN),
        ],
    )
    def test_tier_boundaries(self, score, tier):
        assert get_tier_for_score(score).tier == tier

    def test_tier_below_every_threshold_is_unranked(self):
        assert get_tier_for_score(-1).tier == AuraTier.UNRANKED

    def test_tier_labels(self):
        info = get_tier_for_score(900)
        assert info.label == "Legendary Aura"
        assert info.description == "You are the gold standard of DeFi trustworthiness."


# =============================================================================
# Validation Tests
# =============================================================================

class TestValidation:
    """Tests for malformed input."""

    @pytest.mark.parametrize("now", [0, -1, True, "1767225600", None])
    def test_invalid_now(self, now):
        with pytest.raises(InvalidLoanHistoryError):
            compute_aura_score([], [], now)

    @pytest.mark.parametrize("now", [math.inf, -math.inf, math.nan])
    def test_invalid_non_finite_now(self, now):
        """Infinite or NaN timestamps are rejected before any factor runs."""
        with pytest.raises(InvalidLoanHistoryError) as exc_info:
            compute_aura_score([make_bnpl(1)], [], now)

        assert "finite" in str(exc_info.value)

    def test_float_now_is_accepted(self):
        result = compute_aura_score([make_bnpl(1)], [], NOW + 0.5)

        assert result.evaluated_at == NOW

    @pytest.mark.parametrize("installments_paid", ["4", 2.5, True, None])
    def test_invalid_installments_paid_type(self, installments_paid):
        """Non-integer counts are reported, never compared or coerced."""
        with pytest.raises(InvalidLoanHistoryError) as exc_info:
            compute_aura_score(
                [make_bnpl(1, installments_paid=installments_paid)], [], NOW
            )

        assert exc_info.value.errors == [
            f"bnpl loan 1: installments_paid must be an integer, got {installments_paid!r}"
        ]

    def test_invalid_field_types_on_both_loan_kinds(self):
        with pytest.raises(InvalidLoanHistoryError) as exc_info:
            compute_aura_score(
                [make_bnpl(1, product_price=float(ETH), collateral_locked="yes")],
                [make_nft(2, due_timestamp="soon")],
                NOW,
            )

        errors = exc_info.value.errors
        assert "bnpl loan 1: collateral_locked must be a bool" in errors
        assert any("product_price must be an integer" in e for e in errors)
        assert any(e.startswith("nft loan 2: due_timestamp") for e in errors)

    def test_invalid_metrics_types(self):
        with pytest.raises(InvalidLoanHistoryError) as exc_info:
            score_metrics(AuraMetrics(total_bnpl_loans=1.0, has_history=1), NOW)

        assert "total_bnpl_loans must be an integer, got 1.0" in exc_info.value.errors
        assert "has_history must be a bool, got 1" in exc_info.value.errors

    def test_invalid_installments_paid(self):
        with pytest.raises(InvalidLoanHistoryError) as exc_info:
            compute_aura_score([make_bnpl(1, installments_paid=5)], [], NOW)

        assert "installments_paid" in str(exc_info.value)

    def test_invalid_records_report_every_error(self):
        """All problems are collected before failing."""
        with pytest.raises(InvalidLoanHistoryError) as exc_info:
            compute_aura_score(
                [make_bnpl(1, product_price=-1)],
                [make_nft(2, loan_amount=-5)],
                NOW,
            )

        assert len(exc_info.value.errors) == 2
        assert isinstance(exc_info.value, ValueError)

    def test_invalid_status_type(self):
        with pytest.raises(InvalidLoanHistoryError):
            compute_aura_score([make_bnpl(1, status="REPAID_ISH")], [], NOW)

    def test_invalid_duplicate_loan_ids(self):
        with pytest.raises(InvalidLoanHistoryError) as exc_info:
            compute_aura_score([make_bnpl(1), make_bnpl(1)], [], NOW)

        assert "duplicate bnpl loan id 1" in exc_info.value.errors

    def test_invalid_record_type(self):
        with pytest.raises(InvalidLoanHistoryError):
            compute_aura_score([make_nft(1)], [], NOW)

    def test_invalid_inconsistent_metrics(self):
        with pytest.raises(InvalidLoanHistoryError):
            score_metrics(AuraMetrics(total_bnpl_loans=1, has_history=True), NOW)

    def test_invalid_negative_metrics(self):
        with pytest.raises(InvalidLoanHistoryError):
            score_metrics(AuraMetrics(late_bnpl_loans=-1), NOW)

    def test_invalid_scoring_settings(self):
        with pytest.raises(ValidationError):
            ScoringSettings(score_floor=600, base_score=500)


# =============================================================================
# Insight Tests
# =============================================================================

class TestInsights:
    """Tests for improvement tips and explanations."""

    def test_tips_no_history(self):
        tips = improvement_tips(compute_aura_score([], [], NOW))

        assert len(tips) == 1
        assert tips[0].priority == "high"
        assert tips[0].tip == "Take your first loan to start building your Aura score."

    def test_tips_legendary_bnpl_only(self):
        tips = improvement_tips(compute_aura_score([make_bnpl(i) for i in range(4)], [], NOW))
        texts = [t.tip for t in tips]

        assert "Try an NFT-backed loan to earn the Portfolio Diversity bonus (+50)." in texts
        assert "Your Aura is Legendary! Keep up the flawless record." in texts
        assert all(t.priority != "high" for t in tips)

    def test_tips_problems_are_high_priority(self):
        bnpl = [
            make_bnpl(1, LoanStatus.DEFAULTED, 1),
            make_bnpl(2, LoanStatus.ACTIVE, 1, next_due_timestamp=NOW - DAY),
        ]
        nft = [make_nft(1, NFTLoanStatus.ACTIVE, due_timestamp=NOW - DAY)]

        tips = improvement_tips(compute_aura_score(bnpl, nft, NOW))
        high = [t.tip for t in tips if t.priority == "high"]

        assert "Defaults heavily damage your score. Avoid missing payments." in high
        assert "You have 1 overdue BNPL loan(s). Pay them ASAP to stop score damage." in high
        assert "You have 1 overdue NFT loan(s). Repay before liquidation." in high

    def test_tips_nft_defaults_alone_do_not_trigger_defaults_tip(self):
        """The defaults tip looks at BNPL defaults only."""
        nft = [make_nft(1, NFTLoanStatus.LIQUIDATED), make_nft(2)]

        tips = improvement_tips(compute_aura_score([], nft, NOW))
        texts = [t.tip for t in tips]

        assert "Defaults heavily damage your score. Avoid missing payments." not in texts

    def test_tips_collateral_and_experience(self):
        tips = improvement_tips(
            compute_aura_score([], [make_nft(1)], NOW)
        )
        assert [t.priority for t in tips] == ["medium", "low"]

        tips = improvement_tips(
            compute_aura_score([make_bnpl(1, collateral_locked=True)], [], NOW)
        )
        texts = [t.tip for t in tips]
        assert (
            "Claim your collateral on 1 repaid loan(s) to boost your collateral score."
            in texts
        )
        assert (
            "Take more loans and repay them to build your Borrowing Experience score."
            in texts
        )

    def test_explain_aura(self):
        result = compute_aura_score([make_bnpl(i) for i in range(4)], [], NOW)
        text = explain_aura(result)

        assert text.startswith("Aura score 960 (Legendary Aura)")
        for name in FACTOR_NAMES:
            assert name in text
        assert "+200 [-300, +200]" in text

    def test_explain_aura_without_history(self):
        text = explain_aura(compute_aura_score([], [], NOW))
        assert "No loan history" in text
