"""
Data models for Aura scoring.

These models represent the data structures used throughout the scoring pipeline,
from validated loan records to the final reputation result.
"""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import List, Optional, Tuple


class InvalidLoanHistoryError(ValueError):
    """Raised when loan records or metrics cannot be scored as given."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


def is_integer(value) -> bool:
    """True for ints; bools are rejected even though they subclass int."""
    return isinstance(value, int) and not isinstance(value, bool)


def type_errors(prefix: str, record, int_fields: Tuple[str, ...]) -> List[str]:
    """Errors for fields that are not plain integers, checked before any range."""
    return [
        f"{prefix}: {name} must be an integer, got {getattr(record, name)!r}"
        for name in int_fields
        if not is_integer(getattr(record, name))
    ]


class LoanStatus(str, Enum):
    """Lifecycle state of a BNPL loan."""
    ACTIVE = "ACTIVE"
    REPAID = "REPAID"
    DEFAULTED = "DEFAULTED"


class NFTLoanStatus(str, Enum):
    """Lifecycle state of an NFT-collateralized loan."""
    ACTIVE = "ACTIVE"
    REPAID = "REPAID"
    DEFAULTED = "DEFAULTED"
    LIQUIDATED = "LIQUIDATED"

    @property
    def is_closed_unpaid(self) -> bool:
        return self in (NFTLoanStatus.DEFAULTED, NFTLoanStatus.LIQUIDATED)


@dataclass(frozen=True)
class LoanRecord:
    """
    A single BNPL purchase as recorded on the ledger.

    Attributes:
        id: Ledger loan identifier
        status: Current lifecycle state
        installments_paid: Installments paid so far (0-4)
        product_price: Purchase price in the smallest monetary unit (wei)
        next_due_timestamp: Unix seconds of the next installment (ACTIVE only)
        collateral_locked: True while the vault still holds the collateral
        created_at: Unix seconds when the loan was opened
    """
    id: int
    status: LoanStatus
    installments_paid: int
    product_price: int
    next_due_timestamp: int
    collateral_locked: bool
    created_at: int
    buyer: str = ""
    merchant: str = ""
    product_id: int = 0
    total_repaid: int = 0
    installment_amount: int = 0

    INT_FIELDS = (
        "id",
        "installments_paid",
        "product_price",
        "next_due_timestamp",
        "created_at",
        "product_id",
        "total_repaid",
        "installment_amount",
    )

    def validate(self, max_installments: int = 4) -> List[str]:
        errors = []
        prefix = f"bnpl loan {self.id!r}"

        if not isinstance(self.status, LoanStatus):
            errors.append(f"{prefix}: unknown status {self.status!r}")
        if not isinstance(self.collateral_locked, bool):
            errors.append(f"{prefix}: collateral_locked must be a bool")
        type_problems = type_errors(prefix, self, self.INT_FIELDS)
        if type_problems:
            return errors + type_problems

        if self.id < 0:
            errors.append(f"{prefix}: id must be non-negative")
        if not 0 <= self.installments_paid <= max_installments:
            errors.append(
                f"{prefix}: installments_paid must be within [0, {max_installments}]"
            )
        if self.product_price < 0:
            errors.append(f"{prefix}: product_price must be non-negative")
        if self.next_due_timestamp < 0:
            errors.append(f"{prefix}: next_due_timestamp must be non-negative")
        if self.created_at < 0:
            errors.append(f"{prefix}: created_at must be non-negative")
        if self.total_repaid < 0 or self.installment_amount < 0:
            errors.append(f"{prefix}: repayment amounts must be non-negative")

        return errors


@dataclass(frozen=True)
class NFTLoanRecord:
    """
    A single NFT-collateralized loan as recorded on the ledger.

    Attributes:
        id: Ledger loan identifier
        status: Current lifecycle state
        loan_amount: Principal in the smallest monetary unit (wei)
        interest_amount: Interest owed on top of the principal
        total_repaid: Amount repaid so far
        due_timestamp: Unix seconds when the loan falls due
        created_at: Unix seconds when the loan was opened
    """
    id: int
    status: NFTLoanStatus
    loan_amount: int
    interest_amount: int
    total_repaid: int
    due_timestamp: int
    created_at: int
    borrower: str = ""
    nft_contract: str = ""
    token_id: int = 0

    INT_FIELDS = (
        "id",
        "loan_amount",
        "interest_amount",
        "total_repaid",
        "due_timestamp",
        "created_at",
        "token_id",
    )

    @property
    def total_due(self) -> int:
        return self.loan_amount + self.interest_amount

    def validate(self) -> List[str]:
        errors = []
        prefix = f"nft loan {self.id!r}"

        if not isinstance(self.status, NFTLoanStatus):
            errors.append(f"{prefix}: unknown status {self.status!r}")
        type_problems = type_errors(prefix, self, self.INT_FIELDS)
        if type_problems:
            return errors + type_problems

        if self.id < 0:
            errors.append(f"{prefix}: id must be non-negative")
        if self.loan_amount < 0 or self.interest_amount < 0 or self.total_repaid < 0:
            errors.append(f"{prefix}: amounts must be non-negative")
        if self.due_timestamp < 0:
            errors.append(f"{prefix}: due_timestamp must be non-negative")
        if self.created_at < 0:
            errors.append(f"{prefix}: created_at must be non-negative")

        return errors


@dataclass(frozen=True)
class AuraMetrics:
    """
    Reduction of a wallet's loan records into scoring inputs.

    Recomputed on every scoring call; never persisted on its own.
    """
    # BNPL
    total_bnpl_loans: int = 0
    active_bnpl_loans: int = 0
    repaid_bnpl_loans: int = 0
    defaulted_bnpl_loans: int = 0
    total_installments_paid: int = 0
    max_possible_installments: int = 0
    total_bnpl_volume: int = 0
    on_time_bnpl_loans: int = 0
    late_bnpl_loans: int = 0
    collateral_claimed: int = 0
    collateral_locked: int = 0
    # NFT
    total_nft_loans: int = 0
    active_nft_loans: int = 0
    repaid_nft_loans: int = 0
    defaulted_nft_loans: int = 0
    total_nft_volume: int = 0
    on_time_nft_loans: int = 0
    late_nft_loans: int = 0
    # General
    first_loan_timestamp: int = 0
    has_history: bool = False

    @property
    def total_loans(self) -> int:
        return self.total_bnpl_loans + self.total_nft_loans

    def validate(self) -> List[str]:
        """Check that counts are non-negative and consistent with each other."""
        errors = []

        for name, value in asdict(self).items():
            if name == "has_history":
                if not isinstance(value, bool):
                    errors.append(f"has_history must be a bool, got {value!r}")
                continue
            if not is_integer(value):
                errors.append(f"{name} must be an integer, got {value!r}")
            elif value < 0:
                errors.append(f"{name} must be non-negative, got {value}")
        if errors:
            return errors

        bnpl_by_status = (
            self.active_bnpl_loans + self.repaid_bnpl_loans + self.defaulted_bnpl_loans
        )
        if bnpl_by_status != self.total_bnpl_loans:
            errors.append("BNPL status counts do not add up to total_bnpl_loans")

        nft_by_status = (
            self.active_nft_loans + self.repaid_nft_loans + self.defaulted_nft_loans
        )
        if nft_by_status != self.total_nft_loans:
            errors.append("NFT status counts do not add up to total_nft_loans")

        if self.on_time_bnpl_loans + self.late_bnpl_loans != self.active_bnpl_loans:
            errors.append("on-time and late BNPL counts do not add up to active_bnpl_loans")
        if self.on_time_nft_loans + self.late_nft_loans != self.active_nft_loans:
            errors.append("on-time and late NFT counts do not add up to active_nft_loans")

        if self.collateral_claimed + self.collateral_locked != self.repaid_bnpl_loans:
            errors.append("collateral counts do not add up to repaid_bnpl_loans")

        if self.total_installments_paid > self.max_possible_installments:
            errors.append("total_installments_paid exceeds max_possible_installments")

        if self.has_history != (self.total_loans > 0):
            errors.append("has_history does not match the loan totals")

        return errors

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization (volumes as decimal strings)."""
        data = asdict(self)
        data["total_bnpl_volume"] = str(self.total_bnpl_volume)
        data["total_nft_volume"] = str(self.total_nft_volume)
        return data


@dataclass(frozen=True)
class AuraFactor:
    """
    One named contribution to the Aura score.

    Attributes:
        name: Fixed factor name (used for stable UI ordering)
        description: Audit text summarising the inputs behind the score
        score: Clamped factor value
        min_score: Lowest value this factor can take
        max_score: Highest value this factor can take
        weight: Nominal share of the model, e.g. "40%"
    """
    name: str
    description: str
    score: int
    min_score: int
    max_score: int
    weight: str

    def to_dict(self) -> dict:
        return asdict(self)


class AuraTier(str, Enum):
    """Named buckets of the Aura score."""
    LEGENDARY = "Legendary"
    STRONG = "Strong"
    RISING = "Rising"
    NEUTRAL = "Neutral"
    WEAK = "Weak"
    BROKEN = "Broken"
    UNRANKED = "Unranked"


@dataclass(frozen=True)
class AuraTierInfo:
    """Display information for a tier."""
    tier: AuraTier
    label: str
    min_score: int
    description: str

    def to_dict(self) -> dict:
        return {
            "name": self.tier.value,
            "label": self.label,
            "min_score": self.min_score,
            "description": self.description,
        }


@dataclass(frozen=True)
class AuraResult:
    """
    The final reputation result for a wallet.

    Attributes:
        score: Clamped score (0-1000)
        tier: Tier the score falls into
        factors: Exactly six factors in fixed order
        metrics: The aggregated metrics the score was computed from
        evaluated_at: The caller-supplied "now" in unix seconds
    """
    score: int
    tier: AuraTierInfo
    factors: Tuple[AuraFactor, ...]
    metrics: AuraMetrics
    evaluated_at: int

    @property
    def has_history(self) -> bool:
        return self.metrics.has_history

    def factor(self, name: str) -> Optional[AuraFactor]:
        """Look up a factor by name."""
        for f in self.factors:
            if f.name == name:
                return f
        return None

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "score": self.score,
            "tier": self.tier.to_dict(),
            "has_history": self.has_history,
            "factors": [f.to_dict() for f in self.factors],
            "metrics": self.metrics.to_dict(),
            "evaluated_at": self.evaluated_at,
        }


@dataclass(frozen=True)
class Tip:
    """A suggestion for improving an Aura score."""
    tip: str
    priority: str  # high, medium, low

    def to_dict(self) -> dict:
        return {"tip": self.tip, "priority": self.priority}
