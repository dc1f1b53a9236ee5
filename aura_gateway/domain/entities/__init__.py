"""Domain Entities - Core business objects."""

from .loan_history import LoanHistorySnapshot, LookupResult
from .snapshot import AuraSnapshot

__all__ = [
    "AuraSnapshot",
    "LoanHistorySnapshot",
    "LookupResult",
]
