"""Domain Exceptions - Business rule violations and domain errors."""

from .base import DomainException
from .aura import (
    InvalidAuraRequestException,
    SnapshotNotFoundException,
)
from .ledger import (
    LedgerAPIException,
    LedgerAPITimeoutException,
    LedgerDataException,
)

__all__ = [
    "DomainException",
    "InvalidAuraRequestException",
    "SnapshotNotFoundException",
    "LedgerAPIException",
    "LedgerAPITimeoutException",
    "LedgerDataException",
]
