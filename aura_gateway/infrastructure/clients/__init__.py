"""External API client implementations."""

from .ledger_client import HttpLedgerClient

__all__ = [
    "HttpLedgerClient",
]
