"""Ledger read gateway domain exceptions."""

from .base import DomainException


class LedgerAPIException(DomainException):
    """Raised when the ledger read gateway returns an error."""

    default_code = "LEDGER_API_ERROR"
    http_status = 503

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class LedgerAPITimeoutException(LedgerAPIException):
    """Raised when the ledger read gateway times out."""

    default_code = "LEDGER_API_TIMEOUT"

    def __init__(self):
        super().__init__("Ledger API request timed out")


class LedgerDataException(DomainException):
    """Raised when a ledger record is missing fields or carries unknown codes."""

    default_code = "LEDGER_DATA_ERROR"
    http_status = 503

    def __init__(self, message: str):
        super().__init__(message)
