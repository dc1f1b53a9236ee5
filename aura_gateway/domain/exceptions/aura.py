"""Aura scoring domain exceptions."""

from typing import List, Optional

from .base import DomainException


class InvalidAuraRequestException(DomainException):
    """Raised when an Aura request or its loan records cannot be scored."""

    default_code = "INVALID_AURA_REQUEST"

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = list(errors) if errors else [message]


class SnapshotNotFoundException(DomainException):
    """Raised when a stored Aura snapshot cannot be found."""

    default_code = "SNAPSHOT_NOT_FOUND"
    http_status = 404

    def __init__(self, snapshot_id: str):
        super().__init__(f"Aura snapshot not found: {snapshot_id}")
        self.snapshot_id = snapshot_id
