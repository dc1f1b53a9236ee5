"""
Domain Interfaces (Ports)
"""

from .repositories import SnapshotRepository
from .clients import LedgerClient

__all__ = [
    "SnapshotRepository",
    "LedgerClient",
]
