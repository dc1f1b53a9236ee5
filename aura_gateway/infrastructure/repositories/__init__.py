"""Repository implementations."""

from .snapshot_repository import PostgresSnapshotRepository

__all__ = [
    "PostgresSnapshotRepository",
]
