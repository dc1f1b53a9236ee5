"""Repository interfaces for data persistence."""

from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from aura_gateway.domain.entities import AuraSnapshot


class SnapshotRepository(ABC):
    """
    Abstract repository for AuraSnapshot persistence.

    Implementations may use PostgreSQL, in-memory storage, etc.
    """

    @abstractmethod
    async def save(self, snapshot: AuraSnapshot) -> AuraSnapshot:
        """
        Persist a snapshot.

        Args:
            snapshot: The snapshot to save

        Returns:
            The saved snapshot
        """
        ...

    @abstractmethod
    async def get_by_id(self, snapshot_id: UUID) -> Optional[AuraSnapshot]:
        """
        Retrieve a snapshot by ID.

        Args:
            snapshot_id: The snapshot's unique identifier

        Returns:
            The snapshot if found, None otherwise
        """
        ...

    @abstractmethod
    async def get_by_wallet(
        self,
        wallet: str,
        limit: int = 10,
        offset: int = 0,
    ) -> List[AuraSnapshot]:
        """
        Retrieve snapshots for a wallet.

        Args:
            wallet: Normalized wallet address
            limit: Maximum number of snapshots to return
            offset: Number of snapshots to skip

        Returns:
            List of snapshots, newest first
        """
        ...

    @abstractmethod
    async def ping(self) -> None:
        """Round-trip to the store; raises if it cannot be reached."""
        ...
