"""Abstract transport interface for submitting migrations.

The builder produces an ordered list of change descriptors; a transport is
what gets that list to the backend as one batch and reports back on it.
"""

from abc import ABC, abstractmethod
from types import TracebackType

from ..builder import MigrationChange
from .models import MigrationInfo


class MigrationTransport(ABC):
    """Abstract interface for backend submission.

    All transports must implement this interface so that migrations, the CLI
    and tests can use real and in-memory backends interchangeably.
    """

    @abstractmethod
    async def submit(
        self, changes: list[MigrationChange], name: str | None = None
    ) -> MigrationInfo:
        """Submit change descriptors as one batch migration.

        Args:
            changes: Change descriptors, in the order the backend must apply them
            name: Optional migration name

        Returns:
            MigrationInfo as reported right after submission

        Raises:
            TransportConnectionError: If the backend cannot be reached
            TransportResponseError: If the backend rejects the batch
        """
        pass

    @abstractmethod
    async def get_migration(self, migration_id: str) -> MigrationInfo:
        """Fetch the current state of a submitted migration.

        Raises:
            TransportConnectionError: If the backend cannot be reached
            TransportResponseError: If the migration is unknown
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release connections. Should not raise."""
        pass

    async def __aenter__(self) -> "MigrationTransport":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()
