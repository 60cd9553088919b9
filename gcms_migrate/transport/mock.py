"""In-memory transport for testing and offline planning.

Records every submitted batch instead of sending it anywhere. Migrations
report ``RUNNING`` for a configurable number of status polls and then settle
on a configurable final status, which makes foreground runs testable.
"""

from datetime import datetime, timezone
from typing import Any

from ..builder import MigrationChange
from ..core import MigrationStatus, TransportResponseError, get_logger
from .interface import MigrationTransport
from .models import MigrationInfo

logger = get_logger(__name__)


class MockTransport(MigrationTransport):
    """In-memory transport.

    Useful for:
    - Unit testing migrations and the CLI
    - Running plans against no backend at all
    """

    def __init__(
        self,
        final_status: MigrationStatus = MigrationStatus.SUCCESS,
        pending_polls: int = 0,
        errors: Any = None,
    ) -> None:
        self.final_status = final_status
        self.pending_polls = pending_polls
        self.errors = errors
        # migration id -> submitted batch
        self.submissions: dict[str, list[MigrationChange]] = {}
        self._names: dict[str, str | None] = {}
        self._polls: dict[str, int] = {}
        self._created_at: dict[str, datetime] = {}
        self.closed = False

    async def submit(
        self, changes: list[MigrationChange], name: str | None = None
    ) -> MigrationInfo:
        migration_id = f"mock-{len(self.submissions) + 1}"
        self.submissions[migration_id] = list(changes)
        self._names[migration_id] = name
        self._polls[migration_id] = 0
        self._created_at[migration_id] = datetime.now(timezone.utc)

        logger.info(
            "Mock migration submitted",
            migration_id=migration_id,
            change_count=len(changes),
        )
        return MigrationInfo(
            id=migration_id,
            name=name,
            status=MigrationStatus.QUEUED,
            created_at=self._created_at[migration_id],
        )

    async def get_migration(self, migration_id: str) -> MigrationInfo:
        if migration_id not in self.submissions:
            raise TransportResponseError(f"Unknown migration: {migration_id}")

        self._polls[migration_id] += 1
        if self._polls[migration_id] <= self.pending_polls:
            return MigrationInfo(
                id=migration_id,
                name=self._names[migration_id],
                status=MigrationStatus.RUNNING,
                created_at=self._created_at[migration_id],
            )

        return MigrationInfo(
            id=migration_id,
            name=self._names[migration_id],
            status=self.final_status,
            errors=self.errors if self.final_status == MigrationStatus.FAILED else None,
            created_at=self._created_at[migration_id],
            finished_at=datetime.now(timezone.utc),
        )

    async def close(self) -> None:
        self.closed = True

    @property
    def last_submission(self) -> list[MigrationChange] | None:
        if not self.submissions:
            return None
        return list(self.submissions.values())[-1]
