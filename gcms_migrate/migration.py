"""Migration sessions.

A :class:`Migration` collects the changes of one batch. Model and
enumeration operations register their own change item and, for models,
return a :class:`~gcms_migrate.builder.ModelBuilder` whose field operations
register into the same change log, right after the model. The batch is sent
with :meth:`Migration.run` through any
:class:`~gcms_migrate.transport.MigrationTransport`.
"""

import asyncio
import time
from typing import Any

from .builder import (
    ChangeItem,
    ChangeLog,
    CreateEnumerationArgs,
    CreateModelArgs,
    MigrationChange,
    ModelBuilder,
    UpdateEnumerationArgs,
    UpdateModelArgs,
    coerce_args,
)
from .builder.base import build_struct
from .builder.enumeration import normalize_enumeration, normalize_enumeration_update
from .builder.model import ArgsInput
from .builder.payloads import EntityDeletionPayload
from .core import (
    EntityKind,
    MigrationAlreadyRunError,
    MigrationValidationError,
    MutationMode,
    TransportTimeoutError,
    bind_context,
    get_logger,
    unbind_context,
)
from .transport import MigrationInfo, MigrationTransport

logger = get_logger(__name__)


class Migration:
    """One batch of schema changes.

    Args:
        name: Optional migration name, shown in the backend's history
        change_log: Change log to register into; a fresh one by default
    """

    def __init__(self, name: str | None = None, change_log: ChangeLog | None = None):
        self.name = name
        self._changes = change_log if change_log is not None else ChangeLog()
        self._submitted: MigrationInfo | None = None

    # Models

    def create_model(self, args: ArgsInput = None, /, **kwargs: Any) -> ModelBuilder:
        model_args = coerce_args(CreateModelArgs, args, kwargs)
        self._register(MutationMode.CREATE, EntityKind.MODEL, model_args)
        return ModelBuilder(self._changes, model_args.api_id)

    def update_model(self, args: ArgsInput = None, /, **kwargs: Any) -> ModelBuilder:
        """Update a model, or just open it for field changes.

        ``update_model(apiId="Post")`` alone registers an update without
        effect, which is left out of the submitted batch.
        """
        model_args = coerce_args(UpdateModelArgs, args, kwargs)
        self._register(MutationMode.UPDATE, EntityKind.MODEL, model_args)
        return ModelBuilder(self._changes, model_args.api_id)

    def delete_model(self, api_id: str) -> None:
        payload = build_struct(EntityDeletionPayload, {"apiId": api_id})
        self._register(MutationMode.DELETE, EntityKind.MODEL, payload)

    # Enumerations

    def create_enumeration(self, args: ArgsInput = None, /, **kwargs: Any) -> None:
        enumeration_args = coerce_args(CreateEnumerationArgs, args, kwargs)
        payload = normalize_enumeration(enumeration_args)
        self._register(MutationMode.CREATE, EntityKind.ENUMERATION, payload)

    def update_enumeration(self, args: ArgsInput = None, /, **kwargs: Any) -> None:
        enumeration_args = coerce_args(UpdateEnumerationArgs, args, kwargs)
        payload = normalize_enumeration_update(enumeration_args)
        self._register(MutationMode.UPDATE, EntityKind.ENUMERATION, payload)

    def delete_enumeration(self, api_id: str) -> None:
        payload = build_struct(EntityDeletionPayload, {"apiId": api_id})
        self._register(MutationMode.DELETE, EntityKind.ENUMERATION, payload)

    def _register(self, mode: MutationMode, kind: EntityKind, payload: Any) -> None:
        self._changes.register_change(ChangeItem(mode=mode, kind=kind, payload=payload))

    # Inspection and submission

    @property
    def changes(self) -> tuple[ChangeItem, ...]:
        """Every registered change item, effective or not, in order."""
        return self._changes.items

    @property
    def submitted(self) -> MigrationInfo | None:
        return self._submitted

    def dry_run(self) -> list[MigrationChange]:
        """Render the batch that :meth:`run` would submit."""
        return [item.generate_change() for item in self._changes if item.has_changes()]

    async def run(
        self,
        transport: MigrationTransport,
        foreground: bool = True,
        poll_interval: float = 1.0,
        timeout: float = 300.0,
    ) -> MigrationInfo:
        """Submit the batch and, in the foreground, wait for it to finish.

        Args:
            transport: Where to send the batch
            foreground: Poll until the backend reports SUCCESS or FAILED
            poll_interval: Seconds between status polls
            timeout: Seconds to wait for the migration to finish

        Returns:
            Final MigrationInfo in the foreground, the queued one otherwise

        Raises:
            MigrationAlreadyRunError: If this migration was already submitted
            MigrationValidationError: If there is nothing to submit
            TransportTimeoutError: If the migration does not finish in time
            TransportError: If the transport fails
        """
        if self._submitted is not None:
            raise MigrationAlreadyRunError(
                f"Migration already submitted as {self._submitted.id}"
            )

        changes = self.dry_run()
        if not changes:
            raise MigrationValidationError("Migration has no effective changes")

        bind_context(migration=self.name or "unnamed")
        try:
            logger.info(
                "Submitting migration",
                change_count=len(changes),
                registered_count=len(self._changes),
            )
            info = await transport.submit(changes, name=self.name)
            self._submitted = info
            logger.info("Migration submitted", migration_id=info.id, status=info.status)

            if foreground:
                info = await self._wait_for_completion(
                    transport, info, poll_interval, timeout
                )
            return info
        finally:
            unbind_context("migration")

    async def _wait_for_completion(
        self,
        transport: MigrationTransport,
        info: MigrationInfo,
        poll_interval: float,
        timeout: float,
    ) -> MigrationInfo:
        deadline = time.monotonic() + timeout
        while not info.status.is_finished:
            if time.monotonic() >= deadline:
                raise TransportTimeoutError(
                    f"Migration {info.id} still {info.status.value} after {timeout}s"
                )
            await asyncio.sleep(poll_interval)
            info = await transport.get_migration(info.id)
            logger.debug("Migration status", migration_id=info.id, status=info.status)

        if info.succeeded:
            logger.info("Migration succeeded", migration_id=info.id)
        else:
            logger.error("Migration failed", migration_id=info.id, errors=info.errors)
        return info

    def __len__(self) -> int:
        return len(self._changes)
