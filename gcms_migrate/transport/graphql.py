"""GraphQL-over-HTTP transport for the content backend's management API.

Submits the whole batch through the ``submitBatchChanges`` mutation and
reads migration status through the ``migration`` query. Authentication is a
static bearer token.
"""

from typing import Any

import httpx

from ..builder import MigrationChange
from ..core import (
    OperationLogger,
    TransportConfigurationError,
    TransportConnectionError,
    TransportResponseError,
    get_logger,
)
from .interface import MigrationTransport
from .models import MigrationInfo, TransportConfig

logger = get_logger(__name__)

MIGRATION_SELECTION = "id name status errors createdAt finishedAt"

SUBMIT_BATCH_CHANGES = f"""
mutation SubmitBatchChanges($data: BatchMigrationInput!) {{
  submitBatchChanges(data: $data) {{
    migration {{ {MIGRATION_SELECTION} }}
  }}
}}
"""

MIGRATION_STATUS = f"""
query MigrationStatus($id: ID!) {{
  viewer {{
    migration(id: $id) {{ {MIGRATION_SELECTION} }}
  }}
}}
"""


class GraphQLTransport(MigrationTransport):
    """Management API transport.

    Args:
        config: Endpoint, token and target environment
        client: Optional preconfigured ``httpx.AsyncClient``; the transport
            only closes clients it created itself
    """

    def __init__(
        self, config: TransportConfig, client: httpx.AsyncClient | None = None
    ):
        if not config.endpoint:
            raise TransportConfigurationError("GraphQL transport requires an endpoint")
        if not config.environment_id:
            raise TransportConfigurationError(
                "GraphQL transport requires an environment id"
            )

        self.config = config
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=config.timeout_seconds)

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.config.auth_token is not None:
            token = self.config.auth_token.get_secret_value()
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def _execute(self, query: str, variables: dict[str, Any]) -> dict[str, Any]:
        """Run one GraphQL operation and return its ``data``."""
        try:
            response = await self._client.post(
                self.config.endpoint,  # type: ignore[arg-type]
                json={"query": query, "variables": variables},
                headers=self._headers(),
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise TransportConnectionError(
                f"Backend returned HTTP {e.response.status_code}", cause=e
            ) from e
        except httpx.HTTPError as e:
            raise TransportConnectionError(
                f"Could not reach backend at {self.config.endpoint}: {e}", cause=e
            ) from e

        try:
            body = response.json()
        except ValueError as e:
            raise TransportResponseError(
                "Backend response is not valid JSON", cause=e
            ) from e
        if not isinstance(body, dict):
            raise TransportResponseError("Backend response is not a GraphQL result")

        if body.get("errors"):
            messages = "; ".join(
                str(error.get("message", error)) for error in body["errors"]
            )
            raise TransportResponseError(
                f"Backend rejected request: {messages}", errors=body["errors"]
            )

        return body.get("data") or {}

    @staticmethod
    def _migration_from(data: dict[str, Any] | None, operation: str) -> MigrationInfo:
        if not data:
            raise TransportResponseError(f"{operation} returned no migration")
        return MigrationInfo.model_validate(data)

    async def submit(
        self, changes: list[MigrationChange], name: str | None = None
    ) -> MigrationInfo:
        with OperationLogger(logger, "submit_batch_changes") as op_logger:
            op_logger.log_progress(
                "Submitting batch",
                change_count=len(changes),
                environment_id=self.config.environment_id,
            )
            batch: dict[str, Any] = {
                "environmentId": self.config.environment_id,
                "changes": changes,
            }
            if name:
                batch["name"] = name

            data = await self._execute(SUBMIT_BATCH_CHANGES, {"data": batch})
            payload = data.get("submitBatchChanges") or {}
            return self._migration_from(payload.get("migration"), "submitBatchChanges")

    async def get_migration(self, migration_id: str) -> MigrationInfo:
        with OperationLogger(logger, "migration_status"):
            data = await self._execute(MIGRATION_STATUS, {"id": migration_id})
            viewer = data.get("viewer") or {}
            return self._migration_from(viewer.get("migration"), "migration")

    async def close(self) -> None:
        if not self._owns_client:
            return
        try:
            await self._client.aclose()
        except Exception as e:
            logger.warning("Error closing HTTP client", error=str(e))
