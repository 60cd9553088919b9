"""Tests for the GraphQL management API transport."""

import json

import httpx
import pytest

from gcms_migrate.core import (
    MigrationStatus,
    TransportConfigurationError,
    TransportConnectionError,
    TransportResponseError,
)
from gcms_migrate.transport import GraphQLTransport, TransportConfig

ENDPOINT = "https://management.example.com/graphql"


@pytest.fixture
def config():
    """Create a complete GraphQL transport configuration."""
    return TransportConfig(
        backend_type="graphql",
        endpoint=ENDPOINT,
        auth_token="secret-token",
        environment_id="env-1",
    )


def _transport(config, handler) -> GraphQLTransport:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return GraphQLTransport(config, client=client)


def _migration(status: str = "QUEUED", **extra) -> dict:
    return {"id": "mig-1", "name": "blog", "status": status, **extra}


class TestConfiguration:
    """Test transport construction."""

    def test_requires_endpoint(self, config):
        """Test that an endpoint is mandatory."""
        with pytest.raises(TransportConfigurationError):
            GraphQLTransport(config.model_copy(update={"endpoint": None}))

    def test_requires_environment(self, config):
        """Test that a target environment is mandatory."""
        with pytest.raises(TransportConfigurationError):
            GraphQLTransport(config.model_copy(update={"environment_id": None}))


@pytest.mark.asyncio
class TestSubmit:
    """Test batch submission."""

    async def test_submit_sends_batch(self, config):
        """Test the request body, auth header and parsed response."""
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(
                200,
                json={"data": {"submitBatchChanges": {"migration": _migration()}}},
            )

        changes = [{"deleteModel": {"apiId": "Legacy"}}]
        async with _transport(config, handler) as transport:
            info = await transport.submit(changes, name="blog")

        assert info.id == "mig-1"
        assert info.status == MigrationStatus.QUEUED

        request = requests[0]
        assert str(request.url) == ENDPOINT
        assert request.headers["Authorization"] == "Bearer secret-token"
        body = json.loads(request.content)
        assert "submitBatchChanges" in body["query"]
        assert body["variables"] == {
            "data": {"environmentId": "env-1", "changes": changes, "name": "blog"}
        }

    async def test_submit_without_name(self, config):
        """Test that an unnamed batch does not send a name."""
        bodies = []

        def handler(request: httpx.Request) -> httpx.Response:
            bodies.append(json.loads(request.content))
            return httpx.Response(
                200,
                json={"data": {"submitBatchChanges": {"migration": _migration()}}},
            )

        async with _transport(config, handler) as transport:
            await transport.submit([{"deleteModel": {"apiId": "Legacy"}}])

        assert "name" not in bodies[0]["variables"]["data"]

    async def test_graphql_errors_raise(self, config):
        """Test that GraphQL errors are reported with their details."""
        errors = [{"message": "Model Legacy does not exist"}]

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"data": None, "errors": errors})

        async with _transport(config, handler) as transport:
            with pytest.raises(TransportResponseError) as exc_info:
                await transport.submit([{"deleteModel": {"apiId": "Legacy"}}])

        assert exc_info.value.errors == errors
        assert "Model Legacy does not exist" in str(exc_info.value)

    async def test_http_error_status_raises(self, config):
        """Test that a non-success HTTP status is a connection error."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, json={"message": "unauthorized"})

        async with _transport(config, handler) as transport:
            with pytest.raises(TransportConnectionError, match="HTTP 401"):
                await transport.submit([{"deleteModel": {"apiId": "Legacy"}}])

    async def test_network_error_raises(self, config):
        """Test that an unreachable backend is a connection error."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with _transport(config, handler) as transport:
            with pytest.raises(TransportConnectionError):
                await transport.submit([{"deleteModel": {"apiId": "Legacy"}}])

    async def test_invalid_json_raises(self, config):
        """Test that a non-JSON body is a response error."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b"<html>maintenance</html>")

        async with _transport(config, handler) as transport:
            with pytest.raises(TransportResponseError):
                await transport.submit([{"deleteModel": {"apiId": "Legacy"}}])

    async def test_missing_migration_raises(self, config):
        """Test that a response without a migration is a response error."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"data": {"submitBatchChanges": None}})

        async with _transport(config, handler) as transport:
            with pytest.raises(TransportResponseError):
                await transport.submit([{"deleteModel": {"apiId": "Legacy"}}])


@pytest.mark.asyncio
class TestGetMigration:
    """Test migration status queries."""

    async def test_get_migration(self, config):
        """Test the status query and response parsing."""
        bodies = []

        def handler(request: httpx.Request) -> httpx.Response:
            bodies.append(json.loads(request.content))
            return httpx.Response(
                200,
                json={
                    "data": {
                        "viewer": {
                            "migration": _migration(
                                "FAILED",
                                errors=[{"message": "boom"}],
                                finishedAt="2024-05-01T10:00:00Z",
                            )
                        }
                    }
                },
            )

        async with _transport(config, handler) as transport:
            info = await transport.get_migration("mig-1")

        assert bodies[0]["variables"] == {"id": "mig-1"}
        assert info.status == MigrationStatus.FAILED
        assert info.errors == [{"message": "boom"}]
        assert info.finished_at is not None

    async def test_borrowed_client_not_closed(self, config):
        """Test that a caller-provided client stays open."""
        client = httpx.AsyncClient(
            transport=httpx.MockTransport(lambda request: httpx.Response(200))
        )

        async with GraphQLTransport(config, client=client):
            pass

        assert not client.is_closed
        await client.aclose()
