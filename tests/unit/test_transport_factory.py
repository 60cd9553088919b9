"""Tests for transport configuration, the factory and the mock transport."""

import pytest

from gcms_migrate.config import MigrationSettings
from gcms_migrate.core import (
    MigrationStatus,
    TransportConfigurationError,
    TransportResponseError,
)
from gcms_migrate.transport import (
    GraphQLTransport,
    MockTransport,
    TransportConfig,
    create_transport,
    validate_transport_config,
)


class TestTransportFactory:
    """Test transport creation from configuration."""

    def test_create_mock_transport(self):
        """Test that the mock backend needs no connection settings."""
        transport = create_transport(TransportConfig(backend_type="mock"))

        assert isinstance(transport, MockTransport)

    def test_create_graphql_transport(self):
        """Test that a complete configuration gives a GraphQL transport."""
        transport = create_transport(
            TransportConfig(
                backend_type="GraphQL",
                endpoint="https://management.example.com/graphql",
                auth_token="token",
                environment_id="env-1",
            )
        )

        assert isinstance(transport, GraphQLTransport)

    def test_unknown_backend_rejected(self):
        """Test that unsupported backends are rejected."""
        with pytest.raises(TransportConfigurationError, match="Unsupported"):
            create_transport(TransportConfig(backend_type="carrier-pigeon"))

    @pytest.mark.parametrize(
        "overrides,message",
        [
            ({"endpoint": None}, "endpoint is required"),
            ({"endpoint": "ftp://example.com"}, "http"),
            ({"environment_id": None}, "Environment id"),
            ({"auth_token": None}, "Auth token"),
        ],
    )
    def test_incomplete_graphql_config_rejected(self, overrides, message):
        """Test that every connection setting is checked."""
        config = TransportConfig(
            backend_type="graphql",
            endpoint="https://management.example.com/graphql",
            auth_token="token",
            environment_id="env-1",
        ).model_copy(update=overrides)

        with pytest.raises(TransportConfigurationError, match=message):
            validate_transport_config(config)


class TestSettings:
    """Test environment-based configuration."""

    def test_defaults(self, monkeypatch):
        """Test default settings without any environment."""
        for name in ("GCMS_TRANSPORT_TYPE", "GCMS_ENDPOINT", "GCMS_ENVIRONMENT"):
            monkeypatch.delenv(name, raising=False)

        settings = MigrationSettings(_env_file=None)

        assert settings.environment == "development"
        assert settings.transport_type == "graphql"
        assert settings.poll_interval_seconds == 1.0
        assert not settings.is_production

    def test_reads_prefixed_environment(self, monkeypatch):
        """Test that GCMS_ variables configure the transport."""
        monkeypatch.setenv("GCMS_TRANSPORT_TYPE", "mock")
        monkeypatch.setenv("GCMS_ENDPOINT", "https://management.example.com/graphql")
        monkeypatch.setenv("GCMS_AUTH_TOKEN", "token")
        monkeypatch.setenv("GCMS_ENVIRONMENT_ID", "env-1")
        monkeypatch.setenv("GCMS_TIMEOUT_SECONDS", "12.5")

        transport = MigrationSettings(_env_file=None).transport

        assert transport.backend_type == "mock"
        assert transport.endpoint == "https://management.example.com/graphql"
        assert transport.auth_token.get_secret_value() == "token"
        assert transport.environment_id == "env-1"
        assert transport.timeout_seconds == 12.5


@pytest.mark.asyncio
class TestMockTransport:
    """Test the in-memory transport."""

    async def test_records_submissions(self, mock_transport):
        """Test that batches are stored under their migration id."""
        changes = [{"deleteModel": {"apiId": "Legacy"}}]

        info = await mock_transport.submit(changes, name="cleanup")

        assert info.status == MigrationStatus.QUEUED
        assert info.name == "cleanup"
        assert mock_transport.submissions == {info.id: changes}

    async def test_pending_polls_then_final_status(self):
        """Test that status stays RUNNING for the configured number of polls."""
        transport = MockTransport(
            final_status=MigrationStatus.FAILED, pending_polls=1, errors=["boom"]
        )
        info = await transport.submit([{"deleteModel": {"apiId": "Legacy"}}])

        first = await transport.get_migration(info.id)
        second = await transport.get_migration(info.id)

        assert first.status == MigrationStatus.RUNNING
        assert first.errors is None
        assert second.status == MigrationStatus.FAILED
        assert second.errors == ["boom"]

    async def test_unknown_migration_raises(self, mock_transport):
        """Test that polling an unknown id fails."""
        with pytest.raises(TransportResponseError):
            await mock_transport.get_migration("mock-99")

    async def test_context_manager_closes(self, mock_transport):
        """Test that leaving the context closes the transport."""
        async with mock_transport:
            assert not mock_transport.closed

        assert mock_transport.closed
