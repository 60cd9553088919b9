"""Configuration management for gcms-migrate.

This module handles environment-based configuration using Pydantic Settings.
Every setting can be given as a ``GCMS_``-prefixed environment variable or in
a ``.env`` file in the working directory.
"""

from typing import Literal

from pydantic import Field, SecretStr, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .transport import TransportConfig


class MigrationSettings(BaseSettings):
    """Runtime configuration for running migrations."""

    model_config = SettingsConfigDict(
        env_prefix="GCMS_",
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
    )

    # Environment
    environment: Literal["development", "testing", "production"] = Field(
        default="development", description="Application environment"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    json_logs: bool = Field(default=False, description="Enable JSON formatted logs")

    # Backend
    transport_type: str = Field(
        default="graphql", description="Transport backend (graphql or mock)"
    )
    endpoint: str | None = Field(
        default=None, description="Management API GraphQL endpoint"
    )
    auth_token: SecretStr | None = Field(
        default=None, description="Permanent auth token with management access"
    )
    environment_id: str | None = Field(
        default=None, description="Id of the backend environment to migrate"
    )
    timeout_seconds: float = Field(default=30.0, description="HTTP request timeout")

    # Run behaviour
    poll_interval_seconds: float = Field(
        default=1.0, gt=0, description="Delay between migration status polls"
    )
    run_timeout_seconds: float = Field(
        default=300.0, gt=0, description="How long to wait for a migration to finish"
    )

    @computed_field  # type: ignore[misc]
    @property
    def transport(self) -> TransportConfig:
        """Create transport configuration from individual fields."""
        return TransportConfig(
            backend_type=self.transport_type,
            endpoint=self.endpoint,
            auth_token=self.auth_token,
            environment_id=self.environment_id,
            timeout_seconds=self.timeout_seconds,
        )

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "production"


# Global settings instance
settings = MigrationSettings()
