"""Pydantic models exchanged with migration transports."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, SecretStr
from pydantic.alias_generators import to_camel

from ..core import MigrationStatus


class MigrationInfo(BaseModel):
    """Backend view of a submitted migration."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(description="Backend migration identifier")
    name: str | None = Field(default=None, description="Migration name, if any")
    status: MigrationStatus
    errors: Any = Field(default=None, description="Backend error report")
    created_at: datetime | None = None
    finished_at: datetime | None = None

    @property
    def succeeded(self) -> bool:
        return self.status == MigrationStatus.SUCCESS


class TransportConfig(BaseModel):
    """Transport configuration settings."""

    backend_type: str = "graphql"
    endpoint: str | None = None
    auth_token: SecretStr | None = None
    environment_id: str | None = None
    timeout_seconds: float = Field(30.0, gt=0, le=600)
