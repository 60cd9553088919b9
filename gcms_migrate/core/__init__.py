"""Core types, exceptions and logging shared by the builder and transports."""

from .exceptions import (
    MigrationAlreadyRunError,
    MigrationError,
    MigrationValidationError,
    PlanLoadError,
    TransportConfigurationError,
    TransportConnectionError,
    TransportError,
    TransportResponseError,
    TransportTimeoutError,
    UnsupportedOperationError,
)
from .logging import (
    OperationLogger,
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
    unbind_context,
)
from .types import (
    ASSET_MODEL_API_ID,
    EntityKind,
    FieldType,
    HttpMethod,
    MigrationStatus,
    MutationMode,
    RelationalFieldType,
    RelationType,
    RemoteFieldType,
    Renderer,
    SimpleFieldType,
)

__all__ = [
    # Wire types
    "ASSET_MODEL_API_ID",
    "EntityKind",
    "FieldType",
    "HttpMethod",
    "MigrationStatus",
    "MutationMode",
    "RelationType",
    "RelationalFieldType",
    "RemoteFieldType",
    "Renderer",
    "SimpleFieldType",
    # Exceptions
    "MigrationAlreadyRunError",
    "MigrationError",
    "MigrationValidationError",
    "PlanLoadError",
    "TransportConfigurationError",
    "TransportConnectionError",
    "TransportError",
    "TransportResponseError",
    "TransportTimeoutError",
    "UnsupportedOperationError",
    # Logging
    "OperationLogger",
    "bind_context",
    "clear_context",
    "configure_logging",
    "get_logger",
    "unbind_context",
]
