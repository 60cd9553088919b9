"""Transport factory for creating transport instances.

This module provides a factory function to create transports based on
configuration, supporting the real management API and an in-memory mock.
"""

from ..core import TransportConfigurationError, get_logger
from .graphql import GraphQLTransport
from .interface import MigrationTransport
from .mock import MockTransport
from .models import TransportConfig

logger = get_logger(__name__)

SUPPORTED_BACKENDS = ("graphql", "mock")


def validate_transport_config(config: TransportConfig) -> None:
    """Validate transport configuration.

    Args:
        config: Transport configuration to validate

    Raises:
        TransportConfigurationError: If configuration is invalid
    """
    backend_type = config.backend_type.lower()

    if backend_type not in SUPPORTED_BACKENDS:
        raise TransportConfigurationError(
            f"Unsupported transport backend: {config.backend_type}. "
            f"Supported backends: {', '.join(SUPPORTED_BACKENDS)}"
        )

    if backend_type == "graphql":
        if not config.endpoint:
            raise TransportConfigurationError("Management API endpoint is required")
        if not config.endpoint.startswith(("http://", "https://")):
            raise TransportConfigurationError(
                "Management API endpoint must be an http(s) URL"
            )
        if not config.environment_id:
            raise TransportConfigurationError("Environment id is required")
        if config.auth_token is None:
            raise TransportConfigurationError("Auth token is required")

    logger.debug("Transport configuration validated", backend=backend_type)


def create_transport(config: TransportConfig) -> MigrationTransport:
    """Create a transport instance based on configuration.

    Args:
        config: Transport configuration specifying backend type and settings

    Returns:
        MigrationTransport: Configured transport instance

    Raises:
        TransportConfigurationError: If backend type is unsupported or config is invalid
    """
    validate_transport_config(config)
    backend_type = config.backend_type.lower()

    logger.info("Creating transport", backend=backend_type)

    if backend_type == "mock":
        return MockTransport()
    return GraphQLTransport(config)
