"""Transports that submit migrations to the content backend."""

from .factory import create_transport, validate_transport_config
from .graphql import GraphQLTransport
from .interface import MigrationTransport
from .mock import MockTransport
from .models import MigrationInfo, TransportConfig

__all__ = [
    # Core interface
    "MigrationTransport",
    # Implementations
    "GraphQLTransport",
    "MockTransport",
    # Factory functions
    "create_transport",
    "validate_transport_config",
    # Models
    "MigrationInfo",
    "TransportConfig",
]
