"""GraphCMS schema migrations - declarative builder for batch migration changes."""

__version__ = "0.1.0"

from .builder import ChangeItem, ChangeLog, ModelBuilder
from .core import (
    FieldType,
    MigrationError,
    MigrationValidationError,
    MutationMode,
    RelationType,
    Renderer,
    SimpleFieldType,
    UnsupportedOperationError,
)
from .migration import Migration

# Note: CLI components imported on-demand to avoid pulling in rich at import time

__all__ = [
    "ChangeItem",
    "ChangeLog",
    "FieldType",
    "Migration",
    "MigrationError",
    "MigrationValidationError",
    "ModelBuilder",
    "MutationMode",
    "RelationType",
    "Renderer",
    "SimpleFieldType",
    "UnsupportedOperationError",
    "__version__",
]
