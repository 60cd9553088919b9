"""Wire-level enumerations used throughout the migration builder.

This module defines enums for every literal the backend's batch migration API
understands, avoiding magic string literals in the builder and transports.
"""

from enum import Enum


class MutationMode(str, Enum):
    """Mutation intent of a change item."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class FieldType(str, Enum):
    """Field categories with their own normalization rules.

    The value doubles as the suffix of the rendered backend action,
    e.g. ``createRelationalField``.
    """

    SIMPLE_FIELD = "SimpleField"
    REMOTE_FIELD = "RemoteField"
    RELATIONAL_FIELD = "RelationalField"
    UNION_FIELD = "UnionField"
    ENUMERABLE_FIELD = "EnumerableField"


class EntityKind(str, Enum):
    """Schema entities that are changed as a whole rather than per field."""

    MODEL = "Model"
    ENUMERATION = "Enumeration"


class RelationType(str, Enum):
    """Cardinality of a relation between two models.

    Drives the list-ness of both sides of a relational or union field.
    """

    ONE_TO_ONE = "OneToOne"
    ONE_TO_MANY = "OneToMany"
    MANY_TO_ONE = "ManyToOne"
    MANY_TO_MANY = "ManyToMany"

    @classmethod
    def _missing_(cls, value: object) -> "RelationType | None":
        """Accept ``MANY_TO_ONE`` and ``many_to_one`` spellings."""
        if not isinstance(value, str):
            return None
        wanted = value.replace("_", "").lower()
        for member in cls:
            if member.value.lower() == wanted:
                return member
        return None

    @property
    def forward_is_list(self) -> bool:
        """Whether the field on the owning model holds many targets."""
        return self in (RelationType.ONE_TO_MANY, RelationType.MANY_TO_MANY)

    @property
    def reverse_is_list(self) -> bool:
        """Whether the reverse field on the target model holds many sources."""
        return self in (RelationType.MANY_TO_ONE, RelationType.MANY_TO_MANY)


class SimpleFieldType(str, Enum):
    """Scalar field types."""

    ID = "ID"
    STRING = "STRING"
    RICHTEXT = "RICHTEXT"
    INT = "INT"
    FLOAT = "FLOAT"
    BOOLEAN = "BOOLEAN"
    JSON = "JSON"
    DATETIME = "DATETIME"
    DATE = "DATE"
    LOCATION = "LOCATION"
    COLOR = "COLOR"


class RemoteFieldType(str, Enum):
    """Remote (externally resolved) field type."""

    REMOTE = "REMOTE"


class RelationalFieldType(str, Enum):
    """Kinds of relational fields."""

    RELATION = "RELATION"
    ASSET = "ASSET"


class HttpMethod(str, Enum):
    """HTTP methods a remote field may use to resolve its value."""

    GET = "GET"
    POST = "POST"


class Renderer(str, Enum):
    """Form renderers understood by the content editor."""

    SINGLE_LINE = "GCMS_SINGLE_LINE"
    MULTI_LINE = "GCMS_MULTI_LINE"
    MARKDOWN = "GCMS_MARKDOWN"
    SLUG = "GCMS_SLUG"
    URL = "GCMS_URL"
    JSON_EDITOR = "GCMS_JSON_EDITOR"


class MigrationStatus(str, Enum):
    """Backend status of a submitted migration."""

    QUEUED = "QUEUED"
    RUNNING = "RUNNING"
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"

    @property
    def is_finished(self) -> bool:
        """Whether the backend will not change this status anymore."""
        return self in (MigrationStatus.SUCCESS, MigrationStatus.FAILED)


# Name of the system model that backs asset relations
ASSET_MODEL_API_ID = "Asset"

__all__ = [
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
]
