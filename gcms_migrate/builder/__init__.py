"""Change-accumulation and payload-normalization engine."""

from .args import (
    CreateEnumerableFieldArgs,
    CreateEnumerationArgs,
    CreateModelArgs,
    CreateRelationalFieldArgs,
    CreateRemoteFieldArgs,
    CreateSimpleFieldArgs,
    CreateUnionFieldArgs,
    FieldValidationArgs,
    UpdateEnumerableFieldArgs,
    UpdateEnumerationArgs,
    UpdateModelArgs,
    UpdateRelationalFieldArgs,
    UpdateSimpleFieldArgs,
    UpdateUnionFieldArgs,
)
from .base import WireModel, coerce_args
from .changes import ChangeItem, ChangeListener, ChangeLog, MigrationChange
from .model import ModelBuilder
from .normalizers import normalize_remote_headers
from .validations import extract_field_validations

__all__ = [
    # Builder
    "ChangeItem",
    "ChangeListener",
    "ChangeLog",
    "MigrationChange",
    "ModelBuilder",
    # Arguments
    "CreateEnumerableFieldArgs",
    "CreateEnumerationArgs",
    "CreateModelArgs",
    "CreateRelationalFieldArgs",
    "CreateRemoteFieldArgs",
    "CreateSimpleFieldArgs",
    "CreateUnionFieldArgs",
    "FieldValidationArgs",
    "UpdateEnumerableFieldArgs",
    "UpdateEnumerationArgs",
    "UpdateModelArgs",
    "UpdateRelationalFieldArgs",
    "UpdateSimpleFieldArgs",
    "UpdateUnionFieldArgs",
    # Helpers
    "WireModel",
    "coerce_args",
    "extract_field_validations",
    "normalize_remote_headers",
]
