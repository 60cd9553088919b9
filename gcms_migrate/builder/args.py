"""Caller-facing argument structs for builder operations.

These describe what a caller may pass to each builder operation. They never
carry ``modelApiId`` (the builder injects it) and some carry convenience
attributes (``model``, ``models``, ``relationType``) that are resolved into
wire attributes and then dropped during normalization.
"""

from typing import Any

from pydantic import Field

from ..core import (
    HttpMethod,
    RelationalFieldType,
    RelationType,
    Renderer,
    SimpleFieldType,
)
from .base import WireModel

# Validation requests


class FloatRange(WireModel):
    """Inclusive numeric bounds with an optional custom error message."""

    min: float | None = None
    max: float | None = None
    error_message: str | None = None


class IntRange(WireModel):
    """Inclusive integer bounds with an optional custom error message."""

    min: int | None = None
    max: int | None = None
    error_message: str | None = None


class RegExMatch(WireModel):
    """Regular expression constraint."""

    regex: str
    flags: list[str] | None = None
    error_message: str | None = None


class FieldValidationArgs(WireModel):
    """Type-agnostic validation request for a simple field.

    Which parts apply depends on the field type, see
    :func:`gcms_migrate.builder.validations.extract_field_validations`.
    """

    range: FloatRange | None = None
    characters: IntRange | None = None
    list_item_count: IntRange | None = None
    matches: RegExMatch | None = None
    not_matches: RegExMatch | None = None


# Models


class CreateModelArgs(WireModel):
    api_id: str
    api_id_plural: str | None = None
    display_name: str | None = None
    description: str | None = None


class UpdateModelArgs(WireModel):
    api_id: str
    new_api_id: str | None = None
    api_id_plural: str | None = None
    display_name: str | None = None
    description: str | None = None


# Fields


class FieldArgs(WireModel):
    """Attributes common to every field operation."""

    api_id: str
    display_name: str | None = None
    description: str | None = None


class CreateSimpleFieldArgs(FieldArgs):
    type: SimpleFieldType
    is_list: bool | None = None
    is_required: bool | None = None
    is_unique: bool | None = None
    is_hidden: bool | None = None
    is_localized: bool | None = None
    form_renderer: Renderer | str | None = None
    validations: FieldValidationArgs | None = None


class UpdateSimpleFieldArgs(FieldArgs):
    # Only consulted to shape validations, never sent
    type: SimpleFieldType | None = None
    new_api_id: str | None = None
    is_list: bool | None = None
    is_required: bool | None = None
    is_unique: bool | None = None
    is_hidden: bool | None = None
    is_localized: bool | None = None
    form_renderer: Renderer | str | None = None
    validations: FieldValidationArgs | None = None


class RemoteConfigArgs(WireModel):
    """How a remote field fetches its value."""

    url: str | None = None
    method: HttpMethod | None = None
    # Checked during normalization so that a malformed value gets a clear error
    headers: Any = None
    payload_field_api_ids: list[str] | None = None
    forward_client_headers: bool | None = None


class CreateRemoteFieldArgs(FieldArgs):
    is_list: bool | None = None
    is_required: bool | None = None
    is_hidden: bool | None = None
    remote_config: RemoteConfigArgs


class ReverseFieldArgs(WireModel):
    """Caller-supplied description of the inverse side of a relation.

    The target model(s) and list-ness are always derived by the builder.
    """

    api_id: str
    display_name: str | None = None
    description: str | None = None
    is_hidden: bool | None = None


class CreateRelationalFieldArgs(FieldArgs):
    model: str = Field(description="apiId of the target model")
    relation_type: RelationType
    type: RelationalFieldType | None = None
    is_required: bool | None = None
    is_hidden: bool | None = None
    reverse_field: ReverseFieldArgs | None = None


class UpdateReverseFieldArgs(WireModel):
    api_id: str | None = None
    display_name: str | None = None
    description: str | None = None
    is_hidden: bool | None = None


class UpdateRelationalFieldArgs(FieldArgs):
    new_api_id: str | None = None
    is_required: bool | None = None
    is_hidden: bool | None = None
    reverse_field: UpdateReverseFieldArgs | None = None


class CreateUnionFieldArgs(FieldArgs):
    models: list[str] | None = Field(
        default=None, description="apiIds of the models the field may reference"
    )
    relation_type: RelationType
    is_hidden: bool | None = None
    reverse_field: ReverseFieldArgs | None = None


class UpdateUnionFieldArgs(FieldArgs):
    new_api_id: str | None = None
    is_hidden: bool | None = None
    models: list[str] | None = None


class CreateEnumerableFieldArgs(FieldArgs):
    enumeration_api_id: str | None = None
    is_list: bool | None = None
    is_required: bool | None = None
    is_unique: bool | None = None
    is_hidden: bool | None = None
    is_localized: bool | None = None


class UpdateEnumerableFieldArgs(FieldArgs):
    new_api_id: str | None = None
    enumeration_api_id: str | None = None
    is_list: bool | None = None
    is_required: bool | None = None
    is_unique: bool | None = None
    is_hidden: bool | None = None
    is_localized: bool | None = None


# Enumerations


class EnumerationValueArgs(WireModel):
    api_id: str
    display_name: str


class UpdateEnumerationValueArgs(WireModel):
    api_id: str
    new_api_id: str | None = None
    display_name: str | None = None


class CreateEnumerationArgs(WireModel):
    api_id: str
    display_name: str | None = None
    description: str | None = None
    # Bare strings are shorthand for {apiId: s, displayName: s}
    values: list[EnumerationValueArgs | str] | None = None


class UpdateEnumerationArgs(WireModel):
    api_id: str
    new_api_id: str | None = None
    display_name: str | None = None
    description: str | None = None
    values_to_create: list[EnumerationValueArgs | str] | None = None
    values_to_update: list[UpdateEnumerationValueArgs] | None = None
    values_to_delete: list[str] | None = None
