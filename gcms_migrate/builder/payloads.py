"""Fully resolved payload structs carried by change items.

Payloads are produced only by the normalizers. Each declares the attributes
the builder derives or that the backend types strictly; everything else the
caller passed flows through as an extra attribute under its wire name.
"""

from typing import Any

from pydantic import Field

from ..core import (
    HttpMethod,
    RelationalFieldType,
    RemoteFieldType,
    Renderer,
    SimpleFieldType,
)
from .args import FloatRange, IntRange, RegExMatch
from .base import WireModel

# Type-specific validations


class IntValidations(WireModel):
    range: IntRange | None = None
    list_item_count: IntRange | None = None


class FloatValidations(WireModel):
    range: FloatRange | None = None
    list_item_count: IntRange | None = None


class StringValidations(WireModel):
    characters: IntRange | None = None
    matches: RegExMatch | None = None
    not_matches: RegExMatch | None = None
    list_item_count: IntRange | None = None


class SimpleFieldValidations(WireModel):
    """Validation structure keyed by the backend's scalar type name."""

    int_: IntValidations | None = Field(default=None, alias="Int")
    float_: FloatValidations | None = Field(default=None, alias="Float")
    string: StringValidations | None = Field(default=None, alias="String")


# Fields


class FieldPayload(WireModel):
    """Identity of a field on its owning model.

    Also the complete payload of a field deletion.
    """

    api_id: str
    model_api_id: str


class SimpleFieldPayload(FieldPayload):
    type: SimpleFieldType | None = None
    form_renderer: Renderer | str | None = None
    validations: SimpleFieldValidations | None = None


class RemoteConfigPayload(WireModel):
    method: HttpMethod
    headers: dict[str, list[Any]]
    payload_field_api_ids: list[str]


class RemoteFieldPayload(FieldPayload):
    type: RemoteFieldType
    remote_config: RemoteConfigPayload


class ReverseRelationalFieldPayload(WireModel):
    api_id: str | None = None
    model_api_id: str | None = None
    is_list: bool | None = None
    is_hidden: bool | None = None


class RelationalFieldPayload(FieldPayload):
    type: RelationalFieldType | None = None
    is_list: bool | None = None
    is_required: bool | None = None
    reverse_field: ReverseRelationalFieldPayload | None = None


class ReverseUnionFieldPayload(WireModel):
    api_id: str | None = None
    model_api_ids: list[str] | None = None
    is_list: bool | None = None


class UnionFieldPayload(FieldPayload):
    is_list: bool | None = None
    reverse_field: ReverseUnionFieldPayload | None = None


class EnumerableFieldPayload(FieldPayload):
    enumeration_api_id: str | None = None


# Enumerations


class EnumerationValuePayload(WireModel):
    api_id: str
    display_name: str


class EnumerationPayload(WireModel):
    api_id: str
    values: list[EnumerationValuePayload] | None = None
    values_to_create: list[EnumerationValuePayload] | None = None


class EntityDeletionPayload(WireModel):
    """Payload of a model or enumeration deletion."""

    api_id: str
