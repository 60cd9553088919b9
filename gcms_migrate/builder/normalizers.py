"""Field descriptor normalization.

One pure function per field category maps validated caller arguments to the
complete payload the backend expects. The functions work on a fresh
wire-named copy of the arguments, resolve derived attributes, strip
convenience-only inputs and validate the result into a frozen payload.
"""

from collections.abc import Mapping
from typing import Any

from ..core import (
    ASSET_MODEL_API_ID,
    HttpMethod,
    MigrationValidationError,
    RelationalFieldType,
    RelationType,
    RemoteFieldType,
    Renderer,
    SimpleFieldType,
)
from .args import (
    CreateEnumerableFieldArgs,
    CreateRelationalFieldArgs,
    CreateRemoteFieldArgs,
    CreateSimpleFieldArgs,
    CreateUnionFieldArgs,
    FieldArgs,
    UpdateEnumerableFieldArgs,
    UpdateRelationalFieldArgs,
    UpdateSimpleFieldArgs,
    UpdateUnionFieldArgs,
)
from .base import build_struct
from .payloads import (
    EnumerableFieldPayload,
    FieldPayload,
    RelationalFieldPayload,
    RemoteFieldPayload,
    SimpleFieldPayload,
    UnionFieldPayload,
)
from .validations import extract_field_validations


def _field_data(model_api_id: str, args: FieldArgs) -> dict[str, Any]:
    """Copy ``args`` under wire names and attach it to its owning model."""
    data = args.model_dump(by_alias=True, exclude_unset=True)
    # modelApiId is always the builder's, never the caller's
    data["modelApiId"] = model_api_id
    return data


def _synthesized_reverse_field(model_api_id: str) -> dict[str, Any]:
    return {
        "apiId": f"related{model_api_id}",
        "displayName": f"Related {model_api_id}",
    }


def _reverse_field_data(
    model_api_id: str, args: CreateRelationalFieldArgs | CreateUnionFieldArgs
) -> dict[str, Any]:
    if args.reverse_field is None:
        return _synthesized_reverse_field(model_api_id)
    return args.reverse_field.model_dump(by_alias=True, exclude_unset=True)


# Simple fields


def normalize_simple_field(
    model_api_id: str, args: CreateSimpleFieldArgs
) -> SimpleFieldPayload:
    """Resolve a simple field creation.

    String fields without a form renderer are rendered as single-line inputs.
    """
    data = _field_data(model_api_id, args)

    if args.type == SimpleFieldType.STRING and not args.form_renderer:
        data["formRenderer"] = Renderer.SINGLE_LINE

    if args.validations is not None:
        data["validations"] = extract_field_validations(
            args.type, args.validations, args.is_list
        )

    return build_struct(SimpleFieldPayload, data)


def normalize_simple_field_update(
    model_api_id: str, args: UpdateSimpleFieldArgs
) -> SimpleFieldPayload:
    """Resolve a simple field update.

    Updates never change the underlying type, so ``type`` is only used to
    shape validations and is dropped from the payload.
    """
    data = _field_data(model_api_id, args)
    data.pop("type", None)

    if args.validations is not None:
        data["validations"] = extract_field_validations(
            args.type, args.validations, args.is_list
        )

    return build_struct(SimpleFieldPayload, data)


# Remote fields


def normalize_remote_headers(headers: Any) -> dict[str, list[Any]]:
    """Coerce a header mapping into the backend's multi-value shape.

    Scalar values are wrapped in a single-element list; list values are kept,
    so normalizing twice gives the same result.

    Raises:
        MigrationValidationError: If ``headers`` is not a key-value mapping
    """
    if headers is None:
        return {}
    if not isinstance(headers, Mapping):
        raise MigrationValidationError(
            "Headers in remote config has to be a key-value mapping, "
            f"got {type(headers).__name__}"
        )
    return {
        str(name): list(value) if isinstance(value, list | tuple) else [value]
        for name, value in headers.items()
    }


def normalize_remote_field(
    model_api_id: str, args: CreateRemoteFieldArgs
) -> RemoteFieldPayload:
    """Resolve a remote field creation with a complete remote config."""
    data = _field_data(model_api_id, args)
    data["type"] = RemoteFieldType.REMOTE

    remote_config = dict(data["remoteConfig"])
    remote_config["headers"] = normalize_remote_headers(args.remote_config.headers)
    remote_config["payloadFieldApiIds"] = (
        args.remote_config.payload_field_api_ids or []
    )
    remote_config["method"] = args.remote_config.method or HttpMethod.GET
    data["remoteConfig"] = remote_config

    return build_struct(RemoteFieldPayload, data)


# Relational fields


def normalize_relational_field(
    model_api_id: str, args: CreateRelationalFieldArgs
) -> RelationalFieldPayload:
    """Resolve a relational field creation and wire up its reverse side.

    Asset relations always keep ``isRequired`` and get a hidden list reverse
    field; plain relations must not carry ``isRequired`` at all.
    """
    is_asset = (
        args.type == RelationalFieldType.ASSET or args.model == ASSET_MODEL_API_ID
    )
    relation_type: RelationType = args.relation_type

    data = _field_data(model_api_id, args)
    data["type"] = (
        RelationalFieldType.ASSET if is_asset else RelationalFieldType.RELATION
    )
    data["isList"] = relation_type.forward_is_list

    reverse_field = _reverse_field_data(model_api_id, args)
    reverse_field["modelApiId"] = args.model
    reverse_field["isList"] = relation_type.reverse_is_list

    if is_asset:
        if args.is_required is None:
            data["isRequired"] = False
        reverse_field["isList"] = True
        reverse_field["isHidden"] = True
    else:
        data.pop("isRequired", None)

    data["reverseField"] = reverse_field

    # convenience inputs are not backend attributes
    del data["model"]
    del data["relationType"]

    return build_struct(RelationalFieldPayload, data)


def normalize_relational_field_update(
    model_api_id: str, args: UpdateRelationalFieldArgs
) -> RelationalFieldPayload:
    return build_struct(RelationalFieldPayload, _field_data(model_api_id, args))


# Union fields


def normalize_union_field(
    model_api_id: str, args: CreateUnionFieldArgs
) -> UnionFieldPayload:
    """Resolve a union field creation.

    Mirrors relational fields, except that the reverse side references every
    member model of the union.

    Raises:
        MigrationValidationError: If no member models are given
    """
    if not args.models:
        raise MigrationValidationError(
            f"models cannot be empty for union field {args.api_id!r}"
        )
    relation_type: RelationType = args.relation_type

    data = _field_data(model_api_id, args)
    data["isList"] = relation_type.forward_is_list

    reverse_field = _reverse_field_data(model_api_id, args)
    reverse_field["modelApiIds"] = list(args.models)
    reverse_field["isList"] = relation_type.reverse_is_list
    data["reverseField"] = reverse_field

    del data["models"]
    del data["relationType"]

    return build_struct(UnionFieldPayload, data)


def normalize_union_field_update(
    model_api_id: str, args: UpdateUnionFieldArgs
) -> UnionFieldPayload:
    """Resolve a union field update, moving ``models`` onto the reverse side."""
    data = _field_data(model_api_id, args)
    models = data.pop("models", None)
    if models is not None:
        data["reverseField"] = {"modelApiIds": list(models)}
    return build_struct(UnionFieldPayload, data)


# Enumerable fields


def normalize_enumerable_field(
    model_api_id: str, args: CreateEnumerableFieldArgs
) -> EnumerableFieldPayload:
    """Resolve an enumerable field creation.

    Raises:
        MigrationValidationError: If the field names no enumeration
    """
    if not args.enumeration_api_id:
        raise MigrationValidationError(
            f"enumerationApiId is required for enumerable field {args.api_id!r}"
        )
    return build_struct(EnumerableFieldPayload, _field_data(model_api_id, args))


def normalize_enumerable_field_update(
    model_api_id: str, args: UpdateEnumerableFieldArgs
) -> EnumerableFieldPayload:
    return build_struct(EnumerableFieldPayload, _field_data(model_api_id, args))


def normalize_field_deletion(model_api_id: str, api_id: str) -> FieldPayload:
    return build_struct(FieldPayload, {"apiId": api_id, "modelApiId": model_api_id})
