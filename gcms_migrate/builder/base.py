"""Shared pydantic base for argument and payload structs.

Every struct accepts both the backend's camelCase attribute names and their
snake_case Python equivalents, is frozen once validated, and lets attributes
it does not declare pass through under their camelCase wire name so that
newer backend options do not need a code change here.
"""

from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from ..core import MigrationValidationError


def wire_keys(struct_cls: type[BaseModel], data: Mapping[str, Any]) -> dict[str, Any]:
    """Rename every key of ``data`` to the wire name ``struct_cls`` expects.

    Declared fields map to their alias. Undeclared snake_case keys are
    camelized, so each attribute has exactly one spelling. When two spellings
    of the same attribute appear, the later one wins.
    """
    renamed: dict[str, Any] = {}
    for key, value in data.items():
        field = struct_cls.model_fields.get(key)
        if field is not None and field.alias:
            key = field.alias
        elif isinstance(key, str) and "_" in key.strip("_"):
            key = to_camel(key)
        renamed[key] = value
    return renamed


class WireModel(BaseModel):
    """Immutable struct whose serialized form uses backend attribute names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        frozen=True,
        protected_namespaces=(),
    )

    @model_validator(mode="before")
    @classmethod
    def _use_wire_keys(cls, data: Any) -> Any:
        if isinstance(data, Mapping):
            return wire_keys(cls, data)
        return data

    def to_wire(self) -> dict[str, Any]:
        """Render only the attributes that were set, with wire names and values."""
        return self.model_dump(by_alias=True, exclude_unset=True, mode="json")


ModelT = TypeVar("ModelT", bound=WireModel)


def describe_validation_error(error: PydanticValidationError) -> str:
    """Flatten pydantic errors into a single readable line."""
    parts = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "<root>"
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)


def coerce_args(
    args_cls: type[ModelT],
    args: ModelT | Mapping[str, Any] | None,
    overrides: Mapping[str, Any] | None = None,
) -> ModelT:
    """Validate caller input into an immutable argument struct.

    Args:
        args_cls: Argument struct to produce
        args: An instance of ``args_cls``, a mapping, or None
        overrides: Keyword arguments that take precedence over ``args``

    Returns:
        A validated ``args_cls`` instance. The caller's mapping is never mutated.

    Raises:
        MigrationValidationError: If the input does not match ``args_cls``
    """
    if isinstance(args, args_cls) and not overrides:
        return args

    data: dict[str, Any] = {}
    if isinstance(args, BaseModel):
        data.update(args.model_dump(by_alias=True, exclude_unset=True))
    elif isinstance(args, Mapping):
        data.update(wire_keys(args_cls, args))
    elif args is not None:
        raise MigrationValidationError(
            f"{args_cls.__name__} expects a mapping, got {type(args).__name__}"
        )
    if overrides:
        # overrides replace the mapping's value whatever its spelling
        data.update(wire_keys(args_cls, overrides))

    return build_struct(args_cls, data)


def build_struct(struct_cls: type[ModelT], data: Mapping[str, Any]) -> ModelT:
    """Validate ``data`` into ``struct_cls``, raising our own error type."""
    try:
        return struct_cls.model_validate(data)
    except PydanticValidationError as e:
        raise MigrationValidationError(
            f"Invalid {struct_cls.__name__}: {describe_validation_error(e)}", cause=e
        ) from e
