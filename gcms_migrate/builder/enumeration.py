"""Enumeration normalization.

Enumeration values may be given as bare strings, which is shorthand for a
value whose apiId and display name are the same.
"""

from typing import Any

from .args import CreateEnumerationArgs, EnumerationValueArgs, UpdateEnumerationArgs
from .base import build_struct
from .payloads import EnumerationPayload


def _value_data(value: EnumerationValueArgs | str) -> dict[str, Any]:
    if isinstance(value, str):
        return {"apiId": value, "displayName": value}
    return value.model_dump(by_alias=True, exclude_unset=True)


def normalize_enumeration(args: CreateEnumerationArgs) -> EnumerationPayload:
    data = args.model_dump(by_alias=True, exclude_unset=True)
    if args.values is not None:
        data["values"] = [_value_data(value) for value in args.values]
    return build_struct(EnumerationPayload, data)


def normalize_enumeration_update(args: UpdateEnumerationArgs) -> EnumerationPayload:
    data = args.model_dump(by_alias=True, exclude_unset=True)
    if args.values_to_create is not None:
        data["valuesToCreate"] = [_value_data(value) for value in args.values_to_create]
    return build_struct(EnumerationPayload, data)
