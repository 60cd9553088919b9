"""Translate generic validation requests into type-specific structures.

The backend keys field validations by scalar type (``Int``, ``Float``,
``String``) and accepts a different set of constraints for each. Callers
describe validations once, type-agnostically, and this module picks the
parts that apply to the field's declared type.
"""

from typing import Any

from ..core import SimpleFieldType, UnsupportedOperationError
from .args import FieldValidationArgs
from .base import build_struct
from .payloads import (
    FloatValidations,
    IntValidations,
    SimpleFieldValidations,
    StringValidations,
)


def _present(**parts: Any) -> dict[str, Any]:
    """Keep only the constraints that were actually requested."""
    return {
        name: value.model_dump(exclude_unset=True)
        for name, value in parts.items()
        if value is not None
    }


def extract_field_validations(
    field_type: SimpleFieldType | None,
    validations: FieldValidationArgs | None,
    is_list: bool | None = False,
) -> SimpleFieldValidations:
    """Build the validation structure for a simple field.

    Args:
        field_type: Declared type of the field
        validations: Generic validation request
        is_list: Whether the field holds a list of values; only list fields
            get a ``listItemCount`` constraint

    Returns:
        Validations keyed by the backend's type name

    Raises:
        UnsupportedOperationError: If the type has no validations
        MigrationValidationError: If a constraint does not fit the type,
            e.g. a fractional range on an integer field
    """
    requested = validations or FieldValidationArgs()
    list_item_count = requested.list_item_count if is_list else None

    if field_type == SimpleFieldType.INT:
        int_validations = build_struct(
            IntValidations,
            _present(range=requested.range, list_item_count=list_item_count),
        )
        return SimpleFieldValidations(int_=int_validations)

    if field_type == SimpleFieldType.FLOAT:
        float_validations = build_struct(
            FloatValidations,
            _present(range=requested.range, list_item_count=list_item_count),
        )
        return SimpleFieldValidations(float_=float_validations)

    if field_type == SimpleFieldType.STRING:
        string_validations = build_struct(
            StringValidations,
            _present(
                characters=requested.characters,
                matches=requested.matches,
                not_matches=requested.not_matches,
                list_item_count=list_item_count,
            ),
        )
        return SimpleFieldValidations(string=string_validations)

    type_name = field_type.value if field_type is not None else "a field without type"
    raise UnsupportedOperationError(f"field validations not supported for {type_name}")
