"""YAML migration plans.

A plan describes one migration session as an ordered list of steps::

    name: blog
    steps:
      - createModel: {apiId: Post, apiIdPlural: Posts, displayName: Post}
        fields:
          - addSimpleField: {apiId: title, type: STRING}
          - deleteField: legacyTitle
      - createEnumeration: {apiId: Color, displayName: Color, values: [Red]}
      - deleteModel: Legacy

Each step holds exactly one operation, spelled in camelCase or snake_case.
Model steps may list ``fields``, which are applied to the model's builder in
order. Delete operations take a bare ``apiId`` or a mapping holding one.
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from .builder import ModelBuilder
from .core import MigrationError, MigrationValidationError, PlanLoadError, get_logger
from .migration import Migration

logger = get_logger(__name__)

MIGRATION_OPERATIONS = {
    "createModel": "create_model",
    "updateModel": "update_model",
    "deleteModel": "delete_model",
    "createEnumeration": "create_enumeration",
    "updateEnumeration": "update_enumeration",
    "deleteEnumeration": "delete_enumeration",
}

FIELD_OPERATIONS = {
    "addSimpleField": "add_simple_field",
    "updateSimpleField": "update_simple_field",
    "addRemoteField": "add_remote_field",
    "addRelationalField": "add_relational_field",
    "updateRelationalField": "update_relational_field",
    "addUnionField": "add_union_field",
    "updateUnionField": "update_union_field",
    "addEnumerableField": "add_enumerable_field",
    "updateEnumerableField": "update_enumerable_field",
    "deleteField": "delete_field",
}

MODEL_METHODS = frozenset({"create_model", "update_model"})
DELETE_METHODS = frozenset({"delete_model", "delete_enumeration", "delete_field"})


def _resolve(operation: Any, table: Mapping[str, str]) -> str | None:
    if not isinstance(operation, str):
        return None
    if operation in table:
        return table[operation]
    if operation in table.values():
        return operation
    return None


def _operation_of(step: Any, kind: str) -> tuple[str, Any]:
    """Return the single operation key of ``step`` and its value."""
    if not isinstance(step, Mapping):
        raise MigrationValidationError(
            f"expected a {kind} mapping, got {type(step).__name__}"
        )
    operations = [key for key in step if key != "fields"]
    if len(operations) != 1:
        raise MigrationValidationError(
            f"expected exactly one operation, got {len(operations)}: "
            f"{', '.join(map(str, operations)) or 'none'}"
        )
    operation = operations[0]
    return operation, step[operation]


def _step_label(step: Any) -> str:
    if isinstance(step, Mapping):
        for key in step:
            if key != "fields":
                return str(key)
    return "?"


def _api_id_of(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, Mapping):
        api_id = value.get("apiId", value.get("api_id"))
        if isinstance(api_id, str):
            return api_id
    raise MigrationValidationError("delete operations need an apiId")


def _args_of(value: Any) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise MigrationValidationError(
            f"expected a mapping of arguments, got {type(value).__name__}"
        )
    return dict(value)


def _invoke(target: Any, method: str, value: Any) -> Any:
    if method in DELETE_METHODS:
        return getattr(target, method)(_api_id_of(value))
    return getattr(target, method)(_args_of(value))


def _apply_fields(builder: ModelBuilder, fields: Any) -> None:
    if not isinstance(fields, list):
        raise MigrationValidationError("fields must be a list of operations")

    for position, field_step in enumerate(fields, 1):
        operation, value = _operation_of(field_step, "field operation")
        method = _resolve(operation, FIELD_OPERATIONS)
        if method is None:
            raise MigrationValidationError(
                f"field {position}: unknown field operation '{operation}'"
            )
        try:
            _invoke(builder, method, value)
        except MigrationError as e:
            raise MigrationValidationError(
                f"field {position} ({operation}): {e}", cause=e
            ) from e


def _apply_step(migration: Migration, step: Any) -> str:
    operation, value = _operation_of(step, "step")
    method = _resolve(operation, MIGRATION_OPERATIONS)
    if method is None:
        raise MigrationValidationError(f"unknown operation '{operation}'")

    fields = step.get("fields")
    if fields is not None and method not in MODEL_METHODS:
        raise MigrationValidationError("only model steps may list fields")

    result = _invoke(migration, method, value)
    if fields is not None:
        _apply_fields(result, fields)
    return str(operation)


def build_migration(data: Any, name: str | None = None) -> Migration:
    """Build a migration session from a parsed plan.

    Args:
        data: Parsed plan, a mapping with ``steps`` and an optional ``name``
        name: Migration name used when the plan does not set one

    Returns:
        Migration with every step registered

    Raises:
        PlanLoadError: If the plan is malformed or any step is invalid
    """
    if not isinstance(data, Mapping):
        raise PlanLoadError("Plan must be a mapping with a 'steps' list")

    steps = data.get("steps")
    if not isinstance(steps, list) or not steps:
        raise PlanLoadError("Plan must have a non-empty 'steps' list")

    plan_name = data.get("name", name)
    if plan_name is not None and not isinstance(plan_name, str):
        raise PlanLoadError("Plan name must be a string")

    migration = Migration(name=plan_name)
    for index, step in enumerate(steps, 1):
        try:
            operation = _apply_step(migration, step)
        except MigrationError as e:
            raise PlanLoadError(
                f"Step {index} ({_step_label(step)}): {e}", cause=e
            ) from e
        logger.debug("Plan step applied", step=index, operation=operation)

    logger.info(
        "Plan loaded",
        migration=migration.name,
        steps=len(steps),
        registered_count=len(migration),
    )
    return migration


def parse_plan(content: str, name: str | None = None) -> Migration:
    """Parse YAML plan text into a migration session."""
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise PlanLoadError(f"Invalid YAML: {e}", cause=e) from e
    return build_migration(data, name=name)


def load_plan(path: str | Path) -> Migration:
    """Load a plan file; the file name stem names an unnamed plan.

    Raises:
        OSError: If the file cannot be read
        PlanLoadError: If the plan is malformed
    """
    plan_path = Path(path)
    content = plan_path.read_text(encoding="utf-8")
    return parse_plan(content, name=plan_path.stem)
