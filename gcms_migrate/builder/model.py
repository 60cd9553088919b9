"""Fluent builder for the fields of one model.

Every operation validates its arguments, normalizes them into a complete
payload, and registers exactly one change item with the session's listener.
An operation that fails registers nothing. Operations return the builder so
calls can be chained::

    migration.create_model(apiId="Post", displayName="Post") \\
        .add_simple_field(apiId="title", type="STRING") \\
        .add_relational_field(apiId="author", model="Author", relationType="ManyToOne")

Arguments can be given as an args struct, a mapping, keyword arguments, or a
mapping plus keyword overrides; both ``apiId`` and ``api_id`` spellings work.
"""

from collections.abc import Mapping
from typing import Any

from ..core import FieldType, MutationMode
from .args import (
    CreateEnumerableFieldArgs,
    CreateRelationalFieldArgs,
    CreateRemoteFieldArgs,
    CreateSimpleFieldArgs,
    CreateUnionFieldArgs,
    UpdateEnumerableFieldArgs,
    UpdateRelationalFieldArgs,
    UpdateSimpleFieldArgs,
    UpdateUnionFieldArgs,
)
from .base import WireModel, coerce_args
from .changes import ChangeItem, ChangeListener
from .normalizers import (
    normalize_enumerable_field,
    normalize_enumerable_field_update,
    normalize_field_deletion,
    normalize_relational_field,
    normalize_relational_field_update,
    normalize_remote_field,
    normalize_simple_field,
    normalize_simple_field_update,
    normalize_union_field,
    normalize_union_field_update,
)

ArgsInput = WireModel | Mapping[str, Any] | None


class ModelBuilder:
    """Adds, updates and deletes fields of the model ``api_id``."""

    def __init__(self, listener: ChangeListener, api_id: str):
        self._listener = listener
        self._api_id = api_id

    @property
    def api_id(self) -> str:
        return self._api_id

    def _register(
        self, mode: MutationMode, kind: FieldType, payload: WireModel
    ) -> "ModelBuilder":
        item = ChangeItem(mode=mode, kind=kind, payload=payload)
        self._listener.register_change(item)
        return self

    def add_simple_field(
        self, args: ArgsInput = None, /, **kwargs: Any
    ) -> "ModelBuilder":
        """Add a scalar field. ``type`` is required."""
        field_args = coerce_args(CreateSimpleFieldArgs, args, kwargs)
        payload = normalize_simple_field(self._api_id, field_args)
        return self._register(MutationMode.CREATE, FieldType.SIMPLE_FIELD, payload)

    def add_remote_field(
        self, args: ArgsInput = None, /, **kwargs: Any
    ) -> "ModelBuilder":
        """Add a field whose value is fetched from ``remoteConfig.url``."""
        field_args = coerce_args(CreateRemoteFieldArgs, args, kwargs)
        payload = normalize_remote_field(self._api_id, field_args)
        return self._register(MutationMode.CREATE, FieldType.REMOTE_FIELD, payload)

    def update_simple_field(
        self, args: ArgsInput = None, /, **kwargs: Any
    ) -> "ModelBuilder":
        """Update a scalar field. Pass ``type`` when updating validations."""
        field_args = coerce_args(UpdateSimpleFieldArgs, args, kwargs)
        payload = normalize_simple_field_update(self._api_id, field_args)
        return self._register(MutationMode.UPDATE, FieldType.SIMPLE_FIELD, payload)

    def add_relational_field(
        self, args: ArgsInput = None, /, **kwargs: Any
    ) -> "ModelBuilder":
        """Add a relation to ``model``; targeting ``Asset`` makes an asset field."""
        field_args = coerce_args(CreateRelationalFieldArgs, args, kwargs)
        payload = normalize_relational_field(self._api_id, field_args)
        return self._register(MutationMode.CREATE, FieldType.RELATIONAL_FIELD, payload)

    def update_relational_field(
        self, args: ArgsInput = None, /, **kwargs: Any
    ) -> "ModelBuilder":
        field_args = coerce_args(UpdateRelationalFieldArgs, args, kwargs)
        payload = normalize_relational_field_update(self._api_id, field_args)
        return self._register(MutationMode.UPDATE, FieldType.RELATIONAL_FIELD, payload)

    def add_union_field(
        self, args: ArgsInput = None, /, **kwargs: Any
    ) -> "ModelBuilder":
        """Add a field referencing any one of ``models``."""
        field_args = coerce_args(CreateUnionFieldArgs, args, kwargs)
        payload = normalize_union_field(self._api_id, field_args)
        return self._register(MutationMode.CREATE, FieldType.UNION_FIELD, payload)

    def update_union_field(
        self, args: ArgsInput = None, /, **kwargs: Any
    ) -> "ModelBuilder":
        field_args = coerce_args(UpdateUnionFieldArgs, args, kwargs)
        payload = normalize_union_field_update(self._api_id, field_args)
        return self._register(MutationMode.UPDATE, FieldType.UNION_FIELD, payload)

    def add_enumerable_field(
        self, args: ArgsInput = None, /, **kwargs: Any
    ) -> "ModelBuilder":
        """Add a field restricted to the values of ``enumerationApiId``."""
        field_args = coerce_args(CreateEnumerableFieldArgs, args, kwargs)
        payload = normalize_enumerable_field(self._api_id, field_args)
        return self._register(MutationMode.CREATE, FieldType.ENUMERABLE_FIELD, payload)

    def update_enumerable_field(
        self, args: ArgsInput = None, /, **kwargs: Any
    ) -> "ModelBuilder":
        field_args = coerce_args(UpdateEnumerableFieldArgs, args, kwargs)
        payload = normalize_enumerable_field_update(self._api_id, field_args)
        return self._register(MutationMode.UPDATE, FieldType.ENUMERABLE_FIELD, payload)

    def delete_field(self, api_id: str) -> "ModelBuilder":
        # the backend deletes any field category by apiId alone; SIMPLE_FIELD
        # stands in for the unknown category and renders as deleteField
        payload = normalize_field_deletion(self._api_id, api_id)
        return self._register(MutationMode.DELETE, FieldType.SIMPLE_FIELD, payload)

    def __repr__(self) -> str:
        return f"ModelBuilder(api_id={self._api_id!r})"
