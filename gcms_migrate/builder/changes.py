"""Change items and the ordered change log of a migration session.

A change item pairs a mutation intent with its fully resolved payload and
knows how to render itself as a single-key change descriptor. The change log
stores items in registration order; the backend applies changes in the order
they are submitted, so that order is significant.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, Protocol

from ..core import EntityKind, FieldType, MutationMode, get_logger
from .base import WireModel

logger = get_logger(__name__)

MigrationChange = dict[str, dict[str, Any]]

# Attributes that identify the target of an update rather than change it
MODEL_IDENTITY_KEYS = frozenset({"apiId"})
FIELD_IDENTITY_KEYS = frozenset({"apiId", "modelApiId"})


@dataclass(frozen=True)
class ChangeItem:
    """One resolved schema change.

    The payload is complete when the item is built; nothing downstream
    derives further attributes.
    """

    mode: MutationMode
    kind: FieldType | EntityKind
    payload: WireModel

    @property
    def action(self) -> str:
        """Backend action name, e.g. ``createModel`` or ``updateUnionField``."""
        # deleting a field does not depend on its category, so the kind of a
        # field delete only marks it as a field operation
        if self.mode == MutationMode.DELETE and isinstance(self.kind, FieldType):
            return "deleteField"
        return f"{self.mode.value}{self.kind.value}"

    @property
    def api_id(self) -> str:
        return self.payload.api_id  # type: ignore[attr-defined]

    @property
    def identity_keys(self) -> frozenset[str]:
        if isinstance(self.kind, FieldType):
            return FIELD_IDENTITY_KEYS
        return MODEL_IDENTITY_KEYS

    def has_changes(self) -> bool:
        """Whether submitting this item would change anything.

        Creations and deletions always do. An update does only if it carries
        at least one attribute besides the keys that identify its target.
        """
        if self.mode != MutationMode.UPDATE:
            return True
        return bool(set(self.payload.to_wire()) - self.identity_keys)

    def generate_change(self) -> MigrationChange:
        """Render as a single-key change descriptor."""
        return {self.action: self.payload.to_wire()}


class ChangeListener(Protocol):
    """Anything builder operations can report their change items to."""

    def register_change(self, item: ChangeItem) -> None: ...


class ChangeLog:
    """Ordered, append-only store of the change items of one migration session.

    Items are kept unconditionally, including updates without effect, so the
    full history stays inspectable; consumers filter with
    :meth:`ChangeItem.has_changes` when they submit.
    """

    def __init__(self) -> None:
        self._items: list[ChangeItem] = []

    def register_change(self, item: ChangeItem) -> None:
        self._items.append(item)
        logger.debug(
            "Change registered",
            action=item.action,
            api_id=item.api_id,
            position=len(self._items),
        )

    @property
    def items(self) -> tuple[ChangeItem, ...]:
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[ChangeItem]:
        return iter(tuple(self._items))
