"""
List manager for the repeatable hobbies list.

Append and remove work by stable id, never by position. The list can
grow without limit but never shrinks below one item.
"""

import logging

from pydantic import ValidationError

from form_engine.errors import FieldTypeError, RemovalRejected
from form_engine.models.record import HobbyItem
from form_engine.paths import format_path
from form_engine.schema.constants import HOBBIES_PATH, MIN_HOBBIES
from form_engine.store.arena import ItemArena
from form_engine.store.field_store import FieldStore

logger = logging.getLogger("form-engine.store")


class ListManager:
    """Insert/remove operations on a FieldStore's hobbies list."""

    def __init__(self, store: FieldStore):
        self._store = store

    @property
    def _arena(self) -> ItemArena:
        # Looked up on each call: FieldStore.update() may swap the arena.
        return self._store.hobbies

    def __len__(self) -> int:
        return len(self._arena)

    @property
    def can_remove(self) -> bool:
        """Whether a remove control should be offered at all."""
        return len(self._arena) > MIN_HOBBIES

    def items(self) -> list[HobbyItem]:
        return self._arena.items()

    def append(self, item: HobbyItem | str = "") -> HobbyItem:
        """
        Add an item at the end with a freshly generated stable id.

        Only the name of a passed HobbyItem is used; its id is not reused.
        """
        name = item.name if isinstance(item, HobbyItem) else item
        try:
            new_item = HobbyItem(name=name)
        except ValidationError as e:
            raise FieldTypeError(HOBBIES_PATH, e.errors()[0]["msg"]) from e
        self._arena.add(new_item)
        logger.debug(f"Appended hobby {new_item.stable_id} at position {len(self._arena) - 1}")
        return new_item.model_copy()

    def remove(self, stable_id: str) -> HobbyItem:
        """
        Remove the item with this identity; later items shift up.

        Raises:
            FieldPathError: If no item has this stable id.
            RemovalRejected: If it is the only remaining item.
        """
        index = self._arena.index_of(stable_id)
        if len(self._arena) <= MIN_HOBBIES:
            raise RemovalRejected("At least one hobby must remain")
        removed = self._arena.discard(stable_id)
        logger.debug(f"Removed hobby {stable_id} from position {index}")
        return removed

    def index_of(self, stable_id: str) -> int:
        """Current display position of an item."""
        return self._arena.index_of(stable_id)

    def path_for(self, stable_id: str, attribute: str = "name") -> str:
        """Field path of an item's attribute at its current position."""
        return format_path(HOBBIES_PATH, self.index_of(stable_id), attribute)
