"""
Arena storage for repeatable list items.

Items live in a dict keyed by their stable id; a separate list of ids
records display order. Removing an item shifts the order but never
changes another item's id. Ids that enter from outside and are not
currently live are replaced by fresh ones, so an id is never reused.
"""

from typing import Iterable, Iterator

from form_engine.errors import FieldPathError, FieldTypeError, OutOfRangeError
from form_engine.models.record import HobbyItem


class ItemArena:
    """Ordered, identity-keyed store for HobbyItems."""

    def __init__(self, items: Iterable[HobbyItem] = (), path: str = "hobbies"):
        self.path = path
        self._items: dict[str, HobbyItem] = {}
        self._order: list[str] = []
        for item in items:
            self.add(item)

    def __len__(self) -> int:
        return len(self._order)

    def __contains__(self, stable_id: object) -> bool:
        return stable_id in self._items

    def __iter__(self) -> Iterator[HobbyItem]:
        return (self._items[stable_id] for stable_id in self._order)

    @property
    def ids(self) -> list[str]:
        """Stable ids in display order."""
        return list(self._order)

    def add(self, item: HobbyItem) -> HobbyItem:
        """Append an item at the end."""
        self._check_unused(item.stable_id)
        self._items[item.stable_id] = item
        self._order.append(item.stable_id)
        return item

    def discard(self, stable_id: str) -> HobbyItem:
        """Remove an item by identity."""
        item = self.get(stable_id)
        self._order.remove(stable_id)
        del self._items[stable_id]
        return item

    def get(self, stable_id: str) -> HobbyItem:
        try:
            return self._items[stable_id]
        except KeyError:
            raise FieldPathError(stable_id, "Unknown stable id") from None

    def at(self, index: int, path: str) -> HobbyItem:
        """Get the live item at a display position."""
        if not 0 <= index < len(self._order):
            raise OutOfRangeError(path, index, len(self._order))
        return self._items[self._order[index]]

    def index_of(self, stable_id: str) -> int:
        self.get(stable_id)
        return self._order.index(stable_id)

    def items(self) -> list[HobbyItem]:
        """Copies of all items in display order."""
        return [item.model_copy(deep=True) for item in self]

    def replace(self, items: Iterable[HobbyItem]) -> None:
        """
        Replace the whole list.

        Items whose id is currently live keep their identity; any other
        item gets a freshly generated id.
        """
        new_items: dict[str, HobbyItem] = {}
        new_order: list[str] = []
        seen: set[str] = set()
        for item in items:
            if item.stable_id in seen:
                raise FieldTypeError(self.path, f"Duplicate stable id {item.stable_id!r}")
            seen.add(item.stable_id)
            if item.stable_id in self._items:
                item = item.model_copy(deep=True)
            else:
                item = HobbyItem(name=item.name)
            new_items[item.stable_id] = item
            new_order.append(item.stable_id)

        self._items = new_items
        self._order = new_order

    def clone(self) -> "ItemArena":
        copy = ItemArena(path=self.path)
        copy._items = {key: item.model_copy(deep=True) for key, item in self._items.items()}
        copy._order = list(self._order)
        return copy

    def _check_unused(self, stable_id: str) -> None:
        if stable_id in self._items:
            raise FieldTypeError(self.path, f"Stable id {stable_id!r} is already in the list")
