"""
Form value storage.

FieldStore holds the Record; ListManager edits its hobbies list.
"""

from form_engine.store.arena import ItemArena
from form_engine.store.field_store import FieldStore
from form_engine.store.list_manager import ListManager

__all__ = [
    "FieldStore",
    "ItemArena",
    "ListManager",
]
