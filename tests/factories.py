"""Factory functions for test data."""

from api_envelope.db.store import ItemStore
from api_envelope.models import Item


def make_item(*, id: int = 100, name: str = "Alexey Shatrov") -> Item:
    return Item(id=id, name=name)


def seed_items(store: ItemStore, *items: Item) -> ItemStore:
    for item in items or (make_item(),):
        store.items[item.id] = item
    return store
