"""Item data-access layer.

Plain lookups on the ItemStore. No business rules, no HTTP concerns.
"""

from api_envelope.db.store import ItemStore
from api_envelope.models import Item


def get_item(store: ItemStore, item_id: int) -> Item | None:
    return store.items.get(item_id)


def list_items(store: ItemStore) -> list[Item]:
    """Return all items ordered by id."""
    return [store.items[item_id] for item_id in sorted(store.items)]


def add_item(store: ItemStore, item: Item) -> Item:
    store.items[item.id] = item
    return item


def delete_item(store: ItemStore, item_id: int) -> Item | None:
    return store.items.pop(item_id, None)
