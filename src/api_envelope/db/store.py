"""Process-local item store.

Items live in a dict for the lifetime of the process. The store is reached
through the ``get_store`` dependency so tests can swap in a fresh one via
``app.dependency_overrides``.
"""

from api_envelope.models import Item

# First id handed out by an empty store
FIRST_ITEM_ID = 100


class ItemStore:
    """Dict of items keyed by id, plus the next id to assign."""

    def __init__(self) -> None:
        self.items: dict[int, Item] = {}

    def next_id(self) -> int:
        return max(self.items, default=FIRST_ITEM_ID - 1) + 1

    def clear(self) -> None:
        self.items.clear()


store = ItemStore()


def get_store() -> ItemStore:
    """FastAPI dependency returning the process-wide store."""
    return store
