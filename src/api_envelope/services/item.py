"""Item business logic.

Turns missing or duplicate items into domain exceptions; the exception
handlers in main.py render those as error envelopes.
"""

from api_envelope.config import settings
from api_envelope.db.store import ItemStore
from api_envelope.exceptions import ConflictError, NotFoundError
from api_envelope.logging import get_logger
from api_envelope.models import Item
from api_envelope.repositories.item import add_item, delete_item, get_item, list_items
from api_envelope.schemas.item import ItemCreate

logger = get_logger(__name__)


def fetch_item(store: ItemStore, item_id: int) -> Item:
    item = get_item(store, item_id)
    if item is None:
        raise NotFoundError("Item", item_id, message=settings.not_found_message)
    return item


def fetch_items(store: ItemStore) -> list[Item]:
    return list_items(store)


def create_item(store: ItemStore, payload: ItemCreate) -> Item:
    """Store a new item, assigning the next free id when none is given.

    Raises ConflictError if an item with the requested id already exists.
    """
    item_id = payload.id if payload.id is not None else store.next_id()
    if get_item(store, item_id) is not None:
        raise ConflictError(f"Item with id {item_id} already exists")
    item = add_item(store, Item(id=item_id, name=payload.name))
    logger.info("item_created", item_id=item.id)
    return item


def remove_item(store: ItemStore, item_id: int) -> Item:
    item = delete_item(store, item_id)
    if item is None:
        raise NotFoundError("Item", item_id, message=settings.not_found_message)
    logger.info("item_deleted", item_id=item_id)
    return item
