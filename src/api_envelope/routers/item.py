"""Item endpoints.

Every endpoint returns a ResponseEnvelope; EnvelopeRoute turns it into the
JSON response. Failures are raised as domain exceptions and rendered by the
handlers in main.py.
"""

from fastapi import APIRouter

from api_envelope.dependencies import Store
from api_envelope.response import EnvelopeRoute, ResponseEnvelope
from api_envelope.schemas.envelope import DataEnvelope, ErrorEnvelope
from api_envelope.schemas.item import ItemCreate, ItemResponse
from api_envelope.services.item import create_item, fetch_item, fetch_items, remove_item

router = APIRouter(prefix="/items", tags=["items"], route_class=EnvelopeRoute)

NOT_FOUND = {404: {"model": ErrorEnvelope}}


def _dump(item: object) -> dict[str, object]:
    return ItemResponse.model_validate(item).model_dump()


@router.get("", response_model=DataEnvelope[list[ItemResponse]])
async def list_all(store: Store) -> ResponseEnvelope:
    """List all items ordered by id."""
    return ResponseEnvelope.ok([_dump(item) for item in fetch_items(store)])


@router.get("/{item_id}", response_model=DataEnvelope[ItemResponse], responses=NOT_FOUND)
async def read(item_id: int, store: Store) -> ResponseEnvelope:
    """Fetch a single item."""
    return ResponseEnvelope.ok(_dump(fetch_item(store, item_id)))


@router.post(
    "",
    status_code=201,
    response_model=DataEnvelope[ItemResponse],
    responses={409: {"model": ErrorEnvelope}},
)
async def create(payload: ItemCreate, store: Store) -> ResponseEnvelope:
    """Create an item; 409 if the requested id is taken."""
    return ResponseEnvelope.created(_dump(create_item(store, payload)))


@router.delete("/{item_id}", response_model=DataEnvelope[dict[str, int]], responses=NOT_FOUND)
async def delete(item_id: int, store: Store) -> ResponseEnvelope:
    """Delete an item and echo its id."""
    item = remove_item(store, item_id)
    return ResponseEnvelope.ok({"id": item.id})
