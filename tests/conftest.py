from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from api_envelope.db.store import ItemStore, get_store
from api_envelope.main import app


@pytest.fixture
def store() -> ItemStore:
    """Empty item store, isolated from the process-wide one."""
    return ItemStore()


@pytest_asyncio.fixture
async def client(store: ItemStore) -> AsyncIterator[AsyncClient]:
    """HTTP client bound to the app, using the test store."""
    app.dependency_overrides[get_store] = lambda: store

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    app.dependency_overrides.clear()
