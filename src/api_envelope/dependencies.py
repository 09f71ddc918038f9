"""Shared FastAPI dependencies.

Reusable type aliases that routers import. Defined here (not in main.py) to
avoid circular imports when routers are registered in main.
"""

from typing import Annotated

from fastapi import Depends

from api_envelope.db.store import ItemStore, get_store

Store = Annotated[ItemStore, Depends(get_store)]
