"""Item request and response schemas."""

from pydantic import BaseModel, Field


class ItemCreate(BaseModel):
    """Body of POST /items. The id is assigned by the store when omitted."""

    id: int | None = Field(default=None, ge=1)
    name: str = Field(min_length=1, max_length=200)


class ItemResponse(BaseModel):
    """Single item as returned inside a data envelope."""

    model_config = {"from_attributes": True}

    id: int
    name: str
