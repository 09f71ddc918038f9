"""Envelope schemas for OpenAPI.

ResponseEnvelope renders itself, so these models are never used to serialize.
They describe the two wire shapes in the generated docs::

    @router.get("/items/{item_id}", response_model=DataEnvelope[ItemResponse])
"""

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class DataEnvelope(BaseModel, Generic[T]):
    """Success body for 2xx responses: {"data": ...}."""

    data: T


class ErrorEnvelope(BaseModel):
    """Error body for 4xx and 5xx responses: {"error_message": "..."}."""

    error_message: str
