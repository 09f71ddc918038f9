"""In-memory models for the item endpoints."""

from dataclasses import dataclass


@dataclass
class Item:
    id: int
    name: str
