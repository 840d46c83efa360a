"""Response DTOs for the API layer that aren't plain Todo records."""

from pydantic import BaseModel


class TodoCreated(BaseModel):
    """Body of a successful create: the store-assigned id."""
    id: str
