"""Pydantic DTOs (Data Transfer Objects) for the Client feature."""

from typing import Any

from pydantic import BaseModel, Field


class ClientCreate(BaseModel):
    """Schema for creating a new client."""

    name: str = Field(..., max_length=255, examples=["Ana"])
    phone: str | None = Field(None, max_length=50, examples=["+1 555 0100"])


class ClientUpdate(ClientCreate):
    """Schema for editing a client — every editable field is replaced."""


class ClientResponse(BaseModel):
    """Schema returned to the client.

    Imported clients keep whatever values the snapshot held.
    """

    id: str
    name: Any
    phone: Any
    created_at: Any

    model_config = {"from_attributes": True}
