"""Pydantic models describing delivery logs and device tokens."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class DeliveryLogRead(BaseModel):
    """Entry of a customer, merchant, agent or admin notification log."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    recipient_id: str | None = None
    title: str
    description: str
    image_url: str
    created_at: datetime | None = None


class PushTokenCreate(BaseModel):
    """Payload used to register a device for push delivery."""

    recipient_id: str = Field(..., min_length=1, max_length=64)
    token: str = Field(..., min_length=1, max_length=512)


class PushTokenRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    recipient_id: str
    token: str
    created_at: datetime | None = None


__all__ = ["DeliveryLogRead", "PushTokenCreate", "PushTokenRead"]
