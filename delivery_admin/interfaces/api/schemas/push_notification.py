"""Schemas for push notification endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class PushNotificationRead(BaseModel):
    """Representation of a stored push notification."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    image_url: str
    geofence_ids: list[str] = Field(default_factory=list)
    merchant: bool = Field(validation_alias="targets_merchant")
    driver: bool = Field(validation_alias="targets_driver")
    customer: bool = Field(validation_alias="targets_customer")
    created_at: datetime | None = None


class PushNotificationSendResponse(BaseModel):
    """Acknowledgement returned as soon as a send is accepted."""

    success: bool
    message: str


__all__ = ["PushNotificationRead", "PushNotificationSendResponse"]
