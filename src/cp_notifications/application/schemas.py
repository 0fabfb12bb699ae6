"""Pydantic response schemas for cp_notifications."""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict


class NotificationItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: uuid.UUID
    type: str
    title: str
    message: str
    link: str | None
    read: bool
    read_at: datetime | None
    created_at: datetime | None = None


class UnreadCountResponse(BaseModel):
    count: int
