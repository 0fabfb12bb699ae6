"""Pydantic response schemas for cp_reminders."""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict


class ReminderItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    coi_id: uuid.UUID
    policy_type: str
    expiration_date: datetime
    days_before_expiry: int
    reminder_type: str
    sent_to: list[str]
    email_subject: str
    sent_at: datetime | None = None
    acknowledged: bool
    acknowledged_at: datetime | None
    acknowledged_by: str | None


class ReminderRunResult(BaseModel):
    cois_checked: int
    reminders_sent: int


class ReminderStats(BaseModel):
    total: int
    acknowledged: int
    pending: int
    by_type: dict[str, int]
