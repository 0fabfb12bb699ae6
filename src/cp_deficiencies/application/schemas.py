"""Pydantic request/response schemas for cp_deficiencies."""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from src.cp_common.enums import DeficiencyCategory, DeficiencySeverity
from src.cp_common.sanitize import SanitizedStr


class DeficiencyCreate(BaseModel):
    review_id: uuid.UUID
    category: DeficiencyCategory
    severity: DeficiencySeverity
    description: SanitizedStr = Field(..., min_length=1, max_length=5000)
    required_action: SanitizedStr = Field(..., min_length=1, max_length=5000)
    due_date: datetime | None = None


class ResolveDeficiencyRequest(BaseModel):
    resolution_notes: SanitizedStr = Field(..., min_length=1, max_length=5000)


class SendReminderRequest(BaseModel):
    user_id: uuid.UUID


class DeficiencyItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    review_id: uuid.UUID
    category: str
    severity: str
    description: str
    required_action: str
    due_date: datetime | None
    status: str
    resolved_by: uuid.UUID | None
    resolved_at: datetime | None
    resolution_notes: str | None
    created_at: datetime | None = None


class DeficiencyReminderItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    deficiency_id: uuid.UUID
    sent_to: uuid.UUID
    sent_at: datetime | None = None
    emailed: bool = False
