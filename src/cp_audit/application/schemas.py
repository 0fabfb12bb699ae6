"""Pydantic response schemas for cp_audit."""

import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class AuditLogItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: uuid.UUID | None
    action: str
    resource: str
    resource_id: str | None
    changes: dict[str, Any] | None
    metadata: dict[str, Any] | None = Field(None, validation_alias="extra")
    ip_address: str | None
    user_agent: str | None
    timestamp: datetime


class AuditListResponse(BaseModel):
    items: list[AuditLogItem]
    total: int
