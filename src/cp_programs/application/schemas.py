"""Pydantic request/response schemas for cp_programs."""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from src.cp_common.sanitize import SafeUrl, SanitizedStr


class ProgramCreate(BaseModel):
    name: SanitizedStr = Field(..., min_length=1, max_length=200)
    description: SanitizedStr | None = Field(None, max_length=5000)
    requires_hold_harmless: bool = False
    hold_harmless_template_url: SafeUrl | None = None


class ProgramUpdate(BaseModel):
    name: SanitizedStr | None = Field(None, min_length=1, max_length=200)
    description: SanitizedStr | None = Field(None, max_length=5000)
    requires_hold_harmless: bool | None = None
    hold_harmless_template_url: SafeUrl | None = None


class ProgramItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    description: str | None
    requires_hold_harmless: bool
    hold_harmless_template_url: str | None
    created_at: datetime | None = None


class ProjectProgramItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    project_id: uuid.UUID
    program_id: uuid.UUID
    assigned_at: datetime | None = None
