"""Pydantic request/response schemas for cp_projects."""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from src.cp_common.enums import ContractorType, ProjectStatus
from src.cp_common.sanitize import SanitizedStr


class ProjectCreate(BaseModel):
    name: SanitizedStr = Field(..., min_length=1, max_length=200)
    description: SanitizedStr | None = Field(None, max_length=5000)
    address: SanitizedStr | None = Field(None, max_length=500)
    location: SanitizedStr | None = Field(None, max_length=200)
    start_date: datetime | None = None
    end_date: datetime | None = None
    status: ProjectStatus = ProjectStatus.PLANNING
    gc_name: SanitizedStr | None = Field(None, max_length=200)
    entity: SanitizedStr | None = Field(None, max_length=200)
    additional_insureds: SanitizedStr | None = Field(None, max_length=2000)
    contact_person: SanitizedStr | None = Field(None, max_length=200)
    contact_email: EmailStr | None = None
    contact_phone: SanitizedStr | None = Field(None, max_length=50)
    gc_id: uuid.UUID | None = None


class ProjectUpdate(BaseModel):
    name: SanitizedStr | None = Field(None, min_length=1, max_length=200)
    description: SanitizedStr | None = Field(None, max_length=5000)
    address: SanitizedStr | None = Field(None, max_length=500)
    location: SanitizedStr | None = Field(None, max_length=200)
    start_date: datetime | None = None
    end_date: datetime | None = None
    status: ProjectStatus | None = None
    gc_name: SanitizedStr | None = Field(None, max_length=200)
    entity: SanitizedStr | None = Field(None, max_length=200)
    additional_insureds: SanitizedStr | None = Field(None, max_length=2000)
    contact_person: SanitizedStr | None = Field(None, max_length=200)
    contact_email: EmailStr | None = None
    contact_phone: SanitizedStr | None = Field(None, max_length=50)


class AssignContractorRequest(BaseModel):
    contractor_id: uuid.UUID
    role: ContractorType = ContractorType.SUBCONTRACTOR


class ProjectContractorItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    project_id: uuid.UUID
    contractor_id: uuid.UUID
    role: str
    assigned_at: datetime | None = None


class ProjectItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    description: str | None
    address: str | None
    location: str | None
    start_date: datetime | None
    end_date: datetime | None
    status: str
    gc_name: str | None
    entity: str | None
    additional_insureds: str | None
    contact_person: str | None
    contact_email: str | None
    contact_phone: str | None
    created_by_id: uuid.UUID | None
    created_at: datetime | None = None


class ProjectDetail(ProjectItem):
    contractors: list[ProjectContractorItem] = Field(default_factory=list)
