"""Pydantic request/response schemas for cp_contractors."""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from src.cp_common.enums import ContractorStatus, ContractorType, InsuranceStatus
from src.cp_common.sanitize import SanitizedStr


class ContractorCreate(BaseModel):
    name: SanitizedStr = Field(..., min_length=1, max_length=200)
    email: EmailStr
    phone: SanitizedStr | None = Field(None, max_length=50)
    company: SanitizedStr | None = Field(None, max_length=200)
    address: SanitizedStr | None = Field(None, max_length=500)
    city: SanitizedStr | None = Field(None, max_length=100)
    state: SanitizedStr | None = Field(None, max_length=50)
    zip_code: SanitizedStr | None = Field(None, max_length=20)
    trades: list[SanitizedStr] = Field(default_factory=list)
    contractor_type: ContractorType = ContractorType.SUBCONTRACTOR
    status: ContractorStatus = ContractorStatus.PENDING


class ContractorUpdate(BaseModel):
    name: SanitizedStr | None = Field(None, min_length=1, max_length=200)
    email: EmailStr | None = None
    phone: SanitizedStr | None = Field(None, max_length=50)
    company: SanitizedStr | None = Field(None, max_length=200)
    address: SanitizedStr | None = Field(None, max_length=500)
    city: SanitizedStr | None = Field(None, max_length=100)
    state: SanitizedStr | None = Field(None, max_length=50)
    zip_code: SanitizedStr | None = Field(None, max_length=20)
    trades: list[SanitizedStr] | None = None
    contractor_type: ContractorType | None = None
    status: ContractorStatus | None = None


class ContractorItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    email: str
    phone: str | None
    company: str | None
    address: str | None
    city: str | None
    state: str | None
    zip_code: str | None
    trades: list[str]
    contractor_type: str
    status: str
    insurance_status: str
    broker_type: str | None
    broker_name: str | None
    broker_email: str | None
    broker_phone: str | None
    broker_company: str | None
    created_at: datetime | None = None


class COIStatusRef(BaseModel):
    id: uuid.UUID
    status: str


class InsuranceStatusResponse(BaseModel):
    contractor_id: uuid.UUID
    status: InsuranceStatus
    cois: list[COIStatusRef]


class BrokerSearchItem(BaseModel):
    name: str | None
    email: str
    phone: str | None
    policy_type: str
