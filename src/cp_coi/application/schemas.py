"""Pydantic request/response schemas for cp_coi."""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator

from src.cp_common.enums import BrokerType
from src.cp_common.sanitize import SafeUrl, SanitizedStr
from src.cp_users.application.schemas import BrokerAccount


class COICreate(BaseModel):
    project_id: uuid.UUID
    subcontractor_id: uuid.UUID
    assigned_admin_email: EmailStr | None = None


class BrokerInfoRequest(BaseModel):
    broker_type: BrokerType
    broker_name: SanitizedStr | None = Field(None, max_length=200)
    broker_email: EmailStr | None = None
    broker_phone: SanitizedStr | None = Field(None, max_length=50)
    broker_company: SanitizedStr | None = Field(None, max_length=200)
    broker_gl_name: SanitizedStr | None = Field(None, max_length=200)
    broker_gl_email: EmailStr | None = None
    broker_gl_phone: SanitizedStr | None = Field(None, max_length=50)
    broker_umbrella_name: SanitizedStr | None = Field(None, max_length=200)
    broker_umbrella_email: EmailStr | None = None
    broker_umbrella_phone: SanitizedStr | None = Field(None, max_length=50)
    broker_auto_name: SanitizedStr | None = Field(None, max_length=200)
    broker_auto_email: EmailStr | None = None
    broker_auto_phone: SanitizedStr | None = Field(None, max_length=50)
    broker_wc_name: SanitizedStr | None = Field(None, max_length=200)
    broker_wc_email: EmailStr | None = None
    broker_wc_phone: SanitizedStr | None = Field(None, max_length=50)


class UploadPoliciesRequest(BaseModel):
    gl_policy_url: SafeUrl | None = None
    umbrella_policy_url: SafeUrl | None = None
    auto_policy_url: SafeUrl | None = None
    wc_policy_url: SafeUrl | None = None
    first_coi_url: SafeUrl | None = None
    gl_expiration_date: datetime | None = None
    umbrella_expiration_date: datetime | None = None
    auto_expiration_date: datetime | None = None
    wc_expiration_date: datetime | None = None

    @model_validator(mode="after")
    def at_least_one_policy(self) -> "UploadPoliciesRequest":
        if not any(
            (self.gl_policy_url, self.umbrella_policy_url, self.auto_policy_url, self.wc_policy_url)
        ):
            raise ValueError("At least one policy URL is required")
        return self


class SignPoliciesRequest(BaseModel):
    gl_broker_signature_url: SafeUrl | None = None
    umbrella_broker_signature_url: SafeUrl | None = None
    auto_broker_signature_url: SafeUrl | None = None
    wc_broker_signature_url: SafeUrl | None = None

    @model_validator(mode="after")
    def at_least_one_signature(self) -> "SignPoliciesRequest":
        if not any(
            (
                self.gl_broker_signature_url,
                self.umbrella_broker_signature_url,
                self.auto_broker_signature_url,
                self.wc_broker_signature_url,
            )
        ):
            raise ValueError("At least one signature URL is required")
        return self


class ReviewCOIRequest(BaseModel):
    approved: bool
    deficiency_notes: SanitizedStr | None = Field(None, max_length=5000)


class COIItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    project_id: uuid.UUID
    subcontractor_id: uuid.UUID
    assigned_admin_email: str | None
    status: str
    broker_type: str | None
    broker_name: str | None
    broker_email: str | None
    broker_phone: str | None
    broker_company: str | None
    broker_gl_name: str | None
    broker_gl_email: str | None
    broker_gl_phone: str | None
    broker_umbrella_name: str | None
    broker_umbrella_email: str | None
    broker_umbrella_phone: str | None
    broker_auto_name: str | None
    broker_auto_email: str | None
    broker_auto_phone: str | None
    broker_wc_name: str | None
    broker_wc_email: str | None
    broker_wc_phone: str | None
    first_coi_url: str | None
    first_coi_uploaded: bool | None
    gl_policy_url: str | None
    umbrella_policy_url: str | None
    auto_policy_url: str | None
    wc_policy_url: str | None
    gl_broker_signature_url: str | None
    umbrella_broker_signature_url: str | None
    auto_broker_signature_url: str | None
    wc_broker_signature_url: str | None
    gl_expiration_date: datetime | None
    umbrella_expiration_date: datetime | None
    auto_expiration_date: datetime | None
    wc_expiration_date: datetime | None
    gc_name: str | None
    project_name: str | None
    subcontractor_name: str | None
    deficiency_notes: str | None
    hold_harmless_status: str | None
    hold_harmless_document_url: str | None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class BrokerInfoResponse(BaseModel):
    coi: COIItem
    broker_accounts: list[BrokerAccount]
