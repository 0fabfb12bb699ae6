"""Pydantic request/response schemas for cp_hold_harmless."""

import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from src.cp_common.sanitize import SafeUrl, SanitizedStr


class SubcontractorSignRequest(BaseModel):
    signature_url: SafeUrl
    signed_by: SanitizedStr = Field(..., min_length=1, max_length=200)


class GCSignRequest(BaseModel):
    signature_url: SafeUrl
    signed_by: SanitizedStr = Field(..., min_length=1, max_length=200)
    final_doc_url: SafeUrl


class HoldHarmlessItem(BaseModel):
    """Agreement view. Signature tokens are never exposed here."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    coi_id: uuid.UUID
    program_id: uuid.UUID | None
    template_url: str | None
    status: str
    project_address: str | None
    gc_name: str | None
    gc_email: str | None
    owners_entity: str | None
    additional_insureds: list[str]
    subcontractor_name: str | None
    subcontractor_email: str | None
    sub_signature_link_sent_at: datetime | None
    sub_signature_url: str | None
    sub_signed_at: datetime | None
    sub_signed_by: str | None
    gc_signature_link_sent_at: datetime | None
    gc_signature_url: str | None
    gc_signed_at: datetime | None
    gc_signed_by: str | None
    final_doc_url: str | None
    completed_at: datetime | None
    notifications_sent: list[str]
    notified_at: datetime | None
    generated_at: datetime | None = None


class TokenLookupResponse(BaseModel):
    agreement: HoldHarmlessItem
    signing_party: Literal["SUBCONTRACTOR", "GC"]
    can_sign: bool


class HoldHarmlessStats(BaseModel):
    total: int
    pending_sub_signature: int
    pending_gc_signature: int
    completed: int
    rejected: int
    pending_total: int
