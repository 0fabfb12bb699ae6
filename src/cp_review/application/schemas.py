"""Pydantic request/response schemas for cp_review."""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from src.cp_common.enums import ReviewDecision, ReviewPriority
from src.cp_common.sanitize import SanitizedStr
from src.cp_deficiencies.application.schemas import DeficiencyItem


class SubmitReviewRequest(BaseModel):
    contractor_id: uuid.UUID
    document_id: uuid.UUID
    priority: ReviewPriority = ReviewPriority.NORMAL
    due_date: datetime | None = None


class AssignReviewerRequest(BaseModel):
    reviewer_id: uuid.UUID


class ReviewDecisionRequest(BaseModel):
    decision: ReviewDecision
    notes: SanitizedStr | None = Field(None, max_length=5000)


class ReviewItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    contractor_id: uuid.UUID
    document_id: uuid.UUID
    submitted_by: uuid.UUID
    assigned_to: uuid.UUID | None
    status: str
    priority: str
    due_date: datetime
    decision: str | None
    notes: str | None
    reviewed_at: datetime | None
    created_at: datetime | None = None


class ReviewDetail(ReviewItem):
    deficiencies: list[DeficiencyItem] = []
