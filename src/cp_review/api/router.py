"""cp_review REST endpoints.

POST  /coi-review/submit           — queue a COI document for review
GET   /coi-review/queue            — priority then due date
GET   /coi-review/overdue          — open and past due
GET   /coi-review/{id}             — detail with deficiencies
PATCH /coi-review/{id}/assign      — assign a reviewer
PATCH /coi-review/{id}/decision    — assigned reviewer's decision
"""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_common.database import get_db_session
from src.cp_common.enums import STAFF_ROLES, ReviewStatus
from src.cp_common.response import ApiResponse, success_response
from src.cp_gateway.auth.dependencies import get_current_user, require_roles
from src.cp_gateway.user.db_models import UserModel
from src.cp_review.application.schemas import (
    AssignReviewerRequest,
    ReviewDecisionRequest,
    SubmitReviewRequest,
)
from src.cp_review.application.service import ReviewService

router = APIRouter(prefix="/coi-review", tags=["coi-review"])

_service = ReviewService()


@router.post("/submit", status_code=status.HTTP_201_CREATED)
async def submit_review(
    request: Request,
    body: SubmitReviewRequest,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    item = await _service.submit(db, current_user, body)
    resp = success_response(item.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/queue")
async def review_queue(
    request: Request,
    current_user: Annotated[UserModel, Depends(require_roles(*STAFF_ROLES))],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    reviewer_id: uuid.UUID | None = Query(None),
    status: ReviewStatus | None = Query(None),
) -> ApiResponse:
    items = await _service.queue(db, reviewer_id, status.value if status else None)
    resp = success_response([i.model_dump(mode="json") for i in items])
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/overdue")
async def overdue_reviews(
    request: Request,
    current_user: Annotated[UserModel, Depends(require_roles(*STAFF_ROLES))],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    items = await _service.overdue(db)
    resp = success_response([i.model_dump(mode="json") for i in items])
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/{review_id}")
async def get_review(
    review_id: uuid.UUID,
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    detail = await _service.get(db, review_id)
    resp = success_response(detail.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.patch("/{review_id}/assign")
async def assign_reviewer(
    review_id: uuid.UUID,
    request: Request,
    body: AssignReviewerRequest,
    current_user: Annotated[UserModel, Depends(require_roles(*STAFF_ROLES))],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    item = await _service.assign(db, review_id, body.reviewer_id)
    resp = success_response(item.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.patch("/{review_id}/decision")
async def review_decision(
    review_id: uuid.UUID,
    request: Request,
    body: ReviewDecisionRequest,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    item = await _service.decide(db, current_user, review_id, body)
    resp = success_response(item.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
