"""cp_deficiencies REST endpoints.

POST  /deficiencies                  — create on a review
GET   /deficiencies                  — list (review_id, status), most severe first
GET   /deficiencies/templates        — built-in templates
GET   /deficiencies/overdue          — open and past due
PATCH /deficiencies/{id}/resolve     — resolve
POST  /deficiencies/{id}/reminder    — remind a user
"""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_common.database import get_db_session
from src.cp_common.enums import STAFF_ROLES, DeficiencyStatus
from src.cp_common.response import ApiResponse, success_response
from src.cp_deficiencies.application.schemas import (
    DeficiencyCreate,
    ResolveDeficiencyRequest,
    SendReminderRequest,
)
from src.cp_deficiencies.application.service import DeficiencyService
from src.cp_gateway.auth.dependencies import get_current_user, require_roles
from src.cp_gateway.user.db_models import UserModel

router = APIRouter(prefix="/deficiencies", tags=["deficiencies"])

_service = DeficiencyService()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_deficiency(
    request: Request,
    body: DeficiencyCreate,
    current_user: Annotated[UserModel, Depends(require_roles(*STAFF_ROLES))],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    item = await _service.create(db, body)
    resp = success_response(item.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("")
async def list_deficiencies(
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    review_id: uuid.UUID | None = Query(None),
    status: DeficiencyStatus | None = Query(None),
) -> ApiResponse:
    items = await _service.list_deficiencies(db, review_id, status.value if status else None)
    resp = success_response([i.model_dump(mode="json") for i in items])
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/templates")
async def deficiency_templates(
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
) -> ApiResponse:
    resp = success_response(_service.templates())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/overdue")
async def overdue_deficiencies(
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    items = await _service.overdue(db)
    resp = success_response([i.model_dump(mode="json") for i in items])
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.patch("/{deficiency_id}/resolve")
async def resolve_deficiency(
    deficiency_id: uuid.UUID,
    request: Request,
    body: ResolveDeficiencyRequest,
    current_user: Annotated[UserModel, Depends(require_roles(*STAFF_ROLES))],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    item = await _service.resolve(db, current_user, deficiency_id, body)
    resp = success_response(item.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.post("/{deficiency_id}/reminder")
async def send_reminder(
    deficiency_id: uuid.UUID,
    request: Request,
    body: SendReminderRequest,
    current_user: Annotated[UserModel, Depends(require_roles(*STAFF_ROLES))],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    item = await _service.send_reminder(db, deficiency_id, body.user_id)
    resp = success_response(item.model_dump(mode="json"), message="Reminder sent")
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
