"""cp_reminders REST endpoints.

POST  /reminders/run                — run the expiration check now
GET   /reminders/coi/{coi_id}       — reminders sent for a COI
GET   /reminders/pending            — unacknowledged reminders
GET   /reminders/stats              — counters
PATCH /reminders/{id}/acknowledge   — acknowledge
"""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_common.database import get_db_session
from src.cp_common.datetime_utils import utc_today
from src.cp_common.enums import ADMIN_ROLES, STAFF_ROLES
from src.cp_common.response import ApiResponse, success_response
from src.cp_gateway.auth.dependencies import require_roles
from src.cp_gateway.user.db_models import UserModel
from src.cp_reminders.application.service import ReminderService

router = APIRouter(prefix="/reminders", tags=["reminders"])

_service = ReminderService()


@router.post("/run")
async def run_expiration_check(
    request: Request,
    current_user: Annotated[UserModel, Depends(require_roles(*ADMIN_ROLES))],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.check_expiring_policies(db, utc_today())
    resp = success_response(result.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/coi/{coi_id}")
async def coi_reminders(
    coi_id: uuid.UUID,
    request: Request,
    current_user: Annotated[UserModel, Depends(require_roles(*STAFF_ROLES))],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    items = await _service.history(db, coi_id)
    resp = success_response([i.model_dump(mode="json") for i in items])
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/pending")
async def pending_reminders(
    request: Request,
    current_user: Annotated[UserModel, Depends(require_roles(*ADMIN_ROLES))],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    items = await _service.pending(db)
    resp = success_response([i.model_dump(mode="json") for i in items])
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/stats")
async def reminder_stats(
    request: Request,
    current_user: Annotated[UserModel, Depends(require_roles(*ADMIN_ROLES))],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.stats(db)
    resp = success_response(result.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.patch("/{reminder_id}/acknowledge")
async def acknowledge_reminder(
    reminder_id: uuid.UUID,
    request: Request,
    current_user: Annotated[UserModel, Depends(require_roles(*STAFF_ROLES))],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    item = await _service.acknowledge(db, current_user, reminder_id)
    resp = success_response(item.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
