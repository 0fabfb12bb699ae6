"""cp_notifications REST endpoints — always the caller's own notifications.

GET    /notifications                — list (filter by type, read)
GET    /notifications/unread-count   — unread badge count
PATCH  /notifications/read-all       — mark all read
PATCH  /notifications/{id}/read      — mark one read
DELETE /notifications/{id}           — delete
"""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_common.database import get_db_session
from src.cp_common.enums import NotificationType
from src.cp_common.response import ApiResponse, success_response
from src.cp_gateway.auth.dependencies import get_current_user
from src.cp_gateway.user.db_models import UserModel
from src.cp_notifications.application.schemas import UnreadCountResponse
from src.cp_notifications.application.service import NotificationService

router = APIRouter(prefix="/notifications", tags=["notifications"])

_service = NotificationService()


@router.get("")
async def list_notifications(
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    type: NotificationType | None = Query(None),
    read: bool | None = Query(None),
) -> ApiResponse:
    items = await _service.list_notifications(
        db, current_user.id, type.value if type else None, read
    )
    resp = success_response([i.model_dump(mode="json") for i in items])
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/unread-count")
async def unread_count(
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    count = await _service.unread_count(db, current_user.id)
    resp = success_response(UnreadCountResponse(count=count).model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.patch("/read-all")
async def mark_all_read(
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    count = await _service.mark_all_read(db, current_user.id)
    resp = success_response({"updated": count})
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.patch("/{notification_id}/read")
async def mark_read(
    notification_id: uuid.UUID,
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    item = await _service.mark_read(db, current_user.id, notification_id)
    resp = success_response(item.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.delete("/{notification_id}")
async def delete_notification(
    notification_id: uuid.UUID,
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    await _service.delete(db, current_user.id, notification_id)
    resp = success_response({"id": str(notification_id)}, message="Notification deleted")
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
