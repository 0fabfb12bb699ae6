"""cp_audit REST endpoints (admin only).

GET /audit                           — filtered list with total
GET /audit/{resource}/{resource_id}  — history of one resource
"""

import uuid
from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_audit.application.service import AuditService
from src.cp_audit.domain.models import AuditFilter
from src.cp_common.database import get_db_session
from src.cp_common.enums import ADMIN_ROLES, AuditAction, AuditResource
from src.cp_common.response import ApiResponse, success_response
from src.cp_gateway.auth.dependencies import require_roles
from src.cp_gateway.user.db_models import UserModel

router = APIRouter(prefix="/audit", tags=["audit"])

_service = AuditService()


@router.get("")
async def list_audit_logs(
    request: Request,
    current_user: Annotated[UserModel, Depends(require_roles(*ADMIN_ROLES))],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    user_id: uuid.UUID | None = Query(None),
    action: AuditAction | None = Query(None),
    resource: AuditResource | None = Query(None),
    resource_id: str | None = Query(None),
    start_date: datetime | None = Query(None),
    end_date: datetime | None = Query(None),
    skip: int = Query(0, ge=0),
    take: int = Query(50, ge=1, le=200),
) -> ApiResponse:
    filters = AuditFilter(
        user_id=str(user_id) if user_id else None,
        action=action.value if action else None,
        resource=resource.value if resource else None,
        resource_id=resource_id,
        start_date=start_date,
        end_date=end_date,
    )
    result = await _service.list_logs(db, filters, skip, take)
    resp = success_response(result.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/{resource}/{resource_id}")
async def get_resource_logs(
    resource: AuditResource,
    resource_id: str,
    request: Request,
    current_user: Annotated[UserModel, Depends(require_roles(*ADMIN_ROLES))],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    items = await _service.resource_logs(db, resource.value, resource_id)
    resp = success_response([i.model_dump(mode="json") for i in items])
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
