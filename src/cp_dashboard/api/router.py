"""cp_dashboard REST endpoints.

GET /dashboard/stats — role-scoped counters
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_common.database import get_db_session
from src.cp_common.response import ApiResponse, success_response
from src.cp_dashboard.application.service import DashboardService
from src.cp_gateway.auth.dependencies import get_current_user
from src.cp_gateway.user.db_models import UserModel

router = APIRouter(prefix="/dashboard", tags=["dashboard"])

_service = DashboardService()


@router.get("/stats")
async def dashboard_stats(
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.stats(db, current_user)
    resp = success_response(result.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
