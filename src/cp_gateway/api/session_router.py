"""Session endpoints — list and revoke the caller's own login sessions.

GET    /sessions        — active sessions, newest first
DELETE /sessions/{id}   — revoke one
DELETE /sessions        — revoke all
"""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_common.database import get_db_session
from src.cp_common.response import ApiResponse, success_response
from src.cp_gateway.auth.dependencies import get_current_user
from src.cp_gateway.session.service import SessionService
from src.cp_gateway.user.db_models import UserModel
from src.cp_gateway.user.schemas import SessionInfo

router = APIRouter(prefix="/sessions", tags=["sessions"])
_service = SessionService()


@router.get("")
async def list_sessions(
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    sessions = await _service.list_sessions(db, current_user)
    resp = success_response(
        [SessionInfo.model_validate(s).model_dump(mode="json") for s in sessions]
    )
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.delete("/{session_id}")
async def revoke_session(
    session_id: uuid.UUID,
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    await _service.revoke(db, current_user, session_id)
    resp = success_response({"id": str(session_id)}, message="Session revoked")
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.delete("")
async def revoke_all_sessions(
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    count = await _service.revoke_all(db, current_user)
    resp = success_response({"revoked": count}, message="All sessions revoked")
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
