"""cp_users REST endpoints (user administration).

POST   /users         — create
GET    /users         — page/limit list
GET    /users/{id}    — admin or self
PATCH  /users/{id}    — update
DELETE /users/{id}    — delete (not self)
"""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_common.database import get_db_session
from src.cp_common.enums import ADMIN_ROLES
from src.cp_common.pagination import PageParams
from src.cp_common.response import ApiResponse, success_response
from src.cp_gateway.auth.dependencies import get_current_user, require_roles
from src.cp_gateway.user.db_models import UserModel
from src.cp_gateway.user.schemas import UserInfo
from src.cp_users.application.schemas import CreateUserRequest, UpdateUserRequest
from src.cp_users.application.service import UserAdminService

router = APIRouter(prefix="/users", tags=["users"])

_service = UserAdminService()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(
    request: Request,
    body: CreateUserRequest,
    current_user: Annotated[UserModel, Depends(require_roles(*ADMIN_ROLES))],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    user = await _service.create_user(db, current_user, body)
    resp = success_response(UserInfo.model_validate(user).model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("")
async def list_users(
    request: Request,
    current_user: Annotated[UserModel, Depends(require_roles(*ADMIN_ROLES))],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
) -> ApiResponse:
    result = await _service.list_users(db, PageParams(page=page, limit=limit))
    resp = success_response(result.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/{user_id}")
async def get_user(
    user_id: uuid.UUID,
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    user = await _service.get_user(db, current_user, user_id)
    resp = success_response(UserInfo.model_validate(user).model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.patch("/{user_id}")
async def update_user(
    user_id: uuid.UUID,
    request: Request,
    body: UpdateUserRequest,
    current_user: Annotated[UserModel, Depends(require_roles(*ADMIN_ROLES))],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    user = await _service.update_user(db, current_user, user_id, body)
    resp = success_response(UserInfo.model_validate(user).model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.delete("/{user_id}")
async def delete_user(
    user_id: uuid.UUID,
    request: Request,
    current_user: Annotated[UserModel, Depends(require_roles(*ADMIN_ROLES))],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    await _service.delete_user(db, current_user, user_id)
    resp = success_response({"id": str(user_id)}, message="User deleted")
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
