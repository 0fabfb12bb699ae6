"""Auth API router: login, refresh, logout, me.

All endpoints return ApiResponse. request_id is read from
request.state (injected by RequestLogMiddleware).
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_common.database import get_db_session
from src.cp_common.response import ApiResponse, success_response
from src.cp_gateway.auth.dependencies import get_current_user
from src.cp_gateway.auth.jwt_handler import access_token_ttl_seconds
from src.cp_gateway.middleware.request_log import client_user_agent
from src.cp_gateway.user.db_models import UserModel
from src.cp_gateway.user.schemas import (
    LoginRequest,
    LogoutResponse,
    RefreshRequest,
    TokenPairResponse,
    UserInfo,
)
from src.cp_gateway.user.service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])
_service = AuthService()


def _get_request_id(request: Request) -> str:
    """Read request_id injected by RequestLogMiddleware, fallback if absent."""
    return getattr(request.state, "request_id", "req_unknown")


@router.post(
    "/login",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse,
    summary="Login with email and password",
)
async def login(
    request: Request,
    body: LoginRequest,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    user, access_token, refresh_token = await _service.login(
        db,
        body.email,
        body.password,
        ip_address=request.client.host if request.client else None,
        user_agent=client_user_agent(request),
    )
    data = TokenPairResponse(
        access_token=access_token,
        refresh_token=refresh_token,
        expires_in=access_token_ttl_seconds(),
        user=UserInfo.model_validate(user),
    )
    resp = success_response(data.model_dump(mode="json"), message="Login successful")
    resp.request_id = _get_request_id(request)
    return resp


@router.post(
    "/refresh",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse,
    summary="Rotate refresh token and issue a new access token",
)
async def refresh_token(
    request: Request,
    body: RefreshRequest,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    user, access_token, new_refresh = await _service.refresh(db, body.refresh_token)
    data = TokenPairResponse(
        access_token=access_token,
        refresh_token=new_refresh,
        expires_in=access_token_ttl_seconds(),
        user=UserInfo.model_validate(user),
    )
    resp = success_response(data.model_dump(mode="json"), message="Token refreshed")
    resp.request_id = _get_request_id(request)
    return resp


@router.post("/logout", response_model=ApiResponse, summary="Revoke all refresh tokens")
async def logout(
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    tokens, sessions = await _service.logout(db, current_user)
    data = LogoutResponse(revoked_tokens=tokens, revoked_sessions=sessions)
    resp = success_response(data.model_dump(), message="Logged out")
    resp.request_id = _get_request_id(request)
    return resp


@router.get("/me", response_model=ApiResponse, summary="Current user profile")
async def me(
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
) -> ApiResponse:
    resp = success_response(UserInfo.model_validate(current_user).model_dump(mode="json"))
    resp.request_id = _get_request_id(request)
    return resp
