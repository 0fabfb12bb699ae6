"""cp_programs REST endpoints.

POST  /programs                                  — create
GET   /programs                                  — list
GET   /programs/{id}                             — detail
PATCH /programs/{id}                             — update
POST  /programs/{id}/projects/{project_id}       — assign to project
"""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_common.database import get_db_session
from src.cp_common.enums import ADMIN_ROLES
from src.cp_common.response import ApiResponse, success_response
from src.cp_gateway.auth.dependencies import get_current_user, require_roles
from src.cp_gateway.user.db_models import UserModel
from src.cp_programs.application.schemas import ProgramCreate, ProgramUpdate
from src.cp_programs.application.service import ProgramService

router = APIRouter(prefix="/programs", tags=["programs"])

_service = ProgramService()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_program(
    request: Request,
    body: ProgramCreate,
    current_user: Annotated[UserModel, Depends(require_roles(*ADMIN_ROLES))],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.create(db, current_user, body)
    resp = success_response(result.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("")
async def list_programs(
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    items = await _service.list_programs(db)
    resp = success_response([i.model_dump(mode="json") for i in items])
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/{program_id}")
async def get_program(
    program_id: uuid.UUID,
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.get(db, program_id)
    resp = success_response(result.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.patch("/{program_id}")
async def update_program(
    program_id: uuid.UUID,
    request: Request,
    body: ProgramUpdate,
    current_user: Annotated[UserModel, Depends(require_roles(*ADMIN_ROLES))],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.update(db, current_user, program_id, body)
    resp = success_response(result.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.post("/{program_id}/projects/{project_id}")
async def assign_program(
    program_id: uuid.UUID,
    project_id: uuid.UUID,
    request: Request,
    current_user: Annotated[UserModel, Depends(require_roles(*ADMIN_ROLES))],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.assign_to_project(db, program_id, project_id)
    resp = success_response(result.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
