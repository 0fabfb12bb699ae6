"""cp_projects REST endpoints.

POST  /projects                                — create (optional gc_id link)
GET   /projects                                — role-scoped list
GET   /projects/by-contractor/{contractor_id}  — projects a contractor is on
GET   /projects/{id}                           — detail with contractor links
PATCH /projects/{id}                           — update
POST  /projects/{id}/contractors               — assign contractor
"""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_common.database import get_db_session
from src.cp_common.enums import STAFF_ROLES, ProjectStatus, UserRole
from src.cp_common.response import ApiResponse, success_response
from src.cp_gateway.auth.dependencies import get_current_user, require_roles
from src.cp_gateway.user.db_models import UserModel
from src.cp_projects.application.schemas import (
    AssignContractorRequest,
    ProjectCreate,
    ProjectUpdate,
)
from src.cp_projects.application.service import ProjectService

router = APIRouter(prefix="/projects", tags=["projects"])

_service = ProjectService()

_WRITERS = (*STAFF_ROLES, UserRole.CONTRACTOR)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_project(
    request: Request,
    body: ProjectCreate,
    current_user: Annotated[UserModel, Depends(require_roles(*_WRITERS))],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.create(db, current_user, body)
    resp = success_response(result.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("")
async def list_projects(
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    search: str | None = Query(None, max_length=100),
    status: ProjectStatus | None = Query(None),
) -> ApiResponse:
    items = await _service.list_projects(
        db, current_user, search, status.value if status else None
    )
    resp = success_response([i.model_dump(mode="json") for i in items])
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/by-contractor/{contractor_id}")
async def list_projects_for_contractor(
    contractor_id: uuid.UUID,
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    items = await _service.list_for_contractor(db, contractor_id)
    resp = success_response([i.model_dump(mode="json") for i in items])
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/{project_id}")
async def get_project(
    project_id: uuid.UUID,
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.get(db, project_id)
    resp = success_response(result.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.patch("/{project_id}")
async def update_project(
    project_id: uuid.UUID,
    request: Request,
    body: ProjectUpdate,
    current_user: Annotated[UserModel, Depends(require_roles(*_WRITERS))],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.update(db, current_user, project_id, body)
    resp = success_response(result.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.post("/{project_id}/contractors", status_code=status.HTTP_201_CREATED)
async def assign_contractor(
    project_id: uuid.UUID,
    request: Request,
    body: AssignContractorRequest,
    current_user: Annotated[UserModel, Depends(require_roles(*_WRITERS))],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.assign_contractor(db, project_id, body)
    resp = success_response(result.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
