"""cp_contractors REST endpoints.

POST   /contractors                          — create
GET    /contractors                          — page/limit list (cached)
GET    /contractors/search                   — name/company/email search
GET    /contractors/brokers/search           — broker contacts search
GET    /contractors/{id}                     — detail (cached)
GET    /contractors/{id}/insurance-status    — derived from generated COIs
PATCH  /contractors/{id}                     — update
DELETE /contractors/{id}                     — delete
"""

import uuid
from typing import Annotated, Literal

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_common.database import get_db_session
from src.cp_common.enums import ADMIN_ROLES, STAFF_ROLES, ContractorStatus, UserRole
from src.cp_common.pagination import PageParams
from src.cp_common.response import ApiResponse, success_response
from src.cp_contractors.application.schemas import ContractorCreate, ContractorUpdate
from src.cp_contractors.application.service import ContractorService
from src.cp_gateway.auth.dependencies import get_current_user, require_roles
from src.cp_gateway.user.db_models import UserModel

router = APIRouter(prefix="/contractors", tags=["contractors"])

_service = ContractorService()

_WRITERS = (*STAFF_ROLES, UserRole.CONTRACTOR)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_contractor(
    request: Request,
    body: ContractorCreate,
    current_user: Annotated[UserModel, Depends(require_roles(*_WRITERS))],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    data = await _service.create(db, current_user, body)
    resp = success_response(data)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("")
async def list_contractors(
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    status: ContractorStatus | None = Query(None),
) -> ApiResponse:
    data = await _service.list_contractors(
        db, PageParams(page=page, limit=limit), status.value if status else None
    )
    resp = success_response(data)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/search")
async def search_contractors(
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    q: str = Query(..., max_length=100),
    limit: int = Query(10, ge=1, le=50),
) -> ApiResponse:
    data = await _service.search(db, q, limit)
    resp = success_response(data)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/brokers/search")
async def search_brokers(
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    q: str = Query(..., max_length=100),
    policy_type: Literal["GLOBAL", "GL", "UMBRELLA", "AUTO", "WC"] | None = Query(None),
    limit: int = Query(10, ge=1, le=50),
) -> ApiResponse:
    brokers = await _service.search_brokers(db, q, policy_type, limit)
    resp = success_response([b.model_dump() for b in brokers])
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/{contractor_id}")
async def get_contractor(
    contractor_id: uuid.UUID,
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    data = await _service.get(db, contractor_id)
    resp = success_response(data)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/{contractor_id}/insurance-status")
async def get_insurance_status(
    contractor_id: uuid.UUID,
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.insurance_status(db, contractor_id)
    resp = success_response(result.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.patch("/{contractor_id}")
async def update_contractor(
    contractor_id: uuid.UUID,
    request: Request,
    body: ContractorUpdate,
    current_user: Annotated[UserModel, Depends(require_roles(*_WRITERS))],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    data = await _service.update(db, current_user, contractor_id, body)
    resp = success_response(data)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.delete("/{contractor_id}")
async def delete_contractor(
    contractor_id: uuid.UUID,
    request: Request,
    current_user: Annotated[UserModel, Depends(require_roles(*ADMIN_ROLES))],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    await _service.delete(db, current_user, contractor_id)
    resp = success_response({"id": str(contractor_id)}, message="Contractor deleted")
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
