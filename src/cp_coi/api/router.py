"""cp_coi REST endpoints.

POST  /generated-coi                     — create (copies a master COI when one exists)
GET   /generated-coi                     — role-scoped list
GET   /generated-coi/expiring            — ACTIVE COIs expiring within ``days``
GET   /generated-coi/{id}                — detail
PATCH /generated-coi/{id}/broker-info    — broker contacts, provisions broker logins
PATCH /generated-coi/{id}/upload         — policy documents
PATCH /generated-coi/{id}/sign           — broker signatures
PATCH /generated-coi/{id}/review         — approve / reject
POST  /generated-coi/{id}/renew          — new COI from an EXPIRED one
PATCH /generated-coi/{id}/resubmit       — back to the broker after a deficiency
"""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_coi.application.schemas import (
    BrokerInfoRequest,
    COICreate,
    ReviewCOIRequest,
    SignPoliciesRequest,
    UploadPoliciesRequest,
)
from src.cp_coi.application.service import COIService
from src.cp_common.database import get_db_session
from src.cp_common.enums import ADMIN_ROLES, STAFF_ROLES, UserRole
from src.cp_common.response import ApiResponse, success_response
from src.cp_gateway.auth.dependencies import get_current_user, require_roles
from src.cp_gateway.user.db_models import UserModel

router = APIRouter(prefix="/generated-coi", tags=["generated-coi"])

_service = COIService()

_CREATORS = (*STAFF_ROLES, UserRole.CONTRACTOR)
_BROKER_INFO_EDITORS = (*STAFF_ROLES, UserRole.CONTRACTOR, UserRole.SUBCONTRACTOR)
_BROKER_ACTORS = (UserRole.BROKER, *ADMIN_ROLES)
_RESUBMITTERS = (UserRole.BROKER, UserRole.SUBCONTRACTOR, *ADMIN_ROLES)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_coi(
    request: Request,
    body: COICreate,
    current_user: Annotated[UserModel, Depends(require_roles(*_CREATORS))],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    item = await _service.create(db, current_user, body)
    resp = success_response(item.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("")
async def list_cois(
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    items = await _service.list_cois(db, current_user)
    resp = success_response([i.model_dump(mode="json") for i in items])
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/expiring")
async def expiring_cois(
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    days: int = Query(30, ge=1, le=365),
) -> ApiResponse:
    items = await _service.expiring(db, days)
    resp = success_response([i.model_dump(mode="json") for i in items])
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/{coi_id}")
async def get_coi(
    coi_id: uuid.UUID,
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    item = await _service.get(db, coi_id)
    resp = success_response(item.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.patch("/{coi_id}/broker-info")
async def update_broker_info(
    coi_id: uuid.UUID,
    request: Request,
    body: BrokerInfoRequest,
    current_user: Annotated[UserModel, Depends(require_roles(*_BROKER_INFO_EDITORS))],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.update_broker_info(db, current_user, coi_id, body)
    resp = success_response(result.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.patch("/{coi_id}/upload")
async def upload_policies(
    coi_id: uuid.UUID,
    request: Request,
    body: UploadPoliciesRequest,
    current_user: Annotated[UserModel, Depends(require_roles(*_BROKER_ACTORS))],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    item = await _service.upload_policies(db, current_user, coi_id, body)
    resp = success_response(item.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.patch("/{coi_id}/sign")
async def sign_policies(
    coi_id: uuid.UUID,
    request: Request,
    body: SignPoliciesRequest,
    current_user: Annotated[UserModel, Depends(require_roles(*_BROKER_ACTORS))],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    item = await _service.sign_policies(db, current_user, coi_id, body)
    resp = success_response(item.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.patch("/{coi_id}/review")
async def review_coi(
    coi_id: uuid.UUID,
    request: Request,
    body: ReviewCOIRequest,
    current_user: Annotated[UserModel, Depends(require_roles(*STAFF_ROLES))],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    item = await _service.review(db, current_user, coi_id, body)
    resp = success_response(
        item.model_dump(mode="json"),
        message="COI approved" if body.approved else "COI rejected",
    )
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.post("/{coi_id}/renew", status_code=status.HTTP_201_CREATED)
async def renew_coi(
    coi_id: uuid.UUID,
    request: Request,
    current_user: Annotated[UserModel, Depends(require_roles(*_BROKER_INFO_EDITORS))],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    item = await _service.renew(db, current_user, coi_id)
    resp = success_response(item.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.patch("/{coi_id}/resubmit")
async def resubmit_coi(
    coi_id: uuid.UUID,
    request: Request,
    current_user: Annotated[UserModel, Depends(require_roles(*_RESUBMITTERS))],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    item = await _service.resubmit(db, current_user, coi_id)
    resp = success_response(item.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
