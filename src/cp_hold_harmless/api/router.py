"""cp_hold_harmless REST endpoints.

POST /hold-harmless/auto-generate/{coi_id}     — generate for an approved COI
GET  /hold-harmless                            — list (status, pending_signature)
GET  /hold-harmless/stats                      — counters
GET  /hold-harmless/token/{token}              — resolve a signing link token
GET  /hold-harmless/coi/{coi_id}               — agreement of a COI
GET  /hold-harmless/{id}                       — detail
POST /hold-harmless/{id}/sign/subcontractor    — subcontractor signature
POST /hold-harmless/{id}/sign/gc               — GC signature, completes
POST /hold-harmless/{id}/resend/{party}        — resend signing link
"""

import uuid
from typing import Annotated, Literal

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.cp_common.database import get_db_session
from src.cp_common.enums import ADMIN_ROLES, STAFF_ROLES, HoldHarmlessStatus, UserRole
from src.cp_common.response import ApiResponse, success_response
from src.cp_gateway.auth.dependencies import get_current_user, require_roles
from src.cp_gateway.user.db_models import UserModel
from src.cp_hold_harmless.application.schemas import GCSignRequest, SubcontractorSignRequest
from src.cp_hold_harmless.application.service import HoldHarmlessService

router = APIRouter(prefix="/hold-harmless", tags=["hold-harmless"])

_service = HoldHarmlessService()


@router.post("/auto-generate/{coi_id}")
async def auto_generate(
    coi_id: uuid.UUID,
    request: Request,
    current_user: Annotated[UserModel, Depends(require_roles(*ADMIN_ROLES))],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    item = await _service.auto_generate_on_coi_approval(db, coi_id)
    resp = success_response(
        item.model_dump(mode="json") if item else None,
        message="Hold harmless generated" if item else "Hold harmless not required",
    )
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("")
async def list_agreements(
    request: Request,
    current_user: Annotated[UserModel, Depends(require_roles(*STAFF_ROLES))],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    status: HoldHarmlessStatus | None = Query(None),
    pending_signature: bool = Query(False),
) -> ApiResponse:
    items = await _service.list_agreements(
        db, status.value if status else None, pending_signature
    )
    resp = success_response([i.model_dump(mode="json") for i in items])
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/stats")
async def agreement_stats(
    request: Request,
    current_user: Annotated[UserModel, Depends(require_roles(*ADMIN_ROLES))],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.stats(db)
    resp = success_response(result.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/token/{token}")
async def get_by_token(
    token: str,
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.get_by_token(db, token)
    resp = success_response(result.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/coi/{coi_id}")
async def get_for_coi(
    coi_id: uuid.UUID,
    request: Request,
    current_user: Annotated[UserModel, Depends(require_roles(*STAFF_ROLES))],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    item = await _service.get_for_coi(db, coi_id)
    resp = success_response(item.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/{agreement_id}")
async def get_agreement(
    agreement_id: uuid.UUID,
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    item = await _service.get(db, agreement_id)
    resp = success_response(item.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.post("/{agreement_id}/sign/subcontractor")
async def sign_subcontractor(
    agreement_id: uuid.UUID,
    request: Request,
    body: SubcontractorSignRequest,
    current_user: Annotated[
        UserModel, Depends(require_roles(UserRole.SUBCONTRACTOR, *ADMIN_ROLES))
    ],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    item = await _service.sign_subcontractor(db, agreement_id, body)
    resp = success_response(item.model_dump(mode="json"), message="Signed by subcontractor")
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.post("/{agreement_id}/sign/gc")
async def sign_gc(
    agreement_id: uuid.UUID,
    request: Request,
    body: GCSignRequest,
    current_user: Annotated[UserModel, Depends(require_roles(UserRole.CONTRACTOR, *ADMIN_ROLES))],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    item = await _service.sign_gc(db, agreement_id, body)
    resp = success_response(item.model_dump(mode="json"), message="Agreement completed")
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.post("/{agreement_id}/resend/{party}")
async def resend_link(
    agreement_id: uuid.UUID,
    party: Literal["SUB", "GC"],
    request: Request,
    current_user: Annotated[UserModel, Depends(require_roles(*ADMIN_ROLES))],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    item = await _service.resend(db, agreement_id, party)
    resp = success_response(item.model_dump(mode="json"), message="Signing link resent")
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
