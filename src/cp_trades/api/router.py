"""cp_trades REST endpoints (read-only catalogue).

GET /trades                           — all trades, alphabetical
GET /trades/categorized               — curated trade groups
GET /trades/search?q=                 — substring search
GET /trades/insurance-requirements    — minimums for one trade, or all
GET /trades/stats                     — catalogue counts
GET /trades/validate?trade=           — is the name in the catalogue
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from src.cp_common.response import ApiResponse, success_response
from src.cp_gateway.auth.dependencies import get_current_user
from src.cp_gateway.user.db_models import UserModel
from src.cp_trades.application.service import TradeService

router = APIRouter(prefix="/trades", tags=["trades"])

_service = TradeService()


def _respond(request: Request, data: object) -> ApiResponse:
    resp = success_response(data)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("")
async def list_trades(
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
) -> ApiResponse:
    return _respond(request, _service.list_trades().model_dump())


@router.get("/categorized")
async def categorized_trades(
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
) -> ApiResponse:
    return _respond(request, _service.categorized())


@router.get("/search")
async def search_trades(
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    q: Annotated[str, Query(min_length=1, max_length=100)],
) -> ApiResponse:
    return _respond(request, _service.search(q).model_dump())


@router.get("/insurance-requirements")
async def insurance_requirements(
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    trade: Annotated[str | None, Query(max_length=100)] = None,
) -> ApiResponse:
    if trade:
        return _respond(request, _service.requirements(trade).model_dump())
    return _respond(request, _service.all_requirements().model_dump())


@router.get("/stats")
async def trade_stats(
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
) -> ApiResponse:
    return _respond(request, _service.stats().model_dump())


@router.get("/validate")
async def validate_trade(
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    trade: Annotated[str, Query(min_length=1, max_length=100)],
) -> ApiResponse:
    return _respond(request, _service.validate(trade).model_dump())
