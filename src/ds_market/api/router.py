"""ds_market REST endpoints.

GET /markets              — every market, in id order
GET /markets/due          — unsettled markets past their settlement time
GET /markets/{market_id}  — full detail
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.ds_common.database import get_db_session
from src.ds_common.response import ApiResponse, request_response
from src.ds_gateway.auth.dependencies import get_current_account
from src.ds_market.application.service import MarketApplicationService

router = APIRouter(prefix="/markets", tags=["markets"])

_service = MarketApplicationService()


@router.get("")
async def list_markets(
    request: Request,
    caller: Annotated[str, Depends(get_current_account)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.list_markets(db)
    return request_response(request, result.model_dump())


@router.get("/due")
async def list_due_markets(
    request: Request,
    caller: Annotated[str, Depends(get_current_account)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.list_due_markets(db)
    return request_response(request, result.model_dump())


@router.get("/{market_id}")
async def get_market(
    market_id: int,
    request: Request,
    caller: Annotated[str, Depends(get_current_account)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.get_market(db, market_id)
    return request_response(request, result.model_dump())
