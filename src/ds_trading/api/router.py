"""ds_trading REST endpoints.

POST /markets/{market_id}/buy                  — buy YES/NO shares as the caller
GET  /markets/{market_id}/positions/{account}  — position (zero if none)
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.ds_common.database import get_db_session
from src.ds_common.response import ApiResponse, request_response
from src.ds_gateway.auth.dependencies import get_current_account
from src.ds_trading.application.schemas import BuySharesRequest
from src.ds_trading.application.service import TradingApplicationService

router = APIRouter(prefix="/markets", tags=["trading"])

_service = TradingApplicationService()


@router.post("/{market_id}/buy")
async def buy_shares(
    market_id: int,
    body: BuySharesRequest,
    request: Request,
    caller: Annotated[str, Depends(get_current_account)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.buy_shares(db, caller, market_id, body)
    return request_response(request, result.model_dump())


@router.get("/{market_id}/positions/{account}")
async def get_position(
    market_id: int,
    account: str,
    request: Request,
    caller: Annotated[str, Depends(get_current_account)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.get_position(db, market_id, account)
    return request_response(request, result.model_dump())
