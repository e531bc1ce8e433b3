"""ds_liquidity REST endpoints.

GET  /markets/{market_id}/liquidity            — pool state
GET  /markets/{market_id}/liquidity/{account}  — LP position
POST /markets/{market_id}/liquidity/add        — deposit collateral as the caller
POST /markets/{market_id}/liquidity/remove     — redeem LP shares (any market state)
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.ds_common.database import get_db_session
from src.ds_common.response import ApiResponse, request_response
from src.ds_gateway.auth.dependencies import get_current_account
from src.ds_liquidity.application.schemas import AddLiquidityRequest, RemoveLiquidityRequest
from src.ds_liquidity.application.service import LiquidityApplicationService

router = APIRouter(prefix="/markets", tags=["liquidity"])

_service = LiquidityApplicationService()


@router.get("/{market_id}/liquidity")
async def get_pool(
    market_id: int,
    request: Request,
    caller: Annotated[str, Depends(get_current_account)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.get_pool(db, market_id)
    return request_response(request, result.model_dump())


@router.post("/{market_id}/liquidity/add")
async def add_liquidity(
    market_id: int,
    body: AddLiquidityRequest,
    request: Request,
    caller: Annotated[str, Depends(get_current_account)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.add(db, caller, market_id, body.amount)
    return request_response(request, result.model_dump())


@router.post("/{market_id}/liquidity/remove")
async def remove_liquidity(
    market_id: int,
    body: RemoveLiquidityRequest,
    request: Request,
    caller: Annotated[str, Depends(get_current_account)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.remove(db, caller, market_id, body.shares)
    return request_response(request, result.model_dump())


@router.get("/{market_id}/liquidity/{account}")
async def get_liquidity_position(
    market_id: int,
    account: str,
    request: Request,
    caller: Annotated[str, Depends(get_current_account)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.get_position(db, market_id, account)
    return request_response(request, result.model_dump())
