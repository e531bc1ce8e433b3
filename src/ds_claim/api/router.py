"""ds_claim REST endpoints.

POST /markets/{market_id}/claim  — redeem the caller's winning shares
GET  /markets/{market_id}/claim  — payout the caller would receive now
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.ds_claim.application.service import ClaimApplicationService
from src.ds_common.database import get_db_session
from src.ds_common.response import ApiResponse, request_response
from src.ds_gateway.auth.dependencies import get_current_account

router = APIRouter(prefix="/markets", tags=["claims"])

_service = ClaimApplicationService()


@router.post("/{market_id}/claim")
async def claim(
    market_id: int,
    request: Request,
    caller: Annotated[str, Depends(get_current_account)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.claim(db, caller, market_id)
    return request_response(request, result.model_dump())


@router.get("/{market_id}/claim")
async def preview_claim(
    market_id: int,
    request: Request,
    caller: Annotated[str, Depends(get_current_account)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.preview(db, caller, market_id)
    return request_response(request, result.model_dump())
