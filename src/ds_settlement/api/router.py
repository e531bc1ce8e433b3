"""ds_settlement REST endpoints.

POST /settlement/markets/{market_id}  — direct settlement (settler only)
POST /settlement/report               — batch report (forwarder only)
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.ds_common.database import get_db_session
from src.ds_common.response import ApiResponse, request_response
from src.ds_gateway.auth.dependencies import get_current_account
from src.ds_settlement.application.schemas import ReportRequest, SettleMarketRequest
from src.ds_settlement.application.service import SettlementApplicationService

router = APIRouter(prefix="/settlement", tags=["settlement"])

_service = SettlementApplicationService()


@router.post("/markets/{market_id}")
async def settle_market(
    market_id: int,
    body: SettleMarketRequest,
    request: Request,
    caller: Annotated[str, Depends(get_current_account)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.settle_market(db, caller, market_id, body)
    return request_response(request, result.model_dump())


@router.post("/report")
async def on_report(
    body: ReportRequest,
    request: Request,
    caller: Annotated[str, Depends(get_current_account)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.on_report(db, caller, body)
    return request_response(request, result.model_dump())
