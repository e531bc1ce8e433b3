"""Admin REST API.

POST /admin/markets         — create a market (owner)
POST /admin/settler         — replace the settlement authority (owner)
POST /admin/forwarder       — replace the report channel (owner)
POST /admin/owner           — transfer ownership (owner)
POST /admin/fees/withdraw   — push accumulated protocol fees to the owner
GET  /admin/config          — current authorities and protocol fee balance
GET  /admin/invariants      — ledger invariant audit
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from src.ds_admin.application.service import AdminService
from src.ds_common.database import get_db_session
from src.ds_common.response import ApiResponse, request_response
from src.ds_gateway.auth.dependencies import get_current_account
from src.ds_market.application.schemas import CreateMarketRequest

router = APIRouter(prefix="/admin", tags=["admin"])
_service = AdminService()


class AddressRequest(BaseModel):
    address: str = Field(min_length=1)


@router.post("/markets", status_code=201)
async def create_market(
    body: CreateMarketRequest,
    request: Request,
    caller: Annotated[str, Depends(get_current_account)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.create_market(
        db, caller, body.asset, body.threshold_bps, body.settlement_timestamp
    )
    return request_response(request, result)


@router.post("/settler")
async def set_settler(
    body: AddressRequest,
    request: Request,
    caller: Annotated[str, Depends(get_current_account)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.set_settler(db, caller, body.address)
    return request_response(request, result)


@router.post("/forwarder")
async def set_forwarder(
    body: AddressRequest,
    request: Request,
    caller: Annotated[str, Depends(get_current_account)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.set_forwarder(db, caller, body.address)
    return request_response(request, result)


@router.post("/owner")
async def transfer_ownership(
    body: AddressRequest,
    request: Request,
    caller: Annotated[str, Depends(get_current_account)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.transfer_ownership(db, caller, body.address)
    return request_response(request, result)


@router.post("/fees/withdraw")
async def withdraw_fees(
    request: Request,
    caller: Annotated[str, Depends(get_current_account)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.withdraw_fees(db, caller)
    return request_response(request, result)


@router.get("/config")
async def get_config(
    request: Request,
    caller: Annotated[str, Depends(get_current_account)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.get_config(db)
    return request_response(request, result)


@router.get("/invariants")
async def verify_invariants(
    request: Request,
    caller: Annotated[str, Depends(get_current_account)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.verify_all_invariants(db)
    return request_response(request, result)
