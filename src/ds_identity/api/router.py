"""ds_identity REST endpoints.

POST /identity/verify     — submit a uniqueness proof for the caller's account
GET  /identity/{account}  — verification status
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.ds_common.database import get_db_session
from src.ds_common.response import ApiResponse, request_response
from src.ds_gateway.auth.dependencies import get_current_account
from src.ds_identity.application.schemas import VerifyRequest
from src.ds_identity.application.service import IdentityApplicationService

router = APIRouter(prefix="/identity", tags=["identity"])

_service = IdentityApplicationService()


@router.post("/verify")
async def verify(
    body: VerifyRequest,
    request: Request,
    caller: Annotated[str, Depends(get_current_account)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.verify(db, caller, body)
    return request_response(request, result.model_dump())


@router.get("/{account}")
async def get_status(
    account: str,
    request: Request,
    caller: Annotated[str, Depends(get_current_account)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.get_status(db, account)
    return request_response(request, result.model_dump())
