"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

from config.settings import settings
from src.ds_admin.api.router import router as admin_router
from src.ds_claim.api.router import router as claim_router
from src.ds_common.database import async_session_factory, engine
from src.ds_common.errors import AppError
from src.ds_common.redis_client import close_redis, get_redis
from src.ds_common.response import error_response
from src.ds_gateway.middleware.rate_limit import RateLimitMiddleware
from src.ds_gateway.middleware.request_log import RequestLogMiddleware
from src.ds_identity.api.router import router as identity_router
from src.ds_ledger.application.service import get_ledger_service
from src.ds_liquidity.api.router import router as liquidity_router
from src.ds_market.api.router import router as market_router
from src.ds_settlement.api.router import router as settlement_router
from src.ds_trading.api.router import router as trading_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: verify DB + Redis, rebuild the ledger from the journal. Shutdown: dispose."""
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    await get_redis()
    async with async_session_factory() as session:
        await get_ledger_service().warm_up(session)
    logger.info("%s started", settings.APP_NAME)
    yield
    await engine.dispose()
    await close_redis()


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


app.add_middleware(RateLimitMiddleware)
app.add_middleware(RequestLogMiddleware)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    resp = error_response(exc.code, exc.message)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return JSONResponse(
        status_code=exc.http_status,
        content=resp.model_dump(),
    )


app.include_router(identity_router, prefix="/api/v1")
app.include_router(market_router, prefix="/api/v1")
app.include_router(trading_router, prefix="/api/v1")
app.include_router(claim_router, prefix="/api/v1")
app.include_router(liquidity_router, prefix="/api/v1")
app.include_router(settlement_router, prefix="/api/v1")
app.include_router(admin_router, prefix="/api/v1")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": "0.1.0"}
