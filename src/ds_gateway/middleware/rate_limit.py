"""Fixed-window rate limiting for state-changing requests.

Only POST requests count. Key: "ratelimit:{client_ip}:{group}" where group is
the first path segment after /api/v1 (identity, markets, settlement, admin).
Client IP comes from the first X-Forwarded-For hop when present.

    count = INCR key; if count == 1: EXPIRE key 60; count > limit -> 429

RATE_LIMIT_PER_MINUTE <= 0 disables the middleware.
"""

import logging

from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from config.settings import settings
from src.ds_common.errors import RateLimitError
from src.ds_common.redis_client import get_redis
from src.ds_common.response import error_response

logger = logging.getLogger(__name__)

_WINDOW_SECONDS = 60
_API_PREFIX = "/api/v1/"


def client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def endpoint_group(path: str) -> str:
    if path.startswith(_API_PREFIX):
        path = path[len(_API_PREFIX):]
    return path.strip("/").split("/", 1)[0] or "root"


class RateLimitMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        limit = settings.RATE_LIMIT_PER_MINUTE
        if limit <= 0 or request.method != "POST":
            return await call_next(request)

        key = f"ratelimit:{client_ip(request)}:{endpoint_group(request.url.path)}"
        redis = await get_redis()
        count = await redis.incr(key)
        if count == 1:
            await redis.expire(key, _WINDOW_SECONDS)
        if count > limit:
            logger.warning("Rate limit exceeded: key=%s count=%d", key, count)
            exc = RateLimitError()
            ttl = await redis.ttl(key)
            return JSONResponse(
                status_code=exc.http_status,
                content=error_response(exc.code, exc.message).model_dump(),
                headers={"Retry-After": str(max(ttl, 1))},
            )
        return await call_next(request)
