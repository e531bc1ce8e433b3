"""FastAPI dependency: get_current_account.

Usage in any protected router:
    from src.ds_gateway.auth.dependencies import get_current_account

    @router.post("/protected")
    async def protected(caller: Annotated[str, Depends(get_current_account)]):
        ...
"""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.ds_common.addresses import normalize_address
from src.ds_common.errors import InvalidAddressError, InvalidCredentialsError
from src.ds_gateway.auth.jwt_handler import decode_token

bearer_scheme = HTTPBearer(auto_error=False)

_CREDENTIALS_EXCEPTION = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Invalid or expired token",
    headers={"WWW-Authenticate": "Bearer"},
)


async def get_current_account(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str:
    """Return the checksummed account address from the bearer token's subject."""
    if credentials is None:
        raise _CREDENTIALS_EXCEPTION
    try:
        payload = decode_token(credentials.credentials, expected_type="access")
        return normalize_address(payload.get("sub") or "")
    except (InvalidCredentialsError, InvalidAddressError):
        raise _CREDENTIALS_EXCEPTION from None
