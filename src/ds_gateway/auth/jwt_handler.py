"""JWT bearer tokens for ledger callers.

The token subject is the caller's account address; every authority check in
the ledger (owner, settler, forwarder, position holder) compares against it.
Tokens are issued out of band by whoever operates the deployment.

HS256 with one shared JWT_SECRET. No revocation: a token is valid until expiry.
"""

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from config.settings import settings
from src.ds_common.errors import InvalidCredentialsError

_ALGORITHM = settings.JWT_ALGORITHM
_ACCESS_EXPIRE = timedelta(minutes=settings.JWT_EXPIRE_MINUTES)


def create_access_token(account: str) -> str:
    now = datetime.now(UTC)
    payload = {
        "sub": account,
        "type": "access",
        "iat": now,
        "exp": now + _ACCESS_EXPIRE,
    }
    return str(jwt.encode(payload, settings.JWT_SECRET, algorithm=_ALGORITHM))


def decode_token(token: str, expected_type: str = "access") -> dict[str, str]:
    """Decode and validate a token.

    Raises:
        InvalidCredentialsError: bad signature, expired, or wrong token type.
    """
    try:
        payload: dict[str, str] = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[_ALGORITHM],
        )
    except JWTError:
        raise InvalidCredentialsError() from None

    if payload.get("type") != expected_type:
        raise InvalidCredentialsError()
    return payload
