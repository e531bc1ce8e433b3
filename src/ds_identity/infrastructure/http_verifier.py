"""HttpIdentityVerifier — concrete implementation of IdentityVerifierProtocol.

Posts the proof to the configured verifier service and expects
{"valid": true|false}. Large field elements are sent as 0x-prefixed hex.

A negative answer returns False (the ledger turns it into ProofInvalidError).
Transport failures and non-2xx responses raise IdentityVerifierError; they are
never treated as a rejection and never retried here.
"""

import logging
from collections.abc import Sequence

import httpx

from src.ds_common.errors import IdentityVerifierError

logger = logging.getLogger(__name__)


class HttpIdentityVerifier:
    def __init__(
        self,
        url: str,
        timeout_seconds: float = 5.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._url = url
        self._client = client or httpx.AsyncClient(timeout=timeout_seconds)

    async def verify_proof(
        self,
        root: int,
        group_id: int,
        signal_hash: int,
        nullifier_hash: int,
        external_nullifier_hash: int,
        proof: Sequence[int],
    ) -> bool:
        body = {
            "root": hex(root),
            "group_id": group_id,
            "signal_hash": hex(signal_hash),
            "nullifier_hash": hex(nullifier_hash),
            "external_nullifier_hash": hex(external_nullifier_hash),
            "proof": [hex(p) for p in proof],
        }
        try:
            resp = await self._client.post(self._url, json=body)
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPStatusError as exc:
            raise IdentityVerifierError(f"HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            raise IdentityVerifierError(type(exc).__name__) from exc
        except ValueError as exc:
            raise IdentityVerifierError("malformed response body") from exc

        valid = data.get("valid") is True if isinstance(data, dict) else False
        logger.debug("Verifier answered valid=%s for nullifier=%#x", valid, nullifier_hash)
        return valid

    async def aclose(self) -> None:
        await self._client.aclose()
