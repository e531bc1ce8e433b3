"""Unit tests for HttpIdentityVerifier against httpx.MockTransport."""

import json

import httpx
import pytest

from src.ds_common.errors import IdentityVerifierError
from src.ds_identity.infrastructure.http_verifier import HttpIdentityVerifier

URL = "http://verifier.test/verify"
ARGS = (0xABC, 1, 0x10, 0x20, 0x30, [1, 2, 3, 4, 5, 6, 7, 8])


def _verifier(handler) -> HttpIdentityVerifier:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpIdentityVerifier(URL, client=client)


@pytest.mark.asyncio
async def test_posts_hex_encoded_body() -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen.update(json.loads(request.content))
        return httpx.Response(200, json={"valid": True})

    assert await _verifier(handler).verify_proof(*ARGS) is True
    assert seen["root"] == "0xabc"
    assert seen["group_id"] == 1
    assert seen["nullifier_hash"] == "0x20"
    assert seen["proof"][0] == "0x1"


@pytest.mark.asyncio
async def test_negative_answer() -> None:
    verifier = _verifier(lambda r: httpx.Response(200, json={"valid": False}))
    assert await verifier.verify_proof(*ARGS) is False


@pytest.mark.asyncio
async def test_truthy_non_bool_is_not_valid() -> None:
    verifier = _verifier(lambda r: httpx.Response(200, json={"valid": "yes"}))
    assert await verifier.verify_proof(*ARGS) is False


@pytest.mark.asyncio
async def test_server_error_raises() -> None:
    verifier = _verifier(lambda r: httpx.Response(503))
    with pytest.raises(IdentityVerifierError, match="503"):
        await verifier.verify_proof(*ARGS)


@pytest.mark.asyncio
async def test_transport_error_raises() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(IdentityVerifierError):
        await _verifier(handler).verify_proof(*ARGS)


@pytest.mark.asyncio
async def test_malformed_body_raises() -> None:
    verifier = _verifier(lambda r: httpx.Response(200, content=b"not json"))
    with pytest.raises(IdentityVerifierError):
        await verifier.verify_proof(*ARGS)
