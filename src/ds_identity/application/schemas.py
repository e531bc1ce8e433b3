"""Pydantic schemas for ds_identity.

Field elements accept JSON integers or 0x-prefixed hex strings; responses
render them as hex.
"""

from pydantic import BaseModel, Field, field_validator

from src.ds_common.hex_utils import parse_uint256
from src.ds_identity.domain.verifier import PROOF_LENGTH


class VerifyRequest(BaseModel):
    root: int | str
    nullifier_hash: int | str
    proof: list[int | str] = Field(min_length=PROOF_LENGTH, max_length=PROOF_LENGTH)

    @field_validator("root", "nullifier_hash", mode="after")
    @classmethod
    def to_field_element(cls, v: int | str) -> int:
        return parse_uint256(v)

    @field_validator("proof", mode="after")
    @classmethod
    def to_field_elements(cls, v: list[int | str]) -> list[int]:
        return [parse_uint256(p) for p in v]


class VerificationOut(BaseModel):
    account: str
    verified: bool
    nullifier_hash: str | None = None
