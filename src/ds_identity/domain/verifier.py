"""Identity verifier Protocol — the external proof check the ledger consumes.

Unit tests inject a stub that conforms to this Protocol.
Infrastructure layer provides the HTTP implementation.
"""

from collections.abc import Sequence
from typing import Protocol

PROOF_LENGTH = 8


class IdentityVerifierProtocol(Protocol):
    async def verify_proof(
        self,
        root: int,
        group_id: int,
        signal_hash: int,
        nullifier_hash: int,
        external_nullifier_hash: int,
        proof: Sequence[int],
    ) -> bool: ...
