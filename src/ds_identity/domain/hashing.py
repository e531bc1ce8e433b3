"""World ID field hashing.

hash_to_field(x) = uint256(keccak256(abi.encodePacked(x))) >> 8, which keeps
every value inside the SNARK scalar field.
"""

from web3 import Web3


def _to_field(digest: bytes) -> int:
    return int.from_bytes(digest, "big") >> 8


def signal_hash(account: str) -> int:
    """Bind a proof to *account* so it cannot be replayed for another address."""
    return _to_field(Web3.solidity_keccak(["address"], [account]))


def external_nullifier_hash(app_id: str, action_id: str) -> int:
    """Two-stage hash: hash(app_id), then combined with action_id."""
    app_hash = _to_field(Web3.solidity_keccak(["string"], [app_id]))
    return _to_field(Web3.solidity_keccak(["uint256", "string"], [app_hash, action_id]))
