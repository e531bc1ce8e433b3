"""Account address helpers — every account key in the ledger is a checksum address."""

from web3 import Web3

from src.ds_common.errors import InvalidAddressError

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


def normalize_address(value: str) -> str:
    """Return the EIP-55 checksum form of *value*, or raise InvalidAddressError."""
    if not isinstance(value, str) or not Web3.is_address(value):
        raise InvalidAddressError(str(value))
    return Web3.to_checksum_address(value)
