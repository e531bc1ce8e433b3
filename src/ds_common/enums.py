"""Global enums — outcome codes must match the settlement report wire format."""

from enum import Enum, IntEnum


class Outcome(IntEnum):
    """Report wire codes: 0=UNRESOLVED, 1=YES, 2=NO."""
    UNRESOLVED = 0
    YES = 1
    NO = 2


class Side(str, Enum):
    YES = "YES"
    NO = "NO"


class ErrorKind(str, Enum):
    UNAUTHORIZED = "UNAUTHORIZED"
    NOT_FOUND = "NOT_FOUND"
    INVALID_STATE = "INVALID_STATE"
    INVALID_INPUT = "INVALID_INPUT"
    ALREADY_DONE = "ALREADY_DONE"
    EXTERNAL_FAILURE = "EXTERNAL_FAILURE"
    INTERNAL = "INTERNAL"


class LedgerEventType(str, Enum):
    # Market lifecycle
    MARKET_CREATED = "MARKET_CREATED"
    MARKET_SETTLED = "MARKET_SETTLED"
    REPORT_RECEIVED = "REPORT_RECEIVED"
    # Trading / claims
    SHARES_PURCHASED = "SHARES_PURCHASED"
    CLAIMED = "CLAIMED"
    CLAIM_TRANSFER_FAILED = "CLAIM_TRANSFER_FAILED"
    # Identity
    USER_VERIFIED = "USER_VERIFIED"
    # Liquidity
    LIQUIDITY_ADDED = "LIQUIDITY_ADDED"
    LIQUIDITY_REMOVED = "LIQUIDITY_REMOVED"
    # Administration
    SETTLER_UPDATED = "SETTLER_UPDATED"
    FORWARDER_UPDATED = "FORWARDER_UPDATED"
    OWNERSHIP_TRANSFERRED = "OWNERSHIP_TRANSFERRED"
    PROTOCOL_FEES_WITHDRAWN = "PROTOCOL_FEES_WITHDRAWN"


def is_final_outcome(code: int) -> bool:
    """True for the two outcomes a market can settle to."""
    return code in (Outcome.YES, Outcome.NO)
