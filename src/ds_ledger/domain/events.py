"""Domain events emitted by every state-changing ledger operation.

Events are journaled (ledger_events) and replayed to rebuild the store, and
external indexers read them. Field order is part of the contract: payload()
serializes fields in declaration order, so append new fields at the end only.
"""

from dataclasses import asdict, dataclass
from typing import Any, ClassVar

from src.ds_common.enums import LedgerEventType


@dataclass(frozen=True)
class LedgerEvent:
    event_type: ClassVar[LedgerEventType]

    def payload(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class MarketCreated(LedgerEvent):
    event_type: ClassVar[LedgerEventType] = LedgerEventType.MARKET_CREATED
    market_id: int
    asset: str
    threshold_bps: int
    settlement_timestamp: int
    created_at: int


@dataclass(frozen=True)
class SharesPurchased(LedgerEvent):
    event_type: ClassVar[LedgerEventType] = LedgerEventType.SHARES_PURCHASED
    market_id: int
    account: str
    side: str
    amount: int       # gross, fee included
    shares: int       # net minted


@dataclass(frozen=True)
class MarketSettled(LedgerEvent):
    event_type: ClassVar[LedgerEventType] = LedgerEventType.MARKET_SETTLED
    market_id: int
    outcome: int
    final_metric_bps: int


@dataclass(frozen=True)
class ReportReceived(LedgerEvent):
    event_type: ClassVar[LedgerEventType] = LedgerEventType.REPORT_RECEIVED
    market_id: int
    outcome: int
    final_metric_bps: int


@dataclass(frozen=True)
class Claimed(LedgerEvent):
    event_type: ClassVar[LedgerEventType] = LedgerEventType.CLAIMED
    market_id: int
    account: str
    payout: int


@dataclass(frozen=True)
class ClaimTransferFailed(LedgerEvent):
    event_type: ClassVar[LedgerEventType] = LedgerEventType.CLAIM_TRANSFER_FAILED
    market_id: int
    account: str
    payout: int


@dataclass(frozen=True)
class UserVerified(LedgerEvent):
    event_type: ClassVar[LedgerEventType] = LedgerEventType.USER_VERIFIED
    account: str
    nullifier_hash: int


@dataclass(frozen=True)
class LiquidityAdded(LedgerEvent):
    event_type: ClassVar[LedgerEventType] = LedgerEventType.LIQUIDITY_ADDED
    market_id: int
    account: str
    amount: int
    lp_shares: int


@dataclass(frozen=True)
class LiquidityRemoved(LedgerEvent):
    event_type: ClassVar[LedgerEventType] = LedgerEventType.LIQUIDITY_REMOVED
    market_id: int
    account: str
    lp_shares: int
    payout: int


@dataclass(frozen=True)
class SettlerUpdated(LedgerEvent):
    event_type: ClassVar[LedgerEventType] = LedgerEventType.SETTLER_UPDATED
    settler: str


@dataclass(frozen=True)
class ForwarderUpdated(LedgerEvent):
    event_type: ClassVar[LedgerEventType] = LedgerEventType.FORWARDER_UPDATED
    forwarder: str


@dataclass(frozen=True)
class OwnershipTransferred(LedgerEvent):
    event_type: ClassVar[LedgerEventType] = LedgerEventType.OWNERSHIP_TRANSFERRED
    previous_owner: str
    new_owner: str


@dataclass(frozen=True)
class ProtocolFeesWithdrawn(LedgerEvent):
    event_type: ClassVar[LedgerEventType] = LedgerEventType.PROTOCOL_FEES_WITHDRAWN
    recipient: str
    amount: int


EVENT_CLASSES: dict[LedgerEventType, type[LedgerEvent]] = {
    cls.event_type: cls
    for cls in (
        MarketCreated,
        SharesPurchased,
        MarketSettled,
        ReportReceived,
        Claimed,
        ClaimTransferFailed,
        UserVerified,
        LiquidityAdded,
        LiquidityRemoved,
        SettlerUpdated,
        ForwarderUpdated,
        OwnershipTransferred,
        ProtocolFeesWithdrawn,
    )
}


def event_from_payload(event_type: str, payload: dict[str, Any]) -> LedgerEvent:
    """Rebuild a journaled event. Raises KeyError/TypeError on unknown type or fields."""
    cls = EVENT_CLASSES[LedgerEventType(event_type)]
    return cls(**payload)
