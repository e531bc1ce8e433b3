"""Rebuild a LedgerStore from the journal.

Each journaled event is re-applied through the same domain function that
produced it, in journal order. Events that carry no state (ReportReceived)
are skipped. A ClaimTransferFailed follows the same path as Claimed: the
claimed flag survives a failed payout.
"""

import logging
from collections.abc import Callable, Iterable

from src.ds_admin.domain import authority
from src.ds_claim.domain.claim_engine import mark_claimed
from src.ds_common.enums import LedgerEventType, Side
from src.ds_identity.domain.registry import record_verification
from src.ds_ledger.domain.events import LedgerEvent
from src.ds_ledger.domain.models import LedgerConfig
from src.ds_ledger.domain.store import LedgerStore
from src.ds_liquidity.domain.pool import apply_add, apply_remove
from src.ds_market.domain.registry import create_market
from src.ds_settlement.domain.engine import apply_settlement
from src.ds_trading.domain.position_ledger import apply_buy

logger = logging.getLogger(__name__)

_Handler = Callable[[LedgerStore, LedgerEvent], object]

_HANDLERS: dict[LedgerEventType, _Handler] = {
    LedgerEventType.MARKET_CREATED: lambda s, e: create_market(
        s, e.asset, e.threshold_bps, e.settlement_timestamp, e.created_at
    ),
    LedgerEventType.SHARES_PURCHASED: lambda s, e: apply_buy(
        s, e.account, e.market_id, Side(e.side), e.amount
    ),
    LedgerEventType.MARKET_SETTLED: lambda s, e: apply_settlement(
        s, e.market_id, e.outcome, e.final_metric_bps
    ),
    LedgerEventType.CLAIMED: lambda s, e: mark_claimed(s, e.account, e.market_id),
    LedgerEventType.CLAIM_TRANSFER_FAILED: lambda s, e: mark_claimed(s, e.account, e.market_id),
    LedgerEventType.USER_VERIFIED: lambda s, e: record_verification(
        s, e.account, e.nullifier_hash
    ),
    LedgerEventType.LIQUIDITY_ADDED: lambda s, e: apply_add(s, e.account, e.market_id, e.amount),
    LedgerEventType.LIQUIDITY_REMOVED: lambda s, e: apply_remove(
        s, e.account, e.market_id, e.lp_shares
    ),
    LedgerEventType.SETTLER_UPDATED: lambda s, e: authority.set_settler(s, e.settler),
    LedgerEventType.FORWARDER_UPDATED: lambda s, e: authority.set_forwarder(s, e.forwarder),
    LedgerEventType.OWNERSHIP_TRANSFERRED: lambda s, e: authority.transfer_ownership(
        s, e.new_owner
    ),
    LedgerEventType.PROTOCOL_FEES_WITHDRAWN: lambda s, e: authority.apply_fee_withdrawal(
        s, e.recipient, e.amount
    ),
}


def replay_events(store: LedgerStore, events: Iterable[LedgerEvent]) -> int:
    """Apply *events* to *store* in order. Returns the number applied."""
    applied = 0
    for event in events:
        handler = _HANDLERS.get(event.event_type)
        if handler is None:
            continue
        handler(store, event)
        applied += 1
    return applied


def rebuild_store(config: LedgerConfig, events: Iterable[LedgerEvent]) -> LedgerStore:
    store = LedgerStore(config)
    applied = replay_events(store, events)
    logger.info(
        "Ledger rebuilt: events=%d markets=%d protocol_fees=%d",
        applied, store.next_market_id, store.protocol_fees,
    )
    return store
