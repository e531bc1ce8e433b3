"""Market registry — creation, lookup and lifecycle guards.

createMarket is authority-gated by the caller (ds_admin.domain.authority);
this module only allocates and records. Settlement timestamps are not checked
against the clock, so backdated markets are allowed.
"""

import logging

from src.ds_common.errors import MarketAlreadySettledError
from src.ds_ledger.domain.events import MarketCreated
from src.ds_ledger.domain.models import Market
from src.ds_ledger.domain.store import LedgerStore

logger = logging.getLogger(__name__)


def create_market(
    store: LedgerStore,
    asset: str,
    threshold_bps: int,
    settlement_timestamp: int,
    created_at: int,
) -> MarketCreated:
    market = Market(
        id=store.next_market_id,
        asset=asset,
        threshold_bps=threshold_bps,
        settlement_timestamp=settlement_timestamp,
        created_at=created_at,
    )
    store.add_market(market)
    logger.info(
        "Market created: id=%d asset=%s threshold=%dbps settles_at=%d",
        market.id, asset, threshold_bps, settlement_timestamp,
    )
    return MarketCreated(
        market_id=market.id,
        asset=asset,
        threshold_bps=threshold_bps,
        settlement_timestamp=settlement_timestamp,
        created_at=created_at,
    )


def ensure_open(store: LedgerStore, market_id: int) -> Market:
    """Market must exist and still be unsettled."""
    market = store.get_market(market_id)
    if market.settled:
        raise MarketAlreadySettledError(market_id)
    return market


def list_due_markets(store: LedgerStore, now: int) -> list[Market]:
    """Unsettled markets whose settlement timestamp has passed."""
    return [
        m for m in store.iter_markets()
        if not m.settled and m.settlement_timestamp <= now
    ]
