"""Position ledger — buying YES/NO shares at a fixed 1:1 rate net of fees.

Split into check_buy (raises, never mutates) and apply_buy (mutates, never
raises) so LedgerService can pull collateral in between and keep the whole
operation all-or-nothing.

No price curve and no position limit: every unit of net collateral mints one
share on the chosen side regardless of pool composition.
"""

import logging

from src.ds_collateral.domain.bank import MAX_BALANCE
from src.ds_common.enums import Side
from src.ds_common.errors import InvalidAmountError, InvalidSideError
from src.ds_identity.domain.registry import ensure_verified
from src.ds_ledger.domain.events import SharesPurchased
from src.ds_ledger.domain.store import LedgerStore
from src.ds_market.domain.registry import ensure_open
from src.ds_trading.domain.fee import calc_trade_fee, split_fee

logger = logging.getLogger(__name__)


def parse_side(side: str | Side) -> Side:
    try:
        return Side(side)
    except ValueError:
        raise InvalidSideError(side) from None


def check_buy(
    store: LedgerStore, account: str, market_id: int, side: str | Side, amount: int
) -> Side:
    ensure_verified(store, account)
    ensure_open(store, market_id)
    parsed = parse_side(side)
    if amount <= 0:
        raise InvalidAmountError(f"buy amount must be positive, got {amount}")
    if amount > MAX_BALANCE:
        raise InvalidAmountError(f"buy amount exceeds {MAX_BALANCE}, got {amount}")
    return parsed


def apply_buy(
    store: LedgerStore, account: str, market_id: int, side: Side, amount: int
) -> SharesPurchased:
    """Route the fee out, then mint net shares and add net to market collateral."""
    market = store.get_market(market_id)
    fee = calc_trade_fee(amount)
    protocol_fee, lp_fee = split_fee(fee)
    net = amount - fee

    store.protocol_fees += protocol_fee
    store.get_pool(market_id).fees += lp_fee

    position = store.position(market_id, account)
    if side is Side.YES:
        position.yes_balance += net
        market.total_yes_shares += net
    else:
        position.no_balance += net
        market.total_no_shares += net
    market.total_collateral += net

    logger.info(
        "Shares purchased: market=%d account=%s side=%s amount=%d shares=%d fee=%d",
        market_id, account, side.value, amount, net, fee,
    )
    return SharesPurchased(
        market_id=market_id, account=account, side=side.value, amount=amount, shares=net
    )
