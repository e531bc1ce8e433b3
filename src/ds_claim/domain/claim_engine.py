"""Claim engine — pro-rata redemption of winning shares, once per account.

payout = floor(total_collateral * user_winning_shares / winning_total)

Position balances are left untouched after a claim; the claimed flag alone
prevents a second redemption. The flag is set before the payout is pushed and
is not rolled back if the push fails: a claim is final.
"""

import logging

from src.ds_common.errors import (
    AlreadyClaimedError,
    MarketNotSettledError,
    NothingToClaimError,
)
from src.ds_ledger.domain.store import LedgerStore

logger = logging.getLogger(__name__)


def calc_payout(total_collateral: int, user_shares: int, winning_total: int) -> int:
    if winning_total == 0:
        return 0
    return total_collateral * user_shares // winning_total


def check_claim(store: LedgerStore, account: str, market_id: int) -> int:
    """Validate the claim and return the payout it would produce."""
    market = store.get_market(market_id)
    if not market.settled:
        raise MarketNotSettledError(market_id)
    position = store.peek_position(market_id, account)
    if position.claimed:
        raise AlreadyClaimedError(market_id, account)

    winning_side = market.winning_side
    user_shares = position.balance_for(winning_side) if winning_side else 0
    if user_shares == 0:
        raise NothingToClaimError(market_id, account)
    winning_total = market.total_for(winning_side) if winning_side else 0
    return calc_payout(market.total_collateral, user_shares, winning_total)


def mark_claimed(store: LedgerStore, account: str, market_id: int) -> None:
    store.position(market_id, account).claimed = True


def apply_claim(store: LedgerStore, account: str, market_id: int) -> int:
    """Set the claimed guard and return the payout owed."""
    payout = check_claim(store, account, market_id)
    mark_claimed(store, account, market_id)
    logger.info("Claim recorded: market=%d account=%s payout=%d", market_id, account, payout)
    return payout
