"""Per-market liquidity pool — constant-ratio LP shares plus accrued fees.

Issuance:   shares = amount                             (first deposit, total_shares == 0)
            shares = amount * total_shares // pool      (otherwise; fees excluded)
Redemption: payout = shares * (pool + fees) // total_shares
            drawn from pool first, any shortfall from fees.

The draw order means sequential withdrawals can empty `pool` while `fees`
remain (or the reverse); later payouts depend on it, so it must not change.
Withdrawals are allowed in any market state, including after settlement.
"""

import logging

from src.ds_collateral.domain.bank import MAX_BALANCE
from src.ds_common.errors import EmptyPoolError, InvalidAmountError
from src.ds_identity.domain.registry import ensure_verified
from src.ds_ledger.domain.events import LiquidityAdded, LiquidityRemoved
from src.ds_ledger.domain.store import LedgerStore
from src.ds_market.domain.registry import ensure_open

logger = logging.getLogger(__name__)


def calc_lp_shares(amount: int, total_shares: int, pool: int) -> int:
    if total_shares == 0:
        return amount
    return amount * total_shares // pool


def calc_lp_payout(shares: int, pool: int, fees: int, total_shares: int) -> int:
    return shares * (pool + fees) // total_shares


def check_add(store: LedgerStore, account: str, market_id: int, amount: int) -> int:
    """Validate a deposit and return the LP shares it would mint."""
    ensure_verified(store, account)
    ensure_open(store, market_id)
    if amount <= 0:
        raise InvalidAmountError(f"liquidity amount must be positive, got {amount}")
    if amount > MAX_BALANCE:
        raise InvalidAmountError(f"liquidity amount exceeds {MAX_BALANCE}, got {amount}")
    pool = store.get_pool(market_id)
    if pool.total_shares > 0 and pool.pool == 0:
        raise EmptyPoolError(market_id)
    shares = calc_lp_shares(amount, pool.total_shares, pool.pool)
    if shares == 0:
        raise InvalidAmountError(f"deposit of {amount} is too small to mint a share")
    return shares


def apply_add(
    store: LedgerStore, account: str, market_id: int, amount: int
) -> LiquidityAdded:
    shares = check_add(store, account, market_id, amount)
    pool = store.get_pool(market_id)
    lp = store.lp_position(market_id, account)
    pool.pool += amount
    pool.total_shares += shares
    lp.shares += shares
    lp.deposited += amount
    logger.info(
        "Liquidity added: market=%d account=%s amount=%d shares=%d",
        market_id, account, amount, shares,
    )
    return LiquidityAdded(market_id=market_id, account=account, amount=amount, lp_shares=shares)


def check_remove(store: LedgerStore, account: str, market_id: int, shares: int) -> int:
    """Validate a redemption and return its payout."""
    pool = store.get_pool(market_id)
    held = store.peek_lp_position(market_id, account).shares
    if shares <= 0 or shares > held:
        raise InvalidAmountError(f"cannot redeem {shares} LP shares, holding {held}")
    return calc_lp_payout(shares, pool.pool, pool.fees, pool.total_shares)


def apply_remove(
    store: LedgerStore, account: str, market_id: int, shares: int
) -> LiquidityRemoved:
    payout = check_remove(store, account, market_id, shares)
    pool = store.get_pool(market_id)
    lp = store.lp_position(market_id, account)
    lp.shares -= shares
    pool.total_shares -= shares

    from_pool = min(payout, pool.pool)
    pool.pool -= from_pool
    pool.fees -= payout - from_pool
    logger.info(
        "Liquidity removed: market=%d account=%s shares=%d payout=%d (pool=%d fees=%d)",
        market_id, account, shares, payout, from_pool, payout - from_pool,
    )
    return LiquidityRemoved(market_id=market_id, account=account, lp_shares=shares, payout=payout)
