"""Ledger invariant verification.

INV-1: market.total_collateral == total_yes_shares + total_no_shares
INV-2: sum(position.yes_balance) == total_yes_shares, same for NO
INV-3: sum(lp_position.shares) == pool.total_shares
INV-4: pool.pool >= 0 and pool.fees >= 0
"""

import logging

from src.ds_ledger.domain.models import Market
from src.ds_ledger.domain.store import LedgerStore

logger = logging.getLogger(__name__)


def assert_collateral_invariant(market: Market) -> None:
    """INV-1 after each trade. Raises AssertionError if violated."""
    yes = market.total_yes_shares
    no = market.total_no_shares
    collateral = market.total_collateral
    assert collateral == yes + no, (
        f"INV-1 violated: market={market.id} collateral={collateral} "
        f"!= yes({yes}) + no({no})"
    )


def verify_market_invariants(store: LedgerStore, market: Market) -> list[str]:
    """Check INV-1..4 for one market. Returns list of violation strings."""
    violations: list[str] = []
    try:
        assert_collateral_invariant(market)
    except AssertionError as e:
        violations.append(str(e))

    positions = store.positions_for(market.id)
    yes_sum = sum(p.yes_balance for p in positions)
    no_sum = sum(p.no_balance for p in positions)
    if yes_sum != market.total_yes_shares or no_sum != market.total_no_shares:
        violations.append(
            f"INV-2 violated: market={market.id} positions yes={yes_sum} no={no_sum} "
            f"!= totals yes={market.total_yes_shares} no={market.total_no_shares}"
        )

    pool = store.get_pool(market.id)
    lp_sum = sum(lp.shares for lp in store.lp_positions_for(market.id))
    if lp_sum != pool.total_shares:
        violations.append(
            f"INV-3 violated: market={market.id} lp shares sum={lp_sum} "
            f"!= total_shares={pool.total_shares}"
        )
    if pool.pool < 0 or pool.fees < 0:
        violations.append(
            f"INV-4 violated: market={market.id} pool={pool.pool} fees={pool.fees}"
        )
    return violations


def verify_ledger_invariants(store: LedgerStore) -> list[str]:
    """Run INV-1..4 over every market."""
    violations: list[str] = []
    for market in store.iter_markets():
        violations.extend(verify_market_invariants(store, market))
    for msg in violations:
        logger.error(msg)
    if not violations:
        logger.debug("Invariants OK: markets=%d", store.next_market_id)
    return violations
