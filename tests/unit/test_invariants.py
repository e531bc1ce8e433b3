"""Unit tests for ledger invariant verification."""

import pytest

from src.ds_identity.domain.registry import record_verification
from src.ds_ledger.domain.invariants import (
    assert_collateral_invariant,
    verify_ledger_invariants,
    verify_market_invariants,
)
from src.ds_ledger.domain.store import LedgerStore
from src.ds_liquidity.domain.pool import apply_add
from src.ds_market.domain.registry import create_market
from src.ds_trading.domain.position_ledger import apply_buy, check_buy

ALICE = "0x" + "4" * 40


@pytest.fixture
def traded(store: LedgerStore) -> LedgerStore:
    create_market(store, "stETH", 350, 0, 0)
    record_verification(store, ALICE, 1)
    apply_buy(store, ALICE, 0, check_buy(store, ALICE, 0, "YES", 1000), 1000)
    apply_add(store, ALICE, 0, 500)
    return store


def test_clean_ledger(traded: LedgerStore) -> None:
    assert verify_ledger_invariants(traded) == []


def test_collateral_mismatch(traded: LedgerStore) -> None:
    market = traded.get_market(0)
    market.total_collateral += 1
    with pytest.raises(AssertionError, match="INV-1"):
        assert_collateral_invariant(market)


def test_position_sum_mismatch(traded: LedgerStore) -> None:
    traded.position(0, ALICE).yes_balance += 1
    violations = verify_market_invariants(traded, traded.get_market(0))
    assert len(violations) == 1 and violations[0].startswith("INV-2")


def test_lp_share_mismatch(traded: LedgerStore) -> None:
    traded.get_pool(0).total_shares += 1
    assert [v[:5] for v in verify_ledger_invariants(traded)] == ["INV-3"]


def test_negative_pool(traded: LedgerStore) -> None:
    traded.get_pool(0).fees = -1
    assert [v[:5] for v in verify_ledger_invariants(traded)] == ["INV-4"]
