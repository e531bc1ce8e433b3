"""Unit tests for LedgerStore registers."""

import pytest

from src.ds_common.errors import MarketNotFoundError
from src.ds_ledger.domain.models import Market
from src.ds_ledger.domain.store import LedgerStore

ALICE = "0x" + "4" * 40


def _market(market_id: int) -> Market:
    return Market(
        id=market_id,
        asset="stETH",
        threshold_bps=350,
        settlement_timestamp=1_700_000_000,
        created_at=1_690_000_000,
    )


class TestMarkets:
    def test_ids_are_sequential(self, store: LedgerStore) -> None:
        assert store.next_market_id == 0
        store.add_market(_market(0))
        store.add_market(_market(1))
        assert store.next_market_id == 2
        assert [m.id for m in store.iter_markets()] == [0, 1]

    def test_out_of_sequence_rejected(self, store: LedgerStore) -> None:
        with pytest.raises(ValueError):
            store.add_market(_market(1))

    def test_get_unknown_market(self, store: LedgerStore) -> None:
        store.add_market(_market(0))
        with pytest.raises(MarketNotFoundError):
            store.get_market(1)
        with pytest.raises(MarketNotFoundError):
            store.get_market(-1)

    def test_pool_created_with_market(self, store: LedgerStore) -> None:
        store.add_market(_market(0))
        pool = store.get_pool(0)
        assert (pool.pool, pool.total_shares, pool.fees) == (0, 0, 0)

    def test_get_pool_unknown_market(self, store: LedgerStore) -> None:
        with pytest.raises(MarketNotFoundError):
            store.get_pool(0)


class TestPositions:
    def test_peek_does_not_create(self, store: LedgerStore) -> None:
        pos = store.peek_position(0, ALICE)
        assert pos.yes_balance == 0 and not pos.claimed
        assert store.positions_for(0) == []

    def test_position_is_created_once(self, store: LedgerStore) -> None:
        first = store.position(0, ALICE)
        first.yes_balance = 5
        assert store.position(0, ALICE) is first
        assert store.positions_for(0) == [first]

    def test_lp_position(self, store: LedgerStore) -> None:
        lp = store.lp_position(0, ALICE)
        lp.shares = 10
        assert store.peek_lp_position(0, ALICE).shares == 10
        assert store.lp_positions_for(1) == []


class TestIdentity:
    def test_verified_set(self, store: LedgerStore) -> None:
        assert not store.is_verified(ALICE)
        store.mark_verified(ALICE)
        assert store.is_verified(ALICE)

    def test_nullifiers(self, store: LedgerStore) -> None:
        assert not store.is_nullifier_consumed(99)
        store.consume_nullifier(99)
        assert store.is_nullifier_consumed(99)
