"""LedgerStore — the single shared mutable store behind every ledger operation.

Append-only registers: markets (and their liquidity pools) live in lists
indexed by the monotonic market id; positions are keyed by
(market_id, account). Nothing is ever deleted.

The store performs no validation beyond existence lookups. Callers (the
domain functions in each bounded context) check preconditions first and only
then mutate, and LedgerService serializes all access.
"""

from collections.abc import Iterator

from src.ds_common.errors import MarketNotFoundError
from src.ds_ledger.domain.models import (
    LedgerConfig,
    LiquidityPool,
    LiquidityPosition,
    Market,
    Position,
)


class LedgerStore:
    def __init__(self, config: LedgerConfig) -> None:
        self.config = config
        self.protocol_fees = 0
        self._markets: list[Market] = []
        self._pools: list[LiquidityPool] = []
        self._positions: dict[tuple[int, str], Position] = {}
        self._lp_positions: dict[tuple[int, str], LiquidityPosition] = {}
        self._verified: set[str] = set()
        self._consumed_nullifiers: set[int] = set()

    # ------------------------------------------------------------------
    # Markets
    # ------------------------------------------------------------------

    @property
    def next_market_id(self) -> int:
        return len(self._markets)

    def add_market(self, market: Market) -> None:
        if market.id != self.next_market_id:
            raise ValueError(f"market id {market.id} out of sequence, expected {self.next_market_id}")
        self._markets.append(market)
        self._pools.append(LiquidityPool(market_id=market.id))

    def has_market(self, market_id: int) -> bool:
        return 0 <= market_id < len(self._markets)

    def get_market(self, market_id: int) -> Market:
        if not self.has_market(market_id):
            raise MarketNotFoundError(market_id)
        return self._markets[market_id]

    def iter_markets(self) -> Iterator[Market]:
        return iter(self._markets)

    def get_pool(self, market_id: int) -> LiquidityPool:
        if not self.has_market(market_id):
            raise MarketNotFoundError(market_id)
        return self._pools[market_id]

    # ------------------------------------------------------------------
    # Positions
    # ------------------------------------------------------------------

    def position(self, market_id: int, account: str) -> Position:
        """Get or create the (market, account) position."""
        key = (market_id, account)
        pos = self._positions.get(key)
        if pos is None:
            pos = Position(market_id=market_id, account=account)
            self._positions[key] = pos
        return pos

    def peek_position(self, market_id: int, account: str) -> Position:
        """Read-only lookup; returns an unstored zero position when none exists."""
        return self._positions.get((market_id, account)) or Position(
            market_id=market_id, account=account
        )

    def positions_for(self, market_id: int) -> list[Position]:
        return [p for (mid, _), p in self._positions.items() if mid == market_id]

    def lp_position(self, market_id: int, account: str) -> LiquidityPosition:
        key = (market_id, account)
        lp = self._lp_positions.get(key)
        if lp is None:
            lp = LiquidityPosition(market_id=market_id, account=account)
            self._lp_positions[key] = lp
        return lp

    def peek_lp_position(self, market_id: int, account: str) -> LiquidityPosition:
        return self._lp_positions.get((market_id, account)) or LiquidityPosition(
            market_id=market_id, account=account
        )

    def lp_positions_for(self, market_id: int) -> list[LiquidityPosition]:
        return [lp for (mid, _), lp in self._lp_positions.items() if mid == market_id]

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    def is_verified(self, account: str) -> bool:
        return account in self._verified

    def mark_verified(self, account: str) -> None:
        self._verified.add(account)

    def is_nullifier_consumed(self, nullifier_hash: int) -> bool:
        return nullifier_hash in self._consumed_nullifiers

    def consume_nullifier(self, nullifier_hash: int) -> None:
        self._consumed_nullifiers.add(nullifier_hash)
