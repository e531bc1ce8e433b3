"""Domain models for ds_ledger — pure dataclasses, no persistence dependency."""

from dataclasses import dataclass

from src.ds_common.enums import Outcome, Side


@dataclass
class Market:
    id: int
    asset: str
    threshold_bps: int
    settlement_timestamp: int    # unix seconds
    created_at: int              # unix seconds
    settled: bool = False
    outcome: Outcome = Outcome.UNRESOLVED
    final_metric_bps: int = 0
    total_yes_shares: int = 0
    total_no_shares: int = 0
    total_collateral: int = 0    # net of fees; == yes + no shares

    def total_for(self, side: Side) -> int:
        return self.total_yes_shares if side is Side.YES else self.total_no_shares

    @property
    def winning_side(self) -> Side | None:
        if self.outcome == Outcome.YES:
            return Side.YES
        if self.outcome == Outcome.NO:
            return Side.NO
        return None


@dataclass
class Position:
    market_id: int
    account: str
    yes_balance: int = 0
    no_balance: int = 0
    claimed: bool = False

    def balance_for(self, side: Side) -> int:
        return self.yes_balance if side is Side.YES else self.no_balance


@dataclass
class LiquidityPool:
    market_id: int
    pool: int = 0           # pooled collateral, excludes accrued fees
    total_shares: int = 0
    fees: int = 0           # LP half of trading fees, realized on withdrawal


@dataclass
class LiquidityPosition:
    market_id: int
    account: str
    deposited: int = 0      # informational, never decremented
    shares: int = 0


@dataclass
class LedgerConfig:
    owner: str
    settler: str
    forwarder: str
