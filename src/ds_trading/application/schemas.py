"""Pydantic schemas for ds_trading."""

from pydantic import BaseModel, Field

from src.ds_ledger.domain.events import SharesPurchased
from src.ds_ledger.domain.models import Position


class BuySharesRequest(BaseModel):
    side: str = Field(description="YES or NO")
    amount: int = Field(description="Gross collateral, fee included")


class BuySharesResponse(BaseModel):
    market_id: int
    account: str
    side: str
    amount: int
    shares: int
    fee: int

    @classmethod
    def from_event(cls, e: SharesPurchased) -> "BuySharesResponse":
        return cls(
            market_id=e.market_id,
            account=e.account,
            side=e.side,
            amount=e.amount,
            shares=e.shares,
            fee=e.amount - e.shares,
        )


class PositionOut(BaseModel):
    market_id: int
    account: str
    yes_balance: int
    no_balance: int
    claimed: bool

    @classmethod
    def from_domain(cls, p: Position) -> "PositionOut":
        return cls(
            market_id=p.market_id,
            account=p.account,
            yes_balance=p.yes_balance,
            no_balance=p.no_balance,
            claimed=p.claimed,
        )
