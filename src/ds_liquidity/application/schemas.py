"""Pydantic schemas for ds_liquidity."""

from pydantic import BaseModel

from src.ds_ledger.domain.models import LiquidityPool, LiquidityPosition


class AddLiquidityRequest(BaseModel):
    amount: int


class RemoveLiquidityRequest(BaseModel):
    shares: int


class LiquidityChangeResponse(BaseModel):
    market_id: int
    account: str
    amount: int
    lp_shares: int


class PoolOut(BaseModel):
    market_id: int
    pool: int
    total_shares: int
    fees: int

    @classmethod
    def from_domain(cls, p: LiquidityPool) -> "PoolOut":
        return cls(market_id=p.market_id, pool=p.pool, total_shares=p.total_shares, fees=p.fees)


class LiquidityPositionOut(BaseModel):
    market_id: int
    account: str
    deposited: int
    shares: int

    @classmethod
    def from_domain(cls, lp: LiquidityPosition) -> "LiquidityPositionOut":
        return cls(
            market_id=lp.market_id, account=lp.account, deposited=lp.deposited, shares=lp.shares
        )
