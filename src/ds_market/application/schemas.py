"""Pydantic schemas for ds_market API requests and responses."""

from pydantic import BaseModel, Field

from src.ds_common.bps import bps_to_display
from src.ds_common.datetime_utils import epoch_to_iso
from src.ds_ledger.domain.models import Market


class CreateMarketRequest(BaseModel):
    asset: str = Field(min_length=1, max_length=64)
    threshold_bps: int = Field(ge=0)
    settlement_timestamp: int = Field(ge=0)


class MarketOut(BaseModel):
    id: int
    asset: str
    threshold_bps: int
    threshold_display: str
    settlement_timestamp: int
    settlement_time: str
    created_at: int
    settled: bool
    outcome: str
    final_metric_bps: int
    total_yes_shares: int
    total_no_shares: int
    total_collateral: int

    @classmethod
    def from_domain(cls, m: Market) -> "MarketOut":
        return cls(
            id=m.id,
            asset=m.asset,
            threshold_bps=m.threshold_bps,
            threshold_display=bps_to_display(m.threshold_bps),
            settlement_timestamp=m.settlement_timestamp,
            settlement_time=epoch_to_iso(m.settlement_timestamp),
            created_at=m.created_at,
            settled=m.settled,
            outcome=m.outcome.name,
            final_metric_bps=m.final_metric_bps,
            total_yes_shares=m.total_yes_shares,
            total_no_shares=m.total_no_shares,
            total_collateral=m.total_collateral,
        )


class MarketListResponse(BaseModel):
    items: list[MarketOut]
    total: int
