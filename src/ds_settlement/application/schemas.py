"""Pydantic schemas for ds_settlement.

Report payloads travel as 0x-prefixed hex strings. Decoding happens in the
service, so bad hex surfaces as InvalidReportEncodingError (3006) and a bad
length as InvalidReportLengthError (3005), both in the ApiResponse envelope.
"""

from pydantic import BaseModel, Field

from src.ds_settlement.domain.engine import RecordResult, ReportResult


class SettleMarketRequest(BaseModel):
    outcome: int = Field(description="1 = YES, 2 = NO")
    final_metric_bps: int = Field(ge=0)


class ReportRequest(BaseModel):
    metadata: str = "0x"
    report: str


class SettlementOut(BaseModel):
    market_id: int
    outcome: int
    final_metric_bps: int


class RecordResultOut(BaseModel):
    index: int
    market_id: int
    outcome: int
    final_metric_bps: int
    applied: bool
    skip_reason: str | None

    @classmethod
    def from_domain(cls, r: RecordResult) -> "RecordResultOut":
        return cls(
            index=r.index,
            market_id=r.market_id,
            outcome=r.outcome,
            final_metric_bps=r.final_metric_bps,
            applied=r.applied,
            skip_reason=r.skip_reason,
        )


class ReportResultOut(BaseModel):
    records: list[RecordResultOut]
    applied: int
    skipped: int

    @classmethod
    def from_domain(cls, r: ReportResult) -> "ReportResultOut":
        return cls(
            records=[RecordResultOut.from_domain(x) for x in r.results],
            applied=r.applied_count,
            skipped=r.skipped_count,
        )
