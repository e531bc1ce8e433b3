from sqlalchemy.ext.asyncio import AsyncSession

from src.ds_common.errors import InvalidReportEncodingError
from src.ds_common.hex_utils import parse_hex_bytes
from src.ds_ledger.application.service import LedgerService, get_ledger_service
from src.ds_settlement.application.schemas import (
    ReportRequest,
    ReportResultOut,
    SettlementOut,
    SettleMarketRequest,
)


def _decode_hex(field: str, value: str) -> bytes:
    try:
        return parse_hex_bytes(value)
    except ValueError:
        raise InvalidReportEncodingError(field) from None


class SettlementApplicationService:
    def __init__(self, ledger: LedgerService | None = None) -> None:
        self._override = ledger

    @property
    def _ledger(self) -> LedgerService:
        return self._override or get_ledger_service()

    async def settle_market(
        self, db: AsyncSession, caller: str, market_id: int, req: SettleMarketRequest
    ) -> SettlementOut:
        e = await self._ledger.settle_market(
            db, caller, market_id, req.outcome, req.final_metric_bps
        )
        return SettlementOut(
            market_id=e.market_id, outcome=e.outcome, final_metric_bps=e.final_metric_bps
        )

    async def on_report(self, db: AsyncSession, caller: str, req: ReportRequest) -> ReportResultOut:
        result = await self._ledger.on_report(
            db, caller, _decode_hex("metadata", req.metadata), _decode_hex("report", req.report)
        )
        return ReportResultOut.from_domain(result)
