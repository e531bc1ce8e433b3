from sqlalchemy.ext.asyncio import AsyncSession

from src.ds_common.addresses import normalize_address
from src.ds_ledger.application.service import LedgerService, get_ledger_service
from src.ds_trading.application.schemas import (
    BuySharesRequest,
    BuySharesResponse,
    PositionOut,
)


class TradingApplicationService:
    def __init__(self, ledger: LedgerService | None = None) -> None:
        self._override = ledger

    @property
    def _ledger(self) -> LedgerService:
        return self._override or get_ledger_service()

    async def buy_shares(
        self, db: AsyncSession, account: str, market_id: int, req: BuySharesRequest
    ) -> BuySharesResponse:
        event = await self._ledger.buy_shares(db, account, market_id, req.side, req.amount)
        return BuySharesResponse.from_event(event)

    async def get_position(self, db: AsyncSession, market_id: int, account: str) -> PositionOut:
        position = await self._ledger.get_position(db, market_id, normalize_address(account))
        return PositionOut.from_domain(position)
