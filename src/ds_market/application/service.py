"""MarketApplicationService — read side of the market registry.

Creation is owner-gated and lives with the other administrative operations
(ds_admin); this service only shapes ledger reads for the API.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from src.ds_ledger.application.service import LedgerService, get_ledger_service
from src.ds_market.application.schemas import MarketListResponse, MarketOut


class MarketApplicationService:
    def __init__(self, ledger: LedgerService | None = None) -> None:
        self._override = ledger

    @property
    def _ledger(self) -> LedgerService:
        return self._override or get_ledger_service()

    async def list_markets(self, db: AsyncSession) -> MarketListResponse:
        items = [MarketOut.from_domain(m) for m in await self._ledger.list_markets(db)]
        return MarketListResponse(items=items, total=len(items))

    async def list_due_markets(self, db: AsyncSession) -> MarketListResponse:
        items = [MarketOut.from_domain(m) for m in await self._ledger.list_due_markets(db)]
        return MarketListResponse(items=items, total=len(items))

    async def get_market(self, db: AsyncSession, market_id: int) -> MarketOut:
        return MarketOut.from_domain(await self._ledger.get_market(db, market_id))
