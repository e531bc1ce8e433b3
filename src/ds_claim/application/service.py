from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from src.ds_ledger.application.service import LedgerService, get_ledger_service


class ClaimResponse(BaseModel):
    market_id: int
    account: str
    payout: int


class ClaimApplicationService:
    def __init__(self, ledger: LedgerService | None = None) -> None:
        self._override = ledger

    @property
    def _ledger(self) -> LedgerService:
        return self._override or get_ledger_service()

    async def claim(self, db: AsyncSession, account: str, market_id: int) -> ClaimResponse:
        event = await self._ledger.claim(db, account, market_id)
        return ClaimResponse(market_id=event.market_id, account=event.account, payout=event.payout)

    async def preview(self, db: AsyncSession, account: str, market_id: int) -> ClaimResponse:
        payout = await self._ledger.preview_claim(db, account, market_id)
        return ClaimResponse(market_id=market_id, account=account, payout=payout)
