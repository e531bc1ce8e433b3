from sqlalchemy.ext.asyncio import AsyncSession

from src.ds_common.addresses import normalize_address
from src.ds_ledger.application.service import LedgerService, get_ledger_service
from src.ds_liquidity.application.schemas import (
    LiquidityChangeResponse,
    LiquidityPositionOut,
    PoolOut,
)


class LiquidityApplicationService:
    def __init__(self, ledger: LedgerService | None = None) -> None:
        self._override = ledger

    @property
    def _ledger(self) -> LedgerService:
        return self._override or get_ledger_service()

    async def add(
        self, db: AsyncSession, account: str, market_id: int, amount: int
    ) -> LiquidityChangeResponse:
        e = await self._ledger.add_liquidity(db, account, market_id, amount)
        return LiquidityChangeResponse(
            market_id=e.market_id, account=e.account, amount=e.amount, lp_shares=e.lp_shares
        )

    async def remove(
        self, db: AsyncSession, account: str, market_id: int, shares: int
    ) -> LiquidityChangeResponse:
        """amount in the response is the payout."""
        e = await self._ledger.remove_liquidity(db, account, market_id, shares)
        return LiquidityChangeResponse(
            market_id=e.market_id, account=e.account, amount=e.payout, lp_shares=e.lp_shares
        )

    async def get_pool(self, db: AsyncSession, market_id: int) -> PoolOut:
        return PoolOut.from_domain(await self._ledger.get_pool(db, market_id))

    async def get_position(
        self, db: AsyncSession, market_id: int, account: str
    ) -> LiquidityPositionOut:
        lp = await self._ledger.get_liquidity_position(db, market_id, normalize_address(account))
        return LiquidityPositionOut.from_domain(lp)
