"""Admin application service — owner operations and ledger audits."""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from src.ds_common.addresses import normalize_address
from src.ds_ledger.application.service import LedgerService, get_ledger_service
from src.ds_market.application.schemas import MarketOut


class AdminService:
    def __init__(self, ledger: LedgerService | None = None) -> None:
        self._override = ledger

    @property
    def _ledger(self) -> LedgerService:
        return self._override or get_ledger_service()

    async def create_market(
        self,
        db: AsyncSession,
        caller: str,
        asset: str,
        threshold_bps: int,
        settlement_timestamp: int,
    ) -> dict[str, Any]:
        event = await self._ledger.create_market(
            db, caller, asset, threshold_bps, settlement_timestamp
        )
        market = await self._ledger.get_market(db, event.market_id)
        return MarketOut.from_domain(market).model_dump()

    async def set_settler(self, db: AsyncSession, caller: str, address: str) -> dict[str, Any]:
        event = await self._ledger.set_settler(db, caller, normalize_address(address))
        return event.payload()

    async def set_forwarder(self, db: AsyncSession, caller: str, address: str) -> dict[str, Any]:
        event = await self._ledger.set_forwarder(db, caller, normalize_address(address))
        return event.payload()

    async def transfer_ownership(
        self, db: AsyncSession, caller: str, address: str
    ) -> dict[str, Any]:
        event = await self._ledger.transfer_ownership(db, caller, normalize_address(address))
        return event.payload()

    async def withdraw_fees(self, db: AsyncSession, caller: str) -> dict[str, Any]:
        event = await self._ledger.withdraw_fees(db, caller)
        return event.payload()

    async def get_config(self, db: AsyncSession) -> dict[str, Any]:
        config, protocol_fees = await self._ledger.get_config(db)
        return {
            "owner": config.owner,
            "settler": config.settler,
            "forwarder": config.forwarder,
            "protocol_fees": protocol_fees,
        }

    async def verify_all_invariants(self, db: AsyncSession) -> dict[str, object]:
        """Per-market collateral, position-sum and LP-share checks."""
        violations = await self._ledger.verify_invariants(db)
        return {"ok": len(violations) == 0, "violations": violations}
