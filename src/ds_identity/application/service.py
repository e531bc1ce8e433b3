from sqlalchemy.ext.asyncio import AsyncSession

from src.ds_common.addresses import normalize_address
from src.ds_identity.application.schemas import VerificationOut, VerifyRequest
from src.ds_ledger.application.service import LedgerService, get_ledger_service


class IdentityApplicationService:
    def __init__(self, ledger: LedgerService | None = None) -> None:
        self._override = ledger

    @property
    def _ledger(self) -> LedgerService:
        return self._override or get_ledger_service()

    async def verify(self, db: AsyncSession, account: str, req: VerifyRequest) -> VerificationOut:
        event = await self._ledger.verify(
            db, account, int(req.root), int(req.nullifier_hash), [int(p) for p in req.proof]
        )
        return VerificationOut(
            account=event.account, verified=True, nullifier_hash=hex(event.nullifier_hash)
        )

    async def get_status(self, db: AsyncSession, account: str) -> VerificationOut:
        account = normalize_address(account)
        return VerificationOut(account=account, verified=await self._ledger.is_verified(db, account))
