"""CollateralBank Protocol — the two transfer primitives the ledger consumes.

Both are atomic and synchronous from the ledger's point of view: True means
the full amount moved, False means nothing moved. The ledger never retries.
"""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

# collateral_accounts.balance is BIGINT
MAX_BALANCE = 2**63 - 1


class CollateralBankProtocol(Protocol):
    async def pull(self, db: AsyncSession, account: str, amount: int) -> bool: ...

    async def push(self, db: AsyncSession, account: str, amount: int) -> bool: ...
