"""SqlCollateralBank — concrete implementation of CollateralBankProtocol.

Balances live in collateral_accounts. Both primitives are single atomic
UPDATE ... RETURNING statements; 0 rows returned means the transfer failed.
Amounts or resulting balances beyond the BIGINT column also count as a
failed transfer, never as a database error.

Transaction ownership: the CALLER (LedgerService) commits or rolls back, so a
pull is undone together with the journal write when the operation fails.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.ds_collateral.domain.bank import MAX_BALANCE

_PULL_SQL = text("""
    UPDATE collateral_accounts
    SET balance = balance - :amount,
        version = version + 1,
        updated_at = NOW()
    WHERE account = :account AND balance >= :amount
    RETURNING balance
""")

_PUSH_SQL = text("""
    INSERT INTO collateral_accounts (account, balance)
    VALUES (:account, :amount)
    ON CONFLICT (account) DO UPDATE
        SET balance = collateral_accounts.balance + :amount,
            version = collateral_accounts.version + 1,
            updated_at = NOW()
        WHERE collateral_accounts.balance <= :headroom
    RETURNING balance
""")


class SqlCollateralBank:
    async def pull(self, db: AsyncSession, account: str, amount: int) -> bool:
        if amount > MAX_BALANCE:
            return False
        row = (await db.execute(_PULL_SQL, {"account": account, "amount": amount})).fetchone()
        return row is not None

    async def push(self, db: AsyncSession, account: str, amount: int) -> bool:
        if amount > MAX_BALANCE:
            return False
        params = {"account": account, "amount": amount, "headroom": MAX_BALANCE - amount}
        row = (await db.execute(_PUSH_SQL, params)).fetchone()
        return row is not None
