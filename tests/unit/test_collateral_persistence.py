"""Unit tests for SqlCollateralBank using MagicMock AsyncSession."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from src.ds_collateral.domain.bank import MAX_BALANCE
from src.ds_collateral.infrastructure.persistence import SqlCollateralBank

ALICE = "0x" + "4" * 40


def _db_returning(row):
    result = MagicMock()
    result.fetchone.return_value = row
    db = MagicMock()
    db.execute = AsyncMock(return_value=result)
    return db


class TestPull:
    @pytest.mark.asyncio
    async def test_success_when_row_returned(self) -> None:
        db = _db_returning((900,))
        assert await SqlCollateralBank().pull(db, ALICE, 100) is True
        sql, params = db.execute.await_args.args
        assert "balance >= :amount" in str(sql)
        assert params == {"account": ALICE, "amount": 100}

    @pytest.mark.asyncio
    async def test_insufficient_balance(self) -> None:
        db = _db_returning(None)
        assert await SqlCollateralBank().pull(db, ALICE, 100) is False


class TestPush:
    @pytest.mark.asyncio
    async def test_upsert_credit(self) -> None:
        db = _db_returning((100,))
        assert await SqlCollateralBank().push(db, ALICE, 100) is True
        sql, _ = db.execute.await_args.args
        assert "ON CONFLICT (account)" in str(sql)

    @pytest.mark.asyncio
    async def test_balance_headroom_bound(self) -> None:
        db = _db_returning((100,))
        await SqlCollateralBank().push(db, ALICE, 100)
        sql, params = db.execute.await_args.args
        assert "collateral_accounts.balance <= :headroom" in str(sql)
        assert params["headroom"] == MAX_BALANCE - 100

    @pytest.mark.asyncio
    async def test_oversize_amount_fails_without_query(self) -> None:
        db = _db_returning((1,))
        assert await SqlCollateralBank().push(db, ALICE, MAX_BALANCE + 1) is False
        assert await SqlCollateralBank().pull(db, ALICE, MAX_BALANCE + 1) is False
        db.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_no_row_is_failure(self) -> None:
        db = _db_returning(None)
        assert await SqlCollateralBank().push(db, ALICE, 1) is False

    @pytest.mark.asyncio
    async def test_never_commits(self) -> None:
        db = _db_returning((1,))
        db.commit = AsyncMock()
        await SqlCollateralBank().push(db, ALICE, 1)
        db.commit.assert_not_awaited()
