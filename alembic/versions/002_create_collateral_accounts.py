"""002: create collateral_accounts table

Revision ID: 002
Revises: 001
Create Date: 2026-10-18
"""
from typing import Sequence, Union
from alembic import op

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE collateral_accounts (
            account     VARCHAR(42)  PRIMARY KEY,
            balance     BIGINT       NOT NULL DEFAULT 0,
            version     BIGINT       NOT NULL DEFAULT 0,
            created_at  TIMESTAMPTZ  NOT NULL DEFAULT NOW(),
            updated_at  TIMESTAMPTZ  NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_collateral_balance_gte_0 CHECK (balance >= 0)
        );
    """)
    op.execute("""
        CREATE TRIGGER trg_collateral_accounts_updated_at
            BEFORE UPDATE ON collateral_accounts
            FOR EACH ROW EXECUTE FUNCTION fn_touch_updated_at();
    """)
    op.execute(
        "COMMENT ON TABLE collateral_accounts IS "
        "'Collateral balances per checksum address, smallest token unit';"
    )


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS collateral_accounts CASCADE;")
