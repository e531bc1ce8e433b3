"""003: create ledger_events table

Payload is JSON (not JSONB) so the stored text keeps event field order.

Revision ID: 003
Revises: 002
Create Date: 2026-10-18
"""
from typing import Sequence, Union
from alembic import op

revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE ledger_events (
            id              BIGSERIAL       PRIMARY KEY,
            event_type      VARCHAR(30)     NOT NULL,
            market_id       BIGINT,
            account         VARCHAR(42),
            payload         JSON            NOT NULL,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_ledger_event_type CHECK (
                event_type IN (
                    'MARKET_CREATED',
                    'MARKET_SETTLED',
                    'REPORT_RECEIVED',
                    'SHARES_PURCHASED',
                    'CLAIMED',
                    'CLAIM_TRANSFER_FAILED',
                    'USER_VERIFIED',
                    'LIQUIDITY_ADDED',
                    'LIQUIDITY_REMOVED',
                    'SETTLER_UPDATED',
                    'FORWARDER_UPDATED',
                    'OWNERSHIP_TRANSFERRED',
                    'PROTOCOL_FEES_WITHDRAWN'
                )
            )
        );
    """)
    op.execute("CREATE INDEX idx_ledger_events_market ON ledger_events (market_id, id);")
    op.execute("CREATE INDEX idx_ledger_events_account ON ledger_events (account, id);")
    op.execute("""
        CREATE TRIGGER trg_ledger_events_append_only
            BEFORE UPDATE OR DELETE ON ledger_events
            FOR EACH ROW EXECUTE FUNCTION fn_reject_mutation();
    """)
    op.execute(
        "COMMENT ON TABLE ledger_events IS "
        "'Ledger event journal, append-only; replayed in id order to rebuild state';"
    )


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS ledger_events CASCADE;")
