"""Append-only event journal over the ledger_events table.

Written within the caller's transaction by LedgerService; read back in id
order to rebuild the in-memory store. market_id and account are copied out of
the payload into indexed columns for observers; the JSON payload keeps the
event's field order.
"""
import json
from collections.abc import Sequence
from typing import Protocol

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.ds_ledger.domain.events import LedgerEvent, event_from_payload

_INSERT_EVENT_SQL = text("""
    INSERT INTO ledger_events (event_type, market_id, account, payload)
    VALUES (:event_type, :market_id, :account, :payload)
""")

_BIGINT_MAX = 2**63 - 1

_LOAD_EVENTS_SQL = text("""
    SELECT event_type, payload
    FROM ledger_events
    ORDER BY id ASC
""")


def _indexable_market_id(event: LedgerEvent) -> int | None:
    """Report records may name ids beyond BIGINT; those stay in the payload only."""
    market_id = getattr(event, "market_id", None)
    if market_id is None or market_id > _BIGINT_MAX:
        return None
    return market_id


class EventJournalProtocol(Protocol):
    async def append(self, db: AsyncSession, events: Sequence[LedgerEvent]) -> None: ...

    async def load(self, db: AsyncSession) -> list[LedgerEvent]: ...


class SqlEventJournal:
    async def append(self, db: AsyncSession, events: Sequence[LedgerEvent]) -> None:
        for event in events:
            await db.execute(
                _INSERT_EVENT_SQL,
                {
                    "event_type": event.event_type.value,
                    "market_id": _indexable_market_id(event),
                    "account": getattr(event, "account", None),
                    "payload": json.dumps(event.payload()),
                },
            )

    async def load(self, db: AsyncSession) -> list[LedgerEvent]:
        rows = (await db.execute(_LOAD_EVENTS_SQL)).fetchall()
        events: list[LedgerEvent] = []
        for event_type, payload in rows:
            data = json.loads(payload) if isinstance(payload, str) else payload
            events.append(event_from_payload(event_type, data))
        return events
