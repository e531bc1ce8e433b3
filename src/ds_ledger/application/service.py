"""LedgerService — single writer over the in-memory LedgerStore.

Every operation, reads included, runs under one asyncio.Lock. A state change
follows the same sequence:

    domain check (raises, no mutation)
    -> external call (collateral pull / identity verify / payout push)
    -> domain apply (mutates, never raises)
    -> journal append -> db.commit()

Collateral moves in the caller's DB transaction, so a failure anywhere
before commit rolls back the transfer and the journal together. If the store
was already mutated it is evicted and rebuilt from the journal on the next
call (same recovery as an evicted order book).

Claims are the one exception to all-or-nothing: the claimed flag is committed
even when the payout push fails, journaled as ClaimTransferFailed, and the
caller then receives TransferFailedError.
"""

import asyncio
import logging
from collections.abc import AsyncIterator, Callable, Sequence
from contextlib import asynccontextmanager
from dataclasses import replace

from sqlalchemy.ext.asyncio import AsyncSession

from src.ds_admin.domain import authority
from src.ds_claim.domain.claim_engine import apply_claim, check_claim
from src.ds_collateral.domain.bank import CollateralBankProtocol
from src.ds_common.datetime_utils import epoch_now
from src.ds_common.errors import AppError, ProofInvalidError, TransferFailedError
from src.ds_identity.domain.hashing import external_nullifier_hash, signal_hash
from src.ds_identity.domain.registry import ensure_proof_unused, record_verification
from src.ds_identity.domain.verifier import PROOF_LENGTH, IdentityVerifierProtocol
from src.ds_ledger.application.replay import rebuild_store
from src.ds_ledger.domain.events import (
    ClaimTransferFailed,
    Claimed,
    LedgerEvent,
    LiquidityAdded,
    LiquidityRemoved,
    MarketCreated,
    MarketSettled,
    SharesPurchased,
    UserVerified,
)
from src.ds_ledger.domain.invariants import (
    assert_collateral_invariant,
    verify_ledger_invariants,
)
from src.ds_ledger.domain.models import (
    LedgerConfig,
    LiquidityPool,
    LiquidityPosition,
    Market,
    Position,
)
from src.ds_ledger.domain.store import LedgerStore
from src.ds_ledger.infrastructure.journal import EventJournalProtocol
from src.ds_liquidity.domain import pool as liquidity
from src.ds_market.domain import registry as markets
from src.ds_settlement.domain.engine import ReportResult, process_report, settle_direct
from src.ds_trading.domain.position_ledger import apply_buy, check_buy

logger = logging.getLogger(__name__)


class _UnitOfWork:
    """Events to journal, plus whether the store has been touched."""

    def __init__(self, store: LedgerStore) -> None:
        self.store = store
        self.events: list[LedgerEvent] = []
        self.mutated = False
        self.deferred_error: AppError | None = None

    def record(self, *events: LedgerEvent) -> None:
        self.mutated = True
        self.events.extend(events)


class LedgerService:
    def __init__(
        self,
        bank: CollateralBankProtocol,
        verifier: IdentityVerifierProtocol,
        journal: EventJournalProtocol,
        *,
        owner: str,
        settler: str,
        forwarder: str,
        app_id: str,
        action_id: str,
        group_id: int = 1,
        clock: Callable[[], int] = epoch_now,
    ) -> None:
        self._bank = bank
        self._verifier = verifier
        self._journal = journal
        self._initial = (owner, settler, forwarder)
        self._group_id = group_id
        self._external_nullifier = external_nullifier_hash(app_id, action_id)
        self._clock = clock
        self._lock = asyncio.Lock()
        self._store: LedgerStore | None = None

    # ------------------------------------------------------------------
    # Store lifecycle
    # ------------------------------------------------------------------

    async def _load(self, db: AsyncSession) -> LedgerStore:
        """Lazy rebuild from the journal on startup or after eviction."""
        if self._store is None:
            owner, settler, forwarder = self._initial
            events = await self._journal.load(db)
            self._store = rebuild_store(LedgerConfig(owner, settler, forwarder), events)
        return self._store

    async def warm_up(self, db: AsyncSession) -> None:
        async with self._lock:
            await self._load(db)

    @asynccontextmanager
    async def _read(self, db: AsyncSession) -> AsyncIterator[LedgerStore]:
        async with self._lock:
            yield await self._load(db)

    @asynccontextmanager
    async def _write(self, db: AsyncSession) -> AsyncIterator[_UnitOfWork]:
        async with self._lock:
            uow = _UnitOfWork(await self._load(db))
            try:
                yield uow
                if uow.events:
                    await self._journal.append(db, uow.events)
                await db.commit()
            except BaseException:
                # Also on CancelledError: an uncommitted apply must not survive
                if uow.mutated:
                    # Evict; next call rebuilds from the committed journal
                    self._store = None
                await db.rollback()
                raise
        if uow.deferred_error is not None:
            raise uow.deferred_error

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    async def verify(
        self,
        db: AsyncSession,
        account: str,
        root: int,
        nullifier_hash: int,
        proof: Sequence[int],
    ) -> UserVerified:
        async with self._write(db) as uow:
            ensure_proof_unused(uow.store, nullifier_hash)
            if len(proof) != PROOF_LENGTH:
                raise ProofInvalidError()
            valid = await self._verifier.verify_proof(
                root,
                self._group_id,
                signal_hash(account),
                nullifier_hash,
                self._external_nullifier,
                proof,
            )
            if not valid:
                raise ProofInvalidError()
            event = record_verification(uow.store, account, nullifier_hash)
            uow.record(event)
        return event

    async def is_verified(self, db: AsyncSession, account: str) -> bool:
        async with self._read(db) as store:
            return store.is_verified(account)

    # ------------------------------------------------------------------
    # Markets
    # ------------------------------------------------------------------

    async def create_market(
        self,
        db: AsyncSession,
        caller: str,
        asset: str,
        threshold_bps: int,
        settlement_timestamp: int,
    ) -> MarketCreated:
        async with self._write(db) as uow:
            authority.ensure_owner(uow.store, caller)
            event = markets.create_market(
                uow.store, asset, threshold_bps, settlement_timestamp, self._clock()
            )
            uow.record(event)
        return event

    async def get_market(self, db: AsyncSession, market_id: int) -> Market:
        async with self._read(db) as store:
            return replace(store.get_market(market_id))

    async def list_markets(self, db: AsyncSession) -> list[Market]:
        async with self._read(db) as store:
            return [replace(m) for m in store.iter_markets()]

    async def list_due_markets(self, db: AsyncSession, now: int | None = None) -> list[Market]:
        async with self._read(db) as store:
            cutoff = self._clock() if now is None else now
            return [replace(m) for m in markets.list_due_markets(store, cutoff)]

    # ------------------------------------------------------------------
    # Trading
    # ------------------------------------------------------------------

    async def buy_shares(
        self, db: AsyncSession, account: str, market_id: int, side: str, amount: int
    ) -> SharesPurchased:
        async with self._write(db) as uow:
            parsed = check_buy(uow.store, account, market_id, side, amount)
            if not await self._bank.pull(db, account, amount):
                raise TransferFailedError("pull", account, amount)
            event = apply_buy(uow.store, account, market_id, parsed, amount)
            uow.record(event)
            assert_collateral_invariant(uow.store.get_market(market_id))
        return event

    async def get_position(self, db: AsyncSession, market_id: int, account: str) -> Position:
        async with self._read(db) as store:
            store.get_market(market_id)
            return replace(store.peek_position(market_id, account))

    # ------------------------------------------------------------------
    # Settlement
    # ------------------------------------------------------------------

    async def settle_market(
        self,
        db: AsyncSession,
        caller: str,
        market_id: int,
        outcome: int,
        final_metric_bps: int,
    ) -> MarketSettled:
        async with self._write(db) as uow:
            event = settle_direct(uow.store, caller, market_id, outcome, final_metric_bps)
            uow.record(event)
        return event

    async def on_report(
        self, db: AsyncSession, caller: str, metadata: bytes, report: bytes
    ) -> ReportResult:
        async with self._write(db) as uow:
            logger.debug("Report received: metadata=%d bytes report=%d bytes",
                         len(metadata), len(report))
            result = process_report(uow.store, caller, report)
            uow.record(*result.events)
        return result

    # ------------------------------------------------------------------
    # Claims
    # ------------------------------------------------------------------

    async def claim(self, db: AsyncSession, account: str, market_id: int) -> Claimed:
        async with self._write(db) as uow:
            payout = apply_claim(uow.store, account, market_id)
            uow.mutated = True
            event = Claimed(market_id=market_id, account=account, payout=payout)
            if await self._bank.push(db, account, payout):
                uow.record(event)
            else:
                logger.warning(
                    "Claim payout failed, claim stays final: market=%d account=%s payout=%d",
                    market_id, account, payout,
                )
                uow.record(
                    ClaimTransferFailed(market_id=market_id, account=account, payout=payout)
                )
                uow.deferred_error = TransferFailedError("push", account, payout)
        return event

    async def preview_claim(self, db: AsyncSession, account: str, market_id: int) -> int:
        async with self._read(db) as store:
            return check_claim(store, account, market_id)

    # ------------------------------------------------------------------
    # Liquidity
    # ------------------------------------------------------------------

    async def add_liquidity(
        self, db: AsyncSession, account: str, market_id: int, amount: int
    ) -> LiquidityAdded:
        async with self._write(db) as uow:
            liquidity.check_add(uow.store, account, market_id, amount)
            if not await self._bank.pull(db, account, amount):
                raise TransferFailedError("pull", account, amount)
            event = liquidity.apply_add(uow.store, account, market_id, amount)
            uow.record(event)
        return event

    async def remove_liquidity(
        self, db: AsyncSession, account: str, market_id: int, shares: int
    ) -> LiquidityRemoved:
        async with self._write(db) as uow:
            payout = liquidity.check_remove(uow.store, account, market_id, shares)
            if not await self._bank.push(db, account, payout):
                raise TransferFailedError("push", account, payout)
            event = liquidity.apply_remove(uow.store, account, market_id, shares)
            uow.record(event)
        return event

    async def get_pool(self, db: AsyncSession, market_id: int) -> LiquidityPool:
        async with self._read(db) as store:
            return replace(store.get_pool(market_id))

    async def get_liquidity_position(
        self, db: AsyncSession, market_id: int, account: str
    ) -> LiquidityPosition:
        async with self._read(db) as store:
            store.get_pool(market_id)
            return replace(store.peek_lp_position(market_id, account))

    # ------------------------------------------------------------------
    # Administration
    # ------------------------------------------------------------------

    async def set_settler(self, db: AsyncSession, caller: str, settler: str) -> LedgerEvent:
        async with self._write(db) as uow:
            authority.ensure_owner(uow.store, caller)
            event = authority.set_settler(uow.store, settler)
            uow.record(event)
        return event

    async def set_forwarder(self, db: AsyncSession, caller: str, forwarder: str) -> LedgerEvent:
        async with self._write(db) as uow:
            authority.ensure_owner(uow.store, caller)
            event = authority.set_forwarder(uow.store, forwarder)
            uow.record(event)
        return event

    async def transfer_ownership(
        self, db: AsyncSession, caller: str, new_owner: str
    ) -> LedgerEvent:
        async with self._write(db) as uow:
            authority.ensure_owner(uow.store, caller)
            authority.check_transfer_ownership(new_owner)
            event = authority.transfer_ownership(uow.store, new_owner)
            uow.record(event)
        return event

    async def withdraw_fees(self, db: AsyncSession, caller: str) -> LedgerEvent:
        async with self._write(db) as uow:
            authority.ensure_owner(uow.store, caller)
            amount = authority.check_fee_withdrawal(uow.store)
            if not await self._bank.push(db, caller, amount):
                raise TransferFailedError("push", caller, amount)
            event = authority.apply_fee_withdrawal(uow.store, caller, amount)
            uow.record(event)
        return event

    async def get_config(self, db: AsyncSession) -> tuple[LedgerConfig, int]:
        """(config copy, accumulated protocol fees)."""
        async with self._read(db) as store:
            return replace(store.config), store.protocol_fees

    async def verify_invariants(self, db: AsyncSession) -> list[str]:
        async with self._read(db) as store:
            return verify_ledger_invariants(store)


_service: LedgerService | None = None


def get_ledger_service() -> LedgerService:
    global _service  # noqa: PLW0603
    if _service is None:
        from config.settings import settings
        from src.ds_collateral.infrastructure.persistence import SqlCollateralBank
        from src.ds_common.addresses import normalize_address
        from src.ds_identity.infrastructure.http_verifier import HttpIdentityVerifier
        from src.ds_ledger.infrastructure.journal import SqlEventJournal

        _service = LedgerService(
            SqlCollateralBank(),
            HttpIdentityVerifier(
                settings.IDENTITY_VERIFIER_URL,
                timeout_seconds=settings.IDENTITY_VERIFIER_TIMEOUT_SECONDS,
            ),
            SqlEventJournal(),
            owner=normalize_address(settings.OWNER_ADDRESS),
            settler=normalize_address(settings.SETTLER_ADDRESS),
            forwarder=normalize_address(settings.FORWARDER_ADDRESS),
            app_id=settings.WORLD_ID_APP_ID,
            action_id=settings.WORLD_ID_ACTION_ID,
            group_id=settings.WORLD_ID_GROUP_ID,
        )
    return _service
