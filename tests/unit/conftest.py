"""In-memory collaborators for ledger tests.

FakeSession stages journal appends and collateral movements and only makes
them visible on commit, so rollback behaves like the real transaction.
"""

from collections import defaultdict
from collections.abc import Sequence

import pytest

from src.ds_ledger.application.service import LedgerService
from src.ds_ledger.domain.events import LedgerEvent
from src.ds_ledger.domain.models import LedgerConfig
from src.ds_ledger.domain.store import LedgerStore

OWNER = "0x" + "1" * 40
SETTLER = "0x" + "2" * 40
FORWARDER = "0x" + "3" * 40
NOW = 1_700_000_000


class InMemoryEventJournal:
    def __init__(self) -> None:
        self.committed: list[LedgerEvent] = []
        self.pending: list[LedgerEvent] = []
        self.loads = 0

    async def append(self, db: object, events: Sequence[LedgerEvent]) -> None:
        self.pending.extend(events)

    async def load(self, db: object) -> list[LedgerEvent]:
        self.loads += 1
        return list(self.committed)

    def flush(self) -> None:
        self.committed.extend(self.pending)
        self.pending.clear()

    def discard(self) -> None:
        self.pending.clear()


class InMemoryCollateralBank:
    def __init__(self) -> None:
        self.balances: dict[str, int] = defaultdict(int)
        self.pending: dict[str, int] = defaultdict(int)
        self.fail_pull = False
        self.fail_push = False

    def available(self, account: str) -> int:
        return self.balances[account] + self.pending[account]

    async def pull(self, db: object, account: str, amount: int) -> bool:
        if self.fail_pull or self.available(account) < amount:
            return False
        self.pending[account] -= amount
        return True

    async def push(self, db: object, account: str, amount: int) -> bool:
        if self.fail_push:
            return False
        self.pending[account] += amount
        return True

    def flush(self) -> None:
        for account, delta in self.pending.items():
            self.balances[account] += delta
        self.pending.clear()

    def discard(self) -> None:
        self.pending.clear()


class StubVerifier:
    def __init__(self) -> None:
        self.valid = True
        self.error: Exception | None = None
        self.calls: list[tuple] = []

    async def verify_proof(
        self, root, group_id, signal_hash, nullifier_hash, external_nullifier_hash, proof
    ) -> bool:
        self.calls.append(
            (root, group_id, signal_hash, nullifier_hash, external_nullifier_hash, tuple(proof))
        )
        if self.error is not None:
            raise self.error
        return self.valid


class FakeSession:
    def __init__(self, journal: InMemoryEventJournal, bank: InMemoryCollateralBank) -> None:
        self._journal = journal
        self._bank = bank
        self.commits = 0
        self.rollbacks = 0
        self.fail_commit = False

    async def commit(self) -> None:
        if self.fail_commit:
            raise RuntimeError("commit failed")
        self._journal.flush()
        self._bank.flush()
        self.commits += 1

    async def rollback(self) -> None:
        self._journal.discard()
        self._bank.discard()
        self.rollbacks += 1


@pytest.fixture
def store() -> LedgerStore:
    return LedgerStore(LedgerConfig(owner=OWNER, settler=SETTLER, forwarder=FORWARDER))


@pytest.fixture
def journal() -> InMemoryEventJournal:
    return InMemoryEventJournal()


@pytest.fixture
def bank() -> InMemoryCollateralBank:
    return InMemoryCollateralBank()


@pytest.fixture
def verifier() -> StubVerifier:
    return StubVerifier()


@pytest.fixture
def db(journal: InMemoryEventJournal, bank: InMemoryCollateralBank) -> FakeSession:
    return FakeSession(journal, bank)


@pytest.fixture
def ledger(
    bank: InMemoryCollateralBank, verifier: StubVerifier, journal: InMemoryEventJournal
) -> LedgerService:
    return LedgerService(
        bank,
        verifier,
        journal,
        owner=OWNER,
        settler=SETTLER,
        forwarder=FORWARDER,
        app_id="app_test",
        action_id="verify-human",
        clock=lambda: NOW,
    )
