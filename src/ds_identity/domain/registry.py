"""Identity registry — verified accounts and globally consumed nullifiers."""

import logging

from src.ds_common.errors import NotVerifiedError, ProofAlreadyUsedError
from src.ds_ledger.domain.events import UserVerified
from src.ds_ledger.domain.store import LedgerStore

logger = logging.getLogger(__name__)


def ensure_proof_unused(store: LedgerStore, nullifier_hash: int) -> None:
    if store.is_nullifier_consumed(nullifier_hash):
        raise ProofAlreadyUsedError(nullifier_hash)


def ensure_verified(store: LedgerStore, account: str) -> None:
    if not store.is_verified(account):
        raise NotVerifiedError(account)


def record_verification(
    store: LedgerStore, account: str, nullifier_hash: int
) -> UserVerified:
    """Consume the nullifier and mark the account verified.

    Re-verifying an already verified account with a fresh nullifier is
    accepted: the nullifier is consumed and the account stays verified.
    """
    ensure_proof_unused(store, nullifier_hash)
    store.consume_nullifier(nullifier_hash)
    store.mark_verified(account)
    logger.info("Account verified: account=%s nullifier=%#x", account, nullifier_hash)
    return UserVerified(account=account, nullifier_hash=nullifier_hash)
