"""Administrative authority — owner-gated changes to the ledger config.

owner, settler and forwarder are fields of LedgerStore.config, never ambient
globals; the only way to change them is through these functions.
"""

import logging

from src.ds_common.addresses import ZERO_ADDRESS
from src.ds_common.errors import InvalidAddressError, InvalidAmountError, NotOwnerError
from src.ds_ledger.domain.events import (
    ForwarderUpdated,
    OwnershipTransferred,
    ProtocolFeesWithdrawn,
    SettlerUpdated,
)
from src.ds_ledger.domain.store import LedgerStore

logger = logging.getLogger(__name__)


def ensure_owner(store: LedgerStore, caller: str) -> None:
    if caller != store.config.owner:
        raise NotOwnerError(caller)


def set_settler(store: LedgerStore, settler: str) -> SettlerUpdated:
    store.config.settler = settler
    logger.info("Settler updated: %s", settler)
    return SettlerUpdated(settler=settler)


def set_forwarder(store: LedgerStore, forwarder: str) -> ForwarderUpdated:
    store.config.forwarder = forwarder
    logger.info("Forwarder updated: %s", forwarder)
    return ForwarderUpdated(forwarder=forwarder)


def check_transfer_ownership(new_owner: str) -> None:
    if new_owner == ZERO_ADDRESS:
        raise InvalidAddressError(new_owner)


def transfer_ownership(store: LedgerStore, new_owner: str) -> OwnershipTransferred:
    check_transfer_ownership(new_owner)
    previous = store.config.owner
    store.config.owner = new_owner
    logger.info("Ownership transferred: %s -> %s", previous, new_owner)
    return OwnershipTransferred(previous_owner=previous, new_owner=new_owner)


def check_fee_withdrawal(store: LedgerStore) -> int:
    """Return the withdrawable protocol fee balance; raise if there is none."""
    if store.protocol_fees == 0:
        raise InvalidAmountError("no protocol fees to withdraw")
    return store.protocol_fees


def apply_fee_withdrawal(
    store: LedgerStore, recipient: str, amount: int
) -> ProtocolFeesWithdrawn:
    store.protocol_fees -= amount
    logger.info("Protocol fees withdrawn: recipient=%s amount=%d", recipient, amount)
    return ProtocolFeesWithdrawn(recipient=recipient, amount=amount)
