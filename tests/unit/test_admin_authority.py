"""Unit tests for owner-gated configuration changes."""

import pytest

from src.ds_admin.domain.authority import (
    apply_fee_withdrawal,
    check_fee_withdrawal,
    check_transfer_ownership,
    ensure_owner,
    set_forwarder,
    set_settler,
    transfer_ownership,
)
from src.ds_common.addresses import ZERO_ADDRESS
from src.ds_common.errors import InvalidAddressError, InvalidAmountError, NotOwnerError
from src.ds_ledger.domain.store import LedgerStore

OWNER = "0x" + "1" * 40
NEW = "0x" + "7" * 40


def test_ensure_owner(store: LedgerStore) -> None:
    ensure_owner(store, OWNER)
    with pytest.raises(NotOwnerError):
        ensure_owner(store, NEW)


def test_set_settler_and_forwarder(store: LedgerStore) -> None:
    assert set_settler(store, NEW).settler == NEW
    assert set_forwarder(store, NEW).forwarder == NEW
    assert store.config.settler == NEW
    assert store.config.forwarder == NEW


def test_transfer_ownership(store: LedgerStore) -> None:
    event = transfer_ownership(store, NEW)
    assert (event.previous_owner, event.new_owner) == (OWNER, NEW)
    with pytest.raises(NotOwnerError):
        ensure_owner(store, OWNER)


def test_transfer_to_zero_rejected(store: LedgerStore) -> None:
    with pytest.raises(InvalidAddressError):
        check_transfer_ownership(ZERO_ADDRESS)
    with pytest.raises(InvalidAddressError):
        transfer_ownership(store, ZERO_ADDRESS)
    assert store.config.owner == OWNER


def test_fee_withdrawal(store: LedgerStore) -> None:
    with pytest.raises(InvalidAmountError):
        check_fee_withdrawal(store)
    store.protocol_fees = 75
    amount = check_fee_withdrawal(store)
    event = apply_fee_withdrawal(store, OWNER, amount)
    assert (event.recipient, event.amount) == (OWNER, 75)
    assert store.protocol_fees == 0
