"""Unit tests for direct and batch settlement."""

import pytest

from src.ds_common.enums import LedgerEventType, Outcome
from src.ds_common.errors import (
    InvalidForwarderError,
    InvalidOutcomeError,
    InvalidReportLengthError,
    MarketAlreadySettledError,
    MarketNotFoundError,
    NotSettlerError,
)
from src.ds_ledger.domain.store import LedgerStore
from src.ds_market.domain.registry import create_market
from src.ds_settlement.domain.engine import (
    SKIP_ALREADY_SETTLED,
    SKIP_INVALID_OUTCOME,
    SKIP_UNKNOWN_MARKET,
    process_report,
    settle_direct,
)
from src.ds_settlement.domain.report_codec import SettlementRecord, encode_report

SETTLER = "0x" + "2" * 40
FORWARDER = "0x" + "3" * 40
STRANGER = "0x" + "9" * 40


@pytest.fixture
def markets(store: LedgerStore) -> LedgerStore:
    create_market(store, "stETH", 350, 0, 0)
    create_market(store, "rETH", 300, 0, 0)
    return store


class TestSettleDirect:
    def test_settles(self, markets: LedgerStore) -> None:
        event = settle_direct(markets, SETTLER, 0, 1, 412)
        m = markets.get_market(0)
        assert m.settled and m.outcome is Outcome.YES and m.final_metric_bps == 412
        assert (event.market_id, event.outcome, event.final_metric_bps) == (0, 1, 412)

    def test_only_settler(self, markets: LedgerStore) -> None:
        with pytest.raises(NotSettlerError):
            settle_direct(markets, STRANGER, 0, 1, 0)

    def test_unknown_market(self, markets: LedgerStore) -> None:
        with pytest.raises(MarketNotFoundError):
            settle_direct(markets, SETTLER, 9, 1, 0)

    @pytest.mark.parametrize("outcome", [0, 3])
    def test_invalid_outcome(self, markets: LedgerStore, outcome: int) -> None:
        with pytest.raises(InvalidOutcomeError):
            settle_direct(markets, SETTLER, 0, outcome, 0)
        assert not markets.get_market(0).settled

    def test_idempotent(self, markets: LedgerStore) -> None:
        settle_direct(markets, SETTLER, 0, 2, 100)
        with pytest.raises(MarketAlreadySettledError):
            settle_direct(markets, SETTLER, 0, 1, 999)
        m = markets.get_market(0)
        assert m.outcome is Outcome.NO and m.final_metric_bps == 100

    def test_already_settled_checked_before_outcome(self, markets: LedgerStore) -> None:
        settle_direct(markets, SETTLER, 0, 2, 100)
        with pytest.raises(MarketAlreadySettledError):
            settle_direct(markets, SETTLER, 0, 0, 0)


class TestProcessReport:
    def test_only_forwarder(self, markets: LedgerStore) -> None:
        payload = encode_report([SettlementRecord(0, 1, 1)])
        with pytest.raises(InvalidForwarderError):
            process_report(markets, SETTLER, payload)

    def test_bad_length_aborts(self, markets: LedgerStore) -> None:
        with pytest.raises(InvalidReportLengthError):
            process_report(markets, FORWARDER, b"\x01" * 100)
        assert not markets.get_market(0).settled

    def test_invalid_and_valid_record(self, markets: LedgerStore) -> None:
        payload = encode_report([SettlementRecord(42, 1, 5), SettlementRecord(1, 2, 280)])
        result = process_report(markets, FORWARDER, payload)

        assert [r.applied for r in result.results] == [False, True]
        assert result.results[0].skip_reason == SKIP_UNKNOWN_MARKET
        received = [e for e in result.events if e.event_type is LedgerEventType.REPORT_RECEIVED]
        assert [e.market_id for e in received] == [42, 1]
        assert markets.get_market(1).outcome is Outcome.NO
        assert not markets.get_market(0).settled

    def test_skip_reasons(self, markets: LedgerStore) -> None:
        settle_direct(markets, SETTLER, 0, 1, 400)
        payload = encode_report([SettlementRecord(0, 2, 1), SettlementRecord(1, 0, 1)])
        result = process_report(markets, FORWARDER, payload)
        assert [r.skip_reason for r in result.results] == [
            SKIP_ALREADY_SETTLED,
            SKIP_INVALID_OUTCOME,
        ]
        assert result.applied_count == 0 and result.skipped_count == 2
        assert markets.get_market(0).outcome is Outcome.YES
        assert markets.get_market(0).final_metric_bps == 400

    def test_duplicate_record_in_one_batch(self, markets: LedgerStore) -> None:
        payload = encode_report([SettlementRecord(0, 1, 10), SettlementRecord(0, 2, 20)])
        result = process_report(markets, FORWARDER, payload)
        assert [r.applied for r in result.results] == [True, False]
        assert markets.get_market(0).outcome is Outcome.YES
        assert markets.get_market(0).final_metric_bps == 10

    def test_event_order(self, markets: LedgerStore) -> None:
        payload = encode_report([SettlementRecord(0, 1, 10)])
        result = process_report(markets, FORWARDER, payload)
        assert [e.event_type for e in result.events] == [
            LedgerEventType.REPORT_RECEIVED,
            LedgerEventType.MARKET_SETTLED,
        ]
