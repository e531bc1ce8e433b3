"""Settlement engine — two authorized entry points, one state transition.

Per market: Unresolved -> Settled(outcome, final_metric), one-way, terminal.

  settle_direct   caller must be config.settler; every precondition failure raises.
  process_report  caller must be config.forwarder; the payload is decoded into
                  records and each record is applied or skipped on its own.
                  A ReportReceived event is emitted for every record before its
                  validity is checked, so invalid attempts stay observable.

Both converge on apply_settlement. Once settled, neither path can change the
outcome or metric: direct calls raise, report records are skipped.
"""

import logging
from dataclasses import dataclass, field

from src.ds_common.enums import Outcome, is_final_outcome
from src.ds_common.errors import (
    InvalidForwarderError,
    InvalidOutcomeError,
    MarketAlreadySettledError,
    NotSettlerError,
)
from src.ds_ledger.domain.events import LedgerEvent, MarketSettled, ReportReceived
from src.ds_ledger.domain.store import LedgerStore
from src.ds_settlement.domain.report_codec import SettlementRecord, decode_report

logger = logging.getLogger(__name__)

SKIP_UNKNOWN_MARKET = "UNKNOWN_MARKET"
SKIP_ALREADY_SETTLED = "ALREADY_SETTLED"
SKIP_INVALID_OUTCOME = "INVALID_OUTCOME"


@dataclass(frozen=True)
class RecordResult:
    index: int
    market_id: int
    outcome: int
    final_metric_bps: int
    applied: bool
    skip_reason: str | None = None


@dataclass
class ReportResult:
    results: list[RecordResult] = field(default_factory=list)
    events: list[LedgerEvent] = field(default_factory=list)

    @property
    def applied_count(self) -> int:
        return sum(1 for r in self.results if r.applied)

    @property
    def skipped_count(self) -> int:
        return len(self.results) - self.applied_count


def apply_settlement(
    store: LedgerStore, market_id: int, outcome: int, final_metric_bps: int
) -> MarketSettled:
    """The shared transition. Callers have already checked every precondition."""
    market = store.get_market(market_id)
    market.settled = True
    market.outcome = Outcome(outcome)
    market.final_metric_bps = final_metric_bps
    logger.info(
        "Market settled: id=%d outcome=%s final_metric=%dbps",
        market_id, market.outcome.name, final_metric_bps,
    )
    return MarketSettled(
        market_id=market_id, outcome=int(outcome), final_metric_bps=final_metric_bps
    )


def settle_direct(
    store: LedgerStore,
    caller: str,
    market_id: int,
    outcome: int,
    final_metric_bps: int,
) -> MarketSettled:
    if caller != store.config.settler:
        raise NotSettlerError(caller)
    market = store.get_market(market_id)
    if market.settled:
        raise MarketAlreadySettledError(market_id)
    if not is_final_outcome(outcome):
        raise InvalidOutcomeError(outcome)
    return apply_settlement(store, market_id, outcome, final_metric_bps)


def _skip_reason(store: LedgerStore, record: SettlementRecord) -> str | None:
    if not store.has_market(record.market_id):
        return SKIP_UNKNOWN_MARKET
    if store.get_market(record.market_id).settled:
        return SKIP_ALREADY_SETTLED
    if not is_final_outcome(record.outcome):
        return SKIP_INVALID_OUTCOME
    return None


def process_report(store: LedgerStore, caller: str, payload: bytes) -> ReportResult:
    """Decode and apply a batch report; records are processed in payload order."""
    if caller != store.config.forwarder:
        raise InvalidForwarderError(caller)
    records = decode_report(payload)

    report = ReportResult()
    for index, record in enumerate(records):
        report.events.append(
            ReportReceived(
                market_id=record.market_id,
                outcome=record.outcome,
                final_metric_bps=record.final_metric_bps,
            )
        )
        reason = _skip_reason(store, record)
        if reason is not None:
            logger.warning(
                "Report record skipped: index=%d market=%d outcome=%d reason=%s",
                index, record.market_id, record.outcome, reason,
            )
            report.results.append(
                RecordResult(
                    index, record.market_id, record.outcome, record.final_metric_bps,
                    applied=False, skip_reason=reason,
                )
            )
            continue
        report.events.append(
            apply_settlement(store, record.market_id, record.outcome, record.final_metric_bps)
        )
        report.results.append(
            RecordResult(
                index, record.market_id, record.outcome, record.final_metric_bps, applied=True
            )
        )

    logger.info(
        "Report processed: records=%d applied=%d skipped=%d",
        len(report.results), report.applied_count, report.skipped_count,
    )
    return report
