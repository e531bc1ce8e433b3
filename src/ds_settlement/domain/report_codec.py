"""Settlement report wire format.

A report is a sequence of fixed-width records, each the ABI encoding of
(uint256 market_id, uint8 outcome, uint256 final_metric_bps) = 3 x 32 bytes.
The payload length must be a positive multiple of RECORD_SIZE.

The outcome word is decoded as a full uint256: an out-of-range code is a
per-record skip in the settlement engine, not a decode failure that would
abort the whole batch.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from eth_abi import decode, encode

from src.ds_common.errors import InvalidReportLengthError

RECORD_SIZE = 96
_WIRE_TYPES = ["uint256", "uint8", "uint256"]
_DECODE_TYPES = ["uint256", "uint256", "uint256"]


@dataclass(frozen=True)
class SettlementRecord:
    market_id: int
    outcome: int
    final_metric_bps: int


def decode_report(payload: bytes) -> list[SettlementRecord]:
    if len(payload) == 0 or len(payload) % RECORD_SIZE != 0:
        raise InvalidReportLengthError(len(payload), RECORD_SIZE)
    records: list[SettlementRecord] = []
    for offset in range(0, len(payload), RECORD_SIZE):
        market_id, outcome, final_metric = decode(
            _DECODE_TYPES, payload[offset:offset + RECORD_SIZE]
        )
        records.append(SettlementRecord(market_id, outcome, final_metric))
    return records


def encode_report(records: Iterable[SettlementRecord]) -> bytes:
    """Inverse of decode_report for in-range records (outcome must fit uint8)."""
    return b"".join(
        encode(_WIRE_TYPES, [r.market_id, r.outcome, r.final_metric_bps]) for r in records
    )
