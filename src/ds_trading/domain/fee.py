"""Trading fee — 1.5% of the gross amount, floored, split protocol/LP."""

from src.ds_common.bps import apply_bps

TRADE_FEE_BPS = 150


def calc_trade_fee(amount: int) -> int:
    """Floor division fee: amount x 150 // 10000."""
    return apply_bps(amount, TRADE_FEE_BPS)


def split_fee(fee: int) -> tuple[int, int]:
    """Return (protocol_fee, lp_fee). protocol = fee // 2; LP takes the rest."""
    protocol_fee = fee // 2
    return protocol_fee, fee - protocol_fee
