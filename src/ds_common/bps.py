"""Integer basis-point utilities.

All collateral amounts, shares and metrics are int. No float, no Decimal.
1 bps = 1/100 of a percent; 10000 bps = 100%.
"""

BPS_DENOMINATOR = 10_000


def apply_bps(amount: int, rate_bps: int) -> int:
    """Floor of amount * rate_bps / 10000."""
    return amount * rate_bps // BPS_DENOMINATOR


def bps_to_display(bps: int) -> str:
    """Convert basis points to a percentage string: 345 -> '3.45%', -50 -> '-0.50%'."""
    if bps < 0:
        abs_bps = -bps
        return f"-{abs_bps // 100}.{abs_bps % 100:02d}%"
    return f"{bps // 100}.{bps % 100:02d}%"
