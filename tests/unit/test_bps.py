from src.ds_common.bps import BPS_DENOMINATOR, apply_bps, bps_to_display


class TestApplyBps:
    def test_floor(self) -> None:
        # 199 * 150 / 10000 = 2.985 -> 2
        assert apply_bps(199, 150) == 2

    def test_exact(self) -> None:
        assert apply_bps(10_000, 150) == 150

    def test_full_rate(self) -> None:
        assert apply_bps(1234, BPS_DENOMINATOR) == 1234


class TestBpsToDisplay:
    def test_positive(self) -> None:
        assert bps_to_display(345) == "3.45%"

    def test_small(self) -> None:
        assert bps_to_display(5) == "0.05%"

    def test_negative(self) -> None:
        assert bps_to_display(-50) == "-0.50%"

    def test_zero(self) -> None:
        assert bps_to_display(0) == "0.00%"
