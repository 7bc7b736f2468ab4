"""
Tests for the fixed-asset single-year helpers.

Validates:
- straight_line_annual quantizes and rejects a non-positive life
- declining_balance_annual never depreciates below salvage
- fin_annual reads the FIN tables
- remaining_life_depreciation looks up the next year of a schedule
"""

from decimal import Decimal

import pytest

from fin_engines.depreciation import DepreciationEngine, DepreciationRequest
from fin_kernel.exceptions import UnsupportedRecoveryPeriodError, ValidationError
from fin_modules.assets.helpers import (
    declining_balance_annual,
    fin_annual,
    remaining_life_depreciation,
    straight_line_annual,
)


class TestStraightLineAnnual:

    def test_even_split(self):
        assert straight_line_annual(Decimal("100000"), Decimal("10000"), 5) == Decimal("18000.00")

    def test_rounds_half_up(self):
        assert straight_line_annual(Decimal("1000"), Decimal("0"), 3) == Decimal("333.33")
        assert straight_line_annual(Decimal("0.05"), Decimal("0"), 10) == Decimal("0.01")

    @pytest.mark.parametrize("life", [0, -1])
    def test_non_positive_life(self, life):
        with pytest.raises(ValidationError, match="Useful life must be positive"):
            straight_line_annual(Decimal("1000"), Decimal("0"), life)


class TestDecliningBalanceAnnual:

    def test_fraction_of_book_value(self):
        assert declining_balance_annual(Decimal("1000"), Decimal("0.25")) == Decimal("250.00")

    def test_capped_at_salvage(self):
        assert declining_balance_annual(
            Decimal("1000"), Decimal("0.25"), Decimal("900")
        ) == Decimal("100")

    def test_zero_at_or_below_salvage(self):
        assert declining_balance_annual(Decimal("900"), Decimal("0.25"), Decimal("900")) == Decimal("0")
        assert declining_balance_annual(Decimal("800"), Decimal("0.25"), Decimal("900")) == Decimal("0")

    def test_oversized_factor_capped_without_overflow(self):
        assert declining_balance_annual(
            Decimal("1000"), Decimal("1E+30"), Decimal("100")
        ) == Decimal("900")


class TestFinAnnual:

    def test_table_year(self):
        assert fin_annual(Decimal("10000"), 5, 2) == Decimal("3200.00")
        assert fin_annual(Decimal("10000"), 7, 1) == Decimal("1429.00")

    def test_outside_table_is_zero(self):
        assert fin_annual(Decimal("10000"), 5, 7) == Decimal("0.00")

    def test_unsupported_period(self):
        with pytest.raises(UnsupportedRecoveryPeriodError):
            fin_annual(Decimal("10000"), 6, 1)


class TestRemainingLifeDepreciation:

    def setup_method(self):
        self.schedule = DepreciationEngine().calculate(
            DepreciationRequest.declining_balance("50000", "5000", 4, "0.25")
        )

    def test_new_asset_is_in_first_year(self):
        assert remaining_life_depreciation(self.schedule, 0) == Decimal("12500.00")

    def test_mid_life(self):
        assert remaining_life_depreciation(self.schedule, 2) == Decimal("7031.25")

    def test_fully_depreciated(self):
        assert remaining_life_depreciation(self.schedule, 4) == Decimal("0")
        assert remaining_life_depreciation(self.schedule, 40) == Decimal("0")

    def test_negative_age(self):
        with pytest.raises(ValidationError, match="Current age cannot be negative"):
            remaining_life_depreciation(self.schedule, -1)
