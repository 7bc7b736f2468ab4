"""Tests for the FIN rate tables."""

from decimal import Decimal

import pytest

from fin_engines.fin_tables import (
    FIN_5Y_HY,
    FIN_7Y_HY,
    FIN_RATES,
    fin_rate,
    fin_rates,
    is_supported_period,
    supported_fin_periods,
)
from fin_kernel.exceptions import UnsupportedRecoveryPeriodError


class TestTables:

    @pytest.mark.parametrize("period", [5, 7])
    def test_table_sums_to_one(self, period):
        assert sum(FIN_RATES[period]) == Decimal("1")

    @pytest.mark.parametrize("period", [5, 7])
    def test_half_year_convention_adds_a_row(self, period):
        assert len(FIN_RATES[period]) == period + 1

    def test_published_rates(self):
        assert FIN_5Y_HY[0] == Decimal("0.2000")
        assert FIN_5Y_HY[1] == Decimal("0.3200")
        assert FIN_7Y_HY[0] == Decimal("0.1429")
        assert FIN_7Y_HY[-1] == Decimal("0.0446")

    def test_supported_periods(self):
        assert supported_fin_periods() == (5, 7)
        assert is_supported_period(5)
        assert not is_supported_period(6)


class TestLookup:

    def test_fin_rates_returns_table(self):
        assert fin_rates(7) is FIN_7Y_HY

    @pytest.mark.parametrize("period", [0, 3, 6, 10])
    def test_unsupported_period(self, period):
        with pytest.raises(UnsupportedRecoveryPeriodError) as exc_info:
            fin_rates(period)
        assert exc_info.value.recovery_period == period

    def test_unsupported_period_logged(self, captured_logs):
        with pytest.raises(UnsupportedRecoveryPeriodError):
            fin_rates(6)
        records = captured_logs("fin_table_unsupported_period")
        assert records[0]["recovery_period"] == 6
        assert records[0]["supported"] == [5, 7]

    def test_fin_rate_by_year(self):
        assert fin_rate(5, 3) == Decimal("0.1920")
        assert fin_rate(7, 8) == Decimal("0.0446")

    @pytest.mark.parametrize("year", [0, 7, 100])
    def test_fin_rate_outside_table_is_zero(self, year):
        assert fin_rate(5, year) == Decimal("0")
