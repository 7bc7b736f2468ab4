"""
fin_engines.fin_tables -- Fixed-rate tables for the FIN depreciation method.

The FIN method is the statutory 200% declining-balance table method with
the half-year convention (MACRS, IRS Publication 946, Table A-1).  Only
the 5-year and 7-year recovery periods are supported.

Half-year convention: the first and last years each carry half a year of
depreciation, so a table for an N-year recovery period has N + 1 rows.
Each table sums to exactly 100% of cost.
"""

from __future__ import annotations

from decimal import Decimal

from fin_kernel.exceptions import UnsupportedRecoveryPeriodError
from fin_kernel.logging_config import get_logger

logger = get_logger("engines.fin_tables")

# 5-Year Property (200% DB, HY)
FIN_5Y_HY: tuple[Decimal, ...] = (
    Decimal("0.2000"),  # Year 1
    Decimal("0.3200"),  # Year 2
    Decimal("0.1920"),  # Year 3
    Decimal("0.1152"),  # Year 4
    Decimal("0.1152"),  # Year 5
    Decimal("0.0576"),  # Year 6
)

# 7-Year Property (200% DB, HY)
FIN_7Y_HY: tuple[Decimal, ...] = (
    Decimal("0.1429"),  # Year 1
    Decimal("0.2449"),  # Year 2
    Decimal("0.1749"),  # Year 3
    Decimal("0.1249"),  # Year 4
    Decimal("0.0893"),  # Year 5
    Decimal("0.0892"),  # Year 6
    Decimal("0.0893"),  # Year 7
    Decimal("0.0446"),  # Year 8
)

FIN_RATES: dict[int, tuple[Decimal, ...]] = {
    5: FIN_5Y_HY,
    7: FIN_7Y_HY,
}


def supported_fin_periods() -> tuple[int, ...]:
    """Recovery periods that have a FIN table, ascending."""
    return tuple(sorted(FIN_RATES))


def is_supported_period(recovery_period: int) -> bool:
    return recovery_period in FIN_RATES


def fin_rates(recovery_period: int) -> tuple[Decimal, ...]:
    """
    Return the FIN table for a recovery period.

    Raises:
        UnsupportedRecoveryPeriodError: if no table exists for the period.
    """
    rates = FIN_RATES.get(recovery_period)
    if rates is None:
        logger.warning(
            "fin_table_unsupported_period",
            extra={
                "recovery_period": recovery_period,
                "supported": list(supported_fin_periods()),
            },
        )
        raise UnsupportedRecoveryPeriodError(recovery_period, supported_fin_periods())
    return rates


def fin_rate(recovery_period: int, year: int) -> Decimal:
    """
    Rate for a 1-based ``year`` of the table.

    Years before 1 or past the end of the table depreciate nothing.
    """
    rates = fin_rates(recovery_period)
    if year < 1 or year > len(rates):
        return Decimal("0")
    return rates[year - 1]
