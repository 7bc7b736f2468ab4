"""
fin_engines.comparison -- Side-by-side straight-line vs declining-balance report.

Responsibility:
    Pair two schedules year by year for display: per-year charges, the
    difference between them, both book values, the cumulative difference
    and the first year in which straight-line overtakes declining-balance.

Architecture position:
    Engines -- pure, presentational pairing over ``DepreciationSchedule``
    values.  No formatting; callers render rows however their transport
    needs.

Failure modes:
    - ValidationError propagated from ``DepreciationEngine.compare`` when
      the convenience ``compare_methods`` is used with invalid inputs.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from fin_engines.depreciation import (
    DepreciationEngine,
    DepreciationSchedule,
    DepreciationYear,
)
from fin_kernel.domain.money import ZERO
from fin_kernel.logging_config import get_logger

logger = get_logger("engines.comparison")


@dataclass(frozen=True)
class ComparisonRow:
    """One year of the comparison; ``difference`` is declining minus straight."""

    year: int
    straight_line: Decimal
    declining_balance: Decimal
    straight_line_book_value: Decimal
    declining_balance_book_value: Decimal

    @property
    def difference(self) -> Decimal:
        return self.declining_balance - self.straight_line


@dataclass(frozen=True)
class ComparisonReport:
    """Year-by-year pairing of two schedules plus summary figures."""

    straight_line: DepreciationSchedule
    declining_balance: DepreciationSchedule
    rows: tuple[ComparisonRow, ...]

    @property
    def total_difference(self) -> Decimal:
        """Declining-balance total minus straight-line total."""
        return (
            self.declining_balance.total_depreciation
            - self.straight_line.total_depreciation
        )

    @property
    def crossover_year(self) -> int | None:
        """First year whose straight-line charge exceeds the declining charge."""
        for row in self.rows:
            if row.straight_line > row.declining_balance:
                return row.year
        return None

    def to_rows(self) -> list[dict[str, Any]]:
        return [
            {
                "year": r.year,
                "straight_line": str(r.straight_line),
                "declining_balance": str(r.declining_balance),
                "difference": str(r.difference),
                "straight_line_book_value": str(r.straight_line_book_value),
                "declining_balance_book_value": str(r.declining_balance_book_value),
            }
            for r in self.rows
        ]


def _line(schedule: DepreciationSchedule, number: int) -> tuple[Decimal, Decimal]:
    """Charge and book value for a year, padding past the end of the schedule."""
    if number <= len(schedule.years):
        y: DepreciationYear = schedule.years[number - 1]
        return y.depreciation, y.book_value
    return ZERO, schedule.final_book_value


def build_comparison(
    straight_line: DepreciationSchedule,
    declining_balance: DepreciationSchedule,
) -> ComparisonReport:
    """
    Pair two schedules year by year.

    Postconditions:
        One row per year of the longer schedule; the shorter one is padded
        with zero charges at its final book value.
    """
    span = max(len(straight_line.years), len(declining_balance.years))
    rows = []
    for n in range(1, span + 1):
        sl_amount, sl_book = _line(straight_line, n)
        db_amount, db_book = _line(declining_balance, n)
        rows.append(ComparisonRow(n, sl_amount, db_amount, sl_book, db_book))

    report = ComparisonReport(straight_line, declining_balance, tuple(rows))
    logger.debug("depreciation_comparison_built", extra={
        "year_count": span,
        "total_difference": str(report.total_difference),
        "crossover_year": report.crossover_year,
    })
    return report


def compare_methods(
    cost: Any,
    salvage_value: Any,
    useful_life: Any,
    db_factor: Any,
    engine: DepreciationEngine | None = None,
) -> ComparisonReport:
    """Run ``DepreciationEngine.compare`` and pair the results."""
    engine = engine or DepreciationEngine()
    straight, declining = engine.compare(cost, salvage_value, useful_life, db_factor)
    return build_comparison(straight, declining)
