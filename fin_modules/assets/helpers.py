"""
Fixed Assets Helpers (``fin_modules.assets.helpers``).

Responsibility
--------------
Single-year depreciation formulas for callers that need one figure
rather than a whole schedule: the web "calculate" endpoints and the
console's quick look-ups.  Full schedules come from
``fin_engines.depreciation``.

Architecture position
---------------------
**Modules layer** -- pure helper functions.  No I/O, no clock.

Invariants enforced
-------------------
* All numeric inputs and outputs use ``Decimal`` -- NEVER ``float``.
* Results are quantized to 2 decimal places, ROUND_HALF_UP.
* Declining-balance never goes below salvage value.

Failure modes
-------------
* Zero or negative useful life  -> ``ValidationError``.
* Unsupported FIN recovery period  -> ``UnsupportedRecoveryPeriodError``.
* Book value at or below salvage  -> declining-balance returns ``Decimal("0")``.
"""

from __future__ import annotations

from decimal import Decimal

from fin_engines.depreciation import DepreciationSchedule
from fin_engines.fin_tables import fin_rate
from fin_kernel.domain.money import ZERO, round_money
from fin_kernel.exceptions import ValidationError


def straight_line_annual(
    cost: Decimal,
    salvage_value: Decimal,
    useful_life_years: int,
) -> Decimal:
    """
    Calculate annual straight-line depreciation.

    Preconditions:
        - ``cost`` and ``salvage_value`` are ``Decimal``.
        - ``useful_life_years`` is a positive integer.
    Postconditions:
        - Returns ``(cost - salvage_value) / useful_life_years`` quantized to 0.01.
    Raises:
        ValidationError: if ``useful_life_years`` <= 0.
    """
    if useful_life_years <= 0:
        raise ValidationError(
            "Useful life must be positive",
            field="useful_life",
            value=useful_life_years,
        )
    return round_money((cost - salvage_value) / useful_life_years)


def declining_balance_annual(
    book_value: Decimal,
    db_factor: Decimal,
    salvage_value: Decimal = ZERO,
) -> Decimal:
    """
    Calculate one year of declining-balance depreciation.

    Preconditions:
        - All args are ``Decimal``; ``db_factor`` is an annual fraction.
    Postconditions:
        - Returns ``book_value * db_factor`` quantized to 0.01, capped so
          the book value does not fall below ``salvage_value``.
        - Returns ``Decimal("0")`` if the book value is already at salvage.
    """
    if book_value <= salvage_value:
        return ZERO
    headroom = book_value - salvage_value
    raw = book_value * db_factor
    # Cap before quantizing so an oversized factor never overflows
    if raw >= headroom:
        return headroom
    return min(round_money(raw), headroom)


def fin_annual(basis: Decimal, recovery_period: int, year: int) -> Decimal:
    """
    Calculate FIN depreciation for a 1-based ``year``.

    Postconditions:
        - Returns ``basis * table rate`` quantized to 0.01; zero outside
          the table.
    Raises:
        UnsupportedRecoveryPeriodError: if the period has no FIN table.
    """
    return round_money(basis * fin_rate(recovery_period, year))


def remaining_life_depreciation(
    schedule: DepreciationSchedule,
    current_age_years: int,
) -> Decimal:
    """
    Depreciation due in the year after an asset has reached ``current_age_years``.

    An asset aged 0 is in its first year.  Past the end of the schedule
    nothing is left to depreciate.
    """
    if current_age_years < 0:
        raise ValidationError(
            "Current age cannot be negative",
            field="current_age_years",
            value=current_age_years,
        )
    if current_age_years >= len(schedule.years):
        return ZERO
    return schedule.years[current_age_years].depreciation
