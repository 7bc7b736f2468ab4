"""
fin_engines.depreciation -- Year-by-year depreciation schedules.

Responsibility:
    Given asset cost, salvage value, useful life and a method, produce the
    full year-by-year depreciation schedule with summary totals.  Supports
    straight-line, declining-balance (caller-supplied annual factor) and
    the fixed-table FIN method (5- and 7-year recovery periods).

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import fin_kernel (exceptions, logging, money rounding) and
    sibling engine modules.  Consumed by fin_modules.assets and by the web
    and console callers, which own persistence and presentation.

Invariants enforced:
    - Replay safety: identical inputs produce identical schedules; no
      internal state or clock access.
    - Decimal-only arithmetic; cost and salvage must already sit on the
      money grid (``money_places``, default 2) and every yearly amount is
      rounded half-up to that grid.
    - Book value never drops below salvage value.
    - Straight-line and FIN schedules end exactly on salvage (FIN: zero);
      the final year absorbs the rounding residue of earlier years.
    - Validation is all-or-nothing and happens before any arithmetic.

Failure modes:
    - ValidationError (fin_kernel.exceptions) for every precondition:
      non-positive cost, cost or salvage finer than ``money_places`` or too
      long to quantize, negative salvage, salvage >= cost, non-positive or
      excessive useful life, FIN period other than 5/7, missing or
      non-positive declining-balance factor.
    - Nothing can fail once validation has passed.

Audit relevance:
    The schedule is the basis for depreciation expense postings and the
    asset's carrying value.  Every calculation is traced via
    ``@traced_engine`` with an input fingerprint for replay checks.

Usage:
    from decimal import Decimal
    from fin_engines.depreciation import (
        DepreciationEngine, DepreciationMethod, DepreciationRequest,
    )

    engine = DepreciationEngine()
    schedule = engine.calculate(DepreciationRequest(
        cost=Decimal("100000"),
        salvage_value=Decimal("10000"),
        useful_life=5,
        method=DepreciationMethod.STRAIGHT_LINE,
    ))
    schedule.years[0].depreciation  # Decimal("18000.00")
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, ClassVar, Iterator, Union

from fin_engines.fin_tables import fin_rates, is_supported_period, supported_fin_periods
from fin_engines.tracer import traced_engine
from fin_kernel.domain.money import ZERO, check_money, money_quantum, round_money, to_decimal
from fin_kernel.exceptions import UnsupportedRecoveryPeriodError, ValidationError
from fin_kernel.logging_config import get_logger

logger = get_logger("engines.depreciation")

DEFAULT_MAX_USEFUL_LIFE = 50
DEFAULT_MONEY_PLACES = 2
ZERO_SALVAGE = ZERO


class DepreciationMethod(str, Enum):
    """Supported depreciation methods."""

    STRAIGHT_LINE = "straight_line"
    DECLINING_BALANCE = "declining_balance"
    FIN = "fin"  # fixed statutory table, 5/7-year recovery

    @classmethod
    def parse(cls, value: Any) -> DepreciationMethod:
        """
        Accept the enum itself, its value, its name, or the hyphenated web
        spelling (``straight-line``).

        Raises:
            ValidationError: if the value names no method.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower().replace("-", "_").replace(" ", "_")
            for member in cls:
                if member.value == key:
                    return member
        raise ValidationError(
            f"Unsupported depreciation method: {value!r}",
            field="method",
            value=value,
        )


# ---------------------------------------------------------------------------
# Method variants
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class StraightLine:
    """Equal charge every year down to salvage."""

    method: ClassVar[DepreciationMethod] = DepreciationMethod.STRAIGHT_LINE


@dataclass(frozen=True)
class DecliningBalance:
    """Fixed fraction of the prior year's book value."""

    factor: Decimal
    method: ClassVar[DepreciationMethod] = DepreciationMethod.DECLINING_BALANCE


@dataclass(frozen=True)
class Fin:
    """Statutory table method; salvage is always zero."""

    recovery_period: int
    method: ClassVar[DepreciationMethod] = DepreciationMethod.FIN


DepreciationBasis = Union[StraightLine, DecliningBalance, Fin]


# ---------------------------------------------------------------------------
# Request / result values
# ---------------------------------------------------------------------------


def _to_years(value: Any) -> int:
    if isinstance(value, bool):
        raise ValidationError("useful_life must be a whole number of years", field="useful_life", value=value)
    if isinstance(value, int):
        return value
    number = to_decimal(value, "useful_life")
    if number != number.to_integral_value():
        raise ValidationError("useful_life must be a whole number of years", field="useful_life", value=value)
    return int(number)


@dataclass(frozen=True)
class DepreciationRequest:
    """
    Inputs for one depreciation calculation.

    Numbers given as int, str or float are converted to ``Decimal`` on
    construction.  Range checks belong to ``DepreciationEngine.validate``
    so that every caller gets the same messages.
    """

    cost: Decimal
    salvage_value: Decimal
    useful_life: int
    method: DepreciationMethod
    db_factor: Decimal | None = None  # annual fraction, e.g. 0.20 for 20%

    def __post_init__(self) -> None:
        object.__setattr__(self, "cost", to_decimal(self.cost, "cost"))
        object.__setattr__(self, "salvage_value", to_decimal(self.salvage_value, "salvage_value"))
        object.__setattr__(self, "useful_life", _to_years(self.useful_life))
        object.__setattr__(self, "method", DepreciationMethod.parse(self.method))
        if self.db_factor is not None:
            object.__setattr__(self, "db_factor", to_decimal(self.db_factor, "db_factor"))

    @classmethod
    def straight_line(cls, cost: Any, salvage_value: Any, useful_life: Any) -> DepreciationRequest:
        return cls(cost, salvage_value, useful_life, DepreciationMethod.STRAIGHT_LINE)

    @classmethod
    def declining_balance(
        cls, cost: Any, salvage_value: Any, useful_life: Any, db_factor: Any
    ) -> DepreciationRequest:
        return cls(cost, salvage_value, useful_life, DepreciationMethod.DECLINING_BALANCE, db_factor)

    @classmethod
    def for_fin(cls, cost: Any, recovery_period: Any) -> DepreciationRequest:
        """FIN request; salvage is forced to zero."""
        return cls(cost, ZERO_SALVAGE, recovery_period, DepreciationMethod.FIN)

    @property
    def basis(self) -> DepreciationBasis:
        """
        The method variant carrying its own parameters.

        Raises:
            ValidationError: if the method needs a parameter that is missing.
        """
        match self.method:
            case DepreciationMethod.STRAIGHT_LINE:
                return StraightLine()
            case DepreciationMethod.DECLINING_BALANCE:
                if self.db_factor is None:
                    raise ValidationError(
                        "Declining balance factor is required",
                        field="db_factor",
                    )
                return DecliningBalance(self.db_factor)
            case DepreciationMethod.FIN:
                return Fin(self.useful_life)
        raise ValidationError(f"Unsupported depreciation method: {self.method}", field="method")


@dataclass(frozen=True)
class DepreciationYear:
    """One line of a schedule; ``year`` is 1-based."""

    year: int
    depreciation: Decimal
    cumulative_depreciation: Decimal
    book_value: Decimal


@dataclass(frozen=True)
class DepreciationSchedule:
    """
    Computed schedule.  Immutable; no identity beyond its values.

    ``salvage_value`` is the salvage actually used (always zero for FIN).

    Row count: straight-line and declining-balance schedules have
    ``useful_life`` rows.  FIN schedules follow the half-year convention
    and have ``useful_life + 1`` rows (6 for a 5-year, 8 for a 7-year
    recovery period); iterate ``years`` rather than ``range(useful_life)``.
    """

    method: DepreciationMethod
    cost: Decimal
    salvage_value: Decimal
    useful_life: int
    years: tuple[DepreciationYear, ...]

    @property
    def total_depreciation(self) -> Decimal:
        return sum((y.depreciation for y in self.years), ZERO)

    @property
    def final_book_value(self) -> Decimal:
        if not self.years:
            return self.cost
        return self.years[-1].book_value

    def year(self, number: int) -> DepreciationYear:
        """Line for a 1-based year number."""
        if number < 1 or number > len(self.years):
            raise IndexError(f"Year {number} outside schedule of {len(self.years)} years")
        return self.years[number - 1]

    def to_rows(self) -> list[dict[str, Any]]:
        return [
            {
                "year": y.year,
                "depreciation": str(y.depreciation),
                "cumulative_depreciation": str(y.cumulative_depreciation),
                "book_value": str(y.book_value),
            }
            for y in self.years
        ]

    def __len__(self) -> int:
        return len(self.years)

    def __iter__(self) -> Iterator[DepreciationYear]:
        return iter(self.years)


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


class DepreciationEngine:
    """
    Pure function calculator for depreciation schedules.

    Contract:
        No I/O, no database access, fully deterministic.  Safe to share
        between threads: the only state is the immutable life ceiling and
        rounding precision.
    Guarantees:
        - Straight-line: ``(cost - salvage) / life`` each year, final year
          adjusted so the schedule ends on salvage exactly.
        - Declining-balance: ``prior book value * factor``, clamped at
          salvage; zero after the clamp year.
        - FIN: ``cost * table rate``; ``recovery_period + 1`` rows under the
          half-year convention, ending at book value zero.
        - Every amount is a multiple of ``quantum`` (0.01 by default).
    Non-goals:
        - Does not persist schedules or update accumulated depreciation.
        - Does not apply partial first-year (acquisition date) factors.
    """

    def __init__(
        self,
        max_useful_life: int = DEFAULT_MAX_USEFUL_LIFE,
        money_places: int = DEFAULT_MONEY_PLACES,
    ):
        if max_useful_life < 1:
            raise ValueError(f"max_useful_life must be positive, got {max_useful_life}")
        self.max_useful_life = max_useful_life
        self.money_places = money_places
        self.quantum = money_quantum(money_places)

    def __repr__(self) -> str:
        # Part of the trace fingerprint; keep free of object ids.
        return (
            f"DepreciationEngine(max_useful_life={self.max_useful_life}, "
            f"money_places={self.money_places})"
        )

    def validate(self, request: DepreciationRequest) -> DepreciationBasis:
        """
        Check every precondition and return the method variant.

        Raises:
            ValidationError: on the first failed precondition.
        """
        try:
            if request.cost <= ZERO:
                raise ValidationError("Cost must be positive", field="cost", value=request.cost)
            check_money(request.cost, "cost", "Cost", self.quantum)
            if request.salvage_value < ZERO:
                raise ValidationError(
                    "Salvage value cannot be negative",
                    field="salvage_value",
                    value=request.salvage_value,
                )
            check_money(request.salvage_value, "salvage_value", "Salvage value", self.quantum)
            if request.salvage_value >= request.cost:
                raise ValidationError(
                    "Salvage value must be less than cost",
                    field="salvage_value",
                    value=request.salvage_value,
                )
            if request.useful_life <= 0:
                raise ValidationError(
                    "Useful life must be positive",
                    field="useful_life",
                    value=request.useful_life,
                )
            if request.useful_life > self.max_useful_life:
                raise ValidationError(
                    f"Useful life seems unreasonably long (max {self.max_useful_life} years)",
                    field="useful_life",
                    value=request.useful_life,
                )
            if request.method == DepreciationMethod.FIN and not is_supported_period(request.useful_life):
                raise UnsupportedRecoveryPeriodError(request.useful_life, supported_fin_periods())
            basis = request.basis
            if isinstance(basis, DecliningBalance) and basis.factor <= ZERO:
                raise ValidationError(
                    "Declining balance factor must be positive",
                    field="db_factor",
                    value=basis.factor,
                )
        except ValidationError as exc:
            logger.warning(
                "depreciation_validation_failed",
                extra={
                    "method": request.method.value,
                    "error_code": exc.code,
                    "field": exc.field,
                    "reason": str(exc),
                },
            )
            raise
        return basis

    @traced_engine("depreciation", "1.1", fingerprint_fields=("self", "request"))
    def calculate(self, request: DepreciationRequest) -> DepreciationSchedule:
        """
        Produce the full schedule for ``request``.

        Preconditions:
            See ``validate``; nothing is computed if any check fails.
        Postconditions:
            ``years`` is chronological with 1-based year numbers.
            ``book_value`` of every year is >= the salvage used.
            ``cost``, ``salvage_value`` and every amount carry exactly
            ``money_places`` decimal places.

        Raises:
            ValidationError: if the request is invalid.
        """
        logger.info("depreciation_calculation_started", extra={
            "cost": str(request.cost),
            "salvage_value": str(request.salvage_value),
            "useful_life": request.useful_life,
            "method": request.method.value,
        })

        basis = self.validate(request)
        q = self.quantum
        # Exact after validate; only the exponent is normalised.
        cost = round_money(request.cost, q)
        salvage = round_money(request.salvage_value, q)

        match basis:
            case StraightLine():
                years = self._straight_line(cost, salvage, request.useful_life, q)
            case DecliningBalance(factor=factor):
                years = self._declining_balance(cost, salvage, request.useful_life, factor, q)
            case Fin(recovery_period=period):
                if salvage != ZERO:
                    logger.warning("fin_salvage_ignored", extra={
                        "salvage_value": str(salvage),
                    })
                salvage = round_money(ZERO_SALVAGE, q)
                years = self._fin(cost, period, q)

        schedule = DepreciationSchedule(
            method=request.method,
            cost=cost,
            salvage_value=salvage,
            useful_life=request.useful_life,
            years=tuple(years),
        )

        logger.info("depreciation_calculation_completed", extra={
            "method": request.method.value,
            "year_count": len(schedule.years),
            "total_depreciation": str(schedule.total_depreciation),
            "final_book_value": str(schedule.final_book_value),
        })
        return schedule

    def compare(
        self,
        cost: Any,
        salvage_value: Any,
        useful_life: Any,
        db_factor: Any,
    ) -> tuple[DepreciationSchedule, DepreciationSchedule]:
        """
        Straight-line and declining-balance schedules for the same asset.

        Two independent ``calculate`` calls; either may raise
        ValidationError.
        """
        straight = self.calculate(
            DepreciationRequest.straight_line(cost, salvage_value, useful_life)
        )
        declining = self.calculate(
            DepreciationRequest.declining_balance(cost, salvage_value, useful_life, db_factor)
        )
        return straight, declining

    # -----------------------------------------------------------------
    # Method implementations
    # -----------------------------------------------------------------

    @staticmethod
    def _straight_line(
        cost: Decimal, salvage: Decimal, life: int, q: Decimal
    ) -> list[DepreciationYear]:
        depreciable = cost - salvage
        annual = round_money(depreciable / life, q)
        cumulative = round_money(ZERO, q)
        years: list[DepreciationYear] = []
        for n in range(1, life + 1):
            remaining = depreciable - cumulative
            # Final year takes the rounding residue
            amount = remaining if n == life else min(annual, remaining)
            cumulative += amount
            years.append(DepreciationYear(n, amount, cumulative, cost - cumulative))
        return years

    @staticmethod
    def _declining_balance(
        cost: Decimal, salvage: Decimal, life: int, factor: Decimal, q: Decimal
    ) -> list[DepreciationYear]:
        zero = round_money(ZERO, q)
        cumulative = zero
        book_value = cost
        years: list[DepreciationYear] = []
        for n in range(1, life + 1):
            headroom = book_value - salvage
            if headroom <= ZERO:
                amount = zero
            else:
                # Clamp before rounding; headroom is already on the grid
                raw = book_value * factor
                amount = headroom if raw >= headroom else round_money(raw, q)
            cumulative += amount
            book_value = cost - cumulative
            years.append(DepreciationYear(n, amount, cumulative, book_value))
        return years

    @staticmethod
    def _fin(cost: Decimal, recovery_period: int, q: Decimal) -> list[DepreciationYear]:
        rates = fin_rates(recovery_period)
        cumulative = round_money(ZERO, q)
        years: list[DepreciationYear] = []
        for n, rate in enumerate(rates, start=1):
            remaining = cost - cumulative
            amount = remaining if n == len(rates) else min(round_money(cost * rate, q), remaining)
            cumulative += amount
            years.append(DepreciationYear(n, amount, cumulative, cost - cumulative))
        return years


_default_engine = DepreciationEngine()


def calculate(request: DepreciationRequest) -> DepreciationSchedule:
    """Module-level ``DepreciationEngine().calculate`` with default limits."""
    return _default_engine.calculate(request)


def compare(
    cost: Any, salvage_value: Any, useful_life: Any, db_factor: Any
) -> tuple[DepreciationSchedule, DepreciationSchedule]:
    """Module-level ``DepreciationEngine().compare`` with default limits."""
    return _default_engine.compare(cost, salvage_value, useful_life, db_factor)
