"""
Declining-balance rate presets.

The console menu and the web form offer a fixed list of annual rates.
These are a caller convenience: the engine accepts any positive factor.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from fin_kernel.domain.money import round_money, to_decimal
from fin_kernel.exceptions import ValidationError

RATE_PRECISION = Decimal("0.000001")

DECLINING_BALANCE_PRESETS: tuple[Decimal, ...] = (
    Decimal("20"),
    Decimal("25"),
    Decimal("30"),
    Decimal("33.33"),
    Decimal("35"),
)

_HUNDRED = Decimal("100")


def rate_to_factor(rate_percent: Any, precision: Decimal = RATE_PRECISION) -> Decimal:
    """
    Convert a percentage (``20`` for 20%) to the engine's annual factor.

    Postconditions:
        Returns ``rate / 100`` rounded half-up to six places.
    Raises:
        ValidationError: unless 0 < rate < 100.
    """
    rate = to_decimal(rate_percent, "depreciation_rate")
    if rate <= 0 or rate >= _HUNDRED:
        raise ValidationError(
            "Depreciation rate must be between 0 and 100 percent",
            field="depreciation_rate",
            value=rate_percent,
        )
    return round_money(rate / _HUNDRED, precision)


def preset_factor(
    choice: int,
    presets: tuple[Decimal, ...] = DECLINING_BALANCE_PRESETS,
    precision: Decimal = RATE_PRECISION,
) -> Decimal:
    """Factor for a 1-based menu ``choice`` over ``presets``."""
    if isinstance(choice, bool) or not isinstance(choice, int) or not 1 <= choice <= len(presets):
        raise ValidationError(
            f"Rate choice must be between 1 and {len(presets)}",
            field="rate_choice",
            value=choice,
        )
    return rate_to_factor(presets[choice - 1], precision)


def preset_menu(presets: tuple[Decimal, ...] = DECLINING_BALANCE_PRESETS) -> list[tuple[int, str]]:
    """Numbered labels for the preset list, e.g. ``(4, "33.33%")``."""
    return [(i, f"{rate.normalize():f}%") for i, rate in enumerate(presets, start=1)]
