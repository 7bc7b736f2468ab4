"""
Money -- Decimal coercion and rounding for depreciation amounts.

Responsibility:
    One place that decides how caller-supplied numbers become ``Decimal``
    and how amounts are rounded.  Every engine goes through here so the
    rounding rule cannot drift between methods.

Invariants enforced:
    - Amounts are ``Decimal``, never ``float`` arithmetic.  Floats handed
      in by a caller are converted through ``str`` so 0.1 stays 0.1.
    - Rounding is ROUND_HALF_UP to 2 decimal places unless a caller asks
      for another quantum (rate factors use 6 places).

Failure modes:
    - ``ValidationError`` when a value cannot be parsed as a finite Decimal.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from fin_kernel.exceptions import ValidationError

MONEY_PLACES = Decimal("0.01")
ZERO = Decimal("0")


def to_decimal(value: Any, field: str) -> Decimal:
    """
    Coerce ``value`` to a finite ``Decimal``.

    Preconditions:
        ``value`` is a Decimal, int, float or numeric string.
    Postconditions:
        Returns a finite Decimal; the input is not rounded.
    Raises:
        ValidationError: if ``value`` is None, a bool, unparsable, NaN or infinite.
    """
    if value is None:
        raise ValidationError(f"{field} is required", field=field)
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be numeric, got {value!r}", field=field, value=value)
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError) as e:
            raise ValidationError(
                f"{field} must be numeric, got {value!r}", field=field, value=value
            ) from e
    if not result.is_finite():
        raise ValidationError(f"{field} must be a finite number", field=field, value=value)
    return result


def round_money(amount: Decimal, quantum: Decimal = MONEY_PLACES) -> Decimal:
    """Round ``amount`` half-up to ``quantum`` (default 0.01)."""
    return amount.quantize(quantum, rounding=ROUND_HALF_UP)


def money_quantum(places: int) -> Decimal:
    """Quantum for ``places`` decimal places: 2 -> ``Decimal("0.01")``."""
    if places < 0:
        raise ValueError(f"money places cannot be negative, got {places}")
    return Decimal(1).scaleb(-places)


def check_money(amount: Decimal, field: str, label: str, quantum: Decimal = MONEY_PLACES) -> Decimal:
    """
    Confirm ``amount`` is representable at ``quantum`` without rounding.

    Postconditions:
        Returns ``amount`` unchanged.
    Raises:
        ValidationError: if ``amount`` has finer precision than ``quantum``
            (``100.005`` at 0.01), or has too many digits for the current
            Decimal context to hold at that precision.
    """
    try:
        rounded = round_money(amount, quantum)
    except InvalidOperation as e:
        raise ValidationError(f"{label} is too large", field=field, value=amount) from e
    if rounded != amount:
        places = -quantum.as_tuple().exponent
        raise ValidationError(
            f"{label} cannot have more than {places} decimal places",
            field=field,
            value=amount,
        )
    return amount
