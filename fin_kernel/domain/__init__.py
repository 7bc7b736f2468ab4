"""Pure domain helpers shared by the FIN engines."""

from fin_kernel.domain.money import (
    MONEY_PLACES,
    ZERO,
    check_money,
    money_quantum,
    round_money,
    to_decimal,
)

__all__ = [
    "MONEY_PLACES",
    "ZERO",
    "check_money",
    "money_quantum",
    "round_money",
    "to_decimal",
]
