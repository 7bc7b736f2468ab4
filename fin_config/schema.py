"""
DepreciationPolicy schema.

The human-authored, reviewable settings for depreciation callers.  YAML
files are parsed into these types by the loader; the result is frozen and
handed to ``fin_modules.assets.config`` at runtime.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class DepreciationPolicy:
    """Caller-facing depreciation settings for one configuration version."""

    policy_id: str
    version: int
    default_method: str = "straight_line"
    max_useful_life: int = 50
    declining_balance_presets: tuple[Decimal, ...] = (
        Decimal("20"),
        Decimal("25"),
        Decimal("30"),
        Decimal("33.33"),
        Decimal("35"),
    )
    rate_precision: int = 6  # decimal places kept when converting rate% to factor
    money_places: int = 2
    checksum: str = ""
