"""
Fixed Assets Module (``fin_modules.assets``).

Responsibility
--------------
Thin glue between depreciation callers (web controller, console menu)
and ``fin_engines.depreciation``: single-year helper formulas, the
declining-balance rate presets, web payload mapping, and the
configuration schema that turns the active policy into an engine.

Architecture position
---------------------
**Modules layer** -- config schemas, adapters and pure helpers.  All
schedule arithmetic is delegated to ``fin_engines``.

Failure modes
-------------
* ``ValidationError`` for any caller input the engine would reject,
  raised before a schedule is computed.
"""

from fin_modules.assets.config import AssetDepreciationConfig
from fin_modules.assets.helpers import (
    declining_balance_annual,
    fin_annual,
    remaining_life_depreciation,
    straight_line_annual,
)
from fin_modules.assets.payloads import (
    comparison_to_payload,
    error_to_payload,
    request_from_payload,
    schedule_to_payload,
)
from fin_modules.assets.rates import (
    DECLINING_BALANCE_PRESETS,
    preset_factor,
    preset_menu,
    rate_to_factor,
)

__all__ = [
    "AssetDepreciationConfig",
    "DECLINING_BALANCE_PRESETS",
    "comparison_to_payload",
    "declining_balance_annual",
    "error_to_payload",
    "fin_annual",
    "preset_factor",
    "preset_menu",
    "rate_to_factor",
    "remaining_life_depreciation",
    "request_from_payload",
    "schedule_to_payload",
    "straight_line_annual",
]
