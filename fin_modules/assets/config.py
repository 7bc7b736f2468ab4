"""
Fixed Assets Depreciation Configuration Schema.

Defines the structure and sensible defaults for depreciation settings.
Actual values are loaded from the active ``fin_config`` policy at runtime.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Self

from fin_config.schema import DepreciationPolicy
from fin_engines.depreciation import (
    DEFAULT_MAX_USEFUL_LIFE,
    DEFAULT_MONEY_PLACES,
    DepreciationEngine,
    DepreciationMethod,
)
from fin_kernel.logging_config import get_logger
from fin_modules.assets.rates import (
    DECLINING_BALANCE_PRESETS,
    preset_factor,
    rate_to_factor,
)

logger = get_logger("modules.assets.config")


@dataclass
class AssetDepreciationConfig:
    """
    Configuration schema for the depreciation callers.

    Field defaults represent the FIN system's standing practice.
    Override at instantiation with company-specific values:

        config = AssetDepreciationConfig(
            default_method=DepreciationMethod.DECLINING_BALANCE,
            max_useful_life=40,
        )
    """

    default_method: DepreciationMethod = DepreciationMethod.STRAIGHT_LINE
    max_useful_life: int = DEFAULT_MAX_USEFUL_LIFE

    # Console menu / web form presets, in percent
    declining_balance_presets: tuple[Decimal, ...] = field(
        default_factory=lambda: DECLINING_BALANCE_PRESETS
    )
    rate_precision: int = 6
    money_places: int = DEFAULT_MONEY_PLACES

    def __post_init__(self):
        self.default_method = DepreciationMethod.parse(self.default_method)
        logger.info(
            "asset_depreciation_config_initialized",
            extra={
                "default_method": self.default_method.value,
                "max_useful_life": self.max_useful_life,
                "preset_count": len(self.declining_balance_presets),
                "rate_precision": self.rate_precision,
                "money_places": self.money_places,
            },
        )

    @property
    def rate_quantum(self) -> Decimal:
        """Quantum for rate-to-factor conversion, e.g. 0.000001."""
        return Decimal(1).scaleb(-self.rate_precision)

    @classmethod
    def with_defaults(cls) -> Self:
        """Create config with standing defaults."""
        logger.info("asset_depreciation_config_created_with_defaults")
        return cls()

    @classmethod
    def from_dict(cls, data: dict) -> Self:
        """Create config from dictionary (e.g., loaded from database/file)."""
        logger.info(
            "asset_depreciation_config_loading_from_dict",
            extra={"keys": sorted(data.keys())},
        )
        return cls(**data)

    @classmethod
    def from_policy(cls, policy: DepreciationPolicy) -> Self:
        """Create config from the active ``fin_config`` policy."""
        return cls(
            default_method=DepreciationMethod.parse(policy.default_method),
            max_useful_life=policy.max_useful_life,
            declining_balance_presets=policy.declining_balance_presets,
            rate_precision=policy.rate_precision,
            money_places=policy.money_places,
        )

    def build_engine(self) -> DepreciationEngine:
        """Engine honoring this configuration's useful-life ceiling and money precision."""
        return DepreciationEngine(
            max_useful_life=self.max_useful_life,
            money_places=self.money_places,
        )

    def factor_for_rate(self, rate_percent: Any) -> Decimal:
        return rate_to_factor(rate_percent, self.rate_quantum)

    def factor_for_preset(self, choice: int) -> Decimal:
        """Factor for a 1-based pick from this configuration's preset menu."""
        return preset_factor(choice, self.declining_balance_presets, self.rate_quantum)
