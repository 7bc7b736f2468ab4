"""
Web payload adapters for depreciation.

Maps the JSON body posted by the web calculator (``assetCost``,
``residualValue``, ``usefulLifeYears``, ``depreciationMethod``,
``depreciationRate``) to a ``DepreciationRequest`` and turns schedules and
errors back into JSON-ready dicts.  Amounts travel as strings so no
precision is lost to JSON floats.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from fin_engines.comparison import ComparisonReport
from fin_engines.depreciation import (
    ZERO_SALVAGE,
    DepreciationMethod,
    DepreciationRequest,
    DepreciationSchedule,
)
from fin_kernel.exceptions import FinKernelError, ValidationError
from fin_kernel.logging_config import get_logger
from fin_modules.assets.config import AssetDepreciationConfig
from fin_modules.assets.rates import rate_to_factor

logger = get_logger("modules.assets.payloads")


def _require(payload: Mapping[str, Any], key: str) -> Any:
    value = payload.get(key)
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"{key} is required", field=key)
    return value


def _optional(payload: Mapping[str, Any], key: str, default: Any) -> Any:
    value = payload.get(key)
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    return value


def request_from_payload(
    payload: Mapping[str, Any],
    config: AssetDepreciationConfig | None = None,
) -> DepreciationRequest:
    """
    Build a request from a web calculator body.

    ``depreciationMethod`` falls back to the configured default method.
    ``depreciationRate`` is a percentage and only read for declining
    balance.  FIN requests always carry zero salvage.

    Raises:
        ValidationError: on a missing key or unparsable value.
    """
    if payload.get("depreciationMethod") is None and config is not None:
        method = config.default_method
    else:
        method = DepreciationMethod.parse(_require(payload, "depreciationMethod"))
    cost = _require(payload, "assetCost")
    life = _require(payload, "usefulLifeYears")

    if method == DepreciationMethod.FIN:
        request = DepreciationRequest(cost, ZERO_SALVAGE, life, method)
    elif method == DepreciationMethod.DECLINING_BALANCE:
        rate = _require(payload, "depreciationRate")
        factor = config.factor_for_rate(rate) if config is not None else rate_to_factor(rate)
        request = DepreciationRequest(cost, _optional(payload, "residualValue", 0), life, method, factor)
    else:
        request = DepreciationRequest(cost, _optional(payload, "residualValue", 0), life, method)

    logger.debug("depreciation_payload_parsed", extra={
        "method": method.value,
        "keys": sorted(payload.keys()),
    })
    return request


def schedule_to_payload(schedule: DepreciationSchedule) -> dict[str, Any]:
    """camelCase, string-amount rendering of a schedule."""
    return {
        "method": schedule.method.value,
        "cost": str(schedule.cost),
        "salvageValue": str(schedule.salvage_value),
        "usefulLife": schedule.useful_life,
        "years": [
            {
                "year": y.year,
                "depreciation": str(y.depreciation),
                "cumulativeDepreciation": str(y.cumulative_depreciation),
                "bookValue": str(y.book_value),
            }
            for y in schedule.years
        ],
        "totalDepreciation": str(schedule.total_depreciation),
        "finalBookValue": str(schedule.final_book_value),
    }


def comparison_to_payload(report: ComparisonReport) -> dict[str, Any]:
    return {
        "straightLine": schedule_to_payload(report.straight_line),
        "decliningBalance": schedule_to_payload(report.declining_balance),
        "rows": [
            {
                "year": r.year,
                "straightLine": str(r.straight_line),
                "decliningBalance": str(r.declining_balance),
                "difference": str(r.difference),
            }
            for r in report.rows
        ],
        "totalDifference": str(report.total_difference),
        "crossoverYear": report.crossover_year,
    }


def error_to_payload(exc: FinKernelError) -> dict[str, Any]:
    """Body for a 400-equivalent response."""
    return {
        "error": exc.code,
        "message": str(exc),
        "field": getattr(exc, "field", None),
    }
