"""
Module: fin_engines
Responsibility:
    Package entrypoint that re-exports the public symbols of the pure
    depreciation engines.  This is the canonical import surface for
    higher layers (fin_modules, fin_config, web and console callers).

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import fin_kernel (and sibling engine modules).
    MUST NOT import fin_modules or fin_config.

Invariants enforced:
    - Purity: engines never read the clock or any external state.
    - Decimal-only arithmetic; floats are converted at the boundary.
    - Determinism: identical inputs always produce identical outputs.

Failure modes:
    - ValidationError propagated from the engines on invalid input.

Usage:
    from fin_engines import DepreciationEngine, DepreciationRequest
    from fin_engines import compare_methods, fin_rates
"""

from fin_engines.comparison import (
    ComparisonReport,
    ComparisonRow,
    build_comparison,
    compare_methods,
)
from fin_engines.depreciation import (
    DEFAULT_MAX_USEFUL_LIFE,
    DEFAULT_MONEY_PLACES,
    ZERO_SALVAGE,
    DecliningBalance,
    DepreciationBasis,
    DepreciationEngine,
    DepreciationMethod,
    DepreciationRequest,
    DepreciationSchedule,
    DepreciationYear,
    Fin,
    StraightLine,
    calculate,
    compare,
)
from fin_engines.fin_tables import (
    FIN_RATES,
    fin_rate,
    fin_rates,
    supported_fin_periods,
)
from fin_engines.tracer import compute_input_fingerprint, traced_engine

__all__ = [
    # Comparison
    "ComparisonReport",
    "ComparisonRow",
    "build_comparison",
    "compare_methods",
    # Depreciation
    "DEFAULT_MAX_USEFUL_LIFE",
    "DEFAULT_MONEY_PLACES",
    "ZERO_SALVAGE",
    "DecliningBalance",
    "DepreciationBasis",
    "DepreciationEngine",
    "DepreciationMethod",
    "DepreciationRequest",
    "DepreciationSchedule",
    "DepreciationYear",
    "Fin",
    "StraightLine",
    "calculate",
    "compare",
    # FIN tables
    "FIN_RATES",
    "fin_rate",
    "fin_rates",
    "supported_fin_periods",
    # Tracing
    "compute_input_fingerprint",
    "traced_engine",
]
