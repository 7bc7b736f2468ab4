"""
FIN Modules.

Thin glue between the FIN engines and their callers.
Each module contains:
- Single-period helper formulas the callers use directly
- Configuration schemas (policy and settings)
- Adapters that turn caller input into engine values and back

Modules:
- Assets: fixed-asset depreciation inputs, presets and payloads

Actual calculation logic lives in fin_engines.
"""

from fin_modules import assets

__all__ = ["assets"]
