"""
FIN Kernel

Shared infrastructure for the FIN depreciation engines:
- Structured JSON logging with request-scoped context
- Typed, code-carrying exceptions
- Decimal money rounding (2 places, ROUND_HALF_UP)
"""

__version__ = "0.1.0"
