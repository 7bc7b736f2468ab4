"""
Typed Exception Hierarchy for the FIN Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Callers of the depreciation engine sit behind two very different
transports: a web controller that answers with a 400 response and a
console menu that re-prompts.  Both need to react to *which* input was
wrong without parsing message text, so:

  1. Every error has a TYPED exception class (catch by type, not message)
  2. Every exception has a CODE attribute (machine-readable, API-safe)
  3. Exceptions carry structured DATA (the offending field and value)

Example - WRONG way:
    try:
        engine.calculate(request)
    except Exception as e:
        if "recovery period" in str(e):  # FRAGILE
            reprompt_life()

Example - RIGHT way:
    try:
        engine.calculate(request)
    except ValidationError as e:
        reprompt(e.field)
        api_response(code=e.code, field=e.field, message=str(e))

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    FinKernelError (base)
    |
    +-- DepreciationError
        +-- ValidationError
            +-- UnsupportedRecoveryPeriodError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                          | When Raised
----------------|-------------------------------|---------------------------------------
Depreciation    | VALIDATION_ERROR              | Any precondition on cost, salvage,
                |                               | useful life, method or factor fails
                | UNSUPPORTED_RECOVERY_PERIOD   | FIN asked for a period other than 5/7

UnsupportedRecoveryPeriodError IS-A ValidationError: callers that only
care about "bad input" catch ValidationError and get both.

===============================================================================
DESIGN DECISIONS
===============================================================================

1. WHY INHERIT FROM Exception (not ValueError)?
   Domain exceptions should be catchable as a group without also catching
   programming errors raised by ``Decimal`` or ``int()``.

2. WHY code CLASS ATTRIBUTE?
   Codes are static per exception type, readable without instantiation.

===============================================================================
"""

from typing import Any


class FinKernelError(Exception):
    """
    Base exception for all FIN kernel errors.

    All subclasses must have a ``code`` class attribute for
    machine-readable error identification.
    """

    code: str = "FIN_KERNEL_ERROR"


class DepreciationError(FinKernelError):
    """Base exception for depreciation calculation errors."""

    code: str = "DEPRECIATION_ERROR"


class ValidationError(DepreciationError):
    """A depreciation input failed a precondition.

    Raised before any arithmetic happens; a calculation never fails
    half-way.
    """

    code: str = "VALIDATION_ERROR"

    def __init__(self, message: str, field: str | None = None, value: Any = None):
        self.field = field
        self.value = value
        super().__init__(message)


class UnsupportedRecoveryPeriodError(ValidationError):
    """FIN method requested with a recovery period that has no rate table."""

    code: str = "UNSUPPORTED_RECOVERY_PERIOD"

    def __init__(self, recovery_period: int, supported: tuple[int, ...] = (5, 7)):
        self.recovery_period = recovery_period
        self.supported = supported
        periods = " or ".join(str(p) for p in supported)
        super().__init__(
            f"FIN method only supports {periods} year recovery periods",
            field="useful_life",
            value=recovery_period,
        )
