"""
Pytest fixtures for the FIN depreciation test suite.

Provides:
- Structured logging configured once per session
- LogContext isolation between tests
- Captured JSON log records
- A default engine and the canonical example requests
"""

import json
import logging
from decimal import Decimal
from io import StringIO

import pytest

from fin_engines.depreciation import (
    DepreciationEngine,
    DepreciationMethod,
    DepreciationRequest,
)
from fin_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture fin_kernel records as parsed JSON dicts.

    Call with a message to keep only matching records::

        def test_trace(captured_logs, engine, straight_line_request):
            engine.calculate(straight_line_request)
            (trace,) = captured_logs("FIN_ENGINE_TRACE")
    """
    buffer = StringIO()
    capture = logging.StreamHandler(buffer)
    capture.setFormatter(StructuredFormatter())
    root = logging.getLogger("fin_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(capture)

    def _records(message: str | None = None) -> list[dict]:
        parsed = [json.loads(line) for line in buffer.getvalue().splitlines() if line]
        if message is None:
            return parsed
        return [r for r in parsed if r["message"] == message]

    yield _records

    root.removeHandler(capture)
    root.setLevel(previous_level)


# =============================================================================
# Engine fixtures
# =============================================================================


@pytest.fixture
def engine() -> DepreciationEngine:
    return DepreciationEngine()


@pytest.fixture
def straight_line_request() -> DepreciationRequest:
    """100,000 asset, 10,000 salvage, 5 years."""
    return DepreciationRequest(
        cost=Decimal("100000"),
        salvage_value=Decimal("10000"),
        useful_life=5,
        method=DepreciationMethod.STRAIGHT_LINE,
    )


@pytest.fixture
def declining_balance_request() -> DepreciationRequest:
    """50,000 asset, 5,000 salvage, 4 years at 25%."""
    return DepreciationRequest(
        cost=Decimal("50000"),
        salvage_value=Decimal("5000"),
        useful_life=4,
        method=DepreciationMethod.DECLINING_BALANCE,
        db_factor=Decimal("0.25"),
    )
