"""
fin_engines.tracer -- FIN_ENGINE_TRACE records for engine calls.

Responsibility:
    ``@traced_engine`` wraps a pure calculation and logs one
    ``FIN_ENGINE_TRACE`` record per call: which engine and version ran,
    a fingerprint of the inputs that determine its output, how long it
    took and whether it returned or raised.

Architecture position:
    Engines -- support code for the calculation layer.  The only side
    effect is the log record; arguments and results pass through
    untouched.

Invariants enforced:
    - The fingerprint depends only on argument values: dataclass fields
      and dict keys are visited in sorted order, Decimals keep their
      exponent (``1.50`` and ``1.5`` differ), enums contribute their value.
    - Positional and keyword spellings of the same call fingerprint alike.

Failure modes:
    - Exceptions from the engine propagate unchanged after a trace with
      ``outcome="error"`` is logged.

Audit relevance:
    Two traces with the same engine version and fingerprint must describe
    the same schedule; a mismatch on replay means the engine changed.
"""

from __future__ import annotations

import dataclasses
import functools
import hashlib
import inspect
import time
from collections.abc import Callable, Mapping
from decimal import Decimal
from enum import Enum
from typing import Any

from fin_kernel.logging_config import get_logger

_logger = get_logger("engines.tracer")

TRACE_TYPE = "FIN_ENGINE_TRACE"


def _canonicalize(value: Any) -> str:
    """Stable text form of an argument value for hashing."""
    match value:
        case None:
            return "null"
        case Enum():
            return str(value.value)
        case bool() | int() | float() | Decimal() | str():
            return str(value)
        case _ if dataclasses.is_dataclass(value) and not isinstance(value, type):
            return _canonical_mapping(
                {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}
            )
        case Mapping():
            return _canonical_mapping(value)
        case list() | tuple():
            return "[" + ",".join(_canonicalize(v) for v in value) + "]"
        case _:
            return str(value)


def _canonical_mapping(mapping: Mapping[Any, Any]) -> str:
    keys = sorted(mapping, key=str)
    return "{" + ",".join(f"{k}:{_canonicalize(mapping[k])}" for k in keys) + "}"


def compute_input_fingerprint(
    fingerprint_fields: tuple[str, ...],
    arguments: Mapping[str, Any],
) -> str:
    """
    SHA-256 over ``name=value`` for each selected argument, first 16 hex chars.

    Names not present in ``arguments`` hash as ``null``.
    """
    digest = hashlib.sha256()
    for name in fingerprint_fields:
        digest.update(f"{name}={_canonicalize(arguments.get(name))};".encode("utf-8"))
    return digest.hexdigest()[:16]


def traced_engine(
    engine_name: str,
    engine_version: str,
    fingerprint_fields: tuple[str, ...] = (),
) -> Callable:
    """
    Decorator logging a ``FIN_ENGINE_TRACE`` for every call of ``func``.

    Args:
        engine_name: e.g. ``"depreciation"``.
        engine_version: bump whenever the output for a given input changes.
        fingerprint_fields: parameter names whose values feed the fingerprint.
    """

    def decorator(func: Callable) -> Callable:
        signature = inspect.signature(func)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            fingerprint = ""
            if fingerprint_fields:
                arguments = signature.bind_partial(*args, **kwargs).arguments
                fingerprint = compute_input_fingerprint(fingerprint_fields, arguments)

            trace = {
                "trace_type": TRACE_TYPE,
                "engine_name": engine_name,
                "engine_version": engine_version,
                "input_fingerprint": fingerprint,
                "function": func.__qualname__,
            }
            started = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as exc:
                trace["outcome"] = "error"
                trace["error_type"] = type(exc).__name__
                trace["duration_ms"] = round((time.perf_counter() - started) * 1000, 3)
                _logger.warning(TRACE_TYPE, extra=trace)
                raise

            trace["outcome"] = "ok"
            trace["duration_ms"] = round((time.perf_counter() - started) * 1000, 3)
            _logger.info(TRACE_TYPE, extra=trace)
            return result

        return wrapper

    return decorator
