"""
Configuration Loader (``fin_config.loader``).

Responsibility
--------------
Loads YAML policy files and parses them into the frozen
``fin_config.schema.DepreciationPolicy``.  Runtime callers go through
``fin_config.get_active_policy()`` rather than calling this directly.

Invariants enforced
-------------------
* Parse errors raise ``ValueError`` or ``KeyError`` with descriptive
  messages; no silent defaults for required fields.
* Every parsed object is a frozen dataclass from ``schema.py``.
* ``compute_checksum`` produces a deterministic SHA-256 hash for
  configuration identity and change detection.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing ``policy_id`` / ``version``  -> ``KeyError`` propagates.
* Out-of-range or non-numeric values  -> ``ValueError``.
"""

from __future__ import annotations

import hashlib
import json
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

import yaml

from fin_config.schema import DepreciationPolicy
from fin_engines.depreciation import DepreciationMethod
from fin_kernel.exceptions import ValidationError


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
        ValueError: if the document root is not a mapping.
    """
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root type in {path}, expected a mapping.")
    return data


def _positive_int(data: dict[str, Any], key: str, default: int) -> int:
    raw = data.get(key, default)
    if isinstance(raw, bool) or not isinstance(raw, int) or raw < 1:
        raise ValueError(f"{key} must be a positive integer, got {raw!r}")
    return raw


def _parse_presets(raw: Any) -> tuple[Decimal, ...]:
    if not isinstance(raw, list) or not raw:
        raise ValueError("declining_balance_presets must be a non-empty list")
    presets = []
    for item in raw:
        try:
            rate = Decimal(str(item))
        except InvalidOperation as e:
            raise ValueError(f"Invalid declining balance preset: {item!r}") from e
        if rate <= 0 or rate >= 100:
            raise ValueError(f"Declining balance preset out of range (0, 100): {item!r}")
        presets.append(rate)
    return tuple(presets)


def parse_policy(data: dict[str, Any]) -> DepreciationPolicy:
    """
    Parse a ``DepreciationPolicy`` from a dict.

    Preconditions:
        - ``data`` contains ``policy_id`` and ``version``; the
          ``depreciation`` section is optional.
    Postconditions:
        - Returns a frozen policy whose ``checksum`` covers ``data``.
    Raises:
        KeyError: if required keys are missing.
        ValueError: if a value is out of range or not parseable.
    """
    section = data.get("depreciation") or {}
    if not isinstance(section, dict):
        raise ValueError("depreciation section must be a mapping")

    method_raw = section.get("default_method", "straight_line")
    try:
        default_method = DepreciationMethod.parse(method_raw).value
    except ValidationError as e:
        raise ValueError(str(e)) from e

    presets_raw = section.get("declining_balance_presets")
    kwargs: dict[str, Any] = {}
    if presets_raw is not None:
        kwargs["declining_balance_presets"] = _parse_presets(presets_raw)

    return DepreciationPolicy(
        policy_id=str(data["policy_id"]),
        version=int(data["version"]),
        default_method=default_method,
        max_useful_life=_positive_int(section, "max_useful_life", 50),
        rate_precision=_positive_int(section, "rate_precision", 6),
        money_places=_positive_int(section, "money_places", 2),
        checksum=compute_checksum(data),
        **kwargs,
    )


def compute_checksum(data: dict[str, Any]) -> str:
    """
    Compute SHA-256 checksum of canonical JSON serialization.

    Postconditions:
        - Returns a hex-encoded SHA-256 hash string.
        - Identical ``data`` always produces identical checksums
          (deterministic), whatever the key order.
    """
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()
