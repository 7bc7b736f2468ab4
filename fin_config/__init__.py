"""
fin_config -- single public entrypoint for depreciation configuration.

Responsibility:
    Provides the way to obtain depreciation settings at runtime through
    ``get_active_policy()``.  YAML loading is internal tooling; callers
    receive a frozen ``DepreciationPolicy``.

Architecture position:
    Configuration -- sits above ``fin_kernel`` / ``fin_engines`` and below
    ``fin_modules``.  The engines MUST NEVER import from ``fin_config``;
    ``fin_modules.assets.config`` translates a policy into engine
    parameters.

Failure modes:
    - ``FileNotFoundError`` -- the requested policy file does not exist.
    - ``ValueError`` / ``KeyError`` -- schema or value errors.
    - ``yaml.YAMLError`` -- malformed YAML.

Audit relevance:
    Every successful ``get_active_policy()`` call emits a
    ``FIN_CONFIG_TRACE`` log entry with policy id, version and checksum,
    tying each calculation batch to the settings that governed it.
"""

from __future__ import annotations

from pathlib import Path

from fin_config.loader import compute_checksum, load_yaml_file, parse_policy
from fin_config.schema import DepreciationPolicy
from fin_kernel.logging_config import get_logger

_logger = get_logger("config")

DEFAULT_POLICY_PATH = Path(__file__).parent / "policies" / "depreciation.yaml"


def get_active_policy(path: Path | None = None) -> DepreciationPolicy:
    """Load, parse and trace the depreciation policy.

    Args:
        path: Override policy file.  Defaults to
            ``fin_config/policies/depreciation.yaml``.

    Raises:
        FileNotFoundError: If the policy file does not exist.
        KeyError / ValueError: If the policy content is invalid.
    """
    policy_path = Path(path) if path is not None else DEFAULT_POLICY_PATH
    policy = parse_policy(load_yaml_file(policy_path))

    _logger.info(
        "FIN_CONFIG_TRACE",
        extra={
            "trace_type": "FIN_CONFIG_TRACE",
            "policy_id": policy.policy_id,
            "policy_version": policy.version,
            "checksum": policy.checksum,
            "source": str(policy_path),
        },
    )
    return policy


__all__ = [
    "DEFAULT_POLICY_PATH",
    "DepreciationPolicy",
    "compute_checksum",
    "get_active_policy",
    "load_yaml_file",
    "parse_policy",
]
