from __future__ import annotations

import math
import os
from dataclasses import dataclass
from typing import Optional


_TRUTHY = {"1", "true", "t", "yes", "y", "on"}
_FALSY = {"0", "false", "f", "no", "n", "off"}


def _env(name: str) -> Optional[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return raw.strip()


def _parse_flag(raw: Optional[str], default: bool) -> bool:
    if raw is None:
        return default
    value = raw.lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    return default


def _parse_default_fraction(raw: Optional[str]) -> float:
    """Lenient: unparsable or NaN values give 0.0, everything else is clamped into [0, 1]."""
    if raw is None:
        return 0.0
    try:
        value = float(raw)
    except ValueError:
        return 0.0
    if math.isnan(value):
        return 0.0
    return max(0.0, min(1.0, value))


@dataclass(frozen=True, slots=True)
class RolloutConfig:
    # Used by POST /rollout/decide when the body has no "fraction".
    default_fraction: float = 0.0

    # Observability
    structured_logging: bool = False
    metrics_enabled: bool = True

    @staticmethod
    def from_env() -> "RolloutConfig":
        return RolloutConfig(
            default_fraction=_parse_default_fraction(_env("ROLLOUT_DEFAULT_FRACTION")),
            structured_logging=_parse_flag(_env("ROLLOUT_STRUCTURED_LOGGING"), False),
            metrics_enabled=_parse_flag(_env("ROLLOUT_METRICS_ENABLED"), True),
        )
