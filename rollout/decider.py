from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Optional, Protocol

from .canary import BUCKETS, Identifier, RolloutFraction, bucket_value, rollout_threshold
from .config import RolloutConfig
from .errors import InvalidInput
from .prom_export import DECISIONS_TOTAL, INSIDE_TOTAL, INVALID_INPUT_TOTAL, OUTSIDE_TOTAL


class MetricsSink(Protocol):
    def inc(self, name: str, value: int = 1) -> None: ...


@dataclass(frozen=True, slots=True)
class RolloutDecision:
    bucket: int
    fraction: float
    inside: bool


class RolloutDecider:
    """
    Percentage-rollout membership with metrics and optional JSON decision logs.

    Holds no per-identifier state; a single instance can serve every caller. The
    identifier is never written to logs, only its bucket.
    """

    def __init__(self, *, metrics: Optional[MetricsSink] = None, structured_logging: bool = False) -> None:
        self._metrics = metrics
        self._structured_logging = bool(structured_logging)

    @classmethod
    def from_config(cls, cfg: RolloutConfig, *, metrics: Optional[MetricsSink] = None) -> "RolloutDecider":
        return cls(
            metrics=metrics if cfg.metrics_enabled else None,
            structured_logging=cfg.structured_logging,
        )

    def decide(self, identifier: Identifier, fraction: RolloutFraction) -> RolloutDecision:
        try:
            threshold = rollout_threshold(fraction)
            bucket = bucket_value(identifier)
        except InvalidInput as e:
            self._inc(INVALID_INPUT_TOTAL)
            self._log("rollout_invalid_input", error=str(e))
            raise

        inside = bucket < threshold
        f = float(threshold / BUCKETS)
        self._inc(DECISIONS_TOTAL)
        self._inc(INSIDE_TOTAL if inside else OUTSIDE_TOTAL)
        self._log("rollout_decision", bucket=bucket, fraction=f, inside=inside)
        return RolloutDecision(bucket=bucket, fraction=f, inside=inside)

    def is_in_rollout(self, identifier: Identifier, fraction: RolloutFraction) -> bool:
        return self.decide(identifier, fraction).inside

    def _inc(self, name: str) -> None:
        if self._metrics is not None:
            self._metrics.inc(name)

    def _log(self, event: str, **payload: object) -> None:
        if not self._structured_logging:
            return
        base: dict[str, object] = {"component": "rollout_decider", "event": event}
        base.update(payload)
        print(json.dumps(base, sort_keys=True, separators=(",", ":")))
