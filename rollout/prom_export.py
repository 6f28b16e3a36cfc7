from __future__ import annotations

import threading
from dataclasses import dataclass


DECISIONS_TOTAL = "rollout.decisions_total"
INSIDE_TOTAL = "rollout.inside_total"
OUTSIDE_TOTAL = "rollout.outside_total"
INVALID_INPUT_TOTAL = "rollout.invalid_input_total"
DEFAULT_FRACTION_PCT = "rollout.default_fraction_pct"


@dataclass(frozen=True, slots=True)
class MetricSpec:
    kind: str  # counter | gauge
    help: str


ROLLOUT_METRICS: dict[str, MetricSpec] = {
    DECISIONS_TOTAL: MetricSpec("counter", "Rollout membership decisions made."),
    INSIDE_TOTAL: MetricSpec("counter", "Decisions that placed the identifier inside the rollout."),
    OUTSIDE_TOTAL: MetricSpec("counter", "Decisions that placed the identifier outside the rollout."),
    INVALID_INPUT_TOTAL: MetricSpec("counter", "Calls rejected with InvalidInput."),
    DEFAULT_FRACTION_PCT: MetricSpec("gauge", "Configured default rollout fraction, in percent."),
}


def _prom_name(name: str) -> str:
    # Prometheus does not allow '.' in metric names.
    return (name or "").replace(".", "_")


class PromExporter:
    """
    Prometheus text exporter for the rollout metric catalog.

    Catalog counters render as 0 from the first scrape; gauges appear once set. Names
    outside the catalog are accepted and rendered without a HELP line.
    """

    def __init__(self, *, catalog: dict[str, MetricSpec] | None = None) -> None:
        self._lock = threading.Lock()
        self._catalog = dict(ROLLOUT_METRICS if catalog is None else catalog)
        self._values: dict[str, int] = {
            name: 0 for name, spec in self._catalog.items() if spec.kind == "counter"
        }
        self._kinds: dict[str, str] = {name: spec.kind for name, spec in self._catalog.items()}

    def inc(self, name: str, value: int = 1) -> None:
        with self._lock:
            self._kinds.setdefault(name, "counter")
            self._values[name] = self._values.get(name, 0) + int(value)

    def set(self, name: str, value: int) -> None:
        with self._lock:
            self._kinds.setdefault(name, "gauge")
            self._values[name] = int(value)

    def value(self, name: str) -> int:
        with self._lock:
            return self._values.get(name, 0)

    def render(self) -> str:
        lines: list[str] = []
        with self._lock:
            for name in sorted(self._values.keys()):
                prom = _prom_name(name)
                spec = self._catalog.get(name)
                if spec is not None:
                    lines.append(f"# HELP {prom} {spec.help}")
                lines.append(f"# TYPE {prom} {self._kinds[name]}")
                lines.append(f"{prom} {self._values[name]}")
        return "\n".join(lines) + "\n"


GLOBAL_PROM = PromExporter()
