from __future__ import annotations

from rollout.prom_export import MetricSpec, PromExporter


def test_prom_export_declares_catalog_counters_at_zero() -> None:
    text = PromExporter().render()
    assert "# HELP rollout_decisions_total Rollout membership decisions made." in text
    assert "# TYPE rollout_decisions_total counter" in text
    assert "rollout_decisions_total 0" in text
    assert "rollout_invalid_input_total 0" in text
    # Gauges only appear once set.
    assert "rollout_default_fraction_pct" not in text


def test_prom_export_renders_counters_and_gauges() -> None:
    exp = PromExporter()
    exp.inc("rollout.decisions_total", 2)
    exp.inc("rollout.inside_total")
    exp.set("rollout.default_fraction_pct", 30)

    text = exp.render()
    assert "rollout_decisions_total 2" in text
    assert "rollout_inside_total 1" in text
    assert "# HELP rollout_default_fraction_pct Configured default rollout fraction, in percent." in text
    assert "# TYPE rollout_default_fraction_pct gauge" in text
    assert "rollout_default_fraction_pct 30" in text
    assert "rollout.decisions_total" not in text
    assert exp.value("rollout.default_fraction_pct") == 30


def test_prom_export_accepts_names_outside_catalog() -> None:
    exp = PromExporter(catalog={"demo.hits_total": MetricSpec("counter", "Demo hits.")})
    exp.inc("demo.hits_total")
    exp.set("demo.level", 4)

    text = exp.render()
    assert "# HELP demo_hits_total Demo hits." in text
    assert "demo_hits_total 1" in text
    assert "# HELP demo_level" not in text
    assert "# TYPE demo_level gauge" in text
    assert "demo_level 4" in text
    assert "rollout_decisions_total" not in text
    assert exp.value("missing") == 0
