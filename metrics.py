"""Prometheus textfile export of the suite's session summary.

A fresh CollectorRegistry is built per write so repeated in-process runs never
see gauges left over from a previous session.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from pathlib import Path

from prometheus_client import CollectorRegistry, Gauge, generate_latest

METRIC_PREFIX = "todo_e2e"

# SessionMetrics field -> (metric suffix, help text)
_GAUGES = {
    "total": ("scenarios_total", "Scenarios collected"),
    "passed": ("scenarios_passed", "Scenarios passed"),
    "failed": ("scenarios_failed", "Scenarios failed, soft-assertion failures included"),
    "skipped": ("scenarios_skipped", "Scenarios skipped"),
    "flaky": ("scenarios_flaky", "Scenarios that needed reruns"),
    "soft_failures": ("soft_assertions_failed", "Failed soft assertions across the session"),
    "duration_seconds": ("session_duration_seconds", "Total pytest session duration in seconds"),
}


@dataclass(frozen=True)
class SessionMetrics:
    """Aggregate counters exported at pytest session finish."""

    total: int
    passed: int
    failed: int
    skipped: int
    duration_seconds: float
    flaky: int = 0
    soft_failures: int = 0


def build_registry(summary: SessionMetrics) -> CollectorRegistry:
    registry = CollectorRegistry()
    for field_name, value in asdict(summary).items():
        suffix, help_text = _GAUGES[field_name]
        Gauge(f"{METRIC_PREFIX}_{suffix}", help_text, registry=registry).set(value)
    return registry


def write_metrics(path: str, summary: SessionMetrics) -> None:
    """Write metrics atomically to the Prometheus textfile collector path."""

    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    # Write-then-rename so the collector never scrapes a half-written file.
    tmp_path = target.with_suffix(f"{target.suffix}.tmp")
    tmp_path.write_bytes(generate_latest(build_registry(summary)))
    tmp_path.replace(target)
