"""Prometheus metrics for fan-out orchestration."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

fanout_orchestrations_total = Counter(
    "fanout_orchestrations_total",
    "Total orchestration runs",
    ["operation", "status"],  # success, failure
)

fanout_downstream_calls_total = Counter(
    "fanout_downstream_calls_total",
    "Total downstream calls by outcome",
    ["resource", "outcome"],  # success, transport_failure, remote_failure, cancelled
)

fanout_orchestration_duration_seconds = Histogram(
    "fanout_orchestration_duration_seconds",
    "Wall time of one orchestration, dispatch to aggregation",
    ["operation"],
    buckets=[0.05, 0.1, 0.25, 0.5, 0.75, 1.0, 2.5, 5.0],
)


__all__ = [
    "fanout_orchestrations_total",
    "fanout_downstream_calls_total",
    "fanout_orchestration_duration_seconds",
]
