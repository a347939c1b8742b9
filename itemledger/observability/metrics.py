"""Prometheus metrics for itemledger."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

invocations_total = Counter(
    "itemledger_invocations_total",
    "Contract invocations by function and outcome",
    ["function", "outcome"],
)

invocation_duration_seconds = Histogram(
    "itemledger_invocation_duration_seconds",
    "Wall-clock duration of contract invocations",
    ["function"],
    buckets=(0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0),
)
