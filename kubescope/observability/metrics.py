"""Prometheus metrics for the listing engine.

Label sets are kept small and bounded: resource names and namespaces are
deliberately not used as labels.
"""

from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram

list_pages_total = Counter(
    "kubescope_list_pages_total",
    "List page requests by outcome",
    ["outcome"],  # ok | forbidden | not_found | error
)

forbidden_suppressed_total = Counter(
    "kubescope_forbidden_suppressed_total",
    "Forbidden list results suppressed by the aggregator",
    ["scope"],  # cluster | namespace
)

list_duration_seconds = Histogram(
    "kubescope_list_duration_seconds",
    "Wall-clock duration of one aggregated list call",
    buckets=(0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0),
)

resources_discovered = Gauge(
    "kubescope_resources_discovered",
    "Listable API resources found by the last catalog fetch",
)
