"""Prometheus metrics for dependency analysis."""

from prometheus_client import Counter, Gauge, Histogram

ANALYSIS_RUNS = Counter(
    "taskgraph_analysis_runs_total",
    "Total number of dependency analysis runs",
    ["operation"],
)

ANALYSIS_DURATION = Histogram(
    "taskgraph_analysis_duration_seconds",
    "Time spent in a dependency analysis operation",
    ["operation"],
    buckets=[0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0],
)

CYCLES_DETECTED = Counter(
    "taskgraph_cycles_detected_total",
    "Total number of snapshots found to contain a circular dependency",
)

CRITICAL_TASKS = Gauge(
    "taskgraph_critical_tasks",
    "Number of critical tasks in the most recently analysed snapshot",
)
