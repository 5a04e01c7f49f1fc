# 📊 Prometheus instruments for the allocation controller

from prometheus_client import Counter, Gauge, Histogram

DECISIONS_TOTAL = Counter(
    "allocation_decisions_total",
    "Scaling decisions produced",
    ["action", "priority"],
)

DECISION_LATENCY = Histogram(
    "allocation_decision_seconds",
    "Time taken to assess a snapshot and produce a decision",
)

UTILIZATION_LEVEL = Gauge(
    "allocation_utilization_level",
    "Rank of the last assessed utilization level (0=low, 3=critical)",
)

BOTTLENECKS_TOTAL = Counter(
    "allocation_bottlenecks_total",
    "Bottlenecks reported by the utilization assessor",
    ["bottleneck"],
)

POOL_SIZE = Gauge(
    "allocation_pool_size",
    "Recommended database connection pool envelope",
    ["bound"],
)

CACHE_BUDGET_MB = Gauge(
    "allocation_cache_budget_mb",
    "Memory budget assigned to each cache category",
    ["cache_type"],
)
