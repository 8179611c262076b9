from prometheus_client import (
    Counter,
    Histogram,
    generate_latest,
    CONTENT_TYPE_LATEST,
)

# ---------------------------------------------------------------------------
# Optimization outcomes
# ---------------------------------------------------------------------------
lcp_optimizations_total = Counter(
    "lcp_optimizations_total",
    "Pages passed through the LCP optimizer, by outcome",
    ["outcome"],
)
lcp_exclusions_total = Counter(
    "lcp_exclusions_total",
    "Lazy-load exclusion computations, by outcome",
    ["outcome"],
)

# ---------------------------------------------------------------------------
# Metadata lookups
# ---------------------------------------------------------------------------
metadata_lookup_duration_seconds = Histogram(
    "metadata_lookup_duration_seconds",
    "Time spent fetching an above-the-fold metadata row",
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1],
)


def get_metrics() -> bytes:
    """Generate Prometheus metrics output."""
    return generate_latest()


def get_metrics_content_type() -> str:
    return CONTENT_TYPE_LATEST
