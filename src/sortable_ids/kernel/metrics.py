"""
Prometheus metrics collection for Sortable IDs.

Provides observability into generation throughput, sequence pressure and clock health.
"""

import time
from collections.abc import Callable
from functools import wraps
from typing import ParamSpec, TypeVar

from prometheus_client import Counter, Histogram, start_http_server

# ============================================================================
# Generation Metrics
# ============================================================================

ids_generated_total = Counter(
    "sortable_ids_generated_total",
    "Total number of identifiers generated",
    ["scheme"],
)

generate_duration_seconds = Histogram(
    "sortable_ids_generate_duration_seconds",
    "Duration of a single generate call in seconds",
    ["scheme"],
    buckets=(0.000001, 0.000005, 0.00001, 0.00005, 0.0001, 0.0005, 0.001, 0.005),
)

# ============================================================================
# Sequencer Health Metrics
# ============================================================================

sequence_overflow_waits_total = Counter(
    "sortable_ids_sequence_overflow_waits_total",
    "Total number of times the sequence wrapped and waited for the next millisecond",
    ["scheme"],
)

clock_regressions_total = Counter(
    "sortable_ids_clock_regressions_total",
    "Total number of generate calls refused because the clock moved backwards",
    ["scheme"],
)

# ============================================================================
# Parsing Metrics
# ============================================================================

parse_failures_total = Counter(
    "sortable_ids_parse_failures_total",
    "Total number of rejected parse attempts",
    ["scheme"],
)

# ============================================================================
# Helper Functions
# ============================================================================

P = ParamSpec("P")
R = TypeVar("R")


def track_generation(scheme: str) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """
    Decorator to count generated identifiers and time each call.

    Failed calls are timed but not counted as generated.

    Args:
        scheme: Identifier scheme label ("snowflake" or "uuid7")
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            finally:
                generate_duration_seconds.labels(scheme=scheme).observe(
                    time.perf_counter() - start
                )
            ids_generated_total.labels(scheme=scheme).inc()
            return result

        return wrapper

    return decorator


def start_metrics_server(port: int = 9090) -> None:
    """
    Start Prometheus metrics HTTP server.

    Args:
        port: Port to listen on (default: 9090)
    """
    start_http_server(port)
