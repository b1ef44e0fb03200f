"""Prometheus metrics definitions for versionkeeper.

All custom metrics use the ``versionkeeper_`` prefix for namespace
isolation. The module-level references stay ``None`` until
``init_metrics()`` runs, so the decision code can be used (and tested)
without touching the global collector registry.
"""

from __future__ import annotations

from prometheus_client import Counter

# Flag indicating whether metrics have been initialised via init_metrics().
_initialized: bool = False

# ---------------------------------------------------------------------------
# Versioning decisions  (labels: operation, branch)
# ---------------------------------------------------------------------------
decisions_total: Counter | None = None

# ---------------------------------------------------------------------------
# Null version cleanup  (labels: outcome)
# ---------------------------------------------------------------------------
null_version_cleanups_total: Counter | None = None


def init_metrics() -> None:
    """Create and register all Prometheus metrics.

    Safe to call more than once; only the first call registers collectors.
    """
    global _initialized
    global decisions_total, null_version_cleanups_total

    if _initialized:
        return

    decisions_total = Counter(
        "versionkeeper_decisions_total",
        "Versioning decisions by operation and branch taken",
        ["operation", "branch"],
    )

    null_version_cleanups_total = Counter(
        "versionkeeper_null_version_cleanups_total",
        "Null version metadata deletions by outcome",
        ["outcome"],
    )

    _initialized = True


def record_decision(operation: str, branch: str) -> None:
    """Count one versioning decision, if metrics are enabled."""
    if decisions_total is not None:
        decisions_total.labels(operation=operation, branch=branch).inc()


def record_cleanup(outcome: str) -> None:
    """Count one null version cleanup attempt, if metrics are enabled."""
    if null_version_cleanups_total is not None:
        null_version_cleanups_total.labels(outcome=outcome).inc()
