"""
Prometheus metric definitions  +  /metrics route (multiprocess-ready)
--------------------------------------------------------------------
• PROMETHEUS_MULTIPROC_DIR=<dir> set: aggregate the .db files written by
  every API process through the multiprocess collector
• otherwise the default global registry is used
"""

import os

from fastapi import APIRouter, Response
from prometheus_client import (
    Counter,
    Histogram,
    generate_latest,
    CollectorRegistry,
    multiprocess,
)

from stepcheck.config import ENABLE_PROMETHEUS

router = APIRouter()

# ────────── Registry ───────────────────────────────────────
if os.getenv("PROMETHEUS_MULTIPROC_DIR"):
    _REGISTRY: CollectorRegistry | None = CollectorRegistry()
    multiprocess.MultiProcessCollector(_REGISTRY)
else:
    _REGISTRY = None  # default global registry
# ───────────────────────────────────────────────────────────

# ────────── Metric definitions ─────────────────────────────
validation_runs = Counter(
    "validation_runs_total",
    "Definition validation runs",
    registry=_REGISTRY,
)

validation_issues = Counter(
    "validation_issues_total",
    "Issues reported by validation runs",
    ["severity"],
    registry=_REGISTRY,
)

validation_parse_failures = Counter(
    "validation_parse_failures_total",
    "Validation runs on text that does not parse",
    registry=_REGISTRY,
)

validation_duration = Histogram(
    "validation_duration_seconds",
    "Parse + validate + locate duration (seconds)",
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1),
    registry=_REGISTRY,
)
# ───────────────────────────────────────────────────────────


def record_run(error_count: int, warning_count: int, parse_failed: bool, seconds: float) -> None:
    if not ENABLE_PROMETHEUS:
        return
    validation_runs.inc()
    validation_duration.observe(seconds)
    if parse_failed:
        validation_parse_failures.inc()
        return
    validation_issues.labels(severity="error").inc(error_count)
    validation_issues.labels(severity="warning").inc(warning_count)


# ────────── /metrics endpoint ──────────────────────────────
if ENABLE_PROMETHEUS:
    @router.get("/metrics")
    def metrics() -> Response:
        """Prometheus scrape endpoint."""
        return Response(
            generate_latest(_REGISTRY) if _REGISTRY is not None else generate_latest(),
            media_type="text/plain",
        )
