"""
Monitoring for the DMN simulator.

- Health check: engine configuration status
- Metrics: in-process request counters (nothing is persisted)
- Used by /api/health and /api/metrics
"""

import logging
import threading
import time
from typing import Any

from simulator import config
from simulator.errors import EngineUnavailableError
from simulator.services.engine import load_engine_factory

logger = logging.getLogger(__name__)

_STARTED_AT = time.time()
_lock = threading.Lock()
_counters: dict[str, int] = {}

COUNTER_NAMES = (
    "documents_parsed",
    "parse_failures",
    "evaluations_completed",
    "evaluations_failed",
    "rules_matched",
)


def record(name: str, amount: int = 1) -> None:
    """Increment a named counter."""
    with _lock:
        _counters[name] = _counters.get(name, 0) + amount


def reset_metrics() -> None:
    with _lock:
        _counters.clear()


def check_engine() -> tuple[bool, str]:
    """Check the configured engine factory can be imported. Does not build an engine."""
    try:
        load_engine_factory(config.ENGINE_FACTORY_PATH)
        return True, config.ENGINE_FACTORY_PATH or ""
    except EngineUnavailableError as e:
        return False, str(e)


def get_health() -> dict[str, Any]:
    """Return health status for /api/health. Parsing works without an engine."""
    engine_ok, engine_msg = check_engine()
    return {
        "status": "healthy",
        "checks": {
            "parser": {"status": "up", "message": "ok"},
            "engine": {"status": "configured" if engine_ok else "not_configured", "message": engine_msg},
        },
    }


def get_metrics() -> dict[str, Any]:
    """Snapshot of the request counters for /api/metrics."""
    with _lock:
        counts = {name: _counters.get(name, 0) for name in COUNTER_NAMES}
    evaluations = counts["evaluations_completed"] + counts["evaluations_failed"]
    return {
        **counts,
        "evaluation_failure_rate_percent": (
            round(counts["evaluations_failed"] / evaluations * 100, 1) if evaluations else None
        ),
        "uptime_sec": round(time.time() - _STARTED_AT, 1),
    }
