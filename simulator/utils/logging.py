"""
Structured logging for the DMN simulator.

- Configurable level (DEBUG, INFO, WARNING, ERROR)
- Console handler, plus a file handler when DMN_SIM_LOG_DIR is set
- Helpers for parse, evaluation and reconciliation events
"""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from simulator import config

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(
    level: str = config.LOG_LEVEL,
    log_dir: Optional[Path] = config.LOG_DIR,
    log_to_console: bool = True,
) -> None:
    """Configure root and simulator loggers. Call once at app startup."""
    level_value = getattr(logging, level, logging.INFO)

    root = logging.getLogger()
    root.setLevel(level_value)
    # Avoid duplicate handlers when reloading
    for h in list(root.handlers):
        root.removeHandler(h)

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_dir / "dmn-simulator.log", encoding="utf-8")
        file_handler.setLevel(level_value)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(file_handler)
    if log_to_console:
        console = logging.StreamHandler(sys.stdout)
        console.setLevel(level_value)
        console.setFormatter(logging.Formatter("%(levelname)s | %(name)s | %(message)s"))
        root.addHandler(console)

    logging.getLogger("simulator").setLevel(level_value)


def _ts() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def log_parse(
    logger: logging.Logger,
    decision_count: int,
    rule_count: int,
    duration_sec: Optional[float] = None,
) -> None:
    """Log a structural parse of one document."""
    payload = {
        "event": "parse",
        "decisions": decision_count,
        "rules": rule_count,
        "duration_sec": duration_sec,
        "ts": _ts(),
    }
    logger.debug("Parse: %s", json.dumps(payload, default=str))


def log_evaluation(
    logger: logging.Logger,
    decision_id: str,
    matched_rule_indexes: list[int],
    duration_sec: Optional[float] = None,
    success: bool = True,
    error: Optional[str] = None,
    extra: Optional[dict[str, Any]] = None,
) -> None:
    """Log one evaluate call. Variable values are never logged."""
    payload = {
        "event": "evaluation",
        "decision_id": decision_id,
        "matched_rule_indexes": matched_rule_indexes,
        "duration_sec": duration_sec,
        "success": success,
        "error": error,
        "ts": _ts(),
    }
    if extra:
        payload.update(extra)
    if success:
        logger.info("Evaluation: %s", json.dumps(payload, default=str))
    else:
        logger.warning("Evaluation: %s", json.dumps(payload, default=str))


def log_reconciliation_degraded(
    logger: logging.Logger,
    decision_id: str,
    reason: str,
    matched_rule_ids: list[str],
) -> None:
    """Matched rules could not be mapped back to table rows; the payload is still returned."""
    payload = {
        "event": "reconciliation_degraded",
        "decision_id": decision_id,
        "reason": reason,
        "matched_rule_ids": matched_rule_ids,
        "ts": _ts(),
    }
    logger.warning("Reconciliation: %s", json.dumps(payload, default=str))
