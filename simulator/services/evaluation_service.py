"""
Evaluation orchestrator: run one decision on the external engine and report
which table rows fired.

The engine only reveals matched rules through a post-decision-table listener.
The listener writes into context-local storage (a ContextVar), and every
evaluate call runs the engine inside its own copy of the context, clearing
the storage before the call and reading-and-clearing it right after. Matches
therefore never leak between concurrent threads, interleaved asyncio tasks,
or successive calls on the same worker.
"""

import contextvars
import logging
import time
from dataclasses import dataclass, field
from functools import lru_cache
from io import BytesIO
from typing import Any, Mapping, Optional, Sequence, Union

from simulator import config
from simulator.errors import DecisionNotFoundError, EvaluationError
from simulator.models.dmn import EvaluationResult
from simulator.services.dmn_xml import load_document
from simulator.services.engine import (
    DecisionEngine,
    DecisionResult,
    DecisionTableEvaluationEvent,
    EngineFactory,
    load_engine_factory,
)
from simulator.services.parser_service import find_decision
from simulator.services.reconciler import map_rule_ids_to_indexes
from simulator.utils.logging import log_evaluation

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Matched-rule capture
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class CapturedTable:
    """Rules matched by one decision-table execution."""

    decision_id: Optional[str]
    rule_ids: list[str] = field(default_factory=list)


_captured_tables: contextvars.ContextVar[Optional[tuple[CapturedTable, ...]]] = contextvars.ContextVar(
    "dmn_captured_tables", default=None
)


class MatchedRuleCapture:
    """Context-local side channel filled by the engine listener."""

    def __init__(self, var: contextvars.ContextVar = _captured_tables):
        self._var = var

    def listener(self, event: DecisionTableEvaluationEvent) -> None:
        """Post-decision-table listener handed to the engine factory."""
        rule_ids = []
        for rule in getattr(event, "matching_rules", None) or ():
            rule_id = getattr(rule, "id", None) if rule is not None else None
            if rule_id:
                rule_ids.append(str(rule_id))
        decision_id = getattr(event, "decision_id", None)
        entry = CapturedTable(decision_id=str(decision_id) if decision_id else None, rule_ids=rule_ids)
        self._var.set((self._var.get() or ()) + (entry,))

    def clear(self) -> None:
        self._var.set(None)

    def peek(self) -> tuple[CapturedTable, ...]:
        return self._var.get() or ()

    def take(self) -> tuple[CapturedTable, ...]:
        """Return everything captured in this context and clear it."""
        captured = self.peek()
        self.clear()
        return captured


def select_rule_ids(captured: Sequence[CapturedTable], decision_id: str) -> list[str]:
    """
    Pick the matched rule ids that belong to the target decision.

    When the engine tells which decision a table belonged to, the last capture
    for the target decision wins. Otherwise the last capture is used, which is
    the target table in the single-table case.
    """
    if not captured:
        return []
    for entry in reversed(captured):
        if entry.decision_id == decision_id:
            return list(entry.rule_ids)
    return list(captured[-1].rule_ids)


# -----------------------------------------------------------------------------
# Result normalization
# -----------------------------------------------------------------------------


def _read(result: Any, accessor: str) -> Any:
    try:
        return getattr(result, accessor)
    except Exception as e:  # engines raise when a shape does not apply to the hit policy
        logger.debug("Result accessor %s unavailable: %s", accessor, e)
        return None


def extract_payload(result: DecisionResult) -> Any:
    """Rows if any, else the single aggregated entry, else no rows, else the raw result."""
    rows = _read(result, "result_list")
    if rows:
        return [dict(row) for row in rows]
    single = _read(result, "single_entry")
    if single is not None:
        return single
    if isinstance(rows, list):
        # Nothing matched: report the empty row list, not the engine's result object.
        return []
    return result


# -----------------------------------------------------------------------------
# EvaluationService
# -----------------------------------------------------------------------------


class EvaluationService:
    """Evaluates decisions on one engine instance, built once with the capture listener installed."""

    def __init__(self, engine_factory: EngineFactory, capture: Optional[MatchedRuleCapture] = None):
        self.capture = capture or MatchedRuleCapture()
        self.engine: DecisionEngine = engine_factory([self.capture.listener])

    def evaluate(
        self,
        dmn_xml: Union[str, bytes],
        decision_id: str,
        variables: Optional[Mapping[str, Any]] = None,
    ) -> EvaluationResult:
        """
        Evaluate decision_id against variables ({} when None).

        Raises MalformedDocumentError, DecisionNotFoundError, or EvaluationError
        (wrapping the engine's failure).
        """
        start = time.perf_counter()
        data = dmn_xml.encode("utf-8") if isinstance(dmn_xml, str) else dmn_xml
        bindings = dict(variables or {})

        root = load_document(data)
        if find_decision(root, decision_id) is None:
            log_evaluation(logger, decision_id, [], success=False, error="decision not found")
            raise DecisionNotFoundError(decision_id)

        try:
            result, captured = contextvars.copy_context().run(self._run_engine, data, decision_id, bindings)
        except EvaluationError as e:
            log_evaluation(
                logger,
                decision_id,
                [],
                duration_sec=round(time.perf_counter() - start, 4),
                success=False,
                error=str(e),
            )
            raise

        payload = extract_payload(result)
        indexes = map_rule_ids_to_indexes(data, decision_id, select_rule_ids(captured, decision_id))
        log_evaluation(
            logger,
            decision_id,
            indexes,
            duration_sec=round(time.perf_counter() - start, 4),
            extra={"tables_evaluated": len(captured)},
        )
        return EvaluationResult(payload=payload, matched_rule_indexes=indexes)

    def _run_engine(
        self,
        data: bytes,
        decision_id: str,
        variables: dict[str, Any],
    ) -> tuple[DecisionResult, tuple[CapturedTable, ...]]:
        # The copied context inherits the caller's capture; clear before and after.
        self.capture.clear()
        try:
            result = self.engine.evaluate_decision(decision_id, BytesIO(data), variables)
            return result, self.capture.take()
        except EvaluationError:
            raise
        except Exception as e:
            raise EvaluationError("Error evaluating DMN decision", str(e) or type(e).__name__) from e
        finally:
            self.capture.clear()


@lru_cache(maxsize=1)
def get_evaluation_service() -> EvaluationService:
    """FastAPI dependency: one service (and engine) per process, from DMN_SIM_ENGINE."""
    return EvaluationService(load_engine_factory(config.ENGINE_FACTORY_PATH))
