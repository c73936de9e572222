"""DMN simulator services (parsing, evaluation, reconciliation)."""

from simulator.services.allowed_values import lex_allowed_values, parse_allowed_values
from simulator.services.dmn_xml import descendants, first_child, load_document, local_name
from simulator.services.engine import (
    DecisionEngine,
    DecisionResult,
    DecisionTableEvaluationEvent,
    EngineFactory,
    load_engine_factory,
)
from simulator.services.evaluation_service import (
    EvaluationService,
    MatchedRuleCapture,
    extract_payload,
    get_evaluation_service,
)
from simulator.services.parser_service import find_decision, parse_decisions, parse_document
from simulator.services.reconciler import map_rule_ids_to_indexes

__all__ = [
    "lex_allowed_values",
    "parse_allowed_values",
    "descendants",
    "first_child",
    "load_document",
    "local_name",
    "DecisionEngine",
    "DecisionResult",
    "DecisionTableEvaluationEvent",
    "EngineFactory",
    "load_engine_factory",
    "EvaluationService",
    "MatchedRuleCapture",
    "extract_payload",
    "get_evaluation_service",
    "find_decision",
    "parse_decisions",
    "parse_document",
    "map_rule_ids_to_indexes",
]
