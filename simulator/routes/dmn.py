"""
DMN API: parse a document into decision tables, evaluate one decision.

Both endpoints are stateless: the document travels with every request.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.encoders import jsonable_encoder

from shared.schemas import (
    ErrorResponse,
    EvaluateRequest,
    EvaluateResponse,
    ParseRequest,
    ParseResponse,
)
from simulator.errors import EvaluationError, MalformedDocumentError
from simulator.services import monitoring_service
from simulator.services.evaluation_service import EvaluationService, get_evaluation_service
from simulator.services.parser_service import parse_document

logger = logging.getLogger(__name__)
router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "DMN XML is not well-formed"},
    413: {"model": ErrorResponse, "description": "Document too large"},
}


@router.post("/parse", response_model=ParseResponse, responses=ERROR_RESPONSES)
def parse(body: ParseRequest):
    """
    Parse a DMN document and return every decision with its inputs, outputs
    and rules (1-based index, entries in column order). Nothing is evaluated.
    """
    try:
        response = parse_document(body.dmn_xml)
    except MalformedDocumentError:
        monitoring_service.record("parse_failures")
        raise
    monitoring_service.record("documents_parsed")
    return response


@router.post(
    "/evaluate",
    response_model=EvaluateResponse,
    responses={
        **ERROR_RESPONSES,
        404: {"model": ErrorResponse, "description": "No decision with that id"},
        422: {"model": ErrorResponse, "description": "Engine failed to evaluate the decision"},
        503: {"model": ErrorResponse, "description": "No evaluation engine configured"},
    },
)
def evaluate(body: EvaluateRequest, service: EvaluationService = Depends(get_evaluation_service)):
    """
    Evaluate one decision with the configured engine.

    `result` is the list of output rows, the single aggregated entry, or the
    raw engine result, depending on the hit policy. `matchedRuleIndexes` are
    the 1-based rows that fired, in document order.
    """
    try:
        evaluation = service.evaluate(body.dmn_xml, body.decision_id, body.variables or {})
    except (EvaluationError, MalformedDocumentError):
        monitoring_service.record("evaluations_failed")
        raise
    monitoring_service.record("evaluations_completed")
    monitoring_service.record("rules_matched", len(evaluation.matched_rule_indexes))
    try:
        result = jsonable_encoder(evaluation.payload)
    except (TypeError, ValueError) as e:
        logger.warning("Engine result for %s is not JSON-serializable: %s", body.decision_id, e)
        result = None
    return EvaluateResponse(result=result, matched_rule_indexes=evaluation.matched_rule_indexes)
