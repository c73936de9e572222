"""
Request/response shapes for the DMN simulator REST API.

Used by the API routes and by the table-editor frontend. JSON keys are
camelCase (dmnXml, decisionId, matchedRuleIndexes).
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from simulator.models.dmn import Decision


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ParseRequest(ApiModel):
    """Body of POST /api/dmn/parse."""

    dmn_xml: str = Field(..., description="DMN document as XML text")


class ParseResponse(ApiModel):
    decisions: list[Decision] = Field(default_factory=list, description="Decisions in document order")


class EvaluateRequest(ApiModel):
    """Body of POST /api/dmn/evaluate. Missing or null variables mean {}."""

    dmn_xml: str = Field(..., description="DMN document as XML text")
    decision_id: str = Field(..., description="id attribute of the decision to evaluate")
    variables: Optional[dict[str, Any]] = Field(
        default=None,
        description="Input variable bindings, e.g. {'age': 20}",
    )


class EvaluateResponse(ApiModel):
    result: Any = Field(None, description="Rows, single entry, or raw result, depending on hit policy")
    matched_rule_indexes: list[int] = Field(
        default_factory=list,
        description="1-based positions of the rules that fired, ascending",
    )


class ErrorResponse(ApiModel):
    detail: str = Field(..., description="Human-readable error message")
    error: str = Field(..., description="Error code (e.g. malformed_document, decision_not_found)")
