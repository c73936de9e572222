"""
Decision-table view model for DMN documents.

These models describe what the structural parser reads out of a DMN document
(decisions, input/output columns, rules) and what an evaluation returns. They
are immutable value records built fresh per request. Attributes are snake_case
in Python and camelCase in JSON (typeRef, allowedValues, inputEntries, ...).
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class DmnModel(BaseModel):
    """Base for all DMN view models: frozen, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


# -----------------------------------------------------------------------------
# Allowed values
# -----------------------------------------------------------------------------


class AllowedValuesKind(str, Enum):
    """How an input's allowed-values expression was classified by the lexer."""

    NONE = "none"
    ENUMERATION = "enumeration"
    RANGE = "range"
    UNPARSED = "unparsed"


class AllowedValues(DmnModel):
    """Lexer output: display values plus the classification of the source text."""

    values: list[str] = Field(default_factory=list)
    kind: AllowedValuesKind = AllowedValuesKind.NONE


# -----------------------------------------------------------------------------
# Table columns and rows
# -----------------------------------------------------------------------------


class InputDefinition(DmnModel):
    """An input column of a decision table."""

    id: str = Field("", description="Document-assigned id of the input element")
    label: Optional[str] = Field(None, description="Column label; falls back to name")
    name: Optional[str] = Field(None, description="Trimmed text of the input expression")
    type_ref: Optional[str] = Field(None, description="Declared type of the input expression")
    allowed_values: list[str] = Field(
        default_factory=list,
        description="Enumerated literals from inputValues; empty for ranges and comparisons",
    )
    allowed_values_text: Optional[str] = Field(None, description="Raw inputValues expression")
    allowed_values_kind: AllowedValuesKind = Field(
        AllowedValuesKind.NONE,
        description="none | enumeration | range | unparsed",
    )


class OutputDefinition(DmnModel):
    """An output column of a decision table."""

    id: str = ""
    name: str = ""
    label: str = Field("", description="Column label; falls back to name")
    type_ref: Optional[str] = None


class RuleDefinition(DmnModel):
    """One row of a decision table, entries in column order."""

    id: str = Field("", description="Document-assigned rule id, used to reconcile matches")
    index: int = Field(..., ge=1, description="1-based position of the rule in its table")
    input_entries: list[str] = Field(default_factory=list)
    output_entries: list[str] = Field(default_factory=list)


class Decision(DmnModel):
    """
    A decision and its decision table.

    A decision without a decisionTable child (e.g. a literal expression) has
    empty inputs, outputs and rules.
    """

    id: str
    name: str
    inputs: list[InputDefinition] = Field(default_factory=list)
    outputs: list[OutputDefinition] = Field(default_factory=list)
    rules: list[RuleDefinition] = Field(default_factory=list)


# -----------------------------------------------------------------------------
# Evaluation
# -----------------------------------------------------------------------------


class EvaluationResult(DmnModel):
    """Normalized engine result plus the table rows that fired."""

    payload: Any = None
    matched_rule_indexes: list[int] = Field(default_factory=list)
