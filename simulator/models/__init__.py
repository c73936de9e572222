"""
DMN simulator data models.

Decision-table view of a parsed DMN document and the normalized evaluation
result. For the REST request/response contract, see shared.schemas.
"""

from simulator.models.dmn import (
    AllowedValues,
    AllowedValuesKind,
    Decision,
    EvaluationResult,
    InputDefinition,
    OutputDefinition,
    RuleDefinition,
)

__all__ = [
    "AllowedValues",
    "AllowedValuesKind",
    "Decision",
    "EvaluationResult",
    "InputDefinition",
    "OutputDefinition",
    "RuleDefinition",
]
