"""
Error taxonomy for the DMN simulator.

Every error carries a machine-readable `code` so the REST layer can map it to
an HTTP status without string matching. Reconciliation problems are not part
of this taxonomy: they are logged and degrade to an empty index list.
"""

from typing import Optional


class DmnSimulatorError(Exception):
    """Base class for all errors surfaced to callers."""

    code = "dmn_simulator_error"

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message}: {self.detail}"
        return self.message


class MalformedDocumentError(DmnSimulatorError):
    """The submitted text is not well-formed XML."""

    code = "malformed_document"


class EvaluationError(DmnSimulatorError):
    """The evaluation engine rejected the document or failed while evaluating."""

    code = "evaluation_failed"


class DecisionNotFoundError(EvaluationError):
    """No `decision` element carries the requested id."""

    code = "decision_not_found"

    def __init__(self, decision_id: str):
        super().__init__(f"Decision '{decision_id}' not found")
        self.decision_id = decision_id


class EngineUnavailableError(DmnSimulatorError):
    """No evaluation engine is configured, or the configured one cannot be loaded."""

    code = "engine_unavailable"
