"""Shared request/response schemas for the DMN simulator (API and frontend contract)."""

from shared.schemas.dmn import (
    ErrorResponse,
    EvaluateRequest,
    EvaluateResponse,
    ParseRequest,
    ParseResponse,
)

__all__ = [
    "ErrorResponse",
    "EvaluateRequest",
    "EvaluateResponse",
    "ParseRequest",
    "ParseResponse",
]
