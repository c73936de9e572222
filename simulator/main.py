"""
DMN Simulator FastAPI application entrypoint.

Run with: uvicorn simulator.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from simulator import config
from simulator.auth import RateLimitExceeded, authenticate, check_rate_limit, client_id, verified_api_key
from simulator.errors import (
    DecisionNotFoundError,
    DmnSimulatorError,
    EngineUnavailableError,
    EvaluationError,
    MalformedDocumentError,
)
from simulator.routes import api_router
from simulator.utils.logging import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging on startup. Nothing is persisted, so shutdown has no work."""
    configure_logging()
    logger.info("DMN simulator started (engine: %s)", config.ENGINE_FACTORY_PATH or "not configured")
    yield


app = FastAPI(
    title="DMN Simulator API",
    description="""Inspect and evaluate DMN decision tables.

- `POST /api/dmn/parse` returns decisions, columns, rules and allowed values without executing anything.
- `POST /api/dmn/evaluate` evaluates one decision with the configured engine and reports which rows fired.

## Authentication
When `DMN_SIM_API_KEY` is set, include it as `X-API-Key`, `?api_key=` or `Authorization: Bearer`.
`/api/health` and `/api/metrics` do not require a key.

## Rate limiting
`DMN_SIM_RATE_LIMIT_REQUESTS` (default 120) per `DMN_SIM_RATE_LIMIT_WINDOW_SEC` (default 60). 429 when exceeded.
""",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS for the local table-editor UI
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class AuthAndRateLimitMiddleware(BaseHTTPMiddleware):
    """Optional API key auth, rate limiting and document size limit for /api/*."""

    async def dispatch(self, request: Request, call_next):
        if not request.url.path.startswith("/api/"):
            return await call_next(request)
        try:
            # Unverified keys share the caller's IP bucket.
            check_rate_limit(client_id(request, verified_api_key(request)))
        except RateLimitExceeded:
            return JSONResponse(status_code=429, content={"detail": "Rate limit exceeded.", "error": "rate_limited"})
        rejected = authenticate(request)
        if rejected:
            status, detail = rejected
            return JSONResponse(status_code=status, content={"detail": detail, "error": "unauthorized"})
        length = request.headers.get("content-length")
        if length and length.isdigit() and int(length) > config.MAX_DOCUMENT_BYTES:
            return JSONResponse(
                status_code=413,
                content={"detail": f"Request body exceeds {config.MAX_DOCUMENT_BYTES} bytes.", "error": "too_large"},
            )
        return await call_next(request)


app.add_middleware(AuthAndRateLimitMiddleware)

ERROR_STATUS = (
    (MalformedDocumentError, 400),
    (DecisionNotFoundError, 404),
    (EvaluationError, 422),
    (EngineUnavailableError, 503),
)


@app.exception_handler(DmnSimulatorError)
async def dmn_error_handler(request: Request, exc: DmnSimulatorError):
    status = next((code for cls, code in ERROR_STATUS if isinstance(exc, cls)), 500)
    if status >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    else:
        logger.info("%s %s rejected (%s): %s", request.method, request.url.path, exc.code, exc)
    return JSONResponse(status_code=status, content={"detail": str(exc), "error": exc.code})


app.include_router(api_router)


@app.get("/")
def root():
    return {"service": "DMN Simulator", "docs": "/docs", "api": "/api"}
