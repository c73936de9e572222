"""
Optional API key and rate limiting for /api/*.

- If DMN_SIM_API_KEY is set, requests must include X-API-Key: <key>,
  ?api_key=<key>, or Authorization: Bearer <key>.
- Health and metrics are excluded from auth for load balancers.
- Rate limiting: in-memory fixed window, per verified API key or per client IP.
"""

import threading
import time
from typing import Optional

from fastapi import Request

from simulator import config

API_KEY_HEADER = "X-API-Key"

# client id -> (window_start_sec, count)
_rate_limit_store: dict[str, tuple[float, int]] = {}
_rate_limit_lock = threading.Lock()


class RateLimitExceeded(Exception):
    pass


def request_api_key(request: Request) -> Optional[str]:
    """API key from header, query, or Bearer token."""
    key = request.headers.get(API_KEY_HEADER) or request.query_params.get("api_key")
    auth = request.headers.get("Authorization")
    if not key and auth and auth.startswith("Bearer "):
        key = auth[7:].strip()
    return key or None


def verified_api_key(request: Request, expected_key: Optional[str] = None) -> Optional[str]:
    """The request's API key when auth is on and the key is the configured one, else None."""
    expected = config.API_KEY if expected_key is None else expected_key
    key = request_api_key(request)
    if expected and key == expected:
        return key
    return None


def client_id(request: Request, api_key: Optional[str]) -> str:
    """Identify client for rate limiting: verified API key if given, else X-Forwarded-For or client host."""
    if api_key:
        return f"key:{api_key[:16]}"
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return f"ip:{forwarded.split(',')[0].strip()}"
    return f"ip:{request.client.host if request.client else 'unknown'}"


def check_rate_limit(client: str, limit: Optional[int] = None, window_sec: Optional[int] = None) -> None:
    """Raise RateLimitExceeded if the client is over its limit, otherwise count the request."""
    limit = config.RATE_LIMIT_REQUESTS if limit is None else limit
    window_sec = config.RATE_LIMIT_WINDOW_SEC if window_sec is None else window_sec
    if limit <= 0:
        return
    now = time.time()
    with _rate_limit_lock:
        start, count = _rate_limit_store.get(client, (now, 0))
        if now - start >= window_sec:
            start, count = now, 0
        count += 1
        _rate_limit_store[client] = (start, count)
    if count > limit:
        raise RateLimitExceeded(client)


def reset_rate_limits() -> None:
    with _rate_limit_lock:
        _rate_limit_store.clear()


def authenticate(request: Request, expected_key: Optional[str] = None) -> Optional[tuple[int, str]]:
    """Return (status, detail) when the request must be rejected, None when it may pass."""
    expected = config.API_KEY if expected_key is None else expected_key
    if not expected or skip_auth_path(request.url.path):
        return None
    key = request_api_key(request)
    if not key:
        return 401, "Missing API key. Provide X-API-Key or api_key."
    if key != expected:
        return 403, "Invalid API key."
    return None


def skip_auth_path(path: str) -> bool:
    """Paths that do not require API key (health, metrics for load balancers)."""
    return path.rstrip("/") in ("/api/health", "/api/metrics")
