"""
Runtime configuration for the DMN simulator (environment variables).

  DMN_SIM_LOG_LEVEL               DEBUG | INFO | WARNING | ERROR (default: INFO)
  DMN_SIM_LOG_DIR                 directory for dmn-simulator.log (default: console only)
  DMN_SIM_ENGINE                  evaluation engine factory, "package.module:factory"
  DMN_SIM_API_KEY                 when set, /api/* requires this key
  DMN_SIM_RATE_LIMIT_REQUESTS     requests per window per client (0 disables)
  DMN_SIM_RATE_LIMIT_WINDOW_SEC   rate limit window in seconds
  DMN_SIM_CORS_ORIGINS            comma-separated allowed origins
  DMN_SIM_MAX_DOCUMENT_BYTES      largest accepted DMN document
"""

import os
from pathlib import Path
from typing import Optional


def _env(key: str, default: Optional[str] = None) -> Optional[str]:
    value = os.environ.get(key, default)
    if value is not None:
        value = value.strip()
    return value or default


LOG_LEVEL = (_env("DMN_SIM_LOG_LEVEL", "INFO") or "INFO").upper()
LOG_DIR: Optional[Path] = Path(_env("DMN_SIM_LOG_DIR")) if _env("DMN_SIM_LOG_DIR") else None

ENGINE_FACTORY_PATH = _env("DMN_SIM_ENGINE")

API_KEY = _env("DMN_SIM_API_KEY", "") or ""
RATE_LIMIT_REQUESTS = int(_env("DMN_SIM_RATE_LIMIT_REQUESTS", "120"))
RATE_LIMIT_WINDOW_SEC = int(_env("DMN_SIM_RATE_LIMIT_WINDOW_SEC", "60"))

# Vite dev server defaults for the table-editor UI
CORS_ORIGINS = [
    o.strip()
    for o in (_env("DMN_SIM_CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173") or "").split(",")
    if o.strip()
]

MAX_DOCUMENT_BYTES = int(_env("DMN_SIM_MAX_DOCUMENT_BYTES", str(2 * 1024 * 1024)))
