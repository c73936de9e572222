"""Health and metrics endpoints."""

from fastapi import APIRouter

from simulator.services.monitoring_service import get_health, get_metrics

router = APIRouter(tags=["monitoring"])


@router.get("/health", summary="Health check")
def health():
    """
    Health check for load balancers and orchestration.
    Reports whether an evaluation engine is configured. Does not require authentication.
    """
    return get_health()


@router.get("/metrics", summary="Request counters")
def metrics():
    """Documents parsed, evaluations completed/failed, rules matched since process start."""
    return get_metrics()
