"""API routes for the DMN simulator."""

from fastapi import APIRouter

from simulator.routes import dmn, monitoring

api_router = APIRouter(prefix="/api", tags=["api"])

api_router.include_router(monitoring.router)
api_router.include_router(dmn.router, prefix="/dmn", tags=["dmn"])
