"""
Health Check Router
==================
Endpoints for health checks and readiness checks.
"""
from fastapi import APIRouter

from safe_display import __version__
from safe_display.core.config import get_default_config

router = APIRouter()


@router.get("/health")
async def health_check():
    """
    Health check endpoint.
    Returns OK if the service is running.
    """
    return {"status": "ok", "version": __version__}


@router.get("/ready")
async def readiness_check():
    """
    Readiness check endpoint.
    Returns OK once the normalizer configuration has loaded.
    """
    get_default_config()
    return {"status": "ready"}
