"""
Safe Display Web API
====================
FastAPI service exposing the display adapter and the render-boundary audit.

Quick Start:
    uvicorn safe_display.web_api.main:app --reload
"""
from .main import app

__all__ = ["app"]
