"""
API Routers
===========
Each router handles a specific domain of the API.
"""
from . import audit, display, health

__all__ = ["audit", "display", "health"]
