"""
FastAPI Application
==================
Main entry point for the Safe Display API.

Run with:
    uvicorn safe_display.web_api.main:app --reload
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from safe_display import __version__
from safe_display.web_api.config import settings
from safe_display.web_api.routers import audit, display, health

# Create application
app = FastAPI(
    title="Safe Display API",
    description="Display-safe text for school records and a render-boundary audit",
    version=__version__,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router, tags=["Health"])
app.include_router(display.router, prefix="/display", tags=["Display"])
app.include_router(audit.router, prefix="/audit", tags=["Audit"])


@app.get("/")
async def root():
    """Root endpoint - API info"""
    return {
        "name": "Safe Display API",
        "version": __version__,
        "docs": "/docs" if settings.DEBUG else "disabled",
    }


# For running directly: python -m safe_display.web_api.main
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
