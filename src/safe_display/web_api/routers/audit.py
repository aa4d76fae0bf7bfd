"""
Audit Router
============
Endpoints for running the render-boundary audit.
"""
from dataclasses import replace
from pathlib import Path

from fastapi import APIRouter, HTTPException

from safe_display import api as core_api
from safe_display.core.config import load_audit_config
from safe_display.web_api.config import settings
from safe_display.web_api.schemas.audit import AuditRequest, AuditResponse, AuditSummary

router = APIRouter()


@router.post("/", response_model=AuditResponse)
async def run_audit(request: AuditRequest):
    """
    Audit a source tree for render-boundary violations.

    - **root_path**: Local path to audit
    - **budget**: Optional raw-output budget
    """
    target = Path(request.root_path).resolve()
    if not target.exists():
        raise HTTPException(status_code=404, detail=f"Path not found: {request.root_path}")
    if settings.AUDIT_ROOT and not target.is_relative_to(Path(settings.AUDIT_ROOT).resolve()):
        raise HTTPException(status_code=403, detail="Path is outside the configured audit root")

    try:
        cfg = load_audit_config()
        if request.budget is not None:
            cfg = replace(cfg, raw_output_budget=request.budget)
        report = core_api.audit_project(target, config=cfg)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))

    return AuditResponse(
        status="complete",
        summary=AuditSummary(**report["summary"]),
        findings=report["findings"],
    )
