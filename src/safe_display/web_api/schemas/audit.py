"""
Audit Schemas
=============
Request and response models for audit endpoints.
"""
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional
from datetime import datetime, timezone


class AuditRequest(BaseModel):
    """Request to audit a source tree"""

    root_path: str = Field(..., description="Local path to the application source")
    budget: Optional[int] = Field(default=None, description="Raw template outputs allowed before escalation")

    class Config:
        json_schema_extra = {
            "example": {
                "root_path": "/srv/school-app",
                "budget": 10,
            }
        }


class AuditSummary(BaseModel):
    """Summary of audit results"""

    files_scanned: int = Field(default=0)
    total_findings: int = Field(default=0)
    by_type: Dict[str, int] = Field(default_factory=dict)
    by_severity: Dict[str, int] = Field(default_factory=dict)


class AuditResponse(BaseModel):
    """Response from an audit run"""

    status: str = Field(..., description="Audit status: complete, failed")
    summary: AuditSummary
    findings: List[Dict[str, Any]] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
