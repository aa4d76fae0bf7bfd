"""
Pydantic Schemas
===============
Request and response models for the API.
"""
from .audit import AuditRequest, AuditResponse, AuditSummary
from .display import DisplayRequest, DisplayResponse, RowsRequest, RowsResponse

__all__ = [
    "AuditRequest",
    "AuditResponse",
    "AuditSummary",
    "DisplayRequest",
    "DisplayResponse",
    "RowsRequest",
    "RowsResponse",
]
