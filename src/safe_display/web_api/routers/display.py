"""
Display Router
==============
Endpoints that turn arbitrary JSON values into display text.
"""
from fastapi import APIRouter, HTTPException

from safe_display import api as core_api
from safe_display.web_api.config import settings
from safe_display.web_api.schemas.display import (
    DisplayRequest,
    DisplayResponse,
    RowsRequest,
    RowsResponse,
)

router = APIRouter()


@router.post("/", response_model=DisplayResponse)
async def display_value(request: DisplayRequest):
    """
    Render one value as display text.

    - **value**: any JSON value (record, list, scalar, null)
    - **fallback**: text for null input
    """
    return DisplayResponse(**core_api.display_value(request.value, request.fallback))


@router.post("/rows", response_model=RowsResponse)
async def display_rows(request: RowsRequest):
    """
    Flatten records into rows of display strings.
    """
    if len(request.records) > settings.MAX_ROWS:
        raise HTTPException(
            status_code=413,
            detail=f"Too many records: {len(request.records)} > {settings.MAX_ROWS}",
        )
    rows = core_api.display_rows(request.records, request.fields, fallback=request.fallback)
    return RowsResponse(rows=rows, count=len(rows))
