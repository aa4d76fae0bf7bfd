"""
Display Schemas
===============
Request and response models for display endpoints.
"""
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional


class DisplayRequest(BaseModel):
    """A single value to render as text"""

    value: Any = Field(default=None, description="Any JSON value: record, list, scalar or null")
    fallback: str = Field(default="", description="Text returned for null input")

    class Config:
        json_schema_extra = {
            "example": {
                "value": {"_id": "64f1c2", "firstName": "Amina", "lastName": "Juma"},
                "fallback": "N/A",
            }
        }


class DisplayResponse(BaseModel):
    """Display text plus the category the value was classified as"""

    text: str
    category: str = Field(..., description="nullish, ui_element, date, array, primitive, identified_record, opaque")


class RowsRequest(BaseModel):
    """Records to flatten into display rows"""

    records: List[Any] = Field(default_factory=list)
    fields: Optional[List[str]] = Field(default=None, description="Columns to keep, in order")
    fallback: str = Field(default="")

    class Config:
        json_schema_extra = {
            "example": {
                "records": [
                    {"_id": "c1", "name": "Form 2", "section": "A", "stream": "Science"},
                ],
                "fields": None,
                "fallback": "",
            }
        }


class RowsResponse(BaseModel):
    """Flattened rows, one dict of strings per record"""

    rows: List[Dict[str, str]] = Field(default_factory=list)
    count: int = Field(default=0)
