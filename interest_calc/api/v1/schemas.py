"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from typing import Dict, List, Optional


class FieldInputRequest(BaseModel):
    """Request body for POST /v1/fields/{field_id}/input"""

    raw_text: str = Field(..., max_length=2000, description="Full text of the field after the keystroke")


class FieldViewSchema(BaseModel):
    """Display state of a single field"""

    field_id: str
    label: str
    description: str
    display_text: str
    is_error: bool
    focused: bool
    editable: bool
    percent: bool


class FieldsResponse(BaseModel):
    """Response for every /v1/fields endpoint"""

    fields: List[FieldViewSchema]


class FieldInputResponse(FieldsResponse):
    """Response for POST /v1/fields/{field_id}/input"""

    field_id: str
    outcome: str  # accepted | invalid | degenerate
    error: Optional[str] = None


class RatesResponse(BaseModel):
    """Response for /v1/rates endpoints"""

    base_currency: Optional[str] = None
    rates: Dict[str, str]
    refresh_in_flight: bool = False
