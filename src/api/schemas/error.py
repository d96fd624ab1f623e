"""
Error schemas - the envelope every API error is returned in

    {"error": {"code", "message", "details", "timestamp"}, "request_id": ...}

Validation failures add a per-field list next to the envelope.
"""

from pydantic import BaseModel, Field
from typing import Optional, Dict, Any, List
from datetime import datetime, timezone


class ErrorDetail(BaseModel):
    """Machine-readable code plus human-readable message"""
    code: str = Field(description="Error code, e.g. ANIMATION_NOT_ALLOWED")
    message: str = Field(description="What went wrong")
    details: Dict[str, Any] = Field(default_factory=dict, description="Extra context for the code")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="UTC time the error was raised"
    )


class ErrorResponse(BaseModel):
    """Standard error envelope"""
    error: ErrorDetail
    request_id: Optional[str] = Field(None, description="Correlates the response with the server log")

    class Config:
        json_schema_extra = {
            "example": {
                "error": {
                    "code": "ANIMATION_NOT_ALLOWED",
                    "message": "Animations are disabled in AMBIENT mode",
                    "details": {"mode": "AMBIENT"},
                    "timestamp": "2026-10-19T10:30:00Z"
                },
                "request_id": "6f1c0d1e-3f7a-4c55-9d5e-0c2b8f0e7a11"
            }
        }


class FieldError(BaseModel):
    """One failed field of a request body"""
    field: str = Field(description="Dotted path inside the body, e.g. 'tick_delay_ms'")
    message: str
    type: str = Field(description="Pydantic error type, e.g. 'greater_than'")


class ValidationErrorResponse(ErrorResponse):
    """Error envelope for request bodies that failed validation (422)"""
    validation_errors: List[FieldError] = Field(default_factory=list)

    class Config:
        json_schema_extra = {
            "example": {
                "error": {
                    "code": "VALIDATION_ERROR",
                    "message": "Request validation failed",
                    "details": {"error_count": 1},
                    "timestamp": "2026-10-19T10:30:00Z"
                },
                "validation_errors": [
                    {
                        "field": "tick_delay_ms",
                        "message": "Input should be greater than 0",
                        "type": "greater_than"
                    }
                ],
                "request_id": "6f1c0d1e-3f7a-4c55-9d5e-0c2b8f0e7a11"
            }
        }
