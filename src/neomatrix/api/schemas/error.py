"""
Error response bodies shared by every endpoint
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ErrorDetail(BaseModel):
    code: str = Field(description="Stable machine-readable code, e.g. LAST_FRAME")
    message: str = Field(description="Text suitable for a toast")
    details: Optional[Dict[str, Any]] = Field(None, description="Offending values and limits")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ErrorResponse(BaseModel):
    """Body of every non-2xx response"""
    error: ErrorDetail
    request_id: Optional[str] = Field(None, description="Correlates with the server log line")

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "error": {
                "code": "INVALID_GRID_SIZE",
                "message": "Grid size must be between 1 and 64 (got 0x8)",
                "details": {"width": 0, "height": 8, "min": 1, "max": 64},
                "timestamp": "2025-11-26T10:30:00Z"
            },
            "request_id": "9b1deb4d-3b7d-4bad-9bdd-2b0d7b3dcb6d"
        }
    })


class ValidationErrorResponse(ErrorResponse):
    """422 for request bodies or paths that fail schema validation"""
    validation_errors: List[Dict[str, Any]] = Field(description="One entry per invalid field")
