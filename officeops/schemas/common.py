"""Common response schemas."""
from pydantic import BaseModel
from typing import Any, Dict, Optional


class SuccessResponse(BaseModel):
    """Standard success response."""
    success: bool = True
    message: Optional[str] = None


class ErrorDetail(BaseModel):
    """Error detail structure."""
    code: str
    message: str


class ErrorResponse(BaseModel):
    """Standard error response for documentation."""
    success: bool = False
    error: ErrorDetail
    details: Optional[Dict[str, str]] = None
    data: Optional[Any] = None
