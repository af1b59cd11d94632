"""Common response schemas."""
from pydantic import BaseModel
from typing import Optional


class SuccessResponse(BaseModel):
    """Standard success response."""
    success: bool = True
    message: Optional[str] = None


class ErrorResponse(BaseModel):
    """Error body rendered for service errors and HTTP exceptions."""
    detail: str
