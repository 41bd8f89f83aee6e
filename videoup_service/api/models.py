"""
Data models for the VideoUp Service API.

This module defines Pydantic models for service-level responses; video
schemas live in ``videoup_service.video.presentation.schemas``.
"""

from typing import Any, Dict, Optional
from pydantic import BaseModel


class SuccessResponse(BaseModel):
    """Generic success response"""

    success: bool = True
    message: str
    data: Optional[Dict[str, Any]] = None


class HealthResponse(BaseModel):
    """Health check response"""

    status: str
    timestamp: str


class ErrorResponse(BaseModel):
    """Error response model"""

    detail: str
