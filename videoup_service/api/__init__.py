"""
API module for the VideoUp Service.

This module provides the FastAPI application and its uvicorn runner.
"""

from .server import APIServer
from .models import SuccessResponse, HealthResponse, ErrorResponse

__all__ = ["APIServer", "SuccessResponse", "HealthResponse", "ErrorResponse"]
