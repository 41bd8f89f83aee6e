"""
VideoUp Service - Core Module

This module contains configuration management and logging setup shared by
the rest of the service.
"""

__version__ = "1.0.0"

from .config import Config
from .logging_config import setup_logging

__all__ = ["Config", "setup_logging"]
