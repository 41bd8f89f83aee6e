"""
VideoUp Service

A small HTTP service that registers video metadata, hands out data URLs and
stores the uploaded binary payload of each video.
"""

__version__ = "1.0.0"

from .main import VideoUpSystem

__all__ = ["VideoUpSystem"]
