"""
Video Presentation Layer.

Contains HTTP controllers, request/response models, and API route definitions.
"""

from .controllers import VideoController, get_url_base
from .schemas import VideoRequest, VideoResponse, VideoStatusResponse
from .routes import create_video_routes

__all__ = [
    "VideoController",
    "get_url_base",
    "VideoRequest",
    "VideoResponse",
    "VideoStatusResponse",
    "create_video_routes",
]
