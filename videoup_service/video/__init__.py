"""
Video Module for the VideoUp Service.

This module provides video metadata registration and binary payload
upload/download following clean architecture principles.
"""

from .domain.models import Video, VideoState, VideoStatus, StreamRange
from .application.video_service import VideoService
from .integration import VideoModule, create_video_module

__all__ = ["Video", "VideoState", "VideoStatus", "StreamRange", "VideoService", "VideoModule", "create_video_module"]
