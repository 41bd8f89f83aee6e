"""
Video Domain Layer.

Contains pure business logic and domain models for video operations.
No external dependencies - only Python standard library and domain concepts.
"""

from .models import Video, VideoState, VideoStatus, StreamRange, fold_fields
from .interfaces import VideoRepository, VideoDataStore, VideoDataReader
from .exceptions import VideoError, VideoNotFoundError, VideoDataNotFoundError, VideoDataIOError, VideoDataTooLargeError

__all__ = [
    "Video",
    "VideoState",
    "VideoStatus",
    "StreamRange",
    "fold_fields",
    "VideoRepository",
    "VideoDataStore",
    "VideoDataReader",
    "VideoError",
    "VideoNotFoundError",
    "VideoDataNotFoundError",
    "VideoDataIOError",
    "VideoDataTooLargeError",
]
