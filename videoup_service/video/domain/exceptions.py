"""
Video Domain Errors.

Raised by repositories, data stores and services; translated to HTTP
statuses by the presentation layer.
"""

from typing import Optional


class VideoError(Exception):
    """Base class for video domain errors"""

    def __init__(self, message: str, video_id: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.video_id = video_id


class VideoNotFoundError(VideoError):
    """No video with the given id is registered"""

    def __init__(self, video_id: int):
        super().__init__(f"Video {video_id} does not exist", video_id)


class VideoDataNotFoundError(VideoError):
    """The video exists but no payload has been uploaded for it"""

    def __init__(self, video_id: int):
        super().__init__(f"No data has been uploaded for video {video_id}", video_id)


class VideoDataIOError(VideoError):
    """Reading or storing a payload failed"""


class VideoDataTooLargeError(VideoError):
    """Uploaded payload exceeds the configured size limit"""

    def __init__(self, video_id: int, limit_bytes: int):
        super().__init__(f"Upload for video {video_id} exceeds {limit_bytes} bytes", video_id)
        self.limit_bytes = limit_bytes
