"""
Video Application Service.

Orchestrates video-related use cases and business logic.
"""

import logging
from typing import List, Optional, Tuple

from ..domain.exceptions import VideoNotFoundError, VideoDataNotFoundError, VideoDataIOError
from ..domain.interfaces import AsyncReadable, VideoRepository, VideoDataStore, VideoDataReader
from ..domain.models import Video, VideoState, VideoStatus


class VideoService:
    """Application service for video management"""

    def __init__(
        self,
        video_repository: VideoRepository,
        data_store: VideoDataStore,
        chunk_size_bytes: int = 65536,
        max_upload_size_bytes: Optional[int] = None
    ):
        self.video_repository = video_repository
        self.data_store = data_store
        self.chunk_size_bytes = chunk_size_bytes
        self.max_upload_size_bytes = max_upload_size_bytes
        self.logger = logging.getLogger(__name__)

    async def list_videos(self) -> List[Video]:
        """Get all registered videos"""
        return self.video_repository.list()

    async def add_video(self, video: Video, base_url: str) -> Video:
        """Register a video; any client-supplied id or data URL is discarded"""
        metadata = Video(title=video.title, duration=video.duration, content_type=video.content_type)
        return self.video_repository.add(metadata, base_url)

    async def get_video(self, video_id: int) -> Video:
        """Get video by ID or raise VideoNotFoundError"""
        video = self.video_repository.get(video_id)
        if video is None:
            raise VideoNotFoundError(video_id)
        return video

    async def save_video_data(self, video_id: int, source: AsyncReadable) -> VideoStatus:
        """Store the payload for an existing video, replacing any previous one.

        The source is not touched when the video is unknown.
        """
        video = await self.get_video(video_id)

        try:
            size = await self.data_store.save(
                video.video_id,
                source,
                chunk_size=self.chunk_size_bytes,
                max_size_bytes=self.max_upload_size_bytes
            )
        except VideoDataIOError as e:
            self.logger.error(f"Error storing data for video {video_id}: {e}")
            raise

        self.logger.info(f"Stored {size} bytes for video {video_id}")
        return VideoStatus(state=VideoState.PROCESSING)

    async def open_video_data(self, video_id: int) -> Tuple[Video, VideoDataReader]:
        """Open the stored payload of a video for streaming"""
        video = await self.get_video(video_id)

        reader = await self.data_store.open(video_id)
        if reader is None:
            raise VideoDataNotFoundError(video_id)

        return video, reader
