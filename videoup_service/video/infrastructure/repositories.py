"""
Video Repository Implementations.

In-memory, thread-safe implementation of the video repository interface.
"""

import logging
import threading
import uuid
from dataclasses import replace
from typing import Callable, Dict, List, Optional

from ..domain.interfaces import VideoRepository
from ..domain.models import Video


_INT64_MASK = 0xFFFFFFFFFFFFFFFF


def generate_video_id() -> int:
    """Low 64 bits of a random UUID, as a signed 64-bit integer"""
    value = uuid.uuid4().int & _INT64_MASK
    if value >= 1 << 63:
        value -= 1 << 64
    return value


class InMemoryVideoRepository(VideoRepository):
    """Process-lifetime registry of videos"""

    def __init__(self, id_generator: Callable[[], int] = generate_video_id):
        self.logger = logging.getLogger(__name__)
        self._lock = threading.RLock()
        self._id_generator = id_generator

        self._videos: List[Video] = []
        self._index: Dict[int, Video] = {}

    def list(self) -> List[Video]:
        """Get all videos in insertion order"""
        with self._lock:
            return list(self._videos)

    def add(self, video: Video, base_url: str) -> Video:
        """Assign a fresh id and the data URL, then register the video"""
        stored = replace(video)

        with self._lock:
            video_id = self._id_generator()
            while video_id in self._index:
                self.logger.warning(f"Generated video id {video_id} collides, regenerating")
                video_id = self._id_generator()

            stored.video_id = video_id
            stored.data_url = f"{base_url.rstrip('/')}/{stored.fold()}"

            self._videos.append(stored)
            self._index[video_id] = stored

        self.logger.info(f"Registered video {video_id} ({stored.title!r}) at {stored.data_url}")
        return stored

    def get(self, video_id: int) -> Optional[Video]:
        """Get video by ID"""
        with self._lock:
            return self._index.get(video_id)

    def exists(self, video_id: int) -> bool:
        """Check if video exists"""
        with self._lock:
            return video_id in self._index

    def count(self) -> int:
        with self._lock:
            return len(self._videos)
