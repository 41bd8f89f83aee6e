"""
Video Domain Interfaces.

Abstract interfaces that define contracts for video operations.
These interfaces allow dependency inversion - domain logic doesn't depend on infrastructure.
"""

from abc import ABC, abstractmethod
from typing import AsyncIterator, List, Optional, Protocol

from .models import Video, StreamRange


class AsyncReadable(Protocol):
    """Anything with an async ``read(size)``, e.g. an uploaded multipart part"""

    async def read(self, size: int = -1) -> bytes:
        ...


class VideoRepository(ABC):
    """Abstract registry of video metadata records"""

    @abstractmethod
    def list(self) -> List[Video]:
        """Get all videos in insertion order"""
        pass

    @abstractmethod
    def add(self, video: Video, base_url: str) -> Video:
        """Assign id and data URL, store the video and return it"""
        pass

    @abstractmethod
    def get(self, video_id: int) -> Optional[Video]:
        """Get video by ID"""
        pass

    @abstractmethod
    def exists(self, video_id: int) -> bool:
        """Check if a video is registered"""
        pass

    @abstractmethod
    def count(self) -> int:
        """Number of registered videos"""
        pass


class VideoDataReader(ABC):
    """Handle on one stored payload, valid even if the payload is replaced meanwhile"""

    @property
    @abstractmethod
    def size_bytes(self) -> int:
        pass

    @abstractmethod
    def iter_range(
        self,
        range_request: Optional[StreamRange] = None,
        chunk_size: int = 65536
    ) -> AsyncIterator[bytes]:
        """Yield the payload (or a byte range of it) in chunks, closing the handle at the end"""
        pass

    @abstractmethod
    async def close(self) -> None:
        pass


class VideoDataStore(ABC):
    """Abstract byte-store for video payloads keyed by video id"""

    @abstractmethod
    async def save(
        self,
        video_id: int,
        source: AsyncReadable,
        chunk_size: int = 65536,
        max_size_bytes: Optional[int] = None
    ) -> int:
        """Read ``source`` fully and replace the payload for ``video_id``.

        Returns the number of bytes stored.
        """
        pass

    @abstractmethod
    async def open(self, video_id: int) -> Optional[VideoDataReader]:
        """Open the stored payload, or None if nothing was uploaded"""
        pass

    @abstractmethod
    async def has_data(self, video_id: int) -> bool:
        pass

    @abstractmethod
    async def clear(self) -> None:
        """Drop every stored payload"""
        pass

    @abstractmethod
    def get_stats(self) -> dict:
        """Number of stored payloads and their total size in bytes"""
        pass
