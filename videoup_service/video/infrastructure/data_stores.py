"""
Video Data Store Implementations.

In-memory and file-based byte-stores for uploaded video payloads.
"""

import logging
import os
import re
import threading
import uuid
from pathlib import Path
from typing import AsyncIterator, Dict, Optional, Tuple

import aiofiles
import aiofiles.os

from ..domain.exceptions import VideoDataIOError, VideoDataTooLargeError
from ..domain.interfaces import AsyncReadable, VideoDataReader, VideoDataStore
from ..domain.models import StreamRange


# Only names this store writes: payloads and in-progress temp files
_PAYLOAD_NAME = re.compile(r"^-?\d+\.bin$")
_TEMP_NAME = re.compile(r"^\.-?\d+\.[0-9a-f]{32}\.part$")


def _range_bounds(range_request: Optional[StreamRange], size: int) -> Tuple[int, int]:
    """Inclusive (start, end) for a range, the whole payload when None"""
    if range_request is None:
        return 0, size - 1
    end = range_request.end if range_request.end is not None else size - 1
    return range_request.start, min(end, size - 1)


class InMemoryVideoDataReader(VideoDataReader):
    """Reader over an immutable snapshot of a payload"""

    def __init__(self, data: bytes):
        self._data = data

    @property
    def size_bytes(self) -> int:
        return len(self._data)

    async def iter_range(
        self,
        range_request: Optional[StreamRange] = None,
        chunk_size: int = 65536
    ) -> AsyncIterator[bytes]:
        start, end = _range_bounds(range_request, len(self._data))
        view = memoryview(self._data)
        position = start
        while position <= end:
            stop = min(position + chunk_size, end + 1)
            yield bytes(view[position:stop])
            position = stop

    async def close(self) -> None:
        pass


class InMemoryVideoDataStore(VideoDataStore):
    """Keeps payloads in a dict; lost when the process exits"""

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self._lock = threading.Lock()
        self._payloads: Dict[int, bytes] = {}

    async def save(
        self,
        video_id: int,
        source: AsyncReadable,
        chunk_size: int = 65536,
        max_size_bytes: Optional[int] = None
    ) -> int:
        buffer = bytearray()
        try:
            while True:
                chunk = await source.read(chunk_size)
                if not chunk:
                    break
                buffer.extend(chunk)
                if max_size_bytes is not None and len(buffer) > max_size_bytes:
                    raise VideoDataTooLargeError(video_id, max_size_bytes)
        except OSError as e:
            raise VideoDataIOError(f"Failed to read upload for video {video_id}: {e}", video_id) from e

        data = bytes(buffer)
        with self._lock:
            self._payloads[video_id] = data

        self.logger.debug(f"Stored {len(data)} bytes for video {video_id}")
        return len(data)

    async def open(self, video_id: int) -> Optional[VideoDataReader]:
        with self._lock:
            data = self._payloads.get(video_id)
        if data is None:
            return None
        return InMemoryVideoDataReader(data)

    async def has_data(self, video_id: int) -> bool:
        with self._lock:
            return video_id in self._payloads

    async def clear(self) -> None:
        with self._lock:
            self._payloads.clear()

    def get_stats(self) -> dict:
        with self._lock:
            return {
                "payloads": len(self._payloads),
                "size_bytes": sum(len(data) for data in self._payloads.values()),
            }


class FileVideoDataReader(VideoDataReader):
    """Reader over an already-open payload file"""

    def __init__(self, handle, size_bytes: int, video_id: int):
        self._handle = handle
        self._size_bytes = size_bytes
        self._video_id = video_id
        self._closed = False
        self.logger = logging.getLogger(__name__)

    @property
    def size_bytes(self) -> int:
        return self._size_bytes

    async def iter_range(
        self,
        range_request: Optional[StreamRange] = None,
        chunk_size: int = 65536
    ) -> AsyncIterator[bytes]:
        start, end = _range_bounds(range_request, self._size_bytes)
        try:
            await self._handle.seek(start)
            remaining = end - start + 1
            while remaining > 0:
                chunk = await self._handle.read(min(chunk_size, remaining))
                if not chunk:
                    break
                remaining -= len(chunk)
                yield chunk
        except OSError as e:
            self.logger.error(f"Error streaming data for video {self._video_id}: {e}")
            raise VideoDataIOError(f"Failed to read data for video {self._video_id}: {e}", self._video_id) from e
        finally:
            await self.close()

    async def close(self) -> None:
        if not self._closed:
            self._closed = True
            await self._handle.close()


class FileSystemVideoDataStore(VideoDataStore):
    """Spools payloads to ``<base_path>/<video_id>.bin``.

    Writes go to a temporary file renamed over the target, so a reader never
    sees a half-written payload and the last completed upload wins.
    """

    def __init__(self, base_path: str):
        self.base_path = Path(base_path)
        self.logger = logging.getLogger(__name__)
        self.base_path.mkdir(parents=True, exist_ok=True)

    def _payload_path(self, video_id: int) -> Path:
        return self.base_path / f"{video_id}.bin"

    async def save(
        self,
        video_id: int,
        source: AsyncReadable,
        chunk_size: int = 65536,
        max_size_bytes: Optional[int] = None
    ) -> int:
        target = self._payload_path(video_id)
        temp_path = self.base_path / f".{video_id}.{uuid.uuid4().hex}.part"
        written = 0

        try:
            async with aiofiles.open(temp_path, "wb") as f:
                while True:
                    chunk = await source.read(chunk_size)
                    if not chunk:
                        break
                    written += len(chunk)
                    if max_size_bytes is not None and written > max_size_bytes:
                        raise VideoDataTooLargeError(video_id, max_size_bytes)
                    await f.write(chunk)
            await aiofiles.os.replace(temp_path, target)
        except OSError as e:
            await self._discard(temp_path)
            raise VideoDataIOError(f"Failed to store data for video {video_id}: {e}", video_id) from e
        except VideoDataTooLargeError:
            await self._discard(temp_path)
            raise

        self.logger.debug(f"Stored {written} bytes for video {video_id} at {target}")
        return written

    async def open(self, video_id: int) -> Optional[VideoDataReader]:
        path = self._payload_path(video_id)
        try:
            handle = await aiofiles.open(path, "rb")
        except FileNotFoundError:
            return None
        except OSError as e:
            raise VideoDataIOError(f"Failed to open data for video {video_id}: {e}", video_id) from e

        size = os.fstat(handle.fileno()).st_size
        return FileVideoDataReader(handle, size, video_id)

    async def has_data(self, video_id: int) -> bool:
        return await aiofiles.os.path.exists(self._payload_path(video_id))

    async def clear(self) -> None:
        """Remove payload and temp files; anything else in ``base_path`` is left alone"""
        removed = 0
        for path in self.base_path.iterdir():
            if not path.is_file():
                continue
            if _PAYLOAD_NAME.match(path.name) or _TEMP_NAME.match(path.name):
                await self._discard(path)
                removed += 1
        if removed:
            self.logger.info(f"Removed {removed} stale payload files from {self.base_path}")

    def get_stats(self) -> dict:
        sizes = [
            path.stat().st_size
            for path in self.base_path.iterdir()
            if path.is_file() and _PAYLOAD_NAME.match(path.name)
        ]
        return {"payloads": len(sizes), "size_bytes": sum(sizes)}

    async def _discard(self, path: Path) -> None:
        try:
            await aiofiles.os.remove(path)
        except FileNotFoundError:
            pass
