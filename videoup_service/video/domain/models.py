"""
Video Domain Models.

Pure business entities and value objects for video operations.
These models contain no external dependencies and represent core business concepts.
"""

from dataclasses import dataclass
from typing import Optional
from enum import Enum


_UINT32_MASK = 0xFFFFFFFF


class VideoState(Enum):
    """Upload/processing state of a video's binary payload"""
    PROCESSING = "PROCESSING"
    READY = "READY"
    FAILED = "FAILED"


@dataclass(frozen=True)
class VideoStatus:
    """Status value object returned after a payload upload"""
    state: VideoState = VideoState.PROCESSING


@dataclass
class Video:
    """Video metadata entity.

    ``video_id`` and ``data_url`` are server-authoritative and are only ever
    assigned by the repository when the video is added.
    """
    title: Optional[str] = None
    duration: int = 0
    content_type: Optional[str] = None
    video_id: Optional[int] = None
    data_url: Optional[str] = None

    @property
    def media_type(self) -> str:
        """MIME type to serve the payload with"""
        return self.content_type or "application/octet-stream"

    def fold(self) -> str:
        """Path segment for the data URL, derived from the client-supplied fields"""
        return str(fold_fields(self.title, self.duration, self.content_type))


def _string_hash(value: Optional[str]) -> int:
    if value is None:
        return 0
    h = 0
    for ch in value:
        h = (31 * h + ord(ch)) & _UINT32_MASK
    return h


def _int_hash(value: Optional[int]) -> int:
    if value is None:
        return 0
    value &= 0xFFFFFFFFFFFFFFFF
    return (value ^ (value >> 32)) & _UINT32_MASK


def fold_fields(title: Optional[str], duration: Optional[int], content_type: Optional[str]) -> int:
    """Deterministic, non-cryptographic 32-bit hash of a video's descriptive fields.

    Not an identifier: distinct videos may share a value. The result is stable
    across process runs, unlike the builtin ``hash()`` for strings.
    """
    result = 1
    for part in (_string_hash(title), _int_hash(duration), _string_hash(content_type)):
        result = (31 * result + part) & _UINT32_MASK
    return result


@dataclass(frozen=True)
class StreamRange:
    """HTTP range request value object"""
    start: int
    end: Optional[int] = None

    def __post_init__(self):
        if self.start < 0:
            raise ValueError("Start byte cannot be negative")
        if self.end is not None and self.end < self.start:
            raise ValueError("End byte cannot be less than start byte")

    @property
    def size(self) -> Optional[int]:
        """Get range size in bytes"""
        if self.end is not None:
            return self.end - self.start + 1
        return None

    @classmethod
    def from_header(cls, range_header: str, file_size: int) -> Optional["StreamRange"]:
        """Parse HTTP Range header against a payload of ``file_size`` bytes.

        Returns None for a header that should be ignored (malformed, another
        unit, or several ranges) and raises ValueError when the range is valid
        but cannot be satisfied.
        """
        if not range_header.startswith('bytes='):
            return None

        range_spec = range_header[6:].strip()  # Remove 'bytes='

        if ',' in range_spec or '-' not in range_spec:
            return None

        start_str, end_str = range_spec.split('-', 1)

        if not (start_str or end_str) or not all(part.isdigit() for part in (start_str, end_str) if part):
            return None
        if start_str and end_str and int(end_str) < int(start_str):
            return None

        if not start_str:
            # Suffix range (e.g., "-500" means last 500 bytes)
            suffix_length = int(end_str)
            if suffix_length == 0 or file_size == 0:
                raise ValueError("Range not satisfiable")
            return cls(start=max(0, file_size - suffix_length), end=file_size - 1)

        start = int(start_str)
        if start >= file_size:
            raise ValueError("Range not satisfiable")

        end = min(int(end_str), file_size - 1) if end_str else file_size - 1
        return cls(start=start, end=end)
