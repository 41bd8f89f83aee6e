"""
Video Infrastructure Layer.

Contains implementations of domain interfaces: the in-memory video registry
and the in-memory / file-system payload stores.
"""

from .repositories import InMemoryVideoRepository, generate_video_id
from .data_stores import InMemoryVideoDataStore, FileSystemVideoDataStore

__all__ = [
    "InMemoryVideoRepository",
    "generate_video_id",
    "InMemoryVideoDataStore",
    "FileSystemVideoDataStore",
]
