"""
Video Module Integration.

Composition root for the video service: builds the single registry and
payload store for the process and wires them into the HTTP layer.
"""

import logging
from typing import Optional

from ..core.config import Config

# Domain interfaces
from .domain.interfaces import VideoRepository, VideoDataStore

# Infrastructure implementations
from .infrastructure.repositories import InMemoryVideoRepository
from .infrastructure.data_stores import InMemoryVideoDataStore, FileSystemVideoDataStore

# Application services
from .application.video_service import VideoService

# Presentation layer
from .presentation.controllers import VideoController
from .presentation.routes import create_video_routes


class VideoModule:
    """
    Main video module that provides dependency injection and service composition.

    One instance owns the video registry and the payload store for the whole
    process; request handlers only ever see them through the controller.
    """

    def __init__(
        self,
        config: Config,
        video_repository: Optional[VideoRepository] = None,
        data_store: Optional[VideoDataStore] = None
    ):
        self.config = config
        self.logger = logging.getLogger(__name__)

        # Infrastructure layer
        self.video_repository = video_repository or InMemoryVideoRepository()
        self.data_store = data_store or self._create_data_store()

        # Application layer
        self.video_service = VideoService(
            video_repository=self.video_repository,
            data_store=self.data_store,
            chunk_size_bytes=self.config.storage.chunk_size_bytes,
            max_upload_size_bytes=self.config.storage.max_upload_size_bytes
        )

        # Presentation layer
        self.video_controller = VideoController(
            self.video_service,
            public_base_url=self.config.server.public_base_url
        )

        self.logger.info(f"Video module initialized ({type(self.data_store).__name__})")

    def _create_data_store(self) -> VideoDataStore:
        """Create payload store implementation"""
        backend = self.config.storage.backend
        if backend == "filesystem":
            return FileSystemVideoDataStore(self.config.storage.base_path)
        if backend != "memory":
            self.logger.warning(f"Unknown storage backend '{backend}', using in-memory store")
        return InMemoryVideoDataStore()

    def get_api_routes(self):
        """Get FastAPI routes for video functionality"""
        return create_video_routes(video_controller=self.video_controller)

    async def startup(self) -> None:
        """Drop payloads left over from a previous run"""
        await self.data_store.clear()

    async def cleanup(self) -> None:
        """Release payloads held by the store"""
        try:
            await self.data_store.clear()
            self.logger.info("Video module cleanup completed")
        except Exception as e:
            self.logger.error(f"Error during video module cleanup: {e}")

    def get_module_status(self) -> dict:
        """Get status information about the video module"""
        return {
            "video_repository": type(self.video_repository).__name__,
            "data_store": type(self.data_store).__name__,
            "storage_backend": self.config.storage.backend,
            "max_upload_size_mb": self.config.storage.max_upload_size_mb,
            "video_count": self.video_repository.count(),
            "payload_stats": self.data_store.get_stats(),
        }


def create_video_module(config: Config) -> VideoModule:
    """
    Factory function to create a configured video module.

    This is the main entry point for wiring video functionality into the API server.
    """
    return VideoModule(config=config)
