"""
Video HTTP Controllers.

Handle HTTP requests and responses for video operations.
"""

import logging
from typing import List, Optional

from fastapi import BackgroundTasks, HTTPException, Request, UploadFile
from fastapi.responses import StreamingResponse

from ..application.video_service import VideoService
from ..domain.exceptions import (
    VideoError,
    VideoNotFoundError,
    VideoDataNotFoundError,
    VideoDataIOError,
    VideoDataTooLargeError,
)
from ..domain.models import StreamRange
from .schemas import VideoRequest, VideoResponse, VideoStatusResponse


_DEFAULT_PORTS = {"http": 80, "https": 443}


def get_url_base(request: Request, public_base_url: Optional[str] = None) -> str:
    """Externally visible ``scheme://host[:port]`` of the server handling ``request``"""
    if public_base_url:
        return public_base_url.rstrip("/")

    url = request.url
    host = url.hostname or "localhost"
    if ":" in host:
        host = f"[{host}]"

    port = url.port
    if port is None or port == _DEFAULT_PORTS.get(url.scheme):
        return f"{url.scheme}://{host}"
    return f"{url.scheme}://{host}:{port}"


def to_http_exception(error: VideoError) -> HTTPException:
    """Map a domain error to the HTTP status reported to the client"""
    if isinstance(error, (VideoNotFoundError, VideoDataNotFoundError)):
        return HTTPException(status_code=404, detail=error.message)
    if isinstance(error, VideoDataTooLargeError):
        return HTTPException(status_code=413, detail=error.message)
    if isinstance(error, VideoDataIOError):
        return HTTPException(status_code=500, detail=error.message)
    return HTTPException(status_code=500, detail=str(error))


class VideoController:
    """Controller for video metadata and payload operations"""

    def __init__(self, video_service: VideoService, public_base_url: Optional[str] = None):
        self.video_service = video_service
        self.public_base_url = public_base_url
        self.logger = logging.getLogger(__name__)

    async def list_videos(self) -> List[VideoResponse]:
        """List all registered videos"""
        videos = await self.video_service.list_videos()
        return [VideoResponse.from_domain(video) for video in videos]

    async def add_video(self, video_request: VideoRequest, request: Request) -> VideoResponse:
        """Register a video and return it with its id and data URL"""
        base_url = get_url_base(request, self.public_base_url)
        video = await self.video_service.add_video(video_request.to_domain(), base_url)
        return VideoResponse.from_domain(video)

    async def upload_video_data(self, video_id: int, data: Optional[UploadFile]) -> VideoStatusResponse:
        """Store the uploaded payload for a video"""
        try:
            await self.video_service.get_video(video_id)

            if data is None:
                raise HTTPException(status_code=400, detail="Multipart part 'data' is required")

            status = await self.video_service.save_video_data(video_id, data)
            return VideoStatusResponse.from_domain(status)

        except HTTPException:
            raise
        except VideoNotFoundError as e:
            self.logger.warning(f"Upload rejected: {e.message}")
            raise to_http_exception(e)
        except VideoError as e:
            raise to_http_exception(e)
        except Exception as e:
            self.logger.error(f"Error uploading data for video {video_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    async def get_video_data(self, video_id: int, request: Request) -> StreamingResponse:
        """Stream the stored payload, honouring a single-range ``Range`` header"""
        try:
            video, reader = await self.video_service.open_video_data(video_id)
        except VideoError as e:
            self.logger.info(f"Data fetch failed: {e.message}")
            raise to_http_exception(e)

        size = reader.size_bytes
        chunk_size = self.video_service.chunk_size_bytes
        headers = {"Accept-Ranges": "bytes"}

        # The body may never be iterated if the client goes away first
        cleanup = BackgroundTasks()
        cleanup.add_task(reader.close)

        range_request = None
        range_header = request.headers.get("range")
        if range_header:
            try:
                range_request = StreamRange.from_header(range_header, size)
            except ValueError as e:
                await reader.close()
                raise HTTPException(status_code=416, detail=f"Invalid range request: {e}", headers={"Content-Range": f"bytes */{size}"})

        if range_request is not None:
            headers["Content-Range"] = f"bytes {range_request.start}-{range_request.end}/{size}"
            headers["Content-Length"] = str(range_request.size)
            return StreamingResponse(reader.iter_range(range_request, chunk_size), status_code=206, headers=headers, media_type=video.media_type, background=cleanup)

        headers["Content-Length"] = str(size)
        return StreamingResponse(reader.iter_range(None, chunk_size), status_code=200, headers=headers, media_type=video.media_type, background=cleanup)
