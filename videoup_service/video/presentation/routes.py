"""
Video API Routes.

FastAPI route definitions for video metadata and payload transfer.
"""

from typing import List, Optional

from fastapi import APIRouter, File, Request, UploadFile

from .controllers import VideoController
from .schemas import VideoRequest, VideoResponse, VideoStatusResponse


def create_video_routes(video_controller: VideoController) -> APIRouter:
    """Create video API routes with dependency injection"""

    router = APIRouter(prefix="/video", tags=["video"])

    @router.get("", response_model=List[VideoResponse])
    async def list_videos():
        """
        List every video added to the server.

        The list is not persisted across restarts.
        """
        return await video_controller.list_videos()

    @router.post("", response_model=VideoResponse)
    async def add_video(video: VideoRequest, request: Request):
        """
        Register video metadata.

        The server assigns **id** and **dataUrl**; values sent for them are ignored.
        """
        return await video_controller.add_video(video, request)

    @router.post("/{video_id}/data", response_model=VideoStatusResponse)
    async def upload_video_data(video_id: int, data: Optional[UploadFile] = File(None)):
        """
        Upload the binary payload as multipart part **data**.

        Replaces any payload uploaded earlier for the same video.
        """
        return await video_controller.upload_video_data(video_id, data)

    @router.get("/{video_id}/data")
    async def get_video_data(video_id: int, request: Request):
        """
        Download the binary payload.

        Supports single byte-range requests (206 Partial Content).
        """
        return await video_controller.get_video_data(video_id, request)

    return router
