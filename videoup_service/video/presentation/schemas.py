"""
Video API Request/Response Schemas.

Pydantic models for API serialization and validation.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from ..domain.models import Video, VideoState, VideoStatus


class VideoRequest(BaseModel):
    """Video metadata sent by the client.

    ``id`` and ``dataUrl`` are accepted so a client may echo a previous
    response back, but they are never used.
    """
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "title": "a",
                "duration": 10,
                "contentType": "video/mp4"
            }
        },
    )

    title: Optional[str] = Field(None, description="Video title")
    duration: int = Field(0, description="Video duration")
    content_type: Optional[str] = Field(None, alias="contentType", description="MIME type of the payload")
    id: Optional[int] = Field(None, description="Ignored, assigned by the server")
    data_url: Optional[str] = Field(None, alias="dataUrl", description="Ignored, assigned by the server")

    def to_domain(self) -> Video:
        return Video(title=self.title, duration=self.duration, content_type=self.content_type)


class VideoResponse(BaseModel):
    """Video as stored by the server"""
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": -5817416204564396211,
                "title": "a",
                "duration": 10,
                "contentType": "video/mp4",
                "dataUrl": "http://localhost:8080/1374529163"
            }
        },
    )

    id: int = Field(..., description="Server-assigned identifier")
    title: Optional[str] = Field(None, description="Video title")
    duration: int = Field(0, description="Video duration")
    content_type: Optional[str] = Field(None, alias="contentType", description="MIME type of the payload")
    data_url: str = Field(..., alias="dataUrl", description="Full URL of the binary payload")

    @classmethod
    def from_domain(cls, video: Video) -> "VideoResponse":
        return cls(
            id=video.video_id,
            title=video.title,
            duration=video.duration,
            content_type=video.content_type,
            data_url=video.data_url,
        )


class VideoStatusResponse(BaseModel):
    """Result of a payload upload"""
    model_config = ConfigDict(json_schema_extra={"example": {"state": "PROCESSING"}})

    state: VideoState = Field(..., description="Upload state")

    @classmethod
    def from_domain(cls, status: VideoStatus) -> "VideoStatusResponse":
        return cls(state=status.state)
