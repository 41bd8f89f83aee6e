"""
Shared fixtures for the VideoUp Service tests.
"""

import pytest
from fastapi.testclient import TestClient

from videoup_service.api.server import APIServer
from videoup_service.core.config import Config
from videoup_service.video.integration import VideoModule


class BytesSource:
    """Minimal async-readable source, like an uploaded multipart part"""

    def __init__(self, data: bytes, fail_after: int = None):
        self._data = data
        self._position = 0
        self._fail_after = fail_after
        self.read_calls = 0

    async def read(self, size: int = -1) -> bytes:
        self.read_calls += 1
        if self._fail_after is not None and self._position >= self._fail_after:
            raise OSError("connection reset while reading upload")
        if size < 0:
            size = len(self._data) - self._position
        chunk = self._data[self._position:self._position + size]
        self._position += len(chunk)
        return chunk


@pytest.fixture
def config(tmp_path):
    """Default configuration backed by a config file that does not exist yet"""
    return Config(str(tmp_path / "config.json"))


@pytest.fixture
def video_module(config):
    return VideoModule(config)


@pytest.fixture
def client(config, video_module):
    server = APIServer(config, video_module)
    with TestClient(server.app) as test_client:
        yield test_client


def create_video(client, title="a", duration=10, content_type="video/mp4", **extra):
    body = {"title": title, "duration": duration, "contentType": content_type, **extra}
    response = client.post("/video", json=body)
    assert response.status_code == 200, response.text
    return response.json()


def upload_data(client, video_id, data: bytes, content_type="video/mp4"):
    return client.post(f"/video/{video_id}/data", files={"data": ("video.mp4", data, content_type)})
