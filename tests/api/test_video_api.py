"""
HTTP tests for the /video endpoints.
"""

import asyncio

import pytest
from fastapi.testclient import TestClient

from conftest import create_video, upload_data
from videoup_service.api.server import APIServer
from videoup_service.core.config import Config
from videoup_service.video.domain.exceptions import VideoDataIOError
from videoup_service.video.domain.models import fold_fields
from videoup_service.video.infrastructure.data_stores import InMemoryVideoDataStore
from videoup_service.video.integration import VideoModule


def test_root_and_health(client):
    assert client.get("/").json()["message"] == "VideoUp Service API"

    health = client.get("/health")
    assert health.status_code == 200
    assert health.json()["status"] == "healthy"


def test_list_is_empty_at_startup(client):
    response = client.get("/video")
    assert response.status_code == 200
    assert response.json() == []


def test_create_assigns_id_and_data_url(client):
    video = create_video(client, title="a", duration=10, content_type="video/mp4")

    assert isinstance(video["id"], int)
    assert video["title"] == "a"
    assert video["duration"] == 10
    assert video["contentType"] == "video/mp4"
    assert video["dataUrl"] == f"http://testserver/{fold_fields('a', 10, 'video/mp4')}"
    assert video["dataUrl"].rsplit("/", 1)[1].isdigit()


def test_create_ignores_client_supplied_server_fields(client):
    video = create_video(client, id=42, dataUrl="http://evil.example/42")

    assert video["id"] != 42
    assert video["dataUrl"].startswith("http://testserver/")


def test_create_accepts_partial_metadata(client):
    response = client.post("/video", json={"title": "untitled"})

    assert response.status_code == 200
    assert response.json()["duration"] == 0
    assert response.json()["contentType"] is None


def test_create_rejects_malformed_body(client):
    response = client.post("/video", content=b"not json", headers={"Content-Type": "application/json"})
    assert response.status_code == 422


def test_ids_are_pairwise_distinct(client):
    ids = [create_video(client, title=f"v{i}")["id"] for i in range(50)]
    assert len(set(ids)) == 50


def test_list_returns_every_created_video_unchanged(client):
    created = [create_video(client, title=f"clip {i}", duration=i) for i in range(5)]

    listed = client.get("/video").json()

    assert len(listed) == 5
    assert sorted(listed, key=lambda v: v["id"]) == sorted(created, key=lambda v: v["id"])
    for video in listed:
        assert video["dataUrl"].endswith("/" + str(fold_fields(video["title"], video["duration"], video["contentType"])))


def test_upload_and_fetch_round_trip(client):
    video = create_video(client, title="a", duration=10, content_type="video/mp4")

    upload = upload_data(client, video["id"], bytes([1, 2, 3]))
    assert upload.status_code == 200
    assert upload.json() == {"state": "PROCESSING"}

    fetched = client.get(f"/video/{video['id']}/data")
    assert fetched.status_code == 200
    assert fetched.content == bytes([1, 2, 3])
    assert fetched.headers["content-type"] == "video/mp4"
    assert fetched.headers["content-length"] == "3"


def test_upload_unknown_id_is_not_found_and_stores_nothing(client, video_module):
    response = upload_data(client, 12345, b"payload")

    assert response.status_code == 404
    assert not asyncio.run(video_module.data_store.has_data(12345))


def test_fetch_unknown_id_is_not_found(client):
    assert client.get("/video/12345/data").status_code == 404


def test_fetch_without_upload_is_not_found(client):
    video = create_video(client)

    response = client.get(f"/video/{video['id']}/data")

    assert response.status_code == 404
    assert "No data" in response.json()["detail"]


def test_reupload_replaces_previous_payload(client):
    video = create_video(client)

    upload_data(client, video["id"], b"first payload")
    upload_data(client, video["id"], b"second")

    assert client.get(f"/video/{video['id']}/data").content == b"second"


def test_upload_without_data_part_is_bad_request(client):
    video = create_video(client)

    response = client.post(f"/video/{video['id']}/data", data={"other": "x"})

    assert response.status_code == 400


def test_fetch_without_content_type_falls_back_to_octet_stream(client):
    response = client.post("/video", json={"title": "raw"})
    video_id = response.json()["id"]
    upload_data(client, video_id, b"\x00\x01")

    fetched = client.get(f"/video/{video_id}/data")

    assert fetched.headers["content-type"] == "application/octet-stream"


def test_fetch_byte_range(client):
    video = create_video(client)
    upload_data(client, video["id"], b"0123456789")

    partial = client.get(f"/video/{video['id']}/data", headers={"Range": "bytes=2-5"})
    assert partial.status_code == 206
    assert partial.content == b"2345"
    assert partial.headers["content-range"] == "bytes 2-5/10"

    suffix = client.get(f"/video/{video['id']}/data", headers={"Range": "bytes=-3"})
    assert suffix.status_code == 206
    assert suffix.content == b"789"


def test_fetch_unsatisfiable_range(client):
    video = create_video(client)
    upload_data(client, video["id"], b"0123456789")

    response = client.get(f"/video/{video['id']}/data", headers={"Range": "bytes=50-60"})

    assert response.status_code == 416
    assert response.headers["content-range"] == "bytes */10"


def test_negative_ids_are_addressable(tmp_path):
    config = Config(str(tmp_path / "config.json"))
    module = VideoModule(config)
    module.video_repository._id_generator = lambda: -7

    with TestClient(APIServer(config, module).app) as client:
        video = create_video(client)
        assert video["id"] == -7
        assert upload_data(client, -7, b"neg").status_code == 200
        assert client.get("/video/-7/data").content == b"neg"


def test_public_base_url_overrides_request_host(tmp_path):
    config = Config(str(tmp_path / "config.json"))
    config.server.public_base_url = "https://videos.example.com/"

    with TestClient(APIServer(config, VideoModule(config)).app) as client:
        video = create_video(client)

    assert video["dataUrl"].startswith("https://videos.example.com/")
    assert video["dataUrl"].rsplit("/", 1)[1].isdigit()


def test_upload_over_size_limit_is_rejected(tmp_path):
    config = Config(str(tmp_path / "config.json"))
    config.storage.max_upload_size_mb = 1

    with TestClient(APIServer(config, VideoModule(config)).app) as client:
        video = create_video(client)
        response = upload_data(client, video["id"], b"x" * (1024 * 1024 + 1))
        assert response.status_code == 413
        assert client.get(f"/video/{video['id']}/data").status_code == 404


class FailingDataStore(InMemoryVideoDataStore):
    async def save(self, video_id, source, chunk_size=65536, max_size_bytes=None):
        raise VideoDataIOError(f"Failed to store data for video {video_id}: disk full", video_id)


def test_storage_failure_is_a_server_error(tmp_path):
    config = Config(str(tmp_path / "config.json"))
    module = VideoModule(config, data_store=FailingDataStore())

    with TestClient(APIServer(config, module).app) as client:
        video = create_video(client)
        response = upload_data(client, video["id"], b"abc")

    assert response.status_code == 500
    assert "disk full" in response.json()["detail"]


@pytest.mark.parametrize("backend", ["memory", "filesystem"])
def test_round_trip_for_each_storage_backend(tmp_path, backend):
    config = Config(str(tmp_path / "config.json"))
    config.storage.backend = backend
    config.storage.base_path = str(tmp_path / "payloads")
    config.storage.chunk_size_bytes = 4

    with TestClient(APIServer(config, VideoModule(config)).app) as client:
        video = create_video(client)
        payload = bytes(range(256)) * 4
        assert upload_data(client, video["id"], payload).status_code == 200

        fetched = client.get(f"/video/{video['id']}/data")
        assert fetched.content == payload

        partial = client.get(f"/video/{video['id']}/data", headers={"Range": "bytes=10-"})
        assert partial.content == payload[10:]


def test_malformed_range_is_ignored(client):
    video = create_video(client)
    upload_data(client, video["id"], b"0123456789")

    response = client.get(f"/video/{video['id']}/data", headers={"Range": "bytes=5-2"})

    assert response.status_code == 200
    assert response.content == b"0123456789"
    assert "content-range" not in response.headers


def test_system_status(client):
    video = create_video(client)
    upload_data(client, video["id"], b"abcd")

    response = client.get("/system/status")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["host"] == "0.0.0.0"
    assert data["port"] == 8080
    assert data["uptime_seconds"] >= 0
    assert data["video"]["storage_backend"] == "memory"
    assert data["video"]["video_count"] == 1
    assert data["video"]["payload_stats"] == {"payloads": 1, "size_bytes": 4}


def test_filesystem_backend_keeps_foreign_files_in_base_path(tmp_path):
    shared = tmp_path / "shared"
    shared.mkdir()
    (shared / "notes.txt").write_text("not a payload")

    config = Config(str(tmp_path / "config.json"))
    config.storage.backend = "filesystem"
    config.storage.base_path = str(shared)

    with TestClient(APIServer(config, VideoModule(config)).app) as client:
        video = create_video(client)
        upload_data(client, video["id"], b"abc")
        assert (shared / f"{video['id']}.bin").exists()

    assert (shared / "notes.txt").read_text() == "not a payload"
    assert not (shared / f"{video['id']}.bin").exists()
