"""
Tests for the in-memory video registry.
"""

import threading

from videoup_service.video.domain.models import Video
from videoup_service.video.infrastructure.repositories import InMemoryVideoRepository, generate_video_id


def test_generated_ids_fit_signed_64_bits():
    for _ in range(100):
        video_id = generate_video_id()
        assert -(2 ** 63) <= video_id < 2 ** 63


def test_add_assigns_id_and_data_url():
    repository = InMemoryVideoRepository()
    video = Video(title="a", duration=10, content_type="video/mp4")

    stored = repository.add(video, "http://localhost:8080")

    assert stored.video_id is not None
    assert stored.data_url == f"http://localhost:8080/{video.fold()}"
    assert repository.get(stored.video_id) is stored
    assert repository.exists(stored.video_id)


def test_add_does_not_mutate_the_input():
    repository = InMemoryVideoRepository()
    video = Video(title="a")

    repository.add(video, "http://localhost")

    assert video.video_id is None
    assert video.data_url is None


def test_list_preserves_insertion_order_and_is_a_snapshot():
    repository = InMemoryVideoRepository()
    added = [repository.add(Video(title=str(i)), "http://localhost") for i in range(3)]

    snapshot = repository.list()
    repository.add(Video(title="late"), "http://localhost")

    assert [v.video_id for v in snapshot] == [v.video_id for v in added]
    assert repository.count() == 4


def test_get_unknown_id_returns_none():
    repository = InMemoryVideoRepository()
    assert repository.get(1) is None
    assert not repository.exists(1)


def test_colliding_ids_are_regenerated():
    ids = iter([7, 7, 7, 8])
    repository = InMemoryVideoRepository(id_generator=lambda: next(ids))

    first = repository.add(Video(title="a"), "http://localhost")
    second = repository.add(Video(title="a"), "http://localhost")

    assert first.video_id == 7
    assert second.video_id == 8


def test_same_metadata_gets_distinct_ids_but_same_url():
    repository = InMemoryVideoRepository()

    first = repository.add(Video(title="a", duration=1), "http://localhost")
    second = repository.add(Video(title="a", duration=1), "http://localhost")

    assert first.video_id != second.video_id
    assert first.data_url == second.data_url


def test_concurrent_adds_lose_nothing():
    repository = InMemoryVideoRepository()

    def worker(n):
        for i in range(50):
            repository.add(Video(title=f"{n}-{i}"), "http://localhost")

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    videos = repository.list()
    assert len(videos) == 400
    assert len({v.video_id for v in videos}) == 400
