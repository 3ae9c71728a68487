import json

import pytest
from fastapi.testclient import TestClient

from api.app import create_app, format_event
from config.settings import AppSettings
from core.models.domain import ProgressEvent
from core.services import build_services
from fakes import FakeCaptioner, FakeEmbedder, write_images


def _frames(body: str):
    return [json.loads(chunk[len("data: "):]) for chunk in body.split("\n\n") if chunk.startswith("data: ")]


@pytest.fixture
def services(upload_dir):
    settings = AppSettings(upload_folder=upload_dir, throttle_seconds=0)
    captioner = FakeCaptioner(
        captions={b"a.jpg": "dog on beach", b"b.jpg": "cat on sofa", b"c.jpg": "dog in park"},
        failing=[b"d.jpg"],
    )
    embedder = FakeEmbedder(
        vectors={
            "dog on beach": [1.0, 0.0, 0.0],
            "cat on sofa": [0.0, 1.0, 0.0],
            "dog in park": [0.9, 0.1, 0.0],
            "dog": [1.0, 0.0, 0.0],
        }
    )
    return build_services(settings, captioner=captioner, embedder=embedder)


@pytest.fixture
def client(services, upload_dir):
    write_images(upload_dir, ["a.jpg", "b.jpg", "c.jpg", "d.jpg"])
    return TestClient(create_app(services))


def test_format_event_is_a_single_sse_frame():
    frame = format_event(ProgressEvent(processed=1, total=2, current_file="a.jpg"))

    assert frame == 'data: {"progress": 50, "processed": 1, "total": 2, "currentFile": "a.jpg"}\n\n'


def test_process_embeddings_streams_progress(client, services):
    response = client.post("/api/process-embeddings")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/event-stream")
    frames = _frames(response.text)
    assert [frame["processed"] for frame in frames[:-1]] == [1, 2, 3, 4]
    assert frames[-1] == {"complete": True, "progress": 100, "processed": 4, "total": 4}
    assert services.vector_store.size() == 3


def test_process_embeddings_reports_enumeration_failure(tmp_path):
    services = build_services(
        AppSettings(upload_folder=tmp_path / "uploads", throttle_seconds=0),
        captioner=FakeCaptioner(),
        embedder=FakeEmbedder(),
    )
    app = create_app(services)
    (tmp_path / "uploads").rmdir()

    frames = _frames(TestClient(app).post("/api/process-embeddings").text)

    assert len(frames) == 1
    assert frames[0]["error"] == "Processing failed"


def test_search_smart_after_processing(client):
    client.post("/api/process-embeddings")

    body = client.post("/api/search", json={"query": "dog", "useSmartSearch": True}).json()

    assert body["searchType"] == "smart"
    assert body["query"] == "dog"
    assert [result["filename"] for result in body["results"]] == ["a.jpg", "c.jpg", "b.jpg"]
    assert body["results"][0]["path"] == "/uploads/a.jpg"
    assert "confidence" in body["results"][0]


def test_search_smart_without_index_falls_back_to_basic(client):
    body = client.post("/api/search", json={"query": "dog", "useSmartSearch": True}).json()

    assert body["searchType"] == "basic"
    assert len(body["results"]) == 4
    assert all("confidence" not in result for result in body["results"])
    assert all(result["caption"] == "Enable smart search for better results" for result in body["results"])


def test_search_requires_query(client):
    response = client.post("/api/search", json={"query": "", "useSmartSearch": True})

    assert response.status_code == 400
    assert response.json() == {"error": "Search query required"}
    assert client.post("/api/search", json={}).status_code == 400


def test_photos_and_status_reflect_index(client):
    before = client.get("/api/photos").json()
    assert before["smartSearchEnabled"] is False
    assert client.get("/api/status").json() == {"ready": False, "size": 0}

    client.post("/api/process-embeddings")

    after = client.get("/api/photos").json()
    by_name = {photo["filename"]: photo for photo in after["photos"]}
    assert after["smartSearchEnabled"] is True
    assert by_name["a.jpg"]["hasEmbedding"] is True
    assert by_name["a.jpg"]["description"] == "dog on beach"
    assert by_name["d.jpg"]["hasEmbedding"] is False
    assert by_name["d.jpg"]["description"] is None
    assert client.get("/api/status").json() == {"ready": True, "size": 3}


def test_health(client):
    body = client.get("/api/health").json()

    assert body["status"] == "OK"
    assert body["smartSearchReady"] is False
    assert body["photosProcessed"] == 0


def test_uploads_are_served(client):
    response = client.get("/uploads/a.jpg")

    assert response.status_code == 200
    assert response.content == b"a.jpg"


def test_process_embeddings_rejects_concurrent_run(client, services):
    stream = services.index_builder.run()
    next(stream)

    response = client.post("/api/process-embeddings")

    assert response.status_code == 409
    stream.close()


def test_zero_caption_embedding_does_not_break_smart_search(upload_dir):
    write_images(upload_dir, ["a.jpg", "b.jpg", "c.jpg"])
    services = build_services(
        AppSettings(upload_folder=upload_dir, throttle_seconds=0),
        captioner=FakeCaptioner(captions={b"a.jpg": "dog on beach", b"b.jpg": "cat on sofa", b"c.jpg": "dog in park"}),
        embedder=FakeEmbedder(
            vectors={
                "dog on beach": [0.0, 0.0, 0.0],
                "cat on sofa": [0.0, 1.0, 0.0],
                "dog in park": [0.9, 0.1, 0.0],
                "dog": [1.0, 0.0, 0.0],
            }
        ),
    )
    client = TestClient(create_app(services))

    client.post("/api/process-embeddings")
    response = client.post("/api/search", json={"query": "dog", "useSmartSearch": True})

    assert services.vector_store.size() == 2
    assert response.status_code == 200
    body = response.json()
    assert body["searchType"] == "smart"
    assert [result["filename"] for result in body["results"]] == ["c.jpg", "b.jpg"]
