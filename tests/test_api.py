import pytest
from fastapi.testclient import TestClient

from subtrack.api import build_service, create_app, create_default_app
from subtrack.bidi import PDF, RLE
from subtrack.subtitle_service import SubtitleService


@pytest.fixture
def client(make_fetcher, sample_srt):
    fetcher = make_fetcher({
        "/subs/en.srt": sample_srt.encode("utf-8"),
        "/subs/he.vtt": "WEBVTT\n\n00:00:01.000 --> 00:00:02.000\nשלום\n".encode("cp1255"),
    })
    return TestClient(create_app(SubtitleService(fetcher)))


def test_health_check(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "online"


def test_serves_srt_as_vtt(client):
    response = client.get("/api/subtitles", params={"url": "/subs/en.srt"})
    assert response.status_code == 200
    assert response.headers["content-type"] == "text/vtt; charset=utf-8"
    assert response.headers["cache-control"] == "public, max-age=3600"
    assert response.text.startswith("WEBVTT\n\n00:00:01.000 --> 00:00:02.500\nHello world")


def test_serves_rtl_marked_hebrew(client):
    response = client.get("/api/subtitles", params={"url": "/subs/he.vtt"})
    assert response.status_code == 200
    assert f"{RLE}שלום{PDF}" in response.text


def test_missing_url(client):
    response = client.get("/api/subtitles")
    assert response.status_code == 400
    assert response.json() == {"error": "Missing url"}


def test_fetch_failure(client):
    response = client.get("/api/subtitles", params={"url": "/subs/missing.vtt"})
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to load subtitles"}


def test_invalid_scheme(tmp_path):
    client = TestClient(create_app(build_service({'public_dir': str(tmp_path)})))
    response = client.get("/api/subtitles", params={"url": "ftp://example.com/a.vtt"})
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid url"}


def test_default_app_reads_config_from_env(tmp_path, monkeypatch):
    (tmp_path / "subs").mkdir()
    (tmp_path / "subs" / "a.vtt").write_text("WEBVTT\n\n00:00:01.000 --> 00:00:02.000\nHi\n", encoding="utf-8")
    config = tmp_path / "config.yaml"
    config.write_text(f"public_dir: {tmp_path.as_posix()}\ncache_max_age: 120\n", encoding="utf-8")
    monkeypatch.setenv("SUBTRACK_CONFIG", str(config))

    response = TestClient(create_default_app()).get("/api/subtitles", params={"url": "/subs/a.vtt"})

    assert response.status_code == 200
    assert response.headers["cache-control"] == "public, max-age=120"
