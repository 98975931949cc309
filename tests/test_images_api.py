"""Tests for GET /api/images and /health."""

from functools import partial

import pytest

from app.config import get_storage_settings
from app.main import app
from app.storage import ImageLister, get_lister_factory, get_s3_client
from conftest import FakeS3


def override_s3(settings, s3):
    app.dependency_overrides[get_lister_factory] = lambda: partial(ImageLister, settings, s3)


@pytest.fixture
def unconfigured(client):
    """TestClient using the real settings and S3 client dependencies."""
    app.dependency_overrides.pop(get_lister_factory)
    get_storage_settings.cache_clear()
    get_s3_client.cache_clear()
    yield client
    get_storage_settings.cache_clear()
    get_s3_client.cache_clear()


class TestListImages:
    def test_returns_records(self, client):
        r = client.get("/api/images")

        assert r.status_code == 200
        body = r.json()
        assert len(body) == 22
        assert body[0] == {
            "key": "screenshots/map-00.png",
            "url": "https://traffic-maps.s3.eu-west-1.amazonaws.com/screenshots/map-00.png",
            "createdAt": "2024-04-29T10:15:00.000Z",
        }

    def test_not_cacheable(self, client):
        r = client.get("/api/images")
        assert r.headers["cache-control"] == "no-store"

    def test_missing_timestamp_is_omitted(self, client, settings):
        override_s3(settings, FakeS3(contents=[{"Key": "screenshots/no-date.png"}]))
        r = client.get("/api/images")

        assert r.json() == [{
            "key": "screenshots/no-date.png",
            "url": "https://traffic-maps.s3.eu-west-1.amazonaws.com/screenshots/no-date.png",
        }]

    def test_empty_bucket(self, client, settings):
        override_s3(settings, FakeS3(contents=None))
        r = client.get("/api/images")

        assert r.status_code == 200
        assert r.json() == []

    def test_storage_failure_is_generic_500(self, client, settings, caplog):
        override_s3(settings, FakeS3(error=RuntimeError("NoSuchBucket: traffic-maps")))
        r = client.get("/api/images")

        assert r.status_code == 500
        assert r.json() == {"error": "Failed to fetch images"}
        assert "NoSuchBucket" not in r.text
        assert r.headers["cache-control"] == "no-store"
        assert "Error listing objects in S3" in caplog.text

    def test_missing_configuration(self, unconfigured, monkeypatch):
        monkeypatch.delenv("S3_BUCKET_NAME", raising=False)
        monkeypatch.delenv("AWS_BUCKET_NAME", raising=False)
        r = unconfigured.get("/api/images")

        assert r.status_code == 500
        assert r.json() == {"error": "Failed to fetch images"}
        assert r.headers["cache-control"] == "no-store"

    def test_client_construction_failure(self, unconfigured, monkeypatch):
        monkeypatch.setenv("S3_BUCKET_NAME", "traffic-maps")
        monkeypatch.setenv("S3_ENDPOINT_URL", "not a url")
        r = unconfigured.get("/api/images")

        assert r.status_code == 500
        assert r.json() == {"error": "Failed to fetch images"}
        assert r.headers["cache-control"] == "no-store"

    def test_factory_errors_are_generic_500(self, client):
        def broken():
            raise RuntimeError("InvalidAccessKeyId")

        app.dependency_overrides[get_lister_factory] = lambda: broken
        r = client.get("/api/images")

        assert r.status_code == 500
        assert r.json() == {"error": "Failed to fetch images"}
        assert "InvalidAccessKeyId" not in r.text


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}
