"""
Shared fixtures: a fake S3 client, storage settings and a TestClient wired to
them through FastAPI dependency overrides.
"""

from datetime import datetime, timedelta, timezone
from functools import partial

import pytest
from fastapi.testclient import TestClient

from app.config import GallerySettings, StorageSettings, get_gallery_settings
from app.main import app
from app.storage import ImageLister, get_lister_factory

BASE_TIME = datetime(2024, 4, 29, 10, 15, tzinfo=timezone.utc)


class FakeS3:
    """Stands in for a boto3 S3 client; records every list call."""

    def __init__(self, contents=None, error=None, truncated=False):
        self.contents = contents
        self.error = error
        self.truncated = truncated
        self.calls = []

    def list_objects_v2(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        resp = {"IsTruncated": self.truncated, "KeyCount": len(self.contents or [])}
        if self.contents is not None:
            resp["Contents"] = self.contents
        return resp


def make_objects(n, prefix="screenshots/"):
    return [
        {
            "Key": f"{prefix}map-{i:02d}.png",
            "LastModified": BASE_TIME + timedelta(days=i),
            "Size": 1024,
        }
        for i in range(n)
    ]


@pytest.fixture
def settings():
    return StorageSettings(bucket="traffic-maps", region="eu-west-1", prefix="screenshots/")


@pytest.fixture
def fake_s3():
    return FakeS3(contents=make_objects(22))


@pytest.fixture
def client(settings, fake_s3):
    app.dependency_overrides[get_lister_factory] = lambda: partial(ImageLister, settings, fake_s3)
    app.dependency_overrides[get_gallery_settings] = lambda: GallerySettings()
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
