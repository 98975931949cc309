# app/storage.py
import logging
from datetime import datetime, timezone
from functools import lru_cache
from typing import Any, Callable, List, Optional

import boto3

from app.config import StorageSettings, get_storage_settings
from app.models import ImageRecord

logger = logging.getLogger(__name__)


def make_s3_client(settings: StorageSettings):
    kwargs = {"region_name": settings.region}
    if settings.access_key_id and settings.secret_access_key:
        kwargs["aws_access_key_id"] = settings.access_key_id
        kwargs["aws_secret_access_key"] = settings.secret_access_key
    if settings.endpoint_url:
        kwargs["endpoint_url"] = settings.endpoint_url
    return boto3.client("s3", **kwargs)


def public_url(settings: StorageSettings, key: str) -> str:
    return f"https://{settings.bucket}.s3.{settings.region}.amazonaws.com/{key}"


def to_iso(ts: Optional[datetime]) -> Optional[str]:
    """Render a LastModified value as UTC ISO-8601 with millisecond precision."""
    if ts is None:
        return None
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    ts = ts.astimezone(timezone.utc)
    return ts.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ImageLister:
    """Lists the image objects under the configured prefix.

    A single ``list_objects_v2`` call is made per listing. No continuation
    token is requested, so anything past the first page of results is dropped.
    """

    def __init__(self, settings: StorageSettings, client: Any):
        self.settings = settings
        self.client = client

    def list_images(self) -> List[ImageRecord]:
        resp = self.client.list_objects_v2(
            Bucket=self.settings.bucket,
            Prefix=self.settings.prefix,
        )
        if resp.get("IsTruncated"):
            logger.warning(
                "listing of s3://%s/%s truncated at %d objects",
                self.settings.bucket, self.settings.prefix, len(resp.get("Contents") or []),
            )

        records = []
        for obj in resp.get("Contents") or []:
            if not obj or not obj.get("Key"):
                continue
            key = obj["Key"]
            records.append(ImageRecord(
                key=key,
                url=public_url(self.settings, key),
                createdAt=to_iso(obj.get("LastModified")),
            ))
        logger.debug("listed %d images under %s", len(records), self.settings.prefix)
        return records


# --- Dependencies ---
@lru_cache
def get_s3_client():
    return make_s3_client(get_storage_settings())


def default_image_lister() -> ImageLister:
    return ImageLister(get_storage_settings(), get_s3_client())


def get_lister_factory() -> Callable[[], ImageLister]:
    # resolved inside the route's error handling
    return default_image_lister
