# app/config.py
import os
from functools import lru_cache
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, field_validator


class ConfigError(RuntimeError):
    pass


def _first_env(*names: str, default: Optional[str] = None) -> Optional[str]:
    for name in names:
        value = os.getenv(name)
        if value:
            return value
    return default


class StorageSettings(BaseModel):
    bucket: str
    region: str = "us-east-1"
    prefix: str = "screenshots/"
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = None
    endpoint_url: Optional[str] = None

    @classmethod
    def from_env(cls) -> "StorageSettings":
        bucket = _first_env("S3_BUCKET_NAME", "AWS_BUCKET_NAME")
        if not bucket:
            raise ConfigError("S3_BUCKET_NAME is not set")
        return cls(
            bucket=bucket,
            region=_first_env("AWS_REGION", "AWS_DEFAULT_REGION", default="us-east-1"),
            prefix=_first_env("IMAGES_PREFIX", default="screenshots/"),
            access_key_id=_first_env("AWS_ACCESS_KEY_ID"),
            secret_access_key=_first_env("AWS_SECRET_ACCESS_KEY"),
            endpoint_url=_first_env("S3_ENDPOINT_URL"),
        )


class GallerySettings(BaseModel):
    # unset: the page calls this application's own listing endpoint
    api_url: Optional[str] = None
    title: str = "Daily Traffic Maps"
    timezone: str = "UTC"  # IANA name used to display timestamps

    @field_validator("timezone")
    @classmethod
    def _known_zone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"unknown timezone: {value}") from None
        return value

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    @classmethod
    def from_env(cls) -> "GallerySettings":
        return cls(
            api_url=_first_env("GALLERY_API_URL"),
            title=_first_env("GALLERY_TITLE", default="Daily Traffic Maps"),
            timezone=_first_env("GALLERY_TIMEZONE", default="UTC"),
        )


@lru_cache
def get_storage_settings() -> StorageSettings:
    return StorageSettings.from_env()


@lru_cache
def get_gallery_settings() -> GallerySettings:
    return GallerySettings.from_env()
