# app/models.py
import enum
from typing import Optional

from pydantic import BaseModel


# ----- Enums -----
class ViewStatus(str, enum.Enum):
    loading = "loading"
    error = "error"
    ready = "ready"


class ViewMode(str, enum.Enum):
    grid = "grid"
    list = "list"


# ----- Listing payloads -----
class ImageRecord(BaseModel):
    key: str
    url: str            # derived from bucket/region/key, never stored
    createdAt: Optional[str] = None  # ISO-8601, absent when LastModified is missing


class ErrorOut(BaseModel):
    error: str
