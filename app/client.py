# app/client.py
import logging
from typing import List, Optional

import httpx
from pydantic import TypeAdapter

from app.gallery import GalleryState
from app.models import ImageRecord

logger = logging.getLogger(__name__)

LISTING_PATH = "/api/images"

_records = TypeAdapter(List[ImageRecord])


class GalleryClient:
    """Fetches the image list once and turns the outcome into a gallery state.

    No retry and no timeout: a failed load stays failed until the page is
    reloaded, and a slow one waits on the transport.
    """

    def __init__(self, base_url: str = "", transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url
        self.transport = transport

    async def load(self) -> GalleryState:
        state = GalleryState.loading()
        async with httpx.AsyncClient(base_url=self.base_url, transport=self.transport, timeout=None) as client:
            try:
                r = await client.get(LISTING_PATH)
                r.raise_for_status()
                images = _records.validate_python(r.json())
            except (httpx.HTTPError, ValueError) as e:
                logger.error("Error fetching images: %s", e)
                return state.load_failed()
        return state.load_succeeded(images)
