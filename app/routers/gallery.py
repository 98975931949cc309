# app/routers/gallery.py
from datetime import datetime, tzinfo
from pathlib import Path
from typing import Optional
from urllib.parse import urlencode

import httpx
from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from app.client import GalleryClient
from app.config import GallerySettings, get_gallery_settings
from app.gallery import KEY_BINDINGS, GalleryState
from app.models import ViewMode, ViewStatus

router = APIRouter(tags=["gallery"])

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))

UNKNOWN_DATE = "Unknown date"


def format_timestamp(value: Optional[str], tz: Optional[tzinfo] = None) -> str:
    """ISO-8601 -> 'Apr 9, 2024, 9:05:00 AM' (day and hour unpadded), shown in ``tz``."""
    if not value:
        return UNKNOWN_DATE
    try:
        ts = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return UNKNOWN_DATE
    if tz is not None:
        ts = ts.astimezone(tz)
    hour = ts.hour % 12 or 12
    return f"{ts:%b} {ts.day}, {ts.year}, {hour}:{ts:%M:%S} {ts:%p}"


templates.env.filters["timestamp"] = format_timestamp


def gallery_href(state: GalleryState) -> str:
    params = {"page": state.current_page, "view": state.view_mode.value}
    if state.lightbox_open:
        params["image"] = state.lightbox_index
    return "/?" + urlencode(params)


def get_gallery_client(
    request: Request,
    settings: GallerySettings = Depends(get_gallery_settings),
) -> GalleryClient:
    if settings.api_url:
        return GalleryClient(settings.api_url)
    # same app, no network hop
    return GalleryClient("http://gallery", transport=httpx.ASGITransport(app=request.app))


@router.get("/", response_class=HTMLResponse)
async def gallery_page(
    request: Request,
    page: int = Query(1),
    view: ViewMode = Query(ViewMode.grid),
    image: Optional[int] = Query(None),
    client: GalleryClient = Depends(get_gallery_client),
    settings: GallerySettings = Depends(get_gallery_settings),
):
    state = await client.load()
    if state.status == ViewStatus.ready:
        state = state.with_view(view).paginate(page)
        if image is not None:
            state = state.open_lightbox(image)

    key_links = {}
    if state.lightbox_open:
        key_links = {key: gallery_href(state.handle_key(key)) for key in KEY_BINDINGS}

    return templates.TemplateResponse(
        request,
        "gallery.html",
        {
            "title": settings.title,
            "state": state,
            "href": gallery_href,
            "key_links": key_links,
            "display_tz": settings.tzinfo,
        },
    )
