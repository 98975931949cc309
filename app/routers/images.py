# app/routers/images.py
import logging
from typing import Callable, List

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse

from app.models import ErrorOut, ImageRecord
from app.storage import ImageLister, get_lister_factory

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/images", tags=["images"])

LISTING_FAILED = "Failed to fetch images"
NO_STORE = {"Cache-Control": "no-store"}


@router.get(
    "",
    response_model=List[ImageRecord],
    response_model_exclude_none=True,
    responses={500: {"model": ErrorOut}},
)
def list_images(
    response: Response,
    make_lister: Callable[[], ImageLister] = Depends(get_lister_factory),
):
    try:
        images = make_lister().list_images()
    except Exception:
        logger.exception("Error listing objects in S3")
        return JSONResponse(status_code=500, content={"error": LISTING_FAILED}, headers=NO_STORE)

    response.headers["Cache-Control"] = NO_STORE["Cache-Control"]
    return images
