# app/gallery.py
"""View state for the image gallery.

The gallery is an explicit state machine::

    loading --load_succeeded--> ready
    loading --load_failed-----> error

Once ready, pagination and the lightbox are sub-state derived from the full
image list. Every transition returns a new ``GalleryState``; nothing is
mutated in place and nothing persists between page loads.
"""
import math
from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

from app.models import ImageRecord, ViewMode, ViewStatus

LOAD_ERROR_MESSAGE = "Failed to load images. Please try again later."

PAGE_SIZES = {
    ViewMode.grid: 9,
    ViewMode.list: 10,
}

KEY_BINDINGS = ("ArrowLeft", "ArrowRight", "Escape")


class InvalidTransition(RuntimeError):
    pass


@dataclass(frozen=True)
class GalleryState:
    status: ViewStatus = ViewStatus.loading
    images: Tuple[ImageRecord, ...] = field(default_factory=tuple)
    error: Optional[str] = None
    current_page: int = 1
    view_mode: ViewMode = ViewMode.grid
    lightbox_index: Optional[int] = None

    # ----- Load transitions -----
    @classmethod
    def loading(cls) -> "GalleryState":
        return cls()

    def load_succeeded(self, images) -> "GalleryState":
        self._require(ViewStatus.loading)
        return replace(self, status=ViewStatus.ready, images=tuple(images), error=None)

    def load_failed(self, message: str = LOAD_ERROR_MESSAGE) -> "GalleryState":
        self._require(ViewStatus.loading)
        return replace(self, status=ViewStatus.error, error=message)

    def _require(self, status: ViewStatus) -> None:
        if self.status != status:
            raise InvalidTransition(f"cannot leave {self.status.value} via a {status.value} transition")

    # ----- Pagination -----
    @property
    def total(self) -> int:
        return len(self.images)

    @property
    def page_size(self) -> int:
        return PAGE_SIZES[self.view_mode]

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.page_size)

    @property
    def page_items(self) -> Tuple[ImageRecord, ...]:
        start = (self.current_page - 1) * self.page_size
        if start < 0:
            return ()
        return self.images[start:start + self.page_size]

    @property
    def page_offset(self) -> int:
        """Absolute index of the first card on the current page."""
        return (self.current_page - 1) * self.page_size

    @property
    def has_previous_page(self) -> bool:
        return self.current_page > 1

    @property
    def has_next_page(self) -> bool:
        return self.current_page < self.total_pages

    def paginate(self, page: int) -> "GalleryState":
        # no bounds check: the Previous/Next controls are disabled at the edges
        self._require(ViewStatus.ready)
        return replace(self, current_page=page)

    def toggle_view(self) -> "GalleryState":
        self._require(ViewStatus.ready)
        mode = ViewMode.list if self.view_mode == ViewMode.grid else ViewMode.grid
        return replace(self, view_mode=mode)

    def with_view(self, mode: ViewMode) -> "GalleryState":
        return self if mode == self.view_mode else self.toggle_view()

    # ----- Lightbox -----
    @property
    def lightbox_open(self) -> bool:
        return self.lightbox_index is not None

    @property
    def lightbox_image(self) -> Optional[ImageRecord]:
        if not self.lightbox_open:
            return None
        return self.images[self.lightbox_index]

    @property
    def has_previous_image(self) -> bool:
        return self.lightbox_open and self.lightbox_index > 0

    @property
    def has_next_image(self) -> bool:
        return self.lightbox_open and self.lightbox_index < self.total - 1

    def open_lightbox(self, index: int) -> "GalleryState":
        self._require(ViewStatus.ready)
        if not 0 <= index < self.total:
            return self
        return replace(self, lightbox_index=index)

    def next_image(self) -> "GalleryState":
        if not self.has_next_image:
            return self
        return replace(self, lightbox_index=self.lightbox_index + 1)

    def previous_image(self) -> "GalleryState":
        if not self.has_previous_image:
            return self
        return replace(self, lightbox_index=self.lightbox_index - 1)

    def close_lightbox(self) -> "GalleryState":
        return replace(self, lightbox_index=None)

    def handle_key(self, key: str) -> "GalleryState":
        if not self.lightbox_open:
            return self
        if key == "ArrowLeft":
            return self.previous_image()
        if key == "ArrowRight":
            return self.next_image()
        if key == "Escape":
            return self.close_lightbox()
        return self

