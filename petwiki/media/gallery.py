"""In-memory gallery of sample and generated pet media."""

from __future__ import annotations

import threading

from petwiki.data.schemas import GalleryItem

SAMPLE_ITEMS = [
    GalleryItem(id="1", url="https://picsum.photos/id/1062/800/800", title="Curious Pup"),
    GalleryItem(id="2", url="https://picsum.photos/id/1084/800/800", title="Lazy Afternoon"),
    GalleryItem(id="3", url="https://picsum.photos/id/659/800/800", title="Mountain Guardian"),
    GalleryItem(id="4", url="https://picsum.photos/id/219/800/800", title="Wild Whiskers"),
]


class Gallery:
    """Newest-first list of gallery items, shared by requests and video jobs.

    Lives only as long as the process.
    """

    def __init__(self, items: list[GalleryItem] | None = None) -> None:
        self._items = list(SAMPLE_ITEMS if items is None else items)
        self._lock = threading.Lock()

    def add(self, item: GalleryItem) -> None:
        with self._lock:
            self._items.insert(0, item)

    def items(self) -> list[GalleryItem]:
        with self._lock:
            return list(self._items)
