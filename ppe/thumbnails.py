"""Thumbnail loading for gallery previews."""
from __future__ import annotations

import logging
import os
import threading
from typing import Any, Dict, Iterable, List, Optional, Tuple

from PIL import Image, UnidentifiedImageError

from .constants import DEFAULT_THUMBNAIL_SIZE, SUPPORTED_IMAGE_FORMATS
from .local_refs import ImageUrl, LocalRefRegistry, url_text

logger = logging.getLogger(__name__)

MAX_CACHED_THUMBNAILS = 100


def is_supported_image(path: str) -> bool:
    return str(path).lower().endswith(SUPPORTED_IMAGE_FORMATS)


def load_image(source: Any) -> Optional[Image.Image]:
    """Load an image from a path or file object as RGBA."""
    try:
        with Image.open(source) as opened:
            img = opened.convert("RGBA") if opened.mode != "RGBA" else opened.copy()
        return img
    except (OSError, UnidentifiedImageError, ValueError) as exc:
        logger.warning("Could not load image %s: %s", source, exc)
        return None


class ThumbnailCache:
    """Cache of preview thumbnails keyed by image reference and size.

    Only local references can be previewed; remote URLs yield None because
    nothing here fetches over the network.
    """

    def __init__(self, registry: LocalRefRegistry) -> None:
        self.registry = registry
        self._cache: Dict[Tuple[str, Tuple[int, int]], Image.Image] = {}
        self._lock = threading.Lock()
        registry.add_release_listener(self.discard)

    def __len__(self) -> int:
        return len(self._cache)

    def get(self, url: ImageUrl, size: Tuple[int, int] = DEFAULT_THUMBNAIL_SIZE) -> Optional[Image.Image]:
        size = (int(size[0]), int(size[1]))
        cache_key = (url_text(url), size)

        with self._lock:
            thumbnail = self._cache.get(cache_key)
        if thumbnail is not None:
            return thumbnail

        source = self.registry.resolve(url)
        if source is None:
            return None

        img = load_image(source)
        if img is None:
            return None

        thumbnail = img.copy()
        thumbnail.thumbnail(size, Image.Resampling.LANCZOS)

        with self._lock:
            self._cache[cache_key] = thumbnail
            if len(self._cache) > MAX_CACHED_THUMBNAILS:
                for key in list(self._cache.keys())[:20]:
                    del self._cache[key]

        return thumbnail

    def discard(self, url: ImageUrl) -> int:
        """Forget every cached size of one image."""
        text = url_text(url)
        with self._lock:
            stale = [key for key in self._cache if key[0] == text]
            for key in stale:
                del self._cache[key]
        return len(stale)

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()


def filter_image_paths(paths: Iterable[str]) -> Tuple[List[str], List[str]]:
    """Split picked paths into supported images and rejected ones."""
    accepted: List[str] = []
    rejected: List[str] = []
    for path in paths:
        if is_supported_image(path) and os.path.isfile(path):
            accepted.append(path)
        else:
            rejected.append(path)
    return accepted, rejected
