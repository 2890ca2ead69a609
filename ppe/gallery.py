"""Ordered image gallery with a single designated main image."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, List, Optional, Sequence, Set

from .local_refs import ImageUrl, LocalRef, LocalRefRegistry, url_text

logger = logging.getLogger(__name__)


@dataclass
class ImageEntry:
    """One image in a project gallery."""

    url: ImageUrl
    source_file: Any = None
    is_main: bool = False

    def matches(self, url: ImageUrl) -> bool:
        return self.url == url or url_text(self.url) == url_text(url)


class Gallery:
    """Image entries for one project, at most one of them main.

    New images only become main while no main image exists; after that the
    only way to move the main role is :meth:`promote`. Local references minted
    here are released when their entry is removed or the gallery is closed.
    References that came in through :meth:`seed` belong to a stored record
    and are left alone.
    """

    def __init__(self, registry: Optional[LocalRefRegistry] = None) -> None:
        self.registry = registry if registry is not None else LocalRefRegistry()
        self._entries: List[ImageEntry] = []
        self._acquired: Set[LocalRef] = set()

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ImageEntry]:
        return iter(self._entries)

    def __repr__(self) -> str:  # pragma: no cover - utility repr
        return f"<Gallery {len(self._entries)} images, main={self.main_url()!r}>"

    @property
    def main_entry(self) -> Optional[ImageEntry]:
        for entry in self._entries:
            if entry.is_main:
                return entry
        return None

    def has_main(self) -> bool:
        return self.main_entry is not None

    # ------------------------------------------------------------------
    # Derived reads
    # ------------------------------------------------------------------
    def main_url(self) -> str:
        entry = self.main_entry
        return url_text(entry.url) if entry else ""

    def additional_urls(self) -> List[str]:
        return [url_text(entry.url) for entry in self._entries if not entry.is_main]

    def find(self, url: ImageUrl) -> Optional[ImageEntry]:
        for entry in self._entries:
            if entry.matches(url):
                return entry
        return None

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def seed(self, main_url: str, additional_urls: Sequence[str] = ()) -> None:
        """Load the images of a stored record: its main image, then the rest.

        A record without a main image seeds nothing.
        """
        if not main_url:
            return
        self._entries.append(ImageEntry(url=LocalRef.parse(main_url) or main_url, is_main=True))
        for url in additional_urls:
            if url:
                self._entries.append(ImageEntry(url=LocalRef.parse(url) or url))

    def drop_released(self) -> List[ImageEntry]:
        """Drop entries whose local reference is no longer live in the registry."""
        dropped = [
            entry for entry in self._entries
            if isinstance(entry.url, LocalRef) and entry.url not in self.registry
        ]
        for entry in dropped:
            self._entries.remove(entry)
            self._acquired.discard(entry.url)
            logger.warning("Dropped image %s, its reference was already released", entry.url)
        return dropped

    def add_single(self, source_file: Any, intended_main: bool = False) -> ImageEntry:
        """Add one file. It only becomes main if asked to and no main exists yet."""
        ref = self.registry.acquire(source_file)
        self._acquired.add(ref)

        entry = ImageEntry(url=ref, source_file=source_file, is_main=intended_main and not self.has_main())
        self._entries.append(entry)
        logger.debug("Added %s (main=%s, requested=%s)", ref, entry.is_main, intended_main)
        return entry

    def add_batch(self, source_files: Iterable[Any]) -> List[ImageEntry]:
        """Add several files in order; the first is main only if no main exists yet."""
        added: List[ImageEntry] = []
        for source_file in source_files:
            added.append(self.add_single(source_file, intended_main=not self.has_main()))
        return added

    def promote(self, url: ImageUrl) -> bool:
        """Make the entry for ``url`` the main image. Unknown urls are ignored."""
        target = self.find(url)
        if target is None:
            logger.debug("Promote ignored, no image %s", url)
            return False

        for entry in self._entries:
            entry.is_main = entry is target
        logger.debug("Promoted %s", url)
        return True

    def remove(self, url: Optional[ImageUrl] = None) -> Optional[ImageEntry]:
        """Remove an image.

        Without ``url`` the main image is removed and the first remaining
        image takes over as main. With ``url`` exactly that image is removed;
        if it was the main image, no other image is promoted in its place and
        the gallery stays without a main image until :meth:`promote` is called.
        """
        if url is None:
            removed = self.main_entry
            if removed is None:
                return None
            self._entries.remove(removed)
            if self._entries:
                self._entries[0].is_main = True
        else:
            removed = self.find(url)
            if removed is None:
                logger.debug("Remove ignored, no image %s", url)
                return None
            self._entries.remove(removed)

        self._release(removed.url)
        logger.debug("Removed %s (was main=%s), main is now %r", removed.url, removed.is_main, self.main_url())
        return removed

    def close(self) -> int:
        """Release every reference this gallery minted that is still live."""
        released = 0
        for ref in list(self._acquired):
            if self._release(ref):
                released += 1
        return released

    def detach(self) -> List[LocalRef]:
        """Hand the live references over to whoever stores the images now."""
        handed = [ref for ref in self._acquired if self.find(ref) is not None]
        self._acquired.clear()
        return handed

    def _release(self, url: ImageUrl) -> bool:
        if not isinstance(url, LocalRef) or url not in self._acquired:
            return False
        self._acquired.discard(url)
        return self.registry.release(url)
