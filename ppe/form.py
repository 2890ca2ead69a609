"""Editing session for one project: images, tags, validation and submit."""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from .constants import DEFAULT_LANG_KEYS
from .gallery import Gallery, ImageEntry
from .local_refs import ImageUrl, LocalRefRegistry
from .project import SCALAR_FIELDS, ProjectDraft, ProjectRecord
from .store import ProfileStore
from .tag_input import TagInput

logger = logging.getLogger(__name__)


class ProjectForm:
    """Form session creating a new project or editing a stored one.

    Nothing reaches the store before :meth:`submit` succeeds. Leaving the
    session through :meth:`cancel` (or the ``with`` block) drops the draft
    and releases the local references picked during it.
    """

    def __init__(
        self,
        store: ProfileStore,
        vocabularies: Mapping[str, Sequence[str]],
        existing: Optional[ProjectRecord] = None,
        registry: Optional[LocalRefRegistry] = None,
        lang: Optional[Mapping[str, str]] = None,
        on_close: Optional[Callable[["ProjectForm"], None]] = None,
    ) -> None:
        self.store = store
        self.on_close = on_close
        self.existing = existing
        self.lang = lang if lang is not None else DEFAULT_LANG_KEYS
        self.errors: Dict[str, str] = {}
        self.closed = False

        gallery = Gallery(registry)
        categories = vocabularies.get("categories", ())
        technologies = vocabularies.get("technologies", ())
        if existing is not None:
            self.draft = ProjectDraft.from_record(existing, categories, technologies, gallery)
        else:
            self.draft = ProjectDraft.empty(categories, technologies, gallery)

    def __enter__(self) -> "ProjectForm":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        if not self.closed:
            self.cancel()

    @property
    def is_edit(self) -> bool:
        return self.existing is not None

    @property
    def gallery(self) -> Gallery:
        return self.draft.gallery

    @property
    def categories(self) -> TagInput:
        return self.draft.categories

    @property
    def technologies(self) -> TagInput:
        return self.draft.technologies

    # ------------------------------------------------------------------
    # Field edits
    # ------------------------------------------------------------------
    def update_fields(self, **kwargs: str) -> bool:
        changed = False
        for key, value in kwargs.items():
            if key not in SCALAR_FIELDS:
                logger.debug("Ignoring unknown field %r", key)
                continue
            setattr(self.draft, key, value)
            changed = True
        return changed

    # ------------------------------------------------------------------
    # Images
    # ------------------------------------------------------------------
    def select_files(self, files: Sequence[Any]) -> List[ImageEntry]:
        """Handle a file pick or drop: several files form a batch, one file asks to be main."""
        files = list(files)
        if not files:
            return []
        if len(files) > 1:
            return self.add_images(files)
        return [self.add_image(files[0], is_main=True)]

    def add_image(self, source_file: Any, is_main: bool = False) -> ImageEntry:
        return self.gallery.add_single(source_file, intended_main=is_main)

    def add_images(self, source_files: Sequence[Any]) -> List[ImageEntry]:
        return self.gallery.add_batch(source_files)

    def set_main_image(self, url: ImageUrl) -> bool:
        return self.gallery.promote(url)

    def clear_image(self, url: Optional[ImageUrl] = None) -> Optional[ImageEntry]:
        return self.gallery.remove(url)

    # ------------------------------------------------------------------
    # Validation & submit
    # ------------------------------------------------------------------
    def validate(self) -> Dict[str, str]:
        errors: Dict[str, str] = {}
        if not self.draft.title.strip():
            errors["title"] = self._message("title_required")
        if not self.draft.description.strip():
            errors["description"] = self._message("description_required")
        if not self.draft.categories.selected:
            errors["categories"] = self._message("categories_required")
        if not self.draft.technologies.selected:
            errors["technologies"] = self._message("technologies_required")
        if not self.draft.image:
            errors["image"] = self._message("image_required")

        self.errors = errors
        return errors

    def submit(self) -> Optional[ProjectRecord]:
        """Validate and hand the finished record to the store.

        Returns the stored record, or None while validation fails.
        """
        if self.closed:
            raise RuntimeError("This project form has already been closed")

        self.gallery.drop_released()
        if self.validate():
            logger.info("Submit blocked for project %s: %s", self.draft.id, ", ".join(sorted(self.errors)))
            return None

        record = self.draft.to_record()
        stored = self.store.replace(record) if self.is_edit else self.store.create(record)
        if not stored:
            logger.warning("Store rejected project %s", record.id)
            return None

        self.gallery.detach()
        self._close()
        logger.info("Submitted project %s with %d images", record.id, len(record.image_urls()))
        return record

    def cancel(self) -> None:
        if self.closed:
            return
        released = self.gallery.close()
        self._close()
        logger.info("Discarded draft %s, released %d local images", self.draft.id, released)

    def _close(self) -> None:
        self.closed = True
        if self.on_close is not None:
            self.on_close(self)

    def _message(self, key: str) -> str:
        return self.lang.get(key) or DEFAULT_LANG_KEYS[key]
