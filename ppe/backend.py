"""Core backend implementation orchestrating all helper modules."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

from PIL import Image

from . import config
from .constants import APP_NAME, DEFAULT_LANG_CODE, DEFAULT_THEME, DEFAULT_THUMBNAIL_SIZE
from .form import ProjectForm
from .local_refs import LocalRefRegistry
from .project import ProjectRecord
from .store import ProfileStore
from .thumbnails import ThumbnailCache

logger = logging.getLogger(__name__)


class Backend:
    """Backend logic for the Portfolio Project Editor."""

    def __init__(self) -> None:
        self.initialization_error: Optional[str] = None
        self.initialization_warning: Optional[str] = None

        self.config_data: Dict[str, Any] = config.load_main_config()
        self.selected_language_code: str = self.config_data.get("language", DEFAULT_LANG_CODE)
        self.lang, warning, error = config.load_language_config(self.selected_language_code)
        if warning:
            self.initialization_warning = warning
            logger.warning(warning)
        if error:
            self.initialization_error = error
            logger.error(error)

        self.vocabularies: Dict[str, List[str]] = config.load_vocabularies_config()

        self.registry = LocalRefRegistry()
        self.thumbnails = ThumbnailCache(self.registry)
        self.store = ProfileStore.from_dict(config.load_profile_config(), on_discard=self._release_record_images)
        self._open_forms: Dict[str, ProjectForm] = {}

        self._apply_settings_from_config()

    # ------------------------------------------------------------------
    # Configuration management
    # ------------------------------------------------------------------
    def _apply_settings_from_config(self) -> None:
        self.theme = self.config_data.get("theme", DEFAULT_THEME)
        self.log_level = str(self.config_data.get("log_level", "INFO")).upper()

        size = self.config_data.get("thumbnail_size", DEFAULT_THUMBNAIL_SIZE)
        try:
            self.thumbnail_size: Tuple[int, int] = (int(size[0]), int(size[1]))
        except (TypeError, ValueError, IndexError):
            logger.warning("Invalid thumbnail_size %r, using default", size)
            self.thumbnail_size = DEFAULT_THUMBNAIL_SIZE

    # ------------------------------------------------------------------
    # Project management
    # ------------------------------------------------------------------
    def list_projects(self) -> List[ProjectRecord]:
        return self.store.list_projects()

    def get_project(self, project_id: str) -> Optional[ProjectRecord]:
        return self.store.get(project_id)

    def open_project_form(self, project_id: Optional[str] = None) -> Optional[ProjectForm]:
        """Start a form session for a new project, or for a stored one by id.

        A stored project has at most one open form; asking again returns the
        form that is already open until it is submitted or cancelled.
        """
        existing = None
        if project_id is not None:
            existing = self.store.get(project_id)
            if existing is None:
                logger.warning("No project with id %s, cannot open it for editing", project_id)
                return None
            if project_id in self._open_forms:
                logger.debug("Project %s already has an open form", project_id)
                return self._open_forms[project_id]

        form = ProjectForm(
            self.store,
            self.vocabularies,
            existing=existing,
            registry=self.registry,
            lang=self.lang,
            on_close=self._forget_form,
        )
        if existing is not None:
            self._open_forms[existing.id] = form
        return form

    def _forget_form(self, form: ProjectForm) -> None:
        if form.existing is not None and self._open_forms.get(form.existing.id) is form:
            del self._open_forms[form.existing.id]

    def remove_project(self, project_id: str) -> bool:
        form = self._open_forms.get(project_id)
        if form is not None:
            form.cancel()
        return self.store.remove(project_id)

    def update_profile(self, **kwargs: Any) -> bool:
        return self.store.update_profile(**kwargs)

    def _release_record_images(self, record: ProjectRecord) -> None:
        live = {url for project in self.store.list_projects() for url in project.image_urls()}
        for url in record.image_urls():
            if url not in live:
                self.registry.release(url)

    # ------------------------------------------------------------------
    # Housekeeping
    # ------------------------------------------------------------------
    def get_cached_thumbnail(self, url: str, size: Optional[Tuple[int, int]] = None) -> Optional[Image.Image]:
        return self.thumbnails.get(url, size or self.thumbnail_size)

    def cleanup(self) -> None:
        for form in list(self._open_forms.values()):
            form.cancel()
        released = self.registry.release_all()
        self.thumbnails.clear()
        logger.info("Released %d local images on shutdown", released)


__all__ = ["Backend", "APP_NAME"]
